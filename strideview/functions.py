from . import ops

# Elementwise, in-place transforms of a view (or container). Each returns its argument.

def sin(x): return x.apply(ops.Sin())
def cos(x): return x.apply(ops.Cos())
def tan(x): return x.apply(ops.Tan())
def asin(x): return x.apply(ops.Asin())
def acos(x): return x.apply(ops.Acos())
def atan(x): return x.apply(ops.Atan())

def sinh(x): return x.apply(ops.Sinh())
def cosh(x): return x.apply(ops.Cosh())
def tanh(x): return x.apply(ops.Tanh())

def log(x): return x.apply(ops.Log())
def log1p(x): return x.apply(ops.Log1p())
def exp(x): return x.apply(ops.Exp())
def expm1(x): return x.apply(ops.Expm1())
def sqrt(x): return x.apply(ops.Sqrt())
def rsqrt(x): return x.apply(ops.Rsqrt())
def cbrt(x): return x.apply(ops.Cbrt())

def abs(x): return x.apply(ops.Abs())
def sign(x): return x.apply(ops.Sign())

# Pairwise with an equally long sequence (view, container, ndarray or list).

def add(x, y): return x.apply(ops.Add(), y)
def sub(x, y): return x.apply(ops.Sub(), y)
def mul(x, y): return x.apply(ops.Mul(), y)
def div(x, y): return x.apply(ops.Div(), y)
def max(x, y): return x.apply(ops.Max(), y)
def min(x, y): return x.apply(ops.Min(), y)
def pow(x, y): return x.apply(ops.Pow(), y)
