import numpy as np

class Operation:
    """Elementwise kernel applied through TensorView.apply.

    Operations are plain callables; any function with the same arity can be
    passed to apply() instead.
    """
    def call(self, *args):
        raise NotImplementedError()

    def __call__(self, *args):
        return self.call(*args)

    def __str__(self):
        return type(self).__name__

    def __eq__(self, other):
        return type(self).__name__ == type(other).__name__
    def __hash__(self):
        return hash(type(self).__name__)

class CommutativeMonoidMixin:
    def neutral(self):
        raise NotImplementedError()

class UnaryArgsMixin:
    def arity(self):
        return 1

class BinaryArgsMixin:
    def arity(self):
        return 2

class Sin(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.sin(args[0])
class Cos(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.cos(args[0])
class Tan(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.tan(args[0])
class Asin(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.arcsin(args[0])
class Acos(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.arccos(args[0])
class Atan(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.arctan(args[0])

class Sinh(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.sinh(args[0])
class Cosh(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.cosh(args[0])
class Tanh(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.tanh(args[0])

class Log(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.log(args[0])
class Exp(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.exp(args[0])
class Log1p(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.log1p(args[0])
class Expm1(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.expm1(args[0])
class Sqrt(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.sqrt(args[0])
class Rsqrt(Operation, UnaryArgsMixin):
    def call(self, *args):
        return 1.0 / np.sqrt(args[0])
class Cbrt(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.cbrt(args[0])

class Abs(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.abs(args[0])
class Sign(Operation, UnaryArgsMixin):
    def call(self, *args):
        return np.sign(args[0])

class Max(Operation, BinaryArgsMixin, CommutativeMonoidMixin):
    def call(self, *args):
        return np.maximum(args[0], args[1])
    def neutral(self):
        return -np.inf
class Min(Operation, BinaryArgsMixin, CommutativeMonoidMixin):
    def call(self, *args):
        return np.minimum(args[0], args[1])
    def neutral(self):
        return np.inf
class Pow(Operation, BinaryArgsMixin):
    def call(self, *args):
        return np.power(args[0], args[1])

class Add(Operation, BinaryArgsMixin, CommutativeMonoidMixin):
    def call(self, *args):
        return args[0] + args[1]
    def neutral(self):
        return 0
class Sub(Operation, BinaryArgsMixin):
    def call(self, *args):
        return args[0] - args[1]
class Mul(Operation, BinaryArgsMixin, CommutativeMonoidMixin):
    def call(self, *args):
        return args[0] * args[1]
    def neutral(self):
        return 1
class Div(Operation, BinaryArgsMixin):
    def call(self, *args):
        return args[0] / args[1]
