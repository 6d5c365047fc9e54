import numpy as np

from .container import Matrix
from .errors import ViewShapeError
from .view import TensorView, Traversal, MatrixView, VectorView

def _asView(x):
  return x if isinstance(x, TensorView) else x.view()

def lines(view, traversal=Traversal.ROW_MAJOR):
  """Yields the rows (or, for COLUMN_MAJOR, the columns) of a view as
  vector views. A vector view is its own single line."""
  view = _asView(view)
  if isinstance(view, VectorView):
    yield view
  elif traversal == Traversal.COLUMN_MAJOR:
    for j in range(view.cols()):
      yield view.colAt(j)
  else:
    for i in range(view.rows()):
      yield view.rowAt(i)

def forEachView(view, fn, rowFn=None, traversal=Traversal.ROW_MAJOR):
  """
  Calls fn(value) for every element and rowFn(line) after every line.

  Example:
    forEachView(view, lambda p: out.write(str(p)), lambda line: out.write('\\n'))
  """
  for line in lines(view, traversal):
    for value in line.elements():
      fn(value)
    if rowFn is not None:
      rowFn(line)

def copyView(view, dest, rule=None, padding=0, fill=0, start=0, traversal=Traversal.ROW_MAJOR):
  """
  Serializes a view into dest, line by line.

  Args:
    view: Source view (or container).
    dest: Anything supporting dest[index] = value (ndarray, bytearray, list).
    rule: Optional rule(dest, index, value) writing one element and
      returning the next free index, e.g. to split a pixel into channels.
    padding (int): Number of `fill` entries written after every line, as
      required by row-aligned image formats.
    fill: Value used for padding.
    start (int): First index written.
    traversal: Iteration order of the view.

  Returns:
    The index past the last written entry.
  """
  index = start
  for line in lines(view, traversal):
    for value in line.elements():
      if rule is None:
        dest[index] = value
        index += 1
      else:
        index = rule(dest, index, value)
    for _ in range(padding):
      dest[index] = fill
      index += 1
  return index

def copyInto(src, dst, traversal=Traversal.ROW_MAJOR):
  src = _asView(src)
  dst = _asView(dst)
  if src.size() != dst.size():
    raise ViewShapeError('Cannot copy {} elements into a view of {} elements.'.format(src.size(), dst.size()))
  values = src.toArray(traversal).reshape((src.size(),) + src.elementShape())
  return dst.set(values, traversal)

def dot(u, v):
  u = _asView(u)
  v = _asView(v)
  if u.size() != v.size():
    raise ViewShapeError('Cannot take the dot product of views with {} and {} elements.'.format(u.size(), v.size()))
  result = u.dtype().type(0)
  for a, b in zip(u.elements(), v.elements()):
    result = result + a * b
  return result

def multiply(a, b, out=None):
  """
  Matrix product of two matrix views, written into `out`.

  The operands may be arbitrary strided views, so products with a
  transposed or reversed operand do not copy it first:

    multiply(A.view(), B.view().transpose(), C.view())

  Returns:
    out, or a new Matrix if out is None.
  """
  a = _asView(a)
  b = _asView(b)
  if not isinstance(a, MatrixView) or not isinstance(b, MatrixView):
    raise ViewShapeError('multiply expects two matrix views.')
  if a.cols() != b.rows():
    raise ViewShapeError('Inner dimensions do not match: {} != {}'.format(a.length(), b.length()))

  if out is None:
    out = Matrix(a.rows(), b.cols(), dtype=np.result_type(a.dtype(), b.dtype()))
  target = _asView(out)
  if target.length() != (a.rows(), b.cols()):
    raise ViewShapeError('Result view of shape {} does not match ({}, {}).'.format(target.length(), a.rows(), b.cols()))

  for i in range(a.rows()):
    row = a.rowAt(i)
    for j in range(b.cols()):
      target[i, j] = dot(row, b.colAt(j))
  return out

def _nearest(i, src, dest):
  return min(int((i + 0.5) * src / dest), src - 1)

def scaleNearest(src, dest):
  """Resamples src into dest by nearest-neighbour lookup."""
  src = _asView(src)
  target = _asView(dest)
  if src.size() == 0:
    raise ViewShapeError('Cannot resample an empty view.')
  for dy in range(target.rows()):
    sy = _nearest(dy, src.rows(), target.rows())
    for dx in range(target.cols()):
      target[dy, dx] = src[sy, _nearest(dx, src.cols(), target.cols())]
  return dest
