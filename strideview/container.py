import numbers
import numpy as np

from .errors import ViewShapeError
from .storage import Pointer
from .view import TensorView, VectorView, MatrixView

def _ingest(view, dtype):
  """Eagerly copies a view, in iteration order, into a new flat array."""
  data = view.toArray().reshape((view.size(),) + view.elementShape())
  return np.ascontiguousarray(data if dtype is None else data.astype(dtype))

class Vector(object):
  """Fixed-length vector owning a contiguous storage."""
  DEFAULT_DTYPE = np.float64

  def __init__(self, values, dtype=None):
    if isinstance(values, (Vector, Matrix)):
      values = values.view()
    if isinstance(values, numbers.Integral):
      if values < 0:
        raise ValueError('length must not be negative: {}'.format(values))
      self._data = np.zeros(values, dtype=dtype if dtype is not None else self.DEFAULT_DTYPE)
    elif isinstance(values, TensorView):
      self._data = _ingest(values, dtype)
    else:
      data = np.array(values, dtype=dtype)
      if data.ndim < 1:
        raise ValueError('Vector values must be given as a length, a sequence, a numpy.ndarray or a view.')
      self._data = data

  @classmethod
  def fromView(cls, view, dtype=None):
    return cls(view, dtype)

  def size(self):
    return self._data.shape[0]

  def __len__(self):
    return self.size()

  def shape(self):
    return (self.size(),)

  def elementShape(self):
    return self._data.shape[1:]

  def dtype(self):
    return self._data.dtype

  def data(self):
    return Pointer(self._data)

  def storage(self):
    return self._data

  def view(self, offset=0, length=None):
    if length is None:
      length = self.size() - offset
    return VectorView(self._data, length, 1, offset)

  def assign(self, values):
    self.view().set(values)
    return self

  def apply(self, fn, other=None):
    self.view().apply(fn, other)
    return self

  def copy(self):
    return Vector(self._data.copy())

  def __getitem__(self, i):
    return self._data[i]

  def __setitem__(self, i, value):
    self._data[i] = value

  def __iter__(self):
    return iter(self._data)

  def __eq__(self, other):
    if isinstance(other, TensorView):
      other = Vector(other)
    if not isinstance(other, Vector):
      return NotImplemented
    return self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

  __hash__ = None

  def __repr__(self):
    return 'Vector({})'.format(self._data.tolist())

class Matrix(object):
  """Fixed-size M x N matrix owning a contiguous row-major storage."""
  DEFAULT_DTYPE = np.float64

  def __init__(self, rows, cols, values=None, dtype=None):
    if rows < 0 or cols < 0:
      raise ValueError('shape must not contain negative entries: ({}, {})'.format(rows, cols))

    self._rows = rows
    self._cols = cols
    size = rows * cols

    if isinstance(values, (Vector, Matrix)):
      values = values.view()
    if values is None:
      self._data = np.zeros(size, dtype=dtype if dtype is not None else self.DEFAULT_DTYPE)
    elif isinstance(values, TensorView):
      self._checkView(values)
      self._data = _ingest(values, dtype)
    else:
      data = np.array(values, dtype=dtype)
      if data.shape[:2] == (rows, cols):
        data = data.reshape((size,) + data.shape[2:])
      elif data.ndim < 1 or data.shape[0] != size:
        raise ViewShapeError('Matrix of shape ({}, {}) cannot be built from values of shape {}.'.format(rows, cols, data.shape))
      self._data = data

  def _checkView(self, view):
    if isinstance(view, MatrixView) and view.length() != (self._rows, self._cols):
      raise ViewShapeError('Matrix of shape ({}, {}) cannot take a view of shape {}.'.format(self._rows, self._cols, view.length()))
    if view.size() != self._rows * self._cols:
      raise ViewShapeError('Matrix of shape ({}, {}) cannot take a view with {} elements.'.format(self._rows, self._cols, view.size()))

  @classmethod
  def fromView(cls, view, dtype=None):
    """Copies a matrix view, or a vector view as a 1 x N matrix."""
    if isinstance(view, MatrixView):
      return cls(view.rows(), view.cols(), view, dtype)
    if isinstance(view, VectorView):
      return cls(1, view.size(), view, dtype)
    raise ViewShapeError('Cannot build a matrix from {}.'.format(type(view).__name__))

  def rows(self):
    return self._rows

  def cols(self):
    return self._cols

  def shape(self):
    return (self._rows, self._cols)

  def size(self):
    return self._rows * self._cols

  def elementShape(self):
    return self._data.shape[1:]

  def dtype(self):
    return self._data.dtype

  def data(self):
    return Pointer(self._data)

  def storage(self):
    return self._data

  def view(self, offsets=None, lengths=None):
    view = MatrixView(self._data, self._rows, self._cols)
    if offsets is None:
      return view
    if lengths is None:
      lengths = tuple(l - o for l, o in zip(self.shape(), offsets))
    return view.subview(offsets, lengths)

  def rowAt(self, i):
    return self.view().rowAt(i)

  def colAt(self, j):
    return self.view().colAt(j)

  def assign(self, values):
    if isinstance(values, (Vector, Matrix)):
      values = values.view()
    if isinstance(values, TensorView):
      self._checkView(values)
    self.view().set(values)
    return self

  def apply(self, fn, other=None):
    self.view().apply(fn, other)
    return self

  def transposed(self):
    return Matrix.fromView(self.view().transpose())

  def toArray(self):
    return self._data.reshape(self.shape() + self.elementShape()).copy()

  def copy(self):
    return Matrix(self._rows, self._cols, self._data.copy())

  def __getitem__(self, key):
    if isinstance(key, tuple):
      i, j = key
      return self._data[i * self._cols + j]
    return self.rowAt(key)

  def __setitem__(self, key, value):
    if isinstance(key, tuple):
      i, j = key
      self._data[i * self._cols + j] = value
    else:
      self.rowAt(key).set(value)

  def __iter__(self):
    return iter(self.view())

  def __eq__(self, other):
    if isinstance(other, MatrixView):
      other = Matrix.fromView(other)
    if not isinstance(other, Matrix):
      return NotImplemented
    return self.shape() == other.shape() and self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

  __hash__ = None

  def __repr__(self):
    return 'Matrix({}x{}, {})'.format(self._rows, self._cols, self.toArray().tolist())
