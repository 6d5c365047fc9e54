import numbers
from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from .errors import ViewBoundsError, ViewShapeError
from .iterator import MatrixIterator, VectorIterator, walk
from .layout import StridedLayout
from .storage import Pointer, pointerTo

class Traversal(Enum):
  ROW_MAJOR = 0
  COLUMN_MAJOR = 1

class TensorView(ABC):
  """Non-owning, stride-addressed window over a flat storage.

  A view never copies or owns its storage. Several views may alias the same
  elements; transpose(), reverse() and subview() return such aliases in O(1).
  Nothing is bounds checked unless checking is switched on with
  TensorView.setBoundsChecking(True).
  """
  ORDER = None
  CHECK_BOUNDS = False

  @classmethod
  def setBoundsChecking(cls, enabled):
    TensorView.CHECK_BOUNDS = bool(enabled)

  @classmethod
  def boundsChecking(cls):
    return TensorView.CHECK_BOUNDS

  @classmethod
  def fromLayout(cls, storage, layout):
    if layout.order() != cls.ORDER:
      raise ViewShapeError('{} requires a layout of order {}, got {}.'.format(cls.__name__, cls.ORDER, layout.order()))
    view = cls.__new__(cls)
    view._bind(storage, layout)
    return view

  def _bind(self, storage, layout):
    self._storage = storage
    self._layout = layout
    if self.CHECK_BOUNDS:
      extent = layout.extent()
      if extent is not None and (extent[0] < 0 or extent[1] >= storage.shape[0]):
        raise ViewBoundsError('{} addresses [{}, {}] outside of a storage with {} elements.'.format(layout, extent[0], extent[1], storage.shape[0]))

  def _derived(self, layout):
    return viewFromLayout(self._storage, layout)

  def _checkAxis(self, dim, i):
    if not 0 <= i < self._layout.shapei(dim):
      raise ViewBoundsError('Index {} is out of range for axis {} of length {}.'.format(i, dim, self._layout.shapei(dim)))

  def _checkIndex(self, index):
    if len(index) != self.order():
      raise ViewShapeError('Got {} indices for a view of order {}.'.format(len(index), self.order()))
    if self.CHECK_BOUNDS:
      for dim, i in enumerate(index):
        self._checkAxis(dim, i)

  def storage(self):
    return self._storage

  def layout(self):
    return self._layout

  def data(self):
    return Pointer(self._storage, self._layout.base())

  def order(self):
    return self._layout.order()

  def length(self):
    return self._layout.shape()

  def lengthi(self, dim):
    return self._layout.shapei(dim)

  def stride(self):
    return self._layout.stride()

  def stridei(self, dim):
    return self._layout.stridei(dim)

  def size(self):
    return self._layout.size()

  def elementShape(self):
    return self._storage.shape[1:]

  def dtype(self):
    return self._storage.dtype

  def address(self, index):
    self._checkIndex(index)
    return self._layout.address(index)

  @abstractmethod
  def begin(self, traversal=Traversal.ROW_MAJOR):
    pass

  @abstractmethod
  def end(self, traversal=Traversal.ROW_MAJOR):
    pass

  @abstractmethod
  def positions(self, traversal=Traversal.ROW_MAJOR):
    """Yields a VectorIterator for every element in iteration order."""
    pass

  @abstractmethod
  def _item(self, i):
    pass

  @abstractmethod
  def _setItem(self, i, value):
    pass

  def addresses(self, traversal=Traversal.ROW_MAJOR):
    return (it.pointer().offset() for it in self.positions(traversal))

  def elements(self, traversal=Traversal.ROW_MAJOR):
    return (it.value for it in self.positions(traversal))

  def __getitem__(self, key):
    if isinstance(key, tuple):
      return self._storage[self.address(key)]
    if self.CHECK_BOUNDS:
      self._checkAxis(0, key)
    return self._item(key)

  def __setitem__(self, key, value):
    if isinstance(key, tuple):
      self._storage[self.address(key)] = value
    else:
      if self.CHECK_BOUNDS:
        self._checkAxis(0, key)
      self._setItem(key, value)

  def __len__(self):
    return self._layout.shapei(0)

  # Rigid transformations. None of them touches the storage.

  def transpose(self, a=0, b=1):
    if self.order() < 2:
      raise ViewShapeError('Cannot transpose a view of order {}.'.format(self.order()))
    return self._derived(self._layout.transposed(a, b))

  def reverse(self, dims=None):
    if isinstance(dims, numbers.Integral):
      dims = (dims,)
    return self._derived(self._layout.reversed(dims))

  def subview(self, offsets, lengths):
    if isinstance(offsets, numbers.Integral):
      offsets = (offsets,)
    if isinstance(lengths, numbers.Integral):
      lengths = (lengths,)
    if len(offsets) != self.order() or len(lengths) != self.order():
      raise ViewShapeError('A view of order {} needs {} offsets and lengths, got {} and {}.'.format(self.order(), self.order(), len(offsets), len(lengths)))
    if self.CHECK_BOUNDS:
      for dim, (o, l) in enumerate(zip(offsets, lengths)):
        if o < 0 or l < 0 or o + l > self._layout.shapei(dim):
          raise ViewBoundsError('Sub-view [{}, {}) exceeds axis {} of length {}.'.format(o, o + l, dim, self._layout.shapei(dim)))
    return self._derived(self._layout.subslice(offsets, lengths))

  def sameAddressing(self, other):
    """True if both views address exactly the same memory in the same order,
    even when they were built separately over one buffer."""
    return (self.data() == other.data()
            and self.stride() == other.stride()
            and self.length() == other.length()
            and self._storage.dtype == other._storage.dtype
            and self._storage.strides == other._storage.strides)

  # Batch operations. All of them follow the iteration order.

  def apply(self, fn, other=None, traversal=Traversal.ROW_MAJOR):
    """
    Replaces every element x by fn(x), or by fn(x, y) where y runs over
    `other` in iteration order. `other` must provide exactly size() values.
    """
    if other is None:
      for it in self.positions(traversal):
        it.value = fn(it.value)
      return self

    values = self._source(other)
    for it in self.positions(traversal):
      it.value = fn(it.value, next(values))
    values.finish()
    return self

  def set(self, values, traversal=Traversal.ROW_MAJOR):
    """Copies `values` into the view, matched up in iteration order."""
    source = self._source(values)
    for it in self.positions(traversal):
      it.value = next(source)
    source.finish()
    return self

  def copy(self, dest, start=0, traversal=Traversal.ROW_MAJOR):
    """Writes the view into dest[start:], returns the index past the last write."""
    for it in self.positions(traversal):
      dest[start] = it.value
      start += 1
    return start

  def toArray(self, traversal=Traversal.ROW_MAJOR):
    addresses = np.fromiter(self.addresses(traversal), dtype=np.intp, count=self.size())
    shape = self.length()
    if traversal == Traversal.COLUMN_MAJOR:
      shape = tuple(reversed(shape))
    return self._storage[addresses].reshape(shape + self.elementShape())

  def asNumpy(self):
    """Returns a numpy array aliasing the same elements with the same strides."""
    itemStride = self._storage.strides[0]
    origin = self._storage[self._layout.base():self._layout.base() + 1]
    return np.lib.stride_tricks.as_strided(origin,
                                           shape=self.length() + self.elementShape(),
                                           strides=tuple(s * itemStride for s in self.stride()) + self._storage.strides[1:],
                                           writeable=self._storage.flags.writeable)

  def scaleInPlace(self, value):
    for it in self.positions():
      it.value = it.value * value

  def divideInPlace(self, value):
    """Integer storage divided by an integer truncates toward zero, exactly."""
    integral = np.issubdtype(self._storage.dtype, np.integer)
    for it in self.positions():
      if integral and isinstance(value, numbers.Integral):
        it.value = _truncDiv(it.value, value)
      elif integral:
        it.value = np.trunc(it.value / value)
      else:
        it.value = it.value / value

  def _source(self, values):
    # Owning containers are read through their dense view.
    if not isinstance(values, (TensorView, np.ndarray)) and hasattr(values, 'view'):
      values = values.view()
    if isinstance(values, TensorView):
      if values.size() != self.size():
        raise ViewShapeError('Source view has {} elements, expected {}.'.format(values.size(), self.size()))
      if np.may_share_memory(values.storage(), self._storage):
        values = values.toArray().reshape((values.size(),) + values.elementShape())
      else:
        values = values.elements()
    elif isinstance(values, np.ndarray):
      values = values.reshape((-1,) + self.elementShape())
    if hasattr(values, '__len__') and len(values) != self.size():
      raise ViewShapeError('Source has {} elements, expected {}.'.format(len(values), self.size()))
    return _Source(values, self.size())

  def __eq__(self, other):
    if not isinstance(other, TensorView):
      return NotImplemented
    if self.length() != other.length():
      return False
    return all(np.array_equal(a, b) for a, b in zip(self.elements(), other.elements()))

  def __ne__(self, other):
    equal = self.__eq__(other)
    return equal if equal is NotImplemented else not equal

  __hash__ = None

  def __repr__(self):
    return '{}(shape: {}; stride: {}; base: {})'.format(type(self).__name__, self.length(), self.stride(), self._layout.base())

def _truncDiv(x, v):
  if np.ndim(x) == 0:
    q = abs(int(x)) // abs(int(v))
    return q if (x < 0) == (v < 0) else -q
  q = np.abs(x) // abs(int(v))
  return np.where((x < 0) != (v < 0), -q, q)

class _Source(object):
  def __init__(self, values, expected):
    self._values = iter(values)
    self._expected = expected
    self._taken = 0

  def __iter__(self):
    return self

  def __next__(self):
    try:
      value = next(self._values)
    except StopIteration:
      raise ViewShapeError('Source ran out after {} of {} elements.'.format(self._taken, self._expected)) from None
    self._taken += 1
    return value

  def finish(self):
    if next(self._values, _Source) is not _Source:
      raise ViewShapeError('Source has more than {} elements.'.format(self._expected))

class VectorView(TensorView):
  """Order-1 view: `length` elements, `stride` elements apart."""
  ORDER = 1

  def __init__(self, buffer, length, stride=1, offset=0, dtype=None):
    pointer = pointerTo(buffer, dtype=dtype)
    self._bind(pointer.storage(), StridedLayout.fromOffsets((stride,), (length,), (offset,), pointer.offset()))

  def begin(self, traversal=Traversal.ROW_MAJOR):
    return VectorIterator(self.data(), self.stridei(0))

  def end(self, traversal=Traversal.ROW_MAJOR):
    return self.begin() + self.lengthi(0)

  def positions(self, traversal=Traversal.ROW_MAJOR):
    return walk(self.begin(), self.end())

  def _item(self, i):
    return self._storage[self._layout.base() + i * self._layout.stridei(0)]

  def _setItem(self, i, value):
    self._storage[self._layout.base() + i * self._layout.stridei(0)] = value

  def front(self):
    return self._item(0)

  def back(self):
    return self._item(self.lengthi(0) - 1)

  def __iter__(self):
    return self.elements()

  def __reversed__(self):
    return self.reverse().elements()

class MatrixView(TensorView):
  """Order-2 view. Axis 0 enumerates rows, axis 1 columns.

  Row-major and column-major storage only differ in the strides passed in:
  a column-major M x N buffer is MatrixView(buf, M, N, rowStride=1,
  colStride=M).
  """
  ORDER = 2

  def __init__(self, buffer, rows, cols, rowStride=None, colStride=1, rowOffset=0, colOffset=0, dtype=None):
    if rowStride is None:
      rowStride = max(cols, 1) * colStride
    pointer = pointerTo(buffer, dtype=dtype)
    self._bind(pointer.storage(), StridedLayout.fromOffsets((rowStride, colStride), (rows, cols), (rowOffset, colOffset), pointer.offset()))

  @classmethod
  def fromRaster(cls, buffer, x, y, width, height, rowStride, colStride=1, dtype=None, elementShape=()):
    """
    Window of a raster as image codecs see it.

    Args:
      buffer: Decoded pixel buffer (or Pointer into it).
      x (int): Column of the window's first pixel.
      y (int): Row of the window's first pixel.
      width (int): Pixels per row.
      height (int): Number of rows.
      rowStride (int): Pixels between the starts of two rows (row size
        including padding).
      colStride (int): Pixels between two neighbouring pixels of a row.
      dtype: Channel type, when buffer is raw bytes.
      elementShape (tuple): Channels per pixel, e.g. (3,) for BGR.

    Returns:
      A MatrixView of shape (height, width).
    """
    pointer = pointerTo(buffer, dtype=dtype, elementShape=elementShape)
    return cls(pointer, height, width, rowStride, colStride, y, x)

  def rows(self):
    return self.lengthi(0)

  def cols(self):
    return self.lengthi(1)

  def rowStride(self):
    return self.stridei(0)

  def colStride(self):
    return self.stridei(1)

  def _axes(self, traversal):
    if traversal == Traversal.ROW_MAJOR:
      return 0, 1
    if traversal == Traversal.COLUMN_MAJOR:
      return 1, 0
    raise ValueError('Unsupported traversal: {}'.format(traversal))

  def begin(self, traversal=Traversal.ROW_MAJOR):
    outer, inner = self._axes(traversal)
    return MatrixIterator(self.data(), self.stridei(outer), self.stridei(inner), self.lengthi(inner))

  def end(self, traversal=Traversal.ROW_MAJOR):
    outer, _ = self._axes(traversal)
    return self.begin(traversal) + self.lengthi(outer)

  def positions(self, traversal=Traversal.ROW_MAJOR):
    for line in walk(self.begin(traversal), self.end(traversal)):
      yield from walk(line.begin(), line.end())

  def _item(self, i):
    return self.rowAt(i)

  def _setItem(self, i, value):
    self.rowAt(i).set(value)

  def rowAt(self, i):
    return VectorView.fromLayout(self._storage, self._layout.dropped(0, i))

  def colAt(self, j):
    return VectorView.fromLayout(self._storage, self._layout.dropped(1, j))

  def line(self, rowOffset, colOffset, length, axis=1):
    """Order-1 view of `length` elements starting at (rowOffset, colOffset)
    and running along `axis` (1: along the row, 0: down the column)."""
    base = self._layout.address((rowOffset, colOffset))
    return VectorView.fromLayout(self._storage, StridedLayout(base, (self.stridei(axis),), (length,)))

  def rotated(self, quarterTurns=1):
    """Rotates the view counterclockwise by quarterTurns * 90 degrees."""
    quarterTurns %= 4
    if quarterTurns == 1:
      return self.transpose().reverse(0)
    if quarterTurns == 2:
      return self.reverse()
    if quarterTurns == 3:
      return self.transpose().reverse(1)
    return self

  def __iter__(self):
    return (self.rowAt(i) for i in range(self.rows()))

_VIEW_TYPES = {1: VectorView, 2: MatrixView}

def viewFromLayout(storage, layout):
  if layout.order() not in _VIEW_TYPES:
    raise ViewShapeError('Views of order {} are not supported.'.format(layout.order()))
  return _VIEW_TYPES[layout.order()].fromLayout(storage, layout)
