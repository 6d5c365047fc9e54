import numbers
from abc import ABC, abstractmethod

class StridedIterator(ABC):
  """Walks one axis of a storage with a fixed (possibly negative) stride.

  Iterators are values: arithmetic returns new iterators, so `it += 1`
  rebinds `it` instead of moving iterators shared elsewhere. Comparison
  only looks at the address; comparing or subtracting iterators with
  different strides gives meaningless results.
  """
  def __init__(self, pointer, stride):
    self._pointer = pointer
    self._stride = stride

  @abstractmethod
  def _at(self, pointer):
    pass

  def pointer(self):
    return self._pointer

  def stride(self):
    return self._stride

  @property
  def value(self):
    return self._pointer[0]

  @value.setter
  def value(self, v):
    self._pointer[0] = v

  def __add__(self, d):
    if not isinstance(d, numbers.Integral):
      return NotImplemented
    return self._at(self._pointer + d * self._stride)

  def __radd__(self, d):
    return self.__add__(d)

  def __sub__(self, other):
    if isinstance(other, StridedIterator):
      return (self._pointer - other._pointer) // self._stride
    if not isinstance(other, numbers.Integral):
      return NotImplemented
    return self._at(self._pointer - other * self._stride)

  def __getitem__(self, d):
    return self._pointer[d * self._stride]

  def __setitem__(self, d, v):
    self._pointer[d * self._stride] = v

  def __eq__(self, other):
    if not isinstance(other, StridedIterator):
      return NotImplemented
    return self._pointer == other._pointer

  def __ne__(self, other):
    equal = self.__eq__(other)
    return equal if equal is NotImplemented else not equal

  def __lt__(self, other):
    return self._pointer < other._pointer

  def __le__(self, other):
    return self._pointer <= other._pointer

  def __gt__(self, other):
    return self._pointer > other._pointer

  def __ge__(self, other):
    return self._pointer >= other._pointer

  __hash__ = None

class VectorIterator(StridedIterator):
  def _at(self, pointer):
    return VectorIterator(pointer, self._stride)

  def __repr__(self):
    return 'VectorIterator(offset: {}; stride: {})'.format(self._pointer.offset(), self._stride)

class MatrixIterator(StridedIterator):
  """Iterator over the outer axis of a matrix.

  Every position is also a range: begin() and end() delimit the inner axis
  starting at the current address, so nested loops need no offset
  arithmetic:

    outer = view.begin()
    for k in range(view.end() - outer):
      for it in walk((outer + k).begin(), (outer + k).end()):
        it.value = 0
  """
  def __init__(self, pointer, stride, subStride, subLength):
    super().__init__(pointer, stride)
    self._subStride = subStride
    self._subLength = subLength

  def _at(self, pointer):
    return MatrixIterator(pointer, self._stride, self._subStride, self._subLength)

  def subStride(self):
    return self._subStride

  def subLength(self):
    return self._subLength

  def begin(self):
    return VectorIterator(self._pointer, self._subStride)

  def end(self):
    return self.begin() + self._subLength

  def __len__(self):
    return self._subLength

  def __iter__(self):
    return (it.value for it in walk(self.begin(), self.end()))

  def __repr__(self):
    return 'MatrixIterator(offset: {}; stride: {}; inner: {}x{})'.format(self._pointer.offset(), self._stride, self._subLength, self._subStride)

def walk(first, last):
  """Yields every position in [first, last)."""
  for k in range(last - first):
    yield first + k
