import itertools
from .errors import ViewShapeError

class StridedLayout(object):
  """Maps multi-indices to element addresses: base + sum(index_i * stride_i).

  Layouts are values. Every transformation returns a new layout and leaves
  the storage it describes untouched.
  """
  def __init__(self, base, stride, shape):
    stride = tuple(stride)
    shape = tuple(shape)
    if len(stride) != len(shape):
      raise ViewShapeError('Got {} strides for {} axes.'.format(len(stride), len(shape)))
    if any(s == 0 for s in stride):
      raise ValueError('stride must not contain zero entries (degenerate axis): {}'.format(stride))
    if any(l < 0 for l in shape):
      raise ValueError('shape must not contain negative entries: {}'.format(shape))

    self._base = base
    self._stride = stride
    self._shape = shape

  @classmethod
  def fromOffsets(cls, stride, shape, offsets=None, base=0):
    if offsets is None:
      offsets = [0] * len(stride)
    if len(offsets) != len(stride):
      raise ViewShapeError('Got {} offsets for {} axes.'.format(len(offsets), len(stride)))
    return cls(base + sum(o * s for o, s in zip(offsets, stride)), stride, shape)

  @classmethod
  def rowMajor(cls, shape, base=0):
    if not shape:
      return cls(base, (), ())
    stride = [1]
    for l in reversed(shape[1:]):
      stride.append(stride[-1] * max(l, 1))
    return cls(base, reversed(stride), shape)

  @classmethod
  def columnMajor(cls, shape, base=0):
    if not shape:
      return cls(base, (), ())
    stride = [1]
    for l in shape[:-1]:
      stride.append(stride[-1] * max(l, 1))
    return cls(base, stride, shape)

  def base(self):
    return self._base

  def stride(self):
    return self._stride

  def stridei(self, dim):
    return self._stride[dim]

  def shape(self):
    return self._shape

  def shapei(self, dim):
    return self._shape[dim]

  def order(self):
    return len(self._shape)

  def size(self):
    s = 1
    for l in self._shape:
      s *= l
    return s

  def address(self, entry):
    return self._base + sum(e * s for e, s in zip(entry, self._stride))

  def extent(self):
    """Lowest and highest address of the layout, or None when it is empty."""
    if self.size() == 0:
      return None
    lo = self._base + sum(min(0, s * (l - 1)) for s, l in zip(self._stride, self._shape))
    hi = self._base + sum(max(0, s * (l - 1)) for s, l in zip(self._stride, self._shape))
    return lo, hi

  def isContiguous(self):
    return self._stride == StridedLayout.rowMajor(self._shape).stride()

  def addresses(self, dims=None):
    if dims is None:
      dims = range(self.order())
    ranges = [range(self._shape[d]) for d in dims]
    strides = [self._stride[d] for d in dims]
    for entry in itertools.product(*ranges):
      yield self._base + sum(e * s for e, s in zip(entry, strides))

  def checkAxis(self, dim):
    if not 0 <= dim < self.order():
      raise ViewShapeError('Axis {} does not exist in a layout of order {}.'.format(dim, self.order()))

  def permuted(self, permutation):
    if sorted(permutation) != list(range(self.order())):
      raise ViewShapeError('{} is not a permutation of {} axes.'.format(permutation, self.order()))
    return StridedLayout(self._base, [self._stride[p] for p in permutation], [self._shape[p] for p in permutation])

  def transposed(self, a=0, b=1):
    if self.order() < 2:
      raise ViewShapeError('Cannot transpose a layout of order {}.'.format(self.order()))
    self.checkAxis(a)
    self.checkAxis(b)
    permutation = list(range(self.order()))
    permutation[a], permutation[b] = permutation[b], permutation[a]
    return self.permuted(permutation)

  def reversed(self, dims=None):
    """Reverses every axis in dims. An axis listed twice is reversed twice."""
    if dims is None:
      dims = range(self.order())
    base = self._base
    stride = list(self._stride)
    for d in dims:
      self.checkAxis(d)
      base += stride[d] * (self._shape[d] - 1)
      stride[d] = -stride[d]
    return StridedLayout(base, stride, self._shape)

  def subslice(self, offsets, shape):
    if len(shape) != self.order():
      raise ViewShapeError('Got {} lengths for a layout of order {}.'.format(len(shape), self.order()))
    return StridedLayout.fromOffsets(self._stride, shape, offsets, self._base)

  def dropped(self, dim, index):
    self.checkAxis(dim)
    return StridedLayout(self._base + index * self._stride[dim],
                         self._stride[:dim] + self._stride[dim+1:],
                         self._shape[:dim] + self._shape[dim+1:])

  def __eq__(self, other):
    if not isinstance(other, StridedLayout):
      return NotImplemented
    return self._base == other._base and self._stride == other._stride and self._shape == other._shape

  def __hash__(self):
    return hash((self._base, self._stride, self._shape))

  def __str__(self):
    return '{}(base: {}, shape: {}, stride: {})'.format(type(self).__name__, self._base, self._shape, self._stride)

  __repr__ = __str__
