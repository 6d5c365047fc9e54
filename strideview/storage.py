import warnings
import numpy as np

class Pointer(object):
  """Address of one element inside a flat storage array.

  The first axis of the storage enumerates elements, trailing axes (if any)
  form the element shape. Arithmetic is in elements, like a C pointer.
  """
  def __init__(self, storage, offset=0):
    self._storage = storage
    self._offset = offset

  def storage(self):
    return self._storage

  def offset(self):
    return self._offset

  def address(self):
    return self._storage.__array_interface__['data'][0] + self._offset * self._storage.strides[0]

  def __add__(self, d):
    return Pointer(self._storage, self._offset + d)

  def __radd__(self, d):
    return self + d

  def __sub__(self, other):
    if isinstance(other, Pointer):
      if self._storage is other._storage:
        return self._offset - other._offset
      return (self.address() - other.address()) // self._storage.strides[0]
    return Pointer(self._storage, self._offset - other)

  def __getitem__(self, d):
    return self._storage[self._offset + d]

  def __setitem__(self, d, value):
    self._storage[self._offset + d] = value

  def __eq__(self, other):
    if not isinstance(other, Pointer):
      return NotImplemented
    if self._storage is other._storage:
      return self._offset == other._offset
    return self.address() == other.address()

  def __ne__(self, other):
    equal = self.__eq__(other)
    return equal if equal is NotImplemented else not equal

  def __lt__(self, other):
    return self - other < 0

  def __le__(self, other):
    return self - other <= 0

  def __gt__(self, other):
    return self - other > 0

  def __ge__(self, other):
    return self - other >= 0

  def __hash__(self):
    return hash(self.address())

  def __repr__(self):
    return 'Pointer(offset: {}; storage: {}{})'.format(self._offset, self._storage.dtype, list(self._storage.shape))

def _asStorage(buffer, dtype, elementShape):
  if isinstance(buffer, np.ndarray):
    if not buffer.flags.c_contiguous:
      raise ValueError('Storage must be contiguous; got an array with strides {}.'.format(buffer.strides))
    flat = buffer.reshape(-1) if dtype is None else buffer.reshape(-1).view(dtype)
  else:
    try:
      memoryview(buffer)
    except TypeError:
      raise ValueError('Storage must expose the buffer protocol (ndarray, bytearray, array.array, ...), got {}.'.format(type(buffer).__name__))
    flat = np.frombuffer(buffer, dtype=np.uint8 if dtype is None else dtype)

  if not flat.flags.writeable:
    warnings.warn('Storage is read-only; writing through views of it will fail.', UserWarning)

  return flat.reshape((-1,) + tuple(elementShape))

def pointerTo(buffer, offset=0, dtype=None, elementShape=()):
  """
  Returns a Pointer to element `offset` of a buffer without copying it.

  Args:
    buffer: A contiguous numpy.ndarray, any object exposing the buffer
      protocol, or an existing Pointer (which is shifted by offset).
    offset (int): Element offset of the returned pointer.
    dtype: Reinterprets the buffer's bytes as this type. Raw buffers default
      to uint8.
    elementShape (tuple): Trailing shape of a single element, e.g. (3,) for
      interleaved RGB pixels.

  Returns:
    A Pointer aliasing the buffer.
  """
  if isinstance(buffer, Pointer):
    if dtype is not None or elementShape:
      raise ValueError('A Pointer cannot be reinterpreted; pass the underlying buffer instead.')
    return buffer + offset
  return Pointer(_asStorage(buffer, dtype, elementShape), offset)
