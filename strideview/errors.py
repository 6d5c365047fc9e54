class ViewError(Exception):
  pass

class ViewShapeError(ViewError, ValueError):
  """Raised when the order or shape of a view does not fit an operation,
  e.g. transposing a vector view or indexing a matrix view with one index
  too many."""
  pass

class ViewBoundsError(ViewError, IndexError):
  """Raised by bounds-checked views (see TensorView.setBoundsChecking) when an
  index, a sub-view or the extent of a view leaves its storage."""
  pass
