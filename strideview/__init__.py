from .errors import ViewError, ViewShapeError, ViewBoundsError
from .storage import Pointer, pointerTo
from .layout import StridedLayout
from .iterator import StridedIterator, VectorIterator, MatrixIterator, walk
from .view import Traversal, TensorView, VectorView, MatrixView, viewFromLayout
from .container import Vector, Matrix
from .algorithm import lines, forEachView, copyView, copyInto, dot, multiply, scaleNearest
