import unittest

import numpy as np

from strideview.errors import ViewBoundsError, ViewShapeError
from strideview.view import Traversal, TensorView, VectorView, MatrixView


class VectorViewTest(unittest.TestCase):
  def test_strided_access(self):
    buf = np.arange(10.)
    v = VectorView(buf, 4, 2, 1)
    self.assertEqual(v.size(), 4)
    self.assertEqual(v.length(), (4,))
    self.assertEqual(len(v), 4)
    self.assertEqual(list(v), [2, 4, 6, 8])
    self.assertEqual(v.front(), 2)
    self.assertEqual(v.back(), 8)
    self.assertEqual(v.data()[0], v[0])

  def test_reverse(self):
    buf = np.arange(10.)
    v = VectorView(buf, 4, 2, 1)
    self.assertEqual(list(reversed(v)), [8, 6, 4, 2])
    self.assertEqual(list(v.reverse()), [8, 6, 4, 2])
    self.assertTrue(v.reverse().reverse().sameAddressing(v))

  def test_subview(self):
    buf = np.arange(10)
    v = VectorView(buf, 10)
    sub = v.subview(3, 4)
    self.assertEqual(list(sub), [3, 4, 5, 6])
    for k in range(sub.size()):
      self.assertEqual(sub[k], v[3 + k])
    sub[0] = -1
    self.assertEqual(buf[3], -1)

  def test_iterators(self):
    buf = np.arange(8)
    v = VectorView(buf, 4, 2)
    self.assertEqual(v.end() - v.begin(), 4)
    self.assertEqual([it.value for it in v.positions()], [0, 2, 4, 6])
    self.assertEqual(list(v.addresses()), [0, 2, 4, 6])

  def test_not_transposable(self):
    v = VectorView(np.zeros(4), 4)
    with self.assertRaises(ViewShapeError):
      v.transpose()
    with self.assertRaises(ViewShapeError):
      v[0, 1]
    with self.assertRaises(ViewShapeError):
      v.subview((0, 0), (1, 1))

  def test_invalid_axes(self):
    v = VectorView(np.zeros(4), 4)
    with self.assertRaises(ViewShapeError):
      v.reverse(1)
    m = MatrixView(np.zeros(4), 2, 2)
    with self.assertRaises(ViewShapeError):
      m.transpose(0, 2)
    with self.assertRaises(ViewShapeError):
      m.transpose(0, -1)
    with self.assertRaises(ViewShapeError):
      m.reverse(-1)

  def test_reverse_axis_twice(self):
    v = MatrixView(np.arange(6), 2, 3)
    self.assertTrue(v.reverse((0, 0)).sameAddressing(v))
    self.assertTrue(v.reverse((1, 0, 1)).sameAddressing(v.reverse(0)))

  def test_same_addressing_across_constructions(self):
    buf = np.arange(8)
    self.assertTrue(VectorView(buf, 4).sameAddressing(VectorView(buf, 4)))
    self.assertTrue(VectorView(buf, 3, 2, 1).sameAddressing(VectorView(buf[2:], 3, 2)))
    self.assertFalse(VectorView(buf, 4).sameAddressing(VectorView(buf, 4, 2)))
    self.assertFalse(VectorView(buf, 4).sameAddressing(VectorView(buf.copy(), 4)))


class MatrixViewTest(unittest.TestCase):
  def test_row_major(self):
    buf = np.arange(12)
    v = MatrixView(buf, 3, 4)
    self.assertEqual(v.rowStride(), 4)
    self.assertEqual(v.colStride(), 1)
    self.assertEqual(v[1, 2], 6)
    self.assertIsInstance(v[1], VectorView)
    self.assertEqual(list(v[1]), [4, 5, 6, 7])
    self.assertEqual(v[1][2], v[1, 2])
    self.assertEqual(list(v.colAt(1)), [1, 5, 9])
    self.assertEqual(len(v), 3)

  def test_column_major(self):
    buf = np.arange(12)
    v = MatrixView(buf, 3, 4, rowStride=1, colStride=3)
    self.assertEqual(v[1, 2], 7)
    self.assertTrue(np.array_equal(v.toArray(), buf.reshape(4, 3).T))

  def test_from_raster(self):
    buf = np.arange(16)
    v = MatrixView.fromRaster(buf, 1, 1, 2, 2, 4)
    self.assertEqual(v.length(), (2, 2))
    self.assertTrue(np.array_equal(v.toArray(), [[5, 6], [9, 10]]))

  def test_traversal(self):
    v = MatrixView(np.arange(6), 2, 3)
    self.assertEqual(list(v.elements()), [0, 1, 2, 3, 4, 5])
    self.assertEqual(list(v.elements(Traversal.COLUMN_MAJOR)), [0, 3, 1, 4, 2, 5])
    self.assertTrue(np.array_equal(v.toArray(Traversal.COLUMN_MAJOR), v.transpose().toArray()))
    self.assertEqual(v.end() - v.begin(), 2)
    self.assertEqual(v.end(Traversal.COLUMN_MAJOR) - v.begin(Traversal.COLUMN_MAJOR), 3)
    self.assertEqual(len(list(v.positions())), v.size())

  def test_transpose(self):
    buf = np.arange(16)
    o = MatrixView(buf, 4, 4)
    t = o.transpose()
    for i in range(4):
      for j in range(4):
        self.assertEqual(t[i][j], o[j][i])
        self.assertEqual(t[i, j], o[j, i])
    self.assertTrue(t.transpose().sameAddressing(o))

  def test_aliasing(self):
    buf = np.zeros(12)
    o = MatrixView(buf, 3, 4)
    t = o.transpose()
    t[1, 2] = 100.
    self.assertEqual(o[2, 1], 100.)
    self.assertEqual(buf[9], 100.)
    o.rowAt(0).set([1, 2, 3, 4])
    self.assertEqual(list(t.colAt(0)), [1, 2, 3, 4])

  def test_reverse(self):
    buf = np.arange(6)
    v = MatrixView(buf, 2, 3)
    self.assertTrue(np.array_equal(v.reverse(0).toArray(), [[3, 4, 5], [0, 1, 2]]))
    self.assertTrue(np.array_equal(v.reverse(1).toArray(), [[2, 1, 0], [5, 4, 3]]))
    self.assertTrue(np.array_equal(v.reverse().toArray(), [[5, 4, 3], [2, 1, 0]]))
    self.assertTrue(v.reverse(1).reverse(1).sameAddressing(v))
    self.assertTrue(v.reverse().reverse().sameAddressing(v))

  def test_reverse_element_shaped(self):
    buf = np.array([1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4])
    v = MatrixView.fromRaster(buf, 0, 0, 2, 2, 2, elementShape=(3,))
    self.assertEqual(v.elementShape(), (3,))
    flipped = v.reverse(0)
    rows = [line.toArray().tolist() for line in flipped]
    self.assertEqual(rows, [[[3, 3, 3], [4, 4, 4]], [[1, 1, 1], [2, 2, 2]]])
    self.assertEqual(buf.tolist(), [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4])

  def test_subview(self):
    buf = np.arange(16)
    o = MatrixView(buf, 4, 4)
    s = o.subview((1, 2), (2, 2))
    self.assertTrue(np.array_equal(s.toArray(), [[6, 7], [10, 11]]))
    for i in range(2):
      for j in range(2):
        self.assertEqual(s[i, j], o[1 + i, 2 + j])

  def test_line(self):
    v = MatrixView(np.arange(12), 3, 4)
    self.assertEqual(list(v.line(0, 1, 3, axis=0)), [1, 5, 9])
    self.assertEqual(list(v.line(1, 1, 3)), [5, 6, 7])

  def test_rotated(self):
    a = np.arange(6).reshape(2, 3)
    v = MatrixView(a, 2, 3)
    self.assertTrue(np.array_equal(v.rotated(1).toArray(), np.rot90(a)))
    self.assertTrue(np.array_equal(v.rotated(2).toArray(), np.rot90(a, 2)))
    self.assertTrue(np.array_equal(v.rotated(3).toArray(), np.rot90(a, -1)))
    self.assertTrue(v.rotated(4).sameAddressing(v))

  def test_as_numpy(self):
    buf = np.arange(12)
    v = MatrixView(buf, 3, 4)
    self.assertTrue(np.array_equal(v.transpose().asNumpy(), buf.reshape(3, 4).T))
    self.assertTrue(np.array_equal(v.reverse(0).asNumpy(), buf.reshape(3, 4)[::-1]))
    v.transpose().asNumpy()[0, 1] = -1
    self.assertEqual(v[1, 0], -1)

  def test_equality(self):
    a = MatrixView(np.arange(6), 2, 3)
    b = MatrixView(np.arange(6), 2, 3)
    self.assertEqual(a, b)
    self.assertNotEqual(a, a.transpose())
    self.assertNotEqual(a, a.reverse(0))

  def test_wrong_index_count(self):
    v = MatrixView(np.zeros(4), 2, 2)
    with self.assertRaises(ViewShapeError):
      v[0, 0, 0]
    with self.assertRaises(ViewShapeError):
      v.subview((0,), (1,))


class BatchOperationTest(unittest.TestCase):
  def test_apply(self):
    buf = np.arange(12)
    v = MatrixView(buf, 3, 4).colAt(1)
    v.apply(lambda x: x * 10)
    self.assertEqual(buf.tolist(), [0, 10, 2, 3, 4, 50, 6, 7, 8, 90, 10, 11])

  def test_apply_pairwise(self):
    buf = np.zeros(4)
    v = VectorView(buf, 4)
    v.apply(lambda x, y: x + y, [1, 2, 3, 4])
    self.assertEqual(buf.tolist(), [1, 2, 3, 4])
    v.apply(lambda x, y: x * y, VectorView(np.array([2., 2., 2., 2.]), 4))
    self.assertEqual(buf.tolist(), [2, 4, 6, 8])

  def test_apply_length_mismatch(self):
    v = VectorView(np.zeros(4), 4)
    with self.assertRaises(ViewShapeError):
      v.apply(lambda x, y: y, [1, 2, 3])
    with self.assertRaises(ViewShapeError):
      v.apply(lambda x, y: y, (k for k in range(3)))
    with self.assertRaises(ViewShapeError):
      v.apply(lambda x, y: y, (k for k in range(5)))

  def test_set(self):
    buf = np.zeros(6)
    v = MatrixView(buf, 2, 3)
    v.set(range(6))
    self.assertEqual(buf.tolist(), [0, 1, 2, 3, 4, 5])
    v.set(range(6), Traversal.COLUMN_MAJOR)
    self.assertEqual(buf.tolist(), [0, 2, 4, 1, 3, 5])
    with self.assertRaises(ViewShapeError):
      v.set([1, 2])

  def test_set_overlapping(self):
    buf = np.arange(5.)
    v = VectorView(buf, 5)
    v.set(v.reverse())
    self.assertEqual(buf.tolist(), [4, 3, 2, 1, 0])

  def test_copy(self):
    v = MatrixView(np.arange(6), 2, 3).transpose()
    dest = [None] * 7
    self.assertEqual(v.copy(dest, 1), 7)
    self.assertEqual(dest, [None, 0, 3, 1, 4, 2, 5])

  def test_scale_and_divide(self):
    buf = np.arange(6.)
    MatrixView(buf, 2, 3).colAt(2).scaleInPlace(2)
    self.assertEqual(buf.tolist(), [0, 1, 4, 3, 4, 10])

    ints = np.array([7, -7, 9], dtype=np.int64)
    VectorView(ints, 3).divideInPlace(2)
    self.assertEqual(ints.tolist(), [3, -3, 4])
    VectorView(ints, 3).divideInPlace(-2)
    self.assertEqual(ints.tolist(), [-1, 1, -2])

    large = np.array([2**60 + 3, -(2**60 + 3)], dtype=np.int64)
    VectorView(large, 2).divideInPlace(1)
    self.assertEqual(large.tolist(), [2**60 + 3, -(2**60 + 3)])
    VectorView(large, 2).divideInPlace(3)
    self.assertEqual(large.tolist(), [(2**60 + 3) // 3, -((2**60 + 3) // 3)])

    unsigned = np.array([2**63 + 7], dtype=np.uint64)
    VectorView(unsigned, 1).divideInPlace(7)
    self.assertEqual(unsigned.tolist(), [(2**63 + 7) // 7])

    pixels = np.array([[9, -9, 4]], dtype=np.int32)
    MatrixView.fromRaster(pixels, 0, 0, 1, 1, 1, elementShape=(3,)).divideInPlace(4)
    self.assertEqual(pixels.tolist(), [[2, -2, 1]])


class BoundsCheckingTest(unittest.TestCase):
  def setUp(self):
    TensorView.setBoundsChecking(True)

  def tearDown(self):
    TensorView.setBoundsChecking(False)

  def test_construction(self):
    self.assertTrue(TensorView.boundsChecking())
    with self.assertRaises(ViewBoundsError):
      VectorView(np.zeros(4), 5)
    with self.assertRaises(ViewBoundsError):
      MatrixView(np.zeros(6), 2, 4)
    VectorView(np.zeros(4), 4).reverse()

  def test_access(self):
    v = VectorView(np.zeros(4), 4)
    with self.assertRaises(ViewBoundsError):
      v[4]
    with self.assertRaises(IndexError):
      v[-1]
    m = MatrixView(np.zeros(6), 2, 3)
    with self.assertRaises(ViewBoundsError):
      m[0, 3]
    with self.assertRaises(ViewBoundsError):
      m[2]

  def test_subview(self):
    v = VectorView(np.zeros(4), 4)
    with self.assertRaises(ViewBoundsError):
      v.subview(2, 3)
    self.assertEqual(v.subview(2, 2).size(), 2)

  def test_unchecked_by_default(self):
    TensorView.setBoundsChecking(False)
    v = VectorView(np.zeros(4), 4)
    self.assertEqual(v.subview(2, 3).size(), 3)
