#!/usr/bin/env python3

import numpy as np
from strideview import Matrix, MatrixView, multiply

M = 4
N = 3
K = 5

if __name__ == '__main__':
  A = Matrix(M, K, np.random.rand(M, K))
  B = Matrix(K, N, np.random.rand(K, N))
  # B^T stored column-major is the same buffer as B stored row-major.
  Bt = MatrixView(B.storage(), N, K, rowStride=1, colStride=N)

  C = multiply(A, B)
  D = Matrix(M, N)
  multiply(A.view(), Bt.transpose(), D.view())

  for name, result in (('AB', C), ('A(B^T)^T', D)):
    error = np.max(np.abs(result.toArray() - A.toArray() @ B.toArray()))
    print('{}: max error {}'.format(name, error))
