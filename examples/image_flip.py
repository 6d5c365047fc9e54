#!/usr/bin/env python3

import numpy as np
from strideview import MatrixView, copyView

# A 3x2 BGR image stored bottom-up with rows padded to 4-byte multiples,
# the way BMP lays out 24-bit pixel data.
WIDTH = 3
HEIGHT = 2
ROW_BYTES = (3 * WIDTH + 3) // 4 * 4

def decode(raw):
  pixels = MatrixView.fromRaster(raw, 0, 0, WIDTH, HEIGHT, ROW_BYTES // 3, dtype=np.uint8, elementShape=(3,))
  return pixels.reverse(0)

def encode(view, out):
  padding = ROW_BYTES - 3 * WIDTH
  def bgr(dest, index, pixel):
    for channel in pixel:
      dest[index] = channel
      index += 1
    return index
  return copyView(view.reverse(0), out, bgr, padding=padding)

if __name__ == '__main__':
  raw = bytearray(ROW_BYTES * HEIGHT)
  for y in range(HEIGHT):
    for x in range(WIDTH):
      raw[y * ROW_BYTES + 3 * x:y * ROW_BYTES + 3 * x + 3] = bytes([x, y, 255])

  image = decode(raw)
  print('top-left pixel:', image[0, 0])

  mirrored = image.reverse(1)
  out = bytearray(len(raw))
  written = encode(mirrored, out)
  print('wrote {} bytes'.format(written))
