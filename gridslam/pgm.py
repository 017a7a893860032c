"""Writing grids of occupancy values as binary greyscale PGM images."""

from __future__ import annotations

from typing import BinaryIO, Sequence


def write_pgm(stream: BinaryIO, matrix: Sequence[Sequence[float]]) -> BinaryIO:
    """Write ``matrix[x][y]`` as a P5 image; values near 1 come out dark.

    Rows are written from the largest ``y`` down, so ``y`` grows upwards in
    the picture. Each pixel is ``int(255 * |1 - v|)`` taken modulo 256.
    """
    xsize = len(matrix)
    ysize = len(matrix[0]) if xsize else 0
    stream.write(f"P5\n{xsize}\n{ysize}\n255\n".encode("ascii"))
    pixels = bytearray(
        int(255 * abs(1.0 - matrix[x][y])) % 256
        for y in reversed(range(ysize))
        for x in range(xsize)
    )
    stream.write(bytes(pixels))
    return stream