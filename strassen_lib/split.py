"""Matrix storage, quadrant views and checked elementwise combination.

A matrix is a square numpy integer array. Quadrants are numpy basic-slicing
views into the parent (no copy), always marked read-only so a recursive step can
never write through an alias. Add/sub results are freshly owned arrays.
"""
from enum import Enum

import numpy as np

from strassen_lib.bounded import DEFAULT_DTYPE, checked_add, checked_sub, limits
from strassen_lib.errors import InvalidDimension, MatrixFormatError


class Quadrant(str, Enum):
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"


# (row offset, col offset) in units of half the parent's size
_OFFSETS = {
    Quadrant.TOP_LEFT: (0, 0),
    Quadrant.TOP_RIGHT: (0, 1),
    Quadrant.BOTTOM_LEFT: (1, 0),
    Quadrant.BOTTOM_RIGHT: (1, 1),
}


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def as_matrix(data, n=None, dtype=DEFAULT_DTYPE) -> np.ndarray:
    """Convert nested lists or an array into a frozen square matrix of ``dtype``.

    Raises MatrixFormatError for non-integer or out-of-range elements and
    InvalidDimension when the shape is not square (or not ``n`` x ``n``).
    """
    dt = np.dtype(dtype)
    _, lo, hi = limits(dt)
    try:
        raw = np.asarray(data)
    except ValueError as e:
        raise MatrixFormatError(f"matrix rows have inconsistent lengths: {e}") from e

    if raw.ndim != 2:
        raise MatrixFormatError(f"matrix must be two-dimensional, got {raw.ndim} dimension(s)")
    rows, cols = raw.shape
    if rows != cols:
        raise InvalidDimension(rows, f"matrix must be square, got {rows}x{cols}")
    if n is not None and rows != n:
        raise InvalidDimension(n, f"expected {n}x{n} matrix, got {rows}x{cols}")

    if raw.dtype.kind == "O":
        for r, row in enumerate(raw):
            for c, v in enumerate(row):
                if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
                    raise MatrixFormatError(f"non-integer element {v!r}", r + 1, c + 1)
    elif raw.dtype.kind not in "iu":
        raise MatrixFormatError(f"matrix elements must be integers, got dtype {raw.dtype}")

    if raw.size:
        mn, mx = int(raw.min()), int(raw.max())
        if mn < lo or mx > hi:
            raise MatrixFormatError(f"element out of range for {dt}: [{mn}, {mx}] not within [{lo}, {hi}]")

    return _freeze(raw.astype(dt))


def quadrant(matrix: np.ndarray, which) -> np.ndarray:
    """Read-only view of one N/2 x N/2 quadrant of an N x N matrix."""
    n = matrix.shape[0]
    if n < 2 or n % 2:
        raise InvalidDimension(n, "quadrant split needs an even dimension >= 2")
    half = n // 2
    r, c = _OFFSETS[Quadrant(which)]
    return _freeze(matrix[r * half:(r + 1) * half, c * half:(c + 1) * half])


def split(matrix: np.ndarray):
    """split(M) -> (tl, tr, bl, br)"""
    return tuple(quadrant(matrix, q) for q in Quadrant)


def _combine(op, a: np.ndarray, b: np.ndarray, size: int) -> np.ndarray:
    dt = a.dtype
    out = np.empty((size, size), dtype=dt)
    for r in range(size):
        for c in range(size):
            out[r, c] = op(a[r, c], b[r, c], dt)
    return _freeze(out)


def elementwise_add(a: np.ndarray, b: np.ndarray, size: int) -> np.ndarray:
    return _combine(checked_add, a, b, size)


def elementwise_sub(a: np.ndarray, b: np.ndarray, size: int) -> np.ndarray:
    return _combine(checked_sub, a, b, size)


def assemble(q_tl, q_tr, q_bl, q_br, size: int) -> np.ndarray:
    C = np.empty((size * 2, size * 2), dtype=q_tl.dtype)
    C[:size, :size] = q_tl;  C[:size, size:] = q_tr
    C[size:, :size] = q_bl;  C[size:, size:] = q_br
    return _freeze(C)
