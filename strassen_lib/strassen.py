import os

import numpy as np

from strassen_lib.bounded import DEFAULT_DTYPE, checked_add, checked_mul, checked_sub
from strassen_lib.errors import InvalidDimension
from strassen_lib.split import as_matrix, assemble, elementwise_add, elementwise_sub, split
from strassen_lib.utils import get_logger

MAX_DIM = int(os.getenv("STRASSEN_MAX_DIM", "16"))  # largest accepted n

logger = get_logger("strassen")


class Cancelled(Exception):
    """Raised inside a task tree once a sibling has failed; never escapes multiply_parallel."""


def is_power_of_two(n) -> bool:
    return n > 0 and n & (n - 1) == 0


def validate_dimension(n, max_dim=None) -> int:
    max_dim = MAX_DIM if max_dim is None else max_dim
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidDimension(n, "dimension must be an integer")
    n = int(n)
    if n < 2:
        raise InvalidDimension(n, "dimension must be at least 2")
    if not is_power_of_two(n):
        raise InvalidDimension(n, "dimension must be a power of two")
    if n > max_dim:
        raise InvalidDimension(n, f"input is greater than max array row/col elem size {max_dim}")
    return n


def prepare(A, B, n, max_dim=None, dtype=None):
    """Validate n, then freeze A and B as n x n matrices of a common dtype."""
    n = validate_dimension(n, max_dim)
    if dtype is None:
        dtype = A.dtype if isinstance(A, np.ndarray) and A.dtype.kind == "i" else DEFAULT_DTYPE
    return n, as_matrix(A, n, dtype), as_matrix(B, n, dtype)


def _base_case(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    dt = a.dtype
    a00, a01, a10, a11 = int(a[0, 0]), int(a[0, 1]), int(a[1, 0]), int(a[1, 1])
    b00, b01, b10, b11 = int(b[0, 0]), int(b[0, 1]), int(b[1, 0]), int(b[1, 1])

    m1 = checked_mul(checked_add(a00, a11, dt), checked_add(b00, b11, dt), dt)
    m2 = checked_mul(checked_add(a10, a11, dt), b00, dt)
    m3 = checked_mul(a00, checked_sub(b01, b11, dt), dt)
    m4 = checked_mul(a11, checked_sub(b10, b00, dt), dt)
    m5 = checked_mul(checked_add(a00, a01, dt), b11, dt)
    m6 = checked_mul(checked_sub(a10, a00, dt), checked_add(b00, b01, dt), dt)
    m7 = checked_mul(checked_sub(a01, a11, dt), checked_add(b10, b11, dt), dt)

    c00 = checked_add(checked_sub(checked_add(m1, m4, dt), m5, dt), m7, dt)
    c01 = checked_add(m3, m5, dt)
    c10 = checked_add(m2, m4, dt)
    c11 = checked_add(checked_add(checked_sub(m1, m2, dt), m3, dt), m6, dt)

    C = np.array([[c00, c01], [c10, c11]], dtype=dt)
    C.flags.writeable = False
    return C


def m_arguments(A: np.ndarray, B: np.ndarray, half: int):
    """The seven (left, right) operand pairs whose products are M1..M7."""
    A00, A01, A10, A11 = split(A)
    B00, B01, B10, B11 = split(B)
    return [
        (elementwise_add(A00, A11, half), elementwise_add(B00, B11, half)),
        (elementwise_add(A10, A11, half), B00),
        (A00, elementwise_sub(B01, B11, half)),
        (A11, elementwise_sub(B10, B00, half)),
        (elementwise_add(A00, A01, half), B11),
        (elementwise_sub(A10, A00, half), elementwise_add(B00, B01, half)),
        (elementwise_sub(A01, A11, half), elementwise_add(B10, B11, half)),
    ]


def recombine(products, half: int) -> np.ndarray:
    M1, M2, M3, M4, M5, M6, M7 = products
    add, sub = elementwise_add, elementwise_sub
    Q1 = add(sub(add(M1, M4, half), M5, half), M7, half)
    Q2 = add(M3, M5, half)
    Q3 = add(M2, M4, half)
    Q4 = add(add(sub(M1, M2, half), M3, half), M6, half)
    return assemble(Q1, Q2, Q3, Q4, half)


def strassen_square(A: np.ndarray, B: np.ndarray, n: int, depth: int = 0, cancel=None) -> np.ndarray:
    """Recursive Strassen product of two frozen n x n matrices (n a power of two >= 2).

    ``cancel`` is an optional threading.Event; once set, the next recursion step
    raises Cancelled instead of doing more work.
    """
    if cancel is not None and cancel.is_set():
        raise Cancelled()
    if n == 2:
        return _base_case(A, B)

    half = n // 2
    logger.debug(f"[depth={depth}] split n={n} -> {half}")
    products = [strassen_square(X, Y, half, depth + 1, cancel) for X, Y in m_arguments(A, B, half)]
    return recombine(products, half)


def multiply(A, B, n, max_dim=None, dtype=None) -> np.ndarray:
    """multiply(A, B, n) -> C = A.B via Strassen's algorithm.

    A and B may be nested lists or integer arrays of shape (n, n). Raises
    InvalidDimension before any arithmetic when n is not a power of two >= 2 or
    exceeds ``max_dim``; raises ArithmeticOverflow on the first value that does
    not fit the element type.
    """
    n, A, B = prepare(A, B, n, max_dim, dtype)
    logger.debug(f"multiply n={n} dtype={A.dtype}")
    return strassen_square(A, B, n)


def strassen_counts(n: int):
    """strassen_counts(n) -> (multiplications, additions) performed by strassen_square"""
    if n == 2:
        return (7, 18)
    half = n // 2
    m, a = strassen_counts(half)
    return 7 * m, 7 * a + 18 * half * half
