import numpy as np

from strassen_lib.bounded import checked_add, checked_mul
from strassen_lib.strassen import prepare


def multiply_naive(A, B, n, max_dim=None, dtype=None) -> np.ndarray:
    """Triple-loop product with every multiply and accumulate overflow-checked."""
    n, A, B = prepare(A, B, n, max_dim, dtype)
    dt = A.dtype
    C = np.empty((n, n), dtype=dt)
    for i in range(n):
        for j in range(n):
            acc = checked_mul(A[i, 0], B[0, j], dt)
            for k in range(1, n):
                acc = checked_add(acc, checked_mul(A[i, k], B[k, j], dt), dt)
            C[i, j] = acc
    C.flags.writeable = False
    return C


def naive_counts(n: int):
    """naive_counts(n) -> (multiplications, additions)"""
    return (n ** 3, (n - 1) * n ** 2)
