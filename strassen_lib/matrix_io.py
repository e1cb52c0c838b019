import os

import numpy as np

from strassen_lib.bounded import DEFAULT_DTYPE, limits
from strassen_lib.errors import MatrixFormatError
from strassen_lib.split import as_matrix

RANDOM_HIGH = int(os.getenv("STRASSEN_RANDOM_HIGH", "100"))  # entries drawn from [0, high)


def parse_matrix(lines, n: int, dtype=DEFAULT_DTYPE) -> np.ndarray:
    """Fill an n x n matrix from whitespace-separated text, row-major.

    Only the first n tokens of the first n lines are used; anything missing stays 0.
    Negative or non-integer tokens raise MatrixFormatError.
    """
    _, _, hi = limits(dtype)
    M = np.zeros((n, n), dtype=dtype)
    for i, line in enumerate(lines):
        if i == n:
            break
        for j, token in enumerate(line.split()[:n]):
            try:
                v = int(token)
            except ValueError:
                raise MatrixFormatError(f"invalid token {token!r}", i + 1, j + 1) from None
            if v < 0:
                raise MatrixFormatError(f"negative element {v}", i + 1, j + 1)
            if v > hi:
                raise MatrixFormatError(f"element {v} exceeds {np.dtype(dtype)} range", i + 1, j + 1)
            M[i, j] = v
    return as_matrix(M, n, dtype)


def read_matrix_file(path, n: int, dtype=DEFAULT_DTYPE) -> np.ndarray:
    try:
        with open(path, "r", encoding="utf-8") as fp:
            return parse_matrix(fp, n, dtype)
    except OSError as e:
        raise MatrixFormatError(f"{path} open error") from e


def write_matrix_file(path, matrix):
    with open(path, "w", encoding="utf-8") as fp:
        for row in np.asarray(matrix):
            fp.write(" ".join(str(int(v)) for v in row) + "\n")


def random_matrix(n: int, high: int = None, seed=None, dtype=DEFAULT_DTYPE) -> np.ndarray:
    high = RANDOM_HIGH if high is None else high
    rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
    return as_matrix(rng.integers(0, high, (n, n)), n, dtype)


def format_matrix(matrix, width: int = 4) -> str:
    return "\n".join(" ".join(f"{int(v):{width}d}" for v in row) for row in np.asarray(matrix))
