import logging
import os

LOG_LEVEL = os.getenv("STRASSEN_LOG_LEVEL", "INFO").upper()


def resolve_level(name) -> int:
    """Numeric logging level for ``name``; unknown names fall back to INFO with a warning."""
    level = logging.getLevelName(str(name).upper())
    if isinstance(level, int):
        return level
    logging.getLogger("strassen").warning(f"unknown log level {name!r}, using INFO")
    return logging.INFO


def get_logger(name: str = "strassen") -> logging.Logger:
    # handler lives on the top of the dotted hierarchy so children don't double-log
    base = logging.getLogger(name.split(".")[0])
    if not base.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        base.addHandler(h)
        base.setLevel(resolve_level(LOG_LEVEL))
    return logging.getLogger(name)


def validate_matrices(matrix_a, matrix_b):
    if not isinstance(matrix_a, list) or not isinstance(matrix_b, list):
        raise ValueError("Input matrices must be lists of rows.")
    if not matrix_a or not matrix_b:
        raise ValueError("Input matrices cannot be empty.")
    if len(matrix_a) != len(matrix_b):
        raise ValueError(f"Matrix A is {len(matrix_a)} rows but matrix B is {len(matrix_b)}; sizes must match.")
    for label, m in (("A", matrix_a), ("B", matrix_b)):
        for row in m:
            if not isinstance(row, (list, tuple)) or len(row) != len(m):
                raise ValueError(f"Matrix {label} must be square.")
