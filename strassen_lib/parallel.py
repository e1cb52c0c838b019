"""Fork-join Strassen: the seven sub-products of a level run as concurrent tasks.

Each forking level fans the seven argument pairs out to its own thread pool and
joins them before recombining. The first failure anywhere in the tree sets a
shared event; pending siblings are cancelled and running descendants stop at
their next recursion step. The caller only ever sees the first overflow.
"""
import os
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

import numpy as np

from strassen_lib.strassen import Cancelled, m_arguments, prepare, recombine, strassen_square
from strassen_lib.utils import get_logger

WORKERS = int(os.getenv("STRASSEN_WORKERS", "7"))  # threads per forking level

logger = get_logger("strassen.parallel")


class _TaskTree:
    def __init__(self):
        self.cancel = threading.Event()
        self.error = None
        self._lock = threading.Lock()

    def fail(self, exc: BaseException):
        with self._lock:
            if self.error is None:
                self.error = exc
        self.cancel.set()


def _fork_join(A, B, n, depth, fork_depth, workers, tree: _TaskTree) -> np.ndarray:
    if tree.cancel.is_set():
        raise Cancelled()
    if depth >= fork_depth or n == 2:
        return strassen_square(A, B, n, depth, tree.cancel)

    half = n // 2
    pairs = m_arguments(A, B, half)
    logger.debug(f"[depth={depth}] fork n={n} -> 7 x {half}")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"strassen-d{depth}") as pool:
        futures = [pool.submit(_fork_join, X, Y, half, depth + 1, fork_depth, workers, tree)
                   for X, Y in pairs]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        errors = [f.exception() for f in done if not f.cancelled() and f.exception() is not None]
        if errors:
            for e in errors:
                if not isinstance(e, Cancelled):
                    tree.fail(e)
            tree.cancel.set()
            for f in pending:
                f.cancel()
            raise Cancelled()

    return recombine([f.result() for f in futures], half)


def multiply_parallel(A, B, n, max_dim=None, dtype=None, workers=None, fork_depth=1) -> np.ndarray:
    """Same contract as strassen.multiply, with the top ``fork_depth`` levels run concurrently."""
    n, A, B = prepare(A, B, n, max_dim, dtype)
    workers = WORKERS if workers is None else workers
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    tree = _TaskTree()
    try:
        return _fork_join(A, B, n, 0, fork_depth, workers, tree)
    except Cancelled:
        if tree.error is None:
            raise
        logger.warning(f"parallel multiply aborted: {tree.error}")
        raise tree.error
