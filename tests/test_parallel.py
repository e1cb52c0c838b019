import numpy as np
import pytest

import strassen_lib.parallel as parallel_mod
from strassen_lib.errors import ArithmeticOverflow, InvalidDimension
from strassen_lib.parallel import multiply_parallel
from strassen_lib.strassen import Cancelled, multiply


def _random_pair(n, seed):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 100, (n, n)), rng.integers(0, 100, (n, n))


@pytest.mark.parametrize("n", [2, 4, 8, 16])
@pytest.mark.parametrize("fork_depth", [1, 2])
def test_matches_sequential(n, fork_depth):
    A, B = _random_pair(n, n + fork_depth)
    np.testing.assert_array_equal(multiply_parallel(A, B, n, fork_depth=fork_depth), multiply(A, B, n))


def test_single_worker():
    A, B = _random_pair(8, 9)
    np.testing.assert_array_equal(multiply_parallel(A, B, 8, workers=1), multiply(A, B, 8))


def test_invalid_workers():
    A, B = _random_pair(4, 1)
    with pytest.raises(ValueError):
        multiply_parallel(A, B, 4, workers=0)


def test_invalid_dimension():
    with pytest.raises(InvalidDimension):
        multiply_parallel([[1, 2, 3]] * 3, [[1, 2, 3]] * 3, 3)


def _overflowing_pair():
    # A00 * B01 overflows inside the M3 (and M6) sub-products; every argument sum fits
    A = np.zeros((4, 4), dtype=np.int64)
    B = np.zeros((4, 4), dtype=np.int64)
    A[0, 0] = 50000
    B[0, 2] = 50000
    return A, B


@pytest.mark.parametrize("fork_depth", [1, 2])
def test_overflow_in_a_task_surfaces_the_first_error(fork_depth):
    A, B = _overflowing_pair()
    with pytest.raises(ArithmeticOverflow) as exc:
        multiply_parallel(A, B, 4, dtype="int32", fork_depth=fork_depth)
    assert exc.value.operation == "mul"
    assert not isinstance(exc.value, Cancelled)


def test_overflow_while_forming_arguments():
    A = np.zeros((4, 4), dtype=np.int64)
    A[0, 0] = A[2, 2] = 2 ** 30
    with pytest.raises(ArithmeticOverflow) as exc:
        multiply_parallel(A, np.eye(4, dtype=np.int64), 4, dtype="int32")
    assert exc.value.operation == "add"


def test_failure_cancels_siblings(monkeypatch):
    started = []
    real = parallel_mod.strassen_square

    def tracked(A, B, n, depth=0, cancel=None):
        started.append(n)
        if A[0, 0] == -1:
            raise ArithmeticOverflow("mul", -1, 0)
        # hold the worker until the failure has been broadcast
        if cancel.wait(timeout=5):
            raise Cancelled()
        return real(A, B, n, depth, cancel)

    monkeypatch.setattr(parallel_mod, "strassen_square", tracked)
    A = np.zeros((4, 4), dtype=np.int32)
    A[0, 0] = -1   # M1's left operand A00 + A11 starts with -1, so the first task fails
    B = np.ones((4, 4), dtype=np.int32)
    with pytest.raises(ArithmeticOverflow) as exc:
        multiply_parallel(A, B, 4, workers=1)
    assert (exc.value.a, exc.value.b) == (-1, 0)
    # a single worker runs tasks in order; pending ones are cancelled once M1 fails
    assert len(started) < 7


def test_task_tree_keeps_first_error():
    tree = parallel_mod._TaskTree()
    first = ArithmeticOverflow("add", 1, 2)
    tree.fail(first)
    tree.fail(ArithmeticOverflow("mul", 3, 4))
    assert tree.error is first
    assert tree.cancel.is_set()


def test_overflow_while_recombining_sub_products():
    A = np.zeros((4, 4), dtype=np.int64)
    B = np.zeros((4, 4), dtype=np.int64)
    A[0, 0] = A[0, 2] = 40000
    B[0, 0] = B[2, 0] = 40000
    with pytest.raises(ArithmeticOverflow) as exc:
        multiply_parallel(A, B, 4, dtype="int32")
    assert exc.value.operation == "add"
    assert (exc.value.a, exc.value.b) == (1600000000, 1600000000)
