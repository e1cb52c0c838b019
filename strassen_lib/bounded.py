"""Overflow-checked scalar arithmetic over a fixed-width signed integer.

The width is taken from a numpy integer dtype (int32 by default, the C ``int``).
Each operation computes the two's-complement wrapped result for that width and
then checks it, so a wrapped value never escapes: it is either exact or an
``ArithmeticOverflow`` is raised.
"""
import os
from functools import lru_cache

import numpy as np

from strassen_lib.errors import ArithmeticOverflow

DEFAULT_DTYPE = os.getenv("STRASSEN_DTYPE", "int32")  # element type of every matrix


@lru_cache(maxsize=None)
def _limits(dt: np.dtype):
    if dt.kind != "i":
        raise TypeError(f"element dtype must be a signed integer, got {dt}")
    info = np.iinfo(dt)
    return info.bits, int(info.min), int(info.max)


def limits(dtype=DEFAULT_DTYPE):
    """limits(dtype) -> (bits, lo, hi)"""
    return _limits(np.dtype(dtype))


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _trunc_div(a: int, b: int) -> int:
    # C division truncates toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _check_operands(op, a, b, lo, hi):
    if not (lo <= a <= hi) or (b is not None and not (lo <= b <= hi)):
        raise ArithmeticOverflow(op, a, b)


def checked_add(a: int, b: int, dtype=DEFAULT_DTYPE) -> int:
    bits, lo, hi = limits(dtype)
    a, b = int(a), int(b)
    _check_operands("add", a, b, lo, hi)
    s = _wrap(a + b, bits)
    if a > 0 and b > 0 and s < 0:
        raise ArithmeticOverflow("add", a, b)
    if a < 0 and b < 0 and s >= 0:
        raise ArithmeticOverflow("add", a, b)
    return s


def checked_neg(a: int, dtype=DEFAULT_DTYPE) -> int:
    _, lo, hi = limits(dtype)
    a = int(a)
    _check_operands("neg", a, None, lo, hi)
    if a == lo:
        raise ArithmeticOverflow("neg", a)
    return -a


def checked_sub(a: int, b: int, dtype=DEFAULT_DTYPE) -> int:
    try:
        return checked_add(a, checked_neg(b, dtype), dtype)
    except ArithmeticOverflow as e:
        raise ArithmeticOverflow("sub", int(a), int(b)) from e


def checked_mul(a: int, b: int, dtype=DEFAULT_DTYPE) -> int:
    bits, lo, hi = limits(dtype)
    a, b = int(a), int(b)
    _check_operands("mul", a, b, lo, hi)
    s = _wrap(a * b, bits)
    if a != 0 and _trunc_div(s, a) != b:
        raise ArithmeticOverflow("mul", a, b)
    if b != 0 and _trunc_div(s, b) != a:
        raise ArithmeticOverflow("mul", a, b)
    return s
