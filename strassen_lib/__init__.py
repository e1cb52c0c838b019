from strassen_lib.errors import (
    ArithmeticOverflow,
    InvalidDimension,
    MatrixFormatError,
    RemoteMultiplyError,
    StrassenError,
)
from strassen_lib.naive import multiply_naive
from strassen_lib.parallel import multiply_parallel
from strassen_lib.strassen import MAX_DIM, multiply

__all__ = [
    "ArithmeticOverflow",
    "InvalidDimension",
    "MatrixFormatError",
    "RemoteMultiplyError",
    "StrassenError",
    "MAX_DIM",
    "multiply",
    "multiply_naive",
    "multiply_parallel",
]
