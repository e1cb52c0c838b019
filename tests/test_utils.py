import logging

import pytest

from strassen_lib.utils import resolve_level, validate_matrices


def test_resolve_level_known_names():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("WARNING") == logging.WARNING


def test_resolve_level_unknown_falls_back_to_info():
    assert resolve_level("chatty") == logging.INFO


@pytest.mark.parametrize("a,b", [
    (5, 5),
    ([[1, 2], [3, 4]], 7),
    ("ab", "cd"),
    ({"0": [1]}, [[1]]),
])
def test_validate_matrices_needs_lists(a, b):
    with pytest.raises(ValueError, match="lists of rows"):
        validate_matrices(a, b)


def test_validate_matrices_accepts_square_pair():
    validate_matrices([[1, 2], [3, 4]], [[5, 6], [7, 8]])
