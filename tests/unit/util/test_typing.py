# pylint: disable=missing-docstring
from decimal import Decimal
from fractions import Fraction

import pytest

from typedpipe.util.typing import is_numeric


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, True),
        (1.5, True),
        (Decimal("1.5"), True),
        (Fraction(1, 2), True),
        (True, False),
        ("1", False),
        (None, False),
        (1j, False),
    ],
)
def test_is_numeric(value, expected):
    assert is_numeric(value) is expected
