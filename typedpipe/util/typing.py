"""
This module contains typing related helpers
that are shared by different modules.
"""

from decimal import Decimal
from fractions import Fraction
from numbers import Real
from typing import Any, TypeGuard, TypeVar

N = TypeVar("N", int, float, Decimal, Fraction)
"""Numeric type variable. Instantiating a numeric generic with any other type is rejected
by static type checkers."""


def is_numeric(val: Any) -> TypeGuard[Real]:
    """Checks that a value is a real number. Booleans are not considered numeric.

    Parameters
    ----------
    val : Any
        The value to be checked

    Returns
    -------
    TypeGuard[Real]
        The type information that `val` is a real number
    """
    if isinstance(val, bool):
        return False
    return isinstance(val, (Real, Decimal))
