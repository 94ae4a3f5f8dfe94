"""Bounded exact fractions package."""

from .arrays import as_fraction_array, get_array, get_matrix, zeros, zeros_like
from .errors import (
    ArithmeticOverflow,
    DivisionByZero,
    FractionError,
    InvalidArgument,
    InvalidFormat,
)
from .fraction import INT_MAX, INT_MIN, Fraction, gcd, lcm, parse, to_fraction

__all__ = [
    "Fraction",
    "to_fraction",
    "parse",
    "gcd",
    "lcm",
    "INT_MIN",
    "INT_MAX",
    "as_fraction_array",
    "get_array",
    "get_matrix",
    "zeros",
    "zeros_like",
    "FractionError",
    "DivisionByZero",
    "ArithmeticOverflow",
    "InvalidArgument",
    "InvalidFormat",
]
