"""Error kinds raised by :mod:`fractus`."""


class FractionError(ArithmeticError):
    """Base class for every failure reported by :class:`fractus.Fraction`."""


class DivisionByZero(FractionError, ZeroDivisionError):
    """A zero denominator was requested, directly or through division."""


class ArithmeticOverflow(FractionError, OverflowError):
    """A numerator or denominator left the bounded integer range."""


class InvalidArgument(FractionError, TypeError):
    """An operand cannot be interpreted as a fraction."""


class InvalidFormat(FractionError, ValueError):
    """Text does not match the ``n`` or ``n/d`` fraction format."""


__all__ = [
    "FractionError",
    "DivisionByZero",
    "ArithmeticOverflow",
    "InvalidArgument",
    "InvalidFormat",
]
