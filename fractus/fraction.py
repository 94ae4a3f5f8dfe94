"""Exact fractions bounded to the signed 32-bit range, with NumPy interoperability."""
from __future__ import annotations

import logging
import numbers
import operator
import re
from typing import Any, ClassVar, Optional, Tuple

import numpy as np

from .errors import (
    ArithmeticOverflow,
    DivisionByZero,
    FractionError,
    InvalidArgument,
    InvalidFormat,
)

logger = logging.getLogger(__name__)

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_FRACTION_FORMAT = re.compile(r"(?P<num>-?[0-9]+)(?:/(?P<den>[0-9]+))?")


def _checked(value: int, *, operation: str) -> int:
    """Return *value* unchanged, or raise when it leaves ``[INT_MIN, INT_MAX]``."""
    if value < INT_MIN or value > INT_MAX:
        logger.debug("%s produced out-of-range value %d", operation, value)
        raise ArithmeticOverflow(f"{operation} overflows the range [{INT_MIN}, {INT_MAX}]")
    return value


def _checked_power(base: int, power: int, *, operation: str) -> int:
    # |base| >= 2 means base ** 32 is already beyond INT_MAX.
    if abs(base) > 1 and power >= 32:
        logger.debug("%s raised %d to the power %d", operation, base, power)
        raise ArithmeticOverflow(f"{operation} overflows the range [{INT_MIN}, {INT_MAX}]")
    return _checked(base**power, operation=operation)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise InvalidArgument(f"{name} must be an integer, got {type(value)!r}")


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of ``|a|`` and ``|b|``.

    ``gcd(0, k)`` is ``k``; ``gcd(0, 0)`` is ``1`` so that dividing by the
    result is always safe.
    """
    a, b = abs(a), abs(b)
    if a == 0 and b == 0:
        return 1
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple of ``|a|`` and ``|b|``."""
    a, b = abs(a), abs(b)
    larger, smaller = max(a, b), min(a, b)
    if smaller == 0:
        return 0
    return (larger // gcd(larger, smaller)) * smaller


def _normalize(num: int, den: int) -> Tuple[int, int]:
    if den == 0:
        raise DivisionByZero("denominator must be non-zero")
    negative = (num < 0) != (den < 0)
    num, den = abs(num), abs(den)
    if num == 0:
        return 0, 1
    divisor = gcd(num, den)
    num //= divisor
    den //= divisor
    if negative:
        num = -num
    return (
        _checked(num, operation="numerator"),
        _checked(den, operation="denominator"),
    )


def _add(a: "Fraction", b: "Fraction") -> "Fraction":
    common = _checked(lcm(a._denominator, b._denominator), operation="addition")
    left = _checked(a._numerator * (common // a._denominator), operation="addition")
    right = _checked(b._numerator * (common // b._denominator), operation="addition")
    return Fraction(_checked(left + right, operation="addition"), common)


def _sub(a: "Fraction", b: "Fraction") -> "Fraction":
    return _add(a, -b)


def _mul(a: "Fraction", b: "Fraction") -> "Fraction":
    return Fraction(
        _checked(a._numerator * b._numerator, operation="multiplication"),
        _checked(a._denominator * b._denominator, operation="multiplication"),
    )


def _truediv(a: "Fraction", b: "Fraction") -> "Fraction":
    if b._numerator == 0:
        raise DivisionByZero("division by zero")
    return Fraction(
        _checked(a._numerator * b._denominator, operation="division"),
        _checked(a._denominator * b._numerator, operation="division"),
    )


class Fraction:
    """An exact rational number held in lowest terms with a positive denominator.

    Both fields stay inside ``[INT_MIN, INT_MAX]``; any operation that would
    leave that range raises :class:`~fractus.errors.ArithmeticOverflow`.
    Instances are immutable and hashable.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Fraction semantics in NumPy expressions.

    ZERO: ClassVar["Fraction"]
    ONE: ClassVar["Fraction"]

    def __init__(
        self,
        numerator: numbers.Integral = 0,
        denominator: numbers.Integral = 1,
    ) -> None:
        num = _checked(_ensure_int(numerator, name="numerator"), operation="numerator")
        den = _checked(_ensure_int(denominator, name="denominator"), operation="denominator")
        num, den = _normalize(num, den)
        object.__setattr__(self, "_numerator", num)
        object.__setattr__(self, "_denominator", den)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_integer(cls, value: numbers.Integral) -> "Fraction":
        return cls(value, 1)

    @classmethod
    def from_ratio(cls, numerator: numbers.Integral, denominator: numbers.Integral) -> "Fraction":
        """Return ``numerator / denominator`` in lowest terms."""
        return cls(numerator, denominator)

    @classmethod
    def parse(cls, text: str) -> "Fraction":
        """Parse the ``"n"`` or ``"n/d"`` form produced by :func:`str`."""
        return parse(text)

    @classmethod
    def coerce(cls, value: Any) -> "Fraction":
        """Coerce an integer, fraction or fraction string into :class:`Fraction`."""
        if isinstance(value, Fraction):
            return value
        if isinstance(value, numbers.Integral):
            return cls(int(value))
        if isinstance(value, str):
            return parse(value)
        raise InvalidArgument(f"Cannot convert {type(value)!r} to Fraction")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def to_double(self) -> float:
        """Return the nearest float; the conversion is lossy."""
        return self._numerator / self._denominator

    def compare_to(self, other: Any) -> int:
        """Return ``-1``, ``0`` or ``1`` as ``self`` is below, equal to or above *other*.

        ``None`` sorts below every fraction. Integers are compared by value;
        anything else raises :class:`~fractus.errors.InvalidArgument`.
        """
        if other is None:
            return 1
        left, right = self._cross_reduce(self._coerce_scalar(other))
        return (left > right) - (left < right)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self.to_double()

    def __int__(self) -> int:
        quotient = abs(self._numerator) // self._denominator
        return -quotient if self._numerator < 0 else quotient

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._numerator == 0:
            return "0"
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        # Only float presentation types render the decimal value.
        if format_spec[-1] in "eEfFgGn%":
            return format(self.to_double(), format_spec)
        return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    @staticmethod
    def _coerce_scalar(value: Any) -> "Fraction":
        if isinstance(value, Fraction):
            return value
        if isinstance(value, numbers.Integral):
            return Fraction(int(value))
        raise InvalidArgument(f"Cannot interpret {type(value)!r} as Fraction")

    def _binary_operation(self, other: Any, op, *, reflected: bool = False):
        if isinstance(other, np.ndarray):
            if reflected:
                vectorised = np.vectorize(
                    lambda x: op(self._coerce_scalar(x), self), otypes=[object]
                )
            else:
                vectorised = np.vectorize(
                    lambda x: op(self, self._coerce_scalar(x)), otypes=[object]
                )
            return vectorised(other)
        try:
            other_frac = self._coerce_scalar(other)
        except InvalidArgument:
            return NotImplemented
        if reflected:
            return op(other_frac, self)
        return op(self, other_frac)

    def _cross_reduce(self, other: "Fraction") -> Tuple[int, int]:
        common = _checked(lcm(self._denominator, other._denominator), operation="comparison")
        left = _checked(self._numerator * (common // self._denominator), operation="comparison")
        right = _checked(other._numerator * (common // other._denominator), operation="comparison")
        return left, right

    @staticmethod
    def _coerce_power(value: Any) -> Optional[int]:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Fraction):
            if value._denominator != 1:
                raise InvalidArgument("Exponent must be an integer")
            return value._numerator
        return None

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, _add)

    def __radd__(self, other: Any) -> Any:
        return self._binary_operation(other, _add, reflected=True)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, _sub)

    def __rsub__(self, other: Any) -> Any:
        return self._binary_operation(other, _sub, reflected=True)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, _mul)

    def __rmul__(self, other: Any) -> Any:
        return self._binary_operation(other, _mul, reflected=True)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, _truediv)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary_operation(other, _truediv, reflected=True)

    def __pow__(self, exponent: Any) -> Any:
        power = self._coerce_power(exponent)
        if power is None:
            return NotImplemented
        if power >= 0:
            return Fraction(
                _checked_power(self._numerator, power, operation="power"),
                _checked_power(self._denominator, power, operation="power"),
            )
        if self._numerator == 0:
            raise DivisionByZero("0 cannot be raised to a negative power")
        positive = -power
        return Fraction(
            _checked_power(self._denominator, positive, operation="power"),
            _checked_power(self._numerator, positive, operation="power"),
        )

    def __neg__(self) -> "Fraction":
        return Fraction(_checked(-self._numerator, operation="negation"), self._denominator)

    def __pos__(self) -> "Fraction":
        return self

    def __abs__(self) -> "Fraction":
        if self._numerator >= 0:
            return self
        return -self

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op):
        try:
            other_frac = self._coerce_scalar(other)
        except InvalidArgument:
            return NotImplemented
        left, right = self._cross_reduce(other_frac)
        return op(left, right)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, np.ndarray):
            return NotImplemented
        try:
            other_frac = self._coerce_scalar(other)
        except FractionError:
            return False
        return (
            self._numerator == other_frac._numerator
            and self._denominator == other_frac._denominator
        )

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Integral values hash like the int they equal.
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
        np.equal: operator.eq,
        np.not_equal: operator.ne,
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Fraction ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Fraction):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(self._coerce_scalar, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(self._coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


Fraction.ZERO = Fraction(0)
Fraction.ONE = Fraction(1)


def parse(text: str) -> Fraction:
    """Parse ``"n"`` or ``"n/d"`` into a :class:`Fraction`.

    Only an optional leading ``-`` and ASCII digits are accepted; no ``+``,
    whitespace or signed denominator. The ratio form need not be reduced:
    ``"10/4"`` parses to ``5/2``.
    """
    if not isinstance(text, str):
        raise InvalidArgument(f"Cannot parse {type(text)!r} as Fraction")
    match = _FRACTION_FORMAT.fullmatch(text)
    if match is None:
        logger.debug("rejected fraction literal %r", text)
        raise InvalidFormat(f"Invalid literal for Fraction: {text!r}")
    denominator = match.group("den")
    return Fraction(int(match.group("num")), int(denominator) if denominator is not None else 1)


def to_fraction(value: Any) -> Fraction:
    """Public helper to convert *value* into :class:`Fraction`."""

    return Fraction.coerce(value)


__all__ = [
    "Fraction",
    "INT_MIN",
    "INT_MAX",
    "gcd",
    "lcm",
    "parse",
    "to_fraction",
]
