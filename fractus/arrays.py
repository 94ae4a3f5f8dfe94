"""NumPy object-array factories for :class:`~fractus.fraction.Fraction`."""
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .fraction import Fraction


def _filled(shape, default: Optional[Any]) -> np.ndarray:
    value = Fraction.ZERO if default is None else Fraction.coerce(default)
    array = np.empty(shape, dtype=object)
    # Fractions are immutable, so every cell can share one instance.
    array.fill(value)
    return array


def get_array(length: int, default: Optional[Any] = None) -> np.ndarray:
    """Return a one-dimensional array of ``length`` copies of ``default`` (zero when omitted)."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return _filled(length, default)


def get_matrix(rows: int, columns: int, default: Optional[Any] = None) -> np.ndarray:
    """Return a ``rows`` by ``columns`` array filled with ``default`` (zero when omitted)."""

    if rows < 0 or columns < 0:
        raise ValueError("rows and columns must be non-negative")
    return _filled((rows, columns), default)


def as_fraction_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Fraction` values.

    ``values`` can be any iterable of integers, fractions or fraction strings,
    possibly nested, or an existing NumPy array. When ``copy`` is ``False`` and
    ``values`` is already an object array holding only fractions, the original
    array is returned unchanged.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Fraction) for item in array.flat):
            return array
        vectorised = np.vectorize(Fraction.coerce, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        return as_fraction_array(np.array(values, dtype=object), copy=False)

    return as_fraction_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    return get_array(length)


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    return _filled(np.shape(values), None)


__all__ = [
    "as_fraction_array",
    "get_array",
    "get_matrix",
    "zeros",
    "zeros_like",
]
