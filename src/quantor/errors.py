"""
quantor.errors
==============

Exception types raised by quantor.

Every error derives from `QuantityError` and, where it fits, from the builtin
exception that callers would already catch (`ValueError`,
`NotImplementedError`), so code written against plain builtins keeps working.
"""

from __future__ import annotations


class QuantityError(Exception):
    """Base class for all quantor errors."""


class InvalidQuantityError(QuantityError, ValueError):
    """A quantity could not be constructed from the given name, value and coordinates."""


class InvalidArgumentError(QuantityError, ValueError):
    """An operation received arguments it cannot work with (counts, dimensions, indices)."""


class UnsupportedOperationError(QuantityError, NotImplementedError):
    """The requested operation is not available for this kind of data."""


class UnknownUnitError(QuantityError, ValueError):
    """A unit symbol is not known to the registry."""


__all__ = [
    "QuantityError",
    "InvalidQuantityError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "UnknownUnitError",
]
