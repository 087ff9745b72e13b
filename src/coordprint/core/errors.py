"""Exception types raised by coordprint.

Every error derives from ``CoordprintError`` and from the builtin exception a
caller would naturally catch for the same mistake, so ``except ValueError``
keeps working for code that does not know about this package.
"""
from typing import Optional


class CoordprintError(Exception):
    """Base class for all coordprint errors."""


class PrecisionError(CoordprintError, ValueError):
    """Precision is not a non-negative integer."""


class NonFiniteCoordinateError(CoordprintError, ValueError):
    """A NaN or infinite ordinate reached an output that cannot carry it."""


class WkbError(CoordprintError, ValueError):
    """Malformed or truncated well-known binary."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class UnknownSridError(CoordprintError, LookupError):
    """No spatial reference is known for the SRID."""

    def __init__(self, srid: int):
        self.srid = srid
        super().__init__(f"unknown SRID {srid}")
