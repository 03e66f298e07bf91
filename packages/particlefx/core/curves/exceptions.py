"""Exceptions raised by the curve subsystem."""

from __future__ import annotations


class CurveError(Exception):
    """Base class for curve errors."""

    pass


class MalformedCurveData(CurveError, ValueError):
    """Raised when persisted curve data cannot be decoded.

    Covers empty point lists, flat buffers whose length is not a multiple
    of four, NaN/inf coordinates and records with missing fields.
    """

    pass


class InvalidEdit(CurveError):
    """Raised when a structural spline edit would break its invariants.

    The spline is left untouched when this is raised.
    """

    pass
