"""Cubic Hermite spline over a normalized time domain.

A spline is an ordered list of ControlPoint knots sorted by ascending x.
Between two knots the value follows the cubic Hermite basis; the tangent of
each knot is a direction vector whose slope is scaled by the segment span, so
editing a tangent gives the same shape regardless of how far apart the knots
are. Outside the knot range the value is clamped to the nearest end knot.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Iterable, Sequence

import numpy as np

from particlefx.core.curves.exceptions import InvalidEdit, MalformedCurveData
from particlefx.core.curves.models import ControlPoint


def _hermite(p0: ControlPoint, p1: ControlPoint, x: float) -> float:
    dx = p1.x - p0.x
    if dx <= 0.0:
        return p0.y
    t = (x - p0.x) / dx
    t2 = t * t
    t3 = t2 * t
    h00 = 2.0 * t3 - 3.0 * t2 + 1.0
    h10 = t3 - 2.0 * t2 + t
    h01 = -2.0 * t3 + 3.0 * t2
    h11 = t3 - t2
    return h00 * p0.y + h10 * dx * p0.slope + h01 * p1.y + h11 * dx * p1.slope


def _hermite_slope(p0: ControlPoint, p1: ControlPoint, x: float) -> float:
    dx = p1.x - p0.x
    if dx <= 0.0:
        return 0.0
    t = (x - p0.x) / dx
    t2 = t * t
    d00 = 6.0 * t2 - 6.0 * t
    d10 = 3.0 * t2 - 4.0 * t + 1.0
    d01 = -6.0 * t2 + 6.0 * t
    d11 = 3.0 * t2 - 2.0 * t
    dy_dt = d00 * p0.y + d10 * dx * p0.slope + d01 * p1.y + d11 * dx * p1.slope
    return dy_dt / dx


class HermiteSpline:
    """Ordered set of Hermite knots with interpolation and structural edits.

    Knots are kept sorted by ascending x. Knots sharing an x keep their
    insertion order, a new knot landing after existing knots with the same x.

    Example:
        >>> spline = HermiteSpline([
        ...     ControlPoint(x=0.0, y=0.0),
        ...     ControlPoint(x=0.5, y=1.0),
        ...     ControlPoint(x=1.0, y=0.0),
        ... ])
        >>> spline.evaluate(0.5)
        1.0
    """

    def __init__(self, points: Iterable[ControlPoint]) -> None:
        ordered = sorted(points, key=lambda p: p.x)
        if not ordered:
            raise InvalidEdit("A spline needs at least one control point")
        self._points: list[ControlPoint] = ordered
        self._xs: list[float] = [p.x for p in ordered]

    @classmethod
    def from_flat(cls, data: Sequence[float]) -> HermiteSpline:
        """Build a spline from a flat (x, y, tx, ty, x, y, ...) buffer.

        Args:
            data: Flat coordinate buffer, four floats per knot.

        Returns:
            New spline holding one knot per quadruple.

        Raises:
            MalformedCurveData: If the buffer is empty or its length is not
                a multiple of four.
        """
        if not data or len(data) % 4 != 0:
            raise MalformedCurveData(
                f"Flat spline buffer must hold a positive multiple of 4 floats, got {len(data)}"
            )
        points = [
            ControlPoint(
                x=float(data[i]),
                y=float(data[i + 1]),
                tangent_x=float(data[i + 2]),
                tangent_y=float(data[i + 3]),
            )
            for i in range(0, len(data), 4)
        ]
        return cls(points)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def point_at(self, index: int) -> ControlPoint:
        return self._points[index]

    @property
    def points(self) -> tuple[ControlPoint, ...]:
        return tuple(self._points)

    def evaluate(self, x: float) -> float:
        """Interpolated value at x.

        Values before the first knot return the first knot's y, values after
        the last knot return the last knot's y. Never raises.
        """
        first = self._points[0]
        last = self._points[-1]
        if math.isnan(x) or x <= first.x:
            return first.y
        if x >= last.x:
            return last.y
        i = bisect_right(self._xs, x) - 1
        return _hermite(self._points[i], self._points[i + 1], x)

    def slope(self, x: float) -> float:
        """Derivative dy/dx at x, zero outside the knot range."""
        first = self._points[0]
        last = self._points[-1]
        if math.isnan(x) or x < first.x or x > last.x or len(self._points) == 1:
            return 0.0
        i = min(bisect_right(self._xs, x) - 1, len(self._points) - 2)
        return _hermite_slope(self._points[i], self._points[i + 1], x)

    def sample(self, xs: Sequence[float] | np.ndarray) -> np.ndarray:
        """Evaluate the spline at many positions at once.

        Uses the same clamp and degenerate-segment policy as evaluate().

        Args:
            xs: Positions to evaluate.

        Returns:
            Array of interpolated values, same length as xs.
        """
        x_eval = np.asarray(xs, dtype=float)
        knots_x = np.asarray(self._xs, dtype=float)
        knots_y = np.asarray([p.y for p in self._points], dtype=float)
        slopes = np.asarray([p.slope for p in self._points], dtype=float)

        y_out = np.empty_like(x_eval, dtype=float)
        left_mask = np.isnan(x_eval) | (x_eval <= knots_x[0])
        right_mask = ~left_mask & (x_eval >= knots_x[-1])
        mid_mask = ~(left_mask | right_mask)

        y_out[left_mask] = knots_y[0]
        y_out[right_mask] = knots_y[-1]

        if np.any(mid_mask):
            xm = x_eval[mid_mask]
            idx = np.searchsorted(knots_x, xm, side="right") - 1
            idx = np.clip(idx, 0, len(knots_x) - 2)

            x0 = knots_x[idx]
            h = knots_x[idx + 1] - x0
            safe_h = np.where(h > 0.0, h, 1.0)
            t = (xm - x0) / safe_h

            h00 = 2 * t**3 - 3 * t**2 + 1
            h10 = t**3 - 2 * t**2 + t
            h01 = -2 * t**3 + 3 * t**2
            h11 = t**3 - t**2

            yvals = (
                h00 * knots_y[idx]
                + h10 * h * slopes[idx]
                + h01 * knots_y[idx + 1]
                + h11 * h * slopes[idx + 1]
            )
            y_out[mid_mask] = np.where(h > 0.0, yvals, knots_y[idx])

        return y_out

    def to_flat(self) -> list[float]:
        """Flatten knots into an (x, y, tx, ty, ...) buffer."""
        data: list[float] = []
        for p in self._points:
            data.extend((p.x, p.y, p.tangent_x, p.tangent_y))
        return data

    def copy(self) -> HermiteSpline:
        return HermiteSpline(self._points)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def insert_point(self, point: ControlPoint) -> int:
        """Insert a knot keeping ascending x order.

        Returns:
            Index of the inserted knot.
        """
        index = bisect_right(self._xs, point.x)
        self._points.insert(index, point)
        self._xs.insert(index, point.x)
        return index

    def set_point(self, index: int, point: ControlPoint) -> int:
        """Replace the knot at index.

        A changed x re-sorts the knot, so callers must continue with the
        returned index.

        Returns:
            Index of the knot after the update.

        Raises:
            InvalidEdit: If index is out of range.
        """
        self._check_index(index)
        if point.x == self._xs[index]:
            self._points[index] = point
            return index
        del self._points[index]
        del self._xs[index]
        return self.insert_point(point)

    def remove_point(self, index: int) -> None:
        """Delete the knot at index.

        Raises:
            InvalidEdit: If index is out of range or only one knot is left.
        """
        self._check_index(index)
        if len(self._points) <= 1:
            raise InvalidEdit("Cannot remove the last control point of a spline")
        del self._points[index]
        del self._xs[index]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise InvalidEdit(f"Control point index {index} out of range (count={len(self._points)})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HermiteSpline):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        inner = ", ".join(
            f"({p.x:g}, {p.y:g}, {p.tangent_x:g}, {p.tangent_y:g})" for p in self._points
        )
        return f"HermiteSpline([{inner}])"
