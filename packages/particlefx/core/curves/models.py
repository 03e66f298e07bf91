"""Point models for animated property curves.

This module defines the two point shapes used by the curve subsystem:
- ControlPoint: an in-memory Hermite knot (x, y, tangent direction)
- SplinePoint: the persisted record written to disk and to the engine

Both are immutable. Replacing a knot means building a new point, which keeps
a spline the sole owner of its points.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

# Slope used in place of a vertical tangent (tangent_x == 0).
_MAX_SLOPE = 1.0e6


class ControlPoint(BaseModel):
    """A single knot of a Hermite spline.

    The tangent is stored as a direction vector (tangent_x, tangent_y), not
    as a derivative. The slope used for interpolation is tangent_y / tangent_x.

    Attributes:
        x: Position on the normalized time axis, usually in [0, 1].
        y: Property value at x.
        tangent_x: X component of the tangent direction.
        tangent_y: Y component of the tangent direction.

    Example:
        >>> p = ControlPoint(x=0.5, y=1.0)
        >>> (p.tangent_x, p.tangent_y)
        (1.0, 0.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    x: float
    y: float
    tangent_x: float = 1.0
    tangent_y: float = 0.0

    @property
    def slope(self) -> float:
        """Derivative dy/dx described by the tangent direction."""
        if self.tangent_x == 0.0:
            return math.copysign(_MAX_SLOPE, self.tangent_y)
        return max(-_MAX_SLOPE, min(_MAX_SLOPE, self.tangent_y / self.tangent_x))

    def moved_to(self, x: float, y: float) -> ControlPoint:
        """Return a copy at a new position with the same tangent."""
        return self.model_copy(update={"x": x, "y": y})

    def with_tangent(self, tangent_x: float, tangent_y: float) -> ControlPoint:
        """Return a copy with a new tangent direction."""
        return self.model_copy(update={"tangent_x": tangent_x, "tangent_y": tangent_y})


class SplinePoint(BaseModel):
    """Persisted spline point record.

    Field names follow the on-disk layout (x, y, t_x, t_y). Values keep full
    precision in memory; codec.pack_points() stores them as 32-bit floats.

    Example:
        >>> SplinePoint(x=0.0, y=5.0, t_x=1.0, t_y=0.0).as_tuple()
        (0.0, 5.0, 1.0, 0.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    x: float = Field(..., description="Normalized time")
    y: float = Field(..., description="Value")
    t_x: float = Field(default=1.0, description="Tangent direction x")
    t_y: float = Field(default=0.0, description="Tangent direction y")

    @classmethod
    def from_control_point(cls, point: ControlPoint) -> SplinePoint:
        """Build a record from a knot."""
        return cls(x=point.x, y=point.y, t_x=point.tangent_x, t_y=point.tangent_y)

    def to_control_point(self) -> ControlPoint:
        return ControlPoint(x=self.x, y=self.y, tangent_x=self.t_x, tangent_y=self.t_y)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.t_x, self.t_y)


class CurveDocument(BaseModel):
    """A curve file: persisted points plus spread.

    Example:
        >>> CurveDocument.model_validate({"points": [{"x": 0, "y": 5}]}).spread
        0.0
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    points: list[SplinePoint] = Field(..., min_length=1, description="Persisted points")
    spread: float = Field(default=0.0, description="Runtime random spread")
