"""Editable particle property value: a constant or an animated curve plus spread."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from particlefx.core.curves.models import ControlPoint
from particlefx.core.curves.spline import HermiteSpline

if TYPE_CHECKING:
    from particlefx.core.curves.models import SplinePoint


def _flat_curve(value: float) -> HermiteSpline:
    return HermiteSpline([ControlPoint(x=0.0, y=value, tangent_x=1.0, tangent_y=0.0)])


@dataclass
class ValueSpread:
    """Value stored on an editable particle property.

    When ``animated`` is False, ``value`` is authoritative. When it is True,
    the curve is authoritative and ``value`` caches the first knot's y.
    The writers below do not re-check ``animated`` against the knot count;
    the edit session and the codec keep the two consistent.

    Attributes:
        value: Scalar value (or cached first-knot y when animated).
        spread: Random perturbation magnitude applied at runtime.
        animated: True when the curve holds more than one knot.
        curve: Underlying Hermite spline.
    """

    value: float = 0.0
    spread: float = 0.0
    animated: bool = False
    curve: HermiteSpline = field(default_factory=lambda: _flat_curve(0.0))

    @classmethod
    def constant(cls, value: float, spread: float = 0.0) -> ValueSpread:
        """Non-animated value with a single flat knot at x=0."""
        return cls(value=value, spread=spread, animated=False, curve=_flat_curve(value))

    @classmethod
    def from_points(cls, points: Sequence[SplinePoint], spread: float = 0.0) -> ValueSpread:
        """Load from persisted spline points (see codec.decode)."""
        from particlefx.core.curves.codec import decode

        return decode(points, spread)

    def to_points(self) -> list[SplinePoint]:
        """Persisted spline points for this value (see codec.encode)."""
        from particlefx.core.curves.codec import encode

        return encode(self)

    def set_curve(self, curve: HermiteSpline) -> None:
        self.curve = curve

    def set_value(self, value: float) -> None:
        self.value = value

    def set_spread(self, spread: float) -> None:
        self.spread = spread

    def set_animated(self, animated: bool) -> None:
        self.animated = animated

    def is_animated(self) -> bool:
        return self.animated

    def evaluate(self, x: float) -> float:
        """Value at normalized time x, before spread is applied."""
        if self.animated:
            return self.curve.evaluate(x)
        return self.value

    def sample_with_spread(self, x: float, rng: np.random.Generator) -> float:
        """Value at x perturbed uniformly within [-spread, spread]."""
        base = self.evaluate(x)
        if self.spread == 0.0:
            return base
        return base + float(rng.uniform(-self.spread, self.spread))

    def copy(self) -> ValueSpread:
        return ValueSpread(
            value=self.value,
            spread=self.spread,
            animated=self.animated,
            curve=self.curve.copy(),
        )
