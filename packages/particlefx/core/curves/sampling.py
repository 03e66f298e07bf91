"""Curve sampling for view and export consumers.

This module provides uniform sampling grids over the normalized time domain
and vectorized evaluation of splines and property values on those grids.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from particlefx.core.curves.spline import HermiteSpline
from particlefx.core.curves.value_spread import ValueSpread


def sample_uniform_grid(n: int, endpoint: bool = True) -> np.ndarray:
    """Generate N evenly-spaced samples over the normalized domain.

    Args:
        n: Number of samples to generate. Must be >= 2.
        endpoint: If True the grid covers [0, 1], otherwise [0, 1).

    Returns:
        Array of N evenly-spaced positions.

    Raises:
        ValueError: If n < 2.

    Example:
        >>> sample_uniform_grid(5).tolist()
        [0.0, 0.25, 0.5, 0.75, 1.0]
        >>> sample_uniform_grid(4, endpoint=False).tolist()
        [0.0, 0.25, 0.5, 0.75]
    """
    if n < 2:
        raise ValueError("n must be >= 2")
    return np.linspace(0.0, 1.0, n, endpoint=endpoint)


def sample_spline(spline: HermiteSpline, n: int) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate a spline on a uniform [0, 1] grid.

    Returns:
        Tuple of (positions, values).
    """
    xs = sample_uniform_grid(n)
    return xs, spline.sample(xs)


def sample_value_spread(value_spread: ValueSpread, n: int) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate a property value on a uniform [0, 1] grid.

    Non-animated values produce a flat line at ``value``.
    """
    xs = sample_uniform_grid(n)
    if value_spread.animated:
        return xs, value_spread.curve.sample(xs)
    return xs, np.full_like(xs, value_spread.value)


def value_range(value_spread: ValueSpread, n: int = 64) -> tuple[float, float]:
    """Approximate (min, max) of a property value including its spread.

    Used to frame a curve view around every visible curve.
    """
    _, ys = sample_value_spread(value_spread, n)
    spread = abs(value_spread.spread)
    return float(ys.min()) - spread, float(ys.max()) + spread


def frame_values(
    value_spreads: Iterable[ValueSpread],
    margin: float = 1.0,
    n: int = 64,
) -> tuple[float, float]:
    """Value bounds framing several property values at once.

    The union of every value_range() is scaled about its center by margin.
    A flat union spans one unit around its center; no values frame [0, 1].

    Example:
        >>> frame_values([ValueSpread.constant(2.0, spread=1.0)], margin=1.5)
        (0.5, 3.5)
    """
    ranges = [value_range(vs, n) for vs in value_spreads]
    if not ranges:
        return 0.0, 1.0
    low = min(r[0] for r in ranges)
    high = max(r[1] for r in ranges)
    center = (low + high) / 2.0
    half = (high - low) / 2.0 or 0.5
    return center - half * margin, center + half * margin
