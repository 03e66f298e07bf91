"""Math utilities for common operations."""

from __future__ import annotations

import math


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def normalize_direction(dx: float, dy: float) -> tuple[float, float]:
    """Scale (dx, dy) to unit length; a zero vector becomes (1, 0)."""
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return 1.0, 0.0
    return dx / length, dy / length
