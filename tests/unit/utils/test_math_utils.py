"""Tests for math utility functions."""

from __future__ import annotations

import math

import pytest

from particlefx.core.utils.math import clamp, normalize_direction


def test_clamp_within_range():
    """Test clamping values within range."""
    assert clamp(5, 0, 10) == 5
    assert clamp(0, 0, 10) == 0
    assert clamp(10, 0, 10) == 10


def test_clamp_outside_range():
    assert clamp(-1.5, 0.0, 1.0) == 0.0
    assert clamp(11.5, 0.0, 10.0) == 10.0


def test_normalize_direction_unit_length():
    tx, ty = normalize_direction(3.0, 4.0)
    assert (tx, ty) == pytest.approx((0.6, 0.8))
    assert math.hypot(tx, ty) == pytest.approx(1.0)


def test_normalize_direction_keeps_sign():
    assert normalize_direction(0.0, -2.0) == (0.0, -1.0)


def test_normalize_direction_zero_vector():
    """A zero vector falls back to the flat tangent."""
    assert normalize_direction(0.0, 0.0) == (1.0, 0.0)
