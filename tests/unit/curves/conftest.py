"""Shared pytest fixtures for curve tests."""

from __future__ import annotations

import pytest

from particlefx.core.curves.models import ControlPoint, SplinePoint
from particlefx.core.curves.spline import HermiteSpline


@pytest.fixture
def hump_points() -> list[ControlPoint]:
    """Flat-tangent hump 0 -> 1 -> 0."""
    return [
        ControlPoint(x=0.0, y=0.0, tangent_x=1.0, tangent_y=0.0),
        ControlPoint(x=0.5, y=1.0, tangent_x=1.0, tangent_y=0.0),
        ControlPoint(x=1.0, y=0.0, tangent_x=1.0, tangent_y=0.0),
    ]


@pytest.fixture
def hump_spline(hump_points: list[ControlPoint]) -> HermiteSpline:
    return HermiteSpline(hump_points)


@pytest.fixture
def linear_spline() -> HermiteSpline:
    """Two points with 45 degree tangents; evaluates to y = x."""
    return HermiteSpline(
        [
            ControlPoint(x=0.0, y=0.0, tangent_x=1.0, tangent_y=1.0),
            ControlPoint(x=1.0, y=1.0, tangent_x=1.0, tangent_y=1.0),
        ]
    )


@pytest.fixture
def four_point_spline() -> HermiteSpline:
    return HermiteSpline(
        [
            ControlPoint(x=0.0, y=0.0),
            ControlPoint(x=0.25, y=0.5),
            ControlPoint(x=0.5, y=1.0),
            ControlPoint(x=1.0, y=0.0),
        ]
    )


@pytest.fixture
def hump_records() -> list[SplinePoint]:
    """Persisted form of the hump curve."""
    return [
        SplinePoint(x=0.0, y=0.0, t_x=1.0, t_y=0.0),
        SplinePoint(x=0.5, y=1.0, t_x=1.0, t_y=0.0),
        SplinePoint(x=1.0, y=0.0, t_x=1.0, t_y=0.0),
    ]
