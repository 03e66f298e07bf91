"""Shared pytest fixtures for curve editing tests."""

from __future__ import annotations

import pytest

from particlefx.core.curves.models import ControlPoint
from particlefx.core.curves.spline import HermiteSpline
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.history import MergingHistory
from particlefx.core.editing.property_model import InMemoryPropertyModel, PropertyDesc
from particlefx.core.editing.session import CurveEditSession


def _animated(*points: tuple[float, float, float, float]) -> ValueSpread:
    spline = HermiteSpline(
        [ControlPoint(x=x, y=y, tangent_x=tx, tangent_y=ty) for x, y, tx, ty in points]
    )
    return ValueSpread(value=spline.point_at(0).y, animated=True, curve=spline)


@pytest.fixture
def emitter() -> InMemoryPropertyModel:
    """Emitter with three animated curves, a constant and a plain property.

    Curve list order: size, alpha, locked. ``locked`` is read-only.
    """
    descs = [
        PropertyDesc(id="size", name="Size"),
        PropertyDesc(id="alpha", name="Alpha"),
        PropertyDesc(id="speed", name="Speed"),
        PropertyDesc(id="locked", name="Locked", editable=False),
        PropertyDesc(id="name", name="Name"),
    ]
    values = {
        "size": _animated(
            (0.0, 0.0, 1.0, 0.0),
            (0.25, 0.5, 1.0, 0.0),
            (0.5, 1.0, 1.0, 0.0),
            (1.0, 0.0, 1.0, 0.0),
        ),
        "alpha": _animated((0.0, 0.0, 1.0, 1.0), (1.0, 1.0, 1.0, 1.0)),
        "speed": ValueSpread.constant(3.0, spread=0.5),
        "locked": _animated((0.0, 0.0, 1.0, 0.0), (0.5, 1.0, 1.0, 0.0), (1.0, 0.0, 1.0, 0.0)),
        "name": "Emitter",
    }
    return InMemoryPropertyModel("emitter", descs, values)


@pytest.fixture
def other_model() -> InMemoryPropertyModel:
    """Second entity with a single animated curve."""
    return InMemoryPropertyModel(
        "other",
        [PropertyDesc(id="size", name="Size")],
        {"size": _animated((0.0, 2.0, 1.0, 0.0), (1.0, 4.0, 1.0, 0.0))},
    )


@pytest.fixture
def history() -> MergingHistory:
    return MergingHistory()


@pytest.fixture
def session(history: MergingHistory, emitter: InMemoryPropertyModel) -> CurveEditSession:
    """Session bound to the emitter."""
    s = CurveEditSession(history)
    s.bind(emitter)
    return s
