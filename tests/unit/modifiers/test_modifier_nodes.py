"""Tests for modifier descriptions and nodes."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from particlefx.core.curves.exceptions import MalformedCurveData
from particlefx.core.curves.models import SplinePoint
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.history import MergingHistory
from particlefx.core.editing.session import CurveEditSession
from particlefx.core.modifiers import (
    MODIFIER_CONSTRUCTORS,
    ModifierDesc,
    ModifierKey,
    ModifierNode,
    ModifierPropertyDesc,
    ModifierType,
    UnknownModifierTypeError,
    create_modifier_node,
)


@pytest.fixture
def radial_desc() -> ModifierDesc:
    """Radial modifier with an animated magnitude and no max distance."""
    return ModifierDesc(
        type=ModifierType.RADIAL,
        position=(1.0, 2.0, 0.0),
        properties=[
            ModifierPropertyDesc(
                key=ModifierKey.MAGNITUDE,
                points=[
                    SplinePoint(x=0.0, y=100.0),
                    SplinePoint(x=1.0, y=0.0),
                ],
                spread=5.0,
            )
        ],
    )


class TestModifierDesc:
    """Tests for persisted modifier descriptions."""

    def test_property_for(self, radial_desc: ModifierDesc) -> None:
        assert radial_desc.property_for(ModifierKey.MAGNITUDE) is not None
        assert radial_desc.property_for(ModifierKey.MAX_DISTANCE) is None

    def test_duplicate_keys_rejected(self) -> None:
        prop = {"key": "magnitude", "points": [{"x": 0.0, "y": 1.0}]}
        with pytest.raises(ValidationError):
            ModifierDesc(type="drag", properties=[prop, prop])

    def test_empty_points_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModifierPropertyDesc(key=ModifierKey.MAGNITUDE, points=[])


class TestCreateModifierNode:
    """Tests for the constructor table."""

    def test_every_type_has_a_constructor(self) -> None:
        assert set(MODIFIER_CONSTRUCTORS) == set(ModifierType)

    @pytest.mark.parametrize(
        "modifier_type, keys",
        [
            (ModifierType.ACCELERATION, ("magnitude",)),
            (ModifierType.DRAG, ("magnitude",)),
            (ModifierType.RADIAL, ("magnitude", "max_distance")),
            (ModifierType.VORTEX, ("magnitude", "max_distance")),
        ],
    )
    def test_keys_per_type(self, modifier_type: ModifierType, keys: tuple[str, ...]) -> None:
        node = create_modifier_node(ModifierDesc(type=modifier_type))
        assert isinstance(node, ModifierNode)
        assert tuple(k.value for k in node.keys) == keys
        assert node.model_id.startswith(f"{modifier_type.value}-")

    def test_default_ids_are_unique(self, radial_desc: ModifierDesc) -> None:
        """Two modifiers of one type get different ids, so their edits never merge."""
        first = create_modifier_node(radial_desc)
        second = create_modifier_node(radial_desc)
        assert first.model_id != second.model_id

        history = MergingHistory()
        history.execute(first.set_value("magnitude", ValueSpread.constant(1.0), is_final=False))
        history.execute(second.set_value("magnitude", ValueSpread.constant(2.0), is_final=True))
        assert len(history) == 2
        assert first.get_value("magnitude").value == 1.0

    def test_explicit_id(self, radial_desc: ModifierDesc) -> None:
        assert create_modifier_node(radial_desc, model_id="radial-1").model_id == "radial-1"

    def test_missing_property_is_zero_constant(self, radial_desc: ModifierDesc) -> None:
        node = create_modifier_node(radial_desc, model_id="radial-1")
        max_distance = node.get_value("max_distance")
        assert max_distance.animated is False
        assert max_distance.value == 0.0

    def test_decoded_curve(self, radial_desc: ModifierDesc) -> None:
        magnitude = create_modifier_node(radial_desc).get_value("magnitude")
        assert magnitude.animated is True
        assert magnitude.value == 100.0
        assert magnitude.spread == 5.0
        assert magnitude.evaluate(1.0) == 0.0

    def test_unknown_type(self, radial_desc: ModifierDesc) -> None:
        with pytest.raises(UnknownModifierTypeError):
            create_modifier_node(radial_desc, constructors={})

    def test_non_finite_points(self) -> None:
        """Points that pass the schema but cannot build a spline are reported."""
        desc = ModifierDesc.model_construct(
            type=ModifierType.DRAG,
            position=(0.0, 0.0, 0.0),
            rotation=(0.0, 0.0, 0.0, 1.0),
            properties=[
                ModifierPropertyDesc.model_construct(
                    key=ModifierKey.MAGNITUDE,
                    points=[SplinePoint.model_construct(x=0.0, y=float("nan"), t_x=1.0, t_y=0.0)],
                    spread=0.0,
                )
            ],
        )
        with pytest.raises(MalformedCurveData):
            create_modifier_node(desc)


class TestModifierNode:
    """Tests for editing a modifier through the curve session."""

    def test_only_animated_keys_are_curves(self, radial_desc: ModifierDesc) -> None:
        session = CurveEditSession(MergingHistory())
        session.bind(create_modifier_node(radial_desc))
        assert session.curve_ids == ("magnitude",)

    def test_edit_round_trips_to_desc(self, radial_desc: ModifierDesc) -> None:
        """Edits made in a session are visible in the re-encoded description."""
        node = create_modifier_node(radial_desc)
        session = CurveEditSession(MergingHistory())
        session.bind(node)
        session.add_point("magnitude", 0.5, 20.0)

        desc = node.to_desc()
        magnitude = desc.property_for(ModifierKey.MAGNITUDE)
        assert magnitude is not None
        assert [p.y for p in magnitude.points] == [100.0, 20.0, 0.0]
        assert magnitude.spread == 5.0
        assert desc.property_for(ModifierKey.MAX_DISTANCE).points == [  # type: ignore[union-attr]
            SplinePoint(x=0.0, y=0.0)
        ]
        assert desc.position == (1.0, 2.0, 0.0)
