"""Tests for derived curve view state."""

from __future__ import annotations

import pytest

from particlefx.core.config.models import CurveEditorConfig
from particlefx.core.editing.property_model import InMemoryPropertyModel
from particlefx.core.editing.view_state import (
    curve_color,
    curve_property_ids,
    derive_curve_view,
)


class TestCurvePropertyIds:
    """Tests for curve_property_ids."""

    def test_only_animated_values(self, emitter: InMemoryPropertyModel) -> None:
        """Constants and plain properties are not curves."""
        assert curve_property_ids(emitter) == ("size", "alpha", "locked")

    def test_no_model(self) -> None:
        assert curve_property_ids(None) == ()


class TestCurveColor:
    """Tests for curve_color."""

    def test_first_color(self) -> None:
        assert curve_color(0, 2) == (178, 27, 27)

    def test_colors_are_distinct(self) -> None:
        colors = [curve_color(i, 6) for i in range(6)]
        assert len(set(colors)) == 6

    def test_color_depends_on_count(self) -> None:
        """The same index gets a different hue when the list grows."""
        assert curve_color(1, 2) != curve_color(1, 3)

    def test_channels_in_range(self) -> None:
        for i in range(30):
            assert all(0 <= c <= 255 for c in curve_color(i, 30))

    @pytest.mark.parametrize("index, count", [(-1, 3), (3, 3), (0, 0)])
    def test_bad_index(self, index: int, count: int) -> None:
        with pytest.raises(ValueError):
            curve_color(index, count)


class TestDeriveCurveView:
    """Tests for derive_curve_view."""

    def test_entries(self, emitter: InMemoryPropertyModel) -> None:
        entries = derive_curve_view(emitter, {"alpha"})
        assert [(e.index, e.property_id, e.name, e.visible) for e in entries] == [
            (0, "size", "Size", True),
            (1, "alpha", "Alpha", False),
            (2, "locked", "Locked", True),
        ]
        assert entries[0].color == curve_color(0, 3)

    def test_config_palette(self, emitter: InMemoryPropertyModel) -> None:
        config = CurveEditorConfig(palette_size=4, hue_saturation=1.0, hue_brightness=1.0)
        entries = derive_curve_view(emitter, set(), config)
        assert entries[1].color == curve_color(1, 3, palette_size=4, saturation=1.0, brightness=1.0)

    def test_no_model(self) -> None:
        assert derive_curve_view(None, set()) == ()
