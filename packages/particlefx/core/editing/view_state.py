"""Derived view state for the multi-curve editor.

Everything here is a pure function of the ordered property list of the
selected entity and the set of hidden curve ids. Nothing is cached; callers
recompute after each change.
"""

from __future__ import annotations

import colorsys
from collections.abc import Collection
from dataclasses import dataclass

from particlefx.core.config.models import CurveEditorConfig
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.property_model import PropertyModel


@dataclass(frozen=True)
class CurveViewEntry:
    """One row of the curve list.

    Attributes:
        index: Position in the curve list.
        property_id: Id of the animated property.
        name: Display name.
        color: RGB color, 0-255 per channel.
        visible: False when hidden; hidden curves ignore gestures.
    """

    index: int
    property_id: str
    name: str
    color: tuple[int, int, int]
    visible: bool


def curve_property_ids(model: PropertyModel | None) -> tuple[str, ...]:
    """Ids of the animated curve properties of a model, in declaration order."""
    if model is None:
        return ()
    ids: list[str] = []
    for desc in model.property_descs():
        value = model.get_value(desc.id)
        if isinstance(value, ValueSpread) and value.is_animated():
            ids.append(desc.id)
    return tuple(ids)


def curve_color(
    index: int,
    count: int,
    palette_size: int = 24,
    saturation: float = 0.85,
    brightness: float = 0.7,
) -> tuple[int, int, int]:
    """Color for the index-th of count curves.

    Curves are spread evenly over a palette of palette_size hues, so a few
    curves get clearly different colors.

    Example:
        >>> curve_color(0, 2)
        (178, 27, 27)
    """
    if count <= 0 or not 0 <= index < count:
        raise ValueError(f"Curve index {index} out of range for {count} curves")
    slot = (index * palette_size) // count % palette_size
    hue = slot / (palette_size - 1.0)
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, saturation, brightness)
    return round(r * 255), round(g * 255), round(b * 255)


def derive_curve_view(
    model: PropertyModel | None,
    hidden: Collection[str],
    config: CurveEditorConfig | None = None,
) -> tuple[CurveViewEntry, ...]:
    """Build the curve list for a model and a set of hidden curve ids."""
    config = config or CurveEditorConfig()
    ids = curve_property_ids(model)
    if model is None or not ids:
        return ()
    names = {desc.id: desc.name for desc in model.property_descs()}
    return tuple(
        CurveViewEntry(
            index=i,
            property_id=pid,
            name=names[pid],
            color=curve_color(
                i,
                len(ids),
                palette_size=config.palette_size,
                saturation=config.hue_saturation,
                brightness=config.hue_brightness,
            ),
            visible=pid not in hidden,
        )
        for i, pid in enumerate(ids)
    )
