"""Editable modifier nodes and the modifier constructor table."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence

from particlefx.core.curves.codec import decode, encode
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.property_model import InMemoryPropertyModel, PropertyDesc
from particlefx.core.modifiers.models import (
    ModifierDesc,
    ModifierKey,
    ModifierPropertyDesc,
    ModifierType,
)

logger = logging.getLogger(__name__)

_KEY_NAMES = {
    ModifierKey.MAGNITUDE: "Magnitude",
    ModifierKey.MAX_DISTANCE: "Max Distance",
}


class UnknownModifierTypeError(KeyError):
    """Raised when no constructor is registered for a modifier type."""

    pass


class ModifierNode(InMemoryPropertyModel):
    """Modifier whose animated properties are editable curves.

    Curve properties are keyed by ModifierKey value; position and rotation
    are plain properties and never show up in the curve list.
    """

    def __init__(
        self,
        model_id: str,
        modifier_type: ModifierType,
        keys: Sequence[ModifierKey],
        desc: ModifierDesc,
    ) -> None:
        descs = [PropertyDesc(id=key.value, name=_KEY_NAMES[key]) for key in keys]
        descs.append(PropertyDesc(id="position", name="Position"))
        descs.append(PropertyDesc(id="rotation", name="Rotation"))

        values: dict[str, object] = {"position": desc.position, "rotation": desc.rotation}
        for key in keys:
            prop = desc.property_for(key)
            if prop is None:
                values[key.value] = ValueSpread.constant(0.0)
            else:
                values[key.value] = decode(prop.points, prop.spread)

        super().__init__(model_id, descs, values)
        self.modifier_type = modifier_type
        self.keys = tuple(keys)

    def to_desc(self) -> ModifierDesc:
        """Persisted description with every curve re-encoded."""
        properties = []
        for key in self.keys:
            vs: ValueSpread = self.get_value(key.value)
            properties.append(
                ModifierPropertyDesc(key=key, points=encode(vs), spread=vs.spread)
            )
        return ModifierDesc(
            type=self.modifier_type,
            position=self.get_value("position"),
            rotation=self.get_value("rotation"),
            properties=properties,
        )


ModifierConstructor = Callable[[str, ModifierDesc], ModifierNode]


def _constructor(modifier_type: ModifierType, *keys: ModifierKey) -> ModifierConstructor:
    def build(model_id: str, desc: ModifierDesc) -> ModifierNode:
        return ModifierNode(model_id, modifier_type, keys, desc)

    return build


MODIFIER_CONSTRUCTORS: dict[ModifierType, ModifierConstructor] = {
    ModifierType.ACCELERATION: _constructor(ModifierType.ACCELERATION, ModifierKey.MAGNITUDE),
    ModifierType.DRAG: _constructor(ModifierType.DRAG, ModifierKey.MAGNITUDE),
    ModifierType.RADIAL: _constructor(
        ModifierType.RADIAL, ModifierKey.MAGNITUDE, ModifierKey.MAX_DISTANCE
    ),
    ModifierType.VORTEX: _constructor(
        ModifierType.VORTEX, ModifierKey.MAGNITUDE, ModifierKey.MAX_DISTANCE
    ),
}


def create_modifier_node(
    desc: ModifierDesc,
    model_id: str | None = None,
    constructors: dict[ModifierType, ModifierConstructor] | None = None,
) -> ModifierNode:
    """Build the editable node for a persisted modifier.

    Args:
        desc: Persisted modifier.
        model_id: Id for the node. Defaults to the modifier type name plus a
            random suffix, so two modifiers of one type never share an id.
        constructors: Constructor table, defaults to MODIFIER_CONSTRUCTORS.

    Raises:
        UnknownModifierTypeError: If the table has no entry for desc.type.
        MalformedCurveData: If a property's points cannot be decoded.
    """
    table = MODIFIER_CONSTRUCTORS if constructors is None else constructors
    try:
        build = table[desc.type]
    except KeyError:
        raise UnknownModifierTypeError(f"No constructor for modifier type {desc.type!r}") from None
    node = build(model_id or f"{desc.type.value}-{uuid.uuid4().hex[:8]}", desc)
    logger.debug("Created %s modifier node %r", desc.type.value, node.model_id)
    return node
