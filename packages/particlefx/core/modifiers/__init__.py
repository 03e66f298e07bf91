"""Particle modifiers and their editable nodes."""

from particlefx.core.modifiers.models import (
    ModifierDesc,
    ModifierKey,
    ModifierPropertyDesc,
    ModifierType,
)
from particlefx.core.modifiers.nodes import (
    MODIFIER_CONSTRUCTORS,
    ModifierNode,
    UnknownModifierTypeError,
    create_modifier_node,
)

__all__ = [
    "MODIFIER_CONSTRUCTORS",
    "ModifierDesc",
    "ModifierKey",
    "ModifierNode",
    "ModifierPropertyDesc",
    "ModifierType",
    "UnknownModifierTypeError",
    "create_modifier_node",
]
