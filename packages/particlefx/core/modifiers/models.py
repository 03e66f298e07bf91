"""Persisted particle modifier descriptions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from particlefx.core.curves.models import SplinePoint


class ModifierType(str, Enum):
    """Kinds of particle modifiers."""

    ACCELERATION = "acceleration"
    DRAG = "drag"
    RADIAL = "radial"
    VORTEX = "vortex"


class ModifierKey(str, Enum):
    """Animated modifier properties."""

    MAGNITUDE = "magnitude"
    MAX_DISTANCE = "max_distance"


class ModifierPropertyDesc(BaseModel):
    """Persisted animated property of a modifier.

    Attributes:
        key: Which property this is.
        points: Persisted spline points, at least one.
        spread: Runtime random spread.
    """

    model_config = ConfigDict(extra="forbid")

    key: ModifierKey
    points: list[SplinePoint] = Field(..., min_length=1)
    spread: float = 0.0


class ModifierDesc(BaseModel):
    """Persisted modifier.

    Example:
        >>> desc = ModifierDesc(
        ...     type=ModifierType.DRAG,
        ...     properties=[ModifierPropertyDesc(key="magnitude", points=[{"x": 0, "y": 1}])],
        ... )
        >>> desc.property_for(ModifierKey.MAGNITUDE).points[0].y
        1.0
    """

    model_config = ConfigDict(extra="forbid")

    type: ModifierType
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    properties: list[ModifierPropertyDesc] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_unique_keys(self) -> ModifierDesc:
        keys = [p.key for p in self.properties]
        if len(keys) != len(set(keys)):
            raise ValueError("ModifierDesc.properties must not repeat a key")
        return self

    def property_for(self, key: ModifierKey) -> ModifierPropertyDesc | None:
        for prop in self.properties:
            if prop.key == key:
                return prop
        return None
