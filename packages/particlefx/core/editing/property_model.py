"""Property model collaborator for curve editing.

A property model exposes the editable properties of one selected entity
(an emitter, a modifier, ...). The curve edit session reads values from it
and commits changes through set_value(), which returns an UndoableEdit for
the history to execute.

Curve values are snapshotted in their persisted form, so undo and redo go
through the same codec as loading from disk.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from particlefx.core.curves.codec import decode, encode
from particlefx.core.curves.exceptions import CurveError
from particlefx.core.curves.models import SplinePoint
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.history import UndoableEdit

logger = logging.getLogger(__name__)


class UnknownPropertyError(KeyError):
    """Raised when a property id is not declared on a model."""

    pass


class PropertyRejectedError(CurveError):
    """Raised when the property store refuses a value."""

    pass


class PropertyDesc(BaseModel):
    """Declaration of one editable property.

    Attributes:
        id: Stable property key.
        name: Display name.
        editable: False for properties the store refuses to change.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    editable: bool = True


@runtime_checkable
class PropertyModel(Protocol):
    """Property access used by the curve edit session."""

    model_id: str

    def property_descs(self) -> tuple[PropertyDesc, ...]: ...

    def get_value(self, property_id: str) -> Any: ...

    def set_value(self, property_id: str, value: Any, is_final: bool) -> UndoableEdit: ...


@dataclass(frozen=True)
class CurveSnapshot:
    """Persisted form of a ValueSpread, used as undo state."""

    points: tuple[SplinePoint, ...]
    spread: float

    @classmethod
    def of(cls, value_spread: ValueSpread) -> CurveSnapshot:
        return cls(points=tuple(encode(value_spread)), spread=value_spread.spread)

    def restore(self) -> ValueSpread:
        return decode(self.points, self.spread)


class PropertyEdit(UndoableEdit):
    """Edit replacing one property value on an InMemoryPropertyModel."""

    def __init__(
        self,
        model: InMemoryPropertyModel,
        property_id: str,
        before: Any,
        after: Any,
        continuation: bool = False,
    ) -> None:
        desc = model.property_desc(property_id)
        super().__init__(
            target=(model.model_id, property_id),
            label=f"Set {desc.name}",
            continuation=continuation,
        )
        self.model = model
        self.property_id = property_id
        self.before = before
        self.after = after

    def execute(self) -> None:
        self.model.apply(self.property_id, self.after)

    def undo(self) -> None:
        self.model.apply(self.property_id, self.before)

    def redo(self) -> None:
        self.model.apply(self.property_id, self.after)

    def absorb(self, other: UndoableEdit) -> None:
        if not isinstance(other, PropertyEdit) or other.target != self.target:
            raise TypeError(f"Cannot merge {other!r} into {self!r}")
        self.after = other.after
        self.continuation = other.continuation

    def __repr__(self) -> str:
        return f"PropertyEdit({self.target!r}, {self.kind.value})"


class InMemoryPropertyModel:
    """Dictionary-backed property model.

    get_value() hands out copies, so callers can mutate what they receive
    without touching the stored value until they commit.
    """

    def __init__(
        self,
        model_id: str,
        descs: Iterable[PropertyDesc],
        values: Mapping[str, Any] | None = None,
    ) -> None:
        self.model_id = model_id
        self._descs: dict[str, PropertyDesc] = {d.id: d for d in descs}
        self._values: dict[str, Any] = {}
        for key, value in (values or {}).items():
            self.property_desc(key)
            self._values[key] = value

    def property_descs(self) -> tuple[PropertyDesc, ...]:
        return tuple(self._descs.values())

    def property_desc(self, property_id: str) -> PropertyDesc:
        try:
            return self._descs[property_id]
        except KeyError:
            raise UnknownPropertyError(
                f"Property {property_id!r} not declared on {self.model_id!r}"
            ) from None

    def get_value(self, property_id: str) -> Any:
        self.property_desc(property_id)
        value = self._values.get(property_id)
        if isinstance(value, ValueSpread):
            return value.copy()
        return copy.deepcopy(value)

    def set_value(self, property_id: str, value: Any, is_final: bool) -> PropertyEdit:
        """Build an edit that sets a property; the edit is not executed here."""
        self.property_desc(property_id)
        return PropertyEdit(
            self,
            property_id,
            before=self._snapshot(self._values.get(property_id)),
            after=self._snapshot(value),
            continuation=not is_final,
        )

    def apply(self, property_id: str, state: Any) -> None:
        """Store a snapshotted state. Called by PropertyEdit."""
        desc = self.property_desc(property_id)
        if not desc.editable:
            raise PropertyRejectedError(f"Property {desc.name!r} is read-only")
        if isinstance(state, CurveSnapshot):
            self._values[property_id] = state.restore()
        else:
            self._values[property_id] = copy.deepcopy(state)
        logger.debug("Applied %s.%s", self.model_id, property_id)

    @staticmethod
    def _snapshot(value: Any) -> Any:
        if isinstance(value, ValueSpread):
            return CurveSnapshot.of(value)
        return copy.deepcopy(value)
