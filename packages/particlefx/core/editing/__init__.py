"""Interactive curve editing: session, property model and undo history."""

from particlefx.core.editing.history import (
    CommitKind,
    HistoryEvent,
    HistoryEventType,
    MergingHistory,
    OperationHistory,
    UndoableEdit,
)
from particlefx.core.editing.property_model import (
    CurveSnapshot,
    InMemoryPropertyModel,
    PropertyDesc,
    PropertyEdit,
    PropertyModel,
    PropertyRejectedError,
    UnknownPropertyError,
)
from particlefx.core.editing.session import (
    CurveCommitError,
    CurveEditSession,
    DragHandle,
    PointRef,
    SessionState,
)
from particlefx.core.editing.view_state import (
    CurveViewEntry,
    curve_color,
    curve_property_ids,
    derive_curve_view,
)

__all__ = [
    "CommitKind",
    "CurveCommitError",
    "CurveEditSession",
    "CurveSnapshot",
    "CurveViewEntry",
    "DragHandle",
    "HistoryEvent",
    "HistoryEventType",
    "InMemoryPropertyModel",
    "MergingHistory",
    "OperationHistory",
    "PointRef",
    "PropertyDesc",
    "PropertyEdit",
    "PropertyModel",
    "PropertyRejectedError",
    "SessionState",
    "UndoableEdit",
    "UnknownPropertyError",
    "curve_color",
    "curve_property_ids",
    "derive_curve_view",
]
