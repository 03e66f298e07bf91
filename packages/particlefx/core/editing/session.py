"""Interactive curve editing.

The session owns working copies of the animated curve properties of one
selected entity and turns point gestures into property commits:

- add point: one close commit
- drag point or tangent: one intermediate commit per movement, then one
  close commit when the drag ends
- delete points: one close commit per touched curve

Intermediate commits carry continuation=True so the history folds a whole
drag into a single undo entry.

Switching the selected entity during a drag cancels the drag without a close
commit. The last intermediate commit stays as the property's value and the
history is told that the merge chain has ended.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from particlefx.core.config.models import CurveEditorConfig
from particlefx.core.curves.exceptions import CurveError, InvalidEdit
from particlefx.core.curves.models import ControlPoint
from particlefx.core.curves.sampling import frame_values
from particlefx.core.curves.spline import HermiteSpline
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.editing.history import HistoryEvent, OperationHistory
from particlefx.core.editing.property_model import PropertyModel
from particlefx.core.editing.view_state import (
    CurveViewEntry,
    curve_property_ids,
    derive_curve_view,
)
from particlefx.core.utils.logging import get_logger
from particlefx.core.utils.math import clamp, normalize_direction


class CurveCommitError(CurveError):
    """Raised when the history rejects a curve commit.

    The working curve keeps the attempted shape.
    """

    pass


class SessionState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragHandle(str, Enum):
    """Part of a control point being dragged."""

    POINT = "point"
    TANGENT = "tangent"


@dataclass(frozen=True, order=True)
class PointRef:
    """Selection entry: a control point of a curve property."""

    curve_id: str
    index: int


@dataclass
class _Drag:
    ref: PointRef
    handle: DragHandle
    moves: int = 0


class CurveEditSession:
    """Single active curve editing session.

    Example:
        >>> session = CurveEditSession(MergingHistory())
        >>> session.bind(emitter_model)
        >>> session.begin_drag("size", 1)
        >>> session.drag_to(0.4, 2.0)
        >>> session.end_drag()
    """

    def __init__(
        self,
        history: OperationHistory,
        config: CurveEditorConfig | None = None,
    ) -> None:
        self._history = history
        self._config = config or CurveEditorConfig()
        self._model: PropertyModel | None = None
        self._curve_ids: tuple[str, ...] = ()
        self._values: dict[str, ValueSpread] = {}
        self._hidden: set[str] = set()
        self._selection: list[PointRef] = []
        self._drag: _Drag | None = None
        self._log = get_logger(__name__)
        history.add_listener(self._on_history_event)

    def dispose(self) -> None:
        """Detach from the history."""
        self._history.remove_listener(self._on_history_event)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def model(self) -> PropertyModel | None:
        return self._model

    def bind(self, model: PropertyModel | None) -> None:
        """Make model the edited entity, or clear it with None.

        An in-progress drag is cancelled without a close commit.
        """
        if self._drag is not None:
            self.cancel_drag()
        if model is not self._model:
            self._selection = []
        self._model = model
        if model is None:
            self._log = get_logger(__name__)
        else:
            self._log = get_logger(__name__, model_id=model.model_id)
        self.refresh()

    def refresh(self) -> None:
        """Reload working copies and the curve list from the model."""
        self._curve_ids = curve_property_ids(self._model)
        self._values = {}
        if self._model is not None:
            for pid in self._curve_ids:
                self._values[pid] = self._model.get_value(pid)
        self._selection = [ref for ref in self._selection if self._ref_valid(ref)]
        if self._drag is not None and not self._ref_valid(self._drag.ref):
            self._log.warning("Dragged point %s vanished on refresh", self._drag.ref)
            self.cancel_drag()

    def _on_history_event(self, event: HistoryEvent) -> None:
        if self._model is None:
            return
        target = event.edit.target
        if isinstance(target, tuple) and target and target[0] == self._model.model_id:
            self.refresh()

    # ------------------------------------------------------------------
    # View queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self._drag is None else SessionState.DRAGGING

    @property
    def curve_ids(self) -> tuple[str, ...]:
        return self._curve_ids

    def curves(self) -> tuple[CurveViewEntry, ...]:
        return derive_curve_view(self._model, self._hidden, self._config)

    def spline(self, curve_id: str) -> HermiteSpline:
        return self._working(curve_id).curve

    def value(self, curve_id: str) -> ValueSpread:
        return self._working(curve_id)

    def is_enabled(self, curve_id: str) -> bool:
        return curve_id in self._curve_ids and curve_id not in self._hidden

    @property
    def hidden(self) -> frozenset[str]:
        return frozenset(self._hidden)

    def view_bounds(self) -> tuple[float, float]:
        """Value range framing every visible curve, widened by fit_margin."""
        visible = [self._values[pid] for pid in self._curve_ids if pid not in self._hidden]
        return frame_values(visible, margin=self._config.fit_margin)

    # ------------------------------------------------------------------
    # Selection and visibility
    # ------------------------------------------------------------------

    @property
    def selection(self) -> tuple[PointRef, ...]:
        return tuple(self._selection)

    def select(self, refs: Iterable[PointRef]) -> None:
        """Replace the selection; points of hidden or unknown curves are skipped."""
        selected: list[PointRef] = []
        for ref in refs:
            if ref not in selected and self._ref_valid(ref) and ref.curve_id not in self._hidden:
                selected.append(ref)
        self._selection = selected

    def clear_selection(self) -> None:
        self._selection = []

    def set_curve_visible(self, curve_id: str, visible: bool) -> None:
        """Show or hide a curve. Hiding drops its points from the selection."""
        if visible:
            self._hidden.discard(curve_id)
            return
        self._hidden.add(curve_id)
        self._selection = [ref for ref in self._selection if ref.curve_id != curve_id]
        if self._drag is not None and self._drag.ref.curve_id == curve_id:
            self.cancel_drag()

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def add_point(self, curve_id: str, x: float, y: float | None = None) -> PointRef:
        """Insert a control point and commit it.

        New points are always interior: x is clamped to at least
        min_point_spacing inside the first and last point, so the end points
        stay unique. The tangent follows the curve slope at x. When y is None
        the point lands on the curve. The new point becomes the selection.

        Raises:
            InvalidEdit: If the curve is too short to hold another point.
        """
        self._require_idle()
        vs = self._editable(curve_id)
        spline = vs.curve
        x = self._interior_x(spline, x)
        if y is None:
            y = spline.evaluate(x)
        tx, ty = normalize_direction(1.0, spline.slope(x))
        index = spline.insert_point(ControlPoint(x=x, y=y, tangent_x=tx, tangent_y=ty))
        ref = PointRef(curve_id, index)
        self._selection = [ref]
        self._commit(curve_id, intermediate=False)
        return ref

    def begin_drag(self, curve_id: str, index: int, handle: DragHandle = DragHandle.POINT) -> None:
        self._require_idle()
        vs = self._editable(curve_id)
        if not 0 <= index < vs.curve.count():
            raise InvalidEdit(f"Control point index {index} out of range for {curve_id!r}")
        ref = PointRef(curve_id, index)
        if ref not in self._selection:
            self._selection = [ref]
        self._drag = _Drag(ref=ref, handle=handle)
        self._log.debug("Drag started on %s (%s)", ref, handle.value)

    def drag_to(self, x: float, y: float) -> PointRef:
        """Move the dragged point or tangent and commit an intermediate edit.

        Returns:
            The dragged point's reference after re-sorting.
        """
        drag = self._require_drag()
        curve_id = drag.ref.curve_id
        spline = self._working(curve_id).curve
        index = drag.ref.index
        point = spline.point_at(index)

        if drag.handle is DragHandle.TANGENT:
            dx = max(x - point.x, self._config.min_tangent_x)
            tx, ty = normalize_direction(dx, y - point.y)
            new_index = spline.set_point(index, point.with_tangent(tx, ty))
        else:
            new_index = spline.set_point(index, point.moved_to(self._drag_x(spline, index, x), y))

        if new_index != index:
            self._remap_moved(curve_id, index, new_index)
        drag.ref = PointRef(curve_id, new_index)
        drag.moves += 1
        self._commit(curve_id, intermediate=True)
        return drag.ref

    def end_drag(self) -> None:
        """Finish the drag with a close commit.

        A drag without movement ends without committing anything.
        """
        drag = self._require_drag()
        self._drag = None
        if drag.moves == 0:
            return
        self._commit(drag.ref.curve_id, intermediate=False)
        self._log.debug("Drag finished on %s after %d moves", drag.ref, drag.moves)

    def cancel_drag(self) -> None:
        """Drop the drag state without a close commit.

        The last intermediate commit stays in place.
        """
        if self._drag is None:
            return
        self._log.info("Cancelled drag on %s after %d moves", self._drag.ref, self._drag.moves)
        self._drag = None
        self._history.mark_boundary()

    def delete_points(self, refs: Iterable[PointRef] | None = None) -> int:
        """Delete control points, one close commit per touched curve.

        Args:
            refs: Points to delete, defaults to the selection.

        Returns:
            Number of deleted points.

        Raises:
            InvalidEdit: If a curve would lose all its points. Nothing is
                deleted in that case.
        """
        self._require_idle()
        targets = sorted(set(self._selection if refs is None else refs))
        by_curve: dict[str, list[int]] = {}
        for ref in targets:
            vs = self._editable(ref.curve_id)
            if not 0 <= ref.index < vs.curve.count():
                raise InvalidEdit(f"Control point {ref} does not exist")
            by_curve.setdefault(ref.curve_id, []).append(ref.index)

        for curve_id, indices in by_curve.items():
            if len(indices) >= self._working(curve_id).curve.count():
                raise InvalidEdit(f"Cannot delete every control point of {curve_id!r}")

        deleted = 0
        for curve_id, indices in by_curve.items():
            spline = self._working(curve_id).curve
            for index in sorted(indices, reverse=True):
                spline.remove_point(index)
                self._remap_deleted(curve_id, index)
                deleted += 1
            self._commit(curve_id, intermediate=False)
        return deleted

    def delete_point(self, curve_id: str, index: int) -> None:
        self.delete_points([PointRef(curve_id, index)])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, curve_id: str, intermediate: bool) -> None:
        if self._model is None:
            raise InvalidEdit("No property model bound")
        vs = self._values[curve_id]
        vs.set_animated(vs.curve.count() > 1)
        vs.set_value(vs.curve.point_at(0).y)

        edit = self._model.set_value(curve_id, vs, not intermediate)
        edit.continuation = intermediate
        self._log.debug(
            "Committing %s edit on %s.%s", edit.kind.value, self._model.model_id, curve_id
        )
        if not self._history.execute(edit):
            self._log.error("Failed to execute curve edit %r", edit.label)
            raise CurveCommitError(f"History rejected edit {edit.label!r}")

    def _drag_x(self, spline: HermiteSpline, index: int, x: float) -> float:
        last = spline.count() - 1
        span = spline.point_at(last).x - spline.point_at(0).x
        if index == 0 or index == last or span < 2 * self._config.min_point_spacing:
            return spline.point_at(index).x
        return self._interior_x(spline, x)

    def _interior_x(self, spline: HermiteSpline, x: float) -> float:
        spacing = self._config.min_point_spacing
        low = spline.point_at(0).x + spacing
        high = spline.point_at(spline.count() - 1).x - spacing
        if low > high:
            raise InvalidEdit("Curve span is too short for an interior point")
        return clamp(x, low, high)

    def _remap_moved(self, curve_id: str, old: int, new: int) -> None:
        remapped: list[PointRef] = []
        for ref in self._selection:
            i = ref.index
            if ref.curve_id == curve_id:
                if i == old:
                    i = new
                elif old < i <= new:
                    i -= 1
                elif new <= i < old:
                    i += 1
            remapped.append(PointRef(ref.curve_id, i))
        self._selection = remapped

    def _remap_deleted(self, curve_id: str, index: int) -> None:
        remapped: list[PointRef] = []
        for ref in self._selection:
            if ref.curve_id == curve_id:
                if ref.index == index:
                    continue
                if ref.index > index:
                    ref = PointRef(curve_id, ref.index - 1)
            remapped.append(ref)
        self._selection = remapped

    def _working(self, curve_id: str) -> ValueSpread:
        try:
            return self._values[curve_id]
        except KeyError:
            raise InvalidEdit(f"{curve_id!r} is not an animated curve of the bound model") from None

    def _editable(self, curve_id: str) -> ValueSpread:
        vs = self._working(curve_id)
        if curve_id in self._hidden:
            raise InvalidEdit(f"Curve {curve_id!r} is hidden")
        return vs

    def _ref_valid(self, ref: PointRef) -> bool:
        vs = self._values.get(ref.curve_id)
        return vs is not None and 0 <= ref.index < vs.curve.count()

    def _require_idle(self) -> None:
        if self._drag is not None:
            raise InvalidEdit("A drag gesture is in progress")

    def _require_drag(self) -> _Drag:
        if self._drag is None:
            raise InvalidEdit("No drag gesture in progress")
        return self._drag
