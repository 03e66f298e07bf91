"""Undo history with merging of interactive edit chains.

Every edit carries a ``continuation`` tag:
- continuation=True: provisional edit made mid-gesture (intermediate)
- continuation=False: edit that ends a gesture (close)

A chain of continuation edits on the same target collapses into the entry
that started it, and the next non-continuation edit on that target is folded
into the same entry and closes it. Undoing that entry restores the state
from before the gesture started.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from particlefx.core.curves.exceptions import CurveError

logger = logging.getLogger(__name__)


class CommitKind(str, Enum):
    """Merge classification of an edit."""

    INTERMEDIATE = "intermediate"
    CLOSE = "close"


class UndoableEdit(ABC):
    """An edit that can be executed, undone and redone.

    Attributes:
        target: Hashable identity of the edited thing; only edits with equal
            targets are merged.
        label: Human-readable description for undo menus.
        continuation: True for intermediate edits.
    """

    def __init__(self, target: Hashable, label: str, continuation: bool = False) -> None:
        self.target = target
        self.label = label
        self.continuation = continuation

    @property
    def kind(self) -> CommitKind:
        return CommitKind.INTERMEDIATE if self.continuation else CommitKind.CLOSE

    @abstractmethod
    def execute(self) -> None:
        """Apply the edit for the first time."""

    @abstractmethod
    def undo(self) -> None:
        """Restore the state from before the edit."""

    @abstractmethod
    def redo(self) -> None:
        """Re-apply the edit after an undo."""

    @abstractmethod
    def absorb(self, other: UndoableEdit) -> None:
        """Fold a later edit on the same target into this one.

        After absorbing, undo() restores this edit's before-state and redo()
        applies the other edit's after-state.
        """


class HistoryEventType(str, Enum):
    DONE = "done"
    UNDONE = "undone"
    REDONE = "redone"


@dataclass(frozen=True)
class HistoryEvent:
    """Notification sent to history listeners."""

    type: HistoryEventType
    edit: UndoableEdit
    merged: bool = False


HistoryListener = Callable[[HistoryEvent], None]


@runtime_checkable
class OperationHistory(Protocol):
    """History collaborator used by the curve edit session."""

    def execute(self, edit: UndoableEdit) -> bool:
        """Execute and record an edit. Returns False if it was rejected."""
        ...

    def mark_boundary(self) -> None:
        """End any open merge chain without recording an edit."""
        ...

    def add_listener(self, listener: HistoryListener) -> None: ...

    def remove_listener(self, listener: HistoryListener) -> None: ...


class MergingHistory:
    """Linear undo/redo history that merges continuation chains.

    Example:
        >>> history = MergingHistory()
        >>> for edit in drag_edits:  # three intermediate, one close
        ...     history.execute(edit)
        >>> len(history)
        1
    """

    def __init__(self, limit: int | None = None) -> None:
        self._undo_stack: list[UndoableEdit] = []
        self._redo_stack: list[UndoableEdit] = []
        self._chain_open = False
        self._listeners: list[HistoryListener] = []
        self._limit = limit

    def __len__(self) -> int:
        return len(self._undo_stack)

    @property
    def entries(self) -> tuple[UndoableEdit, ...]:
        return tuple(self._undo_stack)

    @property
    def chain_open(self) -> bool:
        """True while the top entry still accepts merges."""
        return self._chain_open

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def add_listener(self, listener: HistoryListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: HistoryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def execute(self, edit: UndoableEdit) -> bool:
        """Execute an edit and record it, merging where allowed.

        Returns:
            True on success, False if the edit was rejected. A rejected edit
            leaves the history unchanged.
        """
        try:
            edit.execute()
        except CurveError as e:
            logger.error("Failed to execute edit %r: %s", edit.label, e)
            return False

        self._redo_stack.clear()
        top = self._undo_stack[-1] if self._undo_stack and self._chain_open else None
        merged = False
        if top is not None and top.target == edit.target:
            top.absorb(edit)
            merged = True
            self._chain_open = edit.continuation
            logger.debug(
                "Merged %s edit into %r (chain %s)",
                edit.kind.value,
                top.label,
                "open" if self._chain_open else "closed",
            )
        else:
            self._undo_stack.append(edit)
            self._chain_open = edit.continuation
            self._trim()
            logger.debug("Recorded %s edit %r", edit.kind.value, edit.label)

        self._notify(HistoryEvent(HistoryEventType.DONE, edit, merged=merged))
        return True

    def mark_boundary(self) -> None:
        if self._chain_open:
            logger.debug("Merge chain closed without a close edit")
        self._chain_open = False

    def undo(self) -> UndoableEdit | None:
        """Undo the top entry. Returns it, or None when there is nothing to undo."""
        if not self._undo_stack:
            return None
        edit = self._undo_stack.pop()
        edit.undo()
        self._redo_stack.append(edit)
        self._chain_open = False
        self._notify(HistoryEvent(HistoryEventType.UNDONE, edit))
        return edit

    def redo(self) -> UndoableEdit | None:
        """Redo the last undone entry. Returns it, or None when there is nothing to redo."""
        if not self._redo_stack:
            return None
        edit = self._redo_stack.pop()
        edit.redo()
        self._undo_stack.append(edit)
        self._chain_open = False
        self._notify(HistoryEvent(HistoryEventType.REDONE, edit))
        return edit

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._chain_open = False

    def _trim(self) -> None:
        if self._limit is not None and len(self._undo_stack) > self._limit:
            del self._undo_stack[: len(self._undo_stack) - self._limit]

    def _notify(self, event: HistoryEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
