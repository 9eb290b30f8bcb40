"""Undo and redo built on whole-project snapshots."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

S = TypeVar("S")


class History(Generic[S]):
    """Keeps undo and redo stacks of snapshots.

    ``snapshot`` captures the current state; ``restore`` puts a captured
    state back.
    """

    def __init__(self, snapshot: Callable[[], S], restore: Callable[[S], None]):
        self._snapshot = snapshot
        self._restore = restore
        self.undo_stack: list[S] = []
        self.redo_stack: list[S] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def checkpoint(self) -> None:
        """Record the current state before a change; forgets redo history."""
        self.undo_stack.append(self._snapshot())
        self.redo_stack.clear()

    def undo(self) -> bool:
        """Step back one change. Returns False when there is nothing to undo."""
        if not self.undo_stack:
            return False
        self.redo_stack.append(self._snapshot())
        self._restore(self.undo_stack[-1])
        self.undo_stack.pop()
        return True

    def redo(self) -> bool:
        """Step forward one change. Returns False when there is nothing to redo."""
        if not self.redo_stack:
            return False
        self.undo_stack.append(self._snapshot())
        self._restore(self.redo_stack[-1])
        self.redo_stack.pop()
        return True

    def clear(self) -> None:
        """Drop all undo and redo history."""
        self.undo_stack.clear()
        self.redo_stack.clear()