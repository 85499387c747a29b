"""Bounded undo/redo stack with clone-on-push semantics."""

from __future__ import annotations

import copy
import logging
from typing import Generic, TypeVar

from pi.text.config import get_text_config

logger = logging.getLogger(__name__)

S = TypeVar("S")


class UndoStack(Generic[S]):
    """Stores deep clones of state snapshots.

    A snapshot is pushed before each change. Between ``begin_seq()`` and
    the matching ``end_seq()`` only the first push is kept, so a group of
    changes is undone in one step. At most ``undo_count`` snapshots are
    kept; the oldest are dropped first.
    """

    def __init__(self, undo_count: int | None = None) -> None:
        self._undo: list[S] = []
        self._redo: list[S] = []
        self._undo_count = get_text_config().undo_count if undo_count is None else undo_count
        self._seq_depth = 0
        self._seq_pushed = False

    @property
    def undo_count(self) -> int:
        return self._undo_count

    def set_undo_count(self, n: int) -> None:
        self._undo_count = max(n, 0)
        self._trim()

    def begin_seq(self) -> None:
        if self._seq_depth == 0:
            self._seq_pushed = False
        self._seq_depth += 1

    def end_seq(self) -> None:
        self._seq_depth = max(self._seq_depth - 1, 0)

    def push(self, state: S) -> None:
        """Push a deep clone of the given state and forget any redo."""
        if self._seq_depth:
            if self._seq_pushed:
                return
            self._seq_pushed = True
        if self._undo_count == 0:
            return
        self._undo.append(copy.deepcopy(state))
        self._redo.clear()
        self._trim()

    def _trim(self) -> None:
        excess = len(self._undo) - self._undo_count
        if excess > 0:
            logger.debug("Dropping %d undo snapshot(s)", excess)
            del self._undo[:excess]

    def undo(self, current: S) -> S | None:
        """Return the snapshot to restore, remembering *current* for redo."""
        if not self._undo:
            return None
        self._redo.append(copy.deepcopy(current))
        return self._undo.pop()

    def redo(self, current: S) -> S | None:
        """Return the snapshot undone last, remembering *current* for undo."""
        if not self._redo:
            return None
        self._undo.append(copy.deepcopy(current))
        return self._redo.pop()

    def clear(self) -> None:
        """Remove all snapshots."""
        self._undo.clear()
        self._redo.clear()

    @property
    def length(self) -> int:
        return len(self._undo)

    @property
    def redo_length(self) -> int:
        return len(self._redo)
