"""Linear undo/redo log of the player's cell edits."""

from __future__ import annotations
import logging
from typing import List, NamedTuple, Optional

from ..core.board import MathdokuBoard

logger = logging.getLogger(__name__)


class Edit(NamedTuple):
    """A cell edit; value 0 records a clear."""
    row: int
    col: int
    value: int


class EditHistory:
    """
    Ordered log of edits with a cursor on the most recently applied one.

    The cursor is -1 when nothing is applied. After an undo, redo stays
    available until a new edit is recorded; that new edit discards every
    logged edit past the cursor, so the log never branches.
    """

    def __init__(self):
        self.edits: List[Edit] = []
        self.cursor = -1
        self.redo_available = False

    def __len__(self) -> int:
        return len(self.edits)

    def record(self, row: int, col: int, value: int) -> Edit:
        """
        Append an edit right after the cursor and move the cursor onto it.

        Edits that were undone before this call become unreachable.
        """
        self.cancel_redo()
        edit = Edit(row, col, value)
        self.edits.insert(self.cursor + 1, edit)
        self.cursor += 1
        return edit

    def can_undo(self) -> bool:
        return self.cursor != -1

    def can_redo(self) -> bool:
        return self.redo_available and self.cursor < len(self.edits) - 1

    def undo(self, board: MathdokuBoard) -> Optional[Edit]:
        """
        Revert the edit at the cursor on the board.

        A value edit is reverted by clearing the cell. A clear is reverted
        by restoring the value of the nearest earlier edit of the same cell.

        Returns:
            The reverted edit, or None if there was nothing to undo.
        """
        if not self.can_undo():
            return None

        edit = self.edits[self.cursor]
        if edit.value != 0:
            board.clear(edit.row, edit.col)
        else:
            board.set(edit.row, edit.col, self._previous_value(edit.row, edit.col))

        self.redo_available = True
        self.cursor -= 1
        logger.debug("Undo %s", edit)
        return edit

    def redo(self, board: MathdokuBoard) -> Optional[Edit]:
        """
        Re-apply the edit after the cursor.

        Returns:
            The re-applied edit, or None if redo is not possible.
        """
        if not self.can_redo():
            return None

        self.cursor += 1
        edit = self.edits[self.cursor]
        board.set(edit.row, edit.col, edit.value)

        if self.cursor == len(self.edits) - 1:
            self.redo_available = False
        logger.debug("Redo %s", edit)
        return edit

    def cancel_redo(self) -> None:
        """Make redo unavailable and drop every edit past the cursor."""
        if self.redo_available:
            self.redo_available = False
            del self.edits[self.cursor + 1:]

    def clear(self) -> None:
        """Forget every edit."""
        self.edits.clear()
        self.cursor = -1
        self.redo_available = False

    def _previous_value(self, row: int, col: int) -> int:
        for index in range(self.cursor - 1, -1, -1):
            edit = self.edits[index]
            if edit.row == row and edit.col == col:
                return edit.value
        return 0

    def __repr__(self) -> str:
        return f"EditHistory(edits={len(self.edits)}, cursor={self.cursor})"
