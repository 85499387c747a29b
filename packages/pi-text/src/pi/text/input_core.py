"""Single-line editing core: grapheme buffer, cursor, selection, viewport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pi.text.config import get_text_config
from pi.text.errors import InvalidRange
from pi.text.grapheme import Grapheme, GraphemeCursor
from pi.text.range_map import RangeMap
from pi.text.text_string import TextString
from pi.text.types import ByteRange, TextRange
from pi.text.undo_stack import UndoStack
from pi.text.utils import byte_len, is_whitespace_char, text_width


@dataclass
class _InputState:
    value: str = ""
    cursor: int = 0
    anchor: int = 0
    styles: list[tuple[ByteRange, Any]] = field(default_factory=list)


def _shift(pos: int, start: int, end: int, inserted: int) -> int:
    """Where *pos* lands after ``start..end`` became *inserted* graphemes."""
    if pos < start:
        return pos
    if pos <= end:
        return start + inserted
    return pos + inserted - (end - start)


class InputCore:
    """Grapheme-indexed state of one line of text.

    ``cursor`` and ``anchor`` are grapheme indices; they differ while a
    selection exists. ``offset`` and ``width`` describe the visible
    window and always satisfy ``offset <= cursor <= offset + width``
    after a cursor move or an edit.
    """

    def __init__(self, text: str = "") -> None:
        self._text = TextString(text)
        self._cursor = 0
        self._anchor = 0
        self._offset = 0
        self._width = 0
        self._styles: RangeMap[Any] = RangeMap()
        self._undo: UndoStack[_InputState] = UndoStack()

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text.string()

    def set_text(self, text: str) -> None:
        """Replace the whole value. Clears styles and undo history."""
        self._text.set_string(text)
        self._styles.clear()
        self._undo.clear()
        self._cursor = min(self._cursor, self.len)
        self._anchor = min(self._anchor, self.len)
        self._fix_offset()

    @property
    def len(self) -> int:
        """Length in graphemes."""
        return self._text.width

    def is_empty(self) -> bool:
        return self.len == 0

    # ------------------------------------------------------------------
    # Cursor, selection, viewport
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def anchor(self) -> int:
        return self._anchor

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def width(self) -> int:
        return self._width

    def set_offset(self, offset: int) -> None:
        """Scroll the window. The offset is adjusted so the cursor stays visible."""
        self._offset = max(min(offset, self.len), 0)
        self._fix_offset()

    def set_width(self, width: int) -> None:
        self._width = max(width, 0)
        self._fix_offset()

    def _fix_offset(self) -> None:
        # Scroll back while the rest of the text fits, then bring the cursor in.
        self._offset = max(min(self._offset, self._cursor, self.len - self._width), 0)
        if self._offset + self._width < self._cursor:
            self._offset = self._cursor - self._width

    def set_cursor(self, cursor: int, extend_selection: bool = False) -> bool:
        """Move the cursor, clamped to ``0..len``. Returns True if anything moved."""
        old = (self._cursor, self._anchor, self._offset)
        self._cursor = max(min(cursor, self.len), 0)
        if not extend_selection:
            self._anchor = self._cursor
        self._fix_offset()
        return old != (self._cursor, self._anchor, self._offset)

    def has_selection(self) -> bool:
        return self._anchor != self._cursor

    def selection(self) -> tuple[int, int]:
        """Selected grapheme range as ``(start, end)``."""
        return min(self._cursor, self._anchor), max(self._cursor, self._anchor)

    def set_selection(self, anchor: int, cursor: int) -> bool:
        old = (self._cursor, self._anchor)
        self._anchor = max(min(anchor, self.len), 0)
        self._cursor = max(min(cursor, self.len), 0)
        self._fix_offset()
        return old != (self._cursor, self._anchor)

    def select_all(self) -> bool:
        return self.set_selection(0, self.len)

    def screen_cursor(self) -> int | None:
        """Terminal column of the cursor relative to ``offset``."""
        if not self._offset <= self._cursor <= self._offset + self._width:
            return None
        return text_width(self.str_slice(self._offset, self._cursor))

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    @staticmethod
    def _range(start: int, end: int) -> TextRange:
        return TextRange((start, 0), (end, 0))

    def byte_at(self, pos: int) -> ByteRange:
        """Bytes of the grapheme at *pos*."""
        return self._text.byte_range_at((pos, 0))

    def byte_pos(self, byte: int) -> int:
        """Grapheme index containing *byte*."""
        return self._text.byte_to_pos(byte).column

    def bytes_at_range(self, start: int, end: int) -> ByteRange:
        return self._text.byte_range(self._range(start, end))

    def grapheme_at(self, pos: int) -> Grapheme | None:
        return self._text.grapheme_at((pos, 0))

    def str_slice(self, start: int, end: int) -> str:
        return self._text.str_slice(self._range(start, end))

    def graphemes(self, start: int, end: int, pos: int) -> GraphemeCursor:
        return self._text.graphemes(self._range(start, end), (pos, 0))

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def replace(self, start: int, end: int, text: str) -> bool:
        """Replace graphemes ``start..end`` with *text*.

        Cursor and anchor before *start* stay, inside the range they move
        to the end of the new text, after it they shift by the change in
        length.
        """
        if start > end or start < 0 or end > self.len:
            raise InvalidRange(f"range {start}..{end} outside 0..{self.len}")
        if not text and start == end:
            return False
        if self.str_slice(start, end) == text:
            return False

        self._push_undo()
        old_len = self.len
        removed = self._text.replace(self._range(start, end), text)
        inserted = self.len - old_len + (end - start)

        self._styles.shrink(removed)
        self._styles.expand(ByteRange(removed.start, removed.start + byte_len(text)))

        self._cursor = _shift(self._cursor, start, end, inserted)
        self._anchor = _shift(self._anchor, start, end, inserted)
        self._fix_offset()
        return True

    def insert_char(self, pos: int, c: str) -> bool:
        return self.replace(pos, pos, c)

    def insert_str(self, pos: int, text: str) -> bool:
        return self.replace(pos, pos, text)

    def remove(self, start: int, end: int) -> bool:
        return self.replace(start, end, "")

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def _is_word_break(self, g: str) -> bool:
        return is_whitespace_char(g) or g in get_text_config().word_separators

    def next_word_boundary(self, pos: int) -> int | None:
        """End of the word at or after *pos*. Leading breaks are skipped."""
        if pos < 0 or pos > self.len:
            return None
        it = self.graphemes(0, self.len, pos)
        while (g := it.peek_next()) is not None and self._is_word_break(g.text):
            it.next()
            pos += 1
        while (g := it.peek_next()) is not None and not self._is_word_break(g.text):
            it.next()
            pos += 1
        return pos

    def prev_word_boundary(self, pos: int) -> int | None:
        """Start of the word at or before *pos*. Trailing breaks are skipped."""
        if pos < 0 or pos > self.len:
            return None
        it = self.graphemes(0, self.len, pos)
        while (g := it.peek_prev()) is not None and self._is_word_break(g.text):
            it.prev()
            pos -= 1
        while (g := it.peek_prev()) is not None and not self._is_word_break(g.text):
            it.prev()
            pos -= 1
        return pos

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def add_style(self, byte_range: ByteRange, style: Any) -> None:
        self._styles.add(byte_range, style)

    def remove_style(self, byte_range: ByteRange, style: Any) -> bool:
        return self._styles.remove(byte_range, style)

    def styles_at(self, byte: int) -> list[Any]:
        return self._styles.values_at(byte)

    def styles(self) -> list[tuple[ByteRange, Any]]:
        return list(self._styles)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def _snapshot(self) -> _InputState:
        return _InputState(self.text, self._cursor, self._anchor, list(self._styles))

    def _restore(self, state: _InputState) -> None:
        self._text.set_string(state.value)
        self._styles.set(state.styles)
        self._cursor = min(state.cursor, self.len)
        self._anchor = min(state.anchor, self.len)
        self._fix_offset()

    def _push_undo(self) -> None:
        self._undo.push(self._snapshot())

    def begin_undo_seq(self) -> None:
        self._undo.begin_seq()

    def end_undo_seq(self) -> None:
        self._undo.end_seq()

    def undo(self) -> bool:
        state = self._undo.undo(self._snapshot())
        if state is None:
            return False
        self._restore(state)
        return True

    def redo(self) -> bool:
        state = self._undo.redo(self._snapshot())
        if state is None:
            return False
        self._restore(state)
        return True

    @property
    def undo_stack(self) -> UndoStack[_InputState]:
        return self._undo
