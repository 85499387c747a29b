"""Multi-line text store backed by a rope."""

from __future__ import annotations

import logging

from pi.text.errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidRange,
    RowIndexOutOfBounds,
)
from pi.text.grapheme import GraphemeCursor
from pi.text.rope import Rope
from pi.text.store import TextStore
from pi.text.types import ByteRange, PositionLike, TextPosition, TextRange
from pi.text.utils import byte_len, get_segmenter, is_line_break

logger = logging.getLogger(__name__)

_segmenter = get_segmenter()


class TextRope(TextStore):
    """Text store for multi-line text.

    Lines end with ``\\n``, ``\\r\\n`` or a lone ``\\r``. The line break
    is the last grapheme of its line, so column ``line_width(row)``
    addresses the break and ``line_width(row) + 1`` the end of the line.
    """

    def __init__(self, text: str = "") -> None:
        self._rope = Rope(text)

    def is_multi_line(self) -> bool:
        return True

    def len_lines(self) -> int:
        return self._rope.len_lines()

    def len_bytes(self) -> int:
        return self._rope.len_bytes()

    def string(self) -> str:
        return str(self._rope)

    def set_string(self, text: str) -> None:
        logger.debug("Replacing text: %d lines -> %d chars", self.len_lines(), len(text))
        self._rope = Rope(text)

    def _check_row(self, row: int) -> None:
        if row < 0 or row >= self.len_lines():
            raise RowIndexOutOfBounds(row, self.len_lines() - 1)

    def line_at(self, row: int) -> str:
        self._check_row(row)
        return self._rope.line(row)

    def _segments(self, row: int) -> list[str]:
        return _segmenter.segment(self._rope.line(row))

    def line_width(self, row: int) -> int:
        self._check_row(row)
        gs = self._segments(row)
        if gs and is_line_break(gs[-1]):
            return len(gs) - 1
        return len(gs)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        pos = TextPosition.of(pos)
        self._check_row(pos.line)
        gs = self._segments(pos.line)
        if pos.column < 0 or pos.column > len(gs):
            raise ColumnIndexOutOfBounds(pos.column, len(gs))
        offset = self._rope.line_to_byte(pos.line)
        for g in gs[: pos.column]:
            offset += byte_len(g)
        if pos.column == len(gs):
            return ByteRange(offset, offset)
        return ByteRange(offset, offset + byte_len(gs[pos.column]))

    def byte_to_pos(self, byte: int) -> TextPosition:
        if byte < 0 or byte > self.len_bytes():
            raise ByteIndexOutOfBounds(byte, self.len_bytes())
        row = self._rope.byte_to_line(byte)
        offset = self._rope.line_to_byte(row)
        col = 0
        for g in _segmenter.iter_segments(self._rope.line(row)):
            offset += byte_len(g)
            if byte < offset:
                break
            col += 1
        return TextPosition(col, row)

    def str_slice_byte(self, byte_range: ByteRange) -> str:
        start, end = byte_range
        return self._rope.slice(start, end)

    def graphemes_byte(self, byte_range: ByteRange, byte: int) -> GraphemeCursor:
        start, end = byte_range
        if not start <= byte <= end:
            raise InvalidRange(f"byte {byte} is outside {start}..{end}")
        return GraphemeCursor(self._rope.slice(start, end), start, byte - start)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _neighbours(self, pos: TextPosition) -> tuple[str | None, str | None]:
        """Graphemes directly before and after *pos*, across line ends."""
        gs = self._segments(pos.line)
        if pos.column > 0:
            prev = gs[pos.column - 1]
        elif pos.line > 0:
            prev = self._segments(pos.line - 1)[-1]
        else:
            prev = None
        if pos.column < len(gs):
            next_ = gs[pos.column]
        elif pos.line + 1 < self.len_lines():
            following = self._segments(pos.line + 1)
            next_ = following[0] if following else None
        else:
            next_ = None
        return prev, next_

    def _edit_pos(self, pos: PositionLike) -> TextPosition:
        """*pos* with the column past a line break moved to the next line start."""
        pos = TextPosition.of(pos)
        if pos.column > self.line_width(pos.line):
            return self.byte_to_pos(self.byte_range_at(pos).start)
        return pos

    def insert_char(self, pos: PositionLike, c: str) -> tuple[TextRange, ByteRange]:
        """Insert a single char.

        Returns the positions covered by the new char afterwards and its
        bytes. When *c* joins a neighbouring grapheme (a combining mark,
        the missing half of ``\\r\\n``) the position range is empty.
        """
        if len(c) != 1:
            return self.insert_str(pos, c)
        pos = self._edit_pos(pos)
        byte = self.byte_range_at(pos).start
        prev, next_ = self._neighbours(pos)

        if c == "\n":
            if prev == "\r":
                end = pos
            else:
                end = TextPosition(0, pos.line + 1)
        elif c == "\r":
            if next_ == "\n":
                end = pos
            else:
                end = TextPosition(0, pos.line + 1)
        else:
            parts = [g for g in (prev, c, next_) if g is not None]
            if _segmenter.count("".join(parts)) < len(parts):
                end = pos
            else:
                end = TextPosition(pos.column + 1, pos.line)

        self._rope.insert(byte, c)
        return TextRange(pos, end), ByteRange(byte, byte + byte_len(c))

    def insert_str(self, pos: PositionLike, text: str) -> tuple[TextRange, ByteRange]:
        """Insert *text*, returning the covered positions and bytes."""
        pos = self._edit_pos(pos)
        byte = self.byte_range_at(pos).start
        lines_before = self.len_lines()
        old_width = self.line_width(pos.line)

        self._rope.insert(byte, text)

        added = self.len_lines() - lines_before
        if added:
            end_line = pos.line + added
            tail = old_width - pos.column
            end = TextPosition(max(self.line_width(end_line) - tail, 0), end_line)
        else:
            end = TextPosition(pos.column + self.line_width(pos.line) - old_width, pos.line)
        return TextRange(pos, end), ByteRange(byte, byte + byte_len(text))

    def remove(self, text_range: TextRange) -> tuple[str, tuple[TextRange, ByteRange]]:
        """Remove *text_range*, returning the removed text and its extent."""
        byte_range = self.byte_range(text_range)
        removed = self._rope.slice(*byte_range)
        self._rope.remove(*byte_range)
        return removed, (text_range, byte_range)
