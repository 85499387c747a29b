"""Single-line text store backed by a plain string."""

from __future__ import annotations

from pi.text.errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidRange,
    RowIndexOutOfBounds,
)
from pi.text.grapheme import GraphemeCursor
from pi.text.store import TextStore
from pi.text.types import ByteRange, PositionLike, TextPosition, TextRange
from pi.text.utils import byte_len, get_segmenter

_segmenter = get_segmenter()


class TextString(TextStore):
    """Text store for one line. Every position has ``line == 0``.

    Line break characters are kept as ordinary graphemes.
    """

    def __init__(self, text: str = "") -> None:
        self._text = ""
        self._graphemes: list[str] = []
        self._offsets: list[int] = [0]
        self._reindex(text)

    def _reindex(self, text: str) -> None:
        self._text = text
        self._graphemes = _segmenter.segment(text)
        offsets = [0]
        for g in self._graphemes:
            offsets.append(offsets[-1] + byte_len(g))
        self._offsets = offsets

    def is_multi_line(self) -> bool:
        return False

    def len_lines(self) -> int:
        return 1

    def len_bytes(self) -> int:
        return self._offsets[-1]

    @property
    def width(self) -> int:
        """Grapheme count."""
        return len(self._graphemes)

    def line_width(self, row: int) -> int:
        if row != 0:
            raise RowIndexOutOfBounds(row, 0)
        return len(self._graphemes)

    def line_at(self, row: int) -> str:
        if row != 0:
            raise RowIndexOutOfBounds(row, 0)
        return self._text

    def string(self) -> str:
        return self._text

    def set_string(self, text: str) -> None:
        self._reindex(text)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        pos = TextPosition.of(pos)
        if pos.line != 0:
            raise RowIndexOutOfBounds(pos.line, 0)
        if pos.column < 0 or pos.column > len(self._graphemes):
            raise ColumnIndexOutOfBounds(pos.column, len(self._graphemes))
        if pos.column == len(self._graphemes):
            return ByteRange(self.len_bytes(), self.len_bytes())
        return ByteRange(self._offsets[pos.column], self._offsets[pos.column + 1])

    def byte_to_pos(self, byte: int) -> TextPosition:
        if byte < 0 or byte > self.len_bytes():
            raise ByteIndexOutOfBounds(byte, self.len_bytes())
        # Last grapheme start at or before byte.
        lo, hi = 0, len(self._graphemes)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self._offsets[mid] <= byte:
                lo = mid
            else:
                hi = mid - 1
        return TextPosition(lo, 0)

    def str_slice_byte(self, byte_range: ByteRange) -> str:
        start, end = byte_range
        if start > end or start < 0 or end > self.len_bytes():
            raise InvalidRange(f"byte range {start}..{end} outside 0..{self.len_bytes()}")
        try:
            return self._text.encode("utf-8")[start:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidRange(f"byte range {start}..{end} splits a char") from e

    def graphemes_byte(self, byte_range: ByteRange, byte: int) -> GraphemeCursor:
        start, end = byte_range
        if not start <= byte <= end:
            raise InvalidRange(f"byte {byte} is outside {start}..{end}")
        return GraphemeCursor(self.str_slice_byte(byte_range), start, byte - start)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _splice(self, byte_range: ByteRange, text: str) -> None:
        data = self._text.encode("utf-8")
        start, end = byte_range
        self._reindex((data[:start] + text.encode("utf-8") + data[end:]).decode("utf-8"))

    def insert_char(self, pos: PositionLike, c: str) -> tuple[TextRange, ByteRange]:
        return self.insert_str(pos, c)

    def insert_str(self, pos: PositionLike, text: str) -> tuple[TextRange, ByteRange]:
        pos = TextPosition.of(pos)
        byte = self.byte_range_at(pos).start
        old_width = len(self._graphemes)
        self._splice(ByteRange(byte, byte), text)
        end = TextPosition(pos.column + len(self._graphemes) - old_width, 0)
        return TextRange(pos, end), ByteRange(byte, byte + byte_len(text))

    def remove(self, text_range: TextRange) -> tuple[str, tuple[TextRange, ByteRange]]:
        byte_range = self.byte_range(text_range)
        removed = self.str_slice_byte(byte_range)
        self._splice(byte_range, "")
        return removed, (text_range, byte_range)

    def replace(self, text_range: TextRange, text: str) -> ByteRange:
        """Swap *text_range* for *text* in one step. Returns the old bytes."""
        byte_range = self.byte_range(text_range)
        self._splice(byte_range, text)
        return byte_range
