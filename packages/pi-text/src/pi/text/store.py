"""Common interface of the text stores.

A store owns the characters of one buffer and converts between
positions (grapheme column + line), byte offsets into the UTF-8
encoding of the whole buffer, and grapheme views.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from pi.text.errors import InvalidRange
from pi.text.grapheme import Grapheme, GraphemeCursor
from pi.text.types import ByteRange, PositionLike, TextPosition, TextRange


class TextStore(ABC):
    """Abstract text store. Subclasses implement the primitives."""

    # -- primitives -----------------------------------------------------

    @abstractmethod
    def is_multi_line(self) -> bool: ...

    @abstractmethod
    def len_lines(self) -> int: ...

    @abstractmethod
    def len_bytes(self) -> int: ...

    @abstractmethod
    def line_width(self, row: int) -> int:
        """Graphemes in *row*, not counting its line break."""

    @abstractmethod
    def line_at(self, row: int) -> str:
        """Text of *row* including its line break."""

    @abstractmethod
    def string(self) -> str: ...

    @abstractmethod
    def set_string(self, text: str) -> None: ...

    @abstractmethod
    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        """Bytes of the grapheme at *pos*; empty at the end of a line."""

    @abstractmethod
    def byte_to_pos(self, byte: int) -> TextPosition: ...

    @abstractmethod
    def str_slice_byte(self, byte_range: ByteRange) -> str: ...

    @abstractmethod
    def graphemes_byte(self, byte_range: ByteRange, byte: int) -> GraphemeCursor: ...

    @abstractmethod
    def insert_char(self, pos: PositionLike, c: str) -> tuple[TextRange, ByteRange]: ...

    @abstractmethod
    def insert_str(self, pos: PositionLike, text: str) -> tuple[TextRange, ByteRange]: ...

    @abstractmethod
    def remove(self, text_range: TextRange) -> tuple[str, tuple[TextRange, ByteRange]]: ...

    # -- derived --------------------------------------------------------

    def byte_range(self, text_range: TextRange) -> ByteRange:
        return ByteRange(
            self.byte_range_at(text_range.start).start,
            self.byte_range_at(text_range.end).start,
        )

    def bytes_to_range(self, byte_range: ByteRange) -> TextRange:
        start, end = byte_range
        if start > end:
            raise InvalidRange(f"byte range {start}..{end} is reversed")
        return TextRange(self.byte_to_pos(start), self.byte_to_pos(end))

    def str_slice(self, text_range: TextRange) -> str:
        return self.str_slice_byte(self.byte_range(text_range))

    def graphemes(self, text_range: TextRange, pos: PositionLike) -> GraphemeCursor:
        """Grapheme cursor limited to *text_range*, positioned at *pos*."""
        pos = TextPosition.of(pos)
        if not text_range.start <= pos <= text_range.end:
            raise InvalidRange(f"{pos} is outside {text_range}")
        return self.graphemes_byte(self.byte_range(text_range), self.byte_range_at(pos).start)

    def line_graphemes(self, row: int) -> GraphemeCursor:
        """Grapheme cursor over *row*, line break included."""
        start = self.byte_range_at((0, row)).start
        end = start + len(self.line_at(row).encode("utf-8"))
        return self.graphemes_byte(ByteRange(start, end), start)

    def grapheme_at(self, pos: PositionLike) -> Grapheme | None:
        byte_range = self.byte_range_at(pos)
        if byte_range.is_empty():
            return None
        return Grapheme(self.str_slice_byte(byte_range), byte_range)

    def lines(self) -> Iterator[str]:
        for row in range(self.len_lines()):
            yield self.line_at(row)

    def __str__(self) -> str:
        return self.string()
