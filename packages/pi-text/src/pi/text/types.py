"""Position and range types shared by the stores and cores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class TextPosition:
    """Grapheme column within a line.

    Ordered by line first, then column.
    """

    column: int
    line: int

    def __lt__(self, other: TextPosition) -> bool:
        return (self.line, self.column) < (other.line, other.column)

    def __le__(self, other: TextPosition) -> bool:
        return (self.line, self.column) <= (other.line, other.column)

    def __gt__(self, other: TextPosition) -> bool:
        return (self.line, self.column) > (other.line, other.column)

    def __ge__(self, other: TextPosition) -> bool:
        return (self.line, self.column) >= (other.line, other.column)

    @classmethod
    def of(cls, value: PositionLike) -> TextPosition:
        if isinstance(value, TextPosition):
            return value
        column, line = value
        return cls(column, line)


PositionLike = TextPosition | tuple[int, int]


@dataclass(frozen=True, init=False)
class TextRange:
    """Half-open range of positions. Reversed endpoints are swapped."""

    start: TextPosition
    end: TextPosition

    def __init__(self, start: PositionLike, end: PositionLike) -> None:
        start = TextPosition.of(start)
        end = TextPosition.of(end)
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains_pos(self, pos: TextPosition) -> bool:
        return self.start <= pos < self.end

    def contains(self, other: TextRange) -> bool:
        return self.start <= other.start and other.end <= self.end

    def intersects(self, other: TextRange) -> bool:
        return other.start < self.end and self.start < other.end


class ByteRange(NamedTuple):
    """Half-open byte interval over the UTF-8 encoding of a whole buffer."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, byte: int) -> bool:
        return self.start <= byte < self.end
