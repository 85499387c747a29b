"""Grapheme views and a bidirectional cursor over them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from pi.text.types import ByteRange
from pi.text.utils import byte_len, get_segmenter, is_line_break, is_whitespace_char

_segmenter = get_segmenter()


@dataclass(frozen=True)
class Grapheme:
    """One extended grapheme cluster and its bytes in the whole buffer."""

    text: str
    text_bytes: ByteRange

    def is_whitespace(self) -> bool:
        return is_whitespace_char(self.text)

    def is_line_break(self) -> bool:
        return is_line_break(self.text)

    def __str__(self) -> str:
        return self.text


class GraphemeCursor:
    """Cursor that sits between two graphemes of a text slice.

    ``next()`` returns the grapheme after the cursor and moves past it,
    ``prev()`` returns the grapheme before the cursor and moves back.
    Both return ``None`` at the ends of the slice. Segmentation runs
    lazily and only as far forward as the cursor has been.
    """

    def __init__(self, text: str, base: int = 0, offset: int = 0) -> None:
        self._base = base
        self._source = _segmenter.iter_segments(text)
        self._items: list[Grapheme] = []
        self._scanned = base
        self._index = 0
        while self._scanned < base + offset and self._pull():
            self._index += 1

    def _pull(self) -> bool:
        g = next(self._source, None)
        if g is None:
            return False
        end = self._scanned + byte_len(g)
        self._items.append(Grapheme(g, ByteRange(self._scanned, end)))
        self._scanned = end
        return True

    @property
    def text_offset(self) -> int:
        """Absolute byte offset of the cursor."""
        if self._index < len(self._items):
            return self._items[self._index].text_bytes.start
        if self._items and self._index == len(self._items):
            return self._items[-1].text_bytes.end
        return self._base

    def next(self) -> Grapheme | None:
        if self._index == len(self._items) and not self._pull():
            return None
        g = self._items[self._index]
        self._index += 1
        return g

    def prev(self) -> Grapheme | None:
        if self._index == 0:
            return None
        self._index -= 1
        return self._items[self._index]

    def peek_next(self) -> Grapheme | None:
        g = self.next()
        if g is not None:
            self._index -= 1
        return g

    def peek_prev(self) -> Grapheme | None:
        if self._index == 0:
            return None
        return self._items[self._index - 1]

    def __iter__(self) -> Iterator[Grapheme]:
        return self

    def __next__(self) -> Grapheme:
        g = self.next()
        if g is None:
            raise StopIteration
        return g
