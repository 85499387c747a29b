"""Byte-range annotations that follow edits.

Style or syntax ranges are kept as byte ranges over the buffer. After
every insert or removal the owner rebases them with the byte range the
store reported for that edit.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from pi.text.types import ByteRange

V = TypeVar("V")


def expand_by(inserted: ByteRange, pos: int) -> int:
    """Position *pos* after *inserted* was inserted."""
    if pos < inserted.start:
        return pos
    return pos + inserted.length


def shrink_by(removed: ByteRange, pos: int) -> int:
    """Position *pos* after *removed* was removed."""
    if pos < removed.start:
        return pos
    if pos < removed.end:
        return removed.start
    return pos - removed.length


def expand_range_by(inserted: ByteRange, r: ByteRange) -> ByteRange:
    return ByteRange(expand_by(inserted, r.start), expand_by(inserted, r.end))


def shrink_range_by(removed: ByteRange, r: ByteRange) -> ByteRange:
    return ByteRange(shrink_by(removed, r.start), shrink_by(removed, r.end))


class RangeMap(Generic[V]):
    """Set of ``(ByteRange, value)`` pairs, ordered by range."""

    def __init__(self) -> None:
        self._items: list[tuple[ByteRange, V]] = []

    def add(self, r: ByteRange, value: V) -> None:
        item = (ByteRange(*r), value)
        if r.is_empty() or item in self._items:
            return
        self._items.append(item)
        self._items.sort(key=lambda it: (it[0].start, it[0].end))

    def remove(self, r: ByteRange, value: V) -> bool:
        item = (ByteRange(*r), value)
        if item in self._items:
            self._items.remove(item)
            return True
        return False

    def clear(self) -> None:
        self._items.clear()

    def set(self, items: list[tuple[ByteRange, V]]) -> None:
        self.clear()
        for r, value in items:
            self.add(r, value)

    def values_at(self, byte: int) -> list[V]:
        return [value for r, value in self._items if r.contains(byte)]

    def expand(self, inserted: ByteRange) -> None:
        self._items = [(expand_range_by(inserted, r), v) for r, v in self._items]

    def shrink(self, removed: ByteRange) -> None:
        items = []
        for r, v in self._items:
            r = shrink_range_by(removed, r)
            if not r.is_empty():
                items.append((r, v))
        self._items = items

    def __iter__(self) -> Iterator[tuple[ByteRange, V]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
