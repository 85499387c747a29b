"""Error types raised by the text stores and editing cores."""

from __future__ import annotations


class TextError(Exception):
    """Base class for all pi.text errors."""


class _OutOfBounds(TextError, IndexError):
    """An index given by the caller lies outside the buffer."""

    what = "index"

    def __init__(self, given: int, max: int) -> None:
        super().__init__(f"{self.what} {given} out of bounds (max {max})")
        self.given = given
        self.max = max

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.given, self.max) == (other.given, other.max)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.given, self.max))


class RowIndexOutOfBounds(_OutOfBounds):
    what = "row"


class ColumnIndexOutOfBounds(_OutOfBounds):
    what = "column"


class ByteIndexOutOfBounds(_OutOfBounds):
    what = "byte"


class InvalidRange(TextError, ValueError):
    """A range is malformed or does not fit the buffer."""


class InvalidMaskPattern(TextError, ValueError):
    """The mask tokenizer rejected a pattern."""


class InvalidValue(TextError, ValueError):
    """A formatted value could not be parsed back."""
