"""Input mask patterns compiled into typed slots.

Pattern characters:

    0   digit, shown as ``0`` when empty
    9   digit, blank when empty
    #   digit or sign, blank when empty
    .   decimal separator
    ,   grouping separator, managed by the number format
    -   sign, toggled between ``-`` and blank
    +   sign, toggled between ``-`` and ``+``
    H h hex digit (``0`` filled / blank)
    O o octal digit (``0`` filled / blank)
    D d decimal digit (``0`` filled / blank), not a number
    l   letter
    a   letter or digit
    c   letter, digit or space
    _   any character
    \\x  the literal x

Any other character is a literal separator too.

Digits left of a decimal separator fill right-to-left, digits right of
it fill left-to-right.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from enum import Enum

from pi.text.errors import InvalidMaskPattern
from pi.text.utils import get_segmenter, is_line_break

logger = logging.getLogger(__name__)

_segmenter = get_segmenter()


class EditDirection(Enum):
    LTOR = "ltor"
    RTOL = "rtol"


class MaskKind(Enum):
    DIGIT0 = "0"
    DIGIT = "9"
    NUMERIC = "#"
    DECIMAL_SEP = "."
    GROUPING_SEP = ","
    SIGN = "-"
    PLUS = "+"
    HEX0 = "H"
    HEX = "h"
    OCT0 = "O"
    OCT = "o"
    DEC0 = "D"
    DEC = "d"
    LETTER = "l"
    LETTER_OR_DIGIT = "a"
    LETTER_DIGIT_SPACE = "c"
    ANY_CHAR = "_"
    SEPARATOR = "\\"
    NONE = ""


_DIGITS = (MaskKind.DIGIT0, MaskKind.DIGIT, MaskKind.NUMERIC)
_NUMBER = _DIGITS + (
    MaskKind.DECIMAL_SEP,
    MaskKind.GROUPING_SEP,
    MaskKind.SIGN,
    MaskKind.PLUS,
)
_OTHER = (
    MaskKind.HEX0,
    MaskKind.HEX,
    MaskKind.OCT0,
    MaskKind.OCT,
    MaskKind.DEC0,
    MaskKind.DEC,
    MaskKind.LETTER,
    MaskKind.LETTER_OR_DIGIT,
    MaskKind.LETTER_DIGIT_SPACE,
    MaskKind.ANY_CHAR,
)

_SUB_SECTION = {
    MaskKind.DIGIT0: 0,
    MaskKind.DIGIT: 0,
    MaskKind.NUMERIC: 0,
    MaskKind.GROUPING_SEP: 0,
    MaskKind.SIGN: 1,
    MaskKind.PLUS: 2,
    MaskKind.DECIMAL_SEP: 3,
    MaskKind.HEX0: 4,
    MaskKind.HEX: 4,
    MaskKind.OCT0: 5,
    MaskKind.OCT: 5,
    MaskKind.DEC0: 6,
    MaskKind.DEC: 6,
    MaskKind.LETTER: 7,
    MaskKind.LETTER_OR_DIGIT: 8,
    MaskKind.LETTER_DIGIT_SPACE: 9,
    MaskKind.ANY_CHAR: 10,
    MaskKind.SEPARATOR: 11,
    MaskKind.NONE: 12,
}


@dataclass(frozen=True)
class Mask:
    """One slot kind. Digit kinds carry their fill direction,
    separators their literal text."""

    kind: MaskKind
    direction: EditDirection | None = None
    text: str = ""

    # -- classification -------------------------------------------------

    def is_none(self) -> bool:
        return self.kind is MaskKind.NONE

    def is_separator(self) -> bool:
        return self.kind is MaskKind.SEPARATOR

    def is_number(self) -> bool:
        return self.kind in _NUMBER

    def is_digit(self) -> bool:
        return self.kind in _DIGITS

    def is_rtol(self) -> bool:
        match self.kind:
            case MaskKind.DIGIT0 | MaskKind.DIGIT | MaskKind.NUMERIC:
                return self.direction is EditDirection.RTOL
            case MaskKind.GROUPING_SEP | MaskKind.SIGN | MaskKind.PLUS:
                return True
            case _:
                return False

    def is_ltor(self) -> bool:
        match self.kind:
            case MaskKind.DIGIT0 | MaskKind.DIGIT | MaskKind.NUMERIC:
                return self.direction is EditDirection.LTOR
            case MaskKind.GROUPING_SEP | MaskKind.SIGN | MaskKind.PLUS | MaskKind.NONE:
                return False
            case _:
                return True

    def is_fraction(self) -> bool:
        return self.is_digit() and self.direction is EditDirection.LTOR

    def section(self) -> int:
        if self.kind in _NUMBER:
            return 0
        if self.kind in _OTHER:
            return 1
        if self.kind is MaskKind.SEPARATOR:
            return 2
        return 3

    def sub_section(self) -> int:
        return _SUB_SECTION[self.kind]

    # -- editing rules --------------------------------------------------

    def edit_value(self) -> str:
        """Blank value shown in an empty slot."""
        match self.kind:
            case MaskKind.DIGIT0 | MaskKind.HEX0 | MaskKind.OCT0 | MaskKind.DEC0:
                return "0"
            case MaskKind.DECIMAL_SEP:
                return "."
            case MaskKind.PLUS:
                return "+"
            case MaskKind.SEPARATOR:
                return self.text
            case MaskKind.NONE:
                return ""
            case _:
                return " "

    def can_overwrite_fraction(self, g: str) -> bool:
        """*g* is an empty fraction digit that may be typed over."""
        match self.kind:
            case MaskKind.DIGIT0:
                return g == "0"
            case MaskKind.DIGIT | MaskKind.NUMERIC:
                return g == " "
            case _:
                return False

    def can_overwrite(self, g: str) -> bool:
        """*g* may be replaced in place without shifting neighbours."""
        match self.kind:
            case MaskKind.DECIMAL_SEP:
                return g == "."
            case MaskKind.SIGN:
                return g in ("-", " ")
            case MaskKind.PLUS:
                return g in ("-", "+", " ")
            case MaskKind.HEX0 | MaskKind.OCT0 | MaskKind.DEC0:
                return g == "0"
            case MaskKind.SEPARATOR:
                return g == self.text
            case _:
                return False

    def can_drop(self, g: str) -> bool:
        """*g* is blank and may fall out when the slot run shifts."""
        match self.kind:
            case MaskKind.DIGIT0 | MaskKind.HEX0 | MaskKind.OCT0 | MaskKind.DEC0:
                return g == "0"
            case MaskKind.GROUPING_SEP:
                return True
            case MaskKind.DECIMAL_SEP | MaskKind.SIGN | MaskKind.PLUS | MaskKind.SEPARATOR:
                return False
            case MaskKind.NONE:
                return False
            case _:
                return g == " "

    def pattern(self) -> str:
        """Pattern text that compiles back to this slot."""
        if self.kind is MaskKind.SEPARATOR:
            return "\\" + self.text
        return self.kind.value

    def __str__(self) -> str:
        return self.pattern()


NONE = Mask(MaskKind.NONE)


@dataclass
class MaskToken:
    """A compiled slot with its section bounds.

    ``right`` is the slot itself, ``peek_left`` the slot before it
    (``NONE`` for the first one). Sections and sub-sections are
    half-open index ranges.
    """

    sec_id: int
    sec_start: int
    sec_end: int
    sub_start: int
    sub_end: int
    peek_left: Mask
    right: Mask
    edit: str

    def is_integer_part(self) -> bool:
        return self.peek_left.is_rtol() or (self.peek_left.is_none() and self.right.is_rtol())

    @staticmethod
    def empty_section(tokens: list[MaskToken]) -> str:
        """Blank text for a run of tokens."""
        return "".join(t.edit for t in tokens)


_PATTERN_KINDS = {
    k.value: k for k in MaskKind if k not in (MaskKind.SEPARATOR, MaskKind.NONE)
}


def _slot(g: str, direction: EditDirection) -> Mask:
    kind = _PATTERN_KINDS.get(g)
    if kind is None:
        return Mask(MaskKind.SEPARATOR, text=g)
    if kind in _DIGITS:
        return Mask(kind, direction)
    return Mask(kind)


def _check_literal(g: str, pattern: str) -> None:
    if is_line_break(g) or any(unicodedata.category(ch) == "Cc" for ch in g):
        raise InvalidMaskPattern(f"control character {g!r} in mask {pattern!r}")


def _parse(pattern: str) -> list[Mask]:
    masks: list[Mask] = []
    direction = EditDirection.RTOL
    escaped = False
    for g in _segmenter.iter_segments(pattern):
        if escaped:
            escaped = False
            _check_literal(g, pattern)
            mask = Mask(MaskKind.SEPARATOR, text=g)
        elif g == "\\":
            escaped = True
            continue
        else:
            _check_literal(g, pattern)
            mask = _slot(g, direction)

        if mask.kind is MaskKind.DECIMAL_SEP:
            direction = EditDirection.LTOR
        elif not mask.is_number():
            direction = EditDirection.RTOL
        masks.append(mask)

    if escaped:
        raise InvalidMaskPattern(f"dangling escape at the end of mask {pattern!r}")
    masks.append(NONE)
    return masks


def compile_mask(pattern: str) -> list[MaskToken]:
    """Compile *pattern* into tokens, one per slot plus a terminal ``NONE``."""
    masks = _parse(pattern)

    tokens: list[MaskToken] = []
    sec_id = 0
    sec_start = 0
    sub_start = 0
    last = NONE
    for idx, mask in enumerate(masks):
        if idx and (mask.is_separator() or mask.section() != last.section()):
            for t in tokens[sec_start:idx]:
                t.sec_id, t.sec_start, t.sec_end = sec_id, sec_start, idx
            sec_id += 1
            sec_start = idx
        if idx and (mask.is_separator() or mask.sub_section() != last.sub_section()):
            for t in tokens[sub_start:idx]:
                t.sub_start, t.sub_end = sub_start, idx
            sub_start = idx
        tokens.append(
            MaskToken(
                sec_id=0,
                sec_start=0,
                sec_end=0,
                sub_start=0,
                sub_end=0,
                peek_left=last,
                right=mask,
                edit=mask.edit_value(),
            )
        )
        last = mask

    end = len(tokens)
    for t in tokens[sec_start:]:
        t.sec_id, t.sec_start, t.sec_end = sec_id, sec_start, end
    for t in tokens[sub_start:]:
        t.sub_start, t.sub_end = sub_start, end

    logger.debug("Compiled mask %r into %d slots", pattern, end - 1)
    return tokens


def mask_pattern(tokens: list[MaskToken]) -> str:
    """Pattern text for compiled tokens."""
    return "".join(t.right.pattern() for t in tokens)
