"""Masked editing engine.

The buffer always holds exactly one grapheme per mask slot. Numeric
input fills the integer part right-to-left and the fraction part
left-to-right; every structural change reformats the affected
sub-section so grouping separators and blank digits stay consistent.
"""

from __future__ import annotations

import string
from typing import Any

from pi.text.errors import InvalidRange
from pi.text.grapheme import Grapheme, GraphemeCursor
from pi.text.input_core import InputCore
from pi.text.mask_token import Mask, MaskKind, MaskToken, compile_mask, mask_pattern
from pi.text.symbols import NumberSymbols, get_number_symbols
from pi.text.types import ByteRange
from pi.text.utils import get_segmenter

_segmenter = get_segmenter()

_OCT_DIGITS = "01234567"

# Slots hidden by compact rendering while they hold a blank.
_COMPACT_BLANK = (
    MaskKind.NUMERIC,
    MaskKind.DIGIT,
    MaskKind.DECIMAL_SEP,
    MaskKind.GROUPING_SEP,
    MaskKind.HEX,
    MaskKind.OCT,
    MaskKind.DEC,
)

_ZERO_FILLED = (MaskKind.DIGIT0, MaskKind.HEX0, MaskKind.OCT0, MaskKind.DEC0)


class MaskedCore:
    """Editing state for a fixed-shape masked field.

    Wraps an :class:`InputCore` whose text is kept at one grapheme per
    compiled slot. Cursor positions are slot indices; ``len`` is the slot
    count and a cursor equal to ``len`` sits on the terminal token.
    """

    def __init__(self, mask: str = "", symbols: NumberSymbols | None = None) -> None:
        self._value = InputCore()
        self._tokens: list[MaskToken] = compile_mask("")
        self._symbols = symbols
        self.set_mask(mask)

    # ------------------------------------------------------------------
    # Mask
    # ------------------------------------------------------------------

    def set_mask(self, pattern: str) -> None:
        """Compile *pattern* and reset the buffer to its blank value.

        Raises InvalidMaskPattern and keeps the old mask if *pattern* is
        malformed.
        """
        self._tokens = compile_mask(pattern)
        self._value.set_text(self.default_value())
        self.set_default_cursor()

    @property
    def mask(self) -> str:
        return mask_pattern(self._tokens)

    @property
    def tokens(self) -> list[MaskToken]:
        return list(self._tokens)

    @property
    def symbols(self) -> NumberSymbols:
        return self._symbols if self._symbols is not None else get_number_symbols()

    def set_symbols(self, symbols: NumberSymbols | None) -> None:
        self._symbols = symbols

    @property
    def len(self) -> int:
        """Number of slots."""
        return len(self._tokens) - 1

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._value.text

    def set_text(self, text: str) -> None:
        """Replace the buffer without checking it against the mask.

        Short text is padded with blanks, long text truncated to the slot
        count. Clears undo history.
        """
        glyphs = _segmenter.segment(text)[: self.len]
        glyphs.extend(" " * (self.len - len(glyphs)))
        self._value.set_text("".join(glyphs))
        self.set_offset(0)
        self.set_default_cursor()

    def default_value(self) -> str:
        return MaskToken.empty_section(self._tokens)

    def is_empty(self) -> bool:
        return self.text == self.default_value()

    def clear(self) -> bool:
        if self.is_empty():
            return False
        self._value.set_text(self.default_value())
        self.set_offset(0)
        self.set_default_cursor()
        return True

    def replace(self, start: int, end: int, text: str) -> bool:
        """Overwrite slots ``start..end`` with *text* of the same length.

        Cursor and selection stay where they are.
        """
        if _segmenter.count(text) != end - start:
            raise InvalidRange(f"{text!r} does not fill {start}..{end}")
        cursor, anchor = self.cursor, self.anchor
        changed = self._value.replace(start, end, text)
        self._value.set_selection(anchor, cursor)
        return changed

    def rendered(self, symbols: NumberSymbols | None = None, compact: bool = False) -> str:
        """Buffer as displayed, with locale symbols substituted.

        In compact mode blank number slots are left out.
        """
        sym = symbols if symbols is not None else self.symbols
        out: list[str] = []
        for t, g in zip(self._tokens, self._glyphs()):
            kind = t.right.kind
            if compact and g == " ":
                if kind in _COMPACT_BLANK:
                    continue
                if kind is MaskKind.SIGN and sym.positive_sym == " ":
                    continue
            match (kind, g):
                case (MaskKind.NUMERIC | MaskKind.GROUPING_SEP | MaskKind.SIGN | MaskKind.PLUS, "-"):
                    out.append(sym.negative_sym)
                case (MaskKind.DECIMAL_SEP, "."):
                    out.append(sym.decimal_sep)
                case (MaskKind.GROUPING_SEP, ","):
                    out.append(sym.grouping_sep)
                case (MaskKind.SIGN, _):
                    out.append(sym.positive_sym)
                case _:
                    out.append(g)
        return "".join(out)

    def _glyphs(self) -> list[str]:
        return _segmenter.segment(self.text)

    def _g(self, pos: int) -> str:
        g = self._value.grapheme_at(pos)
        return g.text if g is not None else ""

    # ------------------------------------------------------------------
    # Cursor, selection, viewport
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._value.cursor

    @property
    def anchor(self) -> int:
        return self._value.anchor

    @property
    def offset(self) -> int:
        return self._value.offset

    @property
    def width(self) -> int:
        return self._value.width

    def set_offset(self, offset: int) -> None:
        self._value.set_offset(offset)

    def set_width(self, width: int) -> None:
        self._value.set_width(width)

    def set_cursor(self, cursor: int, extend_selection: bool = False) -> bool:
        return self._value.set_cursor(cursor, extend_selection)

    def has_selection(self) -> bool:
        return self._value.has_selection()

    def selection(self) -> tuple[int, int]:
        return self._value.selection()

    def set_selection(self, anchor: int, cursor: int) -> bool:
        return self._value.set_selection(anchor, cursor)

    def select_all(self) -> bool:
        return self._value.select_all()

    def selected_text(self) -> str:
        start, end = self.selection()
        return self._value.str_slice(start, end)

    def screen_cursor(self) -> int | None:
        return self._value.screen_cursor()

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def byte_at(self, pos: int) -> ByteRange:
        return self._value.byte_at(pos)

    def byte_pos(self, byte: int) -> int:
        return self._value.byte_pos(byte)

    def bytes_at_range(self, start: int, end: int) -> ByteRange:
        return self._value.bytes_at_range(start, end)

    def grapheme_at(self, pos: int) -> Grapheme | None:
        return self._value.grapheme_at(pos)

    def str_slice(self, start: int, end: int) -> str:
        return self._value.str_slice(start, end)

    def graphemes(self, start: int, end: int, pos: int) -> GraphemeCursor:
        return self._value.graphemes(start, end, pos)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def section_id(self, cursor: int) -> int:
        return self._tokens[min(max(cursor, 0), self.len)].sec_id

    def _number_cursor(self, start: int, end: int) -> int:
        """Slot after the last integer digit in ``start..end``."""
        for i in range(end - 1, start - 1, -1):
            right = self._tokens[i].right
            if right.is_rtol() and right.is_digit():
                return i + 1
        return start

    def section_cursor(self, cursor: int) -> int | None:
        """Editing position for the section containing *cursor*.

        Numeric sections snap to the end of their integer part, other
        sections to their start. Literals have no editing position.
        """
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        if mask.right.is_number():
            return self._number_cursor(mask.sec_start, mask.sec_end)
        if mask.right.is_separator() or mask.right.is_none():
            return None
        return mask.sec_start

    def next_section_cursor(self, cursor: int) -> int | None:
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        while True:
            if mask.right.is_none():
                return None
            mask = self._tokens[mask.sec_end]
            if mask.right.is_number():
                return self._number_cursor(mask.sec_start, mask.sec_end)
            if mask.right.is_separator():
                continue
            if mask.right.is_none():
                return None
            return mask.sec_start

    def prev_section_cursor(self, cursor: int) -> int | None:
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        while True:
            if mask.sec_start == 0:
                return None
            mask = self._tokens[mask.sec_start - 1]
            if mask.right.is_number():
                return self._number_cursor(mask.sec_start, mask.sec_end)
            if mask.right.is_separator():
                continue
            return mask.sec_start

    def is_section_boundary(self, pos: int) -> bool:
        if pos <= 0 or pos >= len(self._tokens):
            return False
        return self._tokens[pos - 1].sec_id != self._tokens[pos].sec_id

    def section_range(self, cursor: int) -> tuple[int, int] | None:
        """Range of the editable section containing *cursor*."""
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        if mask.right.is_separator() or mask.right.is_none():
            return None
        return mask.sec_start, mask.sec_end

    def next_section_range(self, cursor: int) -> tuple[int, int] | None:
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        while True:
            if mask.right.is_none():
                return None
            mask = self._tokens[mask.sec_end]
            if mask.right.is_separator():
                continue
            if mask.right.is_none():
                return None
            return mask.sec_start, mask.sec_end

    def prev_section_range(self, cursor: int) -> tuple[int, int] | None:
        if cursor < 0 or cursor >= len(self._tokens):
            return None
        mask = self._tokens[cursor]
        while True:
            if mask.sec_start == 0:
                return None
            mask = self._tokens[mask.sec_start - 1]
            if mask.right.is_separator():
                continue
            return mask.sec_start, mask.sec_end

    def set_default_cursor(self) -> None:
        """Put the cursor on the first editable section."""
        pos = self.section_cursor(0)
        if pos is None:
            pos = self.next_section_cursor(0)
        self.set_cursor(pos if pos is not None else 0)

    # ------------------------------------------------------------------
    # Character rules
    # ------------------------------------------------------------------

    def is_valid_char(self, mask: Mask, c: str) -> bool:
        """*c* may be typed into a slot of kind *mask*."""
        sym = self.symbols
        is_sign = c == sym.negative_sym or c == "-"
        match mask.kind:
            case MaskKind.DIGIT0 | MaskKind.DEC0:
                return c in string.digits
            case MaskKind.DIGIT | MaskKind.DEC:
                return c in string.digits or c == " "
            case MaskKind.NUMERIC:
                return c in string.digits or is_sign
            case MaskKind.DECIMAL_SEP:
                return c == sym.decimal_sep
            case MaskKind.GROUPING_SEP:
                return False
            case MaskKind.SIGN | MaskKind.PLUS:
                return is_sign
            case MaskKind.HEX0:
                return c in string.hexdigits
            case MaskKind.HEX:
                return c in string.hexdigits or c == " "
            case MaskKind.OCT0:
                return c in _OCT_DIGITS
            case MaskKind.OCT:
                return c in _OCT_DIGITS or c == " "
            case MaskKind.LETTER:
                return c.isalpha()
            case MaskKind.LETTER_OR_DIGIT:
                return c.isalnum()
            case MaskKind.LETTER_DIGIT_SPACE:
                return c.isalnum() or c == " "
            case MaskKind.ANY_CHAR:
                return True
            case MaskKind.SEPARATOR:
                return c in (".", ",") or (bool(mask.text) and c == mask.text[0])
            case _:
                return False

    def _sub_is_blank(self, mask: MaskToken) -> bool:
        section = self._tokens[mask.sub_start : mask.sub_end]
        return self.str_slice(mask.sub_start, mask.sub_end) == MaskToken.empty_section(section)

    # ------------------------------------------------------------------
    # Cursor search
    # ------------------------------------------------------------------

    def advance_cursor(self, c: str) -> int:
        """First slot at or after the cursor that would accept *c*.

        The buffer and cursor are not touched. Returns the cursor itself
        if no slot accepts *c*.
        """
        start = self.cursor
        mask_c = self._tokens[start]
        pos = start
        while True:
            mask = self._tokens[pos]
            if self._can_insert_integer_left(mask, pos, c):
                break
            if self._can_insert_integer(mask, pos, c):
                break
            if self._can_insert_sign(mask, pos, c):
                break
            if self._can_insert_decimal_sep(mask, c):
                break
            if mask.right.kind is MaskKind.GROUPING_SEP:
                pos += 1
            elif self._can_insert_separator(mask, c):
                break
            elif self._can_move_left_in_fraction(mask_c, mask, pos, c):
                pos -= 1
            elif self._can_insert_fraction(mask_c, mask, c):
                break
            elif self._can_insert_other(mask, c):
                break
            elif mask.right.is_none():
                pos = start
                break
            else:
                pos += 1
        return pos

    def _can_insert_integer_left(self, mask: MaskToken, pos: int, c: str) -> bool:
        if not mask.peek_left.is_rtol():
            return False
        if not (mask.right.is_ltor() or mask.right.is_none()):
            return False
        left = self._tokens[pos - 1]
        if not self.is_valid_char(left.right, c):
            return False
        first = self._tokens[left.sub_start]
        return first.right.can_drop(self._g(left.sub_start))

    def _can_insert_integer(self, mask: MaskToken, pos: int, c: str) -> bool:
        if not mask.right.is_rtol() or not self.is_valid_char(mask.right, c):
            return False
        g = self._g(pos)
        return not mask.right.can_drop(g) and g != "-"

    def _can_insert_sign(self, mask: MaskToken, pos: int, c: str) -> bool:
        if not self.is_valid_char(Mask(MaskKind.SIGN), c):
            return False
        if mask.peek_left.is_number() and (mask.right.is_ltor() or mask.right.is_none()):
            mask = self._tokens[pos - 1]
        if not mask.right.is_number():
            return False
        for i in range(mask.sec_start, mask.sec_end):
            t = self._tokens[i]
            if t.right.kind in (MaskKind.SIGN, MaskKind.PLUS):
                return True
            if t.right.kind is MaskKind.NUMERIC and t.right.is_rtol():
                g = self._g(i)
                return t.right.can_drop(g) or g == "-"
        return False

    def _can_insert_decimal_sep(self, mask: MaskToken, c: str) -> bool:
        return mask.right.kind is MaskKind.DECIMAL_SEP and self.is_valid_char(mask.right, c)

    def _can_insert_separator(self, mask: MaskToken, c: str) -> bool:
        return mask.right.is_separator() and self.is_valid_char(mask.right, c)

    def _can_move_left_in_fraction(self, mask_c: MaskToken, mask: MaskToken, pos: int, c: str) -> bool:
        if not mask.peek_left.is_fraction() or not self.is_valid_char(mask.peek_left, c):
            return False
        if mask_c.is_integer_part():
            return False
        return self._g(pos - 1) == " "

    def _can_insert_fraction(self, mask_c: MaskToken, mask: MaskToken, c: str) -> bool:
        if not mask.right.is_fraction() or not self.is_valid_char(mask.right, c):
            return False
        return not mask_c.is_integer_part()

    def _can_insert_other(self, mask: MaskToken, c: str) -> bool:
        match mask.right.kind:
            case (
                MaskKind.HEX0
                | MaskKind.HEX
                | MaskKind.OCT0
                | MaskKind.OCT
                | MaskKind.DEC0
                | MaskKind.DEC
                | MaskKind.LETTER
                | MaskKind.LETTER_OR_DIGIT
                | MaskKind.LETTER_DIGIT_SPACE
                | MaskKind.ANY_CHAR
            ):
                return self.is_valid_char(mask.right, c)
            case _:
                return False

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------

    def insert_char(self, c: str) -> bool:
        """Type *c* at the cursor. Returns False if no slot there takes it."""
        self._value.begin_undo_seq()
        try:
            return self._insert_char(c)
        finally:
            self._value.end_undo_seq()

    def _insert_char(self, c: str) -> bool:
        cursor = self.cursor
        mask = self._tokens[cursor]

        # Each rule falls through to the next one when it changes nothing.
        if mask.right.is_number() and self._can_insert_sign(mask, cursor, c):
            if self._insert_sign(c):
                return True
        if mask.peek_left.is_number() and (mask.right.is_ltor() or mask.right.is_none()):
            left = self._tokens[cursor - 1]
            if self._can_insert_sign(left, cursor, c) and self._insert_sign(c):
                return True
        if mask.right.is_rtol() and self._insert_rtol(c):
            return True
        left_rtol = mask.peek_left.is_rtol() and (mask.right.is_ltor() or mask.right.is_none())
        if left_rtol and self._insert_rtol(c):
            return True
        if mask.right.is_ltor():
            return self._insert_ltor(c)
        return False

    def _insert_sign(self, c: str) -> bool:
        cursor = self.cursor
        mask = self._tokens[cursor]
        if mask.peek_left.is_number() and (mask.right.is_ltor() or mask.right.is_none()):
            mask = self._tokens[cursor - 1]

        idx = self._sign_slot(mask)
        if idx is None:
            return False

        sym = self.symbols
        if c != sym.negative_sym and c != "-":
            return False

        g = self._g(idx)
        match self._tokens[idx].right.kind:
            case MaskKind.PLUS:
                new = "+" if g == "-" else "-"
            case _:
                new = " " if g == "-" else "-"
        changed = self._value.replace(idx, idx + 1, new)
        self.set_cursor(cursor)
        return changed

    def _sign_slot(self, mask: MaskToken) -> int | None:
        """Slot holding the sign of the section around *mask*."""
        section = range(mask.sec_start, mask.sec_end)
        for i in section:
            if self._tokens[i].right.kind in (MaskKind.SIGN, MaskKind.PLUS):
                return i
        for i in section:
            if self._g(i) in ("-", "+"):
                return i
        for i in reversed(section):
            right = self._tokens[i].right
            if right.kind is MaskKind.NUMERIC and right.is_rtol() and right.can_drop(self._g(i)):
                return i
        return None

    def _insert_rtol(self, c: str) -> bool:
        cursor = self.cursor
        mask = self._tokens[cursor]
        if mask.peek_left.is_rtol() and (mask.right.is_ltor() or mask.right.is_none()):
            mask = self._tokens[cursor - 1]

        first = self._tokens[mask.sub_start]
        if not first.right.can_drop(self._g(mask.sub_start)):
            return False
        if not self.is_valid_char(mask.right, c):
            return False

        self._value.remove(mask.sub_start, mask.sub_start + 1)
        self._value.insert_char(max(cursor - 1, mask.sub_start), c)
        self._reformat(mask.sub_start, mask.sub_end)
        self.set_cursor(cursor)
        return True

    def _insert_ltor(self, c: str) -> bool:
        cursor = self.cursor
        mask = self._tokens[cursor]
        last = self._tokens[mask.sub_end - 1]
        g = self._g(cursor)

        if (
            mask.right.is_fraction()
            and mask.right.can_overwrite_fraction(g)
            and self.is_valid_char(mask.right, c)
        ):
            rest = self._tokens[cursor + 1 : mask.sub_end]
            if self.str_slice(cursor + 1, mask.sub_end) == MaskToken.empty_section(rest):
                self._value.replace(cursor, cursor + 1, c)
                return True

        if mask.right.can_overwrite(g) and self.is_valid_char(mask.right, c):
            if mask.right.is_separator():
                nxt = self.next_section_cursor(cursor)
                return self.set_cursor(nxt if nxt is not None else self.len)
            if mask.right.kind is MaskKind.DECIMAL_SEP:
                return self.set_cursor(cursor + 1)
            self._value.replace(cursor, cursor + 1, c)
            return True

        if last.right.can_drop(self._g(mask.sub_end - 1)) and self.is_valid_char(mask.right, c):
            self._value.remove(mask.sub_end - 1, mask.sub_end)
            self._value.insert_char(cursor, c)
            self._reformat(mask.sub_start, mask.sub_end)
            return True

        return False

    # ------------------------------------------------------------------
    # Remove
    # ------------------------------------------------------------------

    def remove_next(self) -> bool:
        """Delete the slot after the cursor and refill its sub-section."""
        cursor = self.cursor
        if cursor >= self.len:
            return False
        before = (self.text, cursor)
        right = self._tokens[cursor]

        self._value.begin_undo_seq()
        try:
            if right.right.is_rtol():
                first = self._tokens[right.sub_start]
                self._value.remove(cursor, cursor + 1)
                self._value.insert_str(right.sub_start, first.edit)
                self._reformat(right.sub_start, right.sub_end)
                self.set_cursor(cursor + 1)
            else:
                blank = self._sub_is_blank(right)
                last = self._tokens[right.sub_end - 1]
                self._value.remove(cursor, cursor + 1)
                self._value.insert_str(right.sub_end - 1, last.edit)
                self._reformat(right.sub_start, right.sub_end)
                self.set_cursor(right.sub_end if blank else cursor)
        finally:
            self._value.end_undo_seq()
        return before != (self.text, self.cursor)

    def remove_prev(self) -> bool:
        """Delete the slot before the cursor and refill its sub-section."""
        cursor = self.cursor
        if cursor == 0:
            return False
        before = (self.text, cursor)
        left = self._tokens[cursor - 1]

        self._value.begin_undo_seq()
        try:
            if left.right.is_rtol():
                blank = self._sub_is_blank(left)
                first = self._tokens[left.sub_start]
                self._value.remove(cursor - 1, cursor)
                self._value.insert_str(left.sub_start, first.edit)
                self._reformat(left.sub_start, left.sub_end)
                self.set_cursor(left.sub_start if blank else cursor)
            else:
                last = self._tokens[left.sub_end - 1]
                self._value.remove(cursor - 1, cursor)
                self._value.insert_str(left.sub_end - 1, last.edit)
                self._reformat(left.sub_start, left.sub_end)
                self.set_cursor(cursor - 1)
        finally:
            self._value.end_undo_seq()
        return before != (self.text, self.cursor)

    def remove_range(self, start: int, end: int) -> bool:
        """Blank every slot in ``start..end``. Partly covered sub-sections
        keep their remaining characters, shifted toward their fill side."""
        if start > end or start < 0 or end > self.len:
            raise InvalidRange(f"range {start}..{end} outside 0..{self.len}")
        if start == end:
            return False

        self._value.begin_undo_seq()
        try:
            mask = self._tokens[start]
            if mask.sub_start <= start and end <= mask.sub_end:
                self._remove_within(mask, start, end)
                return True

            pos = start
            while pos < end:
                mask = self._tokens[pos]
                if mask.sub_start < start:
                    self._remove_within(mask, start, mask.sub_end)
                elif mask.sub_end > end:
                    self._remove_within(mask, mask.sub_start, end)
                else:
                    self._remove_within(mask, mask.sub_start, mask.sub_end)
                pos = mask.sub_end
        finally:
            self._value.end_undo_seq()
        return True

    def _remove_within(self, mask: MaskToken, start: int, end: int) -> None:
        """Remove ``start..end`` inside the sub-section of *mask* and pad it
        back to size on its fill side."""
        n = end - start
        if mask.right.is_rtol():
            fill = MaskToken.empty_section(self._tokens[mask.sub_start : mask.sub_start + n])
            self._value.remove(start, end)
            self._value.insert_str(mask.sub_start, fill)
        else:
            fill = MaskToken.empty_section(self._tokens[mask.sub_end - n : mask.sub_end])
            self._value.remove(start, end)
            self._value.insert_str(mask.sub_end - n, fill)
        self._reformat(mask.sub_start, mask.sub_end)

    # ------------------------------------------------------------------
    # Reformat
    # ------------------------------------------------------------------

    def _reformat(self, start: int, end: int) -> None:
        """Normalize blanks, zeros and grouping in one sub-section."""
        tokens = self._tokens[start:end]
        if not tokens:
            return
        text = self.str_slice(start, end)
        glyphs = _segmenter.segment(text)

        first = tokens[0].right
        if first.is_rtol():
            if first.kind in (MaskKind.SIGN, MaskKind.PLUS):
                return
            new = _format_integer(tokens, glyphs)
        elif first.is_ltor():
            new = "".join(
                "0" if g == " " and t.right.kind in _ZERO_FILLED else g
                for t, g in zip(tokens, glyphs)
            )
        else:
            return

        if new != text:
            cursor, anchor = self.cursor, self.anchor
            self._value.replace(start, end, new)
            self._value.set_selection(anchor, cursor)

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def add_style(self, byte_range: ByteRange, style: Any) -> None:
        self._value.add_style(byte_range, style)

    def remove_style(self, byte_range: ByteRange, style: Any) -> bool:
        return self._value.remove_style(byte_range, style)

    def styles_at(self, byte: int) -> list[Any]:
        return self._value.styles_at(byte)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def begin_undo_seq(self) -> None:
        self._value.begin_undo_seq()

    def end_undo_seq(self) -> None:
        self._value.end_undo_seq()

    def undo(self) -> bool:
        return self._value.undo()

    def redo(self) -> bool:
        return self._value.redo()


def _format_integer(tokens: list[MaskToken], glyphs: list[str]) -> str:
    """Lay out the digits of an integer sub-section right-aligned.

    Grouping slots show ``,`` only between digits. A ``-`` takes the
    first numeric or grouping slot left of the digits.
    """
    negative = "-" in glyphs
    digits = "".join(g for g in glyphs if g in string.digits)
    stripped = digits.lstrip("0")
    if digits and not stripped:
        stripped = "0"
    digits = stripped

    out: list[str] = []
    for t in reversed(tokens):
        kind = t.right.kind
        if kind is MaskKind.GROUPING_SEP:
            if digits:
                out.append(",")
            elif negative:
                out.append("-")
                negative = False
            else:
                out.append(" ")
        elif digits:
            out.append(digits[-1])
            digits = digits[:-1]
        elif kind is MaskKind.DIGIT0:
            out.append("0")
        elif negative and kind is MaskKind.NUMERIC:
            out.append("-")
            negative = False
        else:
            out.append(" ")
    return "".join(reversed(out))
