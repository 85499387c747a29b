"""Masked input state: keystroke-level editing over MaskedCore."""

from __future__ import annotations

from typing import Any, Callable

from pi.text.errors import InvalidRange, InvalidValue
from pi.text.mask_token import MaskToken
from pi.text.masked_core import MaskedCore
from pi.text.symbols import NumberSymbols
from pi.text.utils import get_segmenter

_segmenter = get_segmenter()


class MaskedInput:
    """Selection-aware editing operations for a masked field.

    Typing first looks for the next slot that accepts the key, so a
    separator or digit typed anywhere in a section lands where it
    belongs. Deleting never changes the shape of the text, it only resets
    slots to their blank value.
    """

    def __init__(self, mask: str = "", symbols: NumberSymbols | None = None) -> None:
        self.value = MaskedCore(mask, symbols)

    # ------------------------------------------------------------------
    # Mask and value
    # ------------------------------------------------------------------

    @property
    def mask(self) -> str:
        return self.value.mask

    def set_mask(self, pattern: str) -> None:
        self.value.set_mask(pattern)

    @property
    def text(self) -> str:
        return self.value.text

    def set_text(self, text: str) -> None:
        self.value.set_text(text)

    @property
    def len(self) -> int:
        return self.value.len

    def is_empty(self) -> bool:
        return self.value.is_empty()

    def clear(self) -> bool:
        return self.value.clear()

    def rendered(self, compact: bool = False) -> str:
        return self.value.rendered(compact=compact)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _section(self, section: int) -> MaskToken:
        for t in self.value.tokens:
            if t.sec_id == section and not t.right.is_none():
                return t
        raise InvalidRange(f"invalid section {section}")

    def section_text(self, section: int) -> str:
        t = self._section(section)
        return self.value.str_slice(t.sec_start, t.sec_end)

    def set_section_text(self, section: int, text: str) -> None:
        """Replace a section, cut or padded with blanks to its width."""
        t = self._section(section)
        width = t.sec_end - t.sec_start
        glyphs = _segmenter.segment(text)[:width]
        glyphs.extend(" " * (width - len(glyphs)))
        self.value.replace(t.sec_start, t.sec_end, "".join(glyphs))

    def section_value(self, section: int, parse: Callable[[str], Any] = int) -> Any:
        """Parse a section with *parse*, ignoring blanks and grouping."""
        text = self.section_text(section).strip().replace(",", "").replace(" ", "")
        try:
            return parse(text)
        except (ValueError, ArithmeticError) as e:
            raise InvalidValue(f"section {section} is not a number: {text!r}") from e

    def set_section_value(self, section: int, value: Any) -> None:
        """Write *value* into a section, right-aligned for numbers."""
        t = self._section(section)
        width = t.sec_end - t.sec_start
        if t.right.is_rtol():
            self.set_section_text(section, str(value).rjust(width))
        else:
            self.set_section_text(section, str(value).ljust(width))

    # ------------------------------------------------------------------
    # Cursor and selection
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self.value.cursor

    @property
    def anchor(self) -> int:
        return self.value.anchor

    def set_cursor(self, cursor: int, extend_selection: bool = False) -> bool:
        return self.value.set_cursor(cursor, extend_selection)

    def has_selection(self) -> bool:
        return self.value.has_selection()

    def selection(self) -> tuple[int, int]:
        return self.value.selection()

    def set_selection(self, anchor: int, cursor: int) -> bool:
        return self.value.set_selection(anchor, cursor)

    def select_all(self) -> bool:
        return self.value.select_all()

    def selected_text(self) -> str:
        return self.value.selected_text()

    def set_width(self, width: int) -> None:
        self.value.set_width(width)

    def screen_cursor(self) -> int | None:
        if self.has_selection():
            return None
        return self.value.screen_cursor()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, c: str) -> bool:
        """Type *c*, first moving to a slot that accepts it."""
        core = self.value
        core.begin_undo_seq()
        try:
            if core.has_selection():
                start, end = core.selection()
                core.remove_range(start, end)
                core.set_cursor(start)
            moved = core.set_cursor(core.advance_cursor(c))
            inserted = core.insert_char(c)
        finally:
            core.end_undo_seq()
        return moved or inserted

    def insert_str(self, text: str) -> bool:
        changed = False
        for c in _segmenter.iter_segments(text):
            changed |= self.insert_char(c)
        return changed

    def delete_range(self, start: int, end: int) -> bool:
        """Reset ``start..end`` to blanks and put the cursor back in its section."""
        core = self.value
        core.begin_undo_seq()
        try:
            changed = core.remove_range(start, end)
            pos = core.section_cursor(start)
            if pos is not None:
                core.set_cursor(pos)
        finally:
            core.end_undo_seq()
        return changed

    def delete_next_char(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        if self.cursor == self.len:
            return False
        self.value.remove_next()
        return True

    def delete_prev_char(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        if self.cursor == 0:
            return False
        self.value.remove_prev()
        return True

    def delete_prev_section(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        section = self.value.prev_section_range(self.cursor)
        if section is None:
            return False
        return self.delete_range(*section)

    def delete_next_section(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        section = self.value.next_section_range(self.cursor)
        if section is None:
            return False
        return self.delete_range(*section)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move_left(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(max(self.cursor - 1, 0), extend_selection)

    def move_right(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(min(self.cursor + 1, self.len), extend_selection)

    def move_to_line_start(self, extend_selection: bool = False) -> bool:
        """Jump to the section's editing position, then to the start."""
        pos = self.value.section_cursor(self.cursor)
        if pos is not None and pos != self.cursor:
            return self.set_cursor(pos, extend_selection)
        return self.set_cursor(0, extend_selection)

    def move_to_line_end(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(self.len, extend_selection)

    def move_to_prev_section(self, extend_selection: bool = False) -> bool:
        current = self.value.section_range(self.cursor)
        if current is not None and self.cursor != current[0]:
            return self.set_cursor(current[0], extend_selection)
        section = self.value.prev_section_range(self.cursor)
        if section is None:
            return False
        return self.set_cursor(section[0], extend_selection)

    def move_to_next_section(self, extend_selection: bool = False) -> bool:
        current = self.value.section_range(self.cursor)
        if current is not None and self.cursor != current[1]:
            return self.set_cursor(current[1], extend_selection)
        section = self.value.next_section_range(self.cursor)
        if section is None:
            return False
        return self.set_cursor(section[1], extend_selection)

    def select_current_section(self) -> bool:
        start, _ = self.selection()
        section = self.value.section_range(max(start - 1, 0))
        if section is None or section[0] == section[1]:
            return False
        return self.set_selection(*section)

    def select_next_section(self) -> bool:
        start, _ = self.selection()
        section = self.value.next_section_range(start)
        if section is None or section[0] == section[1]:
            return False
        return self.set_selection(*section)

    def select_prev_section(self) -> bool:
        start, _ = self.selection()
        section = self.value.prev_section_range(max(start - 1, 0))
        if section is None or section[0] == section[1]:
            return False
        return self.set_selection(*section)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self.value.undo()

    def redo(self) -> bool:
        return self.value.redo()
