"""Single-line text input state: keystroke-level editing over InputCore."""

from __future__ import annotations

from pi.text.input_core import InputCore


class TextInput:
    """Selection-aware editing operations for one line of text.

    Typing replaces the selection. Deletions remove the selection if there
    is one, otherwise the text next to the cursor.
    """

    def __init__(self, text: str = "") -> None:
        self.value = InputCore(text)

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

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
        if self.is_empty():
            return False
        self.value.set_text("")
        self.value.set_offset(0)
        return True

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
        start, end = self.selection()
        return self.value.str_slice(start, end)

    def set_width(self, width: int) -> None:
        self.value.set_width(width)

    def screen_cursor(self) -> int | None:
        return self.value.screen_cursor()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, c: str) -> bool:
        return self.insert_str(c)

    def insert_str(self, text: str) -> bool:
        """Insert *text* at the cursor, replacing the selection."""
        start, end = self.selection()
        if not text and start == end:
            return False
        self.value.begin_undo_seq()
        try:
            if start != end:
                self.value.remove(start, end)
            self.value.insert_str(start, text)
        finally:
            self.value.end_undo_seq()
        return True

    def delete_range(self, start: int, end: int) -> bool:
        return self.value.remove(start, end)

    def delete_prev_char(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        if self.cursor == 0:
            return False
        return self.delete_range(self.cursor - 1, self.cursor)

    def delete_next_char(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        if self.cursor == self.len:
            return False
        return self.delete_range(self.cursor, self.cursor + 1)

    def delete_prev_word(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        start = self.value.prev_word_boundary(self.cursor)
        if start is None:
            return False
        return self.delete_range(start, self.cursor)

    def delete_next_word(self) -> bool:
        if self.has_selection():
            return self.delete_range(*self.selection())
        end = self.value.next_word_boundary(self.cursor)
        if end is None:
            return False
        return self.delete_range(self.cursor, end)

    def delete_to_line_start(self) -> bool:
        return self.delete_range(0, self.cursor)

    def delete_to_line_end(self) -> bool:
        return self.delete_range(self.cursor, self.len)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move_left(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(max(self.cursor - 1, 0), extend_selection)

    def move_right(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(min(self.cursor + 1, self.len), extend_selection)

    def move_to_prev_word(self, extend_selection: bool = False) -> bool:
        pos = self.value.prev_word_boundary(self.cursor)
        if pos is None:
            return False
        return self.set_cursor(pos, extend_selection)

    def move_to_next_word(self, extend_selection: bool = False) -> bool:
        pos = self.value.next_word_boundary(self.cursor)
        if pos is None:
            return False
        return self.set_cursor(pos, extend_selection)

    def move_to_line_start(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(0, extend_selection)

    def move_to_line_end(self, extend_selection: bool = False) -> bool:
        return self.set_cursor(self.len, extend_selection)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self.value.undo()

    def redo(self) -> bool:
        return self.value.redo()
