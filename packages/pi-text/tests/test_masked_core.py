"""Tests for pi.text.masked_core.MaskedCore -- the masked editing engine."""

from __future__ import annotations

import pytest

from pi.text.errors import InvalidMaskPattern, InvalidRange
from pi.text.masked_core import MaskedCore
from pi.text.symbols import NumberSymbols
from pi.text.types import ByteRange


def _core(mask: str, text: str | None = None, cursor: int | None = None) -> MaskedCore:
    core = MaskedCore(mask)
    if text is not None:
        core.set_text(text)
    if cursor is not None:
        core.set_cursor(cursor)
    return core


class TestMaskedCoreValue:
    """Mask, blank value and set_text."""

    def test_blank_value(self) -> None:
        core = MaskedCore("###,##0.00")
        assert core.text == "      0.00"
        assert core.len == 10
        assert core.is_empty()

    def test_default_cursor_on_integer_part(self) -> None:
        assert MaskedCore("###,##0.00").cursor == 7
        assert MaskedCore("ll99").cursor == 0
        assert MaskedCore("€ ##").cursor == 4

    def test_set_text_pads_and_truncates(self) -> None:
        core = MaskedCore("99\\/99")
        core.set_text("12")
        assert core.text == "12   "
        core.set_text("12/3456")
        assert core.text == "12/34"

    def test_clear(self) -> None:
        core = _core("##0", "123")
        assert core.clear()
        assert core.text == "  0"
        assert not core.clear()

    def test_set_mask(self) -> None:
        core = _core("##", "12")
        core.set_mask("0.0")
        assert core.mask == "0.0"
        assert core.text == "0.0"

    def test_bad_mask_keeps_old_one(self) -> None:
        core = MaskedCore("##")
        with pytest.raises(InvalidMaskPattern):
            core.set_mask("#\\")
        assert core.mask == "##"

    def test_replace_keeps_shape(self) -> None:
        core = MaskedCore("99\\/99")
        assert core.replace(0, 2, "12")
        assert core.text == "12/  "
        with pytest.raises(InvalidRange):
            core.replace(0, 2, "1")

    def test_viewport_keeps_cursor_visible(self) -> None:
        core = MaskedCore("99\\/99\\/9999")
        assert core.cursor == 2
        core.set_width(20)
        assert core.offset == 0
        core.set_width(3)
        core.set_cursor(9)
        core.set_offset(0)
        assert core.offset == 6

    def test_byte_conversions(self) -> None:
        core = MaskedCore("€99")
        assert core.byte_at(0) == ByteRange(0, 3)
        assert core.byte_pos(3) == 1
        assert core.str_slice(0, 1) == "€"


class TestMaskedCoreRendering:
    """Locale symbols and compact output."""

    def test_symbols_are_substituted(self) -> None:
        core = _core("###,##0.00", "  1,234.50")
        sym = NumberSymbols(decimal_sep=",", grouping_sep=".")
        assert core.rendered(sym) == "  1.234,50"

    def test_compact_drops_blank_digits(self) -> None:
        core = _core("###.##", "  1.5 ")
        assert core.rendered(compact=True) == "1.5"

    def test_sign_slot(self) -> None:
        core = _core("###-", "  1-")
        sym = NumberSymbols(negative_sym="−", positive_sym="+")
        assert core.rendered(sym) == "  1−"
        core.set_text("  1 ")
        assert core.rendered(sym) == "  1+"

    def test_instance_symbols(self) -> None:
        core = MaskedCore("0.0", NumberSymbols(decimal_sep=","))
        assert core.rendered() == "0,0"


class TestMaskedCoreSections:
    """Section cursors and ranges."""

    def test_section_cursor_snaps_to_integer_end(self) -> None:
        core = MaskedCore("###,##0.0##")
        assert [core.section_cursor(i) for i in range(11)] == [7] * 11
        assert core.section_cursor(11) is None

    def test_literals_have_no_cursor(self) -> None:
        core = MaskedCore("€ ###,##0.0##+")
        assert core.section_cursor(0) is None
        assert core.next_section_cursor(0) == 9
        assert core.prev_section_cursor(9) is None

    def test_out_of_range(self) -> None:
        core = MaskedCore("##")
        assert core.section_cursor(-1) is None
        assert core.next_section_cursor(5) is None
        assert core.section_range(5) is None

    def test_ranges_skip_literals(self) -> None:
        core = MaskedCore("99\\/99\\/9999")
        assert core.section_range(0) == (0, 2)
        assert core.section_range(2) is None
        assert core.next_section_range(2) == (3, 5)
        assert core.next_section_range(4) == (6, 10)
        assert core.next_section_range(10) is None
        assert core.prev_section_range(10) == (6, 10)
        assert core.prev_section_range(5) == (3, 5)
        assert core.prev_section_range(1) is None

    def test_section_boundary(self) -> None:
        core = MaskedCore("99\\/99")
        assert core.is_section_boundary(2)
        assert core.is_section_boundary(3)
        assert not core.is_section_boundary(1)
        assert not core.is_section_boundary(0)
        assert core.section_id(4) == 2


class TestMaskedCoreIntegers:
    """Right-to-left integer input."""

    def test_digits_shift_in_from_the_right(self) -> None:
        core = MaskedCore("##")
        assert core.insert_char("1")
        assert core.text == " 1"
        assert core.insert_char("2")
        assert core.text == "12"
        assert core.cursor == 2

    def test_full_integer_part_rejects_digits(self) -> None:
        core = _core("##", "12")
        assert not core.insert_char("3")
        assert core.text == "12"

    def test_leading_zero_slot(self) -> None:
        core = MaskedCore("##0")
        for _ in range(3):
            assert core.insert_char("1")
        assert core.text == "111"
        assert not core.insert_char("1")

    def test_grouping_follows_digits(self) -> None:
        core = MaskedCore("###,##0.00")
        expected = ["      1.00", "     12.00", "    123.00", "  1,234.00", " 12,345.00"]
        for c, text in zip("12345", expected):
            core.insert_char(c)
            assert core.text == text
        assert core.cursor == 7

    def test_remove_prev_closes_grouping(self) -> None:
        core = _core("###,##0.00", "  1,234.00", 7)
        assert core.remove_prev()
        assert core.text == "    123.00"
        assert core.cursor == 7

    def test_remove_prev_shifts_right(self) -> None:
        core = _core("##", "12", 1)
        assert core.remove_prev()
        assert core.text == " 2"
        assert core.cursor == 1

    def test_remove_next_shifts_right(self) -> None:
        core = _core("##", "12", 0)
        assert core.remove_next()
        assert core.text == " 2"
        assert core.cursor == 1

    def test_remove_at_edges(self) -> None:
        core = _core("##", "12", 0)
        assert not core.remove_prev()
        core.set_cursor(2)
        assert not core.remove_next()


class TestMaskedCoreSigns:
    """The minus key toggles the section sign."""

    @pytest.mark.parametrize("cursor", range(8))
    def test_toggle_from_any_slot(self, cursor: int) -> None:
        core = _core("###.###", "  1.0  ", cursor)
        assert core.insert_char("-")
        assert core.text == " -1.0  "
        assert core.cursor == cursor
        assert core.insert_char("-")
        assert core.text == "  1.0  "

    def test_digits_keep_the_sign_in_front(self) -> None:
        core = _core("###.###", " -1.0  ", 3)
        assert core.insert_char("2")
        assert core.text == "-12.0  "

    def test_explicit_sign_slot(self) -> None:
        core = MaskedCore("###-")
        assert core.cursor == 3
        assert core.insert_char("-")
        assert core.text == "   -"
        assert core.insert_char("-")
        assert core.text == "    "

    def test_plus_slot(self) -> None:
        core = MaskedCore("##+")
        assert core.insert_char("-")
        assert core.text == "  -"
        assert core.insert_char("-")
        assert core.text == "  +"

    def test_locale_minus(self) -> None:
        core = MaskedCore("###-", NumberSymbols(negative_sym="−"))
        assert core.insert_char("−")
        assert core.text == "   -"


class TestMaskedCoreFractions:
    """Left-to-right fraction input."""

    def test_fraction_fills_from_the_left(self) -> None:
        core = _core("###.0##", cursor=4)
        assert core.insert_char("5")
        assert core.text == "   .5  "
        assert core.cursor == 5
        assert core.insert_char("6")
        assert core.text == "   .56 "

    def test_insert_inside_fraction_shifts_right(self) -> None:
        core = _core("###.0##", "   .5  ", 4)
        assert core.insert_char("1")
        assert core.text == "   .15 "
        assert core.cursor == 5

    def test_full_fraction(self) -> None:
        core = _core("###.##", "123.45", 6)
        assert not core.insert_char("6")
        assert core.text == "123.45"

    def test_remove_prev_in_fraction(self) -> None:
        core = _core("###.0##", "   .56 ", 5)
        assert core.remove_prev()
        assert core.text == "   .6  "
        assert core.cursor == 4

    def test_remove_prev_over_decimal_moves_only(self) -> None:
        core = _core("###.0##", "   .6  ", 4)
        assert core.remove_prev()
        assert core.text == "   .6  "
        assert core.cursor == 3

    def test_decimal_key_jumps_over_separator(self) -> None:
        core = _core("###.##", "123.  ", 3)
        assert core.insert_char(".")
        assert core.cursor == 4


class TestMaskedCoreOtherKinds:
    """Hex, letters and literals."""

    def test_hex_overwrites_zero(self) -> None:
        core = MaskedCore("HH")
        assert core.insert_char("f")
        assert core.insert_char("a")
        assert core.text == "fa"
        assert not core.insert_char("b")

    def test_hex_remove_refills_zero(self) -> None:
        core = _core("HH", "fa", 1)
        assert core.remove_prev()
        assert core.text == "a0"
        assert core.cursor == 0

    def test_letters(self) -> None:
        core = MaskedCore("ll99")
        assert core.insert_char("a")
        assert core.insert_char("b")
        assert core.text == "ab  "
        assert core.cursor == 2
        assert core.insert_char("1")
        assert core.text == "ab 1"

    def test_is_valid_char(self) -> None:
        core = MaskedCore("")
        tokens = MaskedCore("l0_").tokens
        assert core.is_valid_char(tokens[0].right, "x")
        assert not core.is_valid_char(tokens[0].right, "1")
        assert core.is_valid_char(tokens[1].right, "1")
        assert not core.is_valid_char(tokens[1].right, " ")
        assert core.is_valid_char(tokens[2].right, "?")


class TestMaskedCoreAdvance:
    """advance_cursor finds the slot that takes a key."""

    def test_digit_moves_to_next_section(self) -> None:
        core = _core("99\\/99", "12/  ", 2)
        assert core.advance_cursor("3") == 5
        assert core.cursor == 2

    def test_separator_key_stays_on_separator(self) -> None:
        core = _core("99\\/99", "12/  ", 2)
        assert core.advance_cursor("/") == 2

    def test_nothing_accepts(self) -> None:
        core = _core("99", "12", 2)
        assert core.advance_cursor("x") == 2

    def test_letters_skip_to_digits(self) -> None:
        core = MaskedCore("ll99")
        assert core.advance_cursor("1") == 4

    def test_fraction_from_fraction(self) -> None:
        core = _core("###.##", "123.  ", 4)
        assert core.advance_cursor("4") == 4


class TestMaskedCoreRemoveRange:
    """remove_range keeps the shape of the text."""

    def test_across_sub_sections(self) -> None:
        core = _core("###.###", "123.456")
        assert core.remove_range(2, 5)
        assert core.text == " 12.56 "

    def test_inside_one_sub_section(self) -> None:
        core = _core("###.00", "123.45")
        assert core.remove_range(0, 3)
        assert core.text == "   .45"
        assert core.remove_range(4, 5)
        assert core.text == "   .50"

    def test_empty_range(self) -> None:
        assert not _core("##", "12").remove_range(1, 1)

    def test_invalid_range(self) -> None:
        core = MaskedCore("##")
        with pytest.raises(InvalidRange):
            core.remove_range(2, 1)
        with pytest.raises(InvalidRange):
            core.remove_range(0, 3)


class TestMaskedCoreUndo:
    def test_undo_redo(self) -> None:
        core = MaskedCore("##")
        core.insert_char("1")
        core.insert_char("2")
        assert core.undo()
        assert core.text == " 1"
        assert core.undo()
        assert core.text == "  "
        assert core.redo()
        assert core.text == " 1"

    def test_rejected_key_leaves_no_history(self) -> None:
        core = _core("##", "12")
        core.insert_char("3")
        assert not core.undo()


class TestMaskedCoreStyles:
    def test_styles(self) -> None:
        core = MaskedCore("##")
        core.add_style(ByteRange(0, 2), "dim")
        assert core.styles_at(1) == ["dim"]
        assert core.remove_style(ByteRange(0, 2), "dim")
        assert core.styles_at(1) == []
