"""Tests for pi.text.rope -- chunked rope with byte and line metrics."""

from __future__ import annotations

import pytest

from pi.text.errors import ByteIndexOutOfBounds, InvalidRange, RowIndexOutOfBounds
from pi.text.rope import Rope


def _assert_no_split_crlf(rope: Rope) -> None:
    chunks = list(rope.chunks())
    for left, right in zip(chunks, chunks[1:]):
        assert not (left.endswith("\r") and right.startswith("\n"))


class TestRopeMetrics:
    """Length and line metrics."""

    def test_empty_rope(self) -> None:
        rope = Rope()
        assert str(rope) == ""
        assert rope.len_bytes() == 0
        assert rope.len_chars() == 0
        assert rope.len_lines() == 1

    def test_multibyte_lengths(self) -> None:
        rope = Rope("aö€")
        assert rope.len_bytes() == 6
        assert rope.len_chars() == 3
        assert len(rope) == 3

    def test_line_count_treats_crlf_as_one_break(self) -> None:
        assert Rope("a\r\nb\rc\nd").len_lines() == 4

    def test_trailing_break_opens_an_empty_line(self) -> None:
        rope = Rope("ab\n")
        assert rope.len_lines() == 2
        assert rope.line(1) == ""


class TestRopeLines:
    """Line lookups on a rope split into many small leaves."""

    @pytest.fixture
    def rope(self) -> Rope:
        return Rope("abc\ndef\r\nghi", leaf_size=4, max_children=2)

    def test_text_survives_chunking(self, rope: Rope) -> None:
        assert str(rope) == "abc\ndef\r\nghi"
        assert rope.depth() > 1
        _assert_no_split_crlf(rope)

    def test_line_to_byte(self, rope: Rope) -> None:
        assert rope.line_to_byte(0) == 0
        assert rope.line_to_byte(1) == 4
        assert rope.line_to_byte(2) == 9
        assert rope.line_to_byte(3) == rope.len_bytes()

    def test_line_to_byte_out_of_range(self, rope: Rope) -> None:
        with pytest.raises(RowIndexOutOfBounds):
            rope.line_to_byte(4)

    def test_byte_to_line(self, rope: Rope) -> None:
        assert rope.byte_to_line(0) == 0
        assert rope.byte_to_line(3) == 0
        assert rope.byte_to_line(4) == 1
        assert rope.byte_to_line(9) == 2
        assert rope.byte_to_line(rope.len_bytes()) == 2

    def test_byte_inside_crlf_stays_on_its_line(self, rope: Rope) -> None:
        assert rope.byte_to_line(8) == 1

    def test_line_includes_break(self, rope: Rope) -> None:
        assert rope.line(0) == "abc\n"
        assert rope.line(1) == "def\r\n"
        assert rope.line(2) == "ghi"

    def test_byte_to_line_out_of_range(self, rope: Rope) -> None:
        with pytest.raises(ByteIndexOutOfBounds):
            rope.byte_to_line(rope.len_bytes() + 1)


class TestRopeSlice:
    """Byte slicing."""

    def test_slice_on_char_boundaries(self) -> None:
        rope = Rope("aö€")
        assert rope.slice(1, 3) == "ö"
        assert rope.slice(3, 6) == "€"

    def test_slice_inside_a_char_fails(self) -> None:
        with pytest.raises(InvalidRange):
            Rope("aö€").slice(2, 3)

    def test_reversed_slice_fails(self) -> None:
        with pytest.raises(InvalidRange):
            Rope("abc").slice(2, 1)

    def test_slice_across_leaves(self) -> None:
        text = "0123456789" * 5
        rope = Rope(text, leaf_size=4, max_children=3)
        assert rope.slice(3, 41) == text[3:41]


class TestRopeEditing:
    """Insertion and removal keep the tree consistent."""

    def test_insert_in_the_middle(self) -> None:
        rope = Rope("hello world")
        rope.insert(5, ",")
        assert str(rope) == "hello, world"

    def test_insert_out_of_range(self) -> None:
        with pytest.raises(ByteIndexOutOfBounds):
            Rope("abc").insert(4, "x")

    def test_many_small_inserts(self) -> None:
        rope = Rope(leaf_size=4, max_children=2)
        expected = ""
        for i in range(60):
            ch = str(i % 10)
            rope.insert(rope.len_bytes(), ch)
            expected += ch
        assert str(rope) == expected
        assert rope.len_chars() == 60
        assert rope.depth() > 2

    def test_inserts_at_the_front(self) -> None:
        rope = Rope(leaf_size=4, max_children=2)
        for ch in "abcdefghij":
            rope.insert(0, ch)
        assert str(rope) == "jihgfedcba"

    def test_remove_across_leaves(self) -> None:
        rope = Rope("0123456789" * 10, leaf_size=8, max_children=3)
        rope.remove(5, 95)
        assert str(rope) == "0123456789"
        assert rope.len_bytes() == 10

    def test_remove_everything(self) -> None:
        rope = Rope("0123456789" * 10, leaf_size=8, max_children=3)
        rope.remove(0, rope.len_bytes())
        assert str(rope) == ""
        assert rope.len_lines() == 1

    def test_remove_reversed_fails(self) -> None:
        with pytest.raises(InvalidRange):
            Rope("abc").remove(2, 1)

    def test_lf_after_cr_joins_the_break(self) -> None:
        rope = Rope("abcd\refgh", leaf_size=4, max_children=2)
        assert rope.len_lines() == 2
        rope.insert(5, "\n")
        assert str(rope) == "abcd\r\nefgh"
        assert rope.len_lines() == 2
        _assert_no_split_crlf(rope)
        assert rope.line(0) == "abcd\r\n"

    def test_removal_joining_cr_and_lf(self) -> None:
        rope = Rope("ab\rXY\ncd", leaf_size=4, max_children=2)
        assert rope.len_lines() == 3
        rope.remove(3, 5)
        assert str(rope) == "ab\r\ncd"
        assert rope.len_lines() == 2
        _assert_no_split_crlf(rope)

    def test_line_metrics_follow_edits(self) -> None:
        rope = Rope("one\ntwo", leaf_size=4, max_children=2)
        rope.insert(rope.len_bytes(), "\nthree\nfour")
        assert rope.len_lines() == 4
        assert rope.line(2) == "three\n"
        rope.remove(0, 4)
        assert rope.line(0) == "two\n"
        assert rope.len_lines() == 3
