"""Grapheme and character-class helpers.

Segmentation goes through ``grapheme.graphemes``; terminal cell widths
come from ``wcwidth`` with a few emoji rules on top.
"""

from __future__ import annotations

import unicodedata
from typing import Iterator

import grapheme
import wcwidth as _wcwidth


LINE_BREAKS = ("\r\n", "\n", "\r")


# ---------------------------------------------------------------------------
# Grapheme segmenter
# ---------------------------------------------------------------------------


class _GraphemeSegmenter:
    """Thin wrapper around ``grapheme.graphemes``."""

    @staticmethod
    def segment(text: str) -> list[str]:
        return list(grapheme.graphemes(text))

    @staticmethod
    def iter_segments(text: str) -> Iterator[str]:
        return grapheme.graphemes(text)

    @staticmethod
    def count(text: str) -> int:
        return grapheme.length(text)


_segmenter = _GraphemeSegmenter()


def get_segmenter() -> _GraphemeSegmenter:
    """Return the shared grapheme segmenter."""
    return _segmenter


def byte_len(text: str) -> int:
    """UTF-8 length of *text*."""
    return len(text.encode("utf-8"))


def count_line_breaks(text: str) -> int:
    """Count line breaks, where ``\\r\\n`` counts once."""
    return text.count("\n") + text.count("\r") - text.count("\r\n")


def is_line_break(g: str) -> bool:
    return g in LINE_BREAKS


# ---------------------------------------------------------------------------
# Width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal cell width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation, ZWJ sequences, skin tones and flags take two cells.
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000 or 0x2600 <= ord(first) <= 0x27BF:
        return 2
    if g == "\r\n":
        return 0

    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def text_width(text: str) -> int:
    """Terminal cell width of *text*, summed per grapheme."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(grapheme_width(g) for g in _segmenter.iter_segments(text))


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is a whitespace grapheme."""
    return bool(char) and char.isspace()
