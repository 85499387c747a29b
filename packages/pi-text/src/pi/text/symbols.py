"""Locale symbols used when typing into and displaying numeric masks.

The masked core always stores ``.``, ``,`` and ``-`` in its buffer.
These symbols only decide which keys are accepted as separators or
signs and how the buffer is shown.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NumberSymbols:
    decimal_sep: str = "."
    grouping_sep: str = ","
    negative_sym: str = "-"
    positive_sym: str = " "


_global_number_symbols: NumberSymbols | None = None


def get_number_symbols() -> NumberSymbols:
    global _global_number_symbols
    if _global_number_symbols is None:
        _global_number_symbols = NumberSymbols()
    return _global_number_symbols


def set_number_symbols(symbols: NumberSymbols) -> None:
    global _global_number_symbols
    _global_number_symbols = symbols
