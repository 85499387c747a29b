"""Tests for pi.text.config and pi.text.symbols -- process-wide defaults."""

from __future__ import annotations

from pi.text.config import TextConfig, get_text_config, set_text_config
from pi.text.input_core import InputCore
from pi.text.rope import Rope
from pi.text.symbols import NumberSymbols, get_number_symbols, set_number_symbols
from pi.text.undo_stack import UndoStack


class TestTextConfig:
    """Defaults and loading from settings mappings."""

    def test_defaults(self) -> None:
        config = TextConfig()
        assert config.undo_count == 99
        assert config.rope_leaf_size == 1024
        assert config.rope_max_children == 16
        assert config.word_separators == ""

    def test_from_dict_camel_case(self) -> None:
        config = TextConfig.from_dict({"undoCount": 5, "ropeLeafSize": 64})
        assert config.undo_count == 5
        assert config.rope_leaf_size == 64

    def test_from_dict_snake_case(self) -> None:
        config = TextConfig.from_dict({"word_separators": ".-"})
        assert config.word_separators == ".-"

    def test_from_dict_ignores_unknown_and_none(self) -> None:
        config = TextConfig.from_dict({"theme": "dark", "undoCount": None})
        assert config == TextConfig()


class TestGlobalConfig:
    """get/set of the process default."""

    def test_set_text_config(self) -> None:
        config = TextConfig(undo_count=3)
        set_text_config(config)
        assert get_text_config() is config

    def test_new_objects_pick_up_config(self) -> None:
        set_text_config(TextConfig(undo_count=2, rope_leaf_size=8, rope_max_children=2))
        assert UndoStack().undo_count == 2
        rope = Rope("x" * 40)
        assert rope.depth() > 1

    def test_word_separators(self) -> None:
        set_text_config(TextConfig(word_separators="."))
        core = InputCore("a.b c")
        assert core.next_word_boundary(0) == 1


class TestNumberSymbols:
    def test_defaults(self) -> None:
        sym = get_number_symbols()
        assert sym == NumberSymbols(".", ",", "-", " ")

    def test_set_number_symbols(self) -> None:
        sym = NumberSymbols(decimal_sep=",", grouping_sep=".")
        set_number_symbols(sym)
        assert get_number_symbols() is sym
