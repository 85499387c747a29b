"""Process-wide defaults for the text stores and editing cores."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass
class TextConfig:
    """Tunables shared by every store and core created afterwards."""

    # Undo snapshots kept per core.
    undo_count: int = 99
    # Max chars in one rope leaf.
    rope_leaf_size: int = 1024
    # Max children of one rope node.
    rope_max_children: int = 16
    # Characters that end a word in addition to whitespace.
    word_separators: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextConfig:
        """Build a config from a settings mapping.

        Keys may be snake_case or camelCase; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)


def _snake_case(key: str) -> str:
    out: list[str] = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


_global_text_config: TextConfig | None = None


def get_text_config() -> TextConfig:
    global _global_text_config
    if _global_text_config is None:
        _global_text_config = TextConfig()
    return _global_text_config


def set_text_config(config: TextConfig) -> None:
    global _global_text_config
    _global_text_config = config
