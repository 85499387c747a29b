"""pi-text: Grapheme-aware text stores and single-line editing cores."""

# Configuration
from pi.text.config import TextConfig, get_text_config, set_text_config

# Errors
from pi.text.errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidMaskPattern,
    InvalidRange,
    InvalidValue,
    RowIndexOutOfBounds,
    TextError,
)

# Graphemes
from pi.text.grapheme import Grapheme, GraphemeCursor

# Plain editing
from pi.text.input_core import InputCore

# Masks
from pi.text.mask_token import EditDirection, Mask, MaskKind, MaskToken, compile_mask, mask_pattern
from pi.text.masked_core import MaskedCore
from pi.text.masked_input import MaskedInput

# Style ranges
from pi.text.range_map import RangeMap, expand_by, shrink_by

# Storage
from pi.text.rope import Rope
from pi.text.store import TextStore
from pi.text.symbols import NumberSymbols, get_number_symbols, set_number_symbols
from pi.text.text_input import TextInput
from pi.text.text_rope import TextRope
from pi.text.text_string import TextString

# Positions and ranges
from pi.text.types import ByteRange, PositionLike, TextPosition, TextRange

# Undo
from pi.text.undo_stack import UndoStack

# Utilities
from pi.text.utils import byte_len, get_segmenter, grapheme_width, text_width

__all__ = [
    # Configuration
    "TextConfig",
    "get_text_config",
    "set_text_config",
    "NumberSymbols",
    "get_number_symbols",
    "set_number_symbols",
    # Errors
    "TextError",
    "RowIndexOutOfBounds",
    "ColumnIndexOutOfBounds",
    "ByteIndexOutOfBounds",
    "InvalidRange",
    "InvalidMaskPattern",
    "InvalidValue",
    # Positions and ranges
    "TextPosition",
    "TextRange",
    "ByteRange",
    "PositionLike",
    # Graphemes
    "Grapheme",
    "GraphemeCursor",
    # Storage
    "Rope",
    "TextStore",
    "TextRope",
    "TextString",
    # Style ranges
    "RangeMap",
    "expand_by",
    "shrink_by",
    # Undo
    "UndoStack",
    # Plain editing
    "InputCore",
    "TextInput",
    # Masks
    "EditDirection",
    "Mask",
    "MaskKind",
    "MaskToken",
    "compile_mask",
    "mask_pattern",
    "MaskedCore",
    "MaskedInput",
    # Utilities
    "byte_len",
    "get_segmenter",
    "grapheme_width",
    "text_width",
]
