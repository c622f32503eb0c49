"""
emoji_picker - search and indexing core for an interactive emoji picker.

Typical use from a UI layer:
    service = EmojiService()
    service.search("cow")          # -> [Record, ...]
    service.record_usage("1F920")
    service.frequently_used()
"""

from emoji_picker.core import (
    CorpusError,
    EmojiGroup,
    EmojiPickerError,
    EmojiService,
    Record,
    SearchResult,
    SkinTone,
)
from emoji_picker.utils.config_manager import Config

__all__ = [
    "Config",
    "CorpusError",
    "EmojiGroup",
    "EmojiPickerError",
    "EmojiService",
    "Record",
    "SearchResult",
    "SkinTone",
]

__version__ = "0.1.0"
