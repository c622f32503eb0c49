# emoji_picker/core/protocols.py
"""
Protocol interfaces for the pluggable pieces of the emoji search core.

These Protocols are small and focused: they describe the methods the service,
query engine and usage tracker rely on, so tests and host applications can
swap implementations (platform glyph checks, preference storage, extra match
strategies) without touching the pipeline.
Keep this file stable.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Union, runtime_checkable
from typing_extensions import NotRequired, TypedDict


# Typed structures used across components ------------------------------------

class RawSkin(TypedDict):
    """One skin-tone variant object as it appears in the corpus JSON."""
    hexcode: str
    label: str
    unicode: str
    group: NotRequired[int]
    order: NotRequired[int]
    tags: NotRequired[List[str]]
    emoticon: NotRequired[Union[str, List[str]]]


class RawEmojiRecord(RawSkin):
    """
    One top-level corpus entry.

    Example:
      {"hexcode": "1F920", "label": "cowboy hat face", "unicode": "🤠",
       "group": 0, "order": 81, "tags": ["cowboy", "face", "hat"]}
    """
    skins: NotRequired[List[RawSkin]]


# Protocols ------------------------------------------------------------------

@runtime_checkable
class GlyphSupportProtocol(Protocol):
    """Answers whether the host can visibly render a grapheme sequence."""

    def is_supported(self, text: str) -> bool:
        ...


@runtime_checkable
class PreferenceStoreProtocol(Protocol):
    """
    Minimal user-preference storage (string values under string keys).
    The usage tracker keeps one JSON-encoded key in here.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MatchStrategyProtocol(Protocol):
    """
    One independent search stage.
    applies(): gate evaluated before the stage runs
    run(): returns Match objects (score None means unscored)
    """

    name: str

    def applies(self, query: str, accumulated: int) -> bool:
        ...

    def run(self, query: str, deadline) -> list:
        ...
