# emoji_picker/core/records.py
"""
Record model for the emoji corpus.

Contains:
 - Record: one emoji entry (immutable), with optional skin-tone variants
 - SingleEmoticon/MultipleEmoticons: the two shapes the `emoticon` field
   takes in the source data, decoded into one union
 - EmojiGroup: the fixed category enumeration (emojibase numbering)
 - SkinTone: Fitzpatrick modifiers used to pick a variant for display
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Tuple, Union


# Emoticons -----------------------------------------------------------------
@dataclass(frozen=True)
class SingleEmoticon:
    value: str

    @property
    def values(self) -> Tuple[str, ...]:
        return (self.value,)


@dataclass(frozen=True)
class MultipleEmoticons:
    items: Tuple[str, ...]

    @property
    def values(self) -> Tuple[str, ...]:
        return self.items


Emoticon = Union[SingleEmoticon, MultipleEmoticons]


# Groups ------------------------------------------------------------------------
class EmojiGroup(IntEnum):
    SMILEYS_AND_EMOTION = 0
    PEOPLE_AND_BODY = 1
    COMPONENT = 2
    ANIMALS_AND_NATURE = 3
    FOOD_AND_DRINK = 4
    TRAVEL_AND_PLACES = 5
    ACTIVITIES = 6
    OBJECTS = 7
    SYMBOLS = 8
    FLAGS = 9

    @property
    def display_name(self) -> str:
        return _GROUP_NAMES[self]

    @property
    def representative_emoji(self) -> str:
        return _GROUP_ICONS[self]

    @property
    def is_reserved(self) -> bool:
        """Components are sub-glyphs, never listed as a pickable category."""
        return self is EmojiGroup.COMPONENT


_GROUP_NAMES = {
    EmojiGroup.SMILEYS_AND_EMOTION: "Smileys & Emotion",
    EmojiGroup.PEOPLE_AND_BODY: "People & Body",
    EmojiGroup.COMPONENT: "Components",
    EmojiGroup.ANIMALS_AND_NATURE: "Animals & Nature",
    EmojiGroup.FOOD_AND_DRINK: "Food & Drink",
    EmojiGroup.TRAVEL_AND_PLACES: "Travel & Places",
    EmojiGroup.ACTIVITIES: "Activities",
    EmojiGroup.OBJECTS: "Objects",
    EmojiGroup.SYMBOLS: "Symbols",
    EmojiGroup.FLAGS: "Flags",
}

_GROUP_ICONS = {
    EmojiGroup.SMILEYS_AND_EMOTION: "\U0001F600",
    EmojiGroup.PEOPLE_AND_BODY: "\U0001F977",
    EmojiGroup.COMPONENT: "\U0001F527",
    EmojiGroup.ANIMALS_AND_NATURE: "\U0001F431",
    EmojiGroup.FOOD_AND_DRINK: "\U0001F346",
    EmojiGroup.TRAVEL_AND_PLACES: "\U0001F697",
    EmojiGroup.ACTIVITIES: "\U0001F3A8",
    EmojiGroup.OBJECTS: "\U0001F453\ufe0f",
    EmojiGroup.SYMBOLS: "☮\ufe0f",
    EmojiGroup.FLAGS: "\U0001F3F3\ufe0f",
}


# Skin tones ----------------------------------------------------------------------
class SkinTone(Enum):
    DEFAULT = "default"
    LIGHT = "light"
    MEDIUM_LIGHT = "mediumLight"
    MEDIUM = "medium"
    MEDIUM_DARK = "mediumDark"
    DARK = "dark"

    @property
    def modifier(self) -> Optional[str]:
        return _TONE_MODIFIERS[self]

    @property
    def display_name(self) -> str:
        return _TONE_NAMES[self]

    @property
    def sample(self) -> str:
        """Waving hand in this tone, used by tone selectors."""
        return "\U0001F44B" + (self.modifier or "")


_TONE_MODIFIERS = {
    SkinTone.DEFAULT: None,
    SkinTone.LIGHT: "\U0001F3FB",
    SkinTone.MEDIUM_LIGHT: "\U0001F3FC",
    SkinTone.MEDIUM: "\U0001F3FD",
    SkinTone.MEDIUM_DARK: "\U0001F3FE",
    SkinTone.DARK: "\U0001F3FF",
}

_TONE_NAMES = {
    SkinTone.DEFAULT: "Default",
    SkinTone.LIGHT: "Light",
    SkinTone.MEDIUM_LIGHT: "Medium Light",
    SkinTone.MEDIUM: "Medium",
    SkinTone.MEDIUM_DARK: "Medium Dark",
    SkinTone.DARK: "Dark",
}

ALL_MODIFIERS = frozenset(m for m in _TONE_MODIFIERS.values() if m)


# Record ----------------------------------------------------------------------------
@dataclass(frozen=True)
class Record:
    """
    One corpus entry.
    id: hexcode, unique across the whole corpus (variants included)
    display: the grapheme sequence that gets inserted on selection
    group: EmojiGroup value, 0 when the source omits it
    skin_variants: only on records that support skin-tone rendering;
      variants are reachable through their base record, never indexed alone
    """

    id: str
    label: str
    display: str
    group: int = 0
    order: Optional[int] = None
    tags: Tuple[str, ...] = ()
    emoticon: Optional[Emoticon] = None
    skin_variants: Tuple["Record", ...] = field(default=(), repr=False)

    @property
    def emoticons(self) -> Tuple[str, ...]:
        return self.emoticon.values if self.emoticon else ()

    @property
    def supports_skin_tones(self) -> bool:
        return bool(self.skin_variants)

    def searchable_fields(self) -> Iterator[Tuple[str, str]]:
        """Yield (field_name, text) for everything that goes into the index blob."""
        yield "label", self.label
        for t in self.tags:
            yield "tag", t
        for e in self.emoticons:
            yield "emoticon", e
        yield "id", self.id

    def searchable_text(self) -> str:
        return " ".join(text for _name, text in self.searchable_fields())

    def variant_for(self, tone: SkinTone) -> "Record":
        """
        Return the variant rendered in `tone`.
        Multi-person sequences carry several modifiers; only a variant whose
        modifiers are all `tone` counts as a match.
        """
        mod = tone.modifier
        if mod is None:
            return self
        for v in self.skin_variants:
            found = [ch for ch in v.display if ch in ALL_MODIFIERS]
            if found and all(ch == mod for ch in found):
                return v
        return self

    def all_ids(self) -> List[str]:
        return [self.id] + [v.id for v in self.skin_variants]
