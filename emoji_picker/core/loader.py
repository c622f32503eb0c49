# emoji_picker/core/loader.py
"""
Corpus loader + usefulness filter.

load_corpus() parses the bundled emoji_data.json into Record objects.
The corpus is a build-time asset: anything wrong with it raises CorpusError
and the picker cannot start (no partial corpus, no degraded mode).

is_useful() drops sub-glyph components (regional indicators, skin-tone
swatches, hair components, combining marks, variation selectors) that
must never reach the UI or the index.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Optional, Set, Union

from emoji_picker.context.normalizer import normalize_tag
from emoji_picker.core.errors import CorpusError
from emoji_picker.core.protocols import RawEmojiRecord
from emoji_picker.core.records import (
    EmojiGroup,
    Emoticon,
    MultipleEmoticons,
    Record,
    SingleEmoticon,
)
from emoji_picker.utils.logger_utils import Log

CORPUS_PACKAGE = "emoji_picker.data"
CORPUS_FILE = "emoji_data.json"

_UNWANTED_LABELS = (
    "skin tone",
    "hair component",
    "combining",
    "modifier",
    "variation selector",
)
_VALID_GROUPS = frozenset(int(g) for g in EmojiGroup)


# Usefulness filter ------------------------------------------------------------
def is_useful(record: Record) -> bool:
    # flag building blocks; case-sensitive on purpose, the corpus spells it lowercase
    if "regional indicator" in record.label:
        return False
    label = record.label.lower()
    return not any(unwanted in label for unwanted in _UNWANTED_LABELS)


def filter_useful(records: Iterable[Record]) -> List[Record]:
    """Keep useful records in corpus order; displays must be unique in the result."""
    out: List[Record] = []
    seen_display: Set[str] = set()
    for r in records:
        if not is_useful(r):
            continue
        if r.display in seen_display:
            raise CorpusError(f"duplicate display {r.display!r} (id {r.id}) among useful records")
        seen_display.add(r.display)
        out.append(r)
    return out


# Decoding ------------------------------------------------------------------------
def _require_str(raw: dict, key: str, where: str) -> str:
    val = raw.get(key)
    if not isinstance(val, str) or not val:
        raise CorpusError(f"{where}: field '{key}' missing or not a non-empty string")
    return val


def _optional_int(raw: dict, key: str, where: str) -> Optional[int]:
    val = raw.get(key)
    if val is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(val, bool) or not isinstance(val, int):
        raise CorpusError(f"{where}: field '{key}' must be an integer, got {val!r}")
    return val


def decode_emoticon(val: Any, where: str = "record") -> Optional[Emoticon]:
    """The source stores either one string or a list of strings; both decode into one union."""
    if val is None:
        return None
    if isinstance(val, str):
        return SingleEmoticon(val) if val else None
    if isinstance(val, list) and all(isinstance(v, str) for v in val):
        items = tuple(v for v in val if v)
        if not items:
            return None
        return MultipleEmoticons(items)
    raise CorpusError(f"{where}: 'emoticon' must be a string or a list of strings")


def _decode_tags(val: Any, where: str) -> tuple:
    if val is None:
        return ()
    if not isinstance(val, list) or not all(isinstance(t, str) for t in val):
        raise CorpusError(f"{where}: 'tags' must be a list of strings")
    tags = []
    for t in val:
        t = normalize_tag(t)
        if t and t not in tags:
            tags.append(t)
    return tuple(tags)


def decode_record(raw: RawEmojiRecord, index: int = 0, parent: Optional[str] = None) -> Record:
    where = f"entry {index}" if parent is None else f"skin {index} of {parent}"
    if not isinstance(raw, dict):
        raise CorpusError(f"{where}: expected an object, got {type(raw).__name__}")

    hexcode = _require_str(raw, "hexcode", where)
    where = f"{where} ({hexcode})"
    label = " ".join(_require_str(raw, "label", where).split())
    display = _require_str(raw, "unicode", where)
    group = _optional_int(raw, "group", where)
    if group is not None and group not in _VALID_GROUPS:
        raise CorpusError(f"{where}: unknown group {group}")

    skins_raw = raw.get("skins")
    skins: tuple = ()
    if skins_raw is not None:
        if not isinstance(skins_raw, list):
            raise CorpusError(f"{where}: 'skins' must be a list")
        skins = tuple(decode_record(s, i, parent=hexcode) for i, s in enumerate(skins_raw))

    return Record(
        id=hexcode,
        label=label,
        display=display,
        group=group if group is not None else 0,
        order=_optional_int(raw, "order", where),
        tags=_decode_tags(raw.get("tags"), where),
        emoticon=decode_emoticon(raw.get("emoticon"), where),
        skin_variants=skins,
    )


# Loading ---------------------------------------------------------------------------
def load_corpus_bytes(data: Union[bytes, str]) -> List[Record]:
    """Parse a JSON corpus document. Raises CorpusError on any corruption."""
    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as e:
        raise CorpusError(f"corpus is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise CorpusError("corpus must be a JSON array of emoji objects")

    records = [decode_record(raw, i) for i, raw in enumerate(payload)]

    seen: Set[str] = set()
    for r in records:
        for rid in r.all_ids():
            if rid in seen:
                raise CorpusError(f"duplicate id {rid}")
            seen.add(rid)
    return records


def _read_bundled() -> bytes:
    try:
        return resources.files(CORPUS_PACKAGE).joinpath(CORPUS_FILE).read_bytes()
    except (FileNotFoundError, ModuleNotFoundError, OSError) as e:
        raise CorpusError(f"bundled corpus {CORPUS_PACKAGE}/{CORPUS_FILE} not found") from e


def load_corpus(path: Optional[Union[str, Path]] = None) -> List[Record]:
    """
    Load the corpus from `path`, or from the bundled asset when omitted.
    Returns every record (unfiltered), in file order.
    """
    with Log.time_block("corpus load"):
        if path is None:
            data = _read_bundled()
            source = f"{CORPUS_PACKAGE}/{CORPUS_FILE}"
        else:
            source = str(path)
            try:
                data = Path(path).read_bytes()
            except OSError as e:
                raise CorpusError(f"cannot read corpus {source}: {e}") from e
        records = load_corpus_bytes(data)
    Log.info(f"[Loader] loaded {len(records)} emojis from {source}")
    return records
