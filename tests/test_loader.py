# tests/test_loader.py
import json

import pytest

from corpus_fixture import USEFUL_IDS
from emoji_picker.core.errors import CorpusError
from emoji_picker.core.loader import (
    decode_emoticon,
    filter_useful,
    is_useful,
    load_corpus,
    load_corpus_bytes,
)
from emoji_picker.core.records import MultipleEmoticons, Record, SingleEmoticon


def _rec(label, rid="X", display="x"):
    return Record(id=rid, label=label, display=display)


def test_load_corpus_from_path(corpus_path, raw_corpus):
    records = load_corpus(corpus_path)
    assert [r.id for r in records] == [raw["hexcode"] for raw in raw_corpus]


def test_decoded_fields(records):
    by_id = {r.id: r for r in records}
    cowboy = by_id["1F920"]
    assert cowboy.label == "cowboy hat face"
    assert cowboy.display == "\U0001F920"
    assert cowboy.group == 1
    assert cowboy.tags == ("cowboy", "face", "hat")
    assert cowboy.emoticon is None

    assert by_id["1F600"].emoticon == SingleEmoticon(":D")
    assert by_id["2764-FE0F"].emoticon == MultipleEmoticons(("<3", "\u2665"))
    assert by_id["2764-FE0F"].emoticons == ("<3", "\u2665")

    hand = by_id["1F44B"]
    assert hand.supports_skin_tones
    assert [v.id for v in hand.skin_variants] == ["1F44B-1F3FB", "1F44B-1F3FF"]


def test_missing_group_defaults_to_zero():
    (r,) = load_corpus_bytes(json.dumps([{"hexcode": "A", "label": "a", "unicode": "a"}]))
    assert r.group == 0
    assert r.order is None
    assert r.tags == ()


def test_tags_are_trimmed_and_deduplicated():
    raw = [{"hexcode": "A", "label": "a", "unicode": "a", "tags": ["  big   smile ", "", "big smile", "x"]}]
    (r,) = load_corpus_bytes(json.dumps(raw))
    assert r.tags == ("big smile", "x")


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        json.dumps({"hexcode": "A"}),
        json.dumps(["just a string"]),
        json.dumps([{"label": "no id", "unicode": "a"}]),
        json.dumps([{"hexcode": "A", "unicode": "a"}]),
        json.dumps([{"hexcode": "A", "label": "a"}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "group": "1"}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "group": True}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "group": 42}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "order": 1.5}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "tags": "face"}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "emoticon": 3}]),
        json.dumps([{"hexcode": "A", "label": "a", "unicode": "a", "skins": {}}]),
    ],
)
def test_corrupt_corpus_raises(payload):
    with pytest.raises(CorpusError):
        load_corpus_bytes(payload)


def test_duplicate_id_raises():
    raw = [
        {"hexcode": "A", "label": "a", "unicode": "a"},
        {"hexcode": "A", "label": "b", "unicode": "b"},
    ]
    with pytest.raises(CorpusError, match="duplicate id"):
        load_corpus_bytes(json.dumps(raw))


def test_duplicate_id_between_base_and_skin_raises():
    raw = [
        {"hexcode": "A", "label": "a", "unicode": "a"},
        {"hexcode": "B", "label": "b", "unicode": "b",
         "skins": [{"hexcode": "A", "label": "b dark", "unicode": "bb"}]},
    ]
    with pytest.raises(CorpusError):
        load_corpus_bytes(json.dumps(raw))


def test_missing_file_raises(tmp_path):
    with pytest.raises(CorpusError):
        load_corpus(tmp_path / "nope.json")


def test_decode_emoticon_shapes():
    assert decode_emoticon(None) is None
    assert decode_emoticon("") is None
    assert decode_emoticon([]) is None
    assert decode_emoticon(":)").values == (":)",)
    assert decode_emoticon([":)", ":-)"]).values == (":)", ":-)")


# usefulness filter -----------------------------------------------------------------
@pytest.mark.parametrize(
    "label",
    [
        "regional indicator A",
        "light skin tone",
        "Medium Skin Tone",
        "red hair component",
        "Combining Enclosing Keycap",
        "emoji modifier fitzpatrick type-1-2",
        "Variation Selector-16",
    ],
)
def test_is_useful_rejects_components(label):
    assert not is_useful(_rec(label))


def test_regional_indicator_check_is_case_sensitive():
    assert is_useful(_rec("Regional Indicator Symbol"))


@pytest.mark.parametrize("label", ["grinning face", "flag: Japan", "waving hand", "toner cartridge"])
def test_is_useful_keeps_regular_emoji(label):
    assert is_useful(_rec(label))


def test_filter_useful_keeps_corpus_order(records):
    assert [r.id for r in filter_useful(records)] == USEFUL_IDS


def test_filter_useful_duplicate_display_raises():
    rs = [_rec("one", "A", "x"), _rec("two", "B", "x")]
    with pytest.raises(CorpusError, match="duplicate display"):
        filter_useful(rs)


def test_duplicate_display_among_filtered_out_records_is_fine():
    rs = [_rec("one", "A", "x"), _rec("light skin tone", "B", "x")]
    assert [r.id for r in filter_useful(rs)] == ["A"]


def test_bundled_corpus_loads():
    records = load_corpus()
    useful = filter_useful(records)
    assert len(useful) > 1000
    ids = [rid for r in records for rid in r.all_ids()]
    assert len(ids) == len(set(ids))
    assert all(is_useful(r) for r in useful)
