# tests/test_fusion_ranker.py
from emoji_picker.core.fusion_ranker import FusionRanker
from emoji_picker.core.strategies import Match


def test_merge_first_seen_wins():
    fr = FusionRanker()
    acc = fr.new_accumulator()
    assert fr.merge(acc, [Match("a", 1.0, "native"), Match("b", 2.0, "native")]) == 2
    assert fr.merge(acc, [Match("a", 9.0, "prefix"), Match("c", 0.5, "prefix")]) == 1
    assert list(acc) == ["a", "b", "c"]
    assert acc["a"].score == 1.0
    assert acc["a"].source == "native"


def test_rank_sorts_scored_and_appends_unscored():
    fr = FusionRanker()
    acc = fr.new_accumulator()
    fr.merge(acc, [Match("a", 1.0, "native"), Match("b", 3.0, "native")])
    fr.merge(acc, [Match("x", None, "fallback")])
    fr.merge(acc, [Match("c", 3.0, "prefix"), Match("d", 2.0, "prefix")])
    fr.merge(acc, [Match("y", None, "fallback")])
    ranked = [m.record_id for m in fr.rank(acc)]
    # stable on ties: b was seen before c
    assert ranked == ["b", "c", "d", "a", "x", "y"]


def test_rank_caps_and_never_duplicates():
    fr = FusionRanker(result_limit=3)
    acc = fr.new_accumulator()
    fr.merge(acc, [Match(str(i), float(i % 2), "native") for i in range(10)])
    fr.merge(acc, [Match(str(i), None, "fallback") for i in range(20)])
    ranked = fr.rank(acc)
    assert len(ranked) == 3
    ids = [m.record_id for m in fr.rank(acc, limit=100)]
    assert len(ids) == len(set(ids)) == 20


def test_rank_empty():
    fr = FusionRanker()
    assert fr.rank(fr.new_accumulator()) == []
