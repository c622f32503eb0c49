# emoji_picker/core/strategies.py
"""
Match strategies - the ordered stages of one search.

Contains:
 - Match: (record_id, score | None, source) produced by every stage
 - NativeMatch: plain token match with similar-term expansion
 - PrefixWidening: query + "*"
 - SubstringWidening: "*" + query + "*"
 - PerWordWidening: every word wrapped as *word*, only when results are thin
 - SubstringFallback: linear label/tag containment scan, the recall guarantee

Every strategy receives the already-normalized query (see
context.normalizer.normalize_query) and a Deadline. Index-backed stages
stop when the deadline expires and return what they have; the fallback
ignores the deadline since it is bounded by corpus size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from emoji_picker.context.normalizer import fold_case
from emoji_picker.core.protocols import MatchStrategyProtocol
from emoji_picker.core.records import Record
from emoji_picker.core.term_index import TermIndex
from emoji_picker.utils.cache_utils import Deadline


@dataclass(frozen=True)
class Match:
    record_id: str
    score: Optional[float]
    source: str

    @property
    def scored(self) -> bool:
        return self.score is not None


# Index-backed stages ----------------------------------------------------------------
class IndexStrategy:
    """Shared plumbing for stages that rewrite the query and ask the TermIndex."""

    name = "index"
    bounded = True

    def __init__(self, index: TermIndex, limit: int = 50, min_length: int = 2,
                 similar: bool = False):
        self.index = index
        self.limit = limit
        self.min_length = min_length
        self.similar = similar

    def applies(self, query: str, accumulated: int) -> bool:
        return len(query) >= self.min_length

    def rewrite(self, query: str) -> str:
        return query

    def run(self, query: str, deadline: Optional[Deadline] = None) -> List[Match]:
        hits = self.index.match(
            self.rewrite(query), limit=self.limit, deadline=deadline, similar=self.similar
        )
        return [Match(rid, score, self.name) for rid, score in hits]


class NativeMatch(IndexStrategy):
    name = "native"

    def __init__(self, index: TermIndex, limit: int = 50, similar: bool = True):
        super().__init__(index, limit=limit, min_length=1, similar=similar)

    def applies(self, query: str, accumulated: int) -> bool:
        return bool(query)


class PrefixWidening(IndexStrategy):
    name = "prefix"

    def rewrite(self, query: str) -> str:
        return query + "*"


class SubstringWidening(IndexStrategy):
    name = "substring"

    def rewrite(self, query: str) -> str:
        return "*" + query + "*"


class PerWordWidening(IndexStrategy):
    """Runs only while fewer than `threshold` distinct ids have been collected."""

    name = "per_word"

    def __init__(self, index: TermIndex, limit: int = 50, min_length: int = 2,
                 threshold: int = 50):
        super().__init__(index, limit=limit, min_length=min_length)
        self.threshold = threshold

    def applies(self, query: str, accumulated: int) -> bool:
        return accumulated < self.threshold and len(query) >= self.min_length

    def rewrite(self, query: str) -> str:
        return " ".join("*" + w + "*" for w in query.split())


# Fallback ----------------------------------------------------------------------------
class SubstringFallback:
    """
    Case-folded containment of the whole query in a label or any tag.
    Results are unscored and come back in corpus order.
    """

    name = "fallback"
    bounded = False

    def __init__(self, records: Sequence[Record]):
        self._haystacks = [
            (r.id, fold_case(r.label), tuple(fold_case(t) for t in r.tags))
            for r in records
        ]

    def applies(self, query: str, accumulated: int) -> bool:
        return bool(query)

    def run(self, query: str, deadline: Optional[Deadline] = None) -> List[Match]:
        needle = fold_case(query)
        out: List[Match] = []
        for rid, label, tags in self._haystacks:
            if needle in label or any(needle in t for t in tags):
                out.append(Match(rid, None, self.name))
        return out


def default_strategies(
    index: TermIndex,
    records: Sequence[Record],
    internal_limit: int = 50,
    result_limit: int = 100,
    min_widening_length: int = 2,
    similar_terms: bool = True,
) -> List[MatchStrategyProtocol]:
    """The standard stage order: native, prefix, substring, per-word, fallback."""
    return [
        NativeMatch(index, limit=internal_limit, similar=similar_terms),
        PrefixWidening(index, limit=internal_limit, min_length=min_widening_length),
        SubstringWidening(index, limit=internal_limit, min_length=min_widening_length),
        PerWordWidening(
            index,
            limit=internal_limit,
            min_length=min_widening_length,
            threshold=result_limit // 2,
        ),
        SubstringFallback(records),
    ]
