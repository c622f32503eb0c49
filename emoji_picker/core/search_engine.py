# emoji_picker/core/search_engine.py
"""
QueryEngine - widen-then-fallback search over the frozen TermIndex.

Pipeline for one query (after normalize_query):
  1. empty -> []
  2. run every strategy whose applies() gate passes, in order
     (native, prefix, substring, per-word, fallback), each under its own
     Deadline; a stage that raises is logged at debug level and skipped
  3. merge first-seen-wins, stable-sort scored entries by score,
     append fallback-only entries, cap at result_limit

Public API:
  search(q) -> [Record]
  search_detailed(q) -> [SearchResult]
  advanced_search(q, groups, exclude_terms, limit) -> [Record]
  find_similar(record, limit) -> [Record]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from emoji_picker.context.normalizer import fold_case, normalize_query
from emoji_picker.core.fusion_ranker import FusionRanker
from emoji_picker.core.protocols import MatchStrategyProtocol
from emoji_picker.core.records import Record
from emoji_picker.core.strategies import default_strategies
from emoji_picker.core.term_index import TermIndex, parse_query
from emoji_picker.utils.cache_utils import Deadline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    record: Record
    score: Optional[float]        # None for fallback-only matches
    source: str                   # strategy that found it first
    matched_terms: Tuple[str, ...] = ()

    @property
    def scored(self) -> bool:
        return self.score is not None


def query_words(query: str) -> Tuple[str, ...]:
    """Distinct bare words of `query` (wildcards stripped), bounded like the index parser."""
    return tuple(dict.fromkeys(t.text for t in parse_query(query)))


def matched_terms(record: Record, query: str, words: Optional[Tuple[str, ...]] = None) -> Tuple[str, ...]:
    """Label and tags of `record` that contain at least one query word."""
    if words is None:
        words = query_words(query)
    if not words:
        return ()
    out = []
    for text in (record.label,) + tuple(record.tags):
        low = fold_case(text)
        if any(w in low for w in words) and text not in out:
            out.append(text)
    return tuple(out)


class QueryEngine:
    def __init__(
        self,
        index: TermIndex,
        records: Sequence[Record],
        strategies: Optional[List[MatchStrategyProtocol]] = None,
        result_limit: int = 100,
        internal_limit: int = 50,
        stage_timeout: Optional[float] = 0.1,
        min_widening_length: int = 2,
        similar_terms: bool = True,
    ):
        self.index = index
        self.records = list(records)
        self.result_limit = result_limit
        self.stage_timeout = stage_timeout
        self.ranker = FusionRanker(result_limit)
        self.strategies = strategies if strategies is not None else default_strategies(
            index,
            self.records,
            internal_limit=internal_limit,
            result_limit=result_limit,
            min_widening_length=min_widening_length,
            similar_terms=similar_terms,
        )
        self._by_id = {r.id: r for r in self.records}

    @classmethod
    def from_config(cls, index: TermIndex, records: Sequence[Record], config) -> "QueryEngine":
        return cls(
            index,
            records,
            result_limit=config["result_limit"],
            internal_limit=config["internal_limit"],
            stage_timeout=config.stage_timeout,
            min_widening_length=config["min_widening_length"],
            similar_terms=config["similar_terms"],
        )

    # core pipeline -------------------------------------------------------------------
    def _run(self, trimmed: str, limit: int):
        acc = self.ranker.new_accumulator()
        for strategy in self.strategies:
            if not strategy.applies(trimmed, len(acc)):
                continue
            bounded = getattr(strategy, "bounded", True)
            deadline = Deadline(self.stage_timeout) if bounded else Deadline.never()
            try:
                matches = strategy.run(trimmed, deadline)
            except Exception as e:
                logger.debug("stage %s failed for %r: %s", strategy.name, trimmed, e)
                continue
            if bounded and deadline.expired():
                logger.debug("stage %s hit its deadline for %r", strategy.name, trimmed)
            self.ranker.merge(acc, matches)
        return self.ranker.rank(acc, limit)

    def search_detailed(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        trimmed = normalize_query(query)
        if not trimmed:
            return []
        limit = self.result_limit if limit is None else limit
        out: List[SearchResult] = []
        words = query_words(trimmed)
        for m in self._run(trimmed, limit):
            record = self._by_id.get(m.record_id)
            if record is None:
                # a custom strategy returned an id outside the corpus
                logger.debug("dropping unknown id %s from %s", m.record_id, m.source)
                continue
            out.append(SearchResult(record, m.score, m.source, matched_terms(record, trimmed, words)))
        return out

    def search(self, query: str, limit: Optional[int] = None) -> List[Record]:
        return [r.record for r in self.search_detailed(query, limit)]

    # extras --------------------------------------------------------------------------
    def advanced_search(
        self,
        query: str,
        groups: Optional[Iterable[int]] = None,
        exclude_terms: Optional[Iterable[str]] = None,
        limit: int = 50,
    ) -> List[Record]:
        """
        search() with a group whitelist and an exclusion list.
        Searches with twice the limit so filtering still leaves enough results.
        """
        results = self.search(query, limit=limit * 2)
        if exclude_terms:
            excluded = [fold_case(t) for t in exclude_terms if t and t.strip()]
            if excluded:
                results = [r for r in results if not _mentions_any(r, excluded)]
        if groups is not None:
            wanted = {int(g) for g in groups}
            results = [r for r in results if r.group in wanted]
        return results[:limit]

    def find_similar(self, record: Record, limit: int = 20) -> List[Record]:
        """Records sharing words with `record`'s label or first three tags."""
        query = " ".join([record.label] + list(record.tags[:3]))
        results = self.search(query, limit=limit + 1)
        return [r for r in results if r.id != record.id][:limit]


def _mentions_any(record: Record, terms: List[str]) -> bool:
    texts = [fold_case(record.label)] + [fold_case(t) for t in record.tags]
    return any(term in text for term in terms for text in texts)
