# emoji_picker/core/term_index.py
"""
TermIndex - in-process inverted index over the filtered corpus.

Contains:
 - QueryTerm / parse_query(): the tiny query syntax (space = OR,
   leading '*' = anywhere in a token, trailing '*' = prefix)
 - TermIndex: token -> postings (record ordinal, field weight), plus a Trie
   for prefix expansion, a BKTree for similar-term expansion and a flat
   vocabulary list for substring scans

Scoring:
  per query term, each record keeps its best  quality * idf(token) * weight
  over the tokens the term expanded to; term scores are summed per record.
  idf = ln(1 + N / df). Ties keep corpus order.

The index is built once and then frozen. Reads need no locking after that.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from emoji_picker.context.normalizer import fold_case
from emoji_picker.context.tokenizer import simple_tokenize
from emoji_picker.core.bktree import BKTree, similarity_budget
from emoji_picker.core.errors import IndexFrozenError
from emoji_picker.core.records import Record
from emoji_picker.core.trie import Trie
from emoji_picker.utils.cache_utils import Deadline
from emoji_picker.utils.logger_utils import Log

logger = logging.getLogger(__name__)

FIELD_WEIGHTS: Dict[str, float] = {
    "label": 2.0,
    "tag": 1.5,
    "emoticon": 1.0,
    "id": 0.5,
}

# word parts of a punctuated query chunk count less than the whole chunk
PART_FACTOR = 0.5
# bound on how many vocabulary tokens one wildcard term may expand to
MAX_EXPANSION = 500
# terms beyond this in one query are ignored
MAX_QUERY_TERMS = 64
_SCAN_CHECK_EVERY = 256

Expansion = Tuple[str, float]  # (token, quality)
ScoredId = Tuple[str, float]


# Query syntax --------------------------------------------------------------------
@dataclass(frozen=True)
class QueryTerm:
    text: str
    prefix: bool = False      # trailing '*'
    substring: bool = False   # leading '*' (matches anywhere in a token)

    @classmethod
    def parse(cls, chunk: str) -> Optional["QueryTerm"]:
        leading = chunk.startswith("*")
        trailing = chunk.endswith("*")
        core = chunk.strip("*")
        if not core:
            return None
        return cls(fold_case(core), prefix=trailing and not leading, substring=leading)

    @property
    def forms(self) -> List[Tuple[str, float]]:
        """(form, factor) pairs: the whole term, then its word parts if it had punctuation."""
        toks = simple_tokenize(self.text)
        if not toks:
            return []
        out = [(toks[0], 1.0)] if toks[0] == self.text else [(self.text, 1.0)]
        out.extend((t, PART_FACTOR) for t in toks if t != self.text)
        return out


def parse_query(query: str, deadline: Optional[Deadline] = None) -> List[QueryTerm]:
    """
    Distinct terms of `query` in first-seen order, at most MAX_QUERY_TERMS.
    Parsing stops early when `deadline` expires.
    """
    terms: Dict[QueryTerm, None] = {}
    for i, chunk in enumerate(query.split()):
        if i % _SCAN_CHECK_EVERY == 0 and deadline is not None and deadline.expired():
            break
        term = QueryTerm.parse(chunk)
        if term is not None:
            terms.setdefault(term, None)
            if len(terms) >= MAX_QUERY_TERMS:
                break
    return list(terms)


# Match quality -----------------------------------------------------------------------
def prefix_quality(term: str, token: str) -> float:
    if term == token:
        return 1.0
    return 0.5 + 0.5 * len(term) / len(token)


def substring_quality(term: str, token: str) -> float:
    if term == token:
        return 1.0
    return 0.3 + 0.5 * len(term) / len(token)


def similar_quality(distance: int) -> float:
    return 1.0 if distance == 0 else 0.5 / distance


# Index ------------------------------------------------------------------------------
class TermIndex:
    """
    Public API:
      add(record) / freeze() / TermIndex.build(records)
      match(query, limit, deadline, similar) -> [(id, score)]
      get(id), document_count, vocabulary()
    """

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._ordinal: Dict[str, int] = {}
        self._raw_postings: Dict[str, Dict[int, float]] = {}
        self._postings: Dict[str, Tuple[np.ndarray, np.ndarray]] = {}
        self._idf: Dict[str, float] = {}
        self._vocab: List[str] = []
        self._trie = Trie()
        self._bk = BKTree()
        self._frozen = False

    # building ------------------------------------------------------------------------
    @classmethod
    def build(cls, records: Iterable[Record]) -> "TermIndex":
        index = cls()
        with Log.time_block("index build"):
            for r in records:
                index.add(r)
            index.freeze()
        Log.info(
            f"[Index] {index.document_count} records, {len(index._vocab)} tokens"
        )
        return index

    def add(self, record: Record) -> None:
        if self._frozen:
            raise IndexFrozenError("index is frozen; build a new one to change the corpus")
        if record.id in self._ordinal:
            logger.debug("duplicate record id %s skipped", record.id)
            return

        ordinal = len(self._records)
        self._records.append(record)
        self._ordinal[record.id] = ordinal

        for field_name, text in record.searchable_fields():
            weight = FIELD_WEIGHTS[field_name]
            for tok in simple_tokenize(text):
                posting = self._raw_postings.setdefault(tok, {})
                # a token keeps its best field weight per record
                if posting.get(ordinal, 0.0) < weight:
                    posting[ordinal] = weight

    def freeze(self) -> None:
        if self._frozen:
            return
        n = len(self._records)
        for tok, posting in self._raw_postings.items():
            ords = np.fromiter(sorted(posting), dtype=np.int64, count=len(posting))
            weights = np.array([posting[o] for o in ords.tolist()], dtype=float)
            self._postings[tok] = (ords, weights)
            df = len(posting)
            self._idf[tok] = math.log1p(n / df)
            self._trie.insert(tok, df)
            self._bk.insert(tok, df)
        self._vocab = sorted(self._postings)
        self._raw_postings = {}
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # lookups ---------------------------------------------------------------------------
    @property
    def document_count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._ordinal

    def get(self, record_id: str) -> Optional[Record]:
        i = self._ordinal.get(record_id)
        return None if i is None else self._records[i]

    def records(self) -> List[Record]:
        return list(self._records)

    def vocabulary(self) -> List[str]:
        return list(self._vocab)

    # term expansion --------------------------------------------------------------------
    def _expand_exact(self, form: str, similar: bool, deadline: Deadline) -> List[Expansion]:
        if not similar:
            return [(form, 1.0)] if form in self._postings else []
        budget = similarity_budget(form)
        if budget == 0:
            return [(form, 1.0)] if form in self._postings else []
        return [(tok, similar_quality(d)) for tok, d in self._bk.query(form, budget, deadline)]

    def _expand_prefix(self, form: str, deadline: Deadline) -> List[Expansion]:
        hits = self._trie.search_prefix(form, limit=MAX_EXPANSION, deadline=deadline)
        return [(tok, prefix_quality(form, tok)) for tok, _df in hits]

    def _expand_substring(self, form: str, deadline: Deadline) -> List[Expansion]:
        out: List[Expansion] = []
        for i, tok in enumerate(self._vocab):
            if i % _SCAN_CHECK_EVERY == 0 and deadline.expired():
                logger.debug("substring scan for %r hit the deadline at %d/%d", form, i, len(self._vocab))
                break
            if form not in tok:
                continue
            if tok.startswith(form):
                out.append((tok, prefix_quality(form, tok)))
            else:
                out.append((tok, substring_quality(form, tok)))
            if len(out) >= MAX_EXPANSION:
                break
        return out

    def expand(self, term: QueryTerm, similar: bool = True,
               deadline: Optional[Deadline] = None) -> List[Expansion]:
        """All (token, quality) pairs `term` matches, best quality kept per token."""
        deadline = deadline or Deadline.never()
        best: Dict[str, float] = {}
        for form, factor in term.forms:
            if term.substring:
                found = self._expand_substring(form, deadline)
            elif term.prefix:
                found = self._expand_prefix(form, deadline)
            else:
                found = self._expand_exact(form, similar, deadline)
            for tok, quality in found:
                q = quality * factor
                if q > best.get(tok, 0.0):
                    best[tok] = q
        return list(best.items())

    # matching --------------------------------------------------------------------------
    def match(
        self,
        query: str,
        limit: int = 50,
        deadline: Optional[Deadline] = None,
        similar: bool = True,
    ) -> List[ScoredId]:
        """
        Token-overlap match of `query` (space = OR).
        Returns up to `limit` (id, score) pairs, best first, corpus order on ties.
        On deadline expiry the partial accumulation so far is ranked and returned.
        """
        if not self._records or limit <= 0:
            return []
        deadline = deadline or Deadline.never()
        terms = parse_query(query, deadline)
        if not terms:
            return []

        n = len(self._records)
        scores = np.zeros(n, dtype=float)
        for term in terms:
            if deadline.expired():
                logger.debug("match(%r) stopped early at term %r", query, term.text)
                break
            term_best = np.zeros(n, dtype=float)
            for tok, quality in self.expand(term, similar, deadline):
                ords, weights = self._postings[tok]
                contrib = quality * self._idf[tok] * weights
                term_best[ords] = np.maximum(term_best[ords], contrib)
            scores += term_best

        hit = np.nonzero(scores > 0.0)[0]
        if hit.size == 0:
            return []
        rounded = np.round(scores[hit], 6)
        # hit is ascending by ordinal, so a stable sort keeps corpus order on ties
        order = np.argsort(-rounded, kind="stable")[:limit]
        return [(self._records[hit[i]].id, float(rounded[i])) for i in order]

    def stats(self) -> Dict[str, int]:
        return {
            "documents": len(self._records),
            "tokens": len(self._vocab),
            "trie_size": self._trie.size(),
            "bktree_size": self._bk.size(),
        }
