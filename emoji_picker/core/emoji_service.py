# emoji_picker/core/emoji_service.py
"""
EmojiService - the facade the picker UI constructs once and holds.

Purpose:
 - Own the corpus pipeline: load -> usefulness filter -> glyph filter ->
   GroupIndex + TermIndex (built once, frozen, read without locks)
 - Own the UsageTracker and its preference store
 - Small public API for the UI layer and tests:
     get_all(), get_by_group(g), available_groups(), get_record(id)
     search(q), search_detailed(q), search_in_group(g, q)
     advanced_search(q, groups, exclude_terms, limit), find_similar(record, limit)
     record_usage(id), frequently_used(), has_frequently_used(), clear_usage()
     stats()

Initialization is lazy unless eager=True, and guarded so concurrent first
callers build exactly once. A corrupt corpus raises CorpusError from
whichever call triggered the build.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from emoji_picker.core.glyph_support import CachedGlyphSupport, UnicodeGlyphSupport
from emoji_picker.core.grouper import GroupIndex
from emoji_picker.core.loader import filter_useful, load_corpus
from emoji_picker.core.protocols import GlyphSupportProtocol, PreferenceStoreProtocol
from emoji_picker.core.records import EmojiGroup, Record
from emoji_picker.core.search_engine import QueryEngine, SearchResult
from emoji_picker.core.term_index import TermIndex
from emoji_picker.core.usage_tracker import UsageTracker
from emoji_picker.utils.config_manager import Config
from emoji_picker.utils.logger_utils import Log
from emoji_picker.utils.model_store import JsonPreferenceStore, MemoryPreferenceStore


class _Corpus:
    """Everything built from the corpus file. Immutable once constructed."""

    __slots__ = ("records", "by_id", "groups", "index", "engine", "dropped_unsupported")

    def __init__(self, records: List[Record], index: TermIndex, engine: QueryEngine,
                 dropped_unsupported: int):
        self.records = records
        self.by_id = {r.id: r for r in records}
        self.groups = GroupIndex(records)
        self.index = index
        self.engine = engine
        self.dropped_unsupported = dropped_unsupported


class EmojiService:
    """
    Args:
        corpus_path: JSON corpus file; None uses the bundled asset
        config: Config instance; defaults apply when omitted
        preferences: PreferenceStoreProtocol for usage counts; when omitted a
            JsonPreferenceStore is used if config 'preferences_path' is set,
            otherwise counts live in memory
        glyph_support: GlyphSupportProtocol; defaults to a cached Unicode check
            (or nothing at all when config 'glyph_filter' is off)
        eager: build the corpus and index now instead of on first use
    """

    def __init__(
        self,
        corpus_path: Optional[Union[str, Path]] = None,
        config: Optional[Config] = None,
        preferences: Optional[PreferenceStoreProtocol] = None,
        glyph_support: Optional[GlyphSupportProtocol] = None,
        eager: bool = False,
    ):
        self.corpus_path = corpus_path
        self.config = config or Config()
        self.glyph_support = glyph_support
        if self.glyph_support is None and self.config["glyph_filter"]:
            self.glyph_support = CachedGlyphSupport(UnicodeGlyphSupport())

        if preferences is None:
            path = self.config["preferences_path"]
            preferences = JsonPreferenceStore(path) if path else MemoryPreferenceStore()
        self.preferences = preferences

        self._corpus: Optional[_Corpus] = None
        self._init_lock = threading.Lock()
        self._started_at = time.time()
        self.usage = UsageTracker(
            self.preferences,
            lambda: self._ensure().records,
            limit=self.config["frequent_limit"],
        )
        if eager:
            self._ensure()

    # Initialization ----------------------------------------------------------------
    def _ensure(self) -> _Corpus:
        corpus = self._corpus
        if corpus is not None:
            return corpus
        with self._init_lock:
            if self._corpus is None:
                self._corpus = self._build()
            return self._corpus

    def _build(self) -> _Corpus:
        with Log.time_block("corpus pipeline"):
            records = filter_useful(load_corpus(self.corpus_path))
            dropped = 0
            if self.glyph_support is not None:
                supported = [r for r in records if self.glyph_support.is_supported(r.display)]
                dropped = len(records) - len(supported)
                records = supported
            index = TermIndex.build(records)
            engine = QueryEngine.from_config(index, records, self.config)
        if dropped:
            Log.info(f"[EmojiService] {dropped} records hidden, glyphs not renderable here")
        Log.info(f"[EmojiService] ready with {len(records)} records")
        return _Corpus(records, index, engine, dropped)

    @property
    def is_loaded(self) -> bool:
        return self._corpus is not None

    # Browsing --------------------------------------------------------------------
    def get_all(self) -> List[Record]:
        return list(self._ensure().records)

    def get_by_group(self, group: Union[int, EmojiGroup]) -> List[Record]:
        return self._ensure().groups.by_group(group)

    def available_groups(self) -> List[EmojiGroup]:
        return self._ensure().groups.available_groups()

    def get_record(self, record_id: str) -> Optional[Record]:
        return self._ensure().by_id.get(record_id)

    # Search ----------------------------------------------------------------------
    def search(self, query: str) -> List[Record]:
        return self._ensure().engine.search(query)

    def search_detailed(self, query: str) -> List[SearchResult]:
        return self._ensure().engine.search_detailed(query)

    def search_in_group(self, group: Union[int, EmojiGroup], query: str) -> List[Record]:
        """Search restricted to one category; an empty query lists the category."""
        if not query or not query.strip():
            return self.get_by_group(group)
        corpus = self._ensure()
        g = int(group)
        # filter before the public cap
        found = corpus.engine.search(query, limit=len(corpus.records))
        return [r for r in found if r.group == g][:corpus.engine.result_limit]

    def advanced_search(
        self,
        query: str,
        groups: Optional[Iterable[Union[int, EmojiGroup]]] = None,
        exclude_terms: Optional[Iterable[str]] = None,
        limit: int = 50,
    ) -> List[Record]:
        return self._ensure().engine.advanced_search(query, groups, exclude_terms, limit)

    def find_similar(self, record: Record, limit: int = 20) -> List[Record]:
        return self._ensure().engine.find_similar(record, limit)

    # Usage -----------------------------------------------------------------------
    def record_usage(self, record_id: str) -> None:
        self.usage.record_usage(record_id)

    def frequently_used(self) -> List[Record]:
        return self.usage.frequently_used()

    def has_frequently_used(self) -> bool:
        return self.usage.has_frequently_used()

    def clear_usage(self) -> None:
        self.usage.clear()

    # Debug -----------------------------------------------------------------------
    def stats(self) -> Dict[str, Any]:
        corpus = self._ensure()
        return {
            "records": len(corpus.records),
            "hidden_unsupported": corpus.dropped_unsupported,
            "groups": {g.display_name: len(corpus.groups.by_group(g))
                       for g in corpus.groups.available_groups()},
            "index": corpus.index.stats(),
            "usage_entries": len(self.usage.counts()),
            "uptime_sec": round(time.time() - self._started_at, 1),
        }
