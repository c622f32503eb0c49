# emoji_picker/core/usage_tracker.py
"""
UsageTracker
Selection counters behind the "frequently used" pseudo-category.
 - one JSON-encoded {id: count} map under a single preference key
 - persisted synchronously after every increment (the map is small)
 - ids are resolved against the filtered corpus at read time, so ids that
   disappeared from the corpus are dropped silently
 - malformed stored state loads as empty; write failures are logged, never raised
"""

from __future__ import annotations

import json
import threading
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from emoji_picker.core.protocols import PreferenceStoreProtocol
from emoji_picker.core.records import Record
from emoji_picker.utils.logger_utils import Log

USAGE_KEY = "emojiUsageCount"
DEFAULT_LIMIT = 16


class UsageTracker:
    """
    Public API:
      record_usage(id)
      frequently_used() -> [Record] (at most `limit`)
      has_frequently_used()
      count(id)
      clear()
    """

    def __init__(
        self,
        store: PreferenceStoreProtocol,
        records: Callable[[], Iterable[Record]],
        limit: int = DEFAULT_LIMIT,
    ):
        """
        store: PreferenceStoreProtocol implementation
        records: callable returning the filtered corpus (called on read, so the
          corpus can still be loading lazily when the tracker is created)
        """
        self._store = store
        self._records = records
        self.limit = limit
        self._lock = threading.RLock()
        self._counts: Dict[str, int] = self._load()

    # Persistence ----------------------------------------------------------------
    def _load(self) -> Dict[str, int]:
        try:
            raw = self._store.get(USAGE_KEY)
        except Exception as e:
            Log.warning(f"[Usage] could not read stored counts: {e}")
            return {}
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            Log.warning(f"[Usage] stored counts are not valid JSON, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            Log.warning("[Usage] stored counts are not a JSON object, starting empty")
            return {}

        counts: Dict[str, int] = {}
        for k, v in data.items():
            # drop anything that isn't a sane count
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                continue
            counts[str(k)] = v
        return counts

    def _persist(self) -> None:
        try:
            self._store.set(USAGE_KEY, json.dumps(self._counts, sort_keys=True))
        except Exception as e:
            Log.error(f"[Usage] failed to persist usage counts: {e}")

    # Events ---------------------------------------------------------------------
    def record_usage(self, record_id: str) -> None:
        with self._lock:
            self._counts[record_id] = self._counts.get(record_id, 0) + 1
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._counts = {}
            try:
                self._store.remove(USAGE_KEY)
            except Exception as e:
                Log.error(f"[Usage] failed to remove stored usage counts: {e}")

    # Queries --------------------------------------------------------------------
    def count(self, record_id: str) -> int:
        with self._lock:
            return self._counts.get(record_id, 0)

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def frequently_used(self, limit: Optional[int] = None) -> List[Record]:
        """
        Top `limit` ids by descending count, then resolved against the corpus.
        Ids no longer in the corpus still take their slot and are dropped
        afterwards. Equal counts follow corpus order, unknown ids last by id.
        """
        limit = self.limit if limit is None else limit
        counts = self.counts()
        if not counts or limit <= 0:
            return []
        placed: Dict[str, Tuple[int, Record]] = {}
        for pos, r in enumerate(self._records()):
            placed.setdefault(r.id, (pos, r))
        ranked = sorted(
            (rid for rid, n in counts.items() if n > 0),
            key=lambda rid: (-counts[rid], rid not in placed, placed.get(rid, (0, None))[0], rid),
        )
        return [placed[rid][1] for rid in ranked[:limit] if rid in placed]

    def has_frequently_used(self) -> bool:
        return bool(self.frequently_used())
