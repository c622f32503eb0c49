# emoji_picker/core/fusion_ranker.py
"""
FusionRanker - merges the output of the search stages into one ordered list.

Design:
 - merge() is first-seen-wins by record id: an id found by an earlier stage
   keeps its earlier score and position, later stages only append new ids.
 - rank() sorts the scored entries by descending score with a stable sort
   (ties keep their first-assigned order), then appends the unscored
   fallback entries in the order they arrived, then truncates.
 - The result never contains a duplicate id.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

import numpy as np

from emoji_picker.core.strategies import Match

logger = logging.getLogger(__name__)

Accumulator = Dict[str, Match]  # insertion-ordered: record_id -> first Match


class FusionRanker:
    """
    Public API:
      new_accumulator()
      merge(acc, matches) -> number of new ids
      rank(acc) -> [Match]
    """

    def __init__(self, result_limit: int = 100):
        self.result_limit = result_limit

    @staticmethod
    def new_accumulator() -> Accumulator:
        return OrderedDict()

    @staticmethod
    def merge(acc: Accumulator, matches: Iterable[Match]) -> int:
        added = 0
        for m in matches:
            if m.record_id in acc:
                continue
            acc[m.record_id] = m
            added += 1
        return added

    def rank(self, acc: Accumulator, limit: Optional[int] = None) -> List[Match]:
        limit = self.result_limit if limit is None else limit
        if not acc or limit <= 0:
            return []

        scored = [m for m in acc.values() if m.score is not None]
        unscored = [m for m in acc.values() if m.score is None]

        if scored:
            scores = np.array([m.score for m in scored], dtype=float)
            order = np.argsort(-scores, kind="stable")
            scored = [scored[i] for i in order]

        ranked = scored + unscored
        if len(ranked) > limit:
            logger.debug("truncating %d merged results to %d", len(ranked), limit)
        return ranked[:limit]
