# emoji_picker/core/grouper.py
# Partitions the filtered corpus into category buckets.
# Built once, read many times by category pills and the grid view.

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Iterable, List, Union

from emoji_picker.core.records import EmojiGroup, Record

GroupKey = Union[int, EmojiGroup]


class GroupIndex:
    """
    Ordered mapping group -> records.
    Within a bucket records keep first-seen (corpus) order.
    """

    def __init__(self, records: Iterable[Record]) -> None:
        self._buckets: Dict[int, List[Record]] = OrderedDict()
        for r in records:
            self._buckets.setdefault(int(r.group or 0), []).append(r)

    def by_group(self, group: GroupKey) -> List[Record]:
        """Records of `group` (copy), empty for groups with nothing in them."""
        return list(self._buckets.get(int(group), ()))

    def available_groups(self) -> List[EmojiGroup]:
        """Non-empty groups in enumeration order; the reserved component group never shows."""
        return [g for g in EmojiGroup if not g.is_reserved and self._buckets.get(int(g))]

    def counts(self) -> Dict[int, int]:
        return {g: len(rs) for g, rs in self._buckets.items()}

    def __contains__(self, group: GroupKey) -> bool:
        return bool(self._buckets.get(int(group)))
