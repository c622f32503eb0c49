# bktree.py
# BK-tree over the index vocabulary for "similar term" expansion
# (typo-tolerant lookup: "hart" -> "heart", "smilling" -> "smiling").
# - Node keeps the token's document frequency for tie-breaking.
# - Children are keyed by their exact edit distance to the parent, so a
#   query must measure the exact distance at every visited node to pick
#   which child edges can still hold a match.
# Query uses an explicit stack (no recursion).

from typing import Dict, Iterable, List, Optional, Tuple

from emoji_picker.utils.cache_utils import Deadline


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance; insert, delete and substitute each cost 1."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    # single row over the shorter string; `diag` holds the previous row's j-1
    row = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        diag, row[0] = row[0], i
        for j, cb in enumerate(b, 1):
            above = row[j]
            row[j] = min(above + 1, row[j - 1] + 1, diag + (ca != cb))
            diag = above
    return row[-1]


def similarity_budget(term: str) -> int:
    """Edit distance allowed for a term: none below 4 chars, 1 up to 7, then 2."""
    n = len(term)
    if n < 4:
        return 0
    if n < 8:
        return 1
    return 2


class BKTree:
    """BK-tree of index tokens."""

    class Node:
        __slots__ = ("token", "children", "count")

        def __init__(self, token: str, count: int):
            self.token = token
            self.children: Dict[int, "BKTree.Node"] = {}
            self.count = count

    def __init__(self):
        self.root: Optional[BKTree.Node] = None
        self._size = 0

    # insertion/building -------------------------------------------------------------
    def insert(self, token: str, count: int = 1) -> None:
        """Insert one token; re-inserting adds to its count."""
        if not token:
            return

        if self.root is None:
            self.root = BKTree.Node(token, count)
            self._size = 1
            return

        node = self.root
        while True:
            d = edit_distance(token, node.token)
            if d == 0:
                node.count += count
                return
            child = node.children.get(d)
            if child is None:
                node.children[d] = BKTree.Node(token, count)
                self._size += 1
                return
            node = child

    def insert_many(self, tokens: Iterable[Tuple[str, int]]) -> None:
        for token, count in tokens:
            self.insert(token, count)

    # query ---------------------------------------------------------------------------
    def query(
        self, token: str, max_dist: int = 1, deadline: Optional[Deadline] = None
    ) -> List[Tuple[str, int]]:
        """
        Return (token, distance) for tokens within max_dist of `token`,
        sorted by (distance, -count, token). The query token itself, if present,
        comes back with distance 0.
        """
        if not token or self.root is None or max_dist < 0:
            return []

        results: List[Tuple[str, int, int]] = []
        stack = [self.root]
        while stack:
            if deadline is not None and deadline.expired():
                break
            node = stack.pop()
            d = edit_distance(token, node.token)
            if d <= max_dist:
                results.append((node.token, d, node.count))

            # only children at distance [d - max_dist, d + max_dist] can match
            low = max(1, d - max_dist)
            high = d + max_dist
            for dist_key, child in node.children.items():
                if low <= dist_key <= high:
                    stack.append(child)

        results.sort(key=lambda item: (item[1], -item[2], item[0]))
        return [(t, dist) for (t, dist, _count) in results]

    def size(self) -> int:
        return self._size
