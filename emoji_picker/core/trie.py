# trie.py
# Simple Trie (prefix tree) over the index vocabulary.
# Powers trailing-wildcard terms ("cow*") in the term index.
# Keeps document frequencies so expansions can prefer common tokens.

from __future__ import annotations
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from emoji_picker.utils.cache_utils import Deadline

Token = str
DocFreq = int
Candidate = Tuple[Token, DocFreq]


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    is_word: marks that the path from the root spells a vocabulary token
    freq: number of documents the token occurs in
    """

    __slots__ = ("children", "is_word", "freq")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.is_word = False
        self.freq = 0


class Trie:
    """
    Trie of index tokens. Tokens arrive already case-folded by the tokenizer,
    so no normalization happens here.
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    # insertion -----------------------------------------------------
    def insert(self, token: str, docs: int = 1) -> None:
        """Insert a token, adding `docs` to its document frequency."""
        if not token:
            return

        node = self._root
        for ch in token:
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1
        node.freq += docs

    # search/traversal ---------------------------------------------------------
    def search_prefix(
        self, prefix: str, limit: int = 500, deadline: Optional[Deadline] = None
    ) -> List[Candidate]:
        """
        Return tokens starting with `prefix` (the prefix itself included when
        it is a token), as (token, doc_freq) sorted by
         - higher doc_freq first
         - lexicographically second
        """
        if not prefix:
            return []

        node = self._root
        for ch in prefix:
            nxt = node.children.get(ch)
            if nxt is None:
                return []
            node = nxt

        out: List[Candidate] = []
        self._collect(node, prefix, out, limit, deadline)
        out.sort(key=lambda t: (-t[1], t[0]))
        return out

    # internal collector (explicit stack, DFS in sorted child order) ----------
    def _collect(
        self,
        node: TrieNode,
        prefix: str,
        results: List[Candidate],
        limit: int,
        deadline: Optional[Deadline],
    ) -> None:
        stack = [(node, prefix)]
        while stack:
            if len(results) >= limit:
                return
            if deadline is not None and deadline.expired():
                return
            n, text = stack.pop()
            if n.is_word:
                results.append((text, n.freq))
            # reversed so the lexicographically smallest child is visited first
            for ch in sorted(n.children, reverse=True):
                stack.append((n.children[ch], text + ch))

    # convenience/debugging -----------------------------------------------------
    def size(self) -> int:
        """Number of distinct tokens."""
        return self._size

    def __contains__(self, token: str) -> bool:
        """Simple membership check."""
        node = self._root
        for ch in token:
            node = node.children.get(ch)
            if node is None:
                return False
        return node.is_word
