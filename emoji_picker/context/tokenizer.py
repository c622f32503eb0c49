# emoji_picker/context/tokenizer.py
# simple but extendable tokenizer, shared by the index and the query parser
import re
from typing import List

from .normalizer import fold_case

_WORD_RE = re.compile(r"\w+")


def simple_tokenize(s: str) -> List[str]:
    """
    Return case-folded tokens for `s`, in first-seen order, no duplicates.
    Word runs are always kept; a whitespace chunk that also carries
    punctuation is kept whole too, so ":-d" and "t-shirt" stay findable.
    """
    if not s:
        return []
    out: List[str] = []
    seen = set()
    for chunk in fold_case(s).split():
        words = _WORD_RE.findall(chunk)
        candidates = words if words == [chunk] else [chunk] + words
        for t in candidates:
            if t and t not in seen:
                seen.add(t)
                out.append(t)
    return out
