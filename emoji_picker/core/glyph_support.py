# emoji_picker/core/glyph_support.py
"""
Glyph support checks - can the host render this grapheme sequence?

Contains:
 - UnicodeGlyphSupport: heuristic, every significant code point must be
   assigned in this interpreter's Unicode database (a newer corpus than the
   runtime knows about shows up as unassigned code points)
 - CachedGlyphSupport: memoizes any implementation; a probe that raises
   counts as supported
 - AlwaysSupported: no-op
"""

from __future__ import annotations

import logging
import threading
import unicodedata
from typing import Dict

from emoji_picker.core.records import ALL_MODIFIERS
from emoji_picker.utils.cache_utils import simple_lru

logger = logging.getLogger(__name__)

ZWJ = "\u200d"
VS15 = "\ufe0e"
VS16 = "\ufe0f"
KEYCAP = "\u20e3"
_JOINERS = frozenset((ZWJ, VS15, VS16, KEYCAP)) | ALL_MODIFIERS


def _is_tag_char(ch: str) -> bool:
    # subdivision flag tag sequences (U+E0020..U+E007F)
    return 0xE0020 <= ord(ch) <= 0xE007F


@simple_lru(maxsize=4096)
def is_assigned(ch: str) -> bool:
    return unicodedata.category(ch) != "Cn"


class UnicodeGlyphSupport:
    def is_supported(self, text: str) -> bool:
        if not text:
            return False
        for ch in text:
            if ch in _JOINERS or _is_tag_char(ch):
                continue
            if not is_assigned(ch):
                return False
        return True


class AlwaysSupported:
    def is_supported(self, text: str) -> bool:
        return True


class CachedGlyphSupport:
    """Wraps another checker; answers are computed once per display string."""

    def __init__(self, inner=None):
        self.inner = inner or UnicodeGlyphSupport()
        self._cache: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def is_supported(self, text: str) -> bool:
        with self._lock:
            hit = self._cache.get(text)
        if hit is not None:
            return hit
        try:
            ok = bool(self.inner.is_supported(text))
        except Exception as e:
            logger.debug("glyph probe failed for %r, assuming supported: %s", text, e)
            ok = True
        with self._lock:
            self._cache[text] = ok
        return ok

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)
