"""
emoji_picker.core

The search and indexing engine behind the emoji picker.
Contains:
 - corpus model and loading (Record, EmojiGroup, SkinTone, load_corpus, is_useful)
 - category grouping (GroupIndex)
 - the inverted index with prefix/similar-term expansion (TermIndex)
 - widen-then-fallback search (QueryEngine, FusionRanker, match strategies)
 - usage counters for "frequently used" (UsageTracker)
 - the facade the UI holds (EmojiService)
"""

from .errors import CorpusError, EmojiPickerError, IndexFrozenError
from .records import EmojiGroup, MultipleEmoticons, Record, SingleEmoticon, SkinTone
from .loader import filter_useful, is_useful, load_corpus, load_corpus_bytes
from .grouper import GroupIndex
from .term_index import TermIndex
from .fusion_ranker import FusionRanker
from .search_engine import QueryEngine, SearchResult
from .usage_tracker import UsageTracker
from .glyph_support import AlwaysSupported, CachedGlyphSupport, UnicodeGlyphSupport
from .emoji_service import EmojiService

__all__ = [
    "CorpusError",
    "EmojiPickerError",
    "IndexFrozenError",
    "EmojiGroup",
    "MultipleEmoticons",
    "Record",
    "SingleEmoticon",
    "SkinTone",
    "filter_useful",
    "is_useful",
    "load_corpus",
    "load_corpus_bytes",
    "GroupIndex",
    "TermIndex",
    "FusionRanker",
    "QueryEngine",
    "SearchResult",
    "UsageTracker",
    "AlwaysSupported",
    "CachedGlyphSupport",
    "UnicodeGlyphSupport",
    "EmojiService",
]

# Semantic version of the core module (updated automatically in release tooling)
__version__ = "0.1.0"
