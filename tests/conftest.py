# tests/conftest.py
import json

import pytest

from corpus_fixture import RAW_CORPUS
from emoji_picker.core.glyph_support import AlwaysSupported
from emoji_picker.core.loader import filter_useful, load_corpus_bytes
from emoji_picker.core.emoji_service import EmojiService
from emoji_picker.core.search_engine import QueryEngine
from emoji_picker.core.term_index import TermIndex
from emoji_picker.utils.config_manager import Config
from emoji_picker.utils.model_store import MemoryPreferenceStore


@pytest.fixture
def raw_corpus():
    return json.loads(json.dumps(RAW_CORPUS))


@pytest.fixture
def corpus_path(tmp_path, raw_corpus):
    p = tmp_path / "emoji_data.json"
    p.write_text(json.dumps(raw_corpus), encoding="utf-8")
    return p


@pytest.fixture
def records(raw_corpus):
    return load_corpus_bytes(json.dumps(raw_corpus))


@pytest.fixture
def useful(records):
    return filter_useful(records)


@pytest.fixture
def index(useful):
    return TermIndex.build(useful)


@pytest.fixture
def engine(index, useful):
    return QueryEngine(index, useful)


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def service(corpus_path, store):
    return EmojiService(
        corpus_path=corpus_path,
        config=Config.from_dict({"glyph_filter": False}),
        preferences=store,
        glyph_support=AlwaysSupported(),
    )


@pytest.fixture(scope="session")
def bundled_service():
    # whole bundled corpus, built once for the session
    return EmojiService(eager=True)
