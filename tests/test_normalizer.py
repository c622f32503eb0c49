# tests/test_normalizer.py
import pytest

from emoji_picker.context.normalizer import fold_case, normalize_query, normalize_tag
from emoji_picker.context.tokenizer import simple_tokenize


def test_normalize_query_basics():
    assert normalize_query("  Cowboy \t HAT\n") == "cowboy hat"
    assert normalize_query("co\x00w") == "cow"
    assert normalize_query("") == ""
    assert normalize_query("\x01\x02") == ""


@pytest.mark.parametrize("q", ["\u0131", "\u00df", "stra\u00dfe", "\u0130stanbul", "\u01c5", "Cow"])
def test_query_and_its_upper_case_fold_alike(q):
    assert normalize_query(q) == normalize_query(q.upper())


def test_dotless_i_folds_to_plain_i():
    assert fold_case("\u0131") == "i"
    assert fold_case("\u00df") == "ss"


def test_tokenizer_uses_the_same_fold():
    assert simple_tokenize("STRASSE stra\u00dfe") == ["strasse"]
    assert simple_tokenize("T-Shirt") == ["t-shirt", "t", "shirt"]


def test_normalize_tag_keeps_case():
    assert normalize_tag("  Big   Smile ") == "Big Smile"
