# emoji_picker/context/__init__.py
# text helpers shared by the index builder and the query engine

from .normalizer import fold_case, normalize_query, normalize_tag, strip_control  # canonical query/tag forms
from .tokenizer import simple_tokenize  # tokenizer used for index blobs and query terms

__all__ = [
    "fold_case",
    "normalize_query",
    "normalize_tag",
    "strip_control",
    "simple_tokenize",
]
