# emoji_picker/core/errors.py
# Exception types shared across the core.


class EmojiPickerError(Exception):
    """Base class for every error raised by emoji_picker."""


class CorpusError(EmojiPickerError):
    """
    The bundled corpus is missing, unparseable or violates a data invariant.
    Fatal: there is no degraded mode without the corpus.
    """


class IndexFrozenError(EmojiPickerError):
    """Raised when something tries to add documents to a built index."""
