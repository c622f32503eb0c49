# model_store.py - small persistence layer for user preferences

# handles saving and loading the picker's user state:
# - a key/value "preferences" document (string values under string keys)
# - JSON on disk, written through a temp file so a crash never leaves half a file
# - an in-memory twin for tests and hosts that bring their own storage

import json
import os
import tempfile
from typing import Dict, Optional

from emoji_picker.utils.logger_utils import Log


class MemoryPreferenceStore:
    """Preferences that live only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonPreferenceStore:
    """
    Preferences persisted as one JSON object file.
    Args:
        path: file location; parent directories are created on first write.
    Unreadable or non-object files load as empty (user state is never fatal).
    """

    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, str] = self._load()

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    # Persistence ---------------------------------------------------------
    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            Log.warning(f"[Preferences] load error, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            Log.warning(f"[Preferences] {self.path} is not a JSON object, starting empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".prefs-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
