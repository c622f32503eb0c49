# config_manager.py - JSON config manager for the search core

import json
import os
from typing import Any, Dict, Optional

from emoji_picker.utils.logger_utils import Log

DEFAULTS: Dict[str, Any] = {
    "internal_limit": 50,       # per-stage cap on index matches
    "result_limit": 100,        # public cap on search results
    "stage_timeout_ms": 100,    # per-stage budget, partial results on expiry
    "min_widening_length": 2,   # wildcard stages need at least this many chars
    "frequent_limit": 16,       # size of the "frequently used" pseudo-category
    "similar_terms": True,      # edit-distance term expansion in the native stage
    "glyph_filter": True,       # drop records the host can't render
    "preferences_path": None,   # None keeps usage counts in memory only
}


class Config:
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        if path:
            self._load()

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Config":
        cfg = cls()
        for k, v in overrides.items():
            cfg.set(k, v, persist=False)
        return cfg

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                Log.warning(f"[Config] ignoring unreadable {self.path}: {e}")
                return
            if not isinstance(loaded, dict):
                Log.warning(f"[Config] ignoring {self.path}: expected a JSON object")
                return
            for k, v in loaded.items():
                if k in self.data:
                    self.data[k] = v
                else:
                    Log.debug(f"[Config] unknown option '{k}' ignored")
        else:
            self.save()

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def set(self, key, val, persist: bool = True):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        default = DEFAULTS[key]
        if val is not None and default is not None:
            if isinstance(default, bool) and isinstance(val, str):
                val = val.strip().lower() in ("1", "true", "yes", "on")
            else:
                val = type(default)(val)
        self.data[key] = val
        if persist:
            self.save()

    # typed accessors used on the hot path
    @property
    def stage_timeout(self) -> float:
        return float(self.data["stage_timeout_ms"]) / 1000.0

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)
