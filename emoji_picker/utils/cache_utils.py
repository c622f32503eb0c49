# cache_utils.py - v small cache and time helpers

from functools import lru_cache, wraps
import time
from typing import Callable, Optional


def timed(func: Callable) -> Callable:
    """Decorator returns tuple: (result, elapsed)"""
    @wraps(func)
    def _wrap(*a, **kw):
        t0 = time.perf_counter()
        res = func(*a, **kw)
        t1 = time.perf_counter()
        return res, (t1 - t0)
    return _wrap


def simple_lru(maxsize: int = 1024):
    """wrapper around functools.lru_cache."""
    def _decor(fn):
        return lru_cache(maxsize=maxsize)(fn)
    return _decor


class Deadline:
    """
    Cooperative time budget for one search stage.
    Loops poll expired() and stop early, keeping what they found so far.
    seconds=None never expires.
    """

    __slots__ = ("_end",)

    def __init__(self, seconds: Optional[float] = None):
        self._end = None if seconds is None else time.perf_counter() + max(0.0, seconds)

    def expired(self) -> bool:
        return self._end is not None and time.perf_counter() >= self._end

    def remaining(self) -> float:
        if self._end is None:
            return float("inf")
        return max(0.0, self._end - time.perf_counter())

    @classmethod
    def never(cls) -> "Deadline":
        return cls(None)
