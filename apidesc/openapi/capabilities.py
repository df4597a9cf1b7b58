"""
Thread-safe memoization of type capability lookups.

Provides:
- Parse-from-string capability detection
- Async-bind capability detection
- Cache statistics

Endpoints may be described concurrently during startup, so one cache is
shared between threads. Entries are write-once per key and a key always
maps to the same value, so concurrent writers for one key are harmless.
"""

import datetime
import decimal
import enum
import inspect
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Tuple

from ..endpoint.metadata import is_class
from ..endpoint.signature import ParameterDescriptor


# Types that bind from a single string value out of the box.
_PARSEABLE_TYPES = frozenset({
    str, int, float, bool, complex,
    decimal.Decimal, uuid.UUID,
    datetime.datetime, datetime.date, datetime.time, datetime.timedelta,
})

_PARSE_METHODS = ("try_parse", "parse")
_BIND_ASYNC_METHOD = "bind_async"


@dataclass
class CacheStats:
    """Cache statistics for monitoring."""
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"hits": self.hits, "misses": self.misses, "hit_rate": self.hit_rate}


class CapabilityCache:
    """
    Memoized "does this type provide capability X" lookups.

    Parse capability: a built-in scalar, an Enum, or a class exposing a
    callable ``try_parse`` or ``parse`` attribute.

    Async-bind capability: the parameter type exposes a coroutine
    function ``bind_async``.
    """

    def __init__(self, enable_stats: bool = True):
        self.enable_stats = enable_stats
        self._cache: Dict[Tuple[str, Hashable], bool] = {}
        self._lock = threading.RLock()
        self._stats = CacheStats()

    def has_parse_capability(self, tp: Any) -> bool:
        return self._lookup("parse", tp, _detect_parse)

    def has_async_bind_capability(self, parameter: ParameterDescriptor) -> bool:
        return self._lookup("bind_async", parameter.type, _detect_bind_async)

    def _lookup(self, capability: str, tp: Any, detect) -> bool:
        try:
            key = (capability, tp)
            hash(key)
        except TypeError:
            # Unhashable annotations are not memoized
            return detect(tp)

        with self._lock:
            if key in self._cache:
                if self.enable_stats:
                    self._stats.hits += 1
                return self._cache[key]
            if self.enable_stats:
                self._stats.misses += 1

        value = detect(tp)
        with self._lock:
            self._cache.setdefault(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._stats = CacheStats()

    def get_stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._stats.hits, misses=self._stats.misses)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


def _detect_parse(tp: Any) -> bool:
    if not is_class(tp):
        return False
    if tp in _PARSEABLE_TYPES:
        return True
    if issubclass(tp, enum.Enum):
        return True
    return any(callable(getattr(tp, name, None)) for name in _PARSE_METHODS)


def _detect_bind_async(tp: Any) -> bool:
    if not is_class(tp):
        return False
    method = getattr(tp, _BIND_ASYNC_METHOD, None)
    return method is not None and inspect.iscoroutinefunction(method)
