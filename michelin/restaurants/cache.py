from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any

from ..config import DEFAULT_SERVICE_CONFIG

# Insertion order is creation order, so the oldest entry is always first.
_cache: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()
_hits: int = 0
_misses: int = 0
_TTL: float = DEFAULT_SERVICE_CONFIG.cache_ttl
_MAX_ENTRIES: int = DEFAULT_SERVICE_CONFIG.cache_max_entries


def _make_key(request_dict: dict) -> str:
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def _evict(now: float) -> None:
    """Drop expired entries, then the oldest ones until there is room for one more."""
    while _cache:
        oldest = next(iter(_cache))
        if now - _cache[oldest]["created_at"] < _TTL and len(_cache) < _MAX_ENTRIES:
            break
        del _cache[oldest]


def cache_get(request_dict: dict) -> Any | None:
    global _hits, _misses
    key = _make_key(request_dict)
    with _lock:
        entry = _cache.get(key)
        if entry and time.time() - entry["created_at"] < _TTL:
            _hits += 1
            return entry["value"]
        if entry:
            del _cache[key]
        _misses += 1
    return None


def cache_set(request_dict: dict, value: Any) -> None:
    if _TTL <= 0 or _MAX_ENTRIES <= 0:
        return
    key = _make_key(request_dict)
    now = time.time()
    with _lock:
        _cache.pop(key, None)
        _evict(now)
        _cache[key] = {"value": value, "created_at": now}


def get_cache_stats() -> dict:
    with _lock:
        total = _hits + _misses
        return {
            "size": len(_cache),
            "max_entries": _MAX_ENTRIES,
            "hits": _hits,
            "misses": _misses,
            "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
            "ttl_seconds": _TTL,
        }


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _cache.clear()
        _hits = 0
        _misses = 0
