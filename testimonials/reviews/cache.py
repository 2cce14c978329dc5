from __future__ import annotations

import time

from .config import DEFAULT_LISTING_CONFIG
from .models import Review

_snapshot: tuple[Review, ...] | None = None
_created_at: float = 0.0
_hits: int = 0
_misses: int = 0


def cache_get(ttl: float = DEFAULT_LISTING_CONFIG.cache_ttl) -> tuple[Review, ...] | None:
    """Return the cached snapshot if it is younger than *ttl* seconds."""
    global _hits, _misses, _snapshot
    if _snapshot is not None and time.time() - _created_at < ttl:
        _hits += 1
        return _snapshot
    _snapshot = None
    _misses += 1
    return None


def cache_set(reviews: tuple[Review, ...]) -> None:
    global _snapshot, _created_at
    _snapshot = reviews
    _created_at = time.time()


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "cached_reviews": len(_snapshot) if _snapshot is not None else 0,
        "age_seconds": round(time.time() - _created_at, 1) if _snapshot is not None else None,
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _snapshot, _created_at, _hits, _misses
    _snapshot = None
    _created_at = 0.0
    _hits = 0
    _misses = 0
