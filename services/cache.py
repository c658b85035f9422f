"""
Analysis Result Cache

In-memory TTL cache for completed analyses, keyed by a content fingerprint.
TTL = 1 hour by default; expired entries read as misses.

Prevents repeating the model calls for content analysed moments ago.
Safe for concurrent coroutines via an asyncio lock.  Two identical requests
racing each other may both run the pipeline; the later ``put`` wins.

Usage:
    from services.cache import result_cache, fingerprint_text
    key = fingerprint_text(text)
    cached = await result_cache.get(key)
    if cached:
        return cached
    result = await analyse(...)
    await result_cache.put(key, result)
"""

from __future__ import annotations

import asyncio
import hashlib
import time
from collections.abc import Callable
from typing import Any, Optional

from config import settings


# ── Fingerprints ───────────────────────────────────────────────────────

def fingerprint_url(url: str) -> str:
    return f"url-{url}"


def fingerprint_text(text: str) -> str:
    return f"text-{hashlib.sha256(text.encode('utf-8')).hexdigest()}"


def fingerprint_file(kind: str, filename: str, size: int) -> str:
    """Uploaded media is identified by name and byte size, not content."""
    return f"{kind}-{filename}-{size}"


# ── Cache ──────────────────────────────────────────────────────────────

class ResultCache:
    """Coroutine-safe in-memory cache with TTL expiry and oldest-first eviction."""

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_entries: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._cache: dict[str, tuple[float, Any]] = {}
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached result if present and not expired."""
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            inserted_at, result = entry
            if self._clock() - inserted_at > self._ttl:
                del self._cache[key]
                self._misses += 1
                return None

            self._hits += 1
            return result

    async def put(self, key: str, result: Any) -> None:
        """Store (or overwrite) a result.  Evicts the oldest entry when full."""
        async with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_entries:
                oldest_key = min(self._cache, key=lambda k: self._cache[k][0])
                del self._cache[oldest_key]

            self._cache[key] = (self._clock(), result)

    async def invalidate(self, key: str) -> None:
        async with self._lock:
            self._cache.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        """Cache hit/miss statistics."""
        total = self._hits + self._misses
        return {
            "entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }


# Shared across the application
result_cache = ResultCache(
    ttl_seconds=settings.cache_ttl_seconds,
    max_entries=settings.cache_max_entries,
)
