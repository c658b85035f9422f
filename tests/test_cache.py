"""Tests for the in-memory result cache."""

from __future__ import annotations

import asyncio

import pytest

from services.cache import ResultCache, fingerprint_file, fingerprint_text, fingerprint_url


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestFingerprints:
    def test_url_key_is_verbatim(self):
        assert fingerprint_url("https://example.com/a?b=1") == "url-https://example.com/a?b=1"

    def test_text_key_is_stable_hash(self):
        a = fingerprint_text("same text")
        assert a == fingerprint_text("same text")
        assert a != fingerprint_text("same text ")
        assert a.startswith("text-") and len(a) == len("text-") + 64

    def test_file_key_uses_name_and_size(self):
        assert fingerprint_file("image", "cat.png", 2048) == "image-cat.png-2048"
        assert fingerprint_file("video", "cat.png", 2048) != fingerprint_file("image", "cat.png", 2048)


class TestResultCache:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self):
        cache = ResultCache()
        assert await cache.get("k") is None
        await cache.put("k", {"truthScore": 66})
        assert await cache.get("k") == {"truthScore": 66}
        assert cache.stats == {"entries": 1, "hits": 1, "misses": 1, "hit_rate": 0.5}

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=3600, clock=clock)
        await cache.put("k", "result")

        clock.now += 3600
        assert await cache.get("k") == "result"

        clock.now += 1
        assert await cache.get("k") is None
        assert cache.stats["entries"] == 0

    @pytest.mark.asyncio
    async def test_oldest_entry_evicted_when_full(self):
        clock = FakeClock()
        cache = ResultCache(max_entries=2, clock=clock)
        await cache.put("a", 1)
        clock.now += 1
        await cache.put("b", 2)
        clock.now += 1
        await cache.put("c", 3)

        assert await cache.get("a") is None
        assert await cache.get("b") == 2
        assert await cache.get("c") == 3

    @pytest.mark.asyncio
    async def test_overwrite_does_not_evict(self):
        clock = FakeClock()
        cache = ResultCache(max_entries=2, clock=clock)
        await cache.put("a", 1)
        await cache.put("b", 2)
        clock.now += 1
        await cache.put("a", 10)

        assert await cache.get("a") == 10
        assert await cache.get("b") == 2

    @pytest.mark.asyncio
    async def test_overwrite_refreshes_timestamp(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=10, clock=clock)
        await cache.put("a", 1)
        clock.now += 8
        await cache.put("a", 2)
        clock.now += 8
        assert await cache.get("a") == 2

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self):
        cache = ResultCache()
        await cache.put("a", 1)
        await cache.put("b", 2)
        await cache.invalidate("a")
        await cache.invalidate("missing")
        assert await cache.get("a") is None
        assert await cache.get("b") == 2

        await cache.clear()
        assert cache.stats == {"entries": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}

    @pytest.mark.asyncio
    async def test_concurrent_puts_respect_capacity(self):
        cache = ResultCache(max_entries=10)
        await asyncio.gather(*(cache.put(f"k{i}", i) for i in range(50)))
        assert cache.stats["entries"] == 10
