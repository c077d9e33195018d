"""TTL-bounded response cache keyed by request fingerprint."""

from collections.abc import Mapping
from typing import Any

from promptvault.cache.base import BlobStorage, CacheEntry
from promptvault.cache.keys import generate_cache_key
from promptvault.exceptions import CacheCorruptedError
from promptvault.providers.base import GenerationParams
from promptvault.utils.clock import MS_PER_MINUTE, Clock, now_ms
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)

Params = GenerationParams | Mapping[str, Any]


class ResponseCache:
    """Cache of LLM responses with lazy TTL expiry.

    Each response is stored as its own blob under the fingerprint of
    ``(prompt, model, params)``. Expiry is enforced when an entry is read:
    a stale or corrupt entry is deleted on the spot and reported as a miss.
    :meth:`clear_expired_cache` performs the same check over every entry.

    Attributes:
        enabled: When False, ``get`` always misses and ``set`` does nothing,
            without touching storage.
        ttl_minutes: Maximum entry age in minutes.
    """

    def __init__(
        self,
        storage: BlobStorage,
        *,
        enabled: bool = True,
        ttl_minutes: int = 60,
        clock: Clock = now_ms,
    ) -> None:
        """Initialize the cache.

        Args:
            storage: Where entries are kept.
            enabled: Whether the cache is active.
            ttl_minutes: Maximum entry age in minutes.
            clock: Source of the current time in epoch milliseconds.
        """
        if ttl_minutes <= 0:
            raise ValueError(f"ttl_minutes must be positive, got {ttl_minutes}")
        self._storage = storage
        self._enabled = enabled
        self._ttl_minutes = ttl_minutes
        self._clock = clock

        self._hits = 0
        self._misses = 0

    @property
    def storage(self) -> BlobStorage:
        return self._storage

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ttl_minutes(self) -> int:
        return self._ttl_minutes

    @property
    def ttl_ms(self) -> int:
        return self._ttl_minutes * MS_PER_MINUTE

    def configure(
        self,
        *,
        enabled: bool | None = None,
        ttl_minutes: int | None = None,
    ) -> None:
        """Apply new settings to a live cache.

        Existing entries are kept; a shorter TTL simply makes more of them
        count as expired on their next read.
        """
        if ttl_minutes is not None:
            if ttl_minutes <= 0:
                raise ValueError(f"ttl_minutes must be positive, got {ttl_minutes}")
            self._ttl_minutes = ttl_minutes
        if enabled is not None:
            self._enabled = enabled
        logger.debug(
            "Cache reconfigured",
            extra={"enabled": self._enabled, "ttl_minutes": self._ttl_minutes},
        )

    async def get(self, prompt: str, model: str, params: Params) -> str | None:
        """Look up a cached response.

        Args:
            prompt: The prompt text.
            model: The model name.
            params: Generation parameters.

        Returns:
            The cached response, or None on a miss (absent, expired,
            corrupt, or cache disabled).
        """
        key = generate_cache_key(prompt, model, params)

        if not self._enabled:
            return None

        if not await self._storage.exists(key):
            self._misses += 1
            return None

        entry = await self._load(key)
        if entry is None or entry.is_expired(self._clock(), self.ttl_ms):
            await self._storage.delete(key)
            self._misses += 1
            logger.debug("Dropped stale cache entry", extra={"key": key})
            return None

        self._hits += 1
        return entry.response

    async def set(self, prompt: str, model: str, params: Params, response: str) -> None:
        """Store a response, replacing any entry with the same fingerprint.

        Args:
            prompt: The prompt text.
            model: The model name.
            params: Generation parameters.
            response: The response to cache.
        """
        if not self._enabled:
            return

        key = generate_cache_key(prompt, model, params)
        entry = CacheEntry(timestamp=self._clock(), response=response)
        await self._storage.write(key, entry.to_json().encode("utf-8"))
        logger.debug("Cached response", extra={"key": key})

    async def clear_cache(self) -> int:
        """Delete every entry.

        Returns:
            The number of entries deleted.
        """
        removed = 0
        for key in await self._storage.keys():
            if await self._storage.delete(key):
                removed += 1
        logger.info("Cleared cache", extra={"removed": removed})
        return removed

    async def clear_expired_cache(self) -> int:
        """Delete every expired or unreadable entry.

        Returns:
            The number of entries deleted.
        """
        now = self._clock()
        ttl_ms = self.ttl_ms
        removed = 0

        for key in await self._storage.keys():
            entry = await self._load(key)
            if entry is None or entry.is_expired(now, ttl_ms):
                if await self._storage.delete(key):
                    removed += 1

        logger.info("Cleared expired cache entries", extra={"removed": removed})
        return removed

    async def count(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(await self._storage.keys())

    def stats(self) -> dict[str, Any]:
        """Hit/miss counters and settings for this cache instance."""
        total_requests = self._hits + self._misses
        return {
            "enabled": self._enabled,
            "ttl_minutes": self._ttl_minutes,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total_requests if total_requests > 0 else 0.0,
        }

    async def _load(self, key: str) -> CacheEntry | None:
        """Read and parse an entry; None if it vanished or is corrupt."""
        try:
            raw = await self._storage.read(key)
        except FileNotFoundError:
            return None

        try:
            return CacheEntry.from_json(raw)
        except CacheCorruptedError as e:
            logger.warning("Corrupt cache entry", extra={"key": key, "error": str(e)})
            return None

    def __repr__(self) -> str:
        return (
            f"ResponseCache(storage={self._storage!r}, enabled={self._enabled}, "
            f"ttl_minutes={self._ttl_minutes})"
        )
