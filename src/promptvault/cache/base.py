"""Cache entry type and the blob storage interface."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from promptvault.exceptions import CacheCorruptedError


@dataclass(frozen=True)
class CacheEntry:
    """A cached LLM response.

    Entries carry no key of their own: they are stored under the
    fingerprint of the request that produced them.

    Attributes:
        timestamp: Creation time in epoch milliseconds.
        response: The cached response content.
    """

    timestamp: int
    response: str

    def age_ms(self, now: int) -> int:
        """Age of the entry at ``now`` (epoch milliseconds)."""
        return now - self.timestamp

    def is_expired(self, now: int, ttl_ms: int) -> bool:
        """Check whether the entry is older than ``ttl_ms`` at ``now``."""
        return self.age_ms(now) > ttl_ms

    def to_json(self) -> str:
        """Serialize to the on-disk JSON form."""
        return json.dumps({"timestamp": self.timestamp, "response": self.response})

    @classmethod
    def from_json(cls, raw: str | bytes) -> "CacheEntry":
        """Parse the on-disk JSON form.

        Args:
            raw: File content.

        Returns:
            The parsed entry.

        Raises:
            CacheCorruptedError: If the content is not a valid entry.
        """
        try:
            data: Any = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CacheCorruptedError(f"Cache entry is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CacheCorruptedError("Cache entry is not a JSON object")

        timestamp = data.get("timestamp")
        response = data.get("response")
        # bool is an int subclass; a boolean timestamp is still corrupt
        if not isinstance(timestamp, int) or isinstance(timestamp, bool):
            raise CacheCorruptedError("Cache entry has no integer timestamp")
        if not isinstance(response, str):
            raise CacheCorruptedError("Cache entry has no string response")

        return cls(timestamp=timestamp, response=response)


class BlobStorage(ABC):
    """Async key/blob storage backing the response cache.

    Keys are flat, filesystem-safe names (hex fingerprints). Values are
    opaque bytes.
    """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a blob is stored under ``key``."""
        pass

    @abstractmethod
    async def read(self, key: str) -> bytes:
        """Read the blob stored under ``key``.

        Raises:
            FileNotFoundError: If nothing is stored under ``key``.
        """
        pass

    @abstractmethod
    async def write(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous blob."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete the blob under ``key``.

        Returns:
            True if a blob was deleted, False if none existed.
        """
        pass

    @abstractmethod
    async def keys(self) -> list[str]:
        """List every stored key."""
        pass
