"""Response caching layer.

Responses are stored one file per request under a directory, named by the
SHA-256 fingerprint of ``(prompt, model, params)`` and expired lazily once
older than the configured TTL.

Usage:
    from promptvault.cache import DirectoryBlobStorage, ResponseCache

    cache = ResponseCache(DirectoryBlobStorage("~/.cache/promptvault/responses"))

    response = await cache.get("Explain this code", "llama3", params)
    if response is None:
        response = "..."
        await cache.set("Explain this code", "llama3", params, response)
"""

from promptvault.cache.base import BlobStorage, CacheEntry
from promptvault.cache.keys import generate_cache_key
from promptvault.cache.response_cache import ResponseCache
from promptvault.cache.storage import DirectoryBlobStorage, MemoryBlobStorage

__all__ = [
    # Base types
    "BlobStorage",
    "CacheEntry",
    # Storage backends
    "DirectoryBlobStorage",
    "MemoryBlobStorage",
    # Cache
    "ResponseCache",
    # Key generation
    "generate_cache_key",
]
