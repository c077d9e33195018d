"""Content hashing utilities."""

import hashlib
import json
from typing import Any


def hash_content(content: str, length: int = 64) -> str:
    """Hash string content using SHA256.

    Args:
        content: String content to hash.
        length: Length of hash to return (max 64).

    Returns:
        Hex digest truncated to specified length.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:length]


def canonical_json(data: Any) -> str:
    """Serialize data to a canonical JSON string.

    Keys are sorted at every nesting level and separators carry no
    whitespace, so two structurally equal values always produce the
    same string regardless of dict insertion order.

    Args:
        data: JSON-serializable value.

    Returns:
        Canonical JSON text.

    Raises:
        TypeError: If data contains values JSON cannot represent.
    """
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_json(data: Any, length: int = 64) -> str:
    """Hash a JSON-serializable value via its canonical form.

    Args:
        data: JSON-serializable value.
        length: Length of hash to return (max 64).

    Returns:
        Hex digest of the canonical JSON text.
    """
    return hash_content(canonical_json(data), length)
