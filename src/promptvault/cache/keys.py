"""Cache key generation.

A cache key is the SHA-256 fingerprint of the canonical JSON form of
``{"prompt", "model", "params"}``. Canonical means keys are sorted at every
level, so two parameter mappings that differ only in insertion order map to
the same key.
"""

from collections.abc import Mapping
from typing import Any

from promptvault.providers.base import GenerationParams
from promptvault.utils.hashing import hash_json

FINGERPRINT_LENGTH = 64


def generate_cache_key(
    prompt: str,
    model: str,
    params: GenerationParams | Mapping[str, Any],
) -> str:
    """Generate the cache key for a generation request.

    Args:
        prompt: The prompt text.
        model: The model name.
        params: Generation parameters, as ``GenerationParams`` or a plain
            mapping (already flattened).

    Returns:
        A 64-character lowercase hex digest.

    Raises:
        TypeError: If params contain values JSON cannot represent.
    """
    if isinstance(params, GenerationParams):
        params_dict = params.to_dict()
    else:
        params_dict = dict(params)

    return hash_json(
        {"prompt": prompt, "model": model, "params": params_dict},
        FINGERPRINT_LENGTH,
    )
