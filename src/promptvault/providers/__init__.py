"""LLM provider abstraction layer.

This module provides a unified interface for generating text with
different LLM backends (Ollama, OpenAI, Anthropic).

Usage:
    from promptvault.providers import GenerationParams, ProviderRegistry, ProviderType

    provider = ProviderRegistry.create(ProviderType.OLLAMA, model="llama3")
    text = await provider.generate_text(
        "Explain this code", provider.get_default_model(), GenerationParams()
    )
"""

import contextlib

from promptvault.config.schema import ProviderType
from promptvault.providers.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    GenerationParams,
    LLMProvider,
)
from promptvault.providers.fallback import FallbackProvider
from promptvault.providers.mock import MockProvider
from promptvault.providers.registry import ProviderRegistry

# Backend modules register themselves; their SDKs are imported lazily, so
# these only fail if the module itself is broken.
with contextlib.suppress(ImportError):
    from promptvault.providers import ollama  # noqa: F401

with contextlib.suppress(ImportError):
    from promptvault.providers import openai  # noqa: F401

with contextlib.suppress(ImportError):
    from promptvault.providers import anthropic  # noqa: F401

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "GenerationParams",
    "LLMProvider",
    "ProviderType",
    "ProviderRegistry",
    "MockProvider",
    "FallbackProvider",
]
