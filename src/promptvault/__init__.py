"""promptvault: prompt templates and cached LLM responses.

Usage:
    from promptvault import LLMService, ResponseCache, TemplateStore
"""

from promptvault.cache import DirectoryBlobStorage, MemoryBlobStorage, ResponseCache
from promptvault.exceptions import PromptVaultError
from promptvault.providers import GenerationParams, LLMProvider
from promptvault.service import LLMService
from promptvault.templates import (
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    PromptTemplate,
    TemplateStore,
)

__version__ = "0.1.0"

__all__ = [
    "DirectoryBlobStorage",
    "GenerationParams",
    "JsonFileKeyValueStore",
    "LLMProvider",
    "LLMService",
    "MemoryBlobStorage",
    "MemoryKeyValueStore",
    "PromptTemplate",
    "PromptVaultError",
    "ResponseCache",
    "TemplateStore",
    "__version__",
]
