"""Configuration management."""

from promptvault.config.loader import (
    apply_env_overrides,
    load_config,
    resolve_cache_dir,
    resolve_state_file,
)
from promptvault.config.schema import (
    CacheConfig,
    GenerationConfig,
    PromptVaultConfig,
    ProviderType,
)

__all__ = [
    "CacheConfig",
    "GenerationConfig",
    "PromptVaultConfig",
    "ProviderType",
    "apply_env_overrides",
    "load_config",
    "resolve_cache_dir",
    "resolve_state_file",
]
