"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from promptvault.config.defaults import (
    DEFAULT_CONFIG_TOML,
    DEFAULT_RESPONSE_DIR,
    DEFAULT_STATE_FILE,
    ENV_ANTHROPIC_API_KEY,
    ENV_CACHE_DIR,
    ENV_DEFAULT_MODEL,
    ENV_DEFAULT_PROVIDER,
    ENV_LOG_LEVEL,
    ENV_NO_CACHE,
    ENV_OLLAMA_HOST,
    ENV_OPENAI_API_KEY,
    get_config_path,
)
from promptvault.config.schema import ProviderType, PromptVaultConfig
from promptvault.exceptions import ConfigError, ConfigValidationError
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> PromptVaultConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If the configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return apply_env_overrides(PromptVaultConfig())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)
        logger.info("Created default configuration", extra={"path": str(path)})

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = PromptVaultConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return apply_env_overrides(config)


def apply_env_overrides(config: PromptVaultConfig) -> PromptVaultConfig:
    """Apply environment variable overrides to configuration."""
    provider_env = os.environ.get(ENV_DEFAULT_PROVIDER)
    if provider_env:
        with contextlib.suppress(ValueError):
            config.default_provider = ProviderType(provider_env.lower())

    # Model override applies to the default provider only
    model_env = os.environ.get(ENV_DEFAULT_MODEL)
    if model_env:
        if config.default_provider == ProviderType.OLLAMA:
            config.providers.ollama.default_model = model_env
        elif config.default_provider == ProviderType.OPENAI:
            config.providers.openai.default_model = model_env
        elif config.default_provider == ProviderType.ANTHROPIC:
            config.providers.anthropic.default_model = model_env

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    cache_dir = os.environ.get(ENV_CACHE_DIR)
    if cache_dir:
        config.cache.directory = Path(cache_dir)

    no_cache = os.environ.get(ENV_NO_CACHE)
    if no_cache and no_cache.lower() in ("1", "true", "yes"):
        config.cache.enabled = False

    openai_key = os.environ.get(ENV_OPENAI_API_KEY)
    if openai_key and not config.providers.openai.api_key:
        config.providers.openai.api_key = openai_key

    anthropic_key = os.environ.get(ENV_ANTHROPIC_API_KEY)
    if anthropic_key and not config.providers.anthropic.api_key:
        config.providers.anthropic.api_key = anthropic_key

    ollama_host = os.environ.get(ENV_OLLAMA_HOST)
    if ollama_host:
        config.providers.ollama.base_url = ollama_host

    return config


def resolve_cache_dir(config: PromptVaultConfig) -> Path:
    """Return the directory holding cached responses."""
    if config.cache.directory:
        return config.cache.directory.expanduser()
    return DEFAULT_RESPONSE_DIR


def resolve_state_file(config: PromptVaultConfig) -> Path:
    """Return the JSON document holding persisted templates."""
    if config.templates.state_file:
        return config.templates.state_file.expanduser()
    return DEFAULT_STATE_FILE
