"""Component wiring for the CLI.

Builds the provider, cache, template store and service from a loaded
configuration. Nothing here is cached between calls; each command builds
the pieces it needs and passes them along explicitly.
"""

from dataclasses import dataclass
from typing import Any

from promptvault.cache import DirectoryBlobStorage, ResponseCache
from promptvault.cli.options import get_provider_type
from promptvault.config import (
    PromptVaultConfig,
    ProviderType,
    resolve_cache_dir,
    resolve_state_file,
)
from promptvault.providers import LLMProvider, ProviderRegistry
from promptvault.service import LLMService
from promptvault.templates import JsonFileKeyValueStore, TemplateStore
from promptvault.templates.defaults import BUILTIN_TEMPLATES_FILE


@dataclass
class AppContext:
    """Everything a command needs, built from one configuration.

    Attributes:
        config: The application configuration.
        service: LLM service wired to the provider and cache.
        templates: Template store (call ``initialize`` before use).
    """

    config: PromptVaultConfig
    service: LLMService
    templates: TemplateStore

    @property
    def cache(self) -> ResponseCache:
        return self.service.cache

    @property
    def provider(self) -> LLMProvider:
        return self.service.provider


def create_provider(
    provider_type: ProviderType,
    config: PromptVaultConfig,
    model: str | None = None,
) -> LLMProvider:
    """Create an LLM provider from configuration.

    Args:
        provider_type: Type of provider to create.
        config: Configuration supplying provider settings.
        model: Optional default model override.

    Returns:
        Configured LLMProvider instance.
    """
    default_model: str | None = None
    kwargs: dict[str, Any] = {}

    if provider_type == ProviderType.OLLAMA:
        ollama_config = config.providers.ollama
        default_model = ollama_config.default_model
        kwargs["base_url"] = ollama_config.base_url
        kwargs["timeout"] = ollama_config.timeout
    elif provider_type == ProviderType.OPENAI:
        openai_config = config.providers.openai
        default_model = openai_config.default_model
        kwargs["models"] = openai_config.models
        kwargs["timeout"] = openai_config.timeout
        if openai_config.api_key:
            kwargs["api_key"] = openai_config.api_key
    elif provider_type == ProviderType.ANTHROPIC:
        anthropic_config = config.providers.anthropic
        default_model = anthropic_config.default_model
        kwargs["models"] = anthropic_config.models
        kwargs["timeout"] = anthropic_config.timeout
        if anthropic_config.api_key:
            kwargs["api_key"] = anthropic_config.api_key

    return ProviderRegistry.create(
        provider_type,
        model=model or default_model,
        **kwargs,
    )


def create_cache(config: PromptVaultConfig, enabled: bool = True) -> ResponseCache:
    """Create the on-disk response cache.

    Args:
        config: Configuration supplying cache settings.
        enabled: False disables the cache for this invocation regardless of
            the configured value.
    """
    return ResponseCache(
        DirectoryBlobStorage(resolve_cache_dir(config)),
        enabled=enabled and config.cache.enabled,
        ttl_minutes=config.cache.ttl_minutes,
    )


def create_template_store(config: PromptVaultConfig) -> TemplateStore:
    """Create the template store persisted to the configured state file."""
    builtin_file = config.templates.builtin_file
    return TemplateStore(
        JsonFileKeyValueStore(resolve_state_file(config)),
        builtin_path=builtin_file.expanduser() if builtin_file else BUILTIN_TEMPLATES_FILE,
    )


def create_context(
    config: PromptVaultConfig,
    *,
    provider: str | None = None,
    model: str | None = None,
    no_cache: bool = False,
) -> AppContext:
    """Create an AppContext from configuration and CLI overrides.

    Args:
        config: Loaded configuration.
        provider: Provider name override (ollama, openai, anthropic, mock).
        model: Default model override.
        no_cache: Whether to bypass the cache.

    Returns:
        Fully wired AppContext.

    Example:
        ctx = create_context(load_config(), provider="ollama", no_cache=True)
        text = await ctx.service.generate_response("Hello")
    """
    provider_type = get_provider_type(provider, config.default_provider)

    llm_provider = create_provider(provider_type, config, model)
    cache = create_cache(config, enabled=not no_cache)
    service = LLMService(llm_provider, cache, config.generation)

    return AppContext(
        config=config,
        service=service,
        templates=create_template_store(config),
    )
