"""LLM service: parameter resolution and cache-first generation."""

from typing import Any

from promptvault.cache.response_cache import ResponseCache
from promptvault.config.schema import GenerationConfig
from promptvault.providers.base import GenerationParams, LLMProvider
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)


class LLMService:
    """Sends prompts to a provider, answering from the cache when it can.

    The service holds no retry or fallback logic of its own; those belong to
    the provider it is given. Provider errors propagate unchanged and a
    failed request is never cached.

    Usage:
        service = LLMService(provider, cache)
        text = await service.generate_response("Explain this code", temperature=0.2)
    """

    def __init__(
        self,
        provider: LLMProvider,
        cache: ResponseCache,
        defaults: GenerationConfig | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Backend that generates text.
            cache: Response cache consulted before the provider.
            defaults: Temperature and token limit for requests that omit
                them.
        """
        self._provider = provider
        self._cache = cache
        self._defaults = defaults or GenerationConfig()

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def resolve_params(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **extra: Any,
    ) -> tuple[str, GenerationParams]:
        """Fill omitted request options with defaults.

        The model falls back to the provider's default, temperature and
        token limit to the configured generation defaults.

        Returns:
            The model name and the parameters sent with the request.
        """
        resolved_model = model if model is not None else self._provider.get_default_model()
        params = GenerationParams(
            temperature=self._defaults.temperature if temperature is None else temperature,
            max_tokens=self._defaults.max_tokens if max_tokens is None else max_tokens,
            extra=extra,
        )
        return resolved_model, params

    async def generate_response(
        self,
        prompt: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **extra: Any,
    ) -> str:
        """Generate a response, serving it from the cache when possible.

        Args:
            prompt: The prompt text.
            model: Model name; the provider default if None.
            temperature: Sampling temperature; the configured default if None.
            max_tokens: Token limit; the configured default if None.
            **extra: Provider-specific parameters, also part of the cache key.

        Returns:
            The generated or cached text.

        Raises:
            ProviderError: If the provider fails. Nothing is cached.
        """
        resolved_model, params = self.resolve_params(
            model, temperature, max_tokens, **extra
        )

        cached = await self._cache.get(prompt, resolved_model, params)
        if cached is not None:
            logger.debug("Cache hit", extra={"model": resolved_model})
            return cached

        logger.debug(
            "Generating response",
            extra={"provider": self._provider.provider_type.value, "model": resolved_model},
        )
        response = await self._provider.generate_text(prompt, resolved_model, params)

        await self._cache.set(prompt, resolved_model, params, response)
        return response

    async def clear_cache(self) -> int:
        """Delete every cached response. Returns the number removed."""
        return await self._cache.clear_cache()

    async def clear_expired_cache(self) -> int:
        """Delete expired or unreadable cached responses."""
        return await self._cache.clear_expired_cache()

    def get_default_model(self) -> str:
        return self._provider.get_default_model()

    async def get_available_models(self) -> list[str]:
        return await self._provider.get_available_models()
