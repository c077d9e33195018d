"""Provider registry mapping provider types to factory functions."""

from collections.abc import Callable
from typing import Any

from promptvault.config.schema import ProviderType
from promptvault.exceptions import ProviderError, ProviderNotAvailableError
from promptvault.providers.base import LLMProvider

# Type for provider factory functions
ProviderFactory = Callable[..., LLMProvider]


class ProviderRegistry:
    """Registry of provider factories.

    The registry only knows how to build providers; it never holds on to
    the instances it creates. The application constructs one provider at
    start-up and passes it to whatever needs it.

    Usage:
        @ProviderRegistry.register(ProviderType.OLLAMA)
        def create_ollama(model: str = "llama3", **kwargs) -> OllamaProvider:
            return OllamaProvider(model=model, **kwargs)

        provider = ProviderRegistry.create(ProviderType.OLLAMA, model="llama3")
    """

    _factories: dict[ProviderType, ProviderFactory] = {}

    @classmethod
    def register(
        cls, provider_type: ProviderType
    ) -> Callable[[ProviderFactory], ProviderFactory]:
        """Decorator to register a provider factory.

        Args:
            provider_type: The type of provider this factory creates.

        Returns:
            Decorator function.
        """

        def decorator(factory: ProviderFactory) -> ProviderFactory:
            cls._factories[provider_type] = factory
            return factory

        return decorator

    @classmethod
    def create(
        cls,
        provider_type: ProviderType,
        model: str | None = None,
        **kwargs: Any,
    ) -> LLMProvider:
        """Create a provider instance.

        Args:
            provider_type: Type of provider to create.
            model: Default model name (uses the factory default if None).
            **kwargs: Additional arguments for the provider factory.

        Returns:
            Provider instance.

        Raises:
            ProviderNotAvailableError: If provider type is not registered.
            ProviderError: If provider creation fails.
        """
        factory = cls._factories.get(provider_type)
        if factory is None:
            available = [p.value for p in cls._factories]
            raise ProviderNotAvailableError(
                f"Provider '{provider_type.value}' is not registered. "
                f"Available providers: {available}"
            )

        try:
            if model is not None:
                return factory(model=model, **kwargs)
            return factory(**kwargs)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Failed to create provider '{provider_type.value}': {e}"
            ) from e

    @classmethod
    def list_available(cls) -> list[ProviderType]:
        """List all registered provider types."""
        return list(cls._factories.keys())

    @classmethod
    def is_registered(cls, provider_type: ProviderType) -> bool:
        """Check if a provider type is registered."""
        return provider_type in cls._factories
