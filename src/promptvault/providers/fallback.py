"""Multi-provider fallback logic."""

from promptvault.exceptions import ProviderError
from promptvault.providers.base import GenerationParams, LLMProvider
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)


class FallbackProvider(LLMProvider):
    """A provider that tries a chain of providers in order.

    The requested model is only forwarded to the primary provider; later
    providers in the chain answer with their own default model, since model
    names rarely carry over between backends.
    """

    def __init__(self, providers: list[LLMProvider]) -> None:
        """Initialize fallback provider.

        Args:
            providers: List of providers in order of preference.

        Raises:
            ValueError: If providers list is empty.
        """
        if not providers:
            raise ValueError("At least one provider must be specified")

        primary = providers[0]
        super().__init__(primary.provider_type, primary.model_name)
        self._providers = providers

    @property
    def primary_provider(self) -> LLMProvider:
        """Get the primary (first) provider."""
        return self._providers[0]

    async def get_available_models(self) -> list[str]:
        return await self.primary_provider.get_available_models()

    async def generate_text(
        self,
        prompt: str,
        model: str,
        params: GenerationParams,
    ) -> str:
        """Try each provider until one succeeds.

        Raises:
            ProviderError: If all providers fail.
        """
        errors: list[tuple[str, str]] = []

        for index, provider in enumerate(self._providers):
            target_model = model if index == 0 else provider.get_default_model()
            try:
                return await provider.generate_text(prompt, target_model, params)
            except Exception as e:
                errors.append((provider.provider_type.value, str(e)))
                logger.warning(
                    "Provider failed, trying next",
                    extra={"provider": provider.provider_type.value, "error": str(e)},
                )

        error_details = "; ".join(f"{p}: {e}" for p, e in errors)
        raise ProviderError(f"All providers failed: {error_details}")

    def __repr__(self) -> str:
        provider_names = [p.provider_type.value for p in self._providers]
        return f"FallbackProvider(providers={provider_names})"
