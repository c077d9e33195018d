"""Base provider class and generation parameter types."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from promptvault.config.schema import ProviderType

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent to a provider and folded into cache keys.

    Attributes:
        temperature: Sampling temperature.
        max_tokens: Upper bound on generated tokens.
        extra: Provider-specific keys passed through untouched.
    """

    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        reserved = {"temperature", "max_tokens"} & set(self.extra)
        if reserved:
            raise ValueError(f"extra must not redefine {sorted(reserved)}")
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the parameter object used for hashing and requests."""
        return {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            **self.extra,
        }


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider turns ``(prompt, model, params)`` into generated text. The
    model is chosen per call; ``model_name`` is only the default the
    provider reports to callers that don't pick one.
    """

    def __init__(
        self,
        provider_type: ProviderType,
        model_name: str,
    ) -> None:
        """Initialize the provider.

        Args:
            provider_type: Type of provider (ollama, openai, etc.)
            model_name: Default model for requests that don't name one.
        """
        self._provider_type = provider_type
        self._model_name = model_name

    @property
    def provider_type(self) -> ProviderType:
        """Get the provider type."""
        return self._provider_type

    @property
    def model_name(self) -> str:
        """Get the default model name."""
        return self._model_name

    def get_default_model(self) -> str:
        """Return the model used when a request doesn't specify one."""
        return self._model_name

    async def get_available_models(self) -> list[str]:
        """List models this provider can serve.

        Subclasses backed by a model catalog should override this.
        """
        return [self._model_name]

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        model: str,
        params: GenerationParams,
    ) -> str:
        """Generate a completion for ``prompt``.

        Args:
            prompt: The prompt to send to the LLM.
            model: Model name to use for this request.
            params: Sampling parameters.

        Returns:
            The generated text.

        Raises:
            ProviderError: If the generation fails.
        """
        ...

    async def health_check(self) -> bool:
        """Check if the provider is available and responding.

        Returns:
            True if provider is healthy, False otherwise.
        """
        try:
            await self.generate_text(
                "Hello", self._model_name, GenerationParams(max_tokens=8)
            )
            return True
        except Exception:
            return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider_type.value}, model={self.model_name})"


def message_text(content: Any) -> str:
    """Flatten a chat model message content into plain text.

    Chat models return either a string or a list of content blocks
    (strings or ``{"type": "text", "text": ...}`` dicts).
    """
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
