"""Ollama provider: local models through langchain-ollama."""

from typing import Any

from promptvault.config.schema import ProviderType
from promptvault.providers.base import GenerationParams
from promptvault.providers.chat import ChatModelProvider
from promptvault.providers.registry import ProviderRegistry
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OLLAMA_URL = "http://localhost:11434"


class OllamaProvider(ChatModelProvider):
    """Provider for a local or remote Ollama server.

    Requires the ollama extra:
        pip install promptvault[ollama]
    """

    display_name = "Ollama"
    chat_module = "langchain_ollama"
    chat_class = "ChatOllama"
    install_extra = "ollama"

    def __init__(
        self,
        model: str = "llama3",
        base_url: str = DEFAULT_OLLAMA_URL,
        timeout: float = 120.0,
        **kwargs: Any,
    ) -> None:
        """Initialize Ollama provider.

        Args:
            model: Default model name (e.g., "llama3", "mistral", "codellama").
            base_url: Ollama server URL.
            timeout: Request timeout in seconds.
            **kwargs: Additional arguments passed to ChatOllama.
        """
        super().__init__(ProviderType.OLLAMA, model, timeout, **kwargs)
        self._base_url = base_url

    def _unavailable_message(self) -> str:
        return (
            f"Cannot connect to Ollama at {self._base_url}. "
            "Make sure Ollama is running: ollama serve"
        )

    def _chat_model_kwargs(self, model: str, params: GenerationParams) -> dict[str, Any]:
        return {
            "model": model,
            "base_url": self._base_url,
            "temperature": params.temperature,
            "num_predict": params.max_tokens,
            "client_kwargs": {"timeout": self._timeout},
        }

    async def get_available_models(self) -> list[str]:
        """List the models pulled on the Ollama server."""
        try:
            from ollama import AsyncClient
        except ImportError as e:
            raise self._missing_dependency("ollama") from e

        client = AsyncClient(host=self._base_url, timeout=self._timeout)
        try:
            listing = await client.list()
        except Exception as e:
            self._handle_error(e)

        names = [entry.model for entry in listing.models if entry.model]
        logger.debug("Listed Ollama models", extra={"count": len(names)})
        return names


@ProviderRegistry.register(ProviderType.OLLAMA)
def create_ollama_provider(
    model: str = "llama3",
    base_url: str = DEFAULT_OLLAMA_URL,
    timeout: float = 120.0,
    **kwargs: Any,
) -> OllamaProvider:
    return OllamaProvider(model=model, base_url=base_url, timeout=timeout, **kwargs)
