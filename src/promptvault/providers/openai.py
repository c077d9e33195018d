"""OpenAI provider through langchain-openai."""

from typing import Any

from promptvault.config.schema import ProviderType
from promptvault.providers.chat import HostedChatModelProvider
from promptvault.providers.registry import ProviderRegistry


class OpenAIProvider(HostedChatModelProvider):
    """OpenAI chat completions.

    Requires the openai extra:
        pip install promptvault[openai]
    """

    display_name = "OpenAI"
    chat_module = "langchain_openai"
    chat_class = "ChatOpenAI"
    install_extra = "openai"
    api_key_env = "OPENAI_API_KEY"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        models: list[str] | None = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(ProviderType.OPENAI, model, api_key, models, timeout, **kwargs)


@ProviderRegistry.register(ProviderType.OPENAI)
def create_openai_provider(**kwargs: Any) -> OpenAIProvider:
    return OpenAIProvider(**kwargs)
