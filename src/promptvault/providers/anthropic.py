"""Anthropic provider through langchain-anthropic."""

from typing import Any

from promptvault.config.schema import ProviderType
from promptvault.providers.chat import HostedChatModelProvider
from promptvault.providers.registry import ProviderRegistry


class AnthropicProvider(HostedChatModelProvider):
    """Claude models via the Anthropic messages API.

    Requires the anthropic extra:
        pip install promptvault[anthropic]
    """

    display_name = "Anthropic"
    chat_module = "langchain_anthropic"
    chat_class = "ChatAnthropic"
    install_extra = "anthropic"
    api_key_env = "ANTHROPIC_API_KEY"

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        models: list[str] | None = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(ProviderType.ANTHROPIC, model, api_key, models, timeout, **kwargs)


@ProviderRegistry.register(ProviderType.ANTHROPIC)
def create_anthropic_provider(**kwargs: Any) -> AnthropicProvider:
    return AnthropicProvider(**kwargs)
