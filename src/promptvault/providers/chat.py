"""Shared plumbing for providers backed by LangChain chat models.

Each backend module only says which integration class to build and how
``GenerationParams`` map onto its constructor. Request dispatch, retries and
translation of SDK failures into ``ProviderError`` subclasses happen here.
"""

import importlib
import os
from abc import abstractmethod
from typing import Any, NoReturn

from promptvault.config.schema import ProviderType
from promptvault.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from promptvault.providers.base import GenerationParams, LLMProvider, message_text
from promptvault.utils.retry import llm_retry

AUTH_MARKERS = ("authentication", "invalid api key", "invalid x-api-key", "401")
RATE_LIMIT_MARKERS = ("rate limit", "429")
TIMEOUT_MARKERS = ("timeout", "timed out")
CONNECTION_MARKERS = ("connection", "refused")


class ChatModelProvider(LLMProvider):
    """Provider that builds one LangChain chat model per request.

    The chat model is rebuilt on every call because model, temperature and
    token limit all vary per request.

    Subclasses set:
        display_name: Human readable backend name used in error messages.
        chat_module / chat_class: Where the LangChain integration lives.
        install_extra: The ``promptvault[...]`` extra that installs it.
    """

    display_name: str
    chat_module: str
    chat_class: str
    install_extra: str

    def __init__(
        self,
        provider_type: ProviderType,
        model: str,
        timeout: float,
        **kwargs: Any,
    ) -> None:
        super().__init__(provider_type, model)
        self._timeout = timeout
        self._extra_kwargs = kwargs

    @abstractmethod
    def _chat_model_kwargs(self, model: str, params: GenerationParams) -> dict[str, Any]:
        """Map one request onto the integration's constructor arguments."""
        ...

    def _unavailable_message(self) -> str:
        return f"Cannot reach {self.display_name}."

    def _missing_dependency(self, package: str) -> ProviderError:
        return ProviderError(
            f"{package} not installed. "
            f"Install with: pip install promptvault[{self.install_extra}]"
        )

    def _build_chat_model(self, model: str, params: GenerationParams) -> Any:
        try:
            module = importlib.import_module(self.chat_module)
        except ImportError as e:
            raise self._missing_dependency(self.chat_module.replace("_", "-")) from e

        chat_class = getattr(module, self.chat_class)
        return chat_class(
            **{
                **self._chat_model_kwargs(model, params),
                **self._extra_kwargs,
                **params.extra,
            }
        )

    def _handle_error(self, e: Exception) -> NoReturn:
        """Re-raise an SDK failure as the matching provider error."""
        message = str(e).lower()

        if any(marker in message for marker in AUTH_MARKERS):
            raise ProviderAuthError(
                f"{self.display_name} authentication failed. Check your API key."
            ) from e

        if any(marker in message for marker in RATE_LIMIT_MARKERS):
            raise ProviderRateLimitError(
                f"{self.display_name} rate limit exceeded. Try again later."
            ) from e

        # "Connection timed out" is a timeout, which llm_retry retries
        if any(marker in message for marker in TIMEOUT_MARKERS):
            raise ProviderTimeoutError(
                f"Request to {self.display_name} timed out after {self._timeout}s"
            ) from e

        if any(marker in message for marker in CONNECTION_MARKERS):
            raise ProviderNotAvailableError(self._unavailable_message()) from e

        raise ProviderError(f"{self.display_name} error: {e}") from e

    @llm_retry
    async def generate_text(
        self,
        prompt: str,
        model: str,
        params: GenerationParams,
    ) -> str:
        chat = self._build_chat_model(model, params)
        try:
            response = await chat.ainvoke(prompt)
        except Exception as e:
            self._handle_error(e)
        return message_text(response.content)


class HostedChatModelProvider(ChatModelProvider):
    """Chat model provider for a hosted API that needs a key.

    The key comes from the constructor or the backend's environment
    variable; construction fails fast with ``ProviderAuthError`` when
    neither is set. Hosted APIs expose no cheap model catalog here, so the
    configured model list is reported as-is.
    """

    api_key_env: str

    def __init__(
        self,
        provider_type: ProviderType,
        model: str,
        api_key: str | None,
        models: list[str] | None,
        timeout: float,
        **kwargs: Any,
    ) -> None:
        super().__init__(provider_type, model, timeout, **kwargs)
        self._api_key = api_key or os.environ.get(self.api_key_env)
        self._models = models or [model]

        if not self._api_key:
            raise ProviderAuthError(
                f"{self.display_name} API key not provided. "
                f"Set {self.api_key_env} environment variable or pass api_key parameter."
            )

    def _chat_model_kwargs(self, model: str, params: GenerationParams) -> dict[str, Any]:
        # Retries are handled by llm_retry, not the SDK client
        return {
            "model": model,
            "api_key": self._api_key,
            "timeout": self._timeout,
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "max_retries": 0,
        }

    async def get_available_models(self) -> list[str]:
        return list(self._models)
