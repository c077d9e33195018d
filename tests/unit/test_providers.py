"""Unit tests for LLM providers."""

import sys
from types import ModuleType, SimpleNamespace
from typing import Any

import pytest

from promptvault.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from promptvault.providers import (
    FallbackProvider,
    GenerationParams,
    ProviderRegistry,
    ProviderType,
)
from promptvault.providers.base import message_text
from promptvault.providers.chat import HostedChatModelProvider
from promptvault.providers.mock import MockProvider
from promptvault.providers.ollama import OllamaProvider


class TestProviderType:
    """Tests for ProviderType enum."""

    def test_provider_types_exist(self) -> None:
        """Test that all expected provider types exist."""
        assert ProviderType.OLLAMA == "ollama"
        assert ProviderType.OPENAI == "openai"
        assert ProviderType.ANTHROPIC == "anthropic"
        assert ProviderType.MOCK == "mock"


class TestGenerationParams:
    """Tests for GenerationParams."""

    def test_defaults(self) -> None:
        """Test default sampling parameters."""
        params = GenerationParams()
        assert params.temperature == 0.7
        assert params.max_tokens == 2000
        assert params.to_dict() == {"temperature": 0.7, "max_tokens": 2000}

    def test_extra_flattened(self) -> None:
        """Test that extra keys are merged into the dict form."""
        params = GenerationParams(temperature=0.1, max_tokens=5, extra={"stop": ["\n"]})
        assert params.to_dict() == {"temperature": 0.1, "max_tokens": 5, "stop": ["\n"]}

    def test_extra_is_read_only(self) -> None:
        """Test that extra cannot be mutated after construction."""
        source = {"seed": 1}
        params = GenerationParams(extra=source)
        source["seed"] = 2

        assert params.extra["seed"] == 1
        with pytest.raises(TypeError):
            params.extra["seed"] = 3  # type: ignore[index]

    def test_rejects_non_positive_max_tokens(self) -> None:
        """Test max_tokens validation."""
        with pytest.raises(ValueError):
            GenerationParams(max_tokens=0)

    def test_rejects_shadowing_extra(self) -> None:
        """Test that extra cannot redefine the named fields."""
        with pytest.raises(ValueError):
            GenerationParams(extra={"temperature": 1.0})

    def test_equality(self) -> None:
        """Test value equality."""
        assert GenerationParams(0.5, 10) == GenerationParams(0.5, 10)
        assert GenerationParams(0.5, 10) != GenerationParams(0.5, 11)


class TestMessageText:
    """Tests for chat message content flattening."""

    def test_string_content(self) -> None:
        assert message_text("hello") == "hello"

    def test_content_blocks(self) -> None:
        """Test that only text blocks are kept."""
        content = [
            {"type": "text", "text": "Hello "},
            {"type": "tool_use", "id": "x"},
            "world",
        ]
        assert message_text(content) == "Hello world"


class TestMockProvider:
    """Tests for MockProvider."""

    @pytest.mark.asyncio
    async def test_deterministic_response(self) -> None:
        """Test that the same prompt always yields the same text."""
        provider = MockProvider()
        params = GenerationParams()
        first = await provider.generate_text("Hi", "mock-model", params)
        second = await provider.generate_text("Hi", "mock-model", params)
        assert first == second
        assert first.startswith("Mock response for prompt")

    @pytest.mark.asyncio
    async def test_custom_responses(self) -> None:
        """Test substring-matched canned responses."""
        provider = MockProvider(responses={"weather": "Sunny"})
        text = await provider.generate_text(
            "What is the WEATHER today?", "mock-model", GenerationParams()
        )
        assert text == "Sunny"

    @pytest.mark.asyncio
    async def test_call_history(self) -> None:
        """Test that calls are recorded with flattened params."""
        provider = MockProvider()
        await provider.generate_text("Hi", "m1", GenerationParams(0.3, 50))

        assert provider.call_count == 1
        assert provider.call_history[0] == {
            "prompt": "Hi",
            "model": "m1",
            "params": {"temperature": 0.3, "max_tokens": 50},
        }
        provider.clear_history()
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_configured_error(self) -> None:
        """Test that a configured error is raised on every call."""
        provider = MockProvider(error=ProviderError("boom"))
        with pytest.raises(ProviderError, match="boom"):
            await provider.generate_text("Hi", "m", GenerationParams())
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_health_check(self) -> None:
        """Test health check against healthy and failing providers."""
        assert await MockProvider().health_check() is True
        assert await MockProvider(error=ProviderError("down")).health_check() is False

    def test_repr(self) -> None:
        assert repr(MockProvider(model="x")) == "MockProvider(provider=mock, model=x)"


class TestProviderRegistry:
    """Tests for ProviderRegistry."""

    def test_builtin_providers_registered(self) -> None:
        """Test that every backend registers a factory on import."""
        for provider_type in ProviderType:
            assert ProviderRegistry.is_registered(provider_type)
        assert set(ProviderRegistry.list_available()) == set(ProviderType)

    def test_create_mock(self) -> None:
        """Test creating a provider through the registry."""
        provider = ProviderRegistry.create(ProviderType.MOCK, model="custom")
        assert isinstance(provider, MockProvider)
        assert provider.get_default_model() == "custom"

    def test_create_uses_factory_default_model(self) -> None:
        """Test that model=None leaves the factory default in place."""
        provider = ProviderRegistry.create(ProviderType.MOCK)
        assert provider.model_name == "mock-model"

    def test_create_returns_new_instances(self) -> None:
        """Test that the registry does not hand out shared instances."""
        a = ProviderRegistry.create(ProviderType.MOCK)
        b = ProviderRegistry.create(ProviderType.MOCK)
        assert a is not b

    def test_unregistered_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test error for a provider type with no factory."""
        factories = dict(ProviderRegistry._factories)
        factories.pop(ProviderType.ANTHROPIC)
        monkeypatch.setattr(ProviderRegistry, "_factories", factories)

        with pytest.raises(ProviderNotAvailableError):
            ProviderRegistry.create(ProviderType.ANTHROPIC)

    def test_factory_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unexpected factory errors become ProviderError."""

        def broken_factory(**kwargs: object) -> MockProvider:
            raise RuntimeError("bad config")

        monkeypatch.setitem(ProviderRegistry._factories, ProviderType.MOCK, broken_factory)
        with pytest.raises(ProviderError, match="bad config"):
            ProviderRegistry.create(ProviderType.MOCK)

    def test_openai_requires_key(self) -> None:
        """Test that OpenAI refuses to start without an API key."""
        with pytest.raises(ProviderAuthError):
            ProviderRegistry.create(ProviderType.OPENAI)

    def test_anthropic_requires_key(self) -> None:
        """Test that Anthropic refuses to start without an API key."""
        with pytest.raises(ProviderAuthError):
            ProviderRegistry.create(ProviderType.ANTHROPIC)

    @pytest.mark.asyncio
    async def test_openai_lists_configured_models(self) -> None:
        """Test model listing without touching the network."""
        provider = ProviderRegistry.create(
            ProviderType.OPENAI, model="gpt-4o", api_key="sk-test", models=["gpt-4o", "o3"]
        )
        assert provider.get_default_model() == "gpt-4o"
        assert await provider.get_available_models() == ["gpt-4o", "o3"]

    def test_ollama_construction_is_offline(self) -> None:
        """Test that building the Ollama provider needs no server."""
        provider = ProviderRegistry.create(
            ProviderType.OLLAMA, model="mistral", base_url="http://example:11434"
        )
        assert provider.provider_type == ProviderType.OLLAMA
        assert provider.get_default_model() == "mistral"


class TestFallbackProvider:
    """Tests for FallbackProvider."""

    def test_requires_providers(self) -> None:
        """Test that an empty chain is rejected."""
        with pytest.raises(ValueError):
            FallbackProvider([])

    def test_reports_primary(self) -> None:
        """Test that identity comes from the primary provider."""
        fallback = FallbackProvider([MockProvider(model="a"), MockProvider(model="b")])
        assert fallback.get_default_model() == "a"
        assert fallback.primary_provider.model_name == "a"

    @pytest.mark.asyncio
    async def test_primary_success(self) -> None:
        """Test that the secondary is untouched when the primary answers."""
        primary = MockProvider(responses={"hi": "from primary"})
        secondary = MockProvider(responses={"hi": "from secondary"})
        fallback = FallbackProvider([primary, secondary])

        text = await fallback.generate_text("hi", "requested", GenerationParams())
        assert text == "from primary"
        assert primary.call_history[0]["model"] == "requested"
        assert secondary.call_count == 0

    @pytest.mark.asyncio
    async def test_falls_back_with_own_default_model(self) -> None:
        """Test that the secondary answers with its own default model."""
        primary = MockProvider(error=ProviderError("down"))
        secondary = MockProvider(model="backup", responses={"hi": "from secondary"})
        fallback = FallbackProvider([primary, secondary])

        text = await fallback.generate_text("hi", "requested", GenerationParams())
        assert text == "from secondary"
        assert secondary.call_history[0]["model"] == "backup"

    @pytest.mark.asyncio
    async def test_all_fail(self) -> None:
        """Test the combined error when every provider fails."""
        fallback = FallbackProvider(
            [MockProvider(error=ProviderError("one")), MockProvider(error=ProviderError("two"))]
        )
        with pytest.raises(ProviderError, match="All providers failed"):
            await fallback.generate_text("hi", "m", GenerationParams())


class FakeChatModel:
    """Stand-in for a LangChain chat model that records its constructor args."""

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    async def ainvoke(self, prompt: str) -> SimpleNamespace:
        failure = self.kwargs.get("fail_with")
        if failure:
            raise RuntimeError(failure)
        return SimpleNamespace(content=[{"type": "text", "text": f"echo: {prompt}"}])


class FakeHostedProvider(HostedChatModelProvider):
    display_name = "Fake"
    chat_module = "fake_chat_integration"
    chat_class = "FakeChatModel"
    install_extra = "fake"
    api_key_env = "FAKE_API_KEY"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(ProviderType.MOCK, "fake-model", "key", None, 5.0, **kwargs)


@pytest.fixture
def fake_integration(monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    module = ModuleType("fake_chat_integration")
    module.FakeChatModel = FakeChatModel  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "fake_chat_integration", module)
    return module


class TestChatModelProvider:
    """Tests for the shared LangChain chat model plumbing."""

    def test_build_merges_request_params(self, fake_integration: ModuleType) -> None:
        """Test that per-request params and extras reach the chat model."""
        provider = FakeHostedProvider(streaming=False)
        chat = provider._build_chat_model(
            "other-model", GenerationParams(temperature=0.1, max_tokens=64, extra={"top_p": 0.9})
        )

        assert chat.kwargs["model"] == "other-model"
        assert chat.kwargs["temperature"] == 0.1
        assert chat.kwargs["max_tokens"] == 64
        assert chat.kwargs["max_retries"] == 0
        assert chat.kwargs["top_p"] == 0.9
        assert chat.kwargs["streaming"] is False

    @pytest.mark.asyncio
    async def test_generate_text(self, fake_integration: ModuleType) -> None:
        """Test that content blocks are flattened into text."""
        provider = FakeHostedProvider()
        text = await provider.generate_text("hi", "fake-model", GenerationParams())
        assert text == "echo: hi"

    @pytest.mark.asyncio
    async def test_generate_text_wraps_failures(self, fake_integration: ModuleType) -> None:
        """Test that SDK errors surface as ProviderError."""
        provider = FakeHostedProvider()
        params = GenerationParams(extra={"fail_with": "boom"})
        with pytest.raises(ProviderError, match="Fake error: boom"):
            await provider.generate_text("hi", "fake-model", params)

    def test_missing_integration(self) -> None:
        """Test the install hint when the integration package is absent."""
        provider = FakeHostedProvider()
        with pytest.raises(ProviderError, match=r"promptvault\[fake\]"):
            provider._build_chat_model("fake-model", GenerationParams())

    @pytest.mark.parametrize(
        ("message", "error_type"),
        [
            ("Error code: 401 - invalid api key", ProviderAuthError),
            ("Rate limit reached for requests", ProviderRateLimitError),
            ("Request timed out", ProviderTimeoutError),
            ("Connection timed out", ProviderTimeoutError),
            ("Connection refused", ProviderNotAvailableError),
            ("something else", ProviderError),
        ],
    )
    def test_error_classification(self, message: str, error_type: type) -> None:
        """Test mapping of SDK error messages onto provider errors."""
        provider = FakeHostedProvider()
        with pytest.raises(error_type) as exc_info:
            provider._handle_error(RuntimeError(message))
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the API key falls back to the environment variable."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        provider = ProviderRegistry.create(ProviderType.OPENAI)
        assert provider._api_key == "sk-env"

    def test_ollama_unavailable_message(self) -> None:
        """Test that connection failures point at the Ollama server."""
        provider = OllamaProvider(base_url="http://example:11434")
        with pytest.raises(ProviderNotAvailableError, match="ollama serve"):
            provider._handle_error(ConnectionError("Connection refused"))

    def test_ollama_request_kwargs(self) -> None:
        """Test that max_tokens maps to Ollama's num_predict."""
        provider = OllamaProvider(base_url="http://example:11434", timeout=3.0)
        kwargs = provider._chat_model_kwargs("mistral", GenerationParams(max_tokens=99))
        assert kwargs["num_predict"] == 99
        assert kwargs["base_url"] == "http://example:11434"
        assert kwargs["client_kwargs"] == {"timeout": 3.0}
