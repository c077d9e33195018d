"""Mock provider for testing."""

import asyncio
import hashlib
from typing import Any

from promptvault.config.schema import ProviderType
from promptvault.providers.base import GenerationParams, LLMProvider
from promptvault.providers.registry import ProviderRegistry


class MockProvider(LLMProvider):
    """Mock LLM provider for testing.

    Generates deterministic responses based on input, making tests predictable.
    Can be configured with custom responses for specific prompts, or with an
    exception to raise on every call.
    """

    def __init__(
        self,
        model: str = "mock-model",
        responses: dict[str, str] | None = None,
        available_models: list[str] | None = None,
        error: Exception | None = None,
        latency_ms: int = 0,
    ) -> None:
        """Initialize mock provider.

        Args:
            model: Default model name to report.
            responses: Dict mapping prompt substrings to responses.
            available_models: Models reported by get_available_models.
            error: If set, every generation raises this exception.
            latency_ms: Simulated latency in milliseconds.
        """
        super().__init__(ProviderType.MOCK, model)
        self._responses = responses or {}
        self._available_models = available_models or [model]
        self._error = error
        self._latency_ms = latency_ms
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Get history of all calls made to this provider."""
        return self._call_history

    @property
    def call_count(self) -> int:
        """Get the number of calls made to this provider."""
        return len(self._call_history)

    def clear_history(self) -> None:
        """Clear call history."""
        self._call_history.clear()

    def _generate_response(self, prompt: str) -> str:
        """Generate a deterministic response based on the prompt."""
        for key, response in self._responses.items():
            if key.lower() in prompt.lower():
                return response

        prompt_hash = hashlib.sha256(prompt.encode()).hexdigest()[:8]
        return f"Mock response for prompt (hash: {prompt_hash}): {prompt[:50]}..."

    async def get_available_models(self) -> list[str]:
        return list(self._available_models)

    async def generate_text(
        self,
        prompt: str,
        model: str,
        params: GenerationParams,
    ) -> str:
        """Record the call and return a canned or derived response."""
        self._call_history.append(
            {"prompt": prompt, "model": model, "params": params.to_dict()}
        )

        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)

        if self._error is not None:
            raise self._error

        return self._generate_response(prompt)


@ProviderRegistry.register(ProviderType.MOCK)
def create_mock_provider(
    model: str = "mock-model",
    responses: dict[str, str] | None = None,
    latency_ms: int = 0,
    **kwargs: Any,
) -> MockProvider:
    """Factory function to create a mock provider.

    Args:
        model: Default model name to report.
        responses: Dict mapping prompt substrings to responses.
        latency_ms: Simulated latency in milliseconds.
        **kwargs: Additional arguments (ignored).

    Returns:
        MockProvider instance.
    """
    return MockProvider(model=model, responses=responses, latency_ms=latency_ms)
