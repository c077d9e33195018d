"""Unit tests for retry utilities."""

from unittest.mock import AsyncMock, Mock

import pytest

from promptvault.exceptions import (
    ProviderAuthError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from promptvault.utils.retry import TRANSIENT_ERRORS, llm_retry, with_retry

# No backoff delay, so retries run instantly
fast_retry = with_retry(min_wait=0, max_wait=0)


class TestLLMRetry:
    """Tests for the llm_retry decorator."""

    def test_llm_retry_success_no_retry(self) -> None:
        """Test that successful calls don't retry."""
        mock_func = Mock(return_value="success")
        decorated = llm_retry(mock_func)

        result = decorated()

        assert result == "success"
        assert mock_func.call_count == 1

    def test_llm_retry_non_retriable_error_not_retried(self) -> None:
        """Test that non-transient errors are raised at once."""
        mock_func = Mock(side_effect=ProviderAuthError("bad key"))
        decorated = llm_retry(mock_func)

        with pytest.raises(ProviderAuthError):
            decorated()

        assert mock_func.call_count == 1

    def test_transient_errors(self) -> None:
        """Test which errors count as transient."""
        assert ProviderRateLimitError in TRANSIENT_ERRORS
        assert ProviderTimeoutError in TRANSIENT_ERRORS
        assert ConnectionError in TRANSIENT_ERRORS
        assert ProviderAuthError not in TRANSIENT_ERRORS


class TestWithRetry:
    """Tests for the with_retry factory."""

    @pytest.mark.parametrize(
        "error",
        [
            ProviderRateLimitError("Rate limited"),
            ProviderTimeoutError("Timeout"),
            ConnectionError("Connection refused"),
        ],
    )
    def test_retries_transient_errors(self, error: Exception) -> None:
        """Test retry on each transient error type."""
        mock_func = Mock(side_effect=[error, "success"])
        decorated = fast_retry(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 2

    def test_max_attempts_exceeded(self) -> None:
        """Test that the last error is re-raised unchanged."""
        error = ProviderTimeoutError("Timeout")
        mock_func = Mock(side_effect=error)

        @with_retry(max_attempts=4, min_wait=0, max_wait=0)
        def test_func() -> str:
            return mock_func()

        with pytest.raises(ProviderTimeoutError) as exc_info:
            test_func()

        assert exc_info.value is error
        assert mock_func.call_count == 4

    def test_with_retry_custom_exceptions(self) -> None:
        """Test retry on custom exception types."""
        mock_func = Mock(side_effect=[KeyError("Missing key"), "success"])

        @with_retry(min_wait=0, max_wait=0, retry_on=(KeyError,))
        def test_func() -> str:
            return mock_func()

        assert test_func() == "success"
        assert mock_func.call_count == 2

    def test_preserves_args(self) -> None:
        """Test that arguments pass through the decorator."""

        @fast_retry
        def test_func(a: int, b: str, c: float = 1.0) -> str:
            return f"{a}-{b}-{c}"

        assert test_func(1, "x", c=2.5) == "1-x-2.5"

    @pytest.mark.asyncio
    async def test_async_function(self) -> None:
        """Test that coroutines are retried too."""
        mock_func = AsyncMock(side_effect=[ProviderRateLimitError("slow down"), "ok"])

        @fast_retry
        async def test_func() -> str:
            return await mock_func()

        assert await test_func() == "ok"
        assert mock_func.await_count == 2
