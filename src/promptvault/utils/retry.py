"""Retry decorators for provider calls using tenacity.

Retries belong to the provider layer: the LLM service never retries on
its own, it only sees the final outcome of a decorated provider call.
Both decorators work on plain and ``async`` functions.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from promptvault.exceptions import ProviderRateLimitError, ProviderTimeoutError
from promptvault.utils.logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    ProviderRateLimitError,
    ProviderTimeoutError,
    ConnectionError,
)


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    retry_on: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
) -> Callable[[F], F]:
    """Create a customized retry decorator.

    Args:
        max_attempts: Maximum number of attempts (including the first).
        min_wait: Minimum wait time between retries (seconds).
        max_wait: Maximum wait time between retries (seconds).
        retry_on: Tuple of exception types to retry on.

    Returns:
        A retry decorator. The last exception is re-raised unchanged once
        attempts are exhausted.

    Usage:
        @with_retry(max_attempts=5, min_wait=2.0)
        async def call_llm(prompt: str) -> str:
            ...
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


llm_retry = with_retry()
"""Default retry decorator for LLM calls.

Up to 3 attempts with exponential backoff (1s, 2s, 4s ... capped at 10s)
for rate limits, timeouts, and connection errors.
"""
