"""
Backoff wrapper for OpenAI calls made during workout generation.

Transient failures (throttling, 5xx, timeouts, dropped connections) are
retried with exponential backoff through tenacity; everything else
surfaces on the first attempt so the caller can fall back quickly.
"""
import logging
from typing import Any, Awaitable, Callable, TypeVar

import openai
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 1
DEFAULT_MAX_WAIT_SECONDS = 10

_TRANSIENT_OPENAI_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)
_PERMANENT_OPENAI_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.BadRequestError,
    openai.NotFoundError,
)
_TRANSIENT_STATUS_CODES = ("429", "500", "502", "503", "504")


def _looks_transient(message: str, type_name: str) -> bool:
    if "quota" in message and "exceeded" in message:
        # Billing problem reported as 429; waiting will not help
        return False
    if "rate" in message and "limit" in message:
        return True
    if any(code in message for code in _TRANSIENT_STATUS_CODES):
        return True
    if "timeout" in message or "timed out" in message or "timeout" in type_name:
        return True
    return "connection" in message or "connect" in type_name


def is_retryable_error(exception: BaseException) -> bool:
    """
    Whether another attempt could succeed.

    SDK exception classes decide when available. Errors raised outside the
    SDK (proxies, test doubles) are classified from their message, and
    anything unrecognised is treated as permanent.
    """
    if isinstance(exception, _TRANSIENT_OPENAI_ERRORS):
        return True
    if isinstance(exception, _PERMANENT_OPENAI_ERRORS):
        return False
    return _looks_transient(str(exception).lower(), type(exception).__name__.lower())


def _validate_retry_params(
    max_attempts: int,
    min_wait_seconds: float,
    max_wait_seconds: float,
) -> None:
    """Raises ValueError for a policy tenacity cannot honour."""
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    for name, value in (("min_wait_seconds", min_wait_seconds), ("max_wait_seconds", max_wait_seconds)):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
    if min_wait_seconds > max_wait_seconds:
        raise ValueError(
            f"min_wait_seconds ({min_wait_seconds}) cannot exceed "
            f"max_wait_seconds ({max_wait_seconds})"
        )


async def retry_async_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    **kwargs: Any,
) -> T:
    """
    Await `func(*args, **kwargs)`, retrying transient failures.

    The original exception is re-raised once attempts run out, never a
    tenacity RetryError.
    """
    _validate_retry_params(max_attempts, min_wait_seconds, max_wait_seconds)

    retrying = AsyncRetrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait_seconds, max=max_wait_seconds),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await func(*args, **kwargs)

    raise RuntimeError("retry loop exited without a result")
