"""
Retry decorator with exponential backoff.

Used by adapters to handle transient API failures. This is the only place
transport failures are retried or translated; query/ and tools/ let
whatever the adapter raises propagate.
"""

import asyncio
import inspect
import random
import time
from functools import wraps
from typing import TypeVar, Callable, Any, ParamSpec, Awaitable, cast

import httpx

from adapters.services import clear_service_cache
from logging_config import logger, log_retry
from models import MondayError, ErrorKind

T = TypeVar("T")
P = ParamSpec("P")


# Exceptions that should trigger retry
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    httpx.TransportError,
)

# HTTP status codes that should trigger retry
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    429,  # Rate limited
    500,  # Internal server error
    502,  # Bad gateway
    503,  # Service unavailable
    504,  # Gateway timeout
})

# Fraction of the computed delay applied as +/- jitter
JITTER_RATIO = 0.25


def _get_http_status(exception: Exception) -> int | None:
    """
    Extract HTTP status code from exception if available.

    Works with httpx.HTTPStatusError (response.status_code) and
    requests-style exceptions (status_code).
    """
    response = getattr(exception, "response", None)
    if response is not None:
        status = getattr(response, "status_code", None)
        if isinstance(status, int):
            return status

    if hasattr(exception, "status_code"):
        status = exception.status_code
        if isinstance(status, int):
            return status

    return None


def _should_retry(exception: Exception) -> bool:
    """Determine if an exception is retryable."""
    # Adapters flag GraphQL-level throttling this way
    if isinstance(exception, MondayError):
        return exception.retryable

    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True

    status = _get_http_status(exception)
    if status is not None and status in RETRYABLE_STATUS_CODES:
        return True

    return False


def _convert_to_monday_error(exception: Exception) -> MondayError:
    """Convert an exception to a MondayError if not already one."""
    if isinstance(exception, MondayError):
        return exception

    # Check HTTP status first (more reliable than string matching)
    status = _get_http_status(exception)
    if status is not None:
        if status == 401:
            # Token was revoked or rotated; drop the cached client
            clear_service_cache()
            return MondayError(ErrorKind.AUTH_EXPIRED, str(exception))
        elif status == 403:
            return MondayError(ErrorKind.PERMISSION_DENIED, str(exception))
        elif status == 404:
            return MondayError(ErrorKind.NOT_FOUND, str(exception))
        elif status == 429:
            return MondayError(ErrorKind.RATE_LIMITED, str(exception), retryable=True)
        elif status >= 500:
            return MondayError(ErrorKind.NETWORK_ERROR, str(exception), retryable=True)

    if isinstance(exception, (httpx.TimeoutException, TimeoutError)):
        return MondayError(ErrorKind.TIMEOUT, str(exception), retryable=True)
    if isinstance(exception, (httpx.TransportError, ConnectionError)):
        return MondayError(ErrorKind.NETWORK_ERROR, str(exception), retryable=True)

    return MondayError(ErrorKind.UNKNOWN, str(exception))


def _calculate_wait_with_jitter(
    attempt: int, delay_ms: int, backoff_multiplier: float
) -> int:
    """Exponential backoff with +/- JITTER_RATIO randomization (milliseconds)."""
    base = delay_ms * (backoff_multiplier ** attempt)
    jitter = base * JITTER_RATIO
    return max(0, int(base + random.uniform(-jitter, jitter)))


def with_retry(
    max_attempts: int = 3,
    delay_ms: int = 1000,
    backoff_multiplier: float = 2.0,
    convert_errors: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Retry decorator with exponential backoff.

    Args:
        max_attempts: Maximum number of retry attempts
        delay_ms: Initial delay in milliseconds
        backoff_multiplier: Multiplier for exponential backoff
        convert_errors: Convert exceptions to MondayError on final failure

    Returns:
        Decorated function with retry logic

    Example:
        @with_retry(max_attempts=3, delay_ms=1000)
        def execute_graphql(query: str, variables: dict):
            return client.post(API_URL, json={...})
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_attempts):
                try:
                    coro = cast(Awaitable[T], func(*args, **kwargs))
                    return await coro
                except Exception as e:
                    last_exception = e

                    if not _should_retry(e) or attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {attempt + 1} attempts: {e}"
                        )
                        if convert_errors:
                            raise _convert_to_monday_error(e) from e
                        raise

                    wait_ms = _calculate_wait_with_jitter(attempt, delay_ms, backoff_multiplier)
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    await asyncio.sleep(wait_ms / 1000)

            # Should never reach here, but satisfy type checker
            assert last_exception is not None
            if convert_errors:
                raise _convert_to_monday_error(last_exception) from last_exception
            raise last_exception

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e

                    if not _should_retry(e) or attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {attempt + 1} attempts: {e}"
                        )
                        if convert_errors:
                            raise _convert_to_monday_error(e) from e
                        raise

                    wait_ms = _calculate_wait_with_jitter(attempt, delay_ms, backoff_multiplier)
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    time.sleep(wait_ms / 1000)

            assert last_exception is not None
            if convert_errors:
                raise _convert_to_monday_error(last_exception) from last_exception
            raise last_exception

        if inspect.iscoroutinefunction(func):
            return cast(Callable[P, T], async_wrapper)
        else:
            return cast(Callable[P, T], sync_wrapper)

    return decorator
