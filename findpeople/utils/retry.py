"""Retry decorator with exponential backoff for directory reads.

An error is retried when it is a FindPeopleError flagged ``retryable``
(unreachable directory, rate limit) or one of the listed transient exception
types. Anything else, authentication failures included, is raised on the
first attempt.
"""

import functools
import logging
import random
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from ..exceptions import FindPeopleError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TRANSIENT_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    TimeoutError,
    ConnectionError,
)


def is_retryable(error: Exception, exceptions: Tuple[Type[Exception], ...]) -> bool:
    """Whether error is worth another attempt."""
    if isinstance(error, FindPeopleError):
        return error.retryable
    return isinstance(error, exceptions)


def backoff_delay(
    attempt: int,
    min_backoff: float,
    max_backoff: float,
    error: Optional[Exception] = None,
) -> float:
    """Seconds to wait before retry number ``attempt`` (1-based).

    Doubles from min_backoff up to max_backoff, plus up to 10% jitter. A
    ``retry_after`` hint on a rate-limit error raises the floor, still capped
    at max_backoff.
    """
    delay = min(min_backoff * (2 ** (attempt - 1)), max_backoff)
    if isinstance(error, FindPeopleError):
        hint = error.context.get("retry_after")
        if hint:
            delay = min(max(delay, float(hint)), max_backoff)
    return delay + random.uniform(0, delay * 0.1)


def retry(
    max_retries: int = 3,
    min_backoff: float = 1.0,
    max_backoff: float = 10.0,
    exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    on_retry: Optional[Callable[[Exception, int], None]] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a blocking call on transient failures.

    Args:
        max_retries: Attempts after the first one.
        min_backoff: First delay in seconds.
        max_backoff: Upper bound for any delay.
        exceptions: Non-findpeople exception types to treat as transient;
            defaults to DEFAULT_TRANSIENT_EXCEPTIONS.
        on_retry: Called with (exception, attempt) before each sleep.

    Example:
        @retry(max_retries=3)
        def fetch_profiles():
            return directory.search_users_sync("al")
    """
    if exceptions is None:
        exceptions = DEFAULT_TRANSIENT_EXCEPTIONS

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            attempt = 0

            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not is_retryable(e, exceptions):
                        raise
                    attempt += 1
                    if attempt > max_retries:
                        logger.warning(
                            "Giving up on %s after %d retries: %s", func.__name__, max_retries, e
                        )
                        raise
                    delay = backoff_delay(attempt, min_backoff, max_backoff, e)
                    logger.debug(
                        "Retry %d/%d for %s in %.2fs: %s",
                        attempt,
                        max_retries,
                        func.__name__,
                        delay,
                        e,
                    )
                    if on_retry:
                        on_retry(e, attempt)

                time.sleep(delay)

        return wrapper

    return decorator
