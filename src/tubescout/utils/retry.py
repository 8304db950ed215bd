"""Retry logic and exponential backoff utilities."""

import time
import random
import logging
from functools import wraps
from typing import Callable, Any

from tubescout.utils.errors import TubeScoutError

logger = logging.getLogger(__name__)


def exponential_backoff(
    attempt: int, base_delay: float = 1.0, max_delay: float = 60.0, jitter: bool = True
) -> float:
    """Calculate exponential backoff delay, optionally with jitter."""
    delay = min(base_delay * (2 ** attempt), max_delay)
    if not jitter:
        return delay
    # Add jitter to prevent thundering herd
    return delay + random.uniform(0, delay * 0.1)


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exceptions: tuple = (Exception,),
    jitter: bool = True,
):
    """Decorator for exponential backoff retry logic.

    Only exceptions listed in ``exceptions`` are retried; anything else
    propagates from the first attempt.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries cannot be negative, got {max_retries}")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt == max_retries:
                        logger.error(f"Function {func.__name__} failed after {max_retries} retries: {e}")
                        raise e

                    delay = exponential_backoff(attempt, base_delay, max_delay, jitter)
                    logger.warning(
                        f"Attempt {attempt + 1} of {func.__name__} failed: {e}. "
                        f"Retrying in {delay:.2f}s..."
                    )
                    time.sleep(delay)

            raise last_exception

        return wrapper
    return decorator


class RetryableError(TubeScoutError):
    """Base class for errors that should trigger retries."""
    pass


class APIRateLimitError(RetryableError):
    """Raised when API rate limit is hit."""
    pass


def retry_rate_limited(max_attempts: int = 3, base_delay: float = 2.0):
    """Retry only on rate limiting, with an exact doubling schedule.

    ``max_attempts`` counts the first call, so 3 attempts sleep
    ``base_delay`` and then ``2 * base_delay``.
    """
    return retry_with_backoff(
        max_retries=max_attempts - 1,
        base_delay=base_delay,
        max_delay=120.0,
        exceptions=(APIRateLimitError,),
        jitter=False,
    )
