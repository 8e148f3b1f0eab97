"""
Retry decorator and configuration for search requests that fail transiently.
"""
import time
import logging
import functools
from typing import Callable, Optional, Type, Tuple, Any
import requests


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        exponential_base: float = 2.0,
        max_delay: float = 60.0,
        retry_on: Tuple[Type[Exception], ...] = (
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
        ),
        logger: Optional[logging.Logger] = None
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.exponential_base = exponential_base
        self.max_delay = max_delay
        self.retry_on = retry_on
        self.logger = logger or logging.getLogger(__name__)

    def delay_for(self, attempt: int) -> float:
        """Backoff delay before the retry following ``attempt`` (0-based)."""
        return min(self.base_delay * (self.exponential_base ** attempt), self.max_delay)


def retry_with_backoff(config: Optional[RetryConfig] = None, **config_kwargs) -> Callable:
    """
    Decorator that retries a function with exponential backoff.

    Only exceptions listed in ``config.retry_on`` are retried; anything else
    propagates immediately. After the last attempt the exception is re-raised.

    Example:
        @retry_with_backoff(max_attempts=3, base_delay=1.0)
        def fetch():
            ...
    """
    if config is None:
        config = RetryConfig(**config_kwargs)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except config.retry_on as e:
                    if attempt == config.max_attempts - 1:
                        config.logger.error(
                            f"Function {func.__name__} failed after {config.max_attempts} attempts: {e}"
                        )
                        raise

                    delay = config.delay_for(attempt)
                    config.logger.warning(
                        f"Function {func.__name__} failed (attempt {attempt + 1}/{config.max_attempts}): {e}. "
                        f"Retrying in {delay:.1f}s..."
                    )
                    time.sleep(delay)
        return wrapper
    return decorator


def retry_on_network_failure(
    max_attempts: int = 3,
    base_delay: float = 5.0,
    exponential_base: float = 2.0,
    max_delay: float = 60.0,
    logger: Optional[logging.Logger] = None
) -> Callable:
    """
    Convenience decorator for connection problems and timeouts.

    Rate limiting and CAPTCHA responses are not retried.
    """
    config = RetryConfig(
        max_attempts=max_attempts,
        base_delay=base_delay,
        exponential_base=exponential_base,
        max_delay=max_delay,
        retry_on=(
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
            requests.exceptions.ChunkedEncodingError,
        ),
        logger=logger
    )
    return retry_with_backoff(config)
