"""Retry with exponential backoff for idempotent API reads."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from onchain_transfers.core.errors import APIError, TransportError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RetryConfig:
    """
    Configuration for retry behavior.

    Parameters
    ----------
    max_retries : int
        Maximum number of retry attempts
    base_delay : float
        Initial delay in seconds before first retry
    max_delay : float
        Maximum delay between retries
    exponential_base : float
        Base for exponential backoff calculation

    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    def get_delay(self, attempt: int) -> float:
        """
        Calculate delay for a given retry attempt using exponential backoff.

        Parameters
        ----------
        attempt : int
            Current attempt number (0-indexed)

        Returns
        -------
        float
            Delay in seconds

        """
        delay = self.base_delay * (self.exponential_base**attempt)
        return min(delay, self.max_delay)


def is_retryable(error: TransportError) -> bool:
    """
    Check whether a failed request may succeed if repeated.

    Timeouts, connection failures, rate limiting and server errors are
    retryable; other client errors and malformed responses are not.

    """
    if isinstance(error, APIError):
        return error.is_retryable
    return isinstance(error.__cause__, httpx.TransportError)


async def retry_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    config: RetryConfig,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """
    Await ``func`` with retries on retryable transport errors.

    Raises
    ------
    TransportError
        The last error, once retries are exhausted or the error is not retryable

    """
    for attempt in range(config.max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except TransportError as e:
            # Don't retry on last attempt
            if attempt == config.max_retries or not is_retryable(e):
                raise

            delay = config.get_delay(attempt)
            logger.debug(
                "%s failed (attempt %d/%d), retrying in %.1fs: %s",
                getattr(func, "__name__", func),
                attempt + 1,
                config.max_retries + 1,
                delay,
                e,
            )
            await sleep(delay)

    msg = "max_retries must not be negative"
    raise ValueError(msg)
