"""
Retry utilities for startup operations.

Provides a doubling backoff schedule with a cap and an async retry helper
that hands the current interval to each attempt as its timeout.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Tuple, Type, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ExponentialBackoff:
    """
    Backoff schedule: start at initial_interval, multiply after each failure,
    never exceed max_interval, stop after max_attempts.
    """
    max_attempts: int = 5
    initial_interval: float = 5.0
    max_interval: float = 60.0
    multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_interval <= 0:
            raise ValueError("initial_interval must be positive")
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval must not be smaller than initial_interval")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1")

    def intervals(self) -> Iterator[float]:
        """Yield the interval used by each attempt, one per attempt."""
        interval = self.initial_interval
        for _ in range(self.max_attempts):
            yield interval
            interval = min(interval * self.multiplier, self.max_interval)


async def async_retry_with_backoff(
    operation: Callable[[float], Awaitable[T]],
    backoff: ExponentialBackoff,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    description: str = "operation",
) -> T:
    """
    Run an async operation until it succeeds or the backoff is exhausted.

    Args:
        operation: Coroutine function called with the current interval,
            which the attempt should use as its timeout
        backoff: Schedule of attempts and waits
        retry_on: Exception types that trigger another attempt
        sleep: Awaitable sleep function (injectable for tests)
        description: Name used in log messages

    Returns:
        Result of the first successful attempt

    Raises:
        The last exception once every attempt has failed
    """
    last_exception: BaseException | None = None

    for attempt, interval in enumerate(backoff.intervals(), start=1):
        try:
            return await operation(interval)
        except retry_on as e:
            last_exception = e
            if attempt < backoff.max_attempts:
                logger.warning(
                    f"{description}: attempt {attempt}/{backoff.max_attempts} failed: {e}. "
                    f"Retrying in {interval:.0f}s..."
                )
                await sleep(interval)
            else:
                logger.error(
                    f"{description}: all {backoff.max_attempts} attempts failed. Last error: {e}"
                )

    assert last_exception is not None
    raise last_exception
