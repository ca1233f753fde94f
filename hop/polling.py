"""Bounded polling for eventually consistent management views.

Statistics tables in the broker are updated asynchronously, so a connection
that was just opened or a consumer that was just registered may not show up
in the management API right away. ``await_until`` re-reads until the view
catches up or a timeout elapses. Only reads are retried.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from .errors import AwaitTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_INTERVAL_SECONDS = 0.1


def is_non_empty(result: Any) -> bool:
    """Default predicate: the result exists and has at least one element."""
    return result is not None and len(result) > 0


def await_until(
    read_fn: Callable[[], T],
    predicate: Callable[[T], bool] = is_non_empty,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    interval: float = DEFAULT_INTERVAL_SECONDS,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``read_fn`` until ``predicate`` holds for its result.

    The first read happens immediately. After that the caller's thread
    sleeps ``interval`` between reads until more than ``timeout`` seconds
    have elapsed.

    Args:
        read_fn: Read operation to repeat. Must not mutate broker state.
        predicate: Condition the result must satisfy.
        timeout: Polling budget in seconds.
        interval: Pause between reads in seconds.
        clock: Monotonic clock, injectable for tests.
        sleep: Sleep function, injectable for tests.

    Returns:
        The first result for which ``predicate`` returned True.

    Raises:
        AwaitTimeoutError: If the budget ran out. Carries the last result.
        ValueError: If timeout is negative or interval is not positive.
    """
    if timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")
    if interval <= 0:
        raise ValueError(f"interval must be > 0, got {interval}")

    started = clock()
    result = read_fn()
    attempts = 1
    while not predicate(result):
        elapsed = clock() - started
        if elapsed > timeout:
            logger.debug("Gave up after %d reads in %.2fs", attempts, elapsed)
            raise AwaitTimeoutError(
                f"Condition not met after {elapsed:.2f}s ({attempts} reads)",
                last_result=result,
                elapsed=elapsed,
            )
        sleep(interval)
        result = read_fn()
        attempts += 1

    if attempts > 1:
        logger.debug("Condition met after %d reads", attempts)
    return result


def await_non_empty(
    read_fn: Callable[[], T],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    interval: float = DEFAULT_INTERVAL_SECONDS,
) -> T:
    """Wait until ``read_fn`` returns a non-empty collection."""
    return await_until(read_fn, is_non_empty, timeout, interval)
