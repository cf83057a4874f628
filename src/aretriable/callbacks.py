r"""Callback types for observing retry sessions.

A retry strategy notifies its registered ``on_retrying`` callbacks after
deciding to retry and before the delay is applied. Callbacks observe the
session; they take no part in the retry decision.

Example:
    ```pycon
    >>> from aretriable import retry
    >>> from aretriable.callbacks import RetryInfo
    >>> from aretriable.strategies import Count
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"attempt {info.attempt} failed: {info.error!r}, waiting {info.delay}s")
    ...
    >>> strategy = Count(max_tries=3, on_retrying=log_retry)
    >>> calls = []
    >>> def flaky():
    ...     calls.append(1)
    ...     if len(calls) == 1:
    ...         raise ValueError("boom")
    ...     return len(calls)
    ...
    >>> retry(flaky, strategy=strategy)
    attempt 1 failed: ValueError('boom'), waiting 0.0s
    2

    ```
"""

from __future__ import annotations

__all__ = ["RetryCallback", "RetryInfo", "invoke_on_retry"]

from collections.abc import Callable, Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to ``on_retrying`` callbacks.

    Attributes:
        error: The exception raised by the attempt that just failed.
        delay: The delay in seconds before the next attempt.
        attempt: The number of the attempt that failed (1-indexed).
    """

    error: Exception
    delay: float
    attempt: int


RetryCallback = Callable[[RetryInfo], None]


def invoke_on_retry(callbacks: Iterable[RetryCallback], info: RetryInfo) -> None:
    """Invoke every callback with the retry information.

    Args:
        callbacks: The callbacks to invoke, in registration order.
        info: The retry information.
    """
    for callback in callbacks:
        callback(info)
