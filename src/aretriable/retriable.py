r"""Entry points calling an operation with automatic retry.

This module provides ``retry`` for blocking operations and
``retry_async`` for asynchronous ones. Both default to ten tries without
delay and retry any exception.

Example:
    ```pycon
    >>> from aretriable import retry
    >>> from aretriable.policies import ExceptionTypePolicy
    >>> from aretriable.strategies import Backoff
    >>> result = retry(lambda: "ok")
    >>> result
    'ok'
    >>> # Retry connection errors only, with randomized exponential backoff
    >>> retry(
    ...     fetch_data,
    ...     strategy=Backoff(max_tries=5),
    ...     policy=ExceptionTypePolicy(ConnectionError),
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["retry", "retry_async"]

from typing import TYPE_CHECKING, TypeVar

from aretriable.core.config import default_strategy
from aretriable.executors import AsyncRetryExecutor, RetryExecutor
from aretriable.policies import AnyException
from aretriable.utils.validation import check_callable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine
    from typing import Any

    from aretriable.cancellation import CancellationToken
    from aretriable.policies import RetryPolicy
    from aretriable.sleep import SleepService
    from aretriable.strategies import RetryStrategy

T = TypeVar("T")


def retry(
    func: Callable[[], T],
    *,
    cancellation: CancellationToken | None = None,
    strategy: RetryStrategy | None = None,
    policy: RetryPolicy | None = None,
    sleep_service: SleepService | None = None,
) -> T:
    """Call a blocking operation, retrying it on failure.

    Args:
        func: The zero-argument operation to call.
        cancellation: Optional cancellation token. Once cancelled, no
            further attempt is started.
        strategy: The retry strategy of this call. A strategy is stateful
            and must not be reused across calls. Defaults to
            ``Count(max_tries=10)``.
        policy: The retry policy. Defaults to ``AnyException()``.
        sleep_service: Delay provider. Defaults to real time.

    Returns:
        The value returned by the first successful call.

    Raises:
        TypeError: If ``func`` is not callable.
        RetryError: If the session gives up. It contains every failure
            of the session, in order.

    Example:
        ```pycon
        >>> from aretriable import retry
        >>> from aretriable.strategies import Count
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unavailable")
        ...     return "payload"
        ...
        >>> retry(flaky, strategy=Count(max_tries=5))
        'payload'
        >>> len(calls)
        3

        ```
    """
    check_callable(func, "func")
    executor = RetryExecutor(
        strategy=strategy if strategy is not None else default_strategy(),
        policy=policy if policy is not None else AnyException(),
        cancellation=cancellation,
        sleep_service=sleep_service,
    )
    return executor.execute(func)


def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    cancellation: CancellationToken | None = None,
    strategy: RetryStrategy | None = None,
    policy: RetryPolicy | None = None,
    sleep_service: SleepService | None = None,
) -> Coroutine[Any, Any, T]:
    """Await an asynchronous operation, retrying it on failure.

    Arguments are validated when this function is called, before the
    returned coroutine is awaited.

    Args:
        func: Zero-argument callable returning an awaitable.
        cancellation: Optional cancellation token. Once cancelled, no
            further attempt is started.
        strategy: The retry strategy of this call. Defaults to
            ``Count(max_tries=10)``.
        policy: The retry policy. Defaults to ``AnyException()``.
        sleep_service: Delay provider. Defaults to real time.

    Returns:
        A coroutine resolving to the result of the first successful
        attempt, or raising ``RetryError`` if the session gives up.

    Raises:
        TypeError: If ``func`` is not callable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretriable import retry_async
        >>> async def fetch() -> str:
        ...     return "payload"
        ...
        >>> asyncio.run(retry_async(fetch))
        'payload'

        ```
    """
    check_callable(func, "func")
    executor = AsyncRetryExecutor(
        strategy=strategy if strategy is not None else default_strategy(),
        policy=policy if policy is not None else AnyException(),
        cancellation=cancellation,
        sleep_service=sleep_service,
    )
    return executor.execute(func)
