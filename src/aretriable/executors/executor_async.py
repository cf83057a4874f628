r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that awaits an
asynchronous operation until it succeeds, its strategy is exhausted, its
policy rejects a failure or cancellation is requested.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aretriable.executors.decider import RetryDecider
from aretriable.executors.executor_core import create_terminal_error, notify_retry
from aretriable.sleep import DEFAULT_SLEEP_SERVICE
from aretriable.utils.validation import check_callable, check_not_none

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretriable.cancellation import CancellationToken
    from aretriable.policies import RetryPolicy
    from aretriable.sleep import SleepService
    from aretriable.strategies import RetryStrategy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an asynchronous operation with automatic retry logic.

    This class implements the same retry loop as ``RetryExecutor`` but
    awaits the operation and yields to the event loop during delays
    instead of blocking the thread.

    Args:
        strategy: The retry strategy of this session.
        policy: The retry policy.
        cancellation: Optional cancellation token, checked after each
            failure.
        sleep_service: Delay provider. Defaults to real time.

    Raises:
        TypeError: If ``strategy`` or ``policy`` is ``None``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretriable.policies import AnyException
        >>> from aretriable.executors import AsyncRetryExecutor
        >>> from aretriable.strategies import Count
        >>> async def answer() -> int:
        ...     return 42
        ...
        >>> executor = AsyncRetryExecutor(Count(max_tries=3), AnyException())
        >>> asyncio.run(executor.execute(answer))
        42

        ```
    """

    def __init__(
        self,
        strategy: RetryStrategy,
        policy: RetryPolicy,
        cancellation: CancellationToken | None = None,
        sleep_service: SleepService | None = None,
    ) -> None:
        check_not_none(strategy, "strategy")
        check_not_none(policy, "policy")
        self.strategy = strategy
        self.decider = RetryDecider(policy, cancellation)
        self.sleep_service = sleep_service if sleep_service is not None else DEFAULT_SLEEP_SERVICE

    async def execute(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await the operation until it succeeds or the session gives up.

        Note:
            ``asyncio.CancelledError`` is not an operation failure: it
            propagates immediately and ends the session.

        Args:
            func: Callable returning an awaitable.
            *args: Positional arguments passed to ``func``.
            **kwargs: Keyword arguments passed to ``func``.

        Returns:
            The result of the first successful attempt.

        Raises:
            TypeError: If ``func`` is not callable.
            RetryError: If the session gives up. It contains every
                failure of the session and is chained to the final one.
        """
        check_callable(func, "func")
        while True:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                delay = self.strategy.prepare_to_retry(exc)
                should_retry, reason = self.decider.should_retry(self.strategy, exc)
                if not should_retry:
                    logger.debug(f"Giving up after {self.strategy.attempts} attempt(s) ({reason})")
                    error = create_terminal_error(self.strategy, exc)
                    if error is exc:
                        raise
                    raise error from exc

                notify_retry(self.strategy, exc, delay)
                if delay > 0:
                    await self.sleep_service.sleep_async(delay)
