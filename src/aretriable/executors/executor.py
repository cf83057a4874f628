r"""Synchronous retry executor.

This module provides the RetryExecutor class that calls a blocking
operation until it succeeds, its strategy is exhausted, its policy
rejects a failure or cancellation is requested.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aretriable.executors.decider import RetryDecider
from aretriable.executors.executor_core import create_terminal_error, notify_retry
from aretriable.sleep import DEFAULT_SLEEP_SERVICE
from aretriable.utils.validation import check_callable, check_not_none

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretriable.cancellation import CancellationToken
    from aretriable.policies import RetryPolicy
    from aretriable.sleep import SleepService
    from aretriable.strategies import RetryStrategy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a blocking operation with automatic retry logic.

    One executor drives one retry session, because the strategy it owns
    is stateful.

    The executor orchestrates the following components:
    - RetryStrategy: Counts attempts, records failures and computes delays
    - RetryDecider: Determines whether to retry from strategy, cancellation and policy
    - SleepService: Blocks the calling thread between attempts

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
        >>> from aretriable.policies import AnyException
        >>> from aretriable.executors import RetryExecutor
        >>> from aretriable.strategies import Count
        >>> executor = RetryExecutor(Count(max_tries=3), AnyException())
        >>> executor.execute(int, "42")
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

    def execute(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call the operation until it succeeds or the session gives up.

        The operation is always called at least once. After a failure, the
        strategy records it and computes the delay, then the decider is
        consulted. If a retry is allowed, the ``on_retrying`` callbacks of
        the strategy are invoked, the executor sleeps for the delay (a
        zero delay skips the sleep) and calls the operation again.

        Cancellation does not interrupt a running attempt or a running
        sleep; it only prevents the next attempt.

        Args:
            func: The operation to call.
            *args: Positional arguments passed to ``func``.
            **kwargs: Keyword arguments passed to ``func``.

        Returns:
            The value returned by the first successful call.

        Raises:
            TypeError: If ``func`` is not callable.
            RetryError: If the session gives up. It contains every
                failure of the session and is chained to the final one.
        """
        check_callable(func, "func")
        while True:
            try:
                return func(*args, **kwargs)
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
                    self.sleep_service.sleep(delay)
