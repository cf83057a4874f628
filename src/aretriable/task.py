r"""Background tasks retried on failure.

This module adapts the retry loop to ``concurrent.futures``: starting a
retrying task submits the first attempt to an executor and immediately
returns a ``Future``. The future resolves to the first successful result,
or fails with the terminal ``RetryError``, so it composes with
``concurrent.futures.wait``, ``as_completed`` and ``add_done_callback``
like any other future.

Retries do not go back through the executor. When the first attempt
fails, the remaining attempts and the delays between them run inline in
its done callback, on the worker thread that completed it. If the first
attempt already failed while it was being submitted (for example with an
executor running work inline), the retries are handed once to the shared
default thread pool so the submitting thread never runs them.

The future always resolves: an exception raised by a policy, a strategy,
an ``on_retrying`` callback or the sleep service fails the future with
that exception.

Example:
    ```pycon
    >>> from concurrent.futures import ThreadPoolExecutor
    >>> from aretriable import start_retrying
    >>> from aretriable.strategies import Count
    >>> with ThreadPoolExecutor(max_workers=2) as pool:
    ...     future = start_retrying(pow, 2, 10, executor=pool, strategy=Count(max_tries=3))
    ...     future.result()
    ...
    1024

    ```
"""

from __future__ import annotations

__all__ = ["RetryTaskFactory", "get_default_executor", "start_retrying"]

import functools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

from aretriable.executors import RetryDecider
from aretriable.executors.executor_core import create_terminal_error, notify_retry
from aretriable.policies import AnyException
from aretriable.sleep import DEFAULT_SLEEP_SERVICE
from aretriable.strategies import Count
from aretriable.utils.validation import check_callable

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor

    from aretriable.cancellation import CancellationToken
    from aretriable.policies import RetryPolicy
    from aretriable.sleep import SleepService
    from aretriable.strategies import RetryStrategy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)

_default_executor: ThreadPoolExecutor | None = None
_default_executor_lock = threading.Lock()


def get_default_executor() -> ThreadPoolExecutor:
    """Get the process-wide executor used when none is given.

    The executor is created on first use.

    Returns:
        The shared thread pool executor.
    """
    global _default_executor  # noqa: PLW0603
    with _default_executor_lock:
        if _default_executor is None:
            _default_executor = ThreadPoolExecutor(thread_name_prefix="aretriable")
        return _default_executor


class RetryTaskFactory:
    """Starts background tasks that are retried on failure.

    Args:
        executor: The executor running the first attempt of each task.
            Defaults to the shared thread pool returned by
            ``get_default_executor``.
        strategy_factory: Zero-argument callable creating the strategy
            of a task when none is passed to ``start_new``. Defaults to
            ``Count`` (5 tries).
        policy: The default retry policy. Defaults to ``AnyException()``.
        sleep_service: Delay provider. Defaults to real time.

    Example:
        ```pycon
        >>> from aretriable.task import RetryTaskFactory
        >>> factory = RetryTaskFactory()
        >>> factory.start_new(sum, [1, 2, 3]).result()
        6

        ```
    """

    def __init__(
        self,
        executor: Executor | None = None,
        strategy_factory: Callable[[], RetryStrategy] | None = None,
        policy: RetryPolicy | None = None,
        sleep_service: SleepService | None = None,
    ) -> None:
        if strategy_factory is not None:
            check_callable(strategy_factory, "strategy_factory")
        self._executor = executor
        self.strategy_factory: Callable[[], RetryStrategy] = (
            strategy_factory if strategy_factory is not None else Count
        )
        self.policy: RetryPolicy = policy if policy is not None else AnyException()
        self.sleep_service = sleep_service if sleep_service is not None else DEFAULT_SLEEP_SERVICE

    @property
    def executor(self) -> Executor:
        """The executor running the first attempt of each task."""
        return self._executor if self._executor is not None else get_default_executor()

    def start_new(
        self,
        func: Callable[..., T],
        /,
        *args: Any,
        cancellation: CancellationToken | None = None,
        strategy: RetryStrategy | None = None,
        policy: RetryPolicy | None = None,
        **kwargs: Any,
    ) -> Future[T]:
        """Start a background task retried on failure.

        The keyword names ``cancellation``, ``strategy`` and ``policy``
        are consumed here; every other argument is forwarded to ``func``.

        If the returned future is cancelled before its retry continuation
        starts, the first attempt is cancelled too (if it has not started)
        and no retry happens. A cancelled token stops further attempts
        but lets the current one finish.

        Args:
            func: The operation to run.
            *args: Positional arguments passed to ``func``.
            cancellation: Optional cancellation token. If already
                cancelled, the returned future is cancelled and ``func``
                is never called.
            strategy: The strategy of this task. Defaults to a new one
                from ``strategy_factory``.
            policy: The retry policy. Defaults to the factory policy.
            **kwargs: Keyword arguments passed to ``func``.

        Returns:
            A future resolving to the first successful result, or failing
            with the terminal ``RetryError``.

        Raises:
            TypeError: If ``func`` is not callable.
        """
        check_callable(func, "func")
        strategy = strategy if strategy is not None else self.strategy_factory()
        policy = policy if policy is not None else self.policy

        outer: Future[T] = Future()
        if cancellation is not None and cancellation.is_cancellation_requested:
            logger.debug(f"Cancellation requested before {func!r} started")
            outer.cancel()
            return outer

        task = _RetryTask(
            outer,
            functools.partial(func, *args, **kwargs),
            strategy,
            RetryDecider(policy, cancellation),
            self.sleep_service,
        )
        first = self.executor.submit(func, *args, **kwargs)
        outer.add_done_callback(functools.partial(_cancel_first_attempt, first))
        task.attach(first)
        return outer


class _RetryTask:
    """Continuation resolving the future of a retrying task once its
    first attempt is done."""

    def __init__(
        self,
        outer: Future[T],
        call: Callable[[], T],
        strategy: RetryStrategy,
        decider: RetryDecider,
        sleep_service: SleepService,
    ) -> None:
        self.outer = outer
        self.call = call
        self.strategy = strategy
        self.decider = decider
        self.sleep_service = sleep_service
        self._caller = threading.get_ident()
        self._attached = False

    def attach(self, first: Future[T]) -> None:
        first.add_done_callback(self._on_first_done)
        self._attached = True

    def _on_first_done(self, first: Future[T]) -> None:
        if first.cancelled():
            self.outer.cancel()
            return
        if (
            isinstance(first.exception(), Exception)
            and not self._attached
            and threading.get_ident() == self._caller
        ):
            # The first attempt failed before start_new returned
            logger.debug("First attempt failed during submit; retrying on the default executor")
            try:
                get_default_executor().submit(self.run, first)
            except RuntimeError as exc:
                self._fail(exc)
            return
        self.run(first)

    def run(self, first: Future[T]) -> None:
        if not self.outer.set_running_or_notify_cancel():
            return
        try:
            result = self._retry(first)
        except BaseException as exc:  # noqa: BLE001
            self.outer.set_exception(exc)
        else:
            self.outer.set_result(result)

    def _fail(self, exc: BaseException) -> None:
        if self.outer.set_running_or_notify_cancel():
            self.outer.set_exception(exc)

    def _retry(self, first: Future[T]) -> T:
        exception = first.exception()
        if exception is None:
            return first.result()
        # Executors capture BaseException too; only Exception is retriable
        while isinstance(exception, Exception):
            delay = self.strategy.prepare_to_retry(exception)
            should_retry, reason = self.decider.should_retry_all(self.strategy, exception)
            if not should_retry:
                logger.debug(f"Giving up after {self.strategy.attempts} attempt(s) ({reason})")
                error = create_terminal_error(self.strategy, exception)
                if error is exception:
                    raise exception
                raise error from exception

            notify_retry(self.strategy, exception, delay)
            if delay > 0:
                self.sleep_service.sleep(delay)
            try:
                return self.call()
            except Exception as exc:  # noqa: BLE001
                exception = exc
        raise exception


def _cancel_first_attempt(first: Future[Any], outer: Future[Any]) -> None:
    if outer.cancelled():
        first.cancel()


_default_factory = RetryTaskFactory()


def start_retrying(
    func: Callable[..., T],
    /,
    *args: Any,
    cancellation: CancellationToken | None = None,
    executor: Executor | None = None,
    strategy: RetryStrategy | None = None,
    policy: RetryPolicy | None = None,
    sleep_service: SleepService | None = None,
    **kwargs: Any,
) -> Future[T]:
    """Start a background task retried on failure.

    Drop-in replacement for ``executor.submit(func, *args, **kwargs)``.
    The keyword names ``cancellation``, ``executor``, ``strategy``,
    ``policy`` and ``sleep_service`` are consumed here; every other
    argument is forwarded to ``func``.

    Args:
        func: The operation to run.
        *args: Positional arguments passed to ``func``.
        cancellation: Optional cancellation token.
        executor: The executor running the first attempt. Defaults to a
            shared thread pool.
        strategy: The strategy of this task. Defaults to ``Count()``
            (5 tries).
        policy: The retry policy. Defaults to ``AnyException()``.
        sleep_service: Delay provider. Defaults to real time.
        **kwargs: Keyword arguments passed to ``func``.

    Returns:
        A future resolving to the first successful result, or failing
        with the terminal ``RetryError``.

    Raises:
        TypeError: If ``func`` is not callable.
    """
    factory = _default_factory
    if executor is not None or sleep_service is not None:
        factory = RetryTaskFactory(executor=executor, sleep_service=sleep_service)
    return factory.start_new(
        func, *args, cancellation=cancellation, strategy=strategy, policy=policy, **kwargs
    )
