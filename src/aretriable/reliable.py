r"""Supervisor keeping a long-running asynchronous operation alive.

The reliable task runner starts an operation that is meant to run until
it is asked to stop, and starts it again each time it fails, for as long
as its retry policy allows. There is no attempt limit and no delay
between restarts.

Example:
    ```pycon
    >>> import asyncio
    >>> from aretriable import run_reliable
    >>> from aretriable.cancellation import CancellationToken
    >>> async def consume(token: CancellationToken) -> None:
    ...     while not token.is_cancellation_requested:
    ...         await asyncio.sleep(0.01)  # poll a queue, serve requests...
    ...
    >>> async def main() -> None:
    ...     runner = run_reliable(consume)
    ...     await asyncio.sleep(0.05)
    ...     await runner.stop()
    ...
    >>> asyncio.run(main())

    ```
"""

from __future__ import annotations

__all__ = ["ReliableTaskRunner", "run_reliable"]

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any

from aretriable.cancellation import CancellationToken
from aretriable.policies import AnyException
from aretriable.utils.validation import check_callable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from aretriable.policies import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class ReliableTaskRunner:
    """Runs an asynchronous operation and restarts it whenever it fails.

    The operation receives a ``CancellationToken`` and is expected to run
    until the token is cancelled. Every run of the operation receives the
    same token. When a run raises an exception and the runner has not
    been stopped, the policy is consulted with that exception; if it
    allows a retry a new run starts immediately, otherwise the runner
    stays faulted. A run that returns normally without being stopped is
    not restarted.

    Use ``ReliableTaskRunner.run`` or ``run_reliable`` to create a runner
    from within a running event loop.

    Args:
        func: Callable receiving the cancellation token and returning an
            awaitable.
        policy: The retry policy deciding whether a failed run is
            restarted. Defaults to ``AnyException()``.

    Raises:
        TypeError: If ``func`` is not callable.
    """

    def __init__(
        self,
        func: Callable[[CancellationToken], Awaitable[Any]],
        policy: RetryPolicy | None = None,
    ) -> None:
        check_callable(func, "func")
        self._func = func
        self._policy = policy if policy is not None else AnyException()
        self._token = CancellationToken()
        self._lock = threading.Lock()
        self._task: asyncio.Future[Any] | None = None
        self._restarts = 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(func={self._func!r}, policy={self._policy!r}, "
            f"restarts={self._restarts}, stopped={self.is_stopped})"
        )

    async def __aenter__(self) -> ReliableTaskRunner:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()

    @classmethod
    def run(
        cls,
        func: Callable[[CancellationToken], Awaitable[Any]],
        policy: RetryPolicy | None = None,
    ) -> ReliableTaskRunner:
        """Create a runner and start the first run of the operation.

        Must be called from a coroutine or callback running in an event
        loop.

        Args:
            func: Callable receiving the cancellation token and returning
                an awaitable.
            policy: The retry policy. Defaults to ``AnyException()``.

        Returns:
            The started runner.

        Raises:
            TypeError: If ``func`` is not callable.
            RuntimeError: If there is no running event loop.
        """
        runner = cls(func, policy)
        loop = asyncio.get_running_loop()
        with runner._lock:
            runner._start(loop)
        return runner

    @property
    def token(self) -> CancellationToken:
        """The cancellation token shared by every run."""
        return self._token

    @property
    def task(self) -> asyncio.Future[Any] | None:
        """The current run, or ``None`` if the runner was never started."""
        return self._task

    @property
    def restarts(self) -> int:
        """The number of restarts after failed runs."""
        return self._restarts

    @property
    def is_stopped(self) -> bool:
        """``True`` once ``stop()`` has been called."""
        return self._token.is_cancellation_requested

    def stop(self) -> asyncio.Future[Any]:
        """Request the operation to stop.

        Cancels the shared token and returns the current run. Await it to
        wait until the operation has noticed the cancellation and
        returned. The run is not interrupted: the operation is
        responsible for observing the token. No restart happens after
        this call, even if the final run fails. If the current run
        already failed for good, awaiting the returned future raises that
        failure.

        Returns:
            The future of the current run.
        """
        with self._lock:
            self._token.cancel()
            task = self._task
        if task is None:
            task = asyncio.get_running_loop().create_future()
            task.set_result(None)
        logger.debug(f"Stop requested after {self._restarts} restart(s)")
        return task

    def _start(self, loop: asyncio.AbstractEventLoop) -> None:
        # Called with the lock held
        try:
            task = asyncio.ensure_future(self._func(self._token), loop=loop)
        except Exception as exc:  # noqa: BLE001
            task = loop.create_future()
            task.set_exception(exc)
        self._task = task
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            logger.debug("Reliable run was cancelled")
            return
        exception = task.exception()
        if exception is None:
            if not self._token.is_cancellation_requested:
                logger.warning(f"{self._func!r} returned without being stopped; not restarting")
            return

        with self._lock:
            if self._token.is_cancellation_requested:
                logger.debug(f"Final run failed after stop: {exception!r}")
                return
            if not isinstance(exception, Exception) or not self._policy.can_retry(exception):
                logger.debug(f"Not restarting after {exception!r} (rejected by {self._policy!r})")
                return
            self._restarts += 1
            logger.debug(f"Restarting after {exception!r} (restart {self._restarts})")
            self._start(task.get_loop())


def run_reliable(
    func: Callable[[CancellationToken], Awaitable[Any]],
    policy: RetryPolicy | None = None,
) -> ReliableTaskRunner:
    """Start an operation that is restarted whenever it fails.

    Equivalent to ``ReliableTaskRunner.run(func, policy)``.

    Args:
        func: Callable receiving the cancellation token and returning an
            awaitable. It should run until the token is cancelled.
        policy: The retry policy deciding whether a failed run is
            restarted. Defaults to ``AnyException()``.

    Returns:
        The started runner. Call ``await runner.stop()`` to stop it.

    Raises:
        TypeError: If ``func`` is not callable.
        RuntimeError: If there is no running event loop.
    """
    return ReliableTaskRunner.run(func, policy)
