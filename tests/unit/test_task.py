r"""Unit tests for background tasks retried on failure."""

from __future__ import annotations

import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from aretriable import RetryError, RetryTaskFactory, start_retrying
from aretriable.cancellation import CancellationToken
from aretriable.policies import DoNotRetryPolicy, ExceptionTypePolicy, RetryIfPolicy
from aretriable.sleep import SleepService
from aretriable.strategies import Count, Linear
from aretriable.task import get_default_executor
from tests.helpers import FlakyOperation

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from typing import Any

    from aretriable.sleep import VirtualSleepService

TIMEOUT = 5.0


class InlineExecutor(Executor):
    """Executor running each submitted call on the submitting thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:  # noqa: BLE001
            future.set_exception(exc)
        return future


class BrokenSleepService(SleepService):
    def sleep(self, seconds: float) -> None:
        msg = f"cannot sleep for {seconds}s"
        raise OSError(msg)

    async def sleep_async(self, seconds: float) -> None:
        self.sleep(seconds)


@pytest.fixture
def pool() -> Generator[ThreadPoolExecutor, None, None]:
    with ThreadPoolExecutor(max_workers=2) as executor:
        yield executor


######################################
#     Tests for RetryTaskFactory     #
######################################


def test_retry_task_factory_defaults() -> None:
    factory = RetryTaskFactory()
    assert factory.executor is get_default_executor()
    assert isinstance(factory.strategy_factory(), Count)


def test_retry_task_factory_strategy_factory_not_callable() -> None:
    with pytest.raises(TypeError, match=r"strategy_factory must be callable"):
        RetryTaskFactory(strategy_factory=5)  # type: ignore[arg-type]


def test_retry_task_factory_start_new_success(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation()
    future = RetryTaskFactory(executor=pool).start_new(operation)
    assert future.result(timeout=TIMEOUT) is operation.last_result
    assert operation.calls == 1


def test_retry_task_factory_start_new_forwards_arguments(pool: ThreadPoolExecutor) -> None:
    future = RetryTaskFactory(executor=pool).start_new(pow, 2, exp=8)
    assert future.result(timeout=TIMEOUT) == 256


def test_retry_task_factory_start_new_retries(
    pool: ThreadPoolExecutor, sleep_service: VirtualSleepService
) -> None:
    operation = FlakyOperation(failures=2)
    factory = RetryTaskFactory(executor=pool, sleep_service=sleep_service)
    future = factory.start_new(operation, strategy=Linear(period=0.5, max_tries=5))
    assert future.result(timeout=TIMEOUT) is operation.last_result
    assert operation.calls == 3
    assert sleep_service.delays == [0.5, 0.5]


def test_retry_task_factory_start_new_exhausted(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation(failures=-1)
    future = RetryTaskFactory(executor=pool, strategy_factory=lambda: Count(max_tries=3)).start_new(
        operation
    )
    error = future.exception(timeout=TIMEOUT)
    assert isinstance(error, RetryError)
    assert list(error.exceptions) == operation.errors
    assert error.__cause__ is operation.errors[-1]
    assert operation.calls == 3


def test_retry_task_factory_start_new_policy_veto(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation(failures=-1)
    future = RetryTaskFactory(executor=pool, policy=DoNotRetryPolicy()).start_new(operation)
    assert isinstance(future.exception(timeout=TIMEOUT), RetryError)
    assert operation.calls == 1


def test_retry_task_factory_start_new_group_requires_every_leaf(pool: ThreadPoolExecutor) -> None:
    """Test that a group is retried only if every leaf is retriable."""
    operation = FlakyOperation(
        failures=-1,
        error_factory=lambda n: ExceptionGroup("batch", [ConnectionError(n), KeyError(n)]),
    )
    future = RetryTaskFactory(executor=pool).start_new(
        operation, policy=ExceptionTypePolicy(OSError)
    )
    error = future.exception(timeout=TIMEOUT)
    assert isinstance(error, RetryError)
    assert len(error.exceptions) == 2
    assert operation.calls == 1


def test_retry_task_factory_start_new_group_all_retriable(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation(
        failures=2,
        error_factory=lambda n: ExceptionGroup("batch", [ConnectionError(n), TimeoutError(n)]),
    )
    future = RetryTaskFactory(executor=pool).start_new(
        operation, policy=ExceptionTypePolicy(OSError)
    )
    assert future.result(timeout=TIMEOUT) is operation.last_result
    assert operation.calls == 3


def test_retry_task_factory_start_new_already_cancelled(pool: ThreadPoolExecutor) -> None:
    token = CancellationToken()
    token.cancel()
    operation = FlakyOperation()
    future = RetryTaskFactory(executor=pool).start_new(operation, cancellation=token)
    assert future.cancelled()
    assert operation.calls == 0


def test_retry_task_factory_start_new_cancelled_during_attempt(pool: ThreadPoolExecutor) -> None:
    token = CancellationToken()

    def cancel_and_fail() -> None:
        token.cancel()
        msg = "boom"
        raise ValueError(msg)

    future = RetryTaskFactory(executor=pool).start_new(cancel_and_fail, cancellation=token)
    error = future.exception(timeout=TIMEOUT)
    assert isinstance(error, RetryError)
    assert len(error.exceptions) == 1


def test_retry_task_factory_cancel_before_start() -> None:
    """Test that cancelling the future before it runs skips the operation."""
    release = threading.Event()
    operation = FlakyOperation()
    with ThreadPoolExecutor(max_workers=1) as executor:
        blocker = executor.submit(release.wait, TIMEOUT)
        future = RetryTaskFactory(executor=executor).start_new(operation)
        assert future.cancel()
        release.set()
        blocker.result(timeout=TIMEOUT)
    assert future.cancelled()
    assert operation.calls == 0


def test_retry_task_factory_start_new_policy_raises(pool: ThreadPoolExecutor) -> None:
    """Test that an exception raised by the policy fails the future."""

    def broken_predicate(exc: Exception) -> bool:
        msg = f"cannot classify {exc!r}"
        raise RuntimeError(msg)

    operation = FlakyOperation(failures=-1)
    future = RetryTaskFactory(executor=pool).start_new(
        operation, strategy=Count(max_tries=3), policy=RetryIfPolicy(broken_predicate)
    )
    with pytest.raises(RuntimeError, match=r"cannot classify"):
        future.result(timeout=TIMEOUT)
    assert operation.calls == 1


def test_retry_task_factory_start_new_callback_raises(pool: ThreadPoolExecutor) -> None:
    """Test that an exception raised by an on_retrying callback fails the
    future."""

    def broken_callback(info: object) -> None:  # noqa: ARG001
        msg = "callback failed"
        raise LookupError(msg)

    operation = FlakyOperation(failures=-1)
    future = RetryTaskFactory(executor=pool).start_new(
        operation, strategy=Count(max_tries=3, on_retrying=broken_callback)
    )
    with pytest.raises(LookupError, match=r"callback failed"):
        future.result(timeout=TIMEOUT)
    assert operation.calls == 1


def test_retry_task_factory_start_new_sleep_service_raises(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation(failures=-1)
    factory = RetryTaskFactory(executor=pool, sleep_service=BrokenSleepService())
    future = factory.start_new(operation, strategy=Linear(period=1.0, max_tries=3))
    with pytest.raises(OSError, match=r"cannot sleep for 1.0s"):
        future.result(timeout=TIMEOUT)
    assert operation.calls == 1


def test_retry_task_factory_inline_executor_does_not_block() -> None:
    """Test that retries of a first attempt failing during submit do not
    run on the calling thread."""
    operation = FlakyOperation(failures=-1)
    factory = RetryTaskFactory(executor=InlineExecutor())
    start = time.monotonic()
    future = factory.start_new(operation, strategy=Linear(period=0.5, max_tries=3))
    elapsed = time.monotonic() - start
    assert elapsed < 0.5
    error = future.exception(timeout=TIMEOUT)
    assert isinstance(error, RetryError)
    assert operation.calls == 3


def test_retry_task_factory_inline_executor_success() -> None:
    operation = FlakyOperation()
    future = RetryTaskFactory(executor=InlineExecutor()).start_new(operation)
    assert future.done()
    assert future.result() is operation.last_result


####################################
#     Tests for start_retrying     #
####################################


def test_start_retrying_default_five_tries(pool: ThreadPoolExecutor) -> None:
    operation = FlakyOperation(failures=-1)
    future = start_retrying(operation, executor=pool)
    assert isinstance(future.exception(timeout=TIMEOUT), RetryError)
    assert operation.calls == 5


def test_start_retrying_default_executor() -> None:
    operation = FlakyOperation(failures=1)
    assert start_retrying(operation).result(timeout=TIMEOUT) is operation.last_result
    assert operation.calls == 2


def test_start_retrying_sleep_service(
    pool: ThreadPoolExecutor, sleep_service: VirtualSleepService
) -> None:
    operation = FlakyOperation(failures=1)
    future = start_retrying(
        operation,
        executor=pool,
        strategy=Linear(period=2.0, max_tries=3),
        sleep_service=sleep_service,
    )
    future.result(timeout=TIMEOUT)
    assert sleep_service.delays == [2.0]


def test_start_retrying_func_not_callable() -> None:
    with pytest.raises(TypeError, match=r"func must be callable"):
        start_retrying(42)  # type: ignore[arg-type]
