r"""Shared test helpers for retry tests.

This module contains operations with scripted failures used across the
unit tests of the executors, entry points and task factory.
"""

from __future__ import annotations

__all__ = ["AsyncFlakyOperation", "FlakyOperation", "RecordingPolicy"]

import threading

from aretriable.policies import RetryPolicy


class FlakyOperation:
    """Operation failing a given number of times, then succeeding.

    Each successful call returns a new object, so tests can check which
    call produced the value returned by a retry session.

    Args:
        failures: Number of calls that raise before the first success.
            Use ``-1`` to always fail.
        error_factory: Callable receiving the call number (1-indexed) and
            returning the exception to raise.
    """

    def __init__(self, failures: int = 0, error_factory=None) -> None:
        self.failures = failures
        self.error_factory = error_factory or (lambda n: ValueError(f"failure {n}"))
        self.calls = 0
        self.errors: list[Exception] = []
        self.last_result: object | None = None
        self._lock = threading.Lock()

    def _next(self) -> object:
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.failures < 0 or call <= self.failures:
            error = self.error_factory(call)
            self.errors.append(error)
            raise error
        self.last_result = object()
        return self.last_result

    def __call__(self) -> object:
        return self._next()


class AsyncFlakyOperation(FlakyOperation):
    """Asynchronous version of ``FlakyOperation``."""

    async def __call__(self) -> object:
        return self._next()


class RecordingPolicy(RetryPolicy):
    """Policy returning a fixed answer and recording every call."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.seen: list[Exception] = []

    def can_retry(self, exception: Exception) -> bool:
        self.seen.append(exception)
        return self.answer
