r"""Abstract base class for retry strategies."""

from __future__ import annotations

__all__ = ["DEFAULT_MAX_TRIES", "RetryStrategy"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aretriable.callbacks import invoke_on_retry
from aretriable.exceptions import RetryError, flatten_exceptions
from aretriable.utils.validation import check_callable, check_not_none

if TYPE_CHECKING:
    from aretriable.callbacks import RetryCallback, RetryInfo

logger: logging.Logger = logging.getLogger(__name__)

# Default maximum number of tries of the Count, Incremental and Backoff
# strategies, including the first attempt
DEFAULT_MAX_TRIES = 5


class RetryStrategy(ABC):
    """Abstract base class for retry strategies.

    A retry strategy is the stateful half of a retry session. It records
    every failure into a flattened history, counts the failed attempts,
    reports whether another attempt is allowed and computes the delay
    before it. Whether a given failure is retriable at all is decided
    separately by a ``RetryPolicy``.

    A strategy instance belongs to exactly one retry session and must
    not be shared between concurrent sessions.

    Args:
        on_retrying: Optional callback invoked with a ``RetryInfo``
            before each delay. More callbacks can be registered with
            ``add_retrying_callback``.
    """

    def __init__(self, on_retrying: RetryCallback | None = None) -> None:
        self._exceptions: list[Exception] = []
        self._callbacks: list[RetryCallback] = []
        self._attempts = 0
        if on_retrying is not None:
            self.add_retrying_callback(on_retrying)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(attempts={self._attempts})"

    @property
    def attempts(self) -> int:
        """The number of failed attempts recorded so far."""
        return self._attempts

    @property
    def exceptions(self) -> tuple[Exception, ...]:
        """The flattened failure history, in attempt order."""
        return tuple(self._exceptions)

    @property
    def exception(self) -> RetryError | None:
        """The failure history as a composite failure.

        Returns:
            A ``RetryError`` wrapping every recorded failure, or ``None``
            if no failure has been recorded.
        """
        if not self._exceptions:
            return None
        return RetryError(
            f"operation failed after {self._attempts} attempt(s)", self._exceptions
        )

    @property
    @abstractmethod
    def can_retry(self) -> bool:
        """``True`` while the attempt budget allows another attempt."""

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The number of failed attempts so far (1-indexed).
                For example, attempt=1 is the delay after the first
                failure.

        Returns:
            The delay in seconds.
        """

    def prepare_to_retry(self, exception: Exception) -> float:
        """Record a failed attempt and compute the delay before the next
        one.

        This method must be called exactly once per failed attempt, in
        attempt order, before ``can_retry`` is consulted.

        Args:
            exception: The exception raised by the failed attempt.
                Exception groups are recorded as their leaf exceptions.

        Returns:
            The delay in seconds before the next attempt, or ``0.0`` if
            the attempt budget is exhausted.

        Raises:
            TypeError: If ``exception`` is ``None``.
        """
        check_not_none(exception, "exception")
        self._exceptions.extend(flatten_exceptions(exception))
        self._attempts += 1
        if not self.can_retry:
            logger.debug(f"{self!r} exhausted after {self._attempts} attempt(s)")
            return 0.0
        return self.calculate_delay(self._attempts)

    def add_retrying_callback(self, callback: RetryCallback) -> None:
        """Register a callback invoked before each delay.

        Args:
            callback: Callable receiving a ``RetryInfo``.

        Raises:
            TypeError: If ``callback`` is not callable.
        """
        check_callable(callback, "callback")
        self._callbacks.append(callback)

    def on_retrying(self, info: RetryInfo) -> None:
        """Notify the registered callbacks that a retry is about to
        happen.

        Args:
            info: The retry information.
        """
        invoke_on_retry(self._callbacks, info)
