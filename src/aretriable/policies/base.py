r"""Abstract base class for retry policies."""

from __future__ import annotations

__all__ = ["RetryPolicy"]

from abc import ABC, abstractmethod


class RetryPolicy(ABC):
    """Abstract base class for retry policies.

    A retry policy decides whether a particular failure can be retried at
    all. It does not track attempts; that is the job of the retry
    strategy. Implementations must be free of side effects so that a
    single instance can be shared between sessions.
    """

    @abstractmethod
    def can_retry(self, exception: Exception) -> bool:
        """Decide whether the failure can be retried.

        Args:
            exception: The exception raised by the operation.

        Returns:
            ``True`` if another attempt is allowed for this failure.

        Raises:
            TypeError: If ``exception`` is ``None``.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
