r"""Strategy that never retries."""

from __future__ import annotations

__all__ = ["DoNotRetry"]

from aretriable.strategies.base import RetryStrategy


class DoNotRetry(RetryStrategy):
    """Retry strategy that never allows a second attempt.

    The failure of the single attempt is still recorded, so callers
    receive a ``RetryError`` like with any other strategy.

    Example:
        ```pycon
        >>> from aretriable.strategies import DoNotRetry
        >>> strategy = DoNotRetry()
        >>> strategy.prepare_to_retry(ValueError("boom"))
        0.0
        >>> strategy.can_retry
        False

        ```
    """

    @property
    def can_retry(self) -> bool:
        return False

    def calculate_delay(self, attempt: int) -> float:  # noqa: ARG002
        return 0.0
