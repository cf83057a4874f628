r"""Strategy retrying with a constant delay."""

from __future__ import annotations

__all__ = ["Linear"]

from typing import TYPE_CHECKING

from aretriable.strategies.base import RetryStrategy
from aretriable.utils.validation import validate_delay, validate_max_tries

if TYPE_CHECKING:
    from aretriable.callbacks import RetryCallback


class Linear(RetryStrategy):
    """Retry strategy waiting the same period before every retry.

    Args:
        period: The delay in seconds before each retry. Must be >= 0.
        max_tries: The maximum number of tries, including the first one.
            Must be > 0.
        on_retrying: Optional callback invoked before each retry.

    Raises:
        ValueError: If ``period`` is negative or ``max_tries`` is not
            positive.

    Example:
        ```pycon
        >>> from aretriable.strategies import Linear
        >>> strategy = Linear(period=1.0, max_tries=10)
        >>> strategy.prepare_to_retry(ValueError("first"))
        1.0
        >>> strategy.prepare_to_retry(ValueError("second"))
        1.0

        ```
    """

    def __init__(
        self, period: float, max_tries: int, on_retrying: RetryCallback | None = None
    ) -> None:
        validate_delay(period, "period")
        validate_max_tries(max_tries)
        super().__init__(on_retrying)
        self.period = period
        self.max_tries = max_tries

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(period={self.period}, "
            f"max_tries={self.max_tries}, attempts={self.attempts})"
        )

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_tries

    def calculate_delay(self, attempt: int) -> float:  # noqa: ARG002
        return self.period
