r"""Strategy retrying with a linearly increasing delay."""

from __future__ import annotations

__all__ = ["Incremental"]

from typing import TYPE_CHECKING

from aretriable.strategies.base import DEFAULT_MAX_TRIES, RetryStrategy
from aretriable.utils.validation import validate_delay, validate_max_tries

if TYPE_CHECKING:
    from aretriable.callbacks import RetryCallback


class Incremental(RetryStrategy):
    """Retry strategy whose delay grows by a fixed step after each
    failure.

    Calculates delay as: initial_delay + (attempt - 1) * step.

    Args:
        max_tries: The maximum number of tries, including the first one.
            Must be > 0.
        initial_delay: The delay in seconds before the first retry.
            Must be >= 0.
        step: The increase in seconds applied to each following delay.
            Must be >= 0.
        on_retrying: Optional callback invoked before each retry.

    Raises:
        ValueError: If any argument is out of range.

    Example:
        ```pycon
        >>> from aretriable.strategies import Incremental
        >>> strategy = Incremental(max_tries=10, initial_delay=1.0, step=1.0)
        >>> [strategy.prepare_to_retry(ValueError(i)) for i in range(3)]
        [1.0, 2.0, 3.0]

        ```
    """

    def __init__(
        self,
        max_tries: int = DEFAULT_MAX_TRIES,
        initial_delay: float = 1.0,
        step: float = 2.0,
        on_retrying: RetryCallback | None = None,
    ) -> None:
        validate_max_tries(max_tries)
        validate_delay(initial_delay, "initial_delay")
        validate_delay(step, "step")
        super().__init__(on_retrying)
        self.max_tries = max_tries
        self.initial_delay = initial_delay
        self.step = step

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_tries={self.max_tries}, "
            f"initial_delay={self.initial_delay}, step={self.step}, attempts={self.attempts})"
        )

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_tries

    def calculate_delay(self, attempt: int) -> float:
        return self.initial_delay + (attempt - 1) * self.step
