r"""Strategy retrying a fixed number of times without delay."""

from __future__ import annotations

__all__ = ["Count"]

from typing import TYPE_CHECKING

from aretriable.strategies.base import DEFAULT_MAX_TRIES, RetryStrategy
from aretriable.utils.validation import validate_max_tries

if TYPE_CHECKING:
    from aretriable.callbacks import RetryCallback


class Count(RetryStrategy):
    """Retry strategy allowing a fixed number of tries with no delay.

    Args:
        max_tries: The maximum number of tries, including the first one.
            Must be > 0.
        on_retrying: Optional callback invoked before each retry.

    Raises:
        ValueError: If ``max_tries`` is not positive.

    Example:
        ```pycon
        >>> from aretriable.strategies import Count
        >>> strategy = Count(max_tries=2)
        >>> strategy.prepare_to_retry(ValueError("first"))
        0.0
        >>> strategy.can_retry
        True
        >>> strategy.prepare_to_retry(ValueError("second"))
        0.0
        >>> strategy.can_retry
        False

        ```
    """

    def __init__(
        self, max_tries: int = DEFAULT_MAX_TRIES, on_retrying: RetryCallback | None = None
    ) -> None:
        validate_max_tries(max_tries)
        super().__init__(on_retrying)
        self.max_tries = max_tries

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_tries={self.max_tries}, attempts={self.attempts})"

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_tries

    def calculate_delay(self, attempt: int) -> float:  # noqa: ARG002
        return 0.0
