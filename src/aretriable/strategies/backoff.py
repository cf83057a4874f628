r"""Strategy retrying with a randomized exponential delay."""

from __future__ import annotations

__all__ = ["DEFAULT_BACKOFF_DELTA", "DEFAULT_MAX_BACKOFF", "DEFAULT_MIN_BACKOFF", "Backoff"]

import random
from typing import TYPE_CHECKING

from aretriable.strategies.base import DEFAULT_MAX_TRIES, RetryStrategy
from aretriable.utils.validation import validate_delay, validate_max_tries

if TYPE_CHECKING:
    from aretriable.callbacks import RetryCallback

# Default Backoff parameters in seconds
# 1st retry waits about 1 + 2 = 3s, 2nd about 1 + 6 = 7s, capped at 30s
DEFAULT_BACKOFF_DELTA = 2.0
DEFAULT_MIN_BACKOFF = 1.0
DEFAULT_MAX_BACKOFF = 30.0


class Backoff(RetryStrategy):
    """Retry strategy with randomized exponential backoff.

    Calculates delay as:
    min(min_backoff + (2 ** attempt - 1) * uniform(0.8, 1.2) * delta_backoff, max_backoff).

    The random factor spreads the retries of concurrent sessions so they
    do not hit a recovering service at the same time. Each instance draws
    from its own random generator.

    Args:
        max_tries: The maximum number of tries, including the first one.
            Must be > 0.
        delta_backoff: The base increment in seconds. Must be >= 0.
        min_backoff: The lower bound of the delay in seconds.
            Must be >= 0.
        max_backoff: The upper bound of the delay in seconds. Must be
            >= ``min_backoff``.
        on_retrying: Optional callback invoked before each retry.
        rng: Optional random generator, mainly for reproducible tests.
            Defaults to a new ``random.Random`` seeded from the OS.

    Raises:
        ValueError: If any argument is out of range.

    Example:
        ```pycon
        >>> from aretriable.strategies import Backoff
        >>> strategy = Backoff(max_tries=5, delta_backoff=2.0)
        >>> delay = strategy.prepare_to_retry(ValueError("boom"))
        >>> 1.0 + 1.6 <= delay <= 1.0 + 2.4
        True
        >>> strategy = Backoff(max_tries=20, delta_backoff=2.0, max_backoff=30.0)
        >>> delays = [strategy.prepare_to_retry(ValueError(i)) for i in range(10)]
        >>> delays[-1]
        30.0

        ```
    """

    def __init__(
        self,
        max_tries: int = DEFAULT_MAX_TRIES,
        delta_backoff: float = DEFAULT_BACKOFF_DELTA,
        min_backoff: float = DEFAULT_MIN_BACKOFF,
        max_backoff: float = DEFAULT_MAX_BACKOFF,
        on_retrying: RetryCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        validate_max_tries(max_tries)
        validate_delay(delta_backoff, "delta_backoff")
        validate_delay(min_backoff, "min_backoff")
        if max_backoff < min_backoff:
            msg = f"max_backoff must be >= min_backoff ({min_backoff}), got {max_backoff}"
            raise ValueError(msg)
        super().__init__(on_retrying)
        self.max_tries = max_tries
        self.delta_backoff = delta_backoff
        self.min_backoff = min_backoff
        self.max_backoff = max_backoff
        self._rng = rng if rng is not None else random.Random()  # noqa: S311

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_tries={self.max_tries}, "
            f"delta_backoff={self.delta_backoff}, min_backoff={self.min_backoff}, "
            f"max_backoff={self.max_backoff}, attempts={self.attempts})"
        )

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_tries

    def calculate_delay(self, attempt: int) -> float:
        jitter = self._rng.uniform(0.8 * self.delta_backoff, 1.2 * self.delta_backoff)
        increment = (2**attempt - 1) * jitter
        return min(self.min_backoff + increment, self.max_backoff)
