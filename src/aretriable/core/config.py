r"""Configuration dataclass and defaults for retry sessions.

This module provides configuration constants and a dataclass-based
configuration object. Because a retry strategy is stateful and owned by
a single session, the configuration stores a strategy factory and
creates a fresh strategy for every session.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELTA",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_MAX_TRIES",
    "DEFAULT_MIN_BACKOFF",
    "DEFAULT_RETRY_TRIES",
    "RETRY_STATUS_CODES",
    "RetryConfig",
    "default_strategy",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretriable.policies import RETRY_STATUS_CODES, AnyException
from aretriable.sleep import DEFAULT_SLEEP_SERVICE
from aretriable.strategies import (
    DEFAULT_BACKOFF_DELTA,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MAX_TRIES,
    DEFAULT_MIN_BACKOFF,
    Count,
)
from aretriable.utils.validation import check_callable

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretriable.callbacks import RetryCallback
    from aretriable.policies import RetryPolicy
    from aretriable.sleep import SleepService
    from aretriable.strategies import RetryStrategy


# Default maximum number of tries used by retry() and retry_async()
DEFAULT_RETRY_TRIES = 10


def default_strategy() -> RetryStrategy:
    """Create the default strategy of ``retry`` and ``retry_async``.

    Returns:
        A new ``Count`` strategy allowing ``DEFAULT_RETRY_TRIES`` tries.
    """
    return Count(max_tries=DEFAULT_RETRY_TRIES)


@dataclass
class RetryConfig:
    """Configuration for retry sessions.

    Args:
        strategy_factory: Zero-argument callable returning a new retry
            strategy. It is called once per session.
        policy: Retry policy shared by every session.
        sleep_service: Delay provider used between attempts.
        on_retry: Optional callback registered on every created strategy.

    Example:
        ```pycon
        >>> from aretriable.core import RetryConfig
        >>> from aretriable.strategies import Linear
        >>> config = RetryConfig()  # Use defaults
        >>> config.create_strategy()
        Count(max_tries=10, attempts=0)
        >>> config = config.merge(strategy_factory=lambda: Linear(period=0.5, max_tries=3))
        >>> config.create_strategy()
        Linear(period=0.5, max_tries=3, attempts=0)

        ```
    """

    strategy_factory: Callable[[], RetryStrategy] = default_strategy
    policy: RetryPolicy = field(default_factory=AnyException)
    sleep_service: SleepService = DEFAULT_SLEEP_SERVICE
    on_retry: RetryCallback | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If a required parameter is missing or not
                callable.
        """
        check_callable(self.strategy_factory, "strategy_factory")
        check_callable(getattr(self.policy, "can_retry", None), "policy.can_retry")
        check_callable(getattr(self.sleep_service, "sleep", None), "sleep_service.sleep")
        if self.on_retry is not None:
            check_callable(self.on_retry, "on_retry")

    def create_strategy(self) -> RetryStrategy:
        """Create a new strategy for one retry session.

        Returns:
            A new strategy with ``on_retry`` registered, if set.

        Raises:
            TypeError: If the factory returns ``None``.
        """
        strategy = self.strategy_factory()
        if strategy is None:
            msg = "strategy_factory must return a strategy, got None"
            raise TypeError(msg)
        if self.on_retry is not None:
            strategy.add_retrying_callback(self.on_retry)
        return strategy

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from aretriable.core import RetryConfig
            >>> from aretriable.policies import DoNotRetryPolicy
            >>> config = RetryConfig()
            >>> new_config = config.merge(policy=DoNotRetryPolicy(), on_retry=None)
            >>> new_config.policy
            DoNotRetryPolicy()
            >>> config.policy  # Original unchanged
            AnyException()

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
