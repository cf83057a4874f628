r"""Configuration shared by the retry entry points.

This package provides default values and the ``RetryConfig`` dataclass
used by the ``retriable`` decorator and the retry task factory.
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

from aretriable.core.config import (
    DEFAULT_BACKOFF_DELTA,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MAX_TRIES,
    DEFAULT_MIN_BACKOFF,
    DEFAULT_RETRY_TRIES,
    RETRY_STATUS_CODES,
    RetryConfig,
    default_strategy,
)
