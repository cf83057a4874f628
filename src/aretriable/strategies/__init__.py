r"""Retry strategies tracking attempts and computing retry delays.

This package provides the strategies consulted by the retry executors.
A strategy owns the attempt counter and the failure history of one retry
session, so a fresh instance must be created for every session.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELTA",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_MAX_TRIES",
    "DEFAULT_MIN_BACKOFF",
    "Backoff",
    "Count",
    "DoNotRetry",
    "Incremental",
    "Linear",
    "RetryStrategy",
]

from aretriable.strategies.backoff import (
    DEFAULT_BACKOFF_DELTA,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_MIN_BACKOFF,
    Backoff,
)
from aretriable.strategies.base import DEFAULT_MAX_TRIES, RetryStrategy
from aretriable.strategies.count import Count
from aretriable.strategies.do_not_retry import DoNotRetry
from aretriable.strategies.incremental import Incremental
from aretriable.strategies.linear import Linear
