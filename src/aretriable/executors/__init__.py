r"""Retry engine implementing the attempt loop.

This package provides the executors that drive one retry session: they
invoke the operation, record each failure into the strategy, ask the
decider whether another attempt is allowed and apply the delay.

Public API:
    - RetryDecider: Combines strategy, cancellation and policy into a retry decision
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "RetryDecider", "RetryExecutor"]

from aretriable.executors.decider import RetryDecider
from aretriable.executors.executor import RetryExecutor
from aretriable.executors.executor_async import AsyncRetryExecutor
