r"""aretriable - Retry and supervision for fallible operations.

This package re-executes synchronous and asynchronous operations when
they fail, following pluggable rules for whether a failure is retriable
(policies) and how long to wait before the next attempt (strategies). It
also provides a supervisor that keeps a long-running asynchronous
operation alive, restarting it whenever it fails.

Key Features:
    - Blocking and asyncio retry entry points, plus a decorator
    - Strategies: Count, Linear, Incremental, randomized exponential Backoff, DoNotRetry
    - Policies: AnyException, DoNotRetryPolicy, AggregatePolicy, predicates,
      exception types and transient httpx errors
    - Full failure history surfaced as a single RetryError (an ExceptionGroup)
    - Cooperative cancellation with CancellationToken
    - Background retrying tasks returning concurrent.futures.Future
    - ReliableTaskRunner restarting a long-running operation until stopped
    - Injectable sleep service for deterministic tests

Example:
    ```pycon
    >>> from aretriable import retry
    >>> from aretriable.policies import ExceptionTypePolicy
    >>> from aretriable.strategies import Incremental
    >>> # Retry up to 10 times without delay
    >>> value = retry(lambda: 42)
    >>> # Retry connection errors, waiting 1s, 3s, 5s... between attempts
    >>> value = retry(
    ...     fetch_data,
    ...     strategy=Incremental(max_tries=5, initial_delay=1.0, step=2.0),
    ...     policy=ExceptionTypePolicy(ConnectionError),
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "CancellationToken",
    "ReliableTaskRunner",
    "RetryConfig",
    "RetryError",
    "RetryInfo",
    "RetryTaskFactory",
    "__version__",
    "retriable",
    "retry",
    "retry_async",
    "run_reliable",
    "start_retrying",
]

from importlib.metadata import PackageNotFoundError, version

from aretriable.callbacks import RetryInfo
from aretriable.cancellation import CancellationToken
from aretriable.core.config import RetryConfig
from aretriable.exceptions import RetryError
from aretriable.reliable import ReliableTaskRunner, run_reliable
from aretriable.retriable import retry, retry_async

# Imported after aretriable.retriable so the submodule attribute set by that
# import does not shadow the ``retriable`` decorator.
from aretriable.decorator import retriable  # noqa: E402
from aretriable.task import RetryTaskFactory, start_retrying

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
