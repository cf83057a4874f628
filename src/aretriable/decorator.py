r"""Decorator adding retry behavior to functions.

Example:
    ```pycon
    >>> from aretriable import retriable
    >>> from aretriable.strategies import Linear
    >>> @retriable(strategy_factory=lambda: Linear(period=0.5, max_tries=3))
    ... def fetch_data(key: str) -> str:
    ...     return key.upper()
    ...
    >>> fetch_data("abc")
    'ABC'
    >>> @retriable
    ... async def fetch_remote(key: str) -> str:
    ...     return key
    ...

    ```
"""

from __future__ import annotations

__all__ = ["retriable"]

import functools
import inspect
from typing import TYPE_CHECKING, Any

from aretriable.core.config import RetryConfig
from aretriable.executors import AsyncRetryExecutor, RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretriable.cancellation import CancellationToken


def retriable(
    func: Callable[..., Any] | None = None,
    *,
    config: RetryConfig | None = None,
    cancellation: CancellationToken | None = None,
    **overrides: Any,
) -> Any:
    """Wrap a function so every call is retried on failure.

    Works for regular functions and ``async def`` functions. Each call of
    the wrapped function is its own retry session with a fresh strategy
    from ``config.strategy_factory``.

    Can be used bare (``@retriable``) or with arguments
    (``@retriable(config=...)``).

    Args:
        func: The function to wrap. Set when used without parentheses.
        config: Retry configuration. Defaults to ``RetryConfig()``.
        cancellation: Optional cancellation token shared by every call.
        **overrides: ``RetryConfig`` fields overriding ``config``
            (``strategy_factory``, ``policy``, ``sleep_service``,
            ``on_retry``).

    Returns:
        The wrapped function, or a decorator if ``func`` is ``None``.

    Raises:
        TypeError: If an override is not a ``RetryConfig`` field or is
            invalid.
    """
    retry_config = (config if config is not None else RetryConfig()).merge(**overrides)

    def decorator(wrapped: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(wrapped):

            @functools.wraps(wrapped)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                executor = AsyncRetryExecutor(
                    strategy=retry_config.create_strategy(),
                    policy=retry_config.policy,
                    cancellation=cancellation,
                    sleep_service=retry_config.sleep_service,
                )
                return await executor.execute(wrapped, *args, **kwargs)

            return async_wrapper

        @functools.wraps(wrapped)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            executor = RetryExecutor(
                strategy=retry_config.create_strategy(),
                policy=retry_config.policy,
                cancellation=cancellation,
                sleep_service=retry_config.sleep_service,
            )
            return executor.execute(wrapped, *args, **kwargs)

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
