r"""Shared core logic for retry executors.

This module provides helper functions used by the synchronous and
asynchronous retry executors and by the retry task factory.
"""

from __future__ import annotations

__all__ = ["create_terminal_error", "notify_retry"]

import logging
from typing import TYPE_CHECKING

from aretriable.callbacks import RetryInfo

if TYPE_CHECKING:
    from aretriable.strategies import RetryStrategy

logger: logging.Logger = logging.getLogger(__name__)


def notify_retry(strategy: RetryStrategy, exception: Exception, delay: float) -> None:
    """Log the upcoming retry and notify the strategy callbacks.

    Args:
        strategy: The strategy of the session.
        exception: The failure of the last attempt.
        delay: The delay in seconds before the next attempt.
    """
    logger.debug(
        f"Attempt {strategy.attempts} failed with {type(exception).__name__}: {exception}; "
        f"retrying in {delay:.2f}s"
    )
    strategy.on_retrying(RetryInfo(error=exception, delay=delay, attempt=strategy.attempts))


def create_terminal_error(strategy: RetryStrategy, exception: Exception) -> Exception:
    """Select the error surfaced to the caller when a session gives up.

    The failure history held by the strategy is authoritative: it already
    contains the final failure. The final failure is only returned on its
    own if the strategy recorded nothing.

    Args:
        strategy: The strategy of the session.
        exception: The failure of the final attempt.

    Returns:
        The strategy's ``RetryError`` if its history is not empty,
        otherwise ``exception``.
    """
    error = strategy.exception
    if error is None:
        return exception
    return error
