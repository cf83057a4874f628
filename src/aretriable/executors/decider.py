r"""Retry decision logic for determining whether to attempt again.

This module provides the RetryDecider class that combines the attempt
budget of a strategy, a cancellation token and a retry policy into a
single decision.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

from aretriable.exceptions import flatten_exceptions
from aretriable.utils.validation import check_not_none

if TYPE_CHECKING:
    from aretriable.cancellation import CancellationToken
    from aretriable.policies import RetryPolicy
    from aretriable.strategies import RetryStrategy

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    A retry is allowed only if the strategy has attempts left, the
    cancellation token has not been cancelled and the policy accepts the
    failure. The checks run in that order and stop at the first refusal,
    so the policy is not consulted once the budget is exhausted.

    Args:
        policy: The retry policy.
        cancellation: Optional cancellation token.

    Raises:
        TypeError: If ``policy`` is ``None``.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        cancellation: CancellationToken | None = None,
    ) -> None:
        check_not_none(policy, "policy")
        self.policy = policy
        self.cancellation = cancellation

    @property
    def is_cancellation_requested(self) -> bool:
        """``True`` if the cancellation token has been cancelled."""
        return self.cancellation is not None and self.cancellation.is_cancellation_requested

    def should_retry(self, strategy: RetryStrategy, exception: Exception) -> tuple[bool, str]:
        """Determine if the failure should trigger another attempt.

        ``strategy.prepare_to_retry`` must have been called for this
        failure before.

        Args:
            strategy: The strategy of the session.
            exception: The failure of the last attempt.

        Returns:
            Tuple of (should_retry, reason).
        """
        if not strategy.can_retry:
            return (False, f"max tries exhausted after {strategy.attempts} attempt(s)")
        if self.is_cancellation_requested:
            return (False, "cancellation requested")
        if not self.policy.can_retry(exception):
            return (False, f"{type(exception).__name__} rejected by {self.policy!r}")
        return (True, f"{type(exception).__name__}")

    def should_retry_all(self, strategy: RetryStrategy, exception: Exception) -> tuple[bool, str]:
        """Determine if a possibly composite failure should trigger another
        attempt.

        Same as ``should_retry`` except that an exception group is only
        retried if the policy accepts every one of its leaf exceptions.

        Args:
            strategy: The strategy of the session.
            exception: The failure of the last attempt.

        Returns:
            Tuple of (should_retry, reason).
        """
        check_not_none(exception, "exception")
        if not strategy.can_retry:
            return (False, f"max tries exhausted after {strategy.attempts} attempt(s)")
        if self.is_cancellation_requested:
            return (False, "cancellation requested")
        for inner in flatten_exceptions(exception):
            if not self.policy.can_retry(inner):
                return (False, f"{type(inner).__name__} rejected by {self.policy!r}")
        return (True, f"{type(exception).__name__}")
