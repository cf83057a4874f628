r"""Policy that never retries."""

from __future__ import annotations

__all__ = ["DoNotRetryPolicy"]

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_not_none


class DoNotRetryPolicy(RetryPolicy):
    """Retry policy that never allows a retry.

    Example:
        ```pycon
        >>> from aretriable.policies import DoNotRetryPolicy
        >>> DoNotRetryPolicy().can_retry(ValueError("boom"))
        False

        ```
    """

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        return False
