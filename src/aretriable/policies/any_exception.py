r"""Policy that retries every failure."""

from __future__ import annotations

__all__ = ["AnyException"]

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_not_none


class AnyException(RetryPolicy):
    """Retry policy that allows a retry for any exception.

    This is the default policy of every entry point.

    Example:
        ```pycon
        >>> from aretriable.policies import AnyException
        >>> AnyException().can_retry(ValueError("boom"))
        True

        ```
    """

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        return True
