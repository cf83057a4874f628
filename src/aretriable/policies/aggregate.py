r"""Policy combining several policies with a logical AND."""

from __future__ import annotations

__all__ = ["AggregatePolicy"]

from typing import TYPE_CHECKING

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_not_none

if TYPE_CHECKING:
    from collections.abc import Iterable


class AggregatePolicy(RetryPolicy):
    """Retry policy that allows a retry only if every child policy does.

    An aggregate without children allows every retry. Child policies can
    be passed at construction or appended to ``policies`` later.

    Args:
        policies: The child policies.

    Example:
        ```pycon
        >>> from aretriable.policies import AggregatePolicy, AnyException, DoNotRetryPolicy
        >>> AggregatePolicy().can_retry(ValueError("boom"))
        True
        >>> policy = AggregatePolicy([AnyException(), DoNotRetryPolicy()])
        >>> policy.can_retry(ValueError("boom"))
        False
        >>> policy.policies.pop()
        DoNotRetryPolicy()
        >>> policy.can_retry(ValueError("boom"))
        True

        ```
    """

    def __init__(self, policies: Iterable[RetryPolicy] = ()) -> None:
        self.policies: list[RetryPolicy] = list(policies)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policies={self.policies!r})"

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        return all(policy.can_retry(exception) for policy in self.policies)
