r"""Policy delegating the decision to a caller predicate."""

from __future__ import annotations

__all__ = ["RetryIfPolicy"]

from typing import TYPE_CHECKING

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_callable, check_not_none

if TYPE_CHECKING:
    from collections.abc import Callable


class RetryIfPolicy(RetryPolicy):
    """Retry policy backed by a predicate.

    Args:
        predicate: Callable receiving the exception and returning ``True``
            if it should be retried. It must not have side effects.

    Raises:
        TypeError: If ``predicate`` is not callable.

    Example:
        ```pycon
        >>> from aretriable.policies import RetryIfPolicy
        >>> policy = RetryIfPolicy(lambda exc: "temporary" in str(exc))
        >>> policy.can_retry(RuntimeError("temporary outage"))
        True
        >>> policy.can_retry(RuntimeError("bad credentials"))
        False

        ```
    """

    def __init__(self, predicate: Callable[[Exception], bool]) -> None:
        check_callable(predicate, "predicate")
        self.predicate = predicate

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(predicate={self.predicate!r})"

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        return bool(self.predicate(exception))
