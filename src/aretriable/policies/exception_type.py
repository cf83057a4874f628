r"""Policy retrying only selected exception types."""

from __future__ import annotations

__all__ = ["ExceptionTypePolicy"]

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_not_none


class ExceptionTypePolicy(RetryPolicy):
    """Retry policy that allows a retry for the given exception types.

    Args:
        *exception_types: The retriable exception types. Subclasses are
            matched too.

    Raises:
        ValueError: If no exception type is given.

    Example:
        ```pycon
        >>> from aretriable.policies import ExceptionTypePolicy
        >>> policy = ExceptionTypePolicy(ConnectionError, TimeoutError)
        >>> policy.can_retry(ConnectionResetError())
        True
        >>> policy.can_retry(KeyError("missing"))
        False

        ```
    """

    def __init__(self, *exception_types: type[Exception]) -> None:
        if not exception_types:
            msg = "at least one exception type is required"
            raise ValueError(msg)
        self.exception_types = exception_types

    def __repr__(self) -> str:
        names = ", ".join(exc_type.__name__ for exc_type in self.exception_types)
        return f"{self.__class__.__qualname__}({names})"

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        return isinstance(exception, self.exception_types)
