r"""Exceptions raised when a retry session fails.

This module provides the composite failure raised to callers once every
permitted attempt of an operation has failed, and a helper to flatten
nested exception groups into their leaf exceptions.
"""

from __future__ import annotations

__all__ = ["RetryError", "flatten_exceptions"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def flatten_exceptions(exception: BaseException) -> list[BaseException]:
    """Flatten an exception into its leaf exceptions.

    Exception groups are expanded recursively, so the returned list never
    contains a group. Any other exception is returned as a one-element
    list.

    Args:
        exception: The exception to flatten.

    Returns:
        The leaf exceptions, in order.

    Example:
        ```pycon
        >>> from aretriable.exceptions import flatten_exceptions
        >>> group = ExceptionGroup("outer", [ValueError("a"), ExceptionGroup("inner", [KeyError("b")])])
        >>> flatten_exceptions(group)
        [ValueError('a'), KeyError('b')]
        >>> flatten_exceptions(RuntimeError("c"))
        [RuntimeError('c')]

        ```
    """
    if isinstance(exception, BaseExceptionGroup):
        leaves: list[BaseException] = []
        for inner in exception.exceptions:
            leaves.extend(flatten_exceptions(inner))
        return leaves
    return [exception]


class RetryError(ExceptionGroup):
    """Composite failure raised when a retry session gives up.

    The contained exceptions are every failure observed during the
    session, flattened and in attempt order. The last one is the failure
    of the final attempt.

    Example:
        ```pycon
        >>> from aretriable.exceptions import RetryError
        >>> error = RetryError("operation failed after 2 attempts", [ValueError(1), ValueError(2)])
        >>> len(error.exceptions)
        2
        >>> error.last_exception
        ValueError(2)

        ```
    """

    def derive(self, excs: Sequence[Exception]) -> RetryError:
        return RetryError(self.message, excs)

    @property
    def last_exception(self) -> Exception:
        """The failure of the final attempt."""
        return self.exceptions[-1]
