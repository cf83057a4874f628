r"""Parameter validation utilities for retry logic.

This module provides validation functions used by the policies,
strategies and entry points to reject invalid arguments synchronously,
before the operation is invoked.
"""

from __future__ import annotations

__all__ = ["check_callable", "check_not_none", "validate_delay", "validate_max_tries"]

from typing import Any


def check_not_none(value: Any, name: str) -> None:
    """Check that a required argument is provided.

    Args:
        value: The argument value.
        name: The argument name, used in the error message.

    Raises:
        TypeError: If the value is ``None``.

    Example:
        ```pycon
        >>> from aretriable.utils.validation import check_not_none
        >>> check_not_none(ValueError("boom"), "exception")
        >>> check_not_none(None, "exception")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        TypeError: exception must not be None

        ```
    """
    if value is None:
        msg = f"{name} must not be None"
        raise TypeError(msg)


def check_callable(value: Any, name: str) -> None:
    """Check that a required argument is a callable.

    Args:
        value: The argument value.
        name: The argument name, used in the error message.

    Raises:
        TypeError: If the value is ``None`` or not callable.
    """
    check_not_none(value, name)
    if not callable(value):
        msg = f"{name} must be callable, got {type(value).__name__}"
        raise TypeError(msg)


def validate_max_tries(max_tries: int) -> None:
    """Validate the maximum number of tries of a strategy.

    Args:
        max_tries: The maximum number of tries. Must be > 0.

    Raises:
        ValueError: If ``max_tries`` is not positive.

    Example:
        ```pycon
        >>> from aretriable.utils.validation import validate_max_tries
        >>> validate_max_tries(5)
        >>> validate_max_tries(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_tries must be > 0, got 0

        ```
    """
    if max_tries <= 0:
        msg = f"max_tries must be > 0, got {max_tries}"
        raise ValueError(msg)


def validate_delay(seconds: float, name: str = "delay") -> None:
    """Validate a delay duration.

    Args:
        seconds: The delay in seconds. Must be >= 0.
        name: The parameter name, used in the error message.

    Raises:
        ValueError: If the delay is negative.
    """
    if seconds < 0:
        msg = f"{name} must be >= 0, got {seconds}"
        raise ValueError(msg)
