r"""Utility functions shared by the retry policies, strategies and
executors.

This package provides parameter validation helpers used to reject
missing or out-of-range arguments before any attempt is made.
"""

from __future__ import annotations

__all__ = [
    "check_callable",
    "check_not_none",
    "validate_delay",
    "validate_max_tries",
]

from aretriable.utils.validation import (
    check_callable,
    check_not_none,
    validate_delay,
    validate_max_tries,
)
