r"""Retry policies deciding whether a failure may be retried.

This package provides the policies consulted by the retry executors and
the reliable task runner. A policy is a stateless predicate over an
exception, so one instance can be shared freely across sessions and
threads.
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "AggregatePolicy",
    "AnyException",
    "DoNotRetryPolicy",
    "ExceptionTypePolicy",
    "RetryIfPolicy",
    "RetryPolicy",
    "TransientHttpErrorPolicy",
]

from aretriable.policies.aggregate import AggregatePolicy
from aretriable.policies.any_exception import AnyException
from aretriable.policies.base import RetryPolicy
from aretriable.policies.do_not_retry import DoNotRetryPolicy
from aretriable.policies.exception_type import ExceptionTypePolicy
from aretriable.policies.http import RETRY_STATUS_CODES, TransientHttpErrorPolicy
from aretriable.policies.retry_if import RetryIfPolicy
