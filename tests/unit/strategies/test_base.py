r"""Unit tests for the RetryStrategy base class."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretriable.callbacks import RetryInfo
from aretriable.exceptions import RetryError
from aretriable.strategies import Count, RetryStrategy


class FixedDelay(RetryStrategy):
    """Strategy with two tries and a delay equal to the attempt number."""

    @property
    def can_retry(self) -> bool:
        return self.attempts < 2

    def calculate_delay(self, attempt: int) -> float:
        return float(attempt)


def test_retry_strategy_is_abstract() -> None:
    with pytest.raises(TypeError):
        RetryStrategy()  # type: ignore[abstract]


def test_retry_strategy_initial_state() -> None:
    """Test that a new strategy has no history."""
    strategy = FixedDelay()
    assert strategy.attempts == 0
    assert strategy.exceptions == ()
    assert strategy.exception is None
    assert strategy.can_retry


def test_retry_strategy_prepare_to_retry_records_and_counts() -> None:
    """Test that each failure is recorded and counted."""
    strategy = FixedDelay()
    error = ValueError("boom")
    assert strategy.prepare_to_retry(error) == 1.0
    assert strategy.attempts == 1
    assert strategy.exceptions == (error,)


def test_retry_strategy_prepare_to_retry_exhausted_returns_zero() -> None:
    """Test that no delay is computed once the budget is exhausted."""
    strategy = FixedDelay()
    strategy.prepare_to_retry(ValueError("first"))
    assert strategy.prepare_to_retry(ValueError("second")) == 0.0
    assert not strategy.can_retry


def test_retry_strategy_prepare_to_retry_none() -> None:
    """Test that a missing exception is an argument error."""
    strategy = FixedDelay()
    with pytest.raises(TypeError, match=r"exception must not be None"):
        strategy.prepare_to_retry(None)  # type: ignore[arg-type]
    assert strategy.attempts == 0


def test_retry_strategy_flattens_groups() -> None:
    """Test that exception groups are recorded as their leaf exceptions."""
    strategy = Count(max_tries=5)
    a, b, c = ValueError("a"), KeyError("b"), OSError("c")
    strategy.prepare_to_retry(ExceptionGroup("outer", [a, ExceptionGroup("inner", [b])]))
    strategy.prepare_to_retry(c)
    assert strategy.exceptions == (a, b, c)
    assert strategy.attempts == 2


def test_retry_strategy_exception_is_retry_error() -> None:
    """Test that the history is materialized as a RetryError."""
    strategy = Count(max_tries=5)
    errors = [ValueError("a"), ValueError("b")]
    for error in errors:
        strategy.prepare_to_retry(error)
    aggregate = strategy.exception
    assert isinstance(aggregate, RetryError)
    assert list(aggregate.exceptions) == errors
    assert aggregate.message == "operation failed after 2 attempt(s)"


def test_retry_strategy_exception_never_nested() -> None:
    """Test that the aggregate never contains another group."""
    strategy = Count(max_tries=5)
    strategy.prepare_to_retry(RetryError("previous", [ValueError("a"), ValueError("b")]))
    assert not any(isinstance(exc, BaseExceptionGroup) for exc in strategy.exception.exceptions)
    assert len(strategy.exception.exceptions) == 2


def test_retry_strategy_on_retrying_without_callbacks() -> None:
    """Test that notifying without callbacks is a no-op."""
    FixedDelay().on_retrying(RetryInfo(error=ValueError(), delay=0.0, attempt=1))


def test_retry_strategy_on_retrying_constructor_callback() -> None:
    """Test the callback passed at construction."""
    callback = Mock()
    strategy = FixedDelay(on_retrying=callback)
    info = RetryInfo(error=ValueError(), delay=1.0, attempt=1)
    strategy.on_retrying(info)
    callback.assert_called_once_with(info)


def test_retry_strategy_add_retrying_callback() -> None:
    """Test that several callbacks can be registered."""
    first, second = Mock(), Mock()
    strategy = FixedDelay(on_retrying=first)
    strategy.add_retrying_callback(second)
    info = RetryInfo(error=ValueError(), delay=1.0, attempt=1)
    strategy.on_retrying(info)
    first.assert_called_once_with(info)
    second.assert_called_once_with(info)


def test_retry_strategy_add_retrying_callback_not_callable() -> None:
    with pytest.raises(TypeError, match=r"callback must be callable"):
        FixedDelay().add_retrying_callback(42)  # type: ignore[arg-type]
