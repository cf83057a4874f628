r"""Unit tests for the helpers shared by the retry executors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aretriable.callbacks import RetryInfo
from aretriable.exceptions import RetryError
from aretriable.executors.executor_core import create_terminal_error, notify_retry
from aretriable.strategies import Count

if TYPE_CHECKING:
    from unittest.mock import Mock


def test_notify_retry_invokes_callbacks(mock_callback: Mock) -> None:
    strategy = Count(max_tries=3, on_retrying=mock_callback)
    error = ValueError("boom")
    strategy.prepare_to_retry(error)
    notify_retry(strategy, error, 1.5)
    mock_callback.assert_called_once_with(RetryInfo(error=error, delay=1.5, attempt=1))


def test_create_terminal_error_returns_history() -> None:
    strategy = Count(max_tries=2)
    errors = [ValueError("a"), ValueError("b")]
    for error in errors:
        strategy.prepare_to_retry(error)
    terminal = create_terminal_error(strategy, errors[-1])
    assert isinstance(terminal, RetryError)
    assert list(terminal.exceptions) == errors


def test_create_terminal_error_empty_history() -> None:
    """Test that the final failure is returned if nothing was recorded."""
    error = ValueError("boom")
    assert create_terminal_error(Count(), error) is error
