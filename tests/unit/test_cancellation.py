r"""Unit tests for CancellationToken."""

from __future__ import annotations

import threading

from aretriable.cancellation import CancellationToken


def test_cancellation_token_initial_state() -> None:
    """Test that a new token is not cancelled."""
    assert not CancellationToken().is_cancellation_requested


def test_cancellation_token_cancel() -> None:
    """Test that cancel() sets the token."""
    token = CancellationToken()
    token.cancel()
    assert token.is_cancellation_requested


def test_cancellation_token_cancel_twice() -> None:
    """Test that cancel() is idempotent."""
    token = CancellationToken()
    token.cancel()
    token.cancel()
    assert token.is_cancellation_requested


def test_cancellation_token_wait_timeout() -> None:
    """Test that wait() returns False when the timeout elapses."""
    assert not CancellationToken().wait(timeout=0.01)


def test_cancellation_token_wait_cancelled_from_thread() -> None:
    """Test that wait() returns True once another thread cancels."""
    token = CancellationToken()
    thread = threading.Thread(target=token.cancel)
    thread.start()
    assert token.wait(timeout=5.0)
    thread.join()


def test_cancellation_token_repr() -> None:
    """Test the string representation."""
    assert repr(CancellationToken()) == "CancellationToken(cancelled=False)"
