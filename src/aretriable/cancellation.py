r"""Cooperative cancellation signal shared between a caller and retry
sessions."""

from __future__ import annotations

__all__ = ["CancellationToken"]

import threading


class CancellationToken:
    """Thread-safe cooperative cancellation signal.

    Requesting cancellation never interrupts running code. Retry loops
    check the token before scheduling another attempt, and supervised
    operations are expected to poll it (or wait on it) and return once
    cancellation has been requested.

    Example:
        ```pycon
        >>> from aretriable.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.is_cancellation_requested
        False
        >>> token.cancel()
        >>> token.is_cancellation_requested
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.is_cancellation_requested})"

    @property
    def is_cancellation_requested(self) -> bool:
        """``True`` once ``cancel()`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation.

        Calling this method more than once has no further effect.
        """
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancellation is requested or the timeout elapses.

        Args:
            timeout: Maximum time to wait in seconds. ``None`` waits
                forever.

        Returns:
            ``True`` if cancellation was requested, otherwise ``False``.
        """
        return self._event.wait(timeout)
