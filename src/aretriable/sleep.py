r"""Delay providers used between retry attempts.

This module provides the sleep services that suspend execution for the
delay computed by a retry strategy. The blocking variant parks the
calling thread and the asynchronous variant yields to the event loop.

Sleep services are passed explicitly to the retry entry points. When
omitted, ``DEFAULT_SLEEP_SERVICE`` (real time) is used. Tests inject a
``VirtualSleepService`` instead of patching module state.

Example:
    ```pycon
    >>> from aretriable import retry
    >>> from aretriable.sleep import VirtualSleepService
    >>> from aretriable.strategies import Linear
    >>> sleep_service = VirtualSleepService()
    >>> calls = []
    >>> def flaky():
    ...     calls.append(1)
    ...     if len(calls) < 3:
    ...         raise ValueError("not yet")
    ...     return "done"
    ...
    >>> retry(flaky, strategy=Linear(period=1.5, max_tries=5), sleep_service=sleep_service)
    'done'
    >>> sleep_service.delays
    [1.5, 1.5]

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SLEEP_SERVICE",
    "RealSleepService",
    "SleepService",
    "VirtualSleepService",
]

import asyncio
import logging
import threading
import time
from abc import ABC, abstractmethod

from aretriable.utils.validation import validate_delay

logger: logging.Logger = logging.getLogger(__name__)


class SleepService(ABC):
    """Abstract base class for delay providers."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block the current thread for the given duration.

        Args:
            seconds: The delay in seconds. Must be >= 0.
        """

    @abstractmethod
    async def sleep_async(self, seconds: float) -> None:
        """Suspend the current coroutine for the given duration.

        Args:
            seconds: The delay in seconds. Must be >= 0.
        """


class RealSleepService(SleepService):
    """Delay provider backed by ``time.sleep`` and ``asyncio.sleep``."""

    def sleep(self, seconds: float) -> None:
        validate_delay(seconds)
        time.sleep(seconds)

    async def sleep_async(self, seconds: float) -> None:
        validate_delay(seconds)
        await asyncio.sleep(seconds)


class VirtualSleepService(SleepService):
    """Delay provider that returns immediately and records each delay.

    The recorded delays are available in ``delays`` in request order.
    Safe to use from several threads.

    Example:
        ```pycon
        >>> from aretriable.sleep import VirtualSleepService
        >>> sleep_service = VirtualSleepService()
        >>> sleep_service.sleep(2.0)
        >>> sleep_service.sleep(0.5)
        >>> sleep_service.delays
        [2.0, 0.5]
        >>> sleep_service.total
        2.5

        ```
    """

    def __init__(self) -> None:
        self._delays: list[float] = []
        self._lock = threading.Lock()

    @property
    def delays(self) -> list[float]:
        """A copy of the recorded delays, in request order."""
        with self._lock:
            return list(self._delays)

    @property
    def total(self) -> float:
        """The sum of the recorded delays in seconds."""
        with self._lock:
            return sum(self._delays)

    def sleep(self, seconds: float) -> None:
        validate_delay(seconds)
        with self._lock:
            self._delays.append(seconds)
        logger.debug(f"Virtual sleep for {seconds:.2f}s")

    async def sleep_async(self, seconds: float) -> None:
        self.sleep(seconds)


DEFAULT_SLEEP_SERVICE: SleepService = RealSleepService()
