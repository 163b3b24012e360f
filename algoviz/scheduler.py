"""Timer scheduling for autoplay.

The playback engine only needs one-shot timers that can be cancelled;
everything runs on a single logical thread.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Abstract source of one-shot timers."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Arrange for *callback* to run once after *delay_ms*.

        Returns a handle exposing ``cancel()``.
        """
        ...


class AsyncioScheduler(Scheduler):
    """Timers on an asyncio event loop (the running loop unless one is given)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("AsyncioScheduler: arming timer for %dms", delay_ms)
        return loop.call_later(delay_ms / 1000, callback)
