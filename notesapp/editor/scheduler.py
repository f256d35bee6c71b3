"""
Scheduled Task.

A one-shot timer that runs a coroutine function after a delay. Scheduling
again before it fires replaces the pending run, which is all a debounce
needs. Once fired, the coroutine runs as an ordinary task and is never
cancelled by this class.
"""

import asyncio
from collections.abc import Awaitable, Callable

from notesapp.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class ScheduledTask:
    """
    Cancel-and-reschedule timer bound to the running event loop.

    Usage:
        timer = ScheduledTask(save_now, name="autosave")
        timer.schedule(1.2)   # arm
        timer.schedule(1.2)   # re-arm, the first run never happens
        timer.cancel()        # disarm
    """

    def __init__(self, callback: Callable[[], Awaitable[None]], name: str = "scheduled") -> None:
        self._callback = callback
        self._name = name
        self._handle: asyncio.TimerHandle | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while a run is armed and has not fired yet."""
        return self._handle is not None

    @property
    def running(self) -> bool:
        """True while a fired run is still executing."""
        return bool(self._running)

    def schedule(self, delay: float) -> None:
        """
        Arm the timer, replacing any pending run.

        Must be called from inside a running event loop.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(max(delay, 0.0), self._fire)

    def cancel(self) -> bool:
        """Disarm the timer. Returns True if a pending run was dropped."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    async def wait(self) -> None:
        """Wait for runs that have already fired to finish."""
        while self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._callback())
        self._running.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_with_source(
                logger,
                "editor",
                "error",
                "Scheduled run failed",
                timer=self._name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
