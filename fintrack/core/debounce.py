"""Cancellable debounced task on the running event loop."""

import asyncio
from typing import Awaitable, Callable, Optional, Set

import structlog

from fintrack.core.metrics import record_debounce_reschedule

logger = structlog.get_logger(__name__)


class DebouncedTask:
    """
    Runs an async action once the trigger has been quiet for ``delay``.

    Each ``schedule()`` cancels the pending timer and starts a new one, so
    a burst of triggers produces a single run. Only the timer can be
    cancelled: once the action has started it runs to completion, and a
    new trigger during that time starts a fresh timer alongside it.
    """

    def __init__(
        self,
        action: Callable[[], Awaitable[None]],
        delay: float,
        name: str = "debounced_task",
    ):
        self._action = action
        self._delay = delay
        self._name = name
        self._handle: Optional[asyncio.TimerHandle] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is waiting to fire."""
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        """Number of runs that have started and not finished."""
        return len(self._running)

    def schedule(self) -> None:
        """
        (Re)start the quiet-period timer.

        Must be called from the event loop thread.
        """
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
            record_debounce_reschedule()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> bool:
        """Drop the pending run, if any. Returns True if one was dropped."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        logger.info("debounced_task_cancelled", task=self._name)
        return True

    async def wait_idle(self) -> None:
        """Wait for every in-flight run to finish."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._run())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self) -> None:
        try:
            await self._action()
        except Exception:
            # Nothing awaits this task, so the error would otherwise be lost
            logger.exception("debounced_task_failed", task=self._name)
