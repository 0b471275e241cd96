from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a coroutine function scheduled to run after a delay.

    Wraps an asyncio task that sleeps, then awaits ``fn()``. ``cancel()`` before
    the delay elapses means ``fn`` never runs; once ``fn`` has started it is left
    to finish.
    """

    def __init__(self, delay: float, fn: Callable[[], Awaitable[Any]], name: str | None = None) -> None:
        self.delay = delay
        self._fn = fn
        self._fired = False
        self._task = asyncio.get_running_loop().create_task(self._run(), name=name)
        self._task.add_done_callback(self._log_failure)

    async def _run(self) -> Any:
        await asyncio.sleep(self.delay)
        self._fired = True
        return await self._fn()

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("[scheduler] %s failed: %r", task.get_name(), exc)

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> bool:
        if self._fired:
            return False
        return self._task.cancel()

    def cancelled(self) -> bool:
        return self._task.cancelled()

    def done(self) -> bool:
        return self._task.done()

    def __await__(self):
        # Re-raises whatever fn raised, or CancelledError if cancelled
        return self._task.__await__()


def schedule(delay: float, fn: Callable[[], Awaitable[Any]], name: str | None = None) -> ScheduledCall:
    """Run ``fn`` after ``delay`` seconds on the running loop."""
    return ScheduledCall(delay, fn, name=name)
