"""Cancellable delayed tasks for debounced work.

``AsyncioScheduler`` runs callbacks on the event loop. ``VirtualScheduler``
keeps a virtual clock that tests advance explicitly, so debounce behavior can
be asserted without real timers.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], Awaitable[None]]


class ScheduledTask(Protocol):
    """Handle returned by a scheduler."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started."""
        ...


class DelayedTaskScheduler(Protocol):
    """Runs a callback once after a delay."""

    def schedule(self, delay_seconds: float, callback: Callback) -> ScheduledTask:
        """Schedule ``callback`` to run after ``delay_seconds``."""
        ...


class _AsyncioTaskHandle:
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()


class AsyncioScheduler:
    """Scheduler backed by ``asyncio`` tasks on the running loop."""

    def __init__(self) -> None:
        # Strong references so pending tasks are not garbage collected
        self._tasks: set[asyncio.Task[None]] = set()

    def schedule(self, delay_seconds: float, callback: Callback) -> ScheduledTask:
        task = asyncio.get_running_loop().create_task(self._run_later(delay_seconds, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return _AsyncioTaskHandle(task)

    async def _run_later(self, delay_seconds: float, callback: Callback) -> None:
        await asyncio.sleep(delay_seconds)
        try:
            await callback()
        except Exception:
            logger.exception("Scheduled callback failed")


@dataclass
class VirtualTask:
    """Callback due at a virtual time."""

    due_at: float
    callback: Callback
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """Deterministic scheduler driven by ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: list[VirtualTask] = []

    def schedule(self, delay_seconds: float, callback: Callback) -> ScheduledTask:
        task = VirtualTask(due_at=self.now + delay_seconds, callback=callback)
        self._pending.append(task)
        return task

    @property
    def pending_count(self) -> int:
        """Number of scheduled, non-cancelled callbacks."""
        return sum(1 for task in self._pending if not task.cancelled)

    async def advance(self, seconds: float) -> None:
        """Move the clock forward and run every callback that became due."""
        self.now += seconds
        due = sorted(
            (t for t in self._pending if not t.cancelled and t.due_at <= self.now),
            key=lambda t: t.due_at,
        )
        self._pending = [t for t in self._pending if not t.cancelled and t.due_at > self.now]
        for task in due:
            if not task.cancelled:
                await task.callback()
