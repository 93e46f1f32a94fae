"""Periodic task scheduling with explicit cancellation handles."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

_logger = logging.getLogger(__name__)


class PeriodicHandle(Protocol):
    """Handle to a repeating task."""

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once."""

    @property
    def cancelled(self) -> bool:
        """Whether the task has been stopped."""


class Scheduler(Protocol):
    """Creates repeating tasks."""

    def every(self, interval: float, callback: Callable[[], None]) -> PeriodicHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""


@dataclass(eq=False)
class AsyncioPeriodicHandle:
    """Periodic handle backed by an asyncio task."""

    task: asyncio.Task[None]
    _on_cancel: Callable[["AsyncioPeriodicHandle"], None]
    _cancelled: bool = False

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self.task.cancel()
        self._on_cancel(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class AsyncioScheduler(Scheduler):
    """Scheduler running callbacks on the current event loop."""

    _active: set[AsyncioPeriodicHandle] = field(default_factory=set)

    @property
    def active_count(self) -> int:
        """Number of handles whose task is still running."""
        return len(self._active)

    def every(
        self, interval: float, callback: Callable[[], None]
    ) -> AsyncioPeriodicHandle:
        """Start a repeating task on the running loop."""
        handle: AsyncioPeriodicHandle

        def release() -> None:
            self._release(handle)

        task = asyncio.get_running_loop().create_task(
            _repeat(interval, callback, release)
        )
        handle = AsyncioPeriodicHandle(task=task, _on_cancel=self._release)
        self._active.add(handle)
        return handle

    def _release(self, handle: AsyncioPeriodicHandle) -> None:
        self._active.discard(handle)


async def _repeat(
    interval: float, callback: Callable[[], None], on_exit: Callable[[], None]
) -> None:
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception:
                _logger.exception("Periodic callback failed; stopping")
                return
    finally:
        on_exit()
