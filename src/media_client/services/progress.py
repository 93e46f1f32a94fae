"""Progress reporting for long-running operations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from media_client.services.scheduler import PeriodicHandle, Scheduler

ProgressCallback = Callable[[int], None]

COMPLETE = 100

_logger = logging.getLogger(__name__)


@dataclass
class ProgressTracker:
    """Emits capped progress ticks for one operation and owns its timer.

    Ticks increase by ``step`` and never pass ``cap``; ``finish`` emits 100
    exactly once. ``close`` cancels the timer and runs on every exit path
    when the tracker is used as a context manager.
    """

    scheduler: Scheduler
    on_progress: ProgressCallback | None
    interval: float
    step: int = 5
    cap: int = 95
    value: int = 0
    _handle: PeriodicHandle | None = None
    _finished: bool = False

    def start(self) -> "ProgressTracker":
        if self.on_progress is not None and self._handle is None:
            self._handle = self.scheduler.every(self.interval, self._tick)
        return self

    def finish(self) -> None:
        """Stop ticking and report completion."""
        self.close()
        if self._finished:
            return
        self._finished = True
        self.value = COMPLETE
        if self.on_progress is None:
            return
        try:
            self.on_progress(COMPLETE)
        except Exception:
            _logger.exception("Progress callback failed on completion")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def __enter__(self) -> "ProgressTracker":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _tick(self) -> None:
        if self._finished:
            return
        next_value = self.value + self.step
        if next_value > self.cap:
            # Hold at the cap until the operation concludes.
            self.close()
            return
        self.value = next_value
        if self.on_progress is not None:
            self.on_progress(next_value)
