# src/posetracker/session/scheduler.py
from typing import Any, Callable  # type hints

TimerHandle = Any  # opaque token returned by call_later


class Scheduler:
    """Single-shot timers on the caller's thread.

    The session flow never sleeps or spawns threads; every delay (countdown
    ticks, the feedback pulse, screen-transition pauses) goes through one of
    these. The desktop app uses :class:`posetracker.ui.qt_scheduler.QtScheduler`.
    """

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    def cancel(self, handle: TimerHandle) -> None:
        # Cancelling an already-fired or unknown handle is a no-op
        raise NotImplementedError
