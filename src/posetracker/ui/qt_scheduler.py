# src/posetracker/ui/qt_scheduler.py
from typing import Callable, Dict

from PySide6 import QtCore

from ..session.scheduler import Scheduler, TimerHandle


class QtScheduler(Scheduler):
    """Single-shot QTimers owned by a parent QObject (runs on the GUI thread)."""

    def __init__(self, parent: QtCore.QObject):
        self._parent = parent
        self._timers: Dict[int, QtCore.QTimer] = {}
        self._next_id = 0

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        self._next_id += 1
        tid = self._next_id
        timer = QtCore.QTimer(self._parent)
        timer.setSingleShot(True)

        def _fire():
            self._drop(tid)
            callback()

        timer.timeout.connect(_fire)
        self._timers[tid] = timer
        timer.start(int(delay_ms))
        return tid

    def cancel(self, handle: TimerHandle) -> None:
        timer = self._timers.get(handle)
        if timer is not None:
            timer.stop()
            self._drop(handle)

    def _drop(self, tid: int) -> None:
        timer = self._timers.pop(tid, None)
        if timer is not None:
            timer.deleteLater()

    def cancel_all(self) -> None:
        for tid in list(self._timers):
            self.cancel(tid)
