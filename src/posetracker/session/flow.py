# src/posetracker/session/flow.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..config import (
    TARGET_REPS, COUNTDOWN_START, COUNTDOWN_TICK_MS, GO_PAUSE_MS,
    DONE_DELAY_MS, FEEDBACK_PULSE_MS, GO_TEXT,
)
from ..activities.activity_defs import get_exercise, exercise_keys
from ..analysis.calibration import CalibrationGate
from ..analysis.rep_counter import RepCounter
from ..errors import FlowError
from ..geometry.landmarks import to_landmarks
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    INTRO = "intro"
    MENU = "menu"
    CALIBRATION = "calibration"
    COUNTDOWN = "countdown"
    SESSION = "session"
    DONE = "done"


LIVE_SCREENS = (Screen.CALIBRATION, Screen.COUNTDOWN, Screen.SESSION)  # camera is on, Back is offered


class SessionFlow:
    """
    Screen sequencer for one user: intro → menu → calibration → countdown → session → done.

    All input arrives on one thread: button taps call the public methods,
    landmark frames call :meth:`handle_landmarks`, and delays run through the
    injected :class:`Scheduler`. Every start/back bumps ``generation``; timers
    and frames tagged with an older generation are dropped, so nothing that
    was in flight when the user navigated away can touch the new session.
    """
    def __init__(self, scheduler: Scheduler, target_reps: int = TARGET_REPS) -> None:
        self._sched = scheduler
        self._target = target_reps
        self._listeners: List[Callable[["SessionFlow"], None]] = []
        self._timers: Dict[str, TimerHandle] = {}  # name → pending handle (one per purpose)
        self._screen = Screen.INTRO
        self._exercise = exercise_keys()[0]
        self._counter = RepCounter(self._exercise, target_reps)
        self._gate = CalibrationGate()
        self._countdown: Union[int, str] = COUNTDOWN_START
        self._pose_correct = False
        self._done_scheduled = False
        self._generation = 0

    # ---------- read-only view state ----------
    @property
    def screen(self) -> Screen: return self._screen
    @property
    def exercise(self) -> str: return self._exercise
    @property
    def label(self) -> str: return str(get_exercise(self._exercise)["label"])
    @property
    def rep_count(self) -> int: return self._counter.count
    @property
    def target(self) -> int: return self._counter.target
    @property
    def countdown(self) -> Union[int, str]: return self._countdown
    @property
    def calibrated(self) -> bool: return self._gate.locked
    @property
    def pose_correct(self) -> bool: return self._pose_correct
    @property
    def generation(self) -> int: return self._generation

    @property
    def counter_text(self) -> str:
        return f"{self.label}: {self.rep_count} / {self.target}"

    # ---------- listeners ----------
    def add_listener(self, fn: Callable[["SessionFlow"], None]) -> None:
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[["SessionFlow"], None]) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self)

    # ---------- timers ----------
    def _schedule(self, name: str, delay_ms: int, fn: Callable[[], None]) -> None:
        # Re-scheduling a name replaces the pending timer (used to restart the pulse window)
        self._cancel(name)
        gen = self._generation

        def fire() -> None:
            if gen != self._generation:
                return  # stale timer from an abandoned session
            self._timers.pop(name, None)
            fn()

        self._timers[name] = self._sched.call_later(delay_ms, fire)

    def _cancel(self, name: str) -> None:
        handle = self._timers.pop(name, None)
        if handle is not None:
            self._sched.cancel(handle)

    def _cancel_all(self) -> None:
        for name in list(self._timers):
            self._cancel(name)

    # ---------- transitions ----------
    def _set_screen(self, screen: Screen) -> None:
        if screen is not self._screen:
            logger.info("Screen %s -> %s", self._screen.value, screen.value)
        self._screen = screen

    def _require(self, *allowed: Screen) -> None:
        if self._screen not in allowed:
            raise FlowError(f"not allowed from screen '{self._screen.value}'")

    def _reset_session(self) -> None:
        # Fresh counter/rule state, unlocked calibration, no pending timers
        self._generation += 1
        self._cancel_all()
        self._counter.reset()
        self._gate.reset()
        self._countdown = COUNTDOWN_START
        self._pose_correct = False
        self._done_scheduled = False

    def welcome(self) -> None:
        self._require(Screen.INTRO)
        self._set_screen(Screen.MENU)
        self._notify()

    def start_exercise(self, key: str) -> None:
        self._require(Screen.MENU)
        get_exercise(key)  # UnknownExerciseError for bad keys
        self._exercise = key
        self._counter = RepCounter(key, self._target)
        self._reset_session()
        self._set_screen(Screen.CALIBRATION)
        logger.info("Starting %s (session %d)", key, self._generation)
        self._notify()

    def back_to_menu(self) -> None:
        self._require(*LIVE_SCREENS)
        self._reset_session()
        self._set_screen(Screen.MENU)
        self._notify()

    def finish(self) -> None:
        self._require(Screen.DONE)
        self._set_screen(Screen.MENU)
        self._notify()

    # ---------- countdown ----------
    def _start_countdown(self) -> None:
        self._countdown = COUNTDOWN_START
        self._set_screen(Screen.COUNTDOWN)
        self._schedule("countdown", COUNTDOWN_TICK_MS, self._tick)

    def _tick(self) -> None:
        remaining = int(self._countdown) - 1
        if remaining > 0:
            self._countdown = remaining
            self._schedule("countdown", COUNTDOWN_TICK_MS, self._tick)
        else:
            self._countdown = GO_TEXT
            self._schedule("go", GO_PAUSE_MS, self._begin_session)
        self._notify()

    def _begin_session(self) -> None:
        self._counter.reset()
        self._pose_correct = False
        self._set_screen(Screen.SESSION)
        self._notify()

    # ---------- feedback + completion ----------
    def _flash(self) -> None:
        self._pose_correct = True
        self._schedule("pulse", FEEDBACK_PULSE_MS, self._clear_flash)

    def _clear_flash(self) -> None:
        self._pose_correct = False
        self._notify()

    def _complete(self) -> None:
        self._cancel("pulse")
        self._pose_correct = False
        self._set_screen(Screen.DONE)
        logger.info("Finished %s with %d reps", self._exercise, self._counter.count)
        self._notify()

    # ---------- frames ----------
    def handle_landmarks(self, raw: Optional[Sequence[Any]], generation: Optional[int] = None) -> None:
        """
        Entry point for every landmark frame from the pose source.

        ``generation`` is the session number the frame was produced for; a
        mismatch means the user navigated away since, and the frame is dropped.
        Frames are only read on the calibration and session screens.
        """
        if generation is not None and generation != self._generation:
            logger.debug("Dropping frame for stale session %d (now %d)", generation, self._generation)
            return

        if self._screen is Screen.CALIBRATION:
            lm = to_landmarks(raw)
            if lm is not None and self._gate.update(lm):
                logger.info("Calibrated; starting countdown")
                self._start_countdown()
                self._notify()
            return

        if self._screen is not Screen.SESSION or self._done_scheduled:
            return

        if self._counter.update(raw):
            self._flash()
            if self._counter.done:
                self._done_scheduled = True
                self._schedule("done", DONE_DELAY_MS, self._complete)
            self._notify()
