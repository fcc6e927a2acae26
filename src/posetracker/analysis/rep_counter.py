# src/posetracker/analysis/rep_counter.py
from __future__ import annotations
import logging
from typing import Any, Optional, Sequence

from ..activities.activity_defs import get_exercise
from ..geometry.landmarks import to_landmarks
from .rep_rules import RepState, assess_frame

logger = logging.getLogger(__name__)


class RepCounter:
    """
    Counts completed reps of one exercise from a stream of landmark frames.

    Logic sequence per frame:
      raw landmarks → full frame? → exercise rule (edge-triggered) → +reps, capped at target

    Notes:
    - The count only ever grows within a session; :meth:`reset` is the only way back to 0.
    - Once ``target`` is reached the counter is ``done`` and ignores further frames.
    - Sparse frames (fewer than 30 landmarks) leave both state and count untouched.
    """
    def __init__(self, exercise: str, target: Optional[int] = None) -> None:
        meta = get_exercise(exercise)  # raises UnknownExerciseError early
        self.exercise = exercise
        self.target = int(target if target is not None else meta["reps"])
        self.reset()

    def reset(self) -> None:
        # Clear rule state and count for a fresh session
        self.state = RepState()
        self.count = 0

    @property
    def done(self) -> bool:
        return self.count >= self.target

    def update(self, raw: Optional[Sequence[Any]]) -> int:
        """
        Called for each frame with the backend's landmark list.

        Returns:
            number of reps added by this frame (0 when nothing completed,
            the frame was sparse, or the target was already reached).
        """
        if self.done:
            return 0
        lm = to_landmarks(raw)
        if lm is None:
            logger.debug("Ignoring sparse frame (%s landmarks)", len(raw) if raw else 0)
            return 0

        upd = assess_frame(self.exercise, lm, self.state)
        self.state = upd.state
        added = min(upd.reps, self.target - self.count)  # never overshoot the target
        if added:
            self.count += added
            logger.info("%s rep %d/%d", self.exercise, self.count, self.target)
        return added
