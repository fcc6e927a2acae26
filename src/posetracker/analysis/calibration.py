# src/posetracker/analysis/calibration.py
from __future__ import annotations
from typing import Optional, Sequence, Tuple  # type hints

from ..geometry.landmarks import Landmark, LEFT_SHOULDER, RIGHT_SHOULDER, LEFT_ANKLE, RIGHT_ANKLE

# Open intervals in normalized y; together they describe the on-screen guide box
SHOULDER_BAND: Tuple[float, float] = (0.2, 0.6)  # upper body must sit here
ANKLE_BAND: Tuple[float, float] = (0.5, 0.9)  # feet must sit here

# Guide box drawn on the calibration screen, as fractions of the view (top, left, width, height)
GUIDE_BOX: Tuple[float, float, float, float] = (0.17, 0.15, 0.74, 0.65)


def _within(y: float, band: Tuple[float, float]) -> bool:
    lo, hi = band
    return lo < y < hi


def in_calibration_box(lm: Sequence[Landmark]) -> bool:
    """True when both shoulders and both ankles are inside their bands at once."""
    return (
        _within(lm[LEFT_SHOULDER].y, SHOULDER_BAND)
        and _within(lm[RIGHT_SHOULDER].y, SHOULDER_BAND)
        and _within(lm[LEFT_ANKLE].y, ANKLE_BAND)
        and _within(lm[RIGHT_ANKLE].y, ANKLE_BAND)
    )


class CalibrationGate:
    """
    Latches on the first frame where the body fits the guide box.

    Once ``locked`` is set, later frames are not evaluated again; the flow uses
    the single rising edge returned by :meth:`update` to start the countdown.
    """
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.locked = False
        self.last_ok: Optional[bool] = None  # result of the last evaluated frame (for the UI hint)

    def update(self, lm: Sequence[Landmark]) -> bool:
        # Returns True exactly once: on the frame that locks calibration
        if self.locked:
            return False
        self.last_ok = in_calibration_box(lm)
        if self.last_ok:
            self.locked = True
            return True
        return False
