# src/posetracker/analysis/rep_rules.py
from __future__ import annotations
from dataclasses import dataclass, replace  # immutable per-session rule state
from typing import Callable, Dict, Sequence, Tuple  # type hints

from ..errors import UnknownExerciseError
from ..geometry.landmarks import (
    Landmark, mean_y,
    LEFT_HIP, RIGHT_HIP, LEFT_KNEE, RIGHT_KNEE, LEFT_ANKLE, RIGHT_ANKLE,
)

# ---------------------------------------------------------------------
# Fixed thresholds (normalized camera units)
# ---------------------------------------------------------------------
LUNGE_ENTER_Z = 0.20  # right-minus-left knee depth gap that starts a lunge
LUNGE_EXIT_Z = 0.05  # gap below which the lunge is finished (rep counted here)
CALF_RAISE_ENTER_Y = 0.50  # mean ankle y below this = heels up (rep counted here)
CALF_RAISE_EXIT_Y = 0.55  # mean ankle y above this = heels down again
ONE_LEG_LIFT_MARGIN = 0.02  # free ankle must sit this far above the free knee


# ---------------------------------------------------------------------
# State + result containers
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class RepState:
    left_up: bool = False  # high knees: left knee currently above hip
    right_up: bool = False  # high knees: right knee currently above hip
    is_squatting: bool = False  # squats: both hips below knees
    is_lunging: bool = False  # lunges: knees separated on the depth axis
    is_raising: bool = False  # calf raises: heels up
    is_one_leg_squatting: bool = False  # one-leg squat: down on the support leg


@dataclass(frozen=True)
class RepUpdate:
    state: RepState  # state to carry into the next frame
    reps: int  # reps completed on this frame (high knees may report 2)


RuleFn = Callable[[Sequence[Landmark], RepState], Tuple[RepState, int]]


# ---------------------------------------------------------------------
# High knees: each leg edge-triggered on knee rising above hip
# ---------------------------------------------------------------------
def _high_knees_rule(lm: Sequence[Landmark], state: RepState) -> Tuple[RepState, int]:
    reps = 0
    left_up, right_up = state.left_up, state.right_up

    if lm[LEFT_KNEE].y < lm[LEFT_HIP].y:  # y grows downward → knee above hip
        if not left_up:
            left_up = True; reps += 1
    else:
        left_up = False

    if lm[RIGHT_KNEE].y < lm[RIGHT_HIP].y:
        if not right_up:
            right_up = True; reps += 1
    else:
        right_up = False

    return replace(state, left_up=left_up, right_up=right_up), reps


# ---------------------------------------------------------------------
# Squats: count on entry (both hips below both knees)
# ---------------------------------------------------------------------
def _squats_rule(lm: Sequence[Landmark], state: RepState) -> Tuple[RepState, int]:
    lh, rh, lk, rk = lm[LEFT_HIP], lm[RIGHT_HIP], lm[LEFT_KNEE], lm[RIGHT_KNEE]
    if lh.y > lk.y and rh.y > rk.y:
        if not state.is_squatting:
            return replace(state, is_squatting=True), 1
    elif lh.y <= lk.y and rh.y <= rk.y:
        return replace(state, is_squatting=False), 0
    return state, 0  # hips split across the knees → hold current state


# ---------------------------------------------------------------------
# Lunges: enter on a wide depth gap, count on exit (asymmetric thresholds)
# ---------------------------------------------------------------------
def _lunges_rule(lm: Sequence[Landmark], state: RepState) -> Tuple[RepState, int]:
    z_gap = lm[RIGHT_KNEE].z - lm[LEFT_KNEE].z  # signed: right knee further from camera
    if z_gap > LUNGE_ENTER_Z and not state.is_lunging:
        return replace(state, is_lunging=True), 0
    if z_gap < LUNGE_EXIT_Z and state.is_lunging:
        return replace(state, is_lunging=False), 1
    return state, 0


# ---------------------------------------------------------------------
# Calf raises: count on raise, clear only past the higher threshold (deadband)
# ---------------------------------------------------------------------
def _calf_raises_rule(lm: Sequence[Landmark], state: RepState) -> Tuple[RepState, int]:
    ankle_y = mean_y(lm[LEFT_ANKLE], lm[RIGHT_ANKLE])
    if not state.is_raising and ankle_y < CALF_RAISE_ENTER_Y:
        return replace(state, is_raising=True), 1
    if state.is_raising and ankle_y > CALF_RAISE_EXIT_Y:
        return replace(state, is_raising=False), 0
    return state, 0


# ---------------------------------------------------------------------
# One-leg squat: right leg supports, left foot lifted; count on the way up
# ---------------------------------------------------------------------
def _one_leg_squat_rule(lm: Sequence[Landmark], state: RepState) -> Tuple[RepState, int]:
    hip_below_knee = lm[RIGHT_HIP].y > lm[RIGHT_KNEE].y
    leg_lifted = lm[LEFT_ANKLE].y < lm[LEFT_KNEE].y - ONE_LEG_LIFT_MARGIN
    if hip_below_knee and leg_lifted and not state.is_one_leg_squatting:
        return replace(state, is_one_leg_squatting=True), 0
    if not hip_below_knee and leg_lifted and state.is_one_leg_squatting:
        return replace(state, is_one_leg_squatting=False), 1
    return state, 0  # foot dropped mid-rep → stay down until it is lifted again


# ---------------------------------------------------------------------
# Public dispatcher
# ---------------------------------------------------------------------
RULES: Dict[str, RuleFn] = {
    "high_knees": _high_knees_rule,
    "squats": _squats_rule,
    "lunges": _lunges_rule,
    "calf_raises": _calf_raises_rule,
    "one_leg_squat": _one_leg_squat_rule,
}


def assess_frame(key: str, landmarks: Sequence[Landmark], state: RepState) -> RepUpdate:
    """Run the rule for exercise ``key`` on one frame.

    ``landmarks`` must already be a full frame (see
    :func:`posetracker.geometry.landmarks.to_landmarks`); the function is pure
    and never mutates ``state``.
    """
    rule = RULES.get(key)
    if rule is None:
        raise UnknownExerciseError(key)
    new_state, reps = rule(landmarks, state)
    return RepUpdate(state=new_state, reps=reps)
