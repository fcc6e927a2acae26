# src/posetracker/activities/activity_defs.py
# Menu order follows dict insertion order; keys are what the rep rules dispatch on  # file-level note
from typing import Dict, List, Tuple  # type hints

from ..config import TARGET_REPS  # reps per session
from ..errors import UnknownExerciseError

EXERCISE_LIBRARY: Dict[str, Dict[str, object]] = {  # central registry of exercises shown in the menu
    "high_knees": {  # alternating knee drives
        "label": "High Knees",  # human-readable name in menus and the live counter
        "reps": TARGET_REPS,  # target repetitions per session
        "joints": ["left_hip", "right_hip", "left_knee", "right_knee"],  # joints the rule reads
        "desc": "Drive each knee above hip height. Every leg counts.",  # menu tooltip
    },
    "squats": {  # bodyweight squat
        "label": "Squats",
        "reps": TARGET_REPS,
        "joints": ["left_hip", "right_hip", "left_knee", "right_knee"],
        "desc": "Sink both hips below your knees, then stand back up.",
    },
    "lunges": {  # forward/backward lunge, detected on the depth axis
        "label": "Lunges",
        "reps": TARGET_REPS,
        "joints": ["left_knee", "right_knee"],
        "desc": "Step into a lunge and return. The rep counts when you come back.",
    },
    "calf_raises": {  # heel raise
        "label": "Calf Raises",
        "reps": TARGET_REPS,
        "joints": ["left_ankle", "right_ankle"],
        "desc": "Rise onto your toes, then lower your heels fully.",
    },
    "one_leg_squat": {  # pistol-style squat on the right leg
        "label": "One Leg Squat",
        "reps": TARGET_REPS,
        "joints": ["right_hip", "right_knee", "left_knee", "left_ankle"],
        "desc": "Keep your left foot lifted, squat on the right leg and rise.",
    },
}


def exercise_keys() -> List[str]:
    # Ordered keys as shown in the menu
    return list(EXERCISE_LIBRARY.keys())


def menu_items() -> List[Tuple[str, str, str]]:
    # (key, label, description) triples for building the menu buttons
    return [(k, str(v["label"]), str(v.get("desc", ""))) for k, v in EXERCISE_LIBRARY.items()]


def get_exercise(key: str) -> Dict[str, object]:
    try:
        return EXERCISE_LIBRARY[key]
    except KeyError:
        raise UnknownExerciseError(key) from None
