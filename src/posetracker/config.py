# src/posetracker/config.py
import os  # environment overrides
from dataclasses import dataclass  # frozen option records
from typing import Tuple  # type hints

# ---------------------------------------------------------------------
# Window / display
# ---------------------------------------------------------------------
WINDOW_TITLE = "Pose Tracker"  # main window title
APP_FOOTER = "AISRA"  # footer text on the intro page
FRAME_SIZE: Tuple[int, int] = (400, 600)  # (width, height) of the live camera view

# ---------------------------------------------------------------------
# Camera / model
# ---------------------------------------------------------------------
CAM_INDEX = int(os.environ.get("POSETRACKER_CAMERA", "0"))  # OpenCV camera index
POSE_MODEL_PATH = os.environ.get("POSETRACKER_MODEL_PATH", "models/pose_landmarker_lite.task")  # MediaPipe Tasks model
MIN_DETECTION_CONF = 0.5  # PoseLandmarker detection confidence
MIN_TRACKING_CONF = 0.5  # PoseLandmarker tracking confidence
VISIBILITY_THRESH = 0.5  # below this a joint is drawn as low-confidence

LOG_LEVEL = os.environ.get("POSETRACKER_LOG_LEVEL", "INFO").upper()  # console log level

# ---------------------------------------------------------------------
# Session timing (milliseconds) and targets
# ---------------------------------------------------------------------
TARGET_REPS = 10  # reps per session
COUNTDOWN_START = 3  # first countdown value shown after calibration
COUNTDOWN_TICK_MS = 1000  # one countdown step per second
GO_PAUSE_MS = 800  # "Go!" stays on screen this long before counting starts
DONE_DELAY_MS = 800  # pause between the last rep and the completion screen
FEEDBACK_PULSE_MS = 800  # green flash after each counted rep
GO_TEXT = "Go!"  # last countdown value

MIN_LANDMARKS = 30  # frames with fewer landmarks are ignored


@dataclass(frozen=True)
class DetectorOptions:
    """Body regions the pose source should track plus the display size.

    Passed once when a session starts; the UI uses the same flags to pick
    which skeleton connections are drawn.
    """

    face: bool = False
    left_arm: bool = True
    right_arm: bool = True
    left_wrist: bool = True
    right_wrist: bool = True
    torso: bool = True
    left_leg: bool = True
    right_leg: bool = True
    left_ankle: bool = True
    right_ankle: bool = True
    width: int = FRAME_SIZE[0]
    height: int = FRAME_SIZE[1]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)
