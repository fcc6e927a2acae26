# src/posetracker/ui/overlays.py
from typing import Dict, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from PySide6 import QtGui

from ..analysis.calibration import GUIDE_BOX
from ..config import DetectorOptions, VISIBILITY_THRESH
from ..geometry.landmarks import Landmark
from ..session.flow import Screen, SessionFlow

# Skeleton connections grouped by the region flag that enables them (MediaPipe numbering)
REGION_CONNECTIONS: Dict[str, List[Tuple[int, int]]] = {
    "face": [(0, 1), (1, 2), (2, 3), (3, 7), (0, 4), (4, 5), (5, 6), (6, 8), (9, 10)],
    "left_arm": [(11, 13), (13, 15)],
    "right_arm": [(12, 14), (14, 16)],
    "left_wrist": [(15, 17), (15, 19), (15, 21), (17, 19)],
    "right_wrist": [(16, 18), (16, 20), (16, 22), (18, 20)],
    "torso": [(11, 12), (11, 23), (12, 24), (23, 24)],
    "left_leg": [(23, 25), (25, 27)],
    "right_leg": [(24, 26), (26, 28)],
    "left_ankle": [(27, 29), (29, 31), (27, 31)],
    "right_ankle": [(28, 30), (30, 32), (28, 32)],
}

COLOR_JOINT = (0, 255, 128)  # BGR
COLOR_BONE = (255, 200, 50)
COLOR_LOW_CONF = (0, 0, 255)
COLOR_TEXT = (255, 255, 255)
COLOR_CHECK = (0, 255, 0)  # lime
COLOR_FEEDBACK = (144, 238, 144)  # light green flash
FEEDBACK_ALPHA = 0.4
COUNTDOWN_ALPHA = 0.5


def active_connections(options: DetectorOptions) -> List[Tuple[int, int]]:
    # Connections whose region flag is switched on
    out: List[Tuple[int, int]] = []
    for region, pairs in REGION_CONNECTIONS.items():
        if getattr(options, region, False):
            out.extend(pairs)
    return out


def draw_skeleton(frame_bgr: np.ndarray, lms: Sequence[Landmark], options: DetectorOptions) -> None:
    h, w = frame_bgr.shape[:2]
    pairs = active_connections(options)
    used = sorted({i for p in pairs for i in p if i < len(lms)})  # only joints of tracked regions

    def visible(i: int) -> bool:
        v = lms[i].visibility
        return v is None or v >= VISIBILITY_THRESH

    def px(i: int) -> Tuple[int, int]:
        return int(lms[i].x * w), int(lms[i].y * h)

    for a, b in pairs:
        if a < len(lms) and b < len(lms) and visible(a) and visible(b):
            cv2.line(frame_bgr, px(a), px(b), COLOR_BONE, 2, cv2.LINE_AA)
    for i in used:
        cv2.circle(frame_bgr, px(i), 5, COLOR_JOINT if visible(i) else COLOR_LOW_CONF, -1, cv2.LINE_AA)


def _dashed_line(img, p0, p1, color, thickness=2, dash=12, gap=8) -> None:
    p0 = np.asarray(p0, dtype=np.float32); p1 = np.asarray(p1, dtype=np.float32)
    length = float(np.linalg.norm(p1 - p0))
    if length < 1:
        return
    step = (p1 - p0) / length
    pos = 0.0
    while pos < length:
        end = min(pos + dash, length)
        a = p0 + step * pos; b = p0 + step * end
        cv2.line(img, (int(a[0]), int(a[1])), (int(b[0]), int(b[1])), color, thickness, cv2.LINE_AA)
        pos = end + gap


def draw_guide_box(frame_bgr: np.ndarray) -> None:
    # Dashed white rectangle showing where the body should stand during calibration
    h, w = frame_bgr.shape[:2]
    top, left, bw, bh = GUIDE_BOX
    x0, y0 = int(left * w), int(top * h)
    x1, y1 = int((left + bw) * w), int((top + bh) * h)
    for p, q in (((x0, y0), (x1, y0)), ((x1, y0), (x1, y1)), ((x1, y1), (x0, y1)), ((x0, y1), (x0, y0))):
        _dashed_line(frame_bgr, p, q, COLOR_TEXT)


def draw_checkmark(frame_bgr: np.ndarray) -> None:
    h, w = frame_bgr.shape[:2]
    cx, cy, s = w // 2, h // 2, max(12, w // 12)
    pts = np.array([[cx - s, cy], [cx - s // 3, cy + s * 2 // 3], [cx + s, cy - s * 2 // 3]], dtype=np.int32)
    cv2.polylines(frame_bgr, [pts], False, COLOR_CHECK, 6, cv2.LINE_AA)


def _blend(frame_bgr: np.ndarray, color: Tuple[int, int, int], alpha: float) -> None:
    layer = np.empty_like(frame_bgr); layer[:] = color
    cv2.addWeighted(layer, alpha, frame_bgr, 1.0 - alpha, 0, dst=frame_bgr)


def _centered_text(frame_bgr, text: str, cy: int, scale: float, thickness: int) -> None:
    (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, scale, thickness)
    x = (frame_bgr.shape[1] - tw) // 2
    cv2.putText(frame_bgr, text, (x, cy + th // 2), cv2.FONT_HERSHEY_DUPLEX, scale, COLOR_TEXT, thickness, cv2.LINE_AA)


def draw_countdown(frame_bgr: np.ndarray, value: Union[int, str]) -> None:
    # Half-transparent white layer with the big countdown value
    _blend(frame_bgr, (255, 255, 255), COUNTDOWN_ALPHA)
    _centered_text(frame_bgr, str(value), frame_bgr.shape[0] // 2, 3.0, 6)


def draw_counter(frame_bgr: np.ndarray, text: str) -> None:
    h = frame_bgr.shape[0]
    (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, 0.8, 2)
    x = (frame_bgr.shape[1] - tw) // 2
    cv2.putText(frame_bgr, text, (x, h - 60), cv2.FONT_HERSHEY_DUPLEX, 0.8, (0, 0, 0), 5, cv2.LINE_AA)  # outline
    cv2.putText(frame_bgr, text, (x, h - 60), cv2.FONT_HERSHEY_DUPLEX, 0.8, COLOR_TEXT, 2, cv2.LINE_AA)


def draw_feedback(frame_bgr: np.ndarray) -> None:
    _blend(frame_bgr, COLOR_FEEDBACK, FEEDBACK_ALPHA)


def cvimg_to_qt(frame_bgr: np.ndarray) -> QtGui.QImage:
    # BGR ndarray → QImage (copied, so the numpy buffer can be reused)
    rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
    h, w = rgb.shape[:2]
    return QtGui.QImage(rgb.data, w, h, 3 * w, QtGui.QImage.Format_RGB888).copy()


def render_live(frame_bgr: np.ndarray, lms: Optional[Sequence[Landmark]], flow: SessionFlow, options: DetectorOptions) -> np.ndarray:
    """Compose every overlay for the current screen onto ``frame_bgr`` (in place)."""
    if lms:
        draw_skeleton(frame_bgr, lms, options)
    if flow.pose_correct:
        draw_feedback(frame_bgr)
    if flow.screen is Screen.CALIBRATION:
        draw_guide_box(frame_bgr)
        if flow.calibrated:
            draw_checkmark(frame_bgr)
    elif flow.screen is Screen.COUNTDOWN:
        draw_countdown(frame_bgr, flow.countdown)
    elif flow.screen is Screen.SESSION:
        draw_counter(frame_bgr, flow.counter_text)
    return frame_bgr
