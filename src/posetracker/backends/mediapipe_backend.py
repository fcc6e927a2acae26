# src/posetracker/backends/mediapipe_backend.py
import os
import time
from typing import Any, Dict, List, Tuple

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_python
from mediapipe.tasks.python import vision

from ..config import POSE_MODEL_PATH, MIN_DETECTION_CONF, MIN_TRACKING_CONF
from ..utils.resources import resource_path
from .base import PoseBackend, Keypoint


class MediaPipeBackend(PoseBackend):
    def __init__(self, model_path: str = POSE_MODEL_PATH):
        # Load the MediaPipe Tasks pose landmarker (33 landmarks, single person)
        self.model_path = model_path

        # Resolve whether running from source or PyInstaller (_MEIPASS)
        resolved_model = resource_path(model_path)
        if not os.path.exists(resolved_model):
            # helpful error to see the *resolved* path
            raise FileNotFoundError(f"Pose landmarker model not found: {resolved_model}")

        options = vision.PoseLandmarkerOptions(
            base_options=mp_python.BaseOptions(model_asset_path=resolved_model),
            running_mode=vision.RunningMode.VIDEO,  # tracking between frames, needs increasing timestamps
            num_poses=1,
            min_pose_detection_confidence=MIN_DETECTION_CONF,
            min_pose_presence_confidence=MIN_DETECTION_CONF,
            min_tracking_confidence=MIN_TRACKING_CONF,
        )
        self.landmarker = vision.PoseLandmarker.create_from_options(options)
        self._t0 = time.monotonic()
        self._last_ts_ms = -1
        self._smoothed_fps = None  # track smoothed FPS estimate

    def name(self) -> str:
        return "MediaPipe-PoseLandmarker"

    def _timestamp_ms(self) -> int:
        # VIDEO mode rejects non-increasing timestamps
        ts = int((time.monotonic() - self._t0) * 1000)
        if ts <= self._last_ts_ms:
            ts = self._last_ts_ms + 1
        self._last_ts_ms = ts
        return ts

    def infer(self, frame_bgr) -> Tuple[List[Keypoint], Dict[str, Any]]:
        # Run inference and return landmarks + metadata
        t0 = time.time()
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=np.ascontiguousarray(rgb))
        result = self.landmarker.detect_for_video(image, self._timestamp_ms())

        kps: List[Keypoint] = []
        if result.pose_landmarks:
            for i, lm in enumerate(result.pose_landmarks[0]):
                kps.append({
                    "index": i,
                    "x": float(lm.x),  # normalized coords, may fall outside [0, 1] near the edges
                    "y": float(lm.y),
                    "z": float(lm.z),  # depth relative to the hips, smaller = closer
                    "visibility": float(lm.visibility) if lm.visibility is not None else None,
                })

        # Compute instantaneous and smoothed FPS
        dt = time.time() - t0
        inst_fps = 1.0 / max(dt, 1e-6)
        self._smoothed_fps = inst_fps if self._smoothed_fps is None else 0.2 * inst_fps + 0.8 * self._smoothed_fps
        return kps, {"fps_hint": float(self._smoothed_fps or inst_fps)}

    def close(self) -> None:
        self.landmarker.close()
