# src/posetracker/camera/video_worker.py
import logging
import time
from typing import Callable, Optional

import cv2
import numpy as np
from PySide6 import QtCore

from ..backends.base import PoseBackend
from ..config import CAM_INDEX, DetectorOptions

logger = logging.getLogger(__name__)


def fit_to_view(frame_bgr: np.ndarray, size) -> np.ndarray:
    """Center-crop to the view's aspect ratio, then resize to ``size`` (w, h)."""
    w_out, h_out = size
    h, w = frame_bgr.shape[:2]
    target = w_out / float(h_out)
    if w / float(h) > target:  # too wide → trim the sides
        new_w = max(1, int(round(h * target)))
        x0 = (w - new_w) // 2
        frame_bgr = frame_bgr[:, x0:x0 + new_w]
    else:  # too tall → trim top and bottom
        new_h = max(1, int(round(w / target)))
        y0 = (h - new_h) // 2
        frame_bgr = frame_bgr[y0:y0 + new_h, :]
    return cv2.resize(frame_bgr, (w_out, h_out), interpolation=cv2.INTER_LINEAR)


class VideoWorker(QtCore.QObject):
    """
    Camera capture + pose inference loop, meant to live in its own QThread.

    Every processed frame is emitted with the session generation it was
    started for, so the GUI can drop frames that arrive after navigation.
    """
    frame_ready = QtCore.Signal(object, dict)  # (frame_bgr, {"landmarks", "generation", "t_mono", "meta"})
    error = QtCore.Signal(str)  # human-readable failure (camera/model)
    backend_changed = QtCore.Signal(str)  # backend label once it is loaded
    finished = QtCore.Signal()  # loop exited, resources released

    def __init__(self, backend_factory: Callable[[], PoseBackend], options: DetectorOptions = DetectorOptions(),
                 cam_index: int = CAM_INDEX, generation: int = 0):
        super().__init__()
        self._backend_factory = backend_factory
        self.options = options
        self.cam_index = cam_index
        self.generation = generation
        self._running = False

    @QtCore.Slot()
    def start(self):
        self._running = True
        cap: Optional[cv2.VideoCapture] = None
        backend: Optional[PoseBackend] = None
        try:
            cap = cv2.VideoCapture(self.cam_index)
            if not cap.isOpened():
                raise RuntimeError(f"Cannot open camera index {self.cam_index}")
            backend = self._backend_factory()
            self.backend_changed.emit(backend.name())
            logger.info("Worker started: camera %d, backend %s, session %d",
                        self.cam_index, backend.name(), self.generation)

            while self._running:
                ok, frame = cap.read()
                if not ok or frame is None:
                    raise RuntimeError("Camera stopped delivering frames")
                frame = fit_to_view(frame, self.options.size)
                kps, meta = backend.infer(frame)
                self.frame_ready.emit(frame, {
                    "landmarks": kps,
                    "generation": self.generation,
                    "t_mono": time.monotonic(),
                    "meta": meta,
                })
        except Exception as e:
            logger.exception("Worker failed")
            if self._running:  # failures after stop() are just teardown noise
                self.error.emit(str(e))
        finally:
            self._running = False
            if backend is not None:
                backend.close()
            if cap is not None:
                cap.release()
            self.finished.emit()

    def stop(self):
        # Called from the GUI thread; the loop checks the flag once per frame
        self._running = False
