# src/posetracker/backends/base.py
from typing import Any, Dict, List, Tuple  # type hints

Keypoint = Dict[str, Any]  # {"index", "x", "y", "z", "visibility"} in normalized image space


class PoseBackend:
    """Opaque landmark source: one BGR frame in, one landmark list out."""

    def name(self) -> str:
        raise NotImplementedError

    def infer(self, frame_bgr) -> Tuple[List[Keypoint], Dict[str, Any]]:
        # Returns (landmarks, meta); an empty list when nobody is in view
        raise NotImplementedError

    def close(self) -> None:
        pass
