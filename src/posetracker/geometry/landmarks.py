# src/posetracker/geometry/landmarks.py
from __future__ import annotations
from dataclasses import dataclass  # immutable landmark record
from typing import Any, List, Mapping, Optional, Sequence  # type hints

from ..config import MIN_LANDMARKS

# MediaPipe pose numbering (33 landmarks); only the joints the rules read are named
LEFT_SHOULDER, RIGHT_SHOULDER = 11, 12
LEFT_ELBOW, RIGHT_ELBOW = 13, 14
LEFT_WRIST, RIGHT_WRIST = 15, 16
LEFT_HIP, RIGHT_HIP = 23, 24
LEFT_KNEE, RIGHT_KNEE = 25, 26
LEFT_ANKLE, RIGHT_ANKLE = 27, 28


@dataclass(frozen=True)
class Landmark:
    """One detected joint in normalized camera space (y grows downward)."""

    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


def _read(raw: Any, name: str) -> Any:
    # Accept mappings ({"x": ..}) and objects with attributes (MediaPipe NormalizedLandmark)
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def to_landmark(raw: Any) -> Landmark:
    """Convert one backend landmark (dict or object) to a :class:`Landmark`."""
    if isinstance(raw, Landmark):
        return raw
    x, y = _read(raw, "x"), _read(raw, "y")
    if x is None or y is None:
        raise ValueError("landmark is missing x or y")
    z = _read(raw, "z")
    vis = _read(raw, "visibility")
    return Landmark(
        x=float(x),
        y=float(y),
        z=float(z) if z is not None else 0.0,  # 2D sources report no depth
        visibility=float(vis) if vis is not None else None,
    )


def to_landmarks(raw: Optional[Sequence[Any]]) -> Optional[List[Landmark]]:
    """Return the frame as a list of landmarks, or None when it is unusable.

    Frames with fewer than ``MIN_LANDMARKS`` entries, or with an entry that
    has no x/y, are treated as sparse and ignored by every consumer.
    """
    if not raw or len(raw) < MIN_LANDMARKS:
        return None
    try:
        return [to_landmark(r) for r in raw]
    except (TypeError, ValueError):
        return None


def mean_y(a: Landmark, b: Landmark) -> float:
    # Average vertical position of two joints
    return (a.y + b.y) / 2.0
