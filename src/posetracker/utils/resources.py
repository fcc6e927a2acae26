# src/posetracker/utils/resources.py
import os
import sys


def resource_path(rel_path: str) -> str:
    """Resolve a bundled resource both from source and from a PyInstaller build."""
    if os.path.isabs(rel_path):
        return rel_path
    base = getattr(sys, "_MEIPASS", None)  # set by the frozen bootloader
    if base:
        return os.path.join(base, rel_path)
    cwd_path = os.path.abspath(rel_path)
    if os.path.exists(cwd_path):
        return cwd_path
    # fall back to the project root (src/posetracker/utils → three levels up)
    here = os.path.dirname(os.path.abspath(__file__))
    return os.path.abspath(os.path.join(here, "..", "..", "..", rel_path))
