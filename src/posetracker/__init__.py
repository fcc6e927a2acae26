"""Pose Tracker: camera-based exercise rep counting with a PySide6 front end."""

__version__ = "0.1.0"
