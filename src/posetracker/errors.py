"""Exceptions raised at the session-flow boundary."""


class PoseTrackerError(RuntimeError):
    """Base class for errors raised by posetracker."""


class FlowError(PoseTrackerError):
    """Raised when a screen transition is requested from the wrong screen."""


class UnknownExerciseError(PoseTrackerError, KeyError):
    """Raised when an exercise key is not in the library."""
