import logging
import os
import tempfile
import unittest

from posetracker.backends.mediapipe_backend import MediaPipeBackend
from posetracker.utils.log import setup_logging
from posetracker.utils.resources import resource_path


class ResourcePathTests(unittest.TestCase):
    def test_absolute_path_is_kept(self) -> None:
        path = os.path.abspath(os.path.join(os.sep, "tmp", "model.task"))
        self.assertEqual(resource_path(path), path)

    def test_existing_relative_path_resolves_against_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cwd = os.getcwd()
            os.chdir(tmp)
            try:
                open("model.task", "wb").close()
                self.assertEqual(resource_path("model.task"), os.path.abspath("model.task"))
            finally:
                os.chdir(cwd)


class MediaPipeBackendTests(unittest.TestCase):
    def test_missing_model_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                MediaPipeBackend(model_path=os.path.join(tmp, "missing.task"))


class SetupLoggingTests(unittest.TestCase):
    def test_idempotent(self) -> None:
        first = setup_logging("DEBUG")
        count = len(first.handlers)
        second = setup_logging("WARNING")
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), count)
        self.assertEqual(second.level, logging.WARNING)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
