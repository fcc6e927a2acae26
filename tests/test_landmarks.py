import unittest
from types import SimpleNamespace

from posetracker.geometry.landmarks import Landmark, mean_y, to_landmark, to_landmarks

from fakes import frame


class ToLandmarkTests(unittest.TestCase):
    def test_reads_mapping(self) -> None:
        lm = to_landmark({"x": 0.1, "y": 0.2, "z": -0.3, "visibility": 0.9})
        self.assertEqual(lm, Landmark(0.1, 0.2, -0.3, 0.9))

    def test_reads_attributes(self) -> None:
        lm = to_landmark(SimpleNamespace(x=0.4, y=0.5, z=0.1, visibility=None))
        self.assertEqual((lm.x, lm.y, lm.z), (0.4, 0.5, 0.1))
        self.assertIsNone(lm.visibility)

    def test_missing_depth_defaults_to_zero(self) -> None:
        self.assertEqual(to_landmark({"x": 0.4, "y": 0.5}).z, 0.0)

    def test_missing_y_raises(self) -> None:
        with self.assertRaises(ValueError):
            to_landmark({"x": 0.4})

    def test_landmark_passes_through(self) -> None:
        lm = Landmark(0.1, 0.2)
        self.assertIs(to_landmark(lm), lm)


class ToLandmarksTests(unittest.TestCase):
    def test_full_frame_of_dicts(self) -> None:
        lms = to_landmarks(frame(as_dicts=True))
        self.assertIsNotNone(lms)
        self.assertEqual(len(lms), 33)
        self.assertTrue(all(isinstance(lm, Landmark) for lm in lms))

    def test_empty_and_missing_frames_are_unusable(self) -> None:
        self.assertIsNone(to_landmarks(None))
        self.assertIsNone(to_landmarks([]))

    def test_sparse_frame_is_unusable(self) -> None:
        self.assertIsNone(to_landmarks(frame(size=29)))
        self.assertIsNotNone(to_landmarks(frame(size=30)))

    def test_malformed_entry_makes_frame_unusable(self) -> None:
        raw = frame(as_dicts=True)
        raw[5] = {"x": 0.5}
        self.assertIsNone(to_landmarks(raw))

    def test_mean_y(self) -> None:
        self.assertAlmostEqual(mean_y(Landmark(0, 0.4), Landmark(0, 0.6)), 0.5)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
