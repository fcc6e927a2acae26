import unittest

import numpy as np

from posetracker.camera.video_worker import fit_to_view
from posetracker.config import DetectorOptions
from posetracker.session.flow import SessionFlow
from posetracker.ui.overlays import REGION_CONNECTIONS, active_connections, cvimg_to_qt, render_live

import fakes


class ActiveConnectionsTests(unittest.TestCase):
    def test_face_is_off_by_default(self) -> None:
        pairs = active_connections(DetectorOptions())
        for pair in REGION_CONNECTIONS["face"]:
            self.assertNotIn(pair, pairs)
        self.assertIn((23, 25), pairs)

    def test_disabled_region_is_not_drawn(self) -> None:
        pairs = active_connections(DetectorOptions(left_leg=False))
        self.assertNotIn((23, 25), pairs)
        self.assertIn((24, 26), pairs)


class FitToViewTests(unittest.TestCase):
    def test_output_matches_view_size(self) -> None:
        for shape in ((480, 640, 3), (1080, 1920, 3), (900, 400, 3)):
            with self.subTest(shape=shape):
                out = fit_to_view(np.zeros(shape, dtype=np.uint8), (400, 600))
                self.assertEqual(out.shape, (600, 400, 3))


class RenderLiveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sched = fakes.ManualScheduler()
        self.flow = SessionFlow(self.sched)
        self.flow.welcome()
        self.flow.start_exercise("squats")

    def test_calibration_draws_guide_box_without_landmarks(self) -> None:
        img = np.zeros((600, 400, 3), dtype=np.uint8)
        render_live(img, None, self.flow, DetectorOptions())
        self.assertGreater(int(img.sum()), 0)

    def test_countdown_whitens_the_frame(self) -> None:
        self.flow.handle_landmarks(fakes.standing())
        img = np.zeros((600, 400, 3), dtype=np.uint8)
        render_live(img, fakes.standing(), self.flow, DetectorOptions())
        self.assertGreaterEqual(int(img[5, 5, 0]), 120)

    def test_qt_conversion_keeps_size(self) -> None:
        qimg = cvimg_to_qt(np.zeros((600, 400, 3), dtype=np.uint8))
        self.assertEqual((qimg.width(), qimg.height()), (400, 600))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
