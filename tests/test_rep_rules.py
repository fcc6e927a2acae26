import unittest
from typing import Iterable, List, Tuple

from posetracker.analysis.rep_rules import RULES, RepState, assess_frame
from posetracker.errors import UnknownExerciseError
from posetracker.geometry.landmarks import Landmark, LEFT_HIP, LEFT_KNEE

import fakes


def run(key: str, frames: Iterable[List[Landmark]], state: RepState = RepState()) -> Tuple[int, RepState, List[int]]:
    per_frame = []
    for f in frames:
        upd = assess_frame(key, f, state)
        state = upd.state
        per_frame.append(upd.reps)
    return sum(per_frame), state, per_frame


class HighKneesTests(unittest.TestCase):
    def test_one_lift_is_one_rep(self) -> None:
        total, _, _ = run("high_knees", [fakes.standing(), fakes.left_knee_up(), fakes.standing()])
        self.assertEqual(total, 1)

    def test_holding_the_knee_up_does_not_repeat(self) -> None:
        total, state, _ = run("high_knees", [fakes.left_knee_up()] * 5)
        self.assertEqual(total, 1)
        self.assertTrue(state.left_up)

    def test_knee_crossing_the_hip_and_back(self) -> None:
        ys = [0.6, 0.4, 0.6]
        frames = [fakes.frame({LEFT_HIP: {"y": 0.5}, LEFT_KNEE: {"y": y}}) for y in ys]
        total, state, per_frame = run("high_knees", frames)
        self.assertEqual(per_frame, [0, 1, 0])
        self.assertFalse(state.left_up)

    def test_both_knees_in_one_frame_count_twice(self) -> None:
        _, _, per_frame = run("high_knees", [fakes.standing(), fakes.both_knees_up()])
        self.assertEqual(per_frame, [0, 2])

    def test_alternating_legs(self) -> None:
        frames = [fakes.left_knee_up(), fakes.standing()] * 4
        total, _, _ = run("high_knees", frames)
        self.assertEqual(total, 4)


class SquatTests(unittest.TestCase):
    def test_counts_on_the_way_down(self) -> None:
        _, _, per_frame = run("squats", [fakes.standing(), fakes.squatting(), fakes.squatting(), fakes.standing()])
        self.assertEqual(per_frame, [0, 1, 0, 0])

    def test_two_full_squats(self) -> None:
        frames = [fakes.squatting(), fakes.standing(), fakes.squatting(), fakes.standing()]
        total, _, _ = run("squats", frames)
        self.assertEqual(total, 2)

    def test_hips_split_across_knees_hold_state(self) -> None:
        split = fakes.frame({LEFT_HIP: {"y": 0.70}})
        total, state, _ = run("squats", [fakes.squatting(), split, fakes.squatting()])
        self.assertEqual(total, 1)
        self.assertTrue(state.is_squatting)


class LungeTests(unittest.TestCase):
    def test_counts_when_returning(self) -> None:
        _, _, per_frame = run("lunges", [fakes.standing(), fakes.lunging(), fakes.lunging(), fakes.standing()])
        self.assertEqual(per_frame, [0, 0, 0, 1])

    def test_partial_return_does_not_count(self) -> None:
        total, state, _ = run("lunges", [fakes.lunging(), fakes.lunging(0.10)])
        self.assertEqual(total, 0)
        self.assertTrue(state.is_lunging)

    def test_gap_must_exceed_enter_threshold(self) -> None:
        total, state, _ = run("lunges", [fakes.lunging(0.20), fakes.standing()])
        self.assertEqual(total, 0)
        self.assertFalse(state.is_lunging)

    def test_gap_is_signed(self) -> None:
        total, _, _ = run("lunges", [fakes.lunging(-0.30), fakes.standing()])
        self.assertEqual(total, 0)


class CalfRaiseTests(unittest.TestCase):
    def test_counts_on_raise(self) -> None:
        _, _, per_frame = run("calf_raises", [fakes.standing(), fakes.heels(0.45), fakes.heels(0.45)])
        self.assertEqual(per_frame, [0, 1, 0])

    def test_threshold_is_strict(self) -> None:
        total, _, _ = run("calf_raises", [fakes.heels(0.50)])
        self.assertEqual(total, 0)

    def test_deadband_requires_full_lowering(self) -> None:
        frames = [fakes.heels(0.45), fakes.heels(0.52), fakes.heels(0.45)]
        total, _, _ = run("calf_raises", frames)
        self.assertEqual(total, 1)

        frames = [fakes.heels(0.45), fakes.heels(0.60), fakes.heels(0.45)]
        total, _, _ = run("calf_raises", frames)
        self.assertEqual(total, 2)


class OneLegSquatTests(unittest.TestCase):
    def test_counts_on_the_way_up(self) -> None:
        frames = [fakes.one_leg(down=False), fakes.one_leg(down=True), fakes.one_leg(down=False)]
        _, _, per_frame = run("one_leg_squat", frames)
        self.assertEqual(per_frame, [0, 0, 1])

    def test_free_foot_must_be_lifted_to_start(self) -> None:
        frames = [fakes.one_leg(down=True, lifted=False), fakes.one_leg(down=False)]
        total, state, _ = run("one_leg_squat", frames)
        self.assertEqual(total, 0)
        self.assertFalse(state.is_one_leg_squatting)

    def test_standing_up_with_foot_down_waits_for_lift(self) -> None:
        frames = [
            fakes.one_leg(down=True),
            fakes.one_leg(down=False, lifted=False),
            fakes.one_leg(down=False),
        ]
        _, state, per_frame = run("one_leg_squat", frames)
        self.assertEqual(per_frame, [0, 0, 1])
        self.assertFalse(state.is_one_leg_squatting)


class DispatchTests(unittest.TestCase):
    def test_every_rule_is_pure(self) -> None:
        start = RepState()
        for key in RULES:
            upd = assess_frame(key, fakes.both_knees_up(), start)
            self.assertEqual(start, RepState(), key)
            self.assertIsInstance(upd.state, RepState)

    def test_unknown_exercise(self) -> None:
        with self.assertRaises(UnknownExerciseError):
            assess_frame("burpees", fakes.standing(), RepState())

    def test_unknown_exercise_is_a_key_error(self) -> None:
        with self.assertRaises(KeyError):
            assess_frame("burpees", fakes.standing(), RepState())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
