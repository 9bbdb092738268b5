import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import StallDetector
from models import FixType, Prescription, SessionHistoryEntry, StallContext


def session(e1rm: float, reps: int, rpe: float | None, day: int = 1) -> SessionHistoryEntry:
    return SessionHistoryEntry(
        date=f"2024-03-{day:02d}",
        top_set_weight=e1rm / (1 + reps / 30),
        top_set_reps=reps,
        top_set_rpe=rpe,
        e1rm=e1rm,
    )


class StallDetectorTest(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = StallDetector()

    def test_too_few_sessions(self) -> None:
        report = self.detector.detect("Bench Press", [session(100, 3, 9.5), session(100, 3, 9.5)])
        self.assertFalse(report.is_stalled)
        self.assertIsNone(report.fix_type)

    def test_progress_is_not_a_stall(self) -> None:
        sessions = [session(105, 5, 9.5, 3), session(102, 5, 9.5, 2), session(100, 5, 9.5, 1)]
        self.assertFalse(self.detector.detect("Bench Press", sessions).is_stalled)

    def test_high_rpe_gives_deload(self) -> None:
        sessions = [session(100, 3, 9.2, d) for d in (3, 2, 1)]
        report = self.detector.detect("Bench Press", sessions)
        self.assertTrue(report.is_stalled)
        self.assertEqual(report.fix_type, FixType.DELOAD)
        self.assertEqual(report.details, "New target: 92.0kg")
        self.assertIn("9.2", report.reason)
        self.assertIn("3 sessions", report.reason)

    def test_low_reps_give_rep_range(self) -> None:
        sessions = [session(100, 3, 8.0, d) for d in (3, 2, 1)]
        report = self.detector.detect("Bench Press", sessions)
        self.assertEqual(report.fix_type, FixType.REP_RANGE)
        self.assertIn("3.0 avg", report.reason)

    def test_missing_rpe_never_deloads(self) -> None:
        sessions = [session(100, 3, None, d) for d in (3, 2, 1)]
        self.assertEqual(self.detector.detect("Bench Press", sessions).fix_type, FixType.REP_RANGE)

    def test_mean_reps_is_not_truncated(self) -> None:
        sessions = [session(100, 5, 8.0, 3), session(100, 4, 8.0, 2), session(100, 4, 8.0, 1)]
        report = self.detector.detect("Bench Press", sessions)
        self.assertEqual(report.fix_type, FixType.VARIATION)

    def test_variation_from_map(self) -> None:
        sessions = [session(100, 6, 8.0, d) for d in (3, 2, 1)]
        report = self.detector.detect("Bench Press", sessions)
        self.assertEqual(report.fix_type, FixType.VARIATION)
        self.assertEqual(
            report.details,
            "Suggested: Close Grip Bench Press, Incline Bench Press, Dumbbell Bench Press",
        )

    def test_variation_without_known_alternatives(self) -> None:
        sessions = [session(40, 12, 8.0, d) for d in (3, 2, 1)]
        report = self.detector.detect("Lateral Raise", sessions)
        self.assertEqual(report.fix_type, FixType.VARIATION)
        self.assertEqual(report.details, "Swap to a similar movement pattern to break through plateau")

    def test_variations_from_catalog_pattern(self) -> None:
        self.assertEqual(
            self.detector.variations_for("Leg Press"),
            ["Barbell Squat", "Front Squat", "Goblet Squat"],
        )
        self.assertEqual(self.detector.variations_for("Unknown Lift"), [])

    def test_analyze_uses_context(self) -> None:
        context = StallContext(
            exercise_name="Deadlift",
            last_sessions=[session(180, 3, 9.5, d) for d in (3, 2, 1)],
            current_prescription=Prescription(),
        )
        self.assertEqual(self.detector.analyze(context).fix_type, FixType.DELOAD)


if __name__ == "__main__":
    unittest.main()
