from __future__ import annotations
from typing import Sequence

from exercise_catalog import DEFAULT_CATALOG, ExerciseCatalog
from models import FixType, SessionHistoryEntry, StallContext, StallReport
from .math_tools import MathTools


class StallDetector:
    """Detect e1RM plateaus and pick a single fix."""

    MINIMUM_SESSIONS: int = 3
    DELOAD_RPE: float = 9.0
    DELOAD_FACTOR: float = 0.92
    LOW_REP_THRESHOLD: float = 4.0

    VARIATIONS: dict[str, tuple[str, ...]] = {
        "Bench Press": ("Close Grip Bench Press", "Incline Bench Press", "Dumbbell Bench Press"),
        "Barbell Squat": ("Front Squat", "Pause Squat", "Box Squat"),
        "Deadlift": ("Deficit Deadlift", "Pause Deadlift", "Romanian Deadlift"),
        "Overhead Press": ("Push Press", "Seated Press", "Dumbbell Shoulder Press"),
        "Barbell Row": ("Pendlay Row", "Chest Supported Row", "T-Bar Row"),
        "Pull-ups": ("Weighted Pull-ups", "Wide Grip Pull-ups", "Chin-ups"),
    }

    def __init__(self, catalog: ExerciseCatalog | None = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def analyze(self, context: StallContext) -> StallReport:
        return self.detect(context.exercise_name, context.last_sessions)

    def detect(self, exercise_name: str, sessions: Sequence[SessionHistoryEntry]) -> StallReport:
        """``sessions`` is ordered most recent first."""
        if len(sessions) < self.MINIMUM_SESSIONS:
            return StallReport(is_stalled=False)
        e1rms = [s.e1rm for s in sessions]
        max_e1rm = max(e1rms)
        oldest = e1rms[-1]
        if max_e1rm > oldest:
            return StallReport(is_stalled=False)

        count = len(sessions)
        avg_rpe = MathTools.mean(s.top_set_rpe for s in sessions if s.top_set_rpe is not None)
        if avg_rpe is not None and avg_rpe >= self.DELOAD_RPE:
            return StallReport(
                is_stalled=True,
                reason=f"RPE consistently high ({avg_rpe:.1f}) with no progress for {count} sessions",
                suggested_fix=f"Take a micro-deload: reduce {exercise_name} weight by 8% for one week",
                fix_type=FixType.DELOAD,
                details=f"New target: {max_e1rm * self.DELOAD_FACTOR:.1f}kg",
            )

        avg_reps = MathTools.mean(s.top_set_reps for s in sessions)
        if avg_reps <= self.LOW_REP_THRESHOLD:
            return StallReport(
                is_stalled=True,
                reason=f"Stuck in low rep range ({avg_reps:.1f} avg) with no weight increases",
                suggested_fix=f"Switch {exercise_name} to a higher rep range (6-8) to build volume",
                fix_type=FixType.REP_RANGE,
                details="Try 6-8 reps for 2-3 weeks before returning to lower reps",
            )

        variations = self.variations_for(exercise_name)
        if variations:
            details = f"Suggested: {', '.join(variations)}"
        else:
            details = "Swap to a similar movement pattern to break through plateau"
        return StallReport(
            is_stalled=True,
            reason=f"No e1RM improvement in {count} sessions",
            suggested_fix=f"Try a variation of {exercise_name} for 3-4 weeks",
            fix_type=FixType.VARIATION,
            details=details,
        )

    def variations_for(self, exercise_name: str) -> list[str]:
        """Alternatives that keep the movement pattern of ``exercise_name``."""
        if exercise_name in self.VARIATIONS:
            return list(self.VARIATIONS[exercise_name])
        descriptor = self.catalog.get(exercise_name)
        if descriptor is None or descriptor.movement_pattern == "isolation":
            return []
        same = self.catalog.by_movement_pattern(descriptor.movement_pattern)
        return [name for name in same if name != exercise_name][:3]
