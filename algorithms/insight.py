from __future__ import annotations

from models import Insight, InsightCategory, SessionSummary
from .math_tools import MathTools


class InsightGenerator:
    """Single post-session observation plus a next-session action."""

    def generate(self, session: SessionSummary) -> Insight:
        insights: list[Insight] = []
        for exercise in session.exercises:
            prev = exercise.previous_e1rm
            if prev is not None and prev > 0 and exercise.e1rm > prev:
                improvement = MathTools.percent_change(exercise.e1rm, prev)
                insights.append(
                    Insight(
                        insight=f"{exercise.name} e1RM improved by {improvement:.1f}%",
                        action="Keep current progression, add weight next session",
                        category=InsightCategory.PROGRESS,
                    )
                )
            if not exercise.target_hit:
                insights.append(
                    Insight(
                        insight=f"{exercise.name} missed rep target",
                        action="Keep weight the same, focus on hitting target reps next time",
                        category=InsightCategory.FATIGUE,
                    )
                )
        if not insights:
            return Insight(
                insight="Solid workout completed",
                action="Continue current program, small weight increases where possible",
                category=InsightCategory.PROGRESS,
            )
        return insights[0]
