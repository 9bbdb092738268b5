from __future__ import annotations

from models import WeeklyReview, WeeklyReviewContext


class WeeklyReviewSynthesizer:
    """Fixed-threshold weekly review used when no remote coach answers."""

    HIGH_VOLUME: float = 15000.0
    SOLID_VOLUME: float = 8000.0
    ON_TRACK_VOLUME: float = 10000.0
    TARGET_WORKOUTS: int = 3
    SHORT_SESSION_MINUTES: int = 40
    MAX_PR_NAMES: int = 3

    @staticmethod
    def consistency(workout_count: int) -> tuple[int, str]:
        """Score and sentence for the number of workouts in the period."""
        if workout_count <= 0:
            return 1, "No workouts recorded this period."
        if workout_count == 1:
            return 3, "You completed 1 workout."
        if workout_count == 2:
            return 5, "You completed 2 workouts."
        if workout_count == 3:
            return 7, "You completed 3 workouts. Good consistency!"
        if workout_count == 4:
            return 8, "You completed 4 workouts. Excellent consistency!"
        return 9, f"You completed {workout_count} workouts. Outstanding commitment!"

    def review(self, context: WeeklyReviewContext) -> WeeklyReview:
        count = context.workout_count
        volume = context.total_volume
        prs = [h for h in context.exercise_highlights if h.is_pr]
        score, message = self.consistency(count)

        highlights: list[str] = []
        if prs:
            names = ", ".join(h.exercise_name for h in prs[: self.MAX_PR_NAMES])
            highlights.append(f"Hit PRs on {names}")
        if count >= 4:
            highlights.append("Maintained excellent training frequency")
        if volume > self.HIGH_VOLUME:
            highlights.append(f"High training volume ({int(volume / 1000)}k kg)")
        elif volume > self.SOLID_VOLUME:
            highlights.append("Solid training volume this week")

        areas: list[str] = []
        if count < self.TARGET_WORKOUTS:
            areas.append("Try to fit in at least 3 sessions per week for optimal progress")
        if not prs and count >= 2:
            areas.append("Focus on progressive overload - aim for small weight or rep increases")
        if context.average_duration < self.SHORT_SESSION_MINUTES and count > 0:
            areas.append("Consider longer sessions to include more accessory work")

        summary = message
        if prs:
            summary += f" You set {len(prs)} personal record(s)."
        if volume > self.ON_TRACK_VOLUME:
            summary += " Your volume is on track."
        elif count > 0:
            summary += " There's room to increase volume if recovery allows."

        if count < 2:
            recommendation = "Prioritize getting to the gym at least 3 times this week."
        elif not prs:
            recommendation = "Focus on adding 1 rep or 2.5kg to your main lifts this week."
        elif volume > self.HIGH_VOLUME:
            recommendation = "Monitor fatigue levels and consider a lighter week if needed."
        else:
            recommendation = "Keep up the momentum! Stay consistent and trust the process."

        return WeeklyReview(
            summary=summary,
            highlights=highlights or ["Showed up and put in the work"],
            areas_to_improve=areas or ["Keep pushing - you're on track"],
            recommendation=recommendation,
            consistency_score=score,
        )
