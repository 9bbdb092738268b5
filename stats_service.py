from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple

from algorithms.math_tools import MathTools
from models import (
    Goal,
    SessionHistoryEntry,
    StallContext,
    Prescription,
    WeeklyExerciseHighlight,
    WeeklyReviewContext,
)

# (reps, weight, rpe, date, exercise_name) as handed over by the persistence layer
SetRow = Tuple[int, float, Optional[float], str, str]


class StatisticsService:
    """Aggregate logged sets into the contexts the coach consumes."""

    def __init__(self, window: int = 5) -> None:
        if window < 1:
            raise ValueError("window must be positive")
        self.window = window

    def history_window(
        self, rows: Iterable[SetRow], exercise: str
    ) -> tuple[SessionHistoryEntry, ...]:
        """Per-session top sets for ``exercise``, most recent first."""
        by_date: Dict[str, Dict[str, object]] = {}
        for reps, weight, rpe, date, ex_name in rows:
            if ex_name != exercise:
                continue
            est = MathTools.epley_1rm(float(weight), int(reps))
            item = by_date.setdefault(date, {"count": 0, "top": None, "e1rm": -1.0})
            item["count"] += 1
            if est > item["e1rm"]:
                item["e1rm"] = est
                item["top"] = (int(reps), float(weight), rpe)
        entries: List[SessionHistoryEntry] = []
        for date in sorted(by_date, reverse=True)[: self.window]:
            data = by_date[date]
            reps, weight, rpe = data["top"]
            entries.append(
                SessionHistoryEntry(
                    date=date,
                    top_set_weight=weight,
                    top_set_reps=reps,
                    top_set_rpe=float(rpe) if rpe is not None else None,
                    completed_set_count=int(data["count"]),
                    e1rm=round(float(data["e1rm"]), 2),
                )
            )
        return tuple(entries)

    def recent_history(
        self, rows: Iterable[SetRow], exercises: Iterable[str]
    ) -> dict[str, tuple[SessionHistoryEntry, ...]]:
        rows = list(rows)
        result = {}
        for name in exercises:
            window = self.history_window(rows, name)
            if window:
                result[name] = window
        return result

    def stall_context(
        self,
        rows: Iterable[SetRow],
        exercise: str,
        prescription: Prescription,
        goal: Goal = Goal.BOTH,
    ) -> StallContext:
        return StallContext(
            exercise_name=exercise,
            last_sessions=self.history_window(rows, exercise),
            current_prescription=prescription,
            goal=goal,
        )

    def weekly_context(
        self,
        workouts: Iterable[Tuple[str, int]],
        rows: Iterable[SetRow],
        previous_best: Optional[Dict[str, float]] = None,
        goal: Goal = Goal.BOTH,
    ) -> WeeklyReviewContext:
        """Summarize one review period.

        ``workouts`` holds ``(date, duration_minutes)`` per session and
        ``previous_best`` the best e1RM per exercise before the period.
        """
        previous_best = previous_best or {}
        durations = [int(d) for _date, d in workouts]
        stats: Dict[str, Dict[str, object]] = {}
        for reps, weight, _rpe, date, ex_name in rows:
            item = stats.setdefault(ex_name, {"sets": [], "dates": set(), "best": 0.0})
            item["sets"].append((int(reps), float(weight)))
            item["dates"].add(date)
            est = MathTools.epley_1rm(float(weight), int(reps))
            if est > item["best"]:
                item["best"] = est
        highlights = [
            WeeklyExerciseHighlight(
                exercise_name=name,
                sessions=len(data["dates"]),
                best_e1rm=round(float(data["best"]), 2),
                previous_best_e1rm=previous_best.get(name),
                total_volume=round(MathTools.volume(data["sets"]), 2),
            )
            for name, data in sorted(stats.items())
        ]
        total_volume = sum(h.total_volume for h in highlights)
        avg_duration = MathTools.mean(durations)
        return WeeklyReviewContext(
            workout_count=len(durations),
            total_volume=round(total_volume, 2),
            average_duration=int(round(avg_duration)) if avg_duration is not None else 0,
            exercise_highlights=highlights,
            goal=goal,
        )
