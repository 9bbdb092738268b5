from __future__ import annotations
from typing import Optional, Sequence

from models import (
    PlannedSet,
    Prescription,
    ProgressionType,
    ReadinessInput,
    SessionHistoryEntry,
)
from .math_tools import MathTools


class ProgressionCalculator:
    """Rule-based load and rep targets for a single exercise.

    Every literal used by the rules is a class attribute so callers can
    swap them per instance (see ``OfflineDecisionEngine.from_settings``).
    """

    BASELINE_WEIGHT: float = 20.0
    WEIGHT_INCREMENT: float = 2.5
    ASSUMED_RPE: float = 8.0
    RPE_OVERSHOOT: float = 0.5
    STRUGGLE_FACTOR: float = 0.95

    REDUCED_RPE_CAP: float = 7.5
    RPE_BUMP: float = 0.5
    MAX_RPE_CAP: float = 9.5

    BAR_WEIGHT: float = 20.0
    EMPTY_BAR_FACTOR: float = 1.5
    EMPTY_BAR_REPS: int = 10
    EMPTY_BAR_RPE: float = 5.0
    WARMUP_STEPS: tuple[tuple[float, int], ...] = ((0.4, 5), (0.6, 5), (0.8, 3))
    WARMUP_RPE: float = 6.0
    ROUNDING_INCREMENT: float = 2.5
    WORKING_SETS: int = 3

    def __init__(
        self,
        bar_weight: Optional[float] = None,
        weight_increment: Optional[float] = None,
        baseline_weight: Optional[float] = None,
    ) -> None:
        if bar_weight is not None:
            self.BAR_WEIGHT = bar_weight
        if weight_increment is not None:
            self.WEIGHT_INCREMENT = weight_increment
        if baseline_weight is not None:
            self.BASELINE_WEIGHT = baseline_weight

    def top_set_target(
        self,
        prescription: Prescription,
        history: Sequence[SessionHistoryEntry],
        readiness: ReadinessInput,
    ) -> tuple[float, int]:
        """Next top-set ``(weight, reps)`` from the most recent session."""
        min_reps, max_reps = prescription.top_set_rep_range
        if not history:
            return self.BASELINE_WEIGHT, min_reps
        last = history[0]
        last_rpe = last.top_set_rpe if last.top_set_rpe is not None else self.ASSUMED_RPE
        cap = prescription.top_set_rpe_cap
        if last.top_set_reps >= max_reps and last_rpe <= cap:
            return last.top_set_weight + self.WEIGHT_INCREMENT, min_reps
        if last.top_set_reps < min_reps or last_rpe > cap + self.RPE_OVERSHOOT:
            if readiness.reduce_intensity:
                return last.top_set_weight * self.STRUGGLE_FACTOR, min_reps
            return last.top_set_weight, min_reps
        return last.top_set_weight, min(last.top_set_reps + 1, max_reps)

    def session_rpe_cap(self, prescription: Prescription, readiness: ReadinessInput) -> float:
        cap = prescription.top_set_rpe_cap
        if readiness.reduce_intensity:
            return min(cap, self.REDUCED_RPE_CAP)
        if readiness.increase_intensity:
            return MathTools.clamp(cap + self.RPE_BUMP, 0.0, self.MAX_RPE_CAP)
        return cap

    def warmups(self, top_set_weight: float) -> list[PlannedSet]:
        if top_set_weight <= self.BAR_WEIGHT:
            return []
        sets: list[PlannedSet] = []
        if top_set_weight > self.BAR_WEIGHT * self.EMPTY_BAR_FACTOR:
            sets.append(
                PlannedSet(
                    weight=self.BAR_WEIGHT,
                    reps=self.EMPTY_BAR_REPS,
                    rpe_cap=self.EMPTY_BAR_RPE,
                    set_count=1,
                )
            )
        for fraction, reps in self.WARMUP_STEPS:
            weight = top_set_weight * fraction
            if weight > self.BAR_WEIGHT:
                sets.append(
                    PlannedSet(
                        weight=MathTools.round_to_nearest(weight, self.ROUNDING_INCREMENT),
                        reps=reps,
                        rpe_cap=self.WARMUP_RPE,
                        set_count=1,
                    )
                )
        return sets

    def backoffs(
        self,
        prescription: Prescription,
        top_set_weight: float,
        rpe_cap: float,
        readiness: ReadinessInput,
    ) -> list[PlannedSet]:
        if (
            prescription.progression_type is not ProgressionType.TOP_SET_BACKOFF
            or prescription.backoff_set_count <= 0
        ):
            return []
        count = prescription.backoff_set_count
        if readiness.reduce_intensity:
            count = max(1, count - 1)
        elif readiness.increase_intensity:
            count += 1
        weight = top_set_weight * (1 - prescription.backoff_load_drop_fraction)
        return [
            PlannedSet(
                weight=MathTools.round_to_nearest(weight, self.ROUNDING_INCREMENT),
                reps=prescription.backoff_rep_range[0],
                rpe_cap=rpe_cap,
                set_count=count,
            )
        ]

    def working_sets(
        self, prescription: Prescription, top_set_weight: float, rpe_cap: float
    ) -> list[PlannedSet]:
        if prescription.progression_type is not ProgressionType.DOUBLE_PROGRESSION:
            return []
        return [
            PlannedSet(
                weight=top_set_weight,
                reps=prescription.top_set_rep_range[0],
                rpe_cap=rpe_cap,
                set_count=self.WORKING_SETS,
            )
        ]
