from __future__ import annotations
import logging
from typing import Optional

from algorithms import (
    InsightGenerator,
    ProgressionCalculator,
    StallDetector,
    SubstitutionResolver,
    WeeklyReviewSynthesizer,
)
from exercise_catalog import DEFAULT_CATALOG, ExerciseCatalog
from models import (
    Insight,
    PlanRequestContext,
    PlannedExercise,
    PlannedSet,
    ProgressionType,
    ReadinessInput,
    SessionHistoryEntry,
    SessionPlan,
    SessionSummary,
    StallContext,
    StallReport,
    Substitution,
    TemplateExercise,
    WeeklyReview,
    WeeklyReviewContext,
)

logger = logging.getLogger(__name__)


class OfflineDecisionEngine:
    """Deterministic rule-based coach used offline and as remote fallback."""

    MINUTES_PER_SET: int = 3
    OPTIONAL_CUTOFF_MINUTES: int = 45

    def __init__(
        self,
        catalog: ExerciseCatalog | None = None,
        progression: ProgressionCalculator | None = None,
        minutes_per_set: Optional[int] = None,
    ) -> None:
        self.catalog = catalog or DEFAULT_CATALOG
        self.progression = progression or ProgressionCalculator()
        self.resolver = SubstitutionResolver(self.catalog)
        self.stalls = StallDetector(self.catalog)
        self.insights = InsightGenerator()
        self.reviews = WeeklyReviewSynthesizer()
        if minutes_per_set is not None:
            self.MINUTES_PER_SET = minutes_per_set

    @classmethod
    def from_settings(cls, settings) -> "OfflineDecisionEngine":
        progression = ProgressionCalculator(
            bar_weight=settings.bar_weight,
            weight_increment=settings.weight_increment,
            baseline_weight=settings.baseline_weight,
        )
        return cls(progression=progression, minutes_per_set=settings.minutes_per_set)

    def generate_session_plan(self, context: PlanRequestContext) -> SessionPlan:
        readiness = context.readiness
        adjustments: list[str] = []
        reasoning: list[str] = []
        substitutions: list[Substitution] = []
        exercises: list[PlannedExercise] = []

        if readiness.reduce_intensity:
            adjustments.append(
                f"Reduced intensity due to {readiness.energy.value} energy / "
                f"{readiness.soreness.value} soreness"
            )
        pain_parts = sorted({f.body_part.strip().lower() for f in context.pain_flags})
        if pain_parts:
            adjustments.append(
                f"Pain-aware plan: avoiding exercises targeting {', '.join(pain_parts)}"
            )

        for item in context.template.exercises:
            if item.is_optional and readiness.time_available_minutes <= self.OPTIONAL_CUTOFF_MINUTES:
                logger.info("skipping optional %s: only %d minutes", item.name, readiness.time_available_minutes)
                reasoning.append(f"Skipped optional {item.name} due to time constraint")
                continue

            name = item.name
            swap = self.resolver.resolve(name, context.pain_flags)
            if swap is not None:
                substitute, reason = swap
                substitutions.append(
                    Substitution(from_exercise=name, to_exercise=substitute, reason=reason)
                )
                reasoning.append(f"Substituted {name} → {substitute} due to pain")
                name = substitute

            history = context.history_for(name)
            exercises.append(self._plan_exercise(name, item, history, readiness))
            if history:
                last = history[0]
                reasoning.append(f"{name}: Last {last.top_set_weight}kg x {last.top_set_reps}")

        return SessionPlan(
            exercises=exercises,
            substitutions=substitutions,
            adjustments=adjustments,
            reasoning=reasoning,
            estimated_duration=self.estimate_duration(exercises),
        )

    def _plan_exercise(
        self,
        name: str,
        item: TemplateExercise,
        history: tuple[SessionHistoryEntry, ...],
        readiness: ReadinessInput,
    ) -> PlannedExercise:
        prescription = item.prescription
        calc = self.progression
        weight, reps = calc.top_set_target(prescription, history, readiness)
        rpe_cap = calc.session_rpe_cap(prescription, readiness)
        top_set = None
        if prescription.progression_type is ProgressionType.TOP_SET_BACKOFF:
            top_set = PlannedSet(weight=weight, reps=reps, rpe_cap=rpe_cap, set_count=1)
        return PlannedExercise(
            exercise_name=name,
            warmup_sets=calc.warmups(weight),
            top_set=top_set,
            backoff_sets=calc.backoffs(prescription, weight, rpe_cap, readiness),
            working_sets=calc.working_sets(prescription, weight, rpe_cap),
        )

    def estimate_duration(self, exercises: list[PlannedExercise]) -> int:
        return sum(e.total_sets for e in exercises) * self.MINUTES_PER_SET

    def generate_insight(self, session: SessionSummary) -> Insight:
        return self.insights.generate(session)

    def analyze_stall(self, context: StallContext) -> StallReport:
        return self.stalls.analyze(context)

    def generate_weekly_review(self, context: WeeklyReviewContext) -> WeeklyReview:
        return self.reviews.review(context)
