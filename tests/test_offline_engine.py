import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from exercise_catalog import DEFAULT_CATALOG
from models import (
    EnergyLevel,
    PainFlag,
    PainSeverity,
    PlanRequestContext,
    Prescription,
    ProgressionType,
    ReadinessInput,
    SessionHistoryEntry,
    StallContext,
    TemplateExercise,
    WeeklyReviewContext,
    WorkoutTemplate,
)
from offline_engine import OfflineDecisionEngine
from settings_schema import SettingsSchema


def history(weight: float, reps: int, rpe: float) -> tuple[SessionHistoryEntry, ...]:
    return (
        SessionHistoryEntry(
            date="2024-03-01",
            top_set_weight=weight,
            top_set_reps=reps,
            top_set_rpe=rpe,
            completed_set_count=3,
            e1rm=weight * (1 + reps / 30),
        ),
    )


def context(**kwargs) -> PlanRequestContext:
    template = WorkoutTemplate(
        name="Push",
        exercises=[
            TemplateExercise(name="Bench Press"),
            TemplateExercise(name="Lateral Raise", is_optional=True),
        ],
    )
    kwargs.setdefault("template", template)
    return PlanRequestContext(**kwargs)


class SessionPlanTest(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = OfflineDecisionEngine()

    def test_deterministic(self) -> None:
        ctx = context(
            recent_history={"Bench Press": history(100, 5, 7.5)},
            pain_flags=[PainFlag(body_part="shoulders", severity=PainSeverity.MODERATE)],
        )
        first = self.engine.generate_session_plan(ctx)
        second = self.engine.generate_session_plan(ctx)
        self.assertEqual(first.model_dump_json(), second.model_dump_json())

    def test_no_history_plan(self) -> None:
        plan = self.engine.generate_session_plan(context())
        bench = plan.exercises[0]
        self.assertEqual(bench.exercise_name, "Bench Press")
        self.assertEqual(bench.warmup_sets, ())
        self.assertEqual((bench.top_set.weight, bench.top_set.reps), (20.0, 4))
        self.assertEqual(bench.backoff_sets[0].weight, 17.5)
        self.assertEqual(bench.backoff_sets[0].set_count, 2)

    def test_duration_counts_every_set(self) -> None:
        plan = self.engine.generate_session_plan(context())
        total = sum(e.total_sets for e in plan.exercises)
        self.assertEqual(plan.estimated_duration, total * 3)
        engine = OfflineDecisionEngine(minutes_per_set=4)
        self.assertEqual(engine.generate_session_plan(context()).estimated_duration, total * 4)

    def test_optional_skipped_when_short_on_time(self) -> None:
        ctx = context(readiness=ReadinessInput(time_available_minutes=45))
        with self.assertLogs("offline_engine", level="INFO"):
            plan = self.engine.generate_session_plan(ctx)
        self.assertEqual([e.exercise_name for e in plan.exercises], ["Bench Press"])
        self.assertIn("Skipped optional Lateral Raise due to time constraint", plan.reasoning)

    def test_optional_kept_with_time(self) -> None:
        plan = self.engine.generate_session_plan(context())
        self.assertEqual(len(plan.exercises), 2)

    def test_history_drives_top_set(self) -> None:
        ctx = context(recent_history={"Bench Press": history(100, 6, 7.5)})
        plan = self.engine.generate_session_plan(ctx)
        bench = plan.exercises[0]
        self.assertEqual(bench.top_set.weight, 102.5)
        self.assertEqual(len(bench.warmup_sets), 4)
        self.assertIn("Bench Press: Last 100.0kg x 6", plan.reasoning)

    def test_reduced_intensity(self) -> None:
        ctx = context(readiness=ReadinessInput(energy=EnergyLevel.LOW))
        plan = self.engine.generate_session_plan(ctx)
        self.assertEqual(plan.adjustments[0], "Reduced intensity due to Low energy / None soreness")
        self.assertEqual(plan.exercises[0].top_set.rpe_cap, 7.5)
        self.assertEqual(plan.exercises[0].backoff_sets[0].set_count, 1)

    def test_pain_substitution(self) -> None:
        ctx = context(pain_flags=[PainFlag(body_part="chest", severity=PainSeverity.MILD)])
        plan = self.engine.generate_session_plan(ctx)
        self.assertEqual(len(plan.substitutions), 1)
        sub = plan.substitutions[0]
        self.assertEqual((sub.from_exercise, sub.to_exercise), ("Bench Press", "Barbell Squat"))
        self.assertEqual(plan.exercises[0].exercise_name, "Barbell Squat")
        self.assertIn("Pain-aware plan: avoiding exercises targeting chest", plan.adjustments)
        self.assertIn("Substituted Bench Press → Barbell Squat due to pain", plan.reasoning)
        self.assertEqual(sub.to_payload()["from"], "Bench Press")

    def test_planned_exercises_avoid_painful_parts(self) -> None:
        for part in ("chest", "shoulders", "arms"):
            ctx = context(pain_flags=[PainFlag(body_part=part, severity=PainSeverity.SEVERE)])
            plan = self.engine.generate_session_plan(ctx)
            for exercise in plan.exercises:
                descriptor = DEFAULT_CATALOG.get(exercise.exercise_name)
                self.assertNotIn(part, descriptor.targeted_body_parts)

    def test_double_progression(self) -> None:
        presc = Prescription(progression_type=ProgressionType.DOUBLE_PROGRESSION)
        template = WorkoutTemplate(name="A", exercises=[TemplateExercise(name="Dumbbell Row", prescription=presc)])
        plan = self.engine.generate_session_plan(context(template=template))
        row = plan.exercises[0]
        self.assertIsNone(row.top_set)
        self.assertEqual(row.backoff_sets, ())
        self.assertEqual(row.working_sets[0].set_count, 3)

    def test_double_progression_ignores_working_set_count(self) -> None:
        presc = Prescription(
            progression_type=ProgressionType.DOUBLE_PROGRESSION, working_set_count=0
        )
        template = WorkoutTemplate(name="A", exercises=[TemplateExercise(name="Leg Press", prescription=presc)])
        plan = self.engine.generate_session_plan(context(template=template))
        leg_press = plan.exercises[0]
        self.assertEqual([(s.weight, s.reps, s.set_count) for s in leg_press.working_sets], [(20.0, 4, 3)])
        self.assertEqual(plan.estimated_duration, 9)

    def test_straight_sets_only_warm_up(self) -> None:
        presc = Prescription(progression_type=ProgressionType.STRAIGHT_SETS)
        template = WorkoutTemplate(name="A", exercises=[TemplateExercise(name="Deadlift", prescription=presc)])
        ctx = context(template=template, recent_history={"Deadlift": history(100, 5, 7.5)})
        deadlift = self.engine.generate_session_plan(ctx).exercises[0]
        self.assertIsNone(deadlift.top_set)
        self.assertEqual(deadlift.working_sets, ())
        self.assertEqual(deadlift.total_sets, 4)

    def test_from_settings(self) -> None:
        engine = OfflineDecisionEngine.from_settings(
            SettingsSchema(baseline_weight=30.0, minutes_per_set=2)
        )
        plan = engine.generate_session_plan(context())
        self.assertEqual(plan.exercises[0].top_set.weight, 30.0)
        self.assertEqual(engine.MINUTES_PER_SET, 2)


class OtherOperationsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = OfflineDecisionEngine()

    def test_stall(self) -> None:
        report = self.engine.analyze_stall(StallContext(exercise_name="Bench Press"))
        self.assertFalse(report.is_stalled)

    def test_weekly_review(self) -> None:
        review = self.engine.generate_weekly_review(WeeklyReviewContext(workout_count=3))
        self.assertEqual(review.consistency_score, 7)


if __name__ == "__main__":
    unittest.main()
