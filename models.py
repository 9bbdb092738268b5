from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CoachModel(BaseModel):
    """Immutable value object with camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_payload(self) -> dict:
        """Return the JSON-ready dict using the wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


class Goal(str, Enum):
    STRENGTH = "Strength"
    HYPERTROPHY = "Hypertrophy"
    BOTH = "Both"


class Location(str, Enum):
    GYM = "Gym"
    HOME = "Home"
    MIXED = "Mixed"


class EnergyLevel(str, Enum):
    LOW = "Low"
    OK = "OK"
    HIGH = "High"


class SorenessLevel(str, Enum):
    NONE = "None"
    MILD = "Mild"
    HIGH = "High"


class PainSeverity(str, Enum):
    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"


class ProgressionType(str, Enum):
    TOP_SET_BACKOFF = "Top Set + Backoffs"
    DOUBLE_PROGRESSION = "Double Progression"
    STRAIGHT_SETS = "Straight Sets"


class FixType(str, Enum):
    DELOAD = "deload"
    REP_RANGE = "rep_range"
    VARIATION = "variation"
    VOLUME = "volume"


class InsightCategory(str, Enum):
    PROGRESS = "progress"
    FATIGUE = "fatigue"
    TECHNIQUE = "technique"
    VOLUME = "volume"


class Provider(str, Enum):
    CLAUDE = "claude"
    OPENAI = "openai"
    OFFLINE = "offline"


def _check_range(value: tuple[int, int]) -> tuple[int, int]:
    low, high = value
    if low < 0 or low > high:
        raise ValueError(f"invalid rep range {low}-{high}")
    return value


# --- request side ---


class ReadinessInput(CoachModel):
    energy: EnergyLevel = EnergyLevel.OK
    soreness: SorenessLevel = SorenessLevel.NONE
    time_available_minutes: int = Field(default=60, ge=0)

    @property
    def reduce_intensity(self) -> bool:
        return self.energy is EnergyLevel.LOW or self.soreness is SorenessLevel.HIGH

    @property
    def increase_intensity(self) -> bool:
        return self.energy is EnergyLevel.HIGH and self.soreness is SorenessLevel.NONE


class Prescription(CoachModel):
    progression_type: ProgressionType = ProgressionType.TOP_SET_BACKOFF
    top_set_rep_range: tuple[int, int] = (4, 6)
    top_set_rpe_cap: float = Field(default=8.0, ge=1.0, le=10.0, alias="topSetRPECap")
    backoff_set_count: int = Field(default=2, ge=0)
    backoff_rep_range: tuple[int, int] = (6, 8)
    backoff_load_drop_fraction: float = Field(default=0.1, ge=0.0, lt=1.0)
    working_set_count: int = Field(default=3, ge=0)

    @field_validator("top_set_rep_range", "backoff_rep_range")
    @classmethod
    def check_rep_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        return _check_range(value)


class SessionHistoryEntry(CoachModel):
    date: str
    top_set_weight: float = Field(ge=0.0)
    top_set_reps: int = Field(ge=0)
    top_set_rpe: Optional[float] = Field(default=None, alias="topSetRPE")
    completed_set_count: int = Field(default=0, ge=0)
    e1rm: float = Field(ge=0.0, alias="e1RM")


class PainFlag(CoachModel):
    body_part: str
    severity: PainSeverity
    exercise_name: Optional[str] = None


class ExerciseDescriptor(CoachModel):
    name: str
    targeted_body_parts: frozenset[str]
    movement_pattern: str
    is_compound: bool


class TemplateExercise(CoachModel):
    name: str
    prescription: Prescription = Prescription()
    is_optional: bool = False


class WorkoutTemplate(CoachModel):
    name: str
    exercises: tuple[TemplateExercise, ...] = ()


class PlanRequestContext(CoachModel):
    goal: Goal = Goal.BOTH
    template: WorkoutTemplate
    location: Location = Location.GYM
    readiness: ReadinessInput = ReadinessInput()
    recent_history: dict[str, tuple[SessionHistoryEntry, ...]] = Field(default_factory=dict)
    equipment_available: tuple[str, ...] = ()
    pain_flags: tuple[PainFlag, ...] = ()

    def history_for(self, exercise_name: str) -> tuple[SessionHistoryEntry, ...]:
        return self.recent_history.get(exercise_name, ())


class SetSummary(CoachModel):
    weight: float
    reps: int
    rpe: Optional[float] = None
    target_reps: int


class ExerciseSummary(CoachModel):
    name: str
    top_set: Optional[SetSummary] = None
    backoff_sets: tuple[SetSummary, ...] = ()
    target_hit: bool = True
    e1rm: float = Field(alias="e1RM")
    previous_e1rm: Optional[float] = Field(default=None, alias="previousE1RM")


class SessionSummary(CoachModel):
    template_name: str
    exercises: tuple[ExerciseSummary, ...] = ()
    readiness: ReadinessInput = ReadinessInput()
    total_volume: float = 0.0
    duration: int = 0


class StallContext(CoachModel):
    exercise_name: str
    last_sessions: tuple[SessionHistoryEntry, ...] = ()
    current_prescription: Prescription = Prescription()
    goal: Goal = Goal.BOTH


class WeeklyExerciseHighlight(CoachModel):
    exercise_name: str
    sessions: int = 0
    best_e1rm: float = Field(alias="bestE1RM")
    previous_best_e1rm: Optional[float] = Field(default=None, alias="previousBestE1RM")
    total_volume: float = 0.0

    @property
    def is_pr(self) -> bool:
        return self.previous_best_e1rm is not None and self.best_e1rm > self.previous_best_e1rm


class WeeklyReviewContext(CoachModel):
    workout_count: int = Field(ge=0)
    total_volume: float = 0.0
    average_duration: int = 0
    exercise_highlights: tuple[WeeklyExerciseHighlight, ...] = ()
    goal: Goal = Goal.BOTH


class AvailableExercise(CoachModel):
    name: str
    movement_pattern: str
    primary_muscles: tuple[str, ...] = ()
    is_compound: bool = False
    equipment_required: tuple[str, ...] = ()


class CustomWorkoutRequest(CoachModel):
    user_prompt: str
    available_exercises: tuple[AvailableExercise, ...] = ()
    equipment_available: tuple[str, ...] = ()
    goal: Goal = Goal.BOTH
    location: Location = Location.GYM
    time_available_minutes: int = 60
    recent_exercise_history: dict[str, float] = Field(default_factory=dict)


class MultiWeekPlanRequest(CoachModel):
    goal: Goal = Goal.BOTH
    duration_weeks: int = Field(default=8, ge=1, le=52)
    days_per_week: int = Field(default=4, ge=1, le=7)
    split: str = "Upper/Lower"
    equipment: tuple[str, ...] = ()
    include_deloads: bool = True
    focus_areas: tuple[str, ...] = ()


# --- response side ---


class PlannedSet(CoachModel):
    weight: float
    reps: int
    rpe_cap: Optional[float] = None
    set_count: int = 1


class PlannedExercise(CoachModel):
    exercise_name: str
    warmup_sets: tuple[PlannedSet, ...] = ()
    top_set: Optional[PlannedSet] = None
    backoff_sets: tuple[PlannedSet, ...] = ()
    working_sets: tuple[PlannedSet, ...] = ()

    @property
    def total_sets(self) -> int:
        total = sum(s.set_count for s in self.warmup_sets)
        total += self.top_set.set_count if self.top_set is not None else 0
        total += sum(s.set_count for s in self.backoff_sets)
        total += sum(s.set_count for s in self.working_sets)
        return total


class Substitution(CoachModel):
    from_exercise: str = Field(alias="from")
    to_exercise: str = Field(alias="to")
    reason: str


class SessionPlan(CoachModel):
    exercises: tuple[PlannedExercise, ...] = ()
    substitutions: tuple[Substitution, ...] = ()
    adjustments: tuple[str, ...] = ()
    reasoning: tuple[str, ...] = ()
    estimated_duration: int = 0


class Insight(CoachModel):
    insight: str
    action: str
    category: InsightCategory


class StallReport(CoachModel):
    is_stalled: bool
    reason: Optional[str] = None
    suggested_fix: Optional[str] = None
    fix_type: Optional[FixType] = None
    details: Optional[str] = None


class WeeklyReview(CoachModel):
    summary: str
    highlights: tuple[str, ...] = ()
    areas_to_improve: tuple[str, ...] = ()
    recommendation: str
    consistency_score: int = Field(ge=1, le=10)


class CustomExercisePlan(CoachModel):
    exercise_name: str
    sets: int
    reps: str
    rpe_cap: float
    notes: Optional[str] = None
    suggested_weight: Optional[float] = None
    movement_pattern: Optional[str] = None
    primary_muscles: Optional[tuple[str, ...]] = None
    is_compound: Optional[bool] = None
    equipment_required: Optional[tuple[str, ...]] = None
    youtube_video_url: Optional[str] = Field(default=None, alias="youtubeVideoURL")

    @property
    def reps_min(self) -> int:
        head = self.reps.split("-")[0].strip()
        return int(head) if head.isdigit() else 8

    @property
    def reps_max(self) -> int:
        tail = self.reps.split("-")[-1].strip()
        return int(tail) if tail.isdigit() else 10


class CustomWorkout(CoachModel):
    workout_name: str
    exercises: tuple[CustomExercisePlan, ...] = ()
    reasoning: str = ""
    estimated_duration: int = 0
    focus_areas: tuple[str, ...] = ()


class GeneratedExercise(CoachModel):
    exercise_name: str
    sets: int
    reps_min: int
    reps_max: int
    rpe: Optional[float] = None
    notes: Optional[str] = None


class GeneratedWorkout(CoachModel):
    day_number: int = Field(ge=1, le=7)
    name: str
    exercises: tuple[GeneratedExercise, ...] = ()
    target_duration: int = 0


class GeneratedWeek(CoachModel):
    week_number: int
    week_type: str = "regular"
    workouts: tuple[GeneratedWorkout, ...] = ()
    week_notes: Optional[str] = None


class MultiWeekPlan(CoachModel):
    plan_name: str
    description: str = ""
    weeks: tuple[GeneratedWeek, ...] = ()
    coaching_notes: str = ""
