"""
Data schemas for engine output.

This module contains Pydantic models for the structures the engine produces:
volume landmarks, scored exercises, workout prescriptions, mesocycles,
rotated program plans and session-to-session progression decisions.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from liftplan.schemas import ExerciseDefinition, ExerciseType


class ProgressionAction(str, Enum):
    """Outcome of the per-exercise progression state machine."""

    START_FRESH = "start_fresh"  # No history yet
    INCREASE_LOAD = "increase_load"
    HOLD_LOAD = "hold_load"  # Too hard last time
    INCREASE_REPS = "increase_reps"  # Same load, one more rep


class VolumeLandmarks(BaseModel):
    """Weekly set-count landmarks for one muscle group."""

    muscle_group: str = Field(..., description="Muscle group these landmarks apply to")
    training_frequency: int = Field(default=2, ge=1, description="Sessions per week used")
    mv: int = Field(..., ge=0, description="Maintenance volume")
    mev: int = Field(..., ge=0, description="Minimum effective volume")
    mav: int = Field(..., ge=0, description="Maximum adaptive volume")
    mrv: int = Field(..., ge=0, description="Maximum recoverable volume")


class WeeklyVolumeTarget(BaseModel):
    """Target sets for one week of a mesocycle."""

    target_volume: int = Field(..., ge=0)
    deload_volume: int = Field(..., ge=0)
    deload_triggered: bool = Field(default=False)


class ProgressionDecision(BaseModel):
    """Next-session load and rep targets derived from the last session."""

    action: ProgressionAction = Field(..., description="Which progression branch fired")
    target_load: Optional[float] = Field(
        None, description="Load for next session (None when there is no history)"
    )
    target_reps: int = Field(..., ge=1)
    note: str = Field(..., min_length=1, description="Athlete-facing explanation")


class ScoredExercise(BaseModel):
    """Catalog exercise with its priority score for one selection call."""

    exercise: ExerciseDefinition
    score: float


class PrescribedExercise(BaseModel):
    """
    One exercise inside a workout prescription.

    target_reps is either a single rep count or a range string such as "8-10".
    """

    name: str = Field(..., min_length=1)
    muscle_group: Optional[str] = Field(None, description="Primary muscle group")
    exercise_type: Optional[ExerciseType] = Field(None)
    sets: int = Field(..., ge=0, description="Number of working sets")
    target_reps: Union[int, str] = Field(..., description="Rep target or range")
    target_rir: Optional[int] = Field(None, ge=0)
    target_rpe: Optional[float] = Field(None, ge=0.0, le=10.0)

    @field_validator("target_reps")
    @classmethod
    def validate_target_reps(cls, v: Union[int, str]) -> Union[int, str]:
        """Accept positive counts (as ints or digit strings) or 'low-high' range strings."""
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v)
        if isinstance(v, int):
            if v < 1:
                raise ValueError("target_reps must be at least 1")
            return v
        parts = v.split("-")
        if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
            raise ValueError(f"target_reps range must look like '8-10', got '{v}'")
        low, high = int(parts[0]), int(parts[1])
        if low < 1 or high < low:
            raise ValueError(f"Invalid rep range '{v}'")
        return f"{low}-{high}"


class WorkoutPrescription(BaseModel):
    """A single workout: name plus ordered prescribed exercises."""

    name: str = Field(..., min_length=1)
    exercises: List[PrescribedExercise] = Field(default_factory=list)

    def total_sets(self) -> int:
        """Total working sets across all exercises."""
        return sum(exercise.sets for exercise in self.exercises)


class MuscleWeekTarget(BaseModel):
    """Per-muscle weekly volume and effort targets."""

    target_volume: int = Field(..., ge=0)
    target_rpe_compound: float = Field(..., ge=0.0, le=10.0)
    target_rpe_isolation: float = Field(..., ge=0.0, le=10.0)


class TrainingDay(BaseModel):
    """One day of a split within a mesocycle week."""

    name: str = Field(..., min_length=1)
    muscle_groups: List[str] = Field(..., min_length=1)
    exercises: List[PrescribedExercise] = Field(default_factory=list)

    def to_workout(self) -> WorkoutPrescription:
        """View this day as a standalone workout prescription."""
        return WorkoutPrescription(name=self.name, exercises=list(self.exercises))


class PlanDecision(BaseModel):
    """
    Documents a specific decision made during mesocycle generation.

    Used for the exported reasoning trace to explain why certain choices were made.
    """

    decision_point: str = Field(
        ..., min_length=5, description="The decision that was made"
    )
    input_factors: List[str] = Field(
        ..., min_length=1, description="Factors that influenced this decision"
    )
    reasoning: str = Field(
        ..., min_length=20, description="Explanation of why this decision was made"
    )
    outcome: str = Field(
        ..., min_length=5, description="The resulting choice or action taken"
    )


class MesocycleWeek(BaseModel):
    """A week of a mesocycle; the final week is always a deload."""

    week_number: int = Field(..., ge=1)
    is_deload: bool = Field(default=False)
    muscle_targets: Dict[str, MuscleWeekTarget] = Field(default_factory=dict)
    days: List[TrainingDay] = Field(default_factory=list)

    def total_sets(self) -> int:
        """Total working sets prescribed across all days of the week."""
        return sum(exercise.sets for day in self.days for exercise in day.exercises)


class Mesocycle(BaseModel):
    """
    Complete multi-week training block.

    N progression weeks followed by one deload week.
    """

    athlete_id: str = Field(..., min_length=1)
    days_per_week: int = Field(..., ge=1, le=7)
    split_name: str = Field(..., min_length=1)
    weeks: List[MesocycleWeek] = Field(..., min_length=2)
    plan_decisions: List[PlanDecision] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("weeks")
    @classmethod
    def validate_week_sequence(cls, v: List[MesocycleWeek]) -> List[MesocycleWeek]:
        """Weeks are numbered 1..N+1 and only the last one is a deload."""
        for i, week in enumerate(v, start=1):
            if week.week_number != i:
                raise ValueError(
                    f"Week numbering must be sequential. Expected week {i}, got week {week.week_number}"
                )
        if not v[-1].is_deload:
            raise ValueError("The final week of a mesocycle must be a deload week")
        if any(week.is_deload for week in v[:-1]):
            raise ValueError("Only the final week of a mesocycle may be a deload week")
        return v

    @property
    def progression_weeks(self) -> List[MesocycleWeek]:
        return [week for week in self.weeks if not week.is_deload]

    @property
    def deload_week(self) -> MesocycleWeek:
        return self.weeks[-1]

    def get_volume_progression(self, muscle_group: str) -> List[int]:
        """Weekly target volume for one muscle across the block."""
        return [
            week.muscle_targets[muscle_group].target_volume
            for week in self.weeks
            if muscle_group in week.muscle_targets
        ]


# ============================================================================
# Template Programs
# ============================================================================


class ProgramTemplate(BaseModel):
    """Pre-authored program: an ordered list of workouts to rotate through."""

    name: str = Field(..., min_length=1)
    days_per_week: int = Field(..., ge=1, le=7)
    workouts: List[WorkoutPrescription] = Field(default_factory=list)


class PlanDuration(BaseModel):
    """Program length, either in weeks or as a raw number of sessions."""

    type: Literal["weeks", "days"] = Field(default="weeks")
    value: int = Field(..., ge=1)


class ProgramDay(BaseModel):
    """One scheduled session of a rotated program."""

    day: int = Field(..., ge=1, description="Sequential day number (1-based)")
    workout: WorkoutPrescription
    completed: bool = Field(default=False)


class ProgramPlan(BaseModel):
    """Calendar-bound program produced by rotating template workouts."""

    name: str = Field(..., min_length=1)
    duration: PlanDuration
    start_index: int = Field(default=0, ge=0)
    total_sessions: int = Field(..., ge=0)
    days: List[ProgramDay] = Field(default_factory=list)

    def next_session(self) -> Optional[ProgramDay]:
        """First session not yet completed, or None when the program is done."""
        for day in self.days:
            if not day.completed:
                return day
        return None
