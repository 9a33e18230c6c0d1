"""
API Request Models

Pydantic models for API request validation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from liftplan.plan_schemas import PlanDuration, ProgramTemplate, WorkoutPrescription
from liftplan.schemas import AthleteProfile, ExerciseLog, ReadinessSnapshot, Sex


class LandmarksRequest(BaseModel):
    """Request model for volume landmark calculation."""

    athlete_profile: AthleteProfile = Field(..., description="Athlete profile")
    muscle_groups: Optional[List[str]] = Field(
        None, description="Muscle groups to compute (default: every catalog group)"
    )
    training_frequency: int = Field(
        default=2, ge=1, description="Sessions per week that train each muscle"
    )


class MesocycleRequest(BaseModel):
    """Request model for mesocycle generation."""

    athlete_profile: AthleteProfile = Field(..., description="Athlete profile")
    days_per_week: Optional[int] = Field(
        None, ge=1, le=7, description="Training days per week (default: profile)"
    )
    mesocycle_length: int = Field(
        default=5, ge=1, le=12, description="Progression weeks before the deload week"
    )
    recent_exercises: List[str] = Field(
        default_factory=list, description="Recently used exercise ids, most recent first"
    )


class ProgramPlanRequest(BaseModel):
    """Request model for rotating a template program into a schedule."""

    program: ProgramTemplate = Field(..., description="Template program")
    duration: PlanDuration = Field(..., description="Plan length in weeks or days")
    start_index: int = Field(default=0, ge=0, description="Template index of the first session")


class AutoregulationRequest(BaseModel):
    """Request model for readiness-based workout adjustment."""

    readiness: ReadinessSnapshot = Field(..., description="Pre-session questionnaire")
    workout: WorkoutPrescription = Field(..., description="Workout as planned")


class ProgressionRequest(BaseModel):
    """Request model for session-to-session progression."""

    exercise_log: ExerciseLog = Field(..., description="Previous session's log")
    athlete_profile: Optional[AthleteProfile] = Field(
        None, description="Athlete profile (sets the weekly progression rate)"
    )


class ExerciseSelectionRequest(BaseModel):
    """Request model for ranked exercise selection."""

    muscle_group: str = Field(..., min_length=1, description="Muscle group to select for")
    count: int = Field(default=2, ge=0, description="Maximum number of exercises")
    weak_muscles: List[str] = Field(default_factory=list)
    recent_exercises: List[str] = Field(
        default_factory=list, description="Recently used exercise ids, most recent first"
    )
    sex: Optional[Sex] = Field(None, description="Athlete sex")


class SubstitutionRequest(BaseModel):
    """Request model for equipment-aware substitution."""

    exercise: str = Field(..., min_length=1, description="Exercise id or name to replace")
    available_equipment: Optional[List[str]] = Field(
        ..., description="Available equipment; an empty list means bodyweight only"
    )
