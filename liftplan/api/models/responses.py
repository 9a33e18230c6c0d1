"""
API Response Models

Pydantic models for API responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from liftplan.plan_schemas import (
    Mesocycle,
    ProgramPlan,
    ProgressionDecision,
    ScoredExercise,
    VolumeLandmarks,
    WorkoutPrescription,
)
from liftplan.schemas import ExerciseDefinition


class LandmarksResponse(BaseModel):
    """Response for POST /api/landmarks."""

    training_age_factor: float = Field(..., description="Training-Age Factor (1.0-3.0)")
    recovery_capacity_score: float = Field(..., description="Recovery-Capacity Score")
    landmarks: List[VolumeLandmarks] = Field(..., description="Landmarks per muscle group")


class MesocycleResponse(BaseModel):
    """Response for POST /api/mesocycles."""

    mesocycle: Mesocycle = Field(..., description="Generated mesocycle")


class ProgramPlanResponse(BaseModel):
    """Response for POST /api/programs."""

    plan: ProgramPlan = Field(..., description="Scheduled program")


class AutoregulationResponse(BaseModel):
    """Response for POST /api/autoregulation."""

    recovery_score: float = Field(..., description="Recovery score (1-10)")
    note: str = Field(..., description="Explanation of the adjustment")
    workout: WorkoutPrescription = Field(..., description="Adjusted workout")


class ProgressionResponse(BaseModel):
    """Response for POST /api/progression."""

    decision: ProgressionDecision = Field(..., description="Next-session targets")


class ExerciseSelectionResponse(BaseModel):
    """Response for POST /api/exercises/select."""

    muscle_group: str
    exercises: List[ScoredExercise] = Field(..., description="Ranked exercises")
    count: int = Field(..., description="Number of exercises returned")


class SubstitutionResponse(BaseModel):
    """Response for POST /api/exercises/substitutions."""

    original: ExerciseDefinition = Field(..., description="Exercise being replaced")
    substitutes: List[ScoredExercise] = Field(..., description="Ranked alternatives")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional details")
