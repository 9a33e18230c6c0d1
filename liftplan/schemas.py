"""
Pydantic models for training engine inputs.

This module defines the data the engine consumes:
- Athlete Profile: the fields the landmark and recovery formulas depend on
- Exercise Definitions: immutable catalog reference data
- Readiness Snapshot: the pre-session questionnaire
- Set Records and Exercise Logs: completed-session history
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Enumerations
# ============================================================================

class Sex(str, Enum):
    """Biological sex, used by the recovery and selection modifiers."""
    MALE = "male"
    FEMALE = "female"


class Goal(str, Enum):
    """Main objective for the current training block."""
    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"
    GENERAL_FITNESS = "general_fitness"
    FAT_LOSS = "fat_loss"


class ExerciseType(str, Enum):
    """Whether an exercise trains one joint or several."""
    COMPOUND = "compound"
    ISOLATION = "isolation"


class RecoveryCost(str, Enum):
    """How much systemic fatigue an exercise produces."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================================
# Athlete Profile
# ============================================================================


class AthleteProfile(BaseModel):
    """
    Athlete state used by the training engine.

    Owned by the onboarding/profile-edit flows; the engine only reads it.
    The numeric fields used directly in formulas (age, training_months,
    sleep_hours, stress_level) are required.
    """

    athlete_id: str = Field(
        default="athlete",
        pattern=r"^[a-zA-Z0-9_-]+$",
        description="Unique identifier for the athlete"
    )

    age: int = Field(
        ...,
        ge=0,
        description="Age in years"
    )

    sex: Sex = Field(
        ...,
        description="Biological sex"
    )

    training_months: int = Field(
        ...,
        ge=0,
        description="Months of consistent resistance training"
    )

    sleep_hours: float = Field(
        ...,
        ge=0.0,
        description="Average sleep hours per night"
    )

    stress_level: int = Field(
        ...,
        ge=1,
        le=10,
        description="Self-reported life stress (1=none, 10=extreme)"
    )

    days_per_week: int = Field(
        default=4,
        ge=1,
        le=7,
        description="Training days available per week"
    )

    goal: Goal = Field(
        default=Goal.HYPERTROPHY,
        description="Main objective for the current block"
    )

    base_mev: Optional[Dict[str, float]] = Field(
        default=None,
        description="Per-muscle base MEV overrides (sets/week)"
    )

    weak_muscles: List[str] = Field(
        default_factory=list,
        description="Muscle groups the athlete wants to prioritize"
    )

    available_equipment: Optional[List[str]] = Field(
        default=None,
        description="Equipment the athlete can use (None = not specified)"
    )

    @field_validator("base_mev")
    @classmethod
    def validate_base_mev(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        """Keep overrides large enough that MV stays strictly below MEV after rounding."""
        if v is None:
            return v
        for muscle, value in v.items():
            if value < 2:
                raise ValueError(
                    f"Base MEV override for '{muscle}' must be at least 2 sets, got {value}"
                )
        return v


# ============================================================================
# Exercise Catalog Entries
# ============================================================================


class ExerciseDefinition(BaseModel):
    """Immutable catalog entry for a single exercise."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable exercise identifier")
    name: str = Field(..., min_length=1, description="Display name")
    muscle_group: str = Field(..., min_length=1, description="Primary muscle group")
    type: ExerciseType = Field(..., description="Compound or isolation")
    recovery_cost: RecoveryCost = Field(
        default=RecoveryCost.MEDIUM, description="Systemic fatigue cost"
    )
    equipment: List[str] = Field(
        default_factory=list,
        description="Required equipment; empty means bodyweight only"
    )
    movement_pattern: str = Field(
        default="general", description="Movement pattern used for substitution"
    )


# ============================================================================
# Session Inputs
# ============================================================================


class ReadinessSnapshot(BaseModel):
    """Pre-session readiness questionnaire (all ratings 1-10)."""

    sleep_quality: int = Field(..., ge=1, le=10)
    energy_level: int = Field(..., ge=1, le=10)
    motivation: int = Field(..., ge=1, le=10)
    muscle_soreness: int = Field(
        ..., ge=1, le=10, description="Higher means more sore"
    )


class SetRecord(BaseModel):
    """A single completed set logged by the session view."""

    weight: float = Field(default=0.0, ge=0.0, description="Load lifted")
    reps: int = Field(default=0, ge=0, description="Repetitions completed")
    rir: Optional[float] = Field(
        default=None, ge=0.0, description="Reps in reserve reported for the set"
    )
    rpe: Optional[float] = Field(
        default=None, ge=0.0, le=10.0, description="Rate of perceived exertion"
    )
    feedback: Optional[str] = Field(
        default=None, description="Qualitative notes (pump, joint pain, etc.)"
    )


class ExerciseLog(BaseModel):
    """Previous session's record for one exercise, used for progression."""

    exercise_name: str = Field(default="", description="Exercise performed")
    completed_sets: List[SetRecord] = Field(default_factory=list)
    target_rir: float = Field(default=2.0, ge=0.0)
    target_reps: int = Field(default=10, ge=1)
