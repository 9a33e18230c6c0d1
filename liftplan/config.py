"""
Tunable constants for the training engine.

Every table and threshold used by the landmark, progression, selection,
autoregulation, mesocycle and substitution logic lives here as a Pydantic
model with defaults, so a single JSON file (or a test) can override any of
them without touching the engine code.
"""

import json
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, Field


# ============================================================================
# Volume Landmarks
# ============================================================================


class LandmarkConfig(BaseModel):
    """Base tables and multipliers for MV/MEV/MAV/MRV derivation."""

    base_mev: Dict[str, float] = Field(
        default_factory=lambda: {
            "chest": 8,
            "back": 10,
            "shoulders": 8,
            "arms": 6,
            "biceps": 6,
            "triceps": 6,
            "legs": 14,
            "glutes": 10,
            "neck & traps": 6,
        },
        description="Baseline minimum effective volume (sets/week) per muscle group",
    )
    default_base_mev: float = Field(
        default=8.0, gt=0, description="Base MEV for muscle groups missing from the table"
    )
    muscle_size_factor: Dict[str, float] = Field(
        default_factory=lambda: {
            "arms": 0.0,
            "biceps": 0.0,
            "triceps": 0.0,
            "calves": 0.0,
            "chest": 0.2,
            "shoulders": 0.2,
            "back": 0.4,
            "legs": 0.4,
            "quads": 0.4,
            "glutes": 0.3,
            "neck & traps": 0.1,
        },
        description="Relative muscle size bonus applied to base MEV",
    )
    default_size_factor: float = Field(default=0.2, ge=0.0)
    frequency_factors: Dict[int, float] = Field(
        default_factory=lambda: {1: 0.8, 2: 1.0, 3: 1.2, 4: 1.2, 5: 1.3, 6: 1.4},
        description="MRV multiplier keyed by sessions per week for the muscle",
    )
    default_frequency_factor: float = Field(default=1.3, gt=0)

    # Training-age factor
    taf_rate_per_year: float = Field(default=0.1, ge=0.0)
    taf_cap: float = Field(default=3.0, ge=1.0)
    taf_mev_exponent: float = Field(default=0.3)

    # Recovery-capacity score
    female_recovery_modifier: float = Field(default=1.15, gt=0)
    age_modifier_ceiling: float = Field(default=1.2)
    age_modifier_floor: float = Field(default=0.7)
    age_modifier_decline_per_year: float = Field(default=0.005)
    reference_age: int = Field(default=18)
    sleep_reference_hours: float = Field(default=8.0, gt=0)
    sleep_modifier_cap: float = Field(default=1.2)

    # Landmark shape
    mrv_base_multiplier: float = Field(default=2.5)
    mav_blend_toward_mrv: float = Field(default=0.7, ge=0.0, le=1.0)
    mv_fraction_of_mev: float = Field(default=0.6, gt=0.0, lt=1.0)

    # Long-term base MEV adaptation between blocks, keyed by TAF band
    novice_adaptation_rate: float = Field(default=0.05)
    intermediate_adaptation_rate: float = Field(default=0.025)
    advanced_adaptation_rate: float = Field(default=0.01)
    intermediate_taf_threshold: float = Field(default=2.5)


# ============================================================================
# Progression and Intensity
# ============================================================================


class ProgressionConfig(BaseModel):
    """Week-to-week volume progression and session-to-session load rules."""

    novice_taf_threshold: float = Field(
        default=1.5, description="TAF below this progresses at the novice rate"
    )
    novice_weekly_rate: float = Field(default=0.10, ge=0.0)
    experienced_weekly_rate: float = Field(default=0.05, ge=0.0)
    deload_trigger_ratio: float = Field(
        default=0.95, gt=0.0, le=1.0,
        description="Week volume at or above this share of max volume triggers a deload",
    )
    deload_volume_ratio: float = Field(default=0.6, gt=0.0, le=1.0)

    load_step_percent: float = Field(
        default=0.025, ge=0.0, lt=1.0,
        description="Proportional load change used by suggest_load_progression",
    )
    rir_tolerance: float = Field(default=1.0, ge=0.0)
    rpe_tolerance: float = Field(default=0.5, ge=0.0)

    load_increment: float = Field(
        default=5.0, ge=0.0,
        description="Fixed load increase (lb) used by calculate_progression",
    )
    rep_range_width: int = Field(
        default=2, ge=0, description="Upper rep target = base target + width"
    )
    default_target_rir: float = Field(default=2.0)
    default_target_reps: int = Field(default=10, ge=1)


class IntensityConfig(BaseModel):
    """Target RIR/RPE by exercise type, shifted by accumulated fatigue."""

    compound_base_rir: int = Field(default=2)
    isolation_base_rir: int = Field(default=1)
    rir_fatigue_step: int = Field(default=1)

    compound_base_rpe: float = Field(default=8.0)
    isolation_base_rpe: float = Field(default=8.5)
    rpe_fatigue_step: float = Field(default=0.5)

    high_fatigue_ratio: float = Field(
        default=0.8, description="current_volume / mrv above this pushes effort harder"
    )
    low_fatigue_ratio: float = Field(
        default=0.4, description="current_volume / mrv below this relaxes effort"
    )


# ============================================================================
# Exercise Selection and Substitution
# ============================================================================


class SelectionConfig(BaseModel):
    """Weights of the exercise priority score."""

    compound_bonus: float = Field(default=3.0)
    isolation_bonus: float = Field(default=1.0)
    weakness_multiplier: float = Field(default=1.5)
    novelty_unused: float = Field(default=2.0)
    novelty_stale: float = Field(default=1.0)
    novelty_recent: float = Field(default=0.0)
    recency_window: int = Field(
        default=4, ge=0,
        description="Exercises at index <= this in the recent list count as recent",
    )
    recovery_cost_terms: Dict[str, float] = Field(
        default_factory=lambda: {"high": -1.0, "medium": 0.0, "low": 1.0}
    )
    female_emphasis_modifier: float = Field(default=1.2)
    female_emphasis_muscles: List[str] = Field(
        default_factory=lambda: ["glutes", "hamstrings"]
    )


class SubstitutionConfig(BaseModel):
    """Ranking weights for equipment-aware exercise substitution."""

    same_pattern_score: float = Field(default=10.0)
    same_muscle_score: float = Field(default=5.0)
    same_type_score: float = Field(default=2.0)
    max_results: int = Field(default=5, ge=1)


# ============================================================================
# Autoregulation
# ============================================================================


class AutoregulationConfig(BaseModel):
    """Readiness thresholds and the adjustments they trigger."""

    soreness_inversion_base: int = Field(default=11)
    low_readiness_threshold: float = Field(default=6.0)
    high_readiness_threshold: float = Field(default=8.0)
    min_sets_to_drop: int = Field(
        default=3, description="Exercises with more sets than this lose one when readiness is low"
    )
    rep_reduction: int = Field(default=2, ge=0)
    rep_floor: int = Field(default=5, ge=1)
    rep_increase: int = Field(default=1, ge=0)
    default_compound_rir: int = Field(default=2)
    default_isolation_rir: int = Field(default=3)


# ============================================================================
# Mesocycle
# ============================================================================


class SplitDay(BaseModel):
    """A named day of a weekly split and the muscle groups it trains."""

    name: str = Field(..., min_length=1)
    muscle_groups: List[str] = Field(..., min_length=1)


def _default_splits() -> Dict[int, List[SplitDay]]:
    return {
        3: [
            SplitDay(name="Full Body A", muscle_groups=["chest", "back", "quads"]),
            SplitDay(name="Full Body B", muscle_groups=["shoulders", "hamstrings", "glutes", "biceps"]),
            SplitDay(name="Full Body C", muscle_groups=["chest", "back", "quads", "triceps"]),
        ],
        4: [
            SplitDay(name="Upper A", muscle_groups=["chest", "back", "shoulders"]),
            SplitDay(name="Lower A", muscle_groups=["quads", "hamstrings", "calves"]),
            SplitDay(name="Upper B", muscle_groups=["chest", "back", "biceps", "triceps"]),
            SplitDay(name="Lower B", muscle_groups=["glutes", "hamstrings", "quads"]),
        ],
        5: [
            SplitDay(name="Push", muscle_groups=["chest", "shoulders", "triceps"]),
            SplitDay(name="Pull", muscle_groups=["back", "biceps"]),
            SplitDay(name="Legs", muscle_groups=["quads", "hamstrings", "calves"]),
            SplitDay(name="Upper", muscle_groups=["chest", "back", "shoulders"]),
            SplitDay(name="Lower", muscle_groups=["glutes", "hamstrings", "quads"]),
        ],
        6: [
            SplitDay(name="Push A", muscle_groups=["chest", "shoulders", "triceps"]),
            SplitDay(name="Pull A", muscle_groups=["back", "biceps"]),
            SplitDay(name="Legs A", muscle_groups=["quads", "hamstrings", "calves"]),
            SplitDay(name="Push B", muscle_groups=["chest", "shoulders", "triceps"]),
            SplitDay(name="Pull B", muscle_groups=["back", "biceps", "forearms"]),
            SplitDay(name="Legs B", muscle_groups=["glutes", "hamstrings", "quads"]),
        ],
    }


class MesocycleConfig(BaseModel):
    """Split tables and block-structure constants for mesocycle generation."""

    splits: Dict[int, List[SplitDay]] = Field(default_factory=_default_splits)
    split_names: Dict[int, str] = Field(
        default_factory=lambda: {
            3: "Full Body",
            4: "Upper/Lower",
            5: "Push/Pull/Legs + Upper/Lower",
            6: "Push/Pull/Legs",
        }
    )
    fallback_days_per_week: int = Field(default=4)
    default_length_weeks: int = Field(default=5, ge=1, le=12)
    starting_volume_multiplier: float = Field(default=1.1, gt=0)
    high_volume_threshold: int = Field(
        default=12, description="Weekly target above this selects 3 exercises instead of 2"
    )
    high_volume_exercise_count: int = Field(default=3, ge=1)
    default_exercise_count: int = Field(default=2, ge=1)

    male_compound_reps: int = Field(default=8)
    female_compound_reps: int = Field(default=10)
    isolation_reps: int = Field(default=12)
    male_compound_rep_range: str = Field(default="6-8")
    female_compound_rep_range: str = Field(default="8-10")
    isolation_rep_range: str = Field(default="10-15")

    deload_mev_ratio: float = Field(default=0.6, gt=0.0, le=1.0)
    deload_rpe_compound: float = Field(default=7.0)
    deload_rpe_isolation: float = Field(default=7.5)
    deload_rir: int = Field(default=3)
    deload_compound_reps: int = Field(default=8)
    deload_isolation_reps: int = Field(default=12)


# ============================================================================
# Engine Configuration (Main)
# ============================================================================


class EngineConfig(BaseModel):
    """Complete set of tunable engine constants."""

    landmarks: LandmarkConfig = Field(default_factory=LandmarkConfig)
    progression: ProgressionConfig = Field(default_factory=ProgressionConfig)
    intensity: IntensityConfig = Field(default_factory=IntensityConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    autoregulation: AutoregulationConfig = Field(default_factory=AutoregulationConfig)
    mesocycle: MesocycleConfig = Field(default_factory=MesocycleConfig)
    substitution: SubstitutionConfig = Field(default_factory=SubstitutionConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "EngineConfig":
        """
        Load engine configuration overrides from a JSON file.

        Sections or fields missing from the file keep their defaults.

        Args:
            config_path: Path to configuration JSON file

        Returns:
            EngineConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON does not match the configuration schema
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Engine config file not found: {config_path}")

        with open(config_path, "r") as f:
            data = json.load(f)

        try:
            return cls(**data)
        except Exception as e:
            raise ValueError(f"Invalid engine config file: {e}")


DEFAULT_CONFIG = EngineConfig()
