"""
Daily autoregulation.

Turns the pre-session readiness questionnaire into a recovery score and
adjusts the day's planned workout to match it.
"""

import logging
from typing import Optional, Tuple, Union

from liftplan.catalog import ExerciseCatalog
from liftplan.config import DEFAULT_CONFIG, EngineConfig
from liftplan.plan_schemas import PrescribedExercise, WorkoutPrescription
from liftplan.schemas import ExerciseType, ReadinessSnapshot

logger = logging.getLogger(__name__)

LOW_READINESS_NOTE = "Readiness is low. Volume reduced by 20% and intensity reduced."
HIGH_READINESS_NOTE = "Feeling great! Increasing intensity slightly."
NEUTRAL_NOTE = "Workout is as planned."


class AutoregulationUnit:
    """
    Readiness scoring and workout adjustment.

    The catalog is only used to fill in missing muscle group and exercise
    type on prescriptions that were authored by hand.
    """

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG
        self.rules = self.config.autoregulation

    def recovery_score(self, readiness: ReadinessSnapshot) -> float:
        """Mean of sleep, energy, motivation and inverted soreness (1-10 scale)."""
        soreness_inverse = self.rules.soreness_inversion_base - readiness.muscle_soreness
        return (
            readiness.sleep_quality
            + readiness.energy_level
            + readiness.motivation
            + soreness_inverse
        ) / 4.0

    def adjust_workout(
        self, planned: WorkoutPrescription, recovery_score: float
    ) -> Tuple[WorkoutPrescription, str]:
        """
        Adjust a planned workout to today's recovery score.

        Below 6: exercises with more than 3 sets lose their last set and rep
        targets drop by 2 (never below 5). Above 8: rep targets rise by 1.
        Otherwise the plan is unchanged. The planned workout is never mutated.

        Args:
            planned: Workout as planned
            recovery_score: Output of recovery_score()

        Returns:
            Tuple of (adjusted workout, athlete-facing note)
        """
        adjusted = planned.model_copy(deep=True)
        r = self.rules

        if recovery_score < r.low_readiness_threshold:
            note = LOW_READINESS_NOTE
            for exercise in adjusted.exercises:
                if exercise.sets > r.min_sets_to_drop:
                    exercise.sets -= 1
                exercise.target_reps = _shift_reps(
                    exercise.target_reps, -r.rep_reduction, floor=r.rep_floor
                )
        elif recovery_score > r.high_readiness_threshold:
            note = HIGH_READINESS_NOTE
            for exercise in adjusted.exercises:
                exercise.target_reps = _shift_reps(exercise.target_reps, r.rep_increase)
        else:
            note = NEUTRAL_NOTE

        for exercise in adjusted.exercises:
            self._backfill(exercise)

        logger.info(
            "Adjusted '%s' for recovery score %.2f: %s", planned.name, recovery_score, note
        )
        return adjusted, note

    def _backfill(self, exercise: PrescribedExercise) -> None:
        """Fill muscle group, type and default RIR where the prescription left them unset."""
        definition = self.catalog.find_by_name(exercise.name) if self.catalog else None
        if definition is not None:
            if exercise.muscle_group is None:
                exercise.muscle_group = definition.muscle_group
            if exercise.exercise_type is None:
                exercise.exercise_type = definition.type

        if exercise.target_rir is None:
            if exercise.exercise_type == ExerciseType.COMPOUND:
                exercise.target_rir = self.rules.default_compound_rir
            else:
                exercise.target_rir = self.rules.default_isolation_rir


def _shift_reps(
    target_reps: Union[int, str], delta: int, floor: Optional[int] = None
) -> Union[int, str]:
    """Shift a rep count, or both bounds of a 'low-high' range, by delta."""

    def shift(value: int) -> int:
        value += delta
        if floor is not None:
            value = max(floor, value)
        return value

    if isinstance(target_reps, int):
        return shift(target_reps)

    low, high = (int(part) for part in target_reps.split("-"))
    return f"{shift(low)}-{shift(high)}"
