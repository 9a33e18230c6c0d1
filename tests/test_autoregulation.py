"""
Tests for readiness scoring and workout adjustment.
"""

import pytest

from liftplan.autoregulation import (
    HIGH_READINESS_NOTE,
    LOW_READINESS_NOTE,
    NEUTRAL_NOTE,
    AutoregulationUnit,
)
from liftplan.plan_schemas import PrescribedExercise, WorkoutPrescription
from liftplan.schemas import ExerciseType, ReadinessSnapshot


@pytest.fixture
def unit(catalog):
    return AutoregulationUnit(catalog)


def _single(sets=4, reps=10, **fields):
    return WorkoutPrescription(
        name="Test Day",
        exercises=[
            PrescribedExercise(
                name="Barbell Squat",
                muscle_group="quads",
                exercise_type=ExerciseType.COMPOUND,
                sets=sets,
                target_reps=reps,
                target_rir=2,
                **fields,
            )
        ],
    )


def test_recovery_score_best_case(unit):
    snapshot = ReadinessSnapshot(sleep_quality=10, energy_level=10, motivation=10, muscle_soreness=1)
    assert unit.recovery_score(snapshot) == 10.0


def test_recovery_score_very_sore(unit):
    snapshot = ReadinessSnapshot(sleep_quality=10, energy_level=10, motivation=10, muscle_soreness=10)
    assert unit.recovery_score(snapshot) == 7.75


def test_low_readiness_drops_set_and_reps(unit):
    adjusted, note = unit.adjust_workout(_single(sets=4, reps=10), 5)
    exercise = adjusted.exercises[0]
    assert exercise.sets == 3
    assert exercise.target_reps == 8
    assert note == LOW_READINESS_NOTE


def test_low_readiness_keeps_three_sets(unit):
    """Only exercises with more than 3 sets lose one."""
    adjusted, _ = unit.adjust_workout(_single(sets=3, reps=10), 5)
    assert adjusted.exercises[0].sets == 3


def test_low_readiness_rep_floor(unit):
    adjusted, _ = unit.adjust_workout(_single(reps=6), 2)
    assert adjusted.exercises[0].target_reps == 5


def test_high_readiness_adds_rep(unit):
    adjusted, note = unit.adjust_workout(_single(sets=4, reps=10), 9)
    exercise = adjusted.exercises[0]
    assert exercise.sets == 4
    assert exercise.target_reps == 11
    assert note == HIGH_READINESS_NOTE


@pytest.mark.parametrize("score", [6, 7, 8])
def test_neutral_band_unchanged(unit, score):
    planned = _single()
    adjusted, note = unit.adjust_workout(planned, score)
    assert adjusted == planned
    assert note == NEUTRAL_NOTE


def test_rep_ranges_shift_both_bounds(unit):
    low, _ = unit.adjust_workout(_single(reps="10-15"), 5)
    high, _ = unit.adjust_workout(_single(reps="6-8"), 9)
    floored, _ = unit.adjust_workout(_single(reps="6-8"), 5)
    assert low.exercises[0].target_reps == "8-13"
    assert high.exercises[0].target_reps == "7-9"
    assert floored.exercises[0].target_reps == "5-6"


def test_original_is_not_mutated(unit, upper_workout):
    before = upper_workout.model_copy(deep=True)
    unit.adjust_workout(upper_workout, 3)
    unit.adjust_workout(upper_workout, 9.5)
    assert upper_workout == before


def test_backfill_from_catalog(unit, upper_workout):
    """Missing muscle group and type are inferred by name, then default RIR is set."""
    adjusted, _ = unit.adjust_workout(upper_workout, 7)
    by_name = {e.name: e for e in adjusted.exercises}

    assert by_name["Barbell Bench Press"].target_rir == 2
    assert by_name["Lat Pulldown"].muscle_group == "back"
    assert by_name["Lat Pulldown"].exercise_type == ExerciseType.COMPOUND
    assert by_name["Lat Pulldown"].target_rir == 2
    # Already set, left alone
    assert by_name["Lateral Raises"].target_rir == 1
    assert by_name["Lateral Raises"].muscle_group == "shoulders"


def test_backfill_unknown_exercise_defaults_to_isolation(unit, upper_workout):
    adjusted, _ = unit.adjust_workout(upper_workout, 7)
    band = next(e for e in adjusted.exercises if e.name == "Band Pull-Apart")
    assert band.muscle_group is None
    assert band.target_rir == 3


def test_backfill_without_catalog(upper_workout):
    adjusted, _ = AutoregulationUnit().adjust_workout(upper_workout, 7)
    pulldown = next(e for e in adjusted.exercises if e.name == "Lat Pulldown")
    assert pulldown.muscle_group is None
    assert pulldown.target_rir == 3


def test_neutral_adjustment_is_idempotent(unit, upper_workout):
    once, _ = unit.adjust_workout(upper_workout, 7)
    twice, _ = unit.adjust_workout(once, 7)
    assert twice == once


def test_low_readiness_on_fixture_workout(unit, upper_workout):
    adjusted, _ = unit.adjust_workout(upper_workout, 4)
    assert [e.sets for e in adjusted.exercises] == [3, 3, 3, 2]
    assert [e.target_reps for e in adjusted.exercises] == [8, 8, "8-13", 5]
