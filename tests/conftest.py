"""Shared fixtures: athlete profiles and the bundled exercise catalog."""

import json
from pathlib import Path

import pytest

from liftplan.catalog import load_default_catalog
from liftplan.plan_schemas import ProgramTemplate, WorkoutPrescription
from liftplan.schemas import AthleteProfile, ExerciseLog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def catalog():
    """Load the bundled exercise catalog."""
    return load_default_catalog()


@pytest.fixture
def novice_male():
    """Brand-new male lifter, 4 days per week."""
    return AthleteProfile(**load_fixture("athlete_male_novice.json"))


@pytest.fixture
def intermediate_female():
    """Three years of training, glutes flagged weak, base MEV overrides."""
    return AthleteProfile(**load_fixture("athlete_female_intermediate.json"))


@pytest.fixture
def veteran():
    """30 years of training, poor sleep and high stress."""
    return AthleteProfile(**load_fixture("athlete_veteran.json"))


@pytest.fixture
def all_profiles(novice_male, intermediate_female, veteran):
    return [novice_male, intermediate_female, veteran]


@pytest.fixture
def upper_workout():
    """Hand-authored workout with some fields left for back-fill."""
    return WorkoutPrescription(**load_fixture("workout_upper.json"))


@pytest.fixture
def bench_log():
    return ExerciseLog(**load_fixture("exercise_log_bench.json"))


@pytest.fixture
def three_workout_program():
    return ProgramTemplate(**load_fixture("program_three_day.json"))
