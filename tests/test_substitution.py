"""
Tests for equipment-aware substitution.
"""

import pytest

from liftplan.substitution import SubstitutionEngine


@pytest.fixture
def engine(catalog):
    return SubstitutionEngine(catalog)


def test_similarity_is_additive(engine, catalog):
    bench = catalog.get("ex_chest_001")
    assert engine.similarity(bench, catalog.get("ex_chest_002")) == 17  # pattern, muscle, type
    assert engine.similarity(bench, catalog.get("ex_chest_003")) == 7  # muscle, type
    assert engine.similarity(bench, catalog.get("ex_triceps_004")) == 12  # pattern, type
    assert engine.similarity(bench, catalog.get("ex_chest_005")) == 5  # muscle only


def test_bench_press_with_dumbbells(engine, catalog):
    bench = catalog.get("ex_chest_001")
    ranked = engine.substitutions_for(bench, ["dumbbell", "bench"])
    names = [s.exercise.name for s in ranked]

    assert len(ranked) == 5
    assert names[:3] == ["Dumbbell Bench Press", "Push-ups", "Incline Dumbbell Press"]
    assert "Barbell Bench Press" not in names
    for item in ranked:
        assert set(item.exercise.equipment) <= {"dumbbell", "bench"}
    scores = [s.score for s in ranked]
    assert scores == sorted(scores, reverse=True)


def test_empty_equipment_is_bodyweight_only(engine, catalog):
    ranked = engine.substitutions_for(catalog.get("ex_chest_001"), [])
    assert [s.exercise.name for s in ranked] == ["Push-ups", "Calf Raises"]
    assert all(not s.exercise.equipment for s in ranked)


def test_none_equipment_raises(engine, catalog):
    with pytest.raises(ValueError, match="Available equipment must be provided"):
        engine.substitutions_for(catalog.get("ex_chest_001"), None)


def test_original_never_suggested(engine, catalog):
    """Exercises listed under two muscles are excluded by name as well as id."""
    face_pulls = catalog.get("ex_back_006")
    ranked = engine.substitutions_for(face_pulls, catalog.all_equipment())
    assert all(s.exercise.name != "Face Pulls" for s in ranked)


def test_at_most_five_results(engine, catalog):
    for exercise in catalog.all_exercises():
        assert len(engine.substitutions_for(exercise, catalog.all_equipment())) <= 5


def test_same_pattern_ranks_first_with_full_gym(engine, catalog):
    squat = catalog.get("ex_quads_001")
    ranked = engine.substitutions_for(squat, catalog.all_equipment())
    assert [s.exercise.name for s in ranked[:2]] == ["Leg Press", "Hack Squat"]


def test_exercise_listed_under_two_muscles_offered_once(engine, catalog):
    """Face Pulls appears under back and shoulders but fills only one slot."""
    pushdown = catalog.get("ex_triceps_001")
    ranked = engine.substitutions_for(pushdown, ["cable"])
    names = [s.exercise.name for s in ranked]

    assert len(names) == len(set(names))
    assert names == ["Cable Crossover", "Face Pulls", "Glute Kickback", "Calf Raises", "Push-ups"]
    face_pulls = next(s.exercise for s in ranked if s.exercise.name == "Face Pulls")
    assert face_pulls.id == "ex_back_006"
