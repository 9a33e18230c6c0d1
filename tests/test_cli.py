"""
Tests for the command-line interface.
"""

import json
from pathlib import Path

from typer.testing import CliRunner

from liftplan.cli import app

FIXTURES_DIR = Path(__file__).parent / "fixtures"

runner = CliRunner()


def _fixture(name: str) -> str:
    return str(FIXTURES_DIR / name)


def test_landmarks_single_muscle():
    result = runner.invoke(
        app, ["landmarks", "--profile", _fixture("athlete_male_novice.json"), "--muscle", "chest"]
    )
    assert result.exit_code == 0
    assert "novice_male_001" in result.stdout
    assert "chest" in result.stdout
    assert "31" in result.stdout


def test_generate_plan_saves_markdown(tmp_path):
    result = runner.invoke(
        app,
        [
            "generate-plan",
            "--profile", _fixture("athlete_male_novice.json"),
            "--weeks", "2",
            "--format", "markdown",
            "--output-dir", str(tmp_path),
        ],
    )
    assert result.exit_code == 0
    saved = list(tmp_path.glob("mesocycle_*.md"))
    assert len(saved) == 1
    assert "## Week 3 (Deload)" in saved[0].read_text()


def test_generate_plan_without_saving(tmp_path):
    result = runner.invoke(
        app,
        [
            "generate-plan",
            "--profile", _fixture("athlete_veteran.json"),
            "--no-save",
            "--output-dir", str(tmp_path),
        ],
    )
    assert result.exit_code == 0
    assert "Push/Pull/Legs" in result.stdout
    assert not any(tmp_path.iterdir())


def test_generate_plan_bad_format(tmp_path):
    result = runner.invoke(
        app,
        [
            "generate-plan",
            "--profile", _fixture("athlete_male_novice.json"),
            "--format", "pdf",
            "--output-dir", str(tmp_path),
        ],
    )
    assert result.exit_code == 1
    assert "Unsupported format" in result.stdout


def test_readiness_adjusts_workout():
    result = runner.invoke(
        app,
        [
            "readiness",
            "--workout", _fixture("workout_upper.json"),
            "--sleep", "10", "--energy", "9", "--motivation", "9", "--soreness", "2",
        ],
    )
    assert result.exit_code == 0
    assert "9.25" in result.stdout
    assert "Feeling great" in result.stdout


def test_readiness_prompts_for_missing_ratings():
    result = runner.invoke(app, ["readiness"], input="5\n5\n5\n5\n")
    assert result.exit_code == 0
    assert "5.25" in result.stdout


def test_progress_from_log():
    result = runner.invoke(app, ["progress", "--log", _fixture("exercise_log_bench.json")])
    assert result.exit_code == 0
    assert "increase load" in result.stdout
    assert "190" in result.stdout


def test_progress_single_step():
    result = runner.invoke(
        app,
        ["progress", "--previous-load", "100", "--last-effort", "4", "--target-effort", "2"],
    )
    assert result.exit_code == 0
    assert "102.5" in result.stdout


def test_progress_requires_inputs():
    result = runner.invoke(app, ["progress", "--previous-load", "100"])
    assert result.exit_code == 1


def test_substitute_with_equipment():
    result = runner.invoke(
        app, ["substitute", "Barbell Bench Press", "-e", "dumbbell", "-e", "bench"]
    )
    assert result.exit_code == 0
    assert "Dumbbell Bench Press" in result.stdout


def test_substitute_unknown_exercise():
    result = runner.invoke(app, ["substitute", "Kettlebell Juggling"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_program_requires_one_duration():
    result = runner.invoke(
        app,
        ["program", "--template", _fixture("program_three_day.json"), "--weeks", "1", "--days", "3"],
    )
    assert result.exit_code == 1


def test_program_schedule():
    result = runner.invoke(
        app, ["program", "--template", _fixture("program_three_day.json"), "--days", "5"]
    )
    assert result.exit_code == 0
    assert "5 sessions" in result.stdout
    assert "Workout C" in result.stdout


def test_config_override(tmp_path):
    config_path = tmp_path / "engine.json"
    config_path.write_text(json.dumps({"substitution": {"max_results": 1}}))
    result = runner.invoke(
        app,
        ["--config", str(config_path), "substitute", "ex_chest_001", "-e", "dumbbell", "-e", "bench"],
    )
    assert result.exit_code == 0
    assert "Dumbbell Bench Press" in result.stdout
    assert "Push-ups" not in result.stdout
