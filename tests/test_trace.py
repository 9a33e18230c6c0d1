"""
Tests for mesocycle export and reload.

Ensures that generated plans round-trip through JSON and render to Markdown
with their decision trail.
"""

import json

import pytest

from liftplan.planner import MesocyclePlanner
from liftplan.trace import PlanExporter, load_mesocycle_from_file, save_mesocycle


@pytest.fixture
def mesocycle(novice_male, catalog):
    return MesocyclePlanner(novice_male, catalog).generate(mesocycle_length=3)


def test_export_to_json_is_serializable(mesocycle):
    data = PlanExporter(mesocycle).export_to_json()
    text = json.dumps(data)
    assert "novice_male_001" in text
    assert len(data["weeks"]) == 4
    assert data["weeks"][-1]["is_deload"] is True


def test_markdown_report_sections(mesocycle):
    report = PlanExporter(mesocycle).export_to_markdown()

    assert report.startswith("# Mesocycle")
    assert "**Split:** Upper/Lower (4 days/week)" in report
    assert "3 progression weeks + 1 deload week" in report
    assert "## Weekly Volume Targets" in report
    assert "| chest |" in report
    assert "## Week 1" in report
    assert "## Week 4 (Deload)" in report
    assert "## Plan Decisions" in report
    assert "Deload in week 4" in report


def test_markdown_lists_prescriptions(mesocycle):
    report = PlanExporter(mesocycle).export_to_markdown()
    first = mesocycle.weeks[0].days[0].exercises[0]
    assert f"**{first.name}**: {first.sets} x {first.target_reps}" in report


def test_save_and_load_json_round_trip(mesocycle, tmp_path):
    path = save_mesocycle(mesocycle, tmp_path / "plans")

    assert path.exists()
    assert path.suffix == ".json"
    assert path.name.startswith("mesocycle_novice_male_001_")

    loaded = load_mesocycle_from_file(path)
    assert loaded == mesocycle


def test_save_markdown(mesocycle, tmp_path):
    path = PlanExporter(mesocycle).save_to_file(tmp_path, format="markdown")
    assert path.suffix == ".md"
    assert path.read_text().startswith("# Mesocycle")


def test_save_unsupported_format(mesocycle, tmp_path):
    with pytest.raises(ValueError, match="Unsupported format"):
        PlanExporter(mesocycle).save_to_file(tmp_path, format="pdf")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_mesocycle_from_file(tmp_path / "missing.json")


def test_load_invalid_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"athlete_id": "x", "weeks": []}))
    with pytest.raises(ValueError, match="Invalid mesocycle file"):
        load_mesocycle_from_file(path)
