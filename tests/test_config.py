"""
Tests for engine configuration loading.
"""

import json

import pytest

from liftplan.config import DEFAULT_CONFIG, EngineConfig


def test_default_tables():
    assert DEFAULT_CONFIG.landmarks.base_mev["chest"] == 8
    assert DEFAULT_CONFIG.landmarks.frequency_factors[3] == 1.2
    assert DEFAULT_CONFIG.progression.deload_trigger_ratio == 0.95
    assert DEFAULT_CONFIG.autoregulation.low_readiness_threshold == 6.0
    assert sorted(DEFAULT_CONFIG.mesocycle.splits) == [3, 4, 5, 6]


def test_split_names_cover_every_split():
    assert set(DEFAULT_CONFIG.mesocycle.split_names) == set(DEFAULT_CONFIG.mesocycle.splits)


def test_from_file_partial_override(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({
        "progression": {"novice_weekly_rate": 0.2},
        "substitution": {"max_results": 3},
    }))

    config = EngineConfig.from_file(path)

    assert config.progression.novice_weekly_rate == 0.2
    assert config.substitution.max_results == 3
    # Untouched fields keep defaults
    assert config.progression.experienced_weekly_rate == 0.05
    assert config.landmarks.base_mev == DEFAULT_CONFIG.landmarks.base_mev


def test_from_file_integer_keys(tmp_path):
    """JSON object keys are strings; frequency and split tables are keyed by int."""
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"landmarks": {"frequency_factors": {"1": 0.5, "2": 1.0}}}))

    config = EngineConfig.from_file(path)

    assert config.landmarks.frequency_factors == {1: 0.5, 2: 1.0}


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        EngineConfig.from_file(tmp_path / "missing.json")


def test_from_file_invalid(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"substitution": {"max_results": 0}}))
    with pytest.raises(ValueError, match="Invalid engine config file"):
        EngineConfig.from_file(path)
