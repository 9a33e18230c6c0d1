"""
Tests for volume landmark calculation.

Covers:
- Training-Age Factor growth and cap
- Recovery-Capacity Score modifiers and clamping
- MV < MEV <= MAV <= MRV for every profile, muscle and frequency
- Table fallbacks for unknown muscles and frequencies
- Long-term base MEV adaptation
"""

import pytest

from liftplan.config import EngineConfig, LandmarkConfig
from liftplan.landmarks import LandmarkCalculator, round_half_up


def test_round_half_up():
    """Halves round up rather than to even."""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(10.5) == 11
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize(
    "months,expected",
    [(0, 1.0), (12, 1.1), (120, 2.0), (240, 3.0), (241, 3.0), (360, 3.0)],
)
def test_training_age_factor(novice_male, months, expected):
    """TAF grows 0.1 per year and caps at 3.0."""
    profile = novice_male.model_copy(update={"training_months": months})
    assert LandmarkCalculator(profile).training_age_factor() == pytest.approx(expected)


def test_recovery_capacity_score_male(novice_male):
    """25-year-old male, 8h sleep, stress 4."""
    rcs = LandmarkCalculator(novice_male).recovery_capacity_score()
    assert rcs == pytest.approx(1.0 * (1.2 - 7 * 0.005) * 1.0 * 0.6)


def test_recovery_capacity_score_female_modifier(novice_male):
    """Female athletes get a 1.15 recovery modifier."""
    female = novice_male.model_copy(update={"sex": "female"})
    male_rcs = LandmarkCalculator(novice_male).recovery_capacity_score()
    female_rcs = LandmarkCalculator(female).recovery_capacity_score()
    assert female_rcs == pytest.approx(male_rcs * 1.15)


def test_recovery_capacity_clamps_age_and_sleep(novice_male):
    """Age modifier floors at 0.7 and sleep modifier caps at 1.2."""
    old_long_sleeper = novice_male.model_copy(
        update={"age": 150, "sleep_hours": 14.0, "stress_level": 1}
    )
    rcs = LandmarkCalculator(old_long_sleeper).recovery_capacity_score()
    assert rcs == pytest.approx(0.7 * 1.2 * 0.9)


def test_recovery_capacity_never_raises_on_extreme_stress(novice_male):
    """Stress 10 zeroes the score without error."""
    stressed = novice_male.model_copy(update={"stress_level": 10})
    assert LandmarkCalculator(stressed).recovery_capacity_score() == 0.0


def test_chest_landmarks_for_novice(novice_male):
    """
    Worked example for chest at frequency 2.

    mev = 8 * 1.2 * 1.0 = 9.6, mrv = 9.6 * (2.5 + 0.699) = 30.71,
    mav = 9.6 + 0.7 * 21.11 = 24.38, mv = 5.76
    """
    lm = LandmarkCalculator(novice_male).volume_landmarks("chest")
    assert (lm.mv, lm.mev, lm.mav, lm.mrv) == (6, 10, 24, 31)
    assert lm.training_frequency == 2


@pytest.mark.parametrize("frequency", [1, 2, 3, 4, 5, 6, 7])
def test_landmark_ordering_invariant(all_profiles, catalog, frequency):
    """MV < MEV <= MAV <= MRV for every profile, muscle and frequency."""
    muscles = catalog.muscle_groups() + ["legs", "arms", "neck & traps", "mystery"]
    for profile in all_profiles:
        calculator = LandmarkCalculator(profile)
        for muscle in muscles:
            lm = calculator.volume_landmarks(muscle, frequency)
            assert lm.mv < lm.mev <= lm.mav <= lm.mrv, (profile.athlete_id, muscle, lm)


def test_landmark_ordering_with_minimum_override(novice_male):
    """The smallest allowed base MEV override still keeps MV below MEV."""
    profile = novice_male.model_copy(update={"base_mev": {"biceps": 2}})
    lm = LandmarkCalculator(profile).volume_landmarks("biceps")
    assert lm.mv < lm.mev


def test_unknown_muscle_uses_defaults(novice_male):
    """Unknown muscles use base MEV 8 and size factor 0.2 rather than failing."""
    calculator = LandmarkCalculator(novice_male)
    unknown = calculator.volume_landmarks("mystery")
    # forearms is in neither table either
    forearms = calculator.volume_landmarks("forearms")
    assert unknown.model_dump(exclude={"muscle_group"}) == forearms.model_dump(
        exclude={"muscle_group"}
    )
    assert unknown.mev == round_half_up(8 * 1.2)


def test_unmapped_frequency_uses_default_factor(novice_male):
    """Frequency 7 is not in the table and uses the 1.3 default, same as 5."""
    calculator = LandmarkCalculator(novice_male)
    assert calculator.volume_landmarks("back", 7).mrv == calculator.volume_landmarks("back", 5).mrv


def test_higher_frequency_raises_mrv(novice_male):
    calculator = LandmarkCalculator(novice_male)
    mrvs = [calculator.volume_landmarks("back", f).mrv for f in (1, 2, 3, 5, 6)]
    assert mrvs == sorted(mrvs)
    assert mrvs[0] < mrvs[-1]


def test_profile_override_takes_precedence(intermediate_female):
    """Base MEV overrides on the profile replace the table value."""
    calculator = LandmarkCalculator(intermediate_female)
    assert calculator.base_mev_for("glutes") == 12
    assert calculator.base_mev_for("back") == 10


def test_mav_is_blend_of_mev_and_mrv(all_profiles):
    """MAV sits between MEV and MRV, weighted 0.7 toward MRV."""
    for profile in all_profiles:
        lm = LandmarkCalculator(profile).volume_landmarks("back", 3)
        expected = lm.mev + 0.7 * (lm.mrv - lm.mev)
        assert abs(lm.mav - expected) <= 1


def test_config_override_changes_base_table(novice_male):
    """Engine tables can be overridden without touching the calculator."""
    config = EngineConfig(landmarks=LandmarkConfig(base_mev={"chest": 20}))
    lm = LandmarkCalculator(novice_male, config).volume_landmarks("chest")
    assert lm.mev == round_half_up(20 * 1.2)


def test_landmarks_for_uses_per_muscle_frequency(novice_male):
    calculator = LandmarkCalculator(novice_male)
    result = calculator.landmarks_for(["chest", "back"], {"chest": 3})
    assert [lm.muscle_group for lm in result] == ["chest", "back"]
    assert result[0].training_frequency == 3
    assert result[1].training_frequency == 2


def test_adapt_base_mev_novice_rate(novice_male):
    """Novices grow base MEV by 5%, rounded half-up."""
    adapted = LandmarkCalculator(novice_male).adapt_base_mev()
    assert adapted["chest"] == 8  # 8.4
    assert adapted["back"] == 11  # 10.5
    assert adapted["legs"] == 15  # 14.7


def test_adapt_base_mev_advanced_rate(veteran):
    """TAF >= 2.5 grows base MEV by 1%."""
    adapted = LandmarkCalculator(veteran).adapt_base_mev()
    assert adapted["back"] == 10
    assert adapted["legs"] == 14


def test_adapt_base_mev_uses_profile_overrides(intermediate_female):
    """Only the overridden muscles are adapted when the profile has overrides."""
    adapted = LandmarkCalculator(intermediate_female).adapt_base_mev()
    assert set(adapted) == {"glutes", "shoulders"}
    assert adapted["glutes"] == 13  # 12 * 1.05 = 12.6
