"""
Volume landmark calculation.

Derives an athlete's Training-Age Factor (TAF) and Recovery-Capacity Score
(RCS) from their profile, then the weekly set landmarks for a muscle group:

    MEV = base_mev * (1 + size_factor) * TAF^0.3
    MRV = MEV * (2.5 + RCS) * frequency_factor
    MAV = MEV + 0.7 * (MRV - MEV)
    MV  = 0.6 * MEV

Everything is computed in floating point and rounded half-up on output.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from liftplan.config import DEFAULT_CONFIG, EngineConfig
from liftplan.plan_schemas import VolumeLandmarks
from liftplan.schemas import AthleteProfile, Sex

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return int(math.floor(value + 0.5))


class LandmarkCalculator:
    """
    Computes TAF, RCS and per-muscle volume landmarks for one athlete.

    The calculator holds no state beyond the profile and configuration it was
    built with; every value is recomputed on demand.
    """

    def __init__(self, profile: AthleteProfile, config: Optional[EngineConfig] = None):
        self.profile = profile
        self.config = config or DEFAULT_CONFIG
        self.tables = self.config.landmarks

    def training_age_factor(self) -> float:
        """
        Training-Age Factor.

        Grows by 0.1 per year of training and is capped at 3.0 (reached at
        240 months with the default rate).
        """
        taf = 1.0 + (self.profile.training_months / 12.0) * self.tables.taf_rate_per_year
        return min(taf, self.tables.taf_cap)

    def recovery_capacity_score(self) -> float:
        """
        Recovery-Capacity Score.

        Product of sex, age, sleep and stress modifiers. Only the age and
        sleep modifiers are clamped; no input raises here.
        """
        t = self.tables
        sex_modifier = t.female_recovery_modifier if self.profile.sex == Sex.FEMALE else 1.0
        age_modifier = max(
            t.age_modifier_floor,
            t.age_modifier_ceiling
            - (self.profile.age - t.reference_age) * t.age_modifier_decline_per_year,
        )
        sleep_modifier = min(
            t.sleep_modifier_cap, self.profile.sleep_hours / t.sleep_reference_hours
        )
        stress_modifier = (10 - self.profile.stress_level) / 10.0
        return sex_modifier * age_modifier * sleep_modifier * stress_modifier

    def base_mev_for(self, muscle_group: str) -> float:
        """Profile override, else the configured table, else the default."""
        if self.profile.base_mev and muscle_group in self.profile.base_mev:
            return self.profile.base_mev[muscle_group]
        return self.tables.base_mev.get(muscle_group, self.tables.default_base_mev)

    def frequency_factor(self, training_frequency: int) -> float:
        return self.tables.frequency_factors.get(
            training_frequency, self.tables.default_frequency_factor
        )

    def volume_landmarks(
        self, muscle_group: str, training_frequency: int = 2
    ) -> VolumeLandmarks:
        """
        Calculate MV/MEV/MAV/MRV for a muscle group.

        Unknown muscle groups fall back to the default base MEV and size
        factor; unmapped frequencies use the default frequency factor.

        Args:
            muscle_group: Muscle group name
            training_frequency: Sessions per week that train this muscle

        Returns:
            VolumeLandmarks with half-up rounded set counts
        """
        t = self.tables
        taf = self.training_age_factor()
        rcs = self.recovery_capacity_score()

        size_factor = t.muscle_size_factor.get(muscle_group, t.default_size_factor)
        mev = self.base_mev_for(muscle_group) * (1 + size_factor) * taf ** t.taf_mev_exponent
        mrv = mev * (t.mrv_base_multiplier + rcs) * self.frequency_factor(training_frequency)
        mav = mev + t.mav_blend_toward_mrv * (mrv - mev)
        mv = mev * t.mv_fraction_of_mev

        logger.debug(
            "Landmarks for %s (freq=%d): TAF=%.3f RCS=%.3f mev=%.2f mrv=%.2f",
            muscle_group, training_frequency, taf, rcs, mev, mrv,
        )

        return VolumeLandmarks(
            muscle_group=muscle_group,
            training_frequency=max(1, training_frequency),
            mv=round_half_up(mv),
            mev=round_half_up(mev),
            mav=round_half_up(mav),
            mrv=round_half_up(mrv),
        )

    def landmarks_for(
        self,
        muscle_groups: Iterable[str],
        frequencies: Optional[Dict[str, int]] = None,
    ) -> List[VolumeLandmarks]:
        """Landmarks for several muscle groups, each at its own frequency (default 2)."""
        frequencies = frequencies or {}
        return [
            self.volume_landmarks(muscle, frequencies.get(muscle, 2))
            for muscle in muscle_groups
        ]

    def adapt_base_mev(self) -> Dict[str, int]:
        """
        Base MEV table for the next training block.

        Novices (TAF < 1.5) grow their base MEV by 5%, intermediates
        (TAF < 2.5) by 2.5%, everyone else by 1%. Starts from the profile's
        overrides when present, else the configured table.
        """
        t = self.tables
        taf = self.training_age_factor()
        if taf < self.config.progression.novice_taf_threshold:
            rate = t.novice_adaptation_rate
        elif taf < t.intermediate_taf_threshold:
            rate = t.intermediate_adaptation_rate
        else:
            rate = t.advanced_adaptation_rate

        current = self.profile.base_mev or t.base_mev
        adapted = {muscle: round_half_up(value * (1 + rate)) for muscle, value in current.items()}
        logger.info("Adapted base MEV table at rate %.3f (TAF=%.2f)", rate, taf)
        return adapted
