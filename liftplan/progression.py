"""
Volume and load progression.

Week-to-week: how many sets a muscle gets in each week of a mesocycle, when
a deload is due and how hard sets should be taken given accumulated fatigue.

Session-to-session: the next load and rep targets for one exercise, from
either a single effort rating or a full log of the previous session.
"""

import logging
from typing import Literal, Optional

from liftplan.config import DEFAULT_CONFIG, EngineConfig
from liftplan.landmarks import round_half_up
from liftplan.plan_schemas import (
    ProgressionAction,
    ProgressionDecision,
    WeeklyVolumeTarget,
)
from liftplan.schemas import ExerciseLog, ExerciseType, SetRecord

logger = logging.getLogger(__name__)


def _format_load(load: float) -> str:
    return f"{load:g}"


def _reps_in_reserve(record: SetRecord) -> float:
    """RIR for a logged set; RPE-only sets use 10 - RPE, unrated sets count as failure."""
    if record.rir is not None:
        return record.rir
    if record.rpe is not None:
        return 10.0 - record.rpe
    return 0.0


class ProgressionPlanner:
    """
    Progression rules for one athlete.

    The athlete's Training-Age Factor decides the weekly progression rate;
    all other behaviour is driven by the configuration tables.
    """

    def __init__(self, training_age_factor: float, config: Optional[EngineConfig] = None):
        """
        Initialize the planner.

        Args:
            training_age_factor: TAF from LandmarkCalculator.training_age_factor()
            config: Engine configuration (defaults used when omitted)
        """
        self.training_age_factor = training_age_factor
        self.config = config or DEFAULT_CONFIG
        self.rules = self.config.progression
        self.intensity = self.config.intensity

    @property
    def weekly_rate(self) -> float:
        if self.training_age_factor < self.rules.novice_taf_threshold:
            return self.rules.novice_weekly_rate
        return self.rules.experienced_weekly_rate

    # ========================================================================
    # Week-to-week volume and intensity
    # ========================================================================

    def weekly_volume(
        self, starting_volume: float, week_number: int, max_volume: float
    ) -> WeeklyVolumeTarget:
        """
        Target sets for a given week of the block.

        Volume grows linearly from starting_volume and is clamped at
        max_volume. A deload is flagged once the week reaches 95% of max.

        Args:
            starting_volume: Week 1 volume
            week_number: 1-based week index
            max_volume: Volume ceiling (normally MAV)

        Returns:
            WeeklyVolumeTarget with half-up rounded volumes
        """
        week_volume = starting_volume * (1 + (week_number - 1) * self.weekly_rate)
        if week_volume >= max_volume:
            week_volume = max_volume
        deload_triggered = week_volume >= max_volume * self.rules.deload_trigger_ratio

        return WeeklyVolumeTarget(
            target_volume=max(0, round_half_up(week_volume)),
            deload_volume=max(0, round_half_up(starting_volume * self.rules.deload_volume_ratio)),
            deload_triggered=deload_triggered,
        )

    def _fatigue_shift(self, current_volume: float, mrv: float) -> int:
        """+1 near MRV, -1 far from it, 0 in the middle band or when mrv <= 0."""
        if mrv <= 0:
            return 0
        ratio = current_volume / mrv
        if ratio > self.intensity.high_fatigue_ratio:
            return 1
        if ratio < self.intensity.low_fatigue_ratio:
            return -1
        return 0

    def target_rir(self, exercise_type: ExerciseType, current_volume: float, mrv: float) -> int:
        """Reps-in-reserve target; fewer reps in reserve as volume nears MRV."""
        if exercise_type == ExerciseType.COMPOUND:
            base = self.intensity.compound_base_rir
        else:
            base = self.intensity.isolation_base_rir
        return base - self._fatigue_shift(current_volume, mrv) * self.intensity.rir_fatigue_step

    def target_rpe(self, exercise_type: ExerciseType, current_volume: float, mrv: float) -> float:
        """RPE target; harder effort as volume nears MRV."""
        if exercise_type == ExerciseType.COMPOUND:
            base = self.intensity.compound_base_rpe
        else:
            base = self.intensity.isolation_base_rpe
        return base + self._fatigue_shift(current_volume, mrv) * self.intensity.rpe_fatigue_step

    # ========================================================================
    # Session-to-session load
    # ========================================================================

    def suggest_load_progression(
        self,
        previous_load: float,
        last_effort: float,
        target: float,
        scale: Literal["rir", "rpe"] = "rir",
    ) -> float:
        """
        Proportional load step from last session's effort rating.

        On the RIR scale more reps in reserve than planned means the load was
        too light; on the RPE scale a lower rating means the same. Differences
        within tolerance hold the load.
        """
        step = self.rules.load_step_percent
        if scale == "rir":
            too_easy = last_effort > target + self.rules.rir_tolerance
            too_hard = last_effort < target - self.rules.rir_tolerance
        elif scale == "rpe":
            too_easy = last_effort < target - self.rules.rpe_tolerance
            too_hard = last_effort > target + self.rules.rpe_tolerance
        else:
            raise ValueError(f"Unknown effort scale '{scale}', expected 'rir' or 'rpe'")

        if too_easy:
            return previous_load * (1 + step)
        if too_hard:
            return previous_load * (1 - step)
        return previous_load

    def calculate_progression(self, exercise_log: ExerciseLog) -> ProgressionDecision:
        """
        Next-session targets from the previous session's log.

        Average RIR well above target increases the load, well below target
        holds it. Otherwise double progression applies: hitting the top of
        the rep range on the last set earns a load increase and a rep reset,
        anything less adds a rep at the same load.

        Args:
            exercise_log: Completed sets plus the targets they were performed against

        Returns:
            ProgressionDecision
        """
        sets = exercise_log.completed_sets
        target_reps = exercise_log.target_reps

        if not sets:
            return ProgressionDecision(
                action=ProgressionAction.START_FRESH,
                target_load=None,
                target_reps=target_reps,
                note="No past data, starting fresh.",
            )

        average_rir = sum(_reps_in_reserve(s) for s in sets) / len(sets)
        last_load = sets[0].weight
        deviation = average_rir - exercise_log.target_rir
        increment = self.rules.load_increment

        if deviation > self.rules.rir_tolerance:
            new_load = last_load + increment
            decision = ProgressionDecision(
                action=ProgressionAction.INCREASE_LOAD,
                target_load=new_load,
                target_reps=target_reps,
                note=(
                    f"Excellent performance! Increasing weight to "
                    f"{_format_load(new_load)}lbs for the next session."
                ),
            )
        elif deviation < -self.rules.rir_tolerance:
            decision = ProgressionDecision(
                action=ProgressionAction.HOLD_LOAD,
                target_load=last_load,
                target_reps=target_reps,
                note=(
                    f"Last session was challenging. Maintain {_format_load(last_load)}lbs "
                    f"and focus on hitting your rep targets."
                ),
            )
        elif sets[-1].reps >= target_reps + self.rules.rep_range_width:
            new_load = last_load + increment
            decision = ProgressionDecision(
                action=ProgressionAction.INCREASE_LOAD,
                target_load=new_load,
                target_reps=target_reps,
                note=(
                    f"All sets hit the rep target. Increasing weight to "
                    f"{_format_load(new_load)}lbs for the next session."
                ),
            )
        else:
            decision = ProgressionDecision(
                action=ProgressionAction.INCREASE_REPS,
                target_load=last_load,
                target_reps=target_reps + 1,
                note=(
                    "Solid performance! Aim for one more rep per set in your next "
                    "session with the same weight."
                ),
            )

        logger.debug(
            "Progression for %s: avg RIR %.2f vs target %.2f -> %s",
            exercise_log.exercise_name or "<unnamed>",
            average_rir,
            exercise_log.target_rir,
            decision.action.value,
        )
        return decision
