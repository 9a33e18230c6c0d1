"""
Mesocycle and program generation.

This module turns an athlete profile and the exercise catalog into:
- A mesocycle: N progression weeks for a weekly split plus one deload week
- A single dynamic workout for a list of muscle groups
- A program plan: pre-authored template workouts rotated over a duration
"""

import logging
from typing import Dict, List, Optional, Sequence

from liftplan.catalog import ExerciseCatalog
from liftplan.config import DEFAULT_CONFIG, EngineConfig, SplitDay
from liftplan.landmarks import LandmarkCalculator, round_half_up
from liftplan.plan_schemas import (
    Mesocycle,
    MesocycleWeek,
    MuscleWeekTarget,
    PlanDecision,
    PlanDuration,
    PrescribedExercise,
    ProgramDay,
    ProgramPlan,
    ProgramTemplate,
    ScoredExercise,
    TrainingDay,
    VolumeLandmarks,
    WorkoutPrescription,
)
from liftplan.progression import ProgressionPlanner
from liftplan.schemas import AthleteProfile, ExerciseType, Sex
from liftplan.selector import ExerciseSelector, SelectionContext

logger = logging.getLogger(__name__)


def allocate_evenly(total: int, slots: int) -> List[int]:
    """
    Split total into slots by dividing what remains by the slots left.

    Each share is half-up rounded, so earlier slots never get less than a
    fair share and the shares always sum to total.
    """
    shares = []
    remaining = total
    for index in range(slots):
        share = round_half_up(remaining / (slots - index))
        shares.append(share)
        remaining -= share
    return shares


class MesocyclePlanner:
    """
    Generates structured training blocks for one athlete.

    The planner:
    1. Resolves the weekly split for the requested training frequency
    2. Computes landmarks once per muscle, using how often the split trains it
    3. Progresses weekly volume from 1.1x MEV toward MAV
    4. Selects exercises per muscle and distributes sets across days and exercises
    5. Appends a deload week pinned to 60% of MEV
    6. Documents decisions for the exported plan trace

    Generation is deterministic and stateless between calls; recency is only
    ever supplied by the caller.
    """

    def __init__(
        self,
        profile: AthleteProfile,
        catalog: ExerciseCatalog,
        config: Optional[EngineConfig] = None,
    ):
        self.profile = profile
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG
        self.rules = self.config.mesocycle

        self.landmark_calculator = LandmarkCalculator(profile, self.config)
        self.progression = ProgressionPlanner(
            self.landmark_calculator.training_age_factor(), self.config
        )
        self.selector = ExerciseSelector(catalog, self.config)

    # ========================================================================
    # Split resolution
    # ========================================================================

    def get_split(self, days_per_week: int) -> List[SplitDay]:
        """Named day templates for 3-6 days per week; anything else uses the 4-day split."""
        if days_per_week not in self.rules.splits:
            days_per_week = self.rules.fallback_days_per_week
        return [day.model_copy(deep=True) for day in self.rules.splits[days_per_week]]

    def get_split_name(self, days_per_week: int) -> str:
        if days_per_week not in self.rules.splits:
            days_per_week = self.rules.fallback_days_per_week
        return self.rules.split_names.get(days_per_week, f"{days_per_week}-Day Split")

    @staticmethod
    def muscle_frequencies(split: Sequence[SplitDay]) -> Dict[str, int]:
        """How many days of the split train each muscle, in first-seen order."""
        frequencies: Dict[str, int] = {}
        for day in split:
            for muscle in day.muscle_groups:
                frequencies[muscle] = frequencies.get(muscle, 0) + 1
        return frequencies

    # ========================================================================
    # Mesocycle
    # ========================================================================

    def generate(
        self,
        days_per_week: Optional[int] = None,
        mesocycle_length: Optional[int] = None,
        recent_exercises: Optional[List[str]] = None,
    ) -> Mesocycle:
        """
        Generate a complete mesocycle.

        Args:
            days_per_week: Training days per week (defaults to the profile's)
            mesocycle_length: Number of progression weeks before the deload
            recent_exercises: Recently used exercise ids, most recent first

        Returns:
            Mesocycle with mesocycle_length progression weeks and one deload week

        Raises:
            ValueError: If mesocycle_length is less than 1
        """
        days = days_per_week if days_per_week is not None else self.profile.days_per_week
        length = mesocycle_length if mesocycle_length is not None else self.rules.default_length_weeks
        if length < 1:
            raise ValueError(f"Mesocycle length must be at least 1 week, got {length}")

        plan_decisions: List[PlanDecision] = []
        split = self.get_split(days)
        split_name = self.get_split_name(days)
        plan_decisions.append(self._split_decision(days, split, split_name))

        frequencies = self.muscle_frequencies(split)
        landmarks = {
            muscle: self.landmark_calculator.volume_landmarks(muscle, frequency)
            for muscle, frequency in frequencies.items()
        }
        plan_decisions.append(self._landmark_decision(landmarks))

        context = SelectionContext(
            weak_muscles=list(self.profile.weak_muscles),
            recent_exercises=list(recent_exercises or []),
            sex=self.profile.sex,
        )
        if context.recent_exercises:
            plan_decisions.append(
                PlanDecision(
                    decision_point="Exercise novelty weighting",
                    input_factors=[f"{len(context.recent_exercises)} recently used exercises"],
                    reasoning=(
                        "Exercises among the most recent few are scored without a novelty "
                        "bonus so the block rotates toward movements not trained lately."
                    ),
                    outcome="Recent exercises deprioritized in selection",
                )
            )

        weeks = []
        early_deload_weeks: Dict[str, int] = {}
        for week_number in range(1, length + 1):
            muscle_targets = {}
            for muscle, lm in landmarks.items():
                target = self.progression.weekly_volume(
                    lm.mev * self.rules.starting_volume_multiplier, week_number, lm.mav
                )
                if target.deload_triggered and muscle not in early_deload_weeks:
                    early_deload_weeks[muscle] = week_number
                muscle_targets[muscle] = MuscleWeekTarget(
                    target_volume=target.target_volume,
                    target_rpe_compound=self.progression.target_rpe(
                        ExerciseType.COMPOUND, target.target_volume, lm.mrv
                    ),
                    target_rpe_isolation=self.progression.target_rpe(
                        ExerciseType.ISOLATION, target.target_volume, lm.mrv
                    ),
                )
            weeks.append(
                MesocycleWeek(
                    week_number=week_number,
                    is_deload=False,
                    muscle_targets=muscle_targets,
                    days=self._build_days(split, frequencies, landmarks, muscle_targets, context, deload=False),
                )
            )

        if early_deload_weeks:
            plan_decisions.append(
                PlanDecision(
                    decision_point="Volume ceiling reached before the deload week",
                    input_factors=[
                        f"{muscle}: week {week}" for muscle, week in early_deload_weeks.items()
                    ],
                    reasoning=(
                        "Weekly volume for these muscles reached 95% of MAV before the "
                        "scheduled deload, so their volume is held at the ceiling."
                    ),
                    outcome="Volume clamped at MAV until the deload week",
                )
            )

        deload_targets = {
            muscle: MuscleWeekTarget(
                target_volume=round_half_up(lm.mev * self.rules.deload_mev_ratio),
                target_rpe_compound=self.rules.deload_rpe_compound,
                target_rpe_isolation=self.rules.deload_rpe_isolation,
            )
            for muscle, lm in landmarks.items()
        }
        weeks.append(
            MesocycleWeek(
                week_number=length + 1,
                is_deload=True,
                muscle_targets=deload_targets,
                days=self._build_days(split, frequencies, landmarks, deload_targets, context, deload=True),
            )
        )
        plan_decisions.append(
            PlanDecision(
                decision_point=f"Deload in week {length + 1}",
                input_factors=[f"{length} progression weeks", "Deload volume 60% of MEV"],
                reasoning=(
                    "Accumulated fatigue is dissipated with a week at reduced volume "
                    "and moderate effort before the next block starts."
                ),
                outcome=(
                    f"Week {length + 1}: RPE {self.rules.deload_rpe_compound:g}/"
                    f"{self.rules.deload_rpe_isolation:g}, RIR {self.rules.deload_rir}"
                ),
            )
        )

        mesocycle = Mesocycle(
            athlete_id=self.profile.athlete_id,
            days_per_week=len(split),
            split_name=split_name,
            weeks=weeks,
            plan_decisions=plan_decisions,
        )
        logger.info(
            "Generated %s mesocycle for %s: %d weeks + deload",
            split_name, self.profile.athlete_id, length,
        )
        return mesocycle

    def _build_days(
        self,
        split: Sequence[SplitDay],
        frequencies: Dict[str, int],
        landmarks: Dict[str, VolumeLandmarks],
        muscle_targets: Dict[str, MuscleWeekTarget],
        context: SelectionContext,
        deload: bool,
    ) -> List[TrainingDay]:
        """Distribute each muscle's weekly target over the days that train it."""
        day_shares = {
            muscle: allocate_evenly(muscle_targets[muscle].target_volume, frequency)
            for muscle, frequency in frequencies.items()
        }
        seen: Dict[str, int] = {}

        days = []
        for split_day in split:
            exercises: List[PrescribedExercise] = []
            for muscle in split_day.muscle_groups:
                occurrence = seen.get(muscle, 0)
                seen[muscle] = occurrence + 1
                exercises.extend(
                    self._prescribe_muscle(
                        muscle,
                        weekly_volume=muscle_targets[muscle].target_volume,
                        day_volume=day_shares[muscle][occurrence],
                        landmarks=landmarks[muscle],
                        context=context,
                        deload=deload,
                    )
                )
            days.append(
                TrainingDay(
                    name=split_day.name,
                    muscle_groups=list(split_day.muscle_groups),
                    exercises=exercises,
                )
            )
        return days

    def _exercise_count(self, weekly_volume: int) -> int:
        if weekly_volume > self.rules.high_volume_threshold:
            return self.rules.high_volume_exercise_count
        return self.rules.default_exercise_count

    def _prescribe_muscle(
        self,
        muscle: str,
        weekly_volume: int,
        day_volume: int,
        landmarks: VolumeLandmarks,
        context: SelectionContext,
        deload: bool,
    ) -> List[PrescribedExercise]:
        selected = self.selector.select_for_muscle(
            muscle, self._exercise_count(weekly_volume), context
        )
        prescriptions = []
        for scored, sets in zip(selected, allocate_evenly(day_volume, len(selected))):
            if sets <= 0:
                continue
            exercise = scored.exercise
            if deload:
                prescriptions.append(
                    PrescribedExercise(
                        name=exercise.name,
                        muscle_group=muscle,
                        exercise_type=exercise.type,
                        sets=sets,
                        target_reps=self._deload_reps(exercise.type),
                        target_rir=self.rules.deload_rir,
                        target_rpe=self._deload_rpe(exercise.type),
                    )
                )
            else:
                prescriptions.append(
                    PrescribedExercise(
                        name=exercise.name,
                        muscle_group=muscle,
                        exercise_type=exercise.type,
                        sets=sets,
                        target_reps=self._target_reps(exercise.type),
                        target_rir=self.progression.target_rir(
                            exercise.type, weekly_volume, landmarks.mrv
                        ),
                        target_rpe=self.progression.target_rpe(
                            exercise.type, weekly_volume, landmarks.mrv
                        ),
                    )
                )
        return prescriptions

    def _target_reps(self, exercise_type: ExerciseType) -> int:
        if exercise_type == ExerciseType.ISOLATION:
            return self.rules.isolation_reps
        if self.profile.sex == Sex.FEMALE:
            return self.rules.female_compound_reps
        return self.rules.male_compound_reps

    def _deload_reps(self, exercise_type: ExerciseType) -> int:
        if exercise_type == ExerciseType.COMPOUND:
            return self.rules.deload_compound_reps
        return self.rules.deload_isolation_reps

    def _deload_rpe(self, exercise_type: ExerciseType) -> float:
        if exercise_type == ExerciseType.COMPOUND:
            return self.rules.deload_rpe_compound
        return self.rules.deload_rpe_isolation

    def _split_decision(
        self, days_per_week: int, split: Sequence[SplitDay], split_name: str
    ) -> PlanDecision:
        if days_per_week in self.rules.splits:
            reasoning = (
                f"A {days_per_week}-day week maps directly onto the {split_name} split, "
                f"training each muscle on the days listed for it."
            )
        else:
            reasoning = (
                f"No split is defined for {days_per_week} days per week, so the "
                f"{self.rules.fallback_days_per_week}-day {split_name} split is used instead."
            )
        return PlanDecision(
            decision_point=f"Weekly split: {split_name}",
            input_factors=[f"Days per week: {days_per_week}"],
            reasoning=reasoning,
            outcome=", ".join(day.name for day in split),
        )

    def _landmark_decision(self, landmarks: Dict[str, VolumeLandmarks]) -> PlanDecision:
        calc = self.landmark_calculator
        return PlanDecision(
            decision_point="Volume landmarks per muscle",
            input_factors=[
                f"Training age factor: {calc.training_age_factor():.2f}",
                f"Recovery capacity score: {calc.recovery_capacity_score():.2f}",
            ],
            reasoning=(
                "Training frequency for each muscle is the number of split days that "
                "train it; week 1 starts at 110% of MEV and progresses toward MAV."
            ),
            outcome="; ".join(
                f"{m} MEV {lm.mev} / MAV {lm.mav} / MRV {lm.mrv} (x{lm.training_frequency})"
                for m, lm in landmarks.items()
            ),
        )

    # ========================================================================
    # Single dynamic workout
    # ========================================================================

    def generate_daily_workout(
        self,
        muscle_groups: List[str],
        muscle_targets: Optional[Dict[str, int]] = None,
        context: Optional[SelectionContext] = None,
    ) -> WorkoutPrescription:
        """
        Build one workout for the given muscle groups.

        Volume per muscle comes from muscle_targets when given, else MEV.
        Rep targets are ranges: 6-8 (men) or 8-10 (women) for compounds,
        10-15 for isolation work.
        """
        muscle_targets = muscle_targets or {}
        if context is None:
            context = SelectionContext(
                weak_muscles=list(self.profile.weak_muscles), sex=self.profile.sex
            )

        exercises: List[PrescribedExercise] = []
        for muscle in muscle_groups:
            landmarks = self.landmark_calculator.volume_landmarks(muscle)
            volume = muscle_targets.get(muscle) or landmarks.mev
            selected: List[ScoredExercise] = self.selector.select_for_muscle(
                muscle, self._exercise_count(volume), context
            )
            for scored, sets in zip(selected, allocate_evenly(volume, len(selected))):
                if sets <= 0:
                    continue
                exercises.append(
                    PrescribedExercise(
                        name=scored.exercise.name,
                        muscle_group=muscle,
                        exercise_type=scored.exercise.type,
                        sets=sets,
                        target_reps=self._rep_range(scored.exercise.type),
                    )
                )

        return WorkoutPrescription(
            name=f"Dynamic Workout - {', '.join(muscle_groups)}", exercises=exercises
        )

    def _rep_range(self, exercise_type: ExerciseType) -> str:
        if exercise_type == ExerciseType.ISOLATION:
            return self.rules.isolation_rep_range
        if self.profile.sex == Sex.FEMALE:
            return self.rules.female_compound_rep_range
        return self.rules.male_compound_rep_range


# ============================================================================
# Template program rotation
# ============================================================================


def generate_program_plan(
    program: ProgramTemplate, duration: PlanDuration, start_index: int = 0
) -> ProgramPlan:
    """
    Rotate a template program's workouts into a scheduled day list.

    Week-based durations schedule weeks * days_per_week sessions; day-based
    durations schedule the raw count. Iteration starts at start_index
    (wrapping) and assigns workouts round-robin.

    Args:
        program: Template with an ordered list of workouts
        duration: Plan length in weeks or days
        start_index: Template index of the first session

    Returns:
        ProgramPlan with sequential day numbers from 1

    Raises:
        ValueError: If the program has no workouts or start_index is negative
    """
    if not program.workouts:
        raise ValueError(f"Program '{program.name}' has no workouts to schedule")
    if start_index < 0:
        raise ValueError(f"start_index must be non-negative, got {start_index}")

    if duration.type == "weeks":
        total_sessions = duration.value * program.days_per_week
    else:
        total_sessions = duration.value

    offset = start_index % len(program.workouts)
    rotated = program.workouts[offset:] + program.workouts[:offset]

    days = [
        ProgramDay(day=i + 1, workout=rotated[i % len(rotated)].model_copy(deep=True))
        for i in range(total_sessions)
    ]
    logger.info(
        "Scheduled %d sessions of '%s' starting at template %d",
        total_sessions, program.name, offset,
    )
    return ProgramPlan(
        name=program.name,
        duration=duration,
        start_index=start_index,
        total_sessions=total_sessions,
        days=days,
    )
