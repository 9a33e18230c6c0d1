"""
Exercise selection.

Ranks catalog exercises for a muscle group with the Exercise Priority Score:

    EPS = (compound_bonus + novelty + recovery_term) * weakness * sex_modifier
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from liftplan.catalog import ExerciseCatalog
from liftplan.config import DEFAULT_CONFIG, EngineConfig
from liftplan.plan_schemas import ScoredExercise
from liftplan.schemas import ExerciseDefinition, ExerciseType, Sex

logger = logging.getLogger(__name__)


class SelectionContext(BaseModel):
    """Per-call inputs to the priority score."""

    weak_muscles: List[str] = Field(default_factory=list)
    recent_exercises: List[str] = Field(
        default_factory=list,
        description="Recently used exercise ids, most recent first",
    )
    sex: Optional[Sex] = Field(default=None)


class ExerciseSelector:
    """Scores and ranks catalog exercises."""

    def __init__(self, catalog: ExerciseCatalog, config: Optional[EngineConfig] = None):
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG
        self.weights = self.config.selection

    def _novelty(self, exercise: ExerciseDefinition, context: SelectionContext) -> float:
        if exercise.id not in context.recent_exercises:
            return self.weights.novelty_unused
        if context.recent_exercises.index(exercise.id) > self.weights.recency_window:
            return self.weights.novelty_stale
        return self.weights.novelty_recent

    def priority_score(
        self, exercise: ExerciseDefinition, context: Optional[SelectionContext] = None
    ) -> float:
        """
        Exercise Priority Score for one exercise.

        Args:
            exercise: Catalog entry to score
            context: Weak muscles, recent exercise ids and athlete sex

        Returns:
            Score (higher = better candidate)
        """
        context = context or SelectionContext()
        w = self.weights

        compound_bonus = (
            w.compound_bonus if exercise.type == ExerciseType.COMPOUND else w.isolation_bonus
        )
        weakness = w.weakness_multiplier if exercise.muscle_group in context.weak_muscles else 1.0
        recovery_term = w.recovery_cost_terms.get(exercise.recovery_cost.value, 0.0)

        sex_modifier = 1.0
        if context.sex == Sex.FEMALE and exercise.muscle_group in w.female_emphasis_muscles:
            sex_modifier = w.female_emphasis_modifier

        return (compound_bonus + self._novelty(exercise, context) + recovery_term) * weakness * sex_modifier

    def score_muscle(
        self, muscle_group: str, context: Optional[SelectionContext] = None
    ) -> List[ScoredExercise]:
        """Every exercise for a muscle, scored and sorted descending (ties keep catalog order)."""
        scored = [
            ScoredExercise(exercise=exercise, score=self.priority_score(exercise, context))
            for exercise in self.catalog.for_muscle(muscle_group)
        ]
        # sorted() is stable, so equal scores stay in catalog order
        return sorted(scored, key=lambda item: item.score, reverse=True)

    def select_for_muscle(
        self,
        muscle_group: str,
        count: int = 2,
        context: Optional[SelectionContext] = None,
    ) -> List[ScoredExercise]:
        """
        Top-ranked exercises for a muscle group.

        Unknown muscle groups return an empty list.
        """
        if count <= 0:
            return []
        selected = self.score_muscle(muscle_group, context)[:count]
        logger.debug(
            "Selected for %s: %s",
            muscle_group,
            ", ".join(f"{s.exercise.name} ({s.score:.2f})" for s in selected) or "nothing",
        )
        return selected
