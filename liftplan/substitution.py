"""
Equipment-aware exercise substitution.
"""

import logging
from typing import Iterable, List, Optional

from liftplan.catalog import ExerciseCatalog
from liftplan.config import DEFAULT_CONFIG, EngineConfig
from liftplan.plan_schemas import ScoredExercise
from liftplan.schemas import ExerciseDefinition

logger = logging.getLogger(__name__)


class SubstitutionEngine:
    """Finds alternatives to an exercise that the athlete's equipment allows."""

    def __init__(self, catalog: ExerciseCatalog, config: Optional[EngineConfig] = None):
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG
        self.weights = self.config.substitution

    def similarity(self, original: ExerciseDefinition, candidate: ExerciseDefinition) -> float:
        """Additive match score: movement pattern, muscle group and type."""
        score = 0.0
        if candidate.movement_pattern == original.movement_pattern:
            score += self.weights.same_pattern_score
        if candidate.muscle_group == original.muscle_group:
            score += self.weights.same_muscle_score
        if candidate.type == original.type:
            score += self.weights.same_type_score
        return score

    def substitutions_for(
        self,
        exercise: ExerciseDefinition,
        available_equipment: Optional[Iterable[str]],
    ) -> List[ScoredExercise]:
        """
        Ranked alternatives for an exercise (at most max_results).

        Candidates are every other catalog exercise whose full equipment
        requirement is available. An empty equipment list leaves only
        bodyweight exercises.

        Args:
            exercise: Exercise to replace
            available_equipment: Equipment the athlete has

        Returns:
            Candidates sorted by descending score (ties keep catalog order)

        Raises:
            ValueError: If available_equipment is None
        """
        if available_equipment is None:
            raise ValueError("Available equipment must be provided (use an empty list for bodyweight only)")

        equipment = set(available_equipment)
        seen_names = {exercise.name.lower()}
        candidates = []
        for candidate in self.catalog.all_exercises():
            # Exercises listed under two muscles are offered once, first occurrence wins
            if candidate.id == exercise.id or candidate.name.lower() in seen_names:
                continue
            seen_names.add(candidate.name.lower())
            if set(candidate.equipment) <= equipment:
                candidates.append(
                    ScoredExercise(exercise=candidate, score=self.similarity(exercise, candidate))
                )
        ranked = sorted(candidates, key=lambda item: item.score, reverse=True)
        logger.debug(
            "%d substitution candidates for %s with equipment %s",
            len(ranked), exercise.name, sorted(equipment) or "bodyweight",
        )
        return ranked[: self.weights.max_results]
