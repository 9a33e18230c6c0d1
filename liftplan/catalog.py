"""
Exercise catalog.

Static reference data: for each muscle group, the exercises that train it.
The catalog is loaded once and treated as read-only; the name -> exercise
and name -> muscle group indexes used to fill in missing prescription fields
are built at construction time.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from liftplan.schemas import ExerciseDefinition

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "exercise_catalog.json"


class ExerciseCatalog:
    """
    Exercises grouped by muscle group, in authored order.

    Catalog order matters: selection ties are resolved by it.
    """

    def __init__(self, exercises_by_muscle: Mapping[str, Iterable[ExerciseDefinition]]):
        """
        Build the catalog and its lookup indexes.

        Args:
            exercises_by_muscle: Mapping of muscle group -> exercise definitions

        Raises:
            ValueError: If the catalog contains no exercises at all
        """
        self._by_muscle: Dict[str, List[ExerciseDefinition]] = {
            muscle: list(exercises) for muscle, exercises in exercises_by_muscle.items()
        }
        if not any(self._by_muscle.values()):
            raise ValueError("Exercise catalog is empty")

        self._by_id: Dict[str, ExerciseDefinition] = {}
        self._by_name: Dict[str, ExerciseDefinition] = {}
        self._muscle_by_name: Dict[str, str] = {}
        for muscle, exercises in self._by_muscle.items():
            for exercise in exercises:
                self._by_id.setdefault(exercise.id, exercise)
                # First occurrence wins for exercises listed under two muscles
                self._by_name.setdefault(exercise.name.lower(), exercise)
                self._muscle_by_name.setdefault(exercise.name.lower(), muscle)

        logger.debug(
            "Loaded exercise catalog: %d muscle groups, %d exercises",
            len(self._by_muscle),
            len(self._by_id),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, List[Dict[str, Any]]]) -> "ExerciseCatalog":
        """
        Build a catalog from raw JSON-style data.

        Entries may omit muscle_group; it is taken from the mapping key.
        """
        exercises_by_muscle = {
            muscle: [
                ExerciseDefinition(**{"muscle_group": muscle, **entry})
                for entry in entries
            ]
            for muscle, entries in data.items()
        }
        return cls(exercises_by_muscle)

    @classmethod
    def from_file(cls, catalog_path: Path) -> "ExerciseCatalog":
        """
        Load the catalog from a JSON file.

        Args:
            catalog_path: Path to catalog JSON file (muscle -> list of exercises)

        Returns:
            ExerciseCatalog instance

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ValueError: If the catalog JSON is invalid or empty
        """
        if not catalog_path.exists():
            raise FileNotFoundError(f"Exercise catalog file not found: {catalog_path}")

        with open(catalog_path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("Invalid exercise catalog file: expected a muscle group mapping")

        try:
            return cls.from_dict(data)
        except Exception as e:
            raise ValueError(f"Invalid exercise catalog file: {e}")

    def muscle_groups(self) -> List[str]:
        return list(self._by_muscle)

    def for_muscle(self, muscle_group: str) -> List[ExerciseDefinition]:
        """Exercises for a muscle group; unknown groups yield an empty list."""
        return list(self._by_muscle.get(muscle_group, []))

    def all_exercises(self) -> List[ExerciseDefinition]:
        """Every catalog entry, in catalog order, without id duplicates."""
        return list(self._by_id.values())

    def get(self, exercise_id: str) -> Optional[ExerciseDefinition]:
        return self._by_id.get(exercise_id)

    def find_by_name(self, name: str) -> Optional[ExerciseDefinition]:
        """Case-insensitive lookup of an exercise by display name."""
        return self._by_name.get(name.lower())

    def muscle_group_for_name(self, name: str) -> Optional[str]:
        return self._muscle_by_name.get(name.lower())

    def all_equipment(self) -> List[str]:
        """Sorted set of every equipment item any exercise requires."""
        return sorted({item for exercise in self._by_id.values() for item in exercise.equipment})

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id


def load_default_catalog() -> ExerciseCatalog:
    """Load the bundled exercise catalog."""
    return ExerciseCatalog.from_file(DEFAULT_CATALOG_PATH)
