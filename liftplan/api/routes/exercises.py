"""
Exercise API Routes

Endpoints for ranked exercise selection and substitution.
"""

from fastapi import APIRouter, HTTPException, status

from liftplan.api.models.requests import ExerciseSelectionRequest, SubstitutionRequest
from liftplan.api.models.responses import ExerciseSelectionResponse, SubstitutionResponse
from liftplan.catalog import ExerciseCatalog, load_default_catalog
from liftplan.selector import ExerciseSelector, SelectionContext
from liftplan.substitution import SubstitutionEngine

router = APIRouter()


def _load_catalog() -> ExerciseCatalog:
    """
    Load the bundled exercise catalog.

    Raises:
        HTTPException: If the catalog is missing or invalid
    """
    try:
        return load_default_catalog()
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load exercise catalog: {str(e)}",
        )


@router.post("/exercises/select", response_model=ExerciseSelectionResponse)
async def select_exercises(request: ExerciseSelectionRequest) -> ExerciseSelectionResponse:
    """
    Rank catalog exercises for a muscle group by priority score.

    Unknown muscle groups return an empty list.
    """
    selector = ExerciseSelector(_load_catalog())
    context = SelectionContext(
        weak_muscles=request.weak_muscles,
        recent_exercises=request.recent_exercises,
        sex=request.sex,
    )
    selected = selector.select_for_muscle(request.muscle_group, request.count, context)
    return ExerciseSelectionResponse(
        muscle_group=request.muscle_group, exercises=selected, count=len(selected)
    )


@router.post("/exercises/substitutions", response_model=SubstitutionResponse)
async def substitute_exercise(request: SubstitutionRequest) -> SubstitutionResponse:
    """
    Rank alternatives for an exercise given the available equipment.

    Raises:
        HTTPException: 404 if the exercise is unknown, 400 if equipment is missing
    """
    catalog = _load_catalog()
    original = catalog.get(request.exercise) or catalog.find_by_name(request.exercise)
    if original is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Exercise '{request.exercise}' not found in catalog",
        )

    try:
        substitutes = SubstitutionEngine(catalog).substitutions_for(
            original, request.available_equipment
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SubstitutionResponse(original=original, substitutes=substitutes)
