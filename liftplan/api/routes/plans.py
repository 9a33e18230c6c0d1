"""
Training Plans API Routes

Endpoints for volume landmarks, mesocycle generation and program scheduling.
"""

from fastapi import APIRouter, HTTPException, status

from liftplan.api.models.requests import LandmarksRequest, MesocycleRequest, ProgramPlanRequest
from liftplan.api.models.responses import (
    LandmarksResponse,
    MesocycleResponse,
    ProgramPlanResponse,
)
from liftplan.api.routes.exercises import _load_catalog
from liftplan.landmarks import LandmarkCalculator
from liftplan.planner import MesocyclePlanner, generate_program_plan

router = APIRouter()


@router.post("/landmarks", response_model=LandmarksResponse)
async def calculate_landmarks(request: LandmarksRequest) -> LandmarksResponse:
    """
    Calculate MV/MEV/MAV/MRV for an athlete.

    Args:
        request: LandmarksRequest with profile, muscle groups and frequency

    Returns:
        LandmarksResponse with TAF, RCS and per-muscle landmarks
    """
    calculator = LandmarkCalculator(request.athlete_profile)
    muscles = request.muscle_groups or _load_catalog().muscle_groups()
    landmarks = calculator.landmarks_for(
        muscles, {muscle: request.training_frequency for muscle in muscles}
    )
    return LandmarksResponse(
        training_age_factor=calculator.training_age_factor(),
        recovery_capacity_score=calculator.recovery_capacity_score(),
        landmarks=landmarks,
    )


@router.post("/mesocycles", response_model=MesocycleResponse)
async def generate_mesocycle(request: MesocycleRequest) -> MesocycleResponse:
    """
    Generate a mesocycle: progression weeks plus a deload week.

    Raises:
        HTTPException: 400 if generation rejects the inputs
    """
    planner = MesocyclePlanner(request.athlete_profile, _load_catalog())
    try:
        mesocycle = planner.generate(
            days_per_week=request.days_per_week,
            mesocycle_length=request.mesocycle_length,
            recent_exercises=request.recent_exercises,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MesocycleResponse(mesocycle=mesocycle)


@router.post("/programs", response_model=ProgramPlanResponse)
async def schedule_program(request: ProgramPlanRequest) -> ProgramPlanResponse:
    """
    Rotate a template program into a scheduled day list.

    Raises:
        HTTPException: 400 if the template has no workouts
    """
    try:
        plan = generate_program_plan(request.program, request.duration, request.start_index)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProgramPlanResponse(plan=plan)
