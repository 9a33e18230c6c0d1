"""
Session API Routes

Endpoints for daily autoregulation and session-to-session progression.
"""

from fastapi import APIRouter

from liftplan.api.models.requests import AutoregulationRequest, ProgressionRequest
from liftplan.api.models.responses import AutoregulationResponse, ProgressionResponse
from liftplan.api.routes.exercises import _load_catalog
from liftplan.autoregulation import AutoregulationUnit
from liftplan.landmarks import LandmarkCalculator
from liftplan.progression import ProgressionPlanner

router = APIRouter()


@router.post("/autoregulation", response_model=AutoregulationResponse)
async def adjust_workout(request: AutoregulationRequest) -> AutoregulationResponse:
    """Score readiness and adjust the planned workout to it."""
    unit = AutoregulationUnit(_load_catalog())
    score = unit.recovery_score(request.readiness)
    workout, note = unit.adjust_workout(request.workout, score)
    return AutoregulationResponse(recovery_score=score, note=note, workout=workout)


@router.post("/progression", response_model=ProgressionResponse)
async def next_session_targets(request: ProgressionRequest) -> ProgressionResponse:
    """Next-session load and rep targets from the previous session's log."""
    taf = 1.0
    if request.athlete_profile is not None:
        taf = LandmarkCalculator(request.athlete_profile).training_age_factor()
    decision = ProgressionPlanner(taf).calculate_progression(request.exercise_log)
    return ProgressionResponse(decision=decision)
