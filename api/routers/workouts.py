"""
Workout router for the smart launcher, adaptive workouts and fatigue.

This router contains endpoints for:
- GET /workout/launcher - Predicted workout plus alternatives
- POST /workout/launcher/start - Record accepting or rejecting the prediction
- GET /workout/adaptive - Fatigue-adjusted workout
- POST /workout/adaptive/start - Record accepting or rejecting it
- GET /workout/fatigue - Fatigue analysis
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel

from api.deps import (
    get_adaptive_workout_service,
    get_cached_launcher_service,
    get_current_user,
    get_fatigue_service,
    get_launcher_service,
    get_profile_repo,
)
from application.ports import ProfileRepository
from backend.core.adaptive_workout import AdaptiveWorkoutService
from backend.core.fatigue import FatigueService, get_fatigue_status
from backend.core.launcher import LauncherService
from backend.services.launcher_cache import CachedLauncherService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workout",
    tags=["Workouts"],
)


# =============================================================================
# Request Models
# =============================================================================


class LauncherStartRequest(BaseModel):
    """Request model for launcher acceptance/rejection."""
    accepted: Optional[bool] = None
    template_id: Optional[str] = None
    time_to_decision_ms: Optional[int] = None
    chosen_alternative_id: Optional[str] = None
    reason: Optional[str] = None


class AdaptiveStartRequest(BaseModel):
    """Request model for adaptive workout acceptance/rejection."""
    accepted: Optional[bool] = None
    template_id: Optional[str] = None
    adaptation_type: Optional[str] = None
    reason: Optional[str] = None


# =============================================================================
# Smart Launcher
# =============================================================================


@router.get("/launcher")
def get_launcher_endpoint(
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    launcher: LauncherService = Depends(get_launcher_service),
    cached_launcher: CachedLauncherService = Depends(get_cached_launcher_service),
):
    """
    Get the predicted workout for right now.

    Requires the launcher_enabled feature flag. Cached predictions are
    returned immediately and refreshed in the background.
    """
    flags = profile_repo.get_feature_flags(user_id)
    if not flags.get("launcher_enabled"):
        raise HTTPException(status_code=403, detail="Feature not enabled")

    response = cached_launcher.get_prediction(user_id, background_tasks)
    launcher.mark_launcher_used(user_id, response)
    return response


@router.post("/launcher/start")
def launcher_start_endpoint(
    request: LauncherStartRequest,
    user_id: str = Depends(get_current_user),
    launcher: LauncherService = Depends(get_launcher_service),
    cached_launcher: CachedLauncherService = Depends(get_cached_launcher_service),
):
    """Record whether the user started the suggested workout or picked another."""
    if request.accepted is None:
        raise HTTPException(status_code=400, detail="Missing required field: accepted")

    if request.accepted:
        launcher.record_launcher_event(user_id, "launcher_accepted", {
            "template_id": request.template_id,
            "time_to_decision_ms": request.time_to_decision_ms,
            "modified": False,
        })
    else:
        launcher.record_launcher_event(user_id, "launcher_rejected", {
            "template_id": request.template_id,
            "chosen_alternative_id": request.chosen_alternative_id,
            "reason": request.reason or "picked_alternative",
        })

    # Next prediction should reflect the workout being started
    cached_launcher.invalidate(user_id)

    return {
        "success": True,
        "message": "Launcher workout accepted" if request.accepted else "Alternative chosen",
    }


# =============================================================================
# Adaptive Workouts
# =============================================================================


@router.get("/adaptive")
def get_adaptive_workout_endpoint(
    user_id: str = Depends(get_current_user),
    adaptive: AdaptiveWorkoutService = Depends(get_adaptive_workout_service),
):
    """Get today's workout adjusted for current fatigue."""
    return adaptive.generate(user_id)


@router.post("/adaptive/start")
def adaptive_start_endpoint(
    request: AdaptiveStartRequest,
    user_id: str = Depends(get_current_user),
    adaptive: AdaptiveWorkoutService = Depends(get_adaptive_workout_service),
):
    if request.accepted is None:
        raise HTTPException(status_code=400, detail="Missing required field: accepted")

    adaptive.record_response(
        user_id,
        accepted=request.accepted,
        template_id=request.template_id,
        adaptation_type=request.adaptation_type,
        reason=request.reason,
    )
    return {
        "success": True,
        "message": "Adaptive workout accepted" if request.accepted else "Adaptive workout rejected",
    }


@router.get("/fatigue")
def get_fatigue_endpoint(
    user_id: str = Depends(get_current_user),
    fatigue: FatigueService = Depends(get_fatigue_service),
):
    """
    Get the fatigue analysis for the last 28 days.

    Returns:
        Score, tier, recommended adaptation, metrics and a display status
    """
    analysis = fatigue.analyze(user_id)
    return {**analysis.model_dump(mode="json"), "status": get_fatigue_status(analysis.fatigue_score)}
