"""
Adaptive Workout Generator.

Combines the fatigue score with the launcher's template choice and scales
the workout for the user's current state:

- high fatigue   -> REST       fewer sets, lighter weights (-30%)
- medium fatigue -> VOLUME     template as-is
- low fatigue    -> INTENSITY  an extra set and rep (+15%)
"""
from datetime import datetime
from math import floor
from typing import Any, Dict, List, Optional
import logging

from application.exceptions import AccessDeniedError
from application.ports.template_repository import TemplateRepository
from backend.core.fatigue import FatigueService
from backend.core.launcher import (
    DEFAULT_TEMPLATE_NAME,
    WEEKDAY_NAMES,
    LauncherService,
    template_exercises,
)
from backend.core.time_windows import resolve_now
from backend.services.event_logger import EventLogger
from domain.models.adaptive import AdaptationType, AdaptiveWorkout, LauncherExercise

logger = logging.getLogger(__name__)

VOLUME_ADJUSTMENT = {
    AdaptationType.REST: -30,
    AdaptationType.VOLUME: 0,
    AdaptationType.INTENSITY: 15,
}

NAME_PREFIX = {
    AdaptationType.REST: "Recovery ",
    AdaptationType.VOLUME: "",
    AdaptationType.INTENSITY: "Intensity ",
}

PRESET_NAME = {
    AdaptationType.REST: "Active Recovery",
    AdaptationType.VOLUME: "Full Body Workout",
    AdaptationType.INTENSITY: "Full Body Power",
}

MINUTES_PER_EXERCISE = 8
DURATION_MULTIPLIER = {
    AdaptationType.REST: 0.7,
    AdaptationType.VOLUME: 1.0,
    AdaptationType.INTENSITY: 1.2,
}

REST_SCALE = 0.7
REST_MIN_SETS = 2
INTENSITY_MAX_SETS = 6
INTENSITY_REP_CEILING = 12


def adapt_exercise(item: LauncherExercise, adaptation: AdaptationType) -> LauncherExercise:
    """Scale one exercise's prescription for the adaptation type."""
    if adaptation == AdaptationType.REST:
        weight = item.target_weight_kg
        return item.model_copy(update={
            "target_sets": max(REST_MIN_SETS, floor(item.target_sets * REST_SCALE)),
            "target_weight_kg": round(weight * REST_SCALE, 1) if weight is not None else None,
        })
    if adaptation == AdaptationType.INTENSITY:
        reps = item.target_reps
        return item.model_copy(update={
            "target_sets": min(INTENSITY_MAX_SETS, item.target_sets + 1),
            "target_reps": reps + 1 if reps < INTENSITY_REP_CEILING else reps,
        })
    return item


def estimate_duration_mins(exercise_count: int, adaptation: AdaptationType) -> int:
    return round(MINUTES_PER_EXERCISE * exercise_count * DURATION_MULTIPLIER[adaptation])


class AdaptiveWorkoutService:
    """Generates fatigue-adjusted workout suggestions."""

    def __init__(
        self,
        fatigue_service: FatigueService,
        launcher_service: LauncherService,
        template_repo: TemplateRepository,
        event_logger: EventLogger,
    ):
        self._fatigue = fatigue_service
        self._launcher = launcher_service
        self._template_repo = template_repo
        self._events = event_logger

    def _preset_exercises(self, adaptation: AdaptationType) -> List[LauncherExercise]:
        if adaptation == AdaptationType.REST:
            return self._launcher.preset_exercises(["core", "back"], limit=3, sets=2, reps=12)
        sets = 4 if adaptation == AdaptationType.INTENSITY else 3
        return self._launcher.preset_exercises(limit=5, sets=sets, reps=10)

    def generate(self, user_id: str, now: Optional[datetime] = None) -> AdaptiveWorkout:
        """
        Generate today's adaptive workout.

        Args:
            user_id: Authenticated user ID
            now: Reference instant (defaults to current local time)

        Returns:
            AdaptiveWorkout

        Raises:
            AccessDeniedError: If no user ID is given
        """
        if not user_id:
            raise AccessDeniedError("Unauthorized")

        now = resolve_now(now)
        analysis = self._fatigue.analyze(user_id, now)
        adaptation = analysis.recommendation

        pick = self._launcher.pick_template(user_id, now)
        template = None
        if pick.template_id is not None:
            template = self._template_repo.get_template(pick.template_id)

        base_exercises = template_exercises(template) if template else []
        if base_exercises:
            exercises = [adapt_exercise(item, adaptation) for item in base_exercises]
            template_id = pick.template_id
            template_name = NAME_PREFIX[adaptation] + (template.get("name") or DEFAULT_TEMPLATE_NAME)
            confidence = pick.confidence
            reason = pick.reason
        else:
            exercises = self._preset_exercises(adaptation)
            template_id = None
            template_name = PRESET_NAME[adaptation]
            confidence = "low"
            reason = "Recommended for you"

        workout = AdaptiveWorkout(
            template_id=template_id,
            template_name=template_name,
            exercises=exercises,
            estimated_duration_mins=estimate_duration_mins(len(exercises), adaptation),
            confidence=confidence,
            reason=reason,
            fatigue_score=analysis.fatigue_score,
            adaptation_type=adaptation,
            adaptation_reason=analysis.reason,
            volume_adjustment=VOLUME_ADJUSTMENT[adaptation],
        )

        self._events.record("workout_launched", user_id, {
            "action": "adaptive_shown",
            "adaptation_type": adaptation.value,
            "fatigue_score": analysis.fatigue_score,
            "volume_adjustment": workout.volume_adjustment,
            "template_id": template_id,
            "day_of_week": WEEKDAY_NAMES[now.weekday()],
        })
        return workout

    def record_response(
        self,
        user_id: str,
        *,
        accepted: bool,
        template_id: Optional[str] = None,
        adaptation_type: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> bool:
        """Record whether the user started or dismissed the adaptive workout."""
        if not user_id:
            raise AccessDeniedError("Unauthorized")
        payload: Dict[str, Any] = {"adaptation_type": adaptation_type}
        if accepted:
            payload.update(action="adaptive_accepted", template_id=template_id)
        else:
            payload.update(action="adaptive_rejected", reason=reason or "user_chose_different")
        return self._events.record("workout_launched", user_id, payload)
