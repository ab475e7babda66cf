"""
Smart Workout Launcher.

Predicts the workout a user most likely wants to start right now from
their last 30 days of completed sessions:

1. A template done at least twice on today's weekday -> high confidence
2. Otherwise the most recent session's template -> medium confidence
3. Otherwise a full-body preset of compound exercises -> low confidence
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence
import logging

from application.ports.template_repository import TemplateRepository
from application.ports.workout_session_repository import WorkoutSessionRepository
from application.ports.profile_repository import ProfileRepository
from backend.core.time_windows import parse_timestamp, resolve_now
from backend.services.event_logger import EventLogger
from domain.models.adaptive import (
    AlternativeTemplate,
    ExerciseRef,
    LauncherExercise,
    LauncherPrediction,
    LauncherResponse,
)

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 30
DEFAULT_DURATION_MINS = 45
DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_TEMPLATE_NAME = "Workout"

PRESET_NAME = "Full Body Workout"
PRESET_MUSCLE_GROUPS = ("chest", "back", "legs")
PRESET_EXERCISE_LIMIT = 5

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

LAUNCHER_ACTIONS = ("launcher_shown", "launcher_accepted", "launcher_rejected")


@dataclass
class TemplatePick:
    """Result of pattern matching over recent sessions."""
    template_id: Optional[str]
    confidence: str
    reason: str
    sessions: List[Dict[str, Any]] = field(default_factory=list)


# =============================================================================
# Pattern selection
# =============================================================================


def select_template(
    sessions: Sequence[Dict[str, Any]],
    now: datetime,
) -> TemplatePick:
    """
    Pick the template to suggest.

    Args:
        sessions: Completed sessions, newest first
        now: Reference instant; its weekday and timezone are used

    Returns:
        TemplatePick with the sessions that support the choice
    """
    weekday = now.weekday()
    same_day = []
    for session in sessions:
        started = parse_timestamp(session.get("started_at"))
        if started is not None and started.astimezone(now.tzinfo).weekday() == weekday:
            same_day.append(session)

    if len(same_day) >= 2:
        # Counter keeps first-seen order on ties, so the most recent wins
        counts = Counter(s["template_id"] for s in same_day if s.get("template_id"))
        if counts:
            template_id, uses = counts.most_common(1)[0]
            if uses >= 2:
                return TemplatePick(
                    template_id=template_id,
                    confidence="high",
                    reason=f"You usually do this on {WEEKDAY_NAMES[weekday]}s",
                    sessions=[s for s in same_day if s.get("template_id") == template_id],
                )

    recent = next((s for s in sessions if s.get("template_id")), None)
    if recent is not None:
        return TemplatePick(
            template_id=recent["template_id"],
            confidence="medium",
            reason="Your most recent workout",
            sessions=[recent],
        )

    return TemplatePick(template_id=None, confidence="low", reason="Recommended for you")


def time_of_day(now: datetime) -> str:
    if now.hour < 12:
        return "morning"
    if now.hour < 18:
        return "afternoon"
    return "evening"


def estimate_duration_mins(sessions: Sequence[Dict[str, Any]]) -> int:
    """Mean recorded duration of the sessions in minutes (45 when unknown)."""
    durations = [
        s["duration_seconds"] for s in sessions
        if isinstance(s.get("duration_seconds"), (int, float)) and s["duration_seconds"] > 0
    ]
    if not durations:
        return DEFAULT_DURATION_MINS
    return round(sum(durations) / len(durations) / 60)


def exercise_ref(row: Dict[str, Any]) -> ExerciseRef:
    return ExerciseRef(
        id=str(row.get("id")),
        name=row.get("name") or "",
        muscle_group=row.get("muscle_group"),
        equipment=row.get("equipment"),
    )


def template_exercises(template: Dict[str, Any]) -> List[LauncherExercise]:
    """
    Convert a template into launcher exercises.

    Set count comes from the number of template sets; reps and weight
    from the first set.
    """
    exercises: List[LauncherExercise] = []
    for item in template.get("exercises") or []:
        row = item.get("exercise")
        if not row:
            continue
        sets = item.get("sets") or []
        first = sets[0] if sets else {}
        exercises.append(LauncherExercise(
            exercise=exercise_ref(row),
            target_sets=len(sets) or DEFAULT_SETS,
            target_reps=first.get("reps") or DEFAULT_REPS,
            target_weight_kg=first.get("weight_kg") or None,
        ))
    return exercises


# =============================================================================
# Launcher Service
# =============================================================================


class LauncherService:
    """Builds launcher predictions and records launcher analytics."""

    def __init__(
        self,
        session_repo: WorkoutSessionRepository,
        template_repo: TemplateRepository,
        event_logger: EventLogger,
        profile_repo: Optional[ProfileRepository] = None,
    ):
        self._session_repo = session_repo
        self._template_repo = template_repo
        self._events = event_logger
        self._profile_repo = profile_repo

    def recent_sessions(self, user_id: str, now: datetime) -> List[Dict[str, Any]]:
        """Completed sessions from the lookback window, newest first."""
        return self._session_repo.list_completed_sessions(
            user_id,
            since=now - timedelta(days=LOOKBACK_DAYS),
        )

    def pick_template(self, user_id: str, now: Optional[datetime] = None) -> TemplatePick:
        now = resolve_now(now)
        return select_template(self.recent_sessions(user_id, now), now)

    def preset_exercises(
        self,
        muscle_groups: Sequence[str] = PRESET_MUSCLE_GROUPS,
        *,
        limit: int = PRESET_EXERCISE_LIMIT,
        sets: int = DEFAULT_SETS,
        reps: int = DEFAULT_REPS,
    ) -> List[LauncherExercise]:
        """Compound catalog exercises with a fixed prescription."""
        rows = self._template_repo.find_exercises(
            muscle_groups=list(muscle_groups),
            category="compound",
            limit=limit,
        )
        return [
            LauncherExercise(exercise=exercise_ref(row), target_sets=sets, target_reps=reps)
            for row in rows
        ]

    def preset_prediction(self) -> LauncherPrediction:
        return LauncherPrediction(
            template_id=None,
            template_name=PRESET_NAME,
            exercises=self.preset_exercises(),
            estimated_duration_mins=DEFAULT_DURATION_MINS,
            confidence="low",
            reason="Recommended for you",
        )

    def predict(self, user_id: str, now: Optional[datetime] = None) -> LauncherPrediction:
        """
        Predict today's workout for a user.

        Falls back to the preset when the picked template no longer exists.
        """
        pick = self.pick_template(user_id, now)
        if pick.template_id is None:
            return self.preset_prediction()

        template = self._template_repo.get_template(pick.template_id)
        if not template:
            logger.warning(f"Launcher template {pick.template_id} not found for user {user_id}")
            return self.preset_prediction()

        return LauncherPrediction(
            template_id=pick.template_id,
            template_name=template.get("name") or DEFAULT_TEMPLATE_NAME,
            exercises=template_exercises(template),
            estimated_duration_mins=estimate_duration_mins(pick.sessions),
            confidence=pick.confidence,
            reason=pick.reason,
        )

    def alternative_templates(self, user_id: str, limit: int = 3) -> List[AlternativeTemplate]:
        rows = self._template_repo.list_recent_templates(user_id, limit=limit)
        return [
            AlternativeTemplate(
                id=str(row["id"]),
                name=row.get("name") or DEFAULT_TEMPLATE_NAME,
                exercise_count=row.get("exercise_count") or 0,
                last_used=row.get("updated_at"),
            )
            for row in rows
        ]

    def get_launcher(self, user_id: str, now: Optional[datetime] = None) -> LauncherResponse:
        return LauncherResponse(
            suggested_workout=self.predict(user_id, now),
            alternative_templates=self.alternative_templates(user_id),
        )

    def mark_launcher_used(
        self,
        user_id: str,
        response: LauncherResponse,
        now: Optional[datetime] = None,
    ) -> None:
        """Record a launcher impression and stamp the user's profile."""
        now = resolve_now(now)
        self.record_launcher_event(user_id, "launcher_shown", {
            "confidence": response.suggested_workout.confidence,
            "template_id": response.suggested_workout.template_id,
            "day_of_week": WEEKDAY_NAMES[now.weekday()],
            "time_of_day": time_of_day(now),
            "alternatives_count": len(response.alternative_templates),
        })
        if self._profile_repo is not None:
            self._profile_repo.touch_last_launcher_used(user_id)

    def record_launcher_event(
        self,
        user_id: str,
        action: str,
        properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        if action not in LAUNCHER_ACTIONS:
            raise ValueError(f"Unknown launcher action: {action}")
        payload = {"action": action}
        payload.update(properties or {})
        self._events.record("workout_launched", user_id, payload)
