"""
Fatigue Scoring.

Turns a user's recent completed sessions into a 0-100 fatigue score,
a tier, and the workout adaptation that tier calls for.

The score starts from a neutral 50 and adds four factors, each of which
only grows as recent (last 7 days) training load grows:
- volume: last 7 days vs the weekly average of the 3 weeks before
- frequency: sessions in the last 7 days
- recovery: days since the last session
- trend: last 7 days vs the 7 days before

Tiers are fixed: <40 low, 40-69 medium, >=70 high.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence
import logging

from application.ports.workout_session_repository import WorkoutSessionRepository
from backend.core.time_windows import parse_timestamp, resolve_now
from domain.models.adaptive import (
    AdaptationType,
    FatigueAnalysis,
    FatigueMetrics,
    FatigueTier,
)

logger = logging.getLogger(__name__)

FATIGUE_WINDOW_DAYS = 28
ACUTE_WINDOW_DAYS = 7
BASELINE_WEEKS = 3
NEUTRAL_SCORE = 50

HIGH_FATIGUE_THRESHOLD = 70
MEDIUM_FATIGUE_THRESHOLD = 40

ADAPTATION_BY_TIER = {
    FatigueTier.HIGH: AdaptationType.REST,
    FatigueTier.MEDIUM: AdaptationType.VOLUME,
    FatigueTier.LOW: AdaptationType.INTENSITY,
}

REASON_BY_TIER = {
    FatigueTier.HIGH: "High recent training load. A lighter recovery session is recommended.",
    FatigueTier.MEDIUM: "Moderate training load. Keep your usual volume.",
    FatigueTier.LOW: "You are well recovered. Ready to push intensity.",
}


@dataclass
class _Session:
    started_at: datetime
    volume: float


def _session_volume(row: Dict[str, Any]) -> float:
    try:
        volume = float(row.get("total_volume_kg") or 0)
    except (TypeError, ValueError):
        return 0.0
    return max(volume, 0.0)


def fatigue_tier(score: int) -> FatigueTier:
    """Map a score to its tier."""
    if score >= HIGH_FATIGUE_THRESHOLD:
        return FatigueTier.HIGH
    if score >= MEDIUM_FATIGUE_THRESHOLD:
        return FatigueTier.MEDIUM
    return FatigueTier.LOW


def get_fatigue_status(score: int) -> str:
    """Display label for a fatigue score."""
    if score >= 70:
        return "Very Fatigued"
    if score >= 50:
        return "Fatigued"
    if score >= 30:
        return "Normal"
    if score >= 15:
        return "Fresh"
    return "Very Fresh"


# =============================================================================
# Factors
# =============================================================================


def _volume_factor(acute: float, baseline_weekly: float) -> int:
    if baseline_weekly > 0:
        ratio = acute / baseline_weekly
        if ratio > 1.5:
            return 25
        if ratio > 1.2:
            return 15
        return 0
    return 15 if acute > 0 else 0


def _frequency_factor(workouts_last_7_days: int) -> int:
    if workouts_last_7_days >= 6:
        return 25
    if workouts_last_7_days >= 5:
        return 15
    if workouts_last_7_days >= 4:
        return 10
    return 0


def _recovery_factor(days_since_last: Optional[int]) -> int:
    if days_since_last is None or days_since_last >= 7:
        return -20
    if days_since_last == 0:
        return 25
    if days_since_last == 1:
        return 15
    if days_since_last >= 4:
        return -10
    return 0


def _trend_change(acute: float, previous_week: float) -> Optional[float]:
    if previous_week <= 0:
        return None
    return (acute - previous_week) / previous_week


def _trend_factor(change: Optional[float], acute: float, baseline_weekly: float) -> int:
    if change is None:
        return 0
    if change > 0.2 and acute > baseline_weekly:
        return 20
    if change < -0.2:
        return -10
    return 0


def _volume_trend(change: Optional[float], acute: float) -> str:
    if change is None:
        return "increasing" if acute > 0 else "stable"
    if change > 0.2:
        return "increasing"
    if change < -0.2:
        return "decreasing"
    return "stable"


# =============================================================================
# Scoring
# =============================================================================


def calculate_fatigue(
    sessions: Sequence[Dict[str, Any]],
    now: Optional[datetime] = None,
) -> FatigueAnalysis:
    """
    Score fatigue from completed sessions.

    Args:
        sessions: Session rows with started_at and total_volume_kg. Rows
            outside the trailing 28 days are ignored.
        now: Reference instant (defaults to current local time)

    Returns:
        FatigueAnalysis; a user with no sessions scores 30 (low)
    """
    now = resolve_now(now)
    window_start = now - timedelta(days=FATIGUE_WINDOW_DAYS)
    acute_start = now - timedelta(days=ACUTE_WINDOW_DAYS)
    previous_start = now - timedelta(days=ACUTE_WINDOW_DAYS * 2)

    parsed: List[_Session] = []
    for row in sessions:
        started = parse_timestamp(row.get("started_at"))
        if started is None or started < window_start or started > now:
            continue
        parsed.append(_Session(started_at=started, volume=_session_volume(row)))

    acute = sum(s.volume for s in parsed if s.started_at >= acute_start)
    previous_week = sum(
        s.volume for s in parsed if previous_start <= s.started_at < acute_start
    )
    baseline_weekly = sum(
        s.volume for s in parsed if s.started_at < acute_start
    ) / BASELINE_WEEKS
    workouts_last_7_days = sum(1 for s in parsed if s.started_at >= acute_start)

    days_since_last: Optional[int] = None
    if parsed:
        latest = max(s.started_at for s in parsed).astimezone(now.tzinfo)
        days_since_last = (now.date() - latest.date()).days

    change = _trend_change(acute, previous_week)
    score = (
        NEUTRAL_SCORE
        + _volume_factor(acute, baseline_weekly)
        + _frequency_factor(workouts_last_7_days)
        + _recovery_factor(days_since_last)
        + _trend_factor(change, acute, baseline_weekly)
    )
    score = max(0, min(100, int(score)))

    tier = fatigue_tier(score)
    return FatigueAnalysis(
        fatigue_score=score,
        tier=tier,
        recommendation=ADAPTATION_BY_TIER[tier],
        reason=REASON_BY_TIER[tier],
        metrics=FatigueMetrics(
            recent_volume=round(acute),
            baseline_volume=round(baseline_weekly),
            workouts_last_7_days=workouts_last_7_days,
            days_since_last_workout=days_since_last,
            volume_trend=_volume_trend(change, acute),
        ),
    )


class FatigueService:
    """Loads session history and scores fatigue for a user."""

    def __init__(self, session_repo: WorkoutSessionRepository):
        self._session_repo = session_repo

    def analyze(self, user_id: str, now: Optional[datetime] = None) -> FatigueAnalysis:
        now = resolve_now(now)
        sessions = self._session_repo.list_completed_sessions(
            user_id,
            since=now - timedelta(days=FATIGUE_WINDOW_DAYS),
        )
        analysis = calculate_fatigue(sessions, now)
        logger.debug(
            f"Fatigue for user {user_id}: score={analysis.fatigue_score} tier={analysis.tier.value}"
        )
        return analysis
