"""
Pod Progress Aggregation.

Derives each active member's weekly progress from their commitment and
completed workout sessions:
- completed sessions this week (Monday-start)
- percentage of the weekly goal, capped at 100
- on-track flag
- streak of consecutive weeks meeting the goal

Progress is recomputed on every read and never stored.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from application.ports.pod_repository import PodRepository
from application.ports.workout_session_repository import WorkoutSessionRepository
from backend.core.time_windows import (
    ONE_WEEK,
    current_week_start,
    parse_timestamp,
    resolve_now,
    week_start_date,
    week_window,
)
from domain.models.pod import MemberProgress

logger = logging.getLogger(__name__)

STREAK_WINDOW_WEEKS = 12


# =============================================================================
# Pure calculations
# =============================================================================


def calculate_progress_percentage(completed: int, commitment: int) -> int:
    """
    Percentage of the weekly goal reached, rounded and capped at 100.

    A goal of 0 (not set) always yields 0.
    """
    if commitment <= 0:
        return 0
    return min(100, round(completed / commitment * 100))


def is_on_track(completed: int, commitment: int) -> bool:
    """A member is on track once they have met a non-zero goal."""
    return commitment > 0 and completed >= commitment


@dataclass
class WeekRecord:
    """One week of a member's history. commitment is None when no goal was set."""
    commitment: Optional[int]
    completed: int = 0


def calculate_streak(weeks: Sequence[WeekRecord]) -> int:
    """
    Count consecutive weeks in which the goal was met.

    ``weeks[0]`` is the current week, ``weeks[1]`` the week before, and so
    on; at most STREAK_WINDOW_WEEKS records are considered. The current
    week never breaks the streak since it may still be in progress.

    Args:
        weeks: Week records, newest first

    Returns:
        Streak length in weeks
    """
    streak = 0
    for index, week in enumerate(weeks[:STREAK_WINDOW_WEEKS]):
        if week.commitment is None:
            if index == 0:
                continue
            break
        if week.completed >= week.commitment:
            streak += 1
        elif index > 0:
            break
    return streak


def bucket_sessions_by_week(
    sessions: Sequence[Dict],
    week_start: datetime,
    weeks: int = STREAK_WINDOW_WEEKS,
) -> Dict[Tuple[str, int], int]:
    """
    Count sessions per (user_id, weeks_back) relative to ``week_start``.

    Sessions are placed in weeks by their start time in week_start's
    timezone. Sessions older than the window are ignored; anything after
    week_start counts toward the current week.
    """
    counts: Dict[Tuple[str, int], int] = {}
    oldest = week_window(week_start, weeks - 1)[0]
    for session in sessions:
        started = parse_timestamp(session.get("started_at"))
        if started is None:
            continue
        if week_start.tzinfo is not None:
            started = started.astimezone(week_start.tzinfo)
        else:
            started = started.replace(tzinfo=None)
        if started < oldest:
            continue
        weeks_back = 0 if started >= week_start else -((started - week_start) // ONE_WEEK)
        if weeks_back >= weeks:
            continue
        key = (session.get("user_id"), weeks_back)
        counts[key] = counts.get(key, 0) + 1
    return counts


# =============================================================================
# Pod Progress Service
# =============================================================================


class PodProgressService:
    """
    Computes member progress for a pod.

    Issues a fixed number of store queries per pod regardless of member
    count: members, commitments for the streak window, and completed
    session start times for all members.
    """

    def __init__(
        self,
        pod_repo: PodRepository,
        session_repo: WorkoutSessionRepository,
    ):
        self._pod_repo = pod_repo
        self._session_repo = session_repo

    def get_pod_member_progress(
        self,
        pod_id: str,
        now: Optional[datetime] = None,
    ) -> List[MemberProgress]:
        """
        Get progress for every active member of a pod.

        Args:
            pod_id: Pod ID
            now: Reference instant (defaults to current local time)

        Returns:
            One MemberProgress per active member, in member fetch order.
            Empty if the members could not be loaded.
        """
        now = resolve_now(now)
        week_start = current_week_start(now)

        try:
            members = self._pod_repo.get_active_members(pod_id)
        except Exception:
            logger.exception(f"Failed to fetch members for pod {pod_id}")
            return []

        if not members:
            return []

        user_ids = [m["user_id"] for m in members]
        week_dates = [
            week_window(week_start, weeks_back)[0].date().isoformat()
            for weeks_back in range(STREAK_WINDOW_WEEKS)
        ]

        # One query for this week's goals and the streak history
        targets: Dict[Tuple[str, str], int] = {}
        for row in self._pod_repo.get_commitments(pod_id, week_start_dates=week_dates):
            key = (row.get("user_id"), str(row.get("week_start_date"))[:10])
            targets[key] = int(row.get("workouts_per_week") or 0)

        # No upper bound: the current week is still in progress
        window_start = week_window(week_start, STREAK_WINDOW_WEEKS - 1)[0]
        sessions = self._session_repo.list_completed_start_times(
            user_ids,
            since=window_start,
        )
        counts = bucket_sessions_by_week(sessions, week_start)

        progress: List[MemberProgress] = []
        for member in members:
            user_id = member["user_id"]
            commitment = targets.get((user_id, week_dates[0]), 0)
            completed = counts.get((user_id, 0), 0)

            weeks = [
                WeekRecord(
                    commitment=targets.get((user_id, week_date)),
                    completed=counts.get((user_id, weeks_back), 0),
                )
                for weeks_back, week_date in enumerate(week_dates)
            ]

            progress.append(MemberProgress(
                user_id=user_id,
                display_name=member.get("display_name"),
                username=member.get("username"),
                commitment=commitment,
                completed=completed,
                progress_percentage=calculate_progress_percentage(completed, commitment),
                is_on_track=is_on_track(completed, commitment),
                streak=calculate_streak(weeks),
            ))

        return progress

    def get_current_commitment(
        self,
        pod_id: str,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> int:
        """Get the user's goal for the current week (0 when not set)."""
        target = self._pod_repo.get_commitment(
            pod_id,
            user_id,
            week_start_date(resolve_now(now)),
        )
        return target or 0
