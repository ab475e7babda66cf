"""
Workout Session Repository Interface (Port).

Completed workout sessions are the source of truth for pod progress,
fatigue scoring and launcher predictions. They are immutable once
completed.
"""
from datetime import datetime
from typing import Protocol, Optional, List, Dict, Any, Sequence


class WorkoutSessionRepository(Protocol):
    """Read access to completed workout sessions."""

    def list_completed_start_times(
        self,
        user_ids: Sequence[str],
        *,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get start times of completed sessions for several users in one query.

        Args:
            user_ids: Users to include
            since: Inclusive lower bound on started_at
            until: Exclusive upper bound on started_at, or None for no bound

        Returns:
            List of dicts with user_id and started_at (ISO string)
        """
        ...

    def list_completed_sessions(
        self,
        user_id: str,
        *,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get a user's completed sessions, newest first.

        Args:
            user_id: User ID
            since: Inclusive lower bound on started_at
            limit: Maximum rows to return

        Returns:
            List of dicts with id, template_id, started_at,
            duration_seconds and total_volume_kg
        """
        ...
