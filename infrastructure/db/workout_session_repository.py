"""
Supabase Workout Session Repository Implementation.

Reads completed rows of the workout_sessions table.
"""
from datetime import datetime
from typing import Optional, List, Dict, Any, Sequence
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseWorkoutSessionRepository:
    """Supabase implementation of WorkoutSessionRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def list_completed_start_times(
        self,
        user_ids: Sequence[str],
        *,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        if not user_ids:
            return []
        try:
            query = self._client.table("workout_sessions") \
                .select("user_id, started_at") \
                .in_("user_id", list(user_ids)) \
                .eq("status", "completed") \
                .gte("started_at", since.isoformat())
            if until is not None:
                query = query.lt("started_at", until.isoformat())
            result = query.execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error fetching session start times: {e}")
            return []

    def list_completed_sessions(
        self,
        user_id: str,
        *,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._client.table("workout_sessions") \
                .select("id, template_id, started_at, duration_seconds, total_volume_kg") \
                .eq("user_id", user_id) \
                .eq("status", "completed")
            if since is not None:
                query = query.gte("started_at", since.isoformat())
            query = query.order("started_at", desc=True)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error fetching sessions for user {user_id}: {e}")
            return []
