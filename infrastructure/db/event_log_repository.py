"""
Supabase Event Log Repository Implementation.

Appends analytics events to the workout_events table.
"""
from typing import Dict, Any

from supabase import Client


class SupabaseEventLogRepository:
    """
    Supabase implementation of EventLogRepository.

    Errors propagate; backend.services.event_logger.EventLogger decides
    what to do with them.
    """

    def __init__(self, client: Client):
        self._client = client

    def record(
        self,
        event_type: str,
        user_id: str,
        payload: Dict[str, Any],
    ) -> None:
        self._client.table("workout_events").insert({
            "user_id": user_id,
            "event_type": event_type,
            "event_data": payload,
        }).execute()
