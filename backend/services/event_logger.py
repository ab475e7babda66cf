"""
Analytics event logging.

Events are best-effort: a failed write is logged and never propagates
to the request that produced it.
"""
from typing import Any, Dict, Optional
import logging

from application.ports.event_log_repository import EventLogRepository

logger = logging.getLogger(__name__)


class EventLogger:
    """Fire-and-forget writer for the workout_events log."""

    def __init__(self, event_repo: EventLogRepository):
        self._event_repo = event_repo

    def record(
        self,
        event_type: str,
        user_id: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Record an analytics event.

        Returns:
            True if the event was written, False if the write failed
        """
        try:
            self._event_repo.record(event_type, user_id, payload or {})
            return True
        except Exception as e:
            logger.warning(f"Failed to record {event_type} event for user {user_id}: {e}")
            return False
