"""
Event Log Repository Interface (Port).

Analytics events (launcher impressions, adaptive workout responses,
commitments) are appended to a shared event log.
"""
from typing import Protocol, Dict, Any


class EventLogRepository(Protocol):
    """Append-only analytics event sink."""

    def record(
        self,
        event_type: str,
        user_id: str,
        payload: Dict[str, Any],
    ) -> None:
        """
        Append an event.

        Implementations may raise on failure; callers that must not fail
        wrap this in backend.services.event_logger.EventLogger.

        Args:
            event_type: Event type (e.g. "workout_launched")
            user_id: User the event belongs to
            payload: Event data stored as JSON
        """
        ...
