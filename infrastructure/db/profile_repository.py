"""
Supabase Profile Repository Implementation.
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseProfileRepository:
    """Supabase implementation of ProfileRepository over the profiles table."""

    def __init__(self, client: Client):
        self._client = client

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("profiles") \
                .select("id, username, display_name") \
                .eq("username", username) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error looking up username {username}: {e}")
            return None

    def get_feature_flags(self, user_id: str) -> Dict[str, bool]:
        try:
            result = self._client.table("profiles") \
                .select("feature_flags") \
                .eq("id", user_id) \
                .limit(1) \
                .execute()
            if not result.data:
                return {}
            return result.data[0].get("feature_flags") or {}
        except Exception as e:
            logger.exception(f"Error fetching feature flags for user {user_id}: {e}")
            return {}

    def touch_last_launcher_used(self, user_id: str) -> None:
        try:
            self._client.table("profiles") \
                .update({"last_launcher_used_at": datetime.now(timezone.utc).isoformat()}) \
                .eq("id", user_id) \
                .execute()
        except Exception as e:
            logger.warning(f"Failed to update last_launcher_used_at for user {user_id}: {e}")
