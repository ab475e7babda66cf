"""
Fake Profile Repository for Testing.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone


class FakeProfileRepository:
    """In-memory fake implementation of ProfileRepository."""

    def __init__(self):
        self._profiles: Dict[str, Dict[str, Any]] = {}

    def reset(self) -> None:
        self._profiles.clear()

    def seed(self, profiles: List[Dict[str, Any]]) -> None:
        """Seed profiles. Each dict needs id; username, display_name and feature_flags are optional."""
        for profile in profiles:
            row = {"username": None, "display_name": None, "feature_flags": {}}
            row.update(profile)
            self._profiles[row["id"]] = row

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self._profiles.get(user_id)

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        for profile in self._profiles.values():
            if profile.get("username") == username:
                return {
                    "id": profile["id"],
                    "username": profile["username"],
                    "display_name": profile.get("display_name"),
                }
        return None

    def get_feature_flags(self, user_id: str) -> Dict[str, bool]:
        profile = self._profiles.get(user_id)
        if not profile:
            return {}
        return dict(profile.get("feature_flags") or {})

    def touch_last_launcher_used(self, user_id: str) -> None:
        profile = self._profiles.get(user_id)
        if profile is not None:
            profile["last_launcher_used_at"] = datetime.now(timezone.utc).isoformat()
