"""
Profile Repository Interface (Port).
"""
from typing import Protocol, Optional, Dict, Any


class ProfileRepository(Protocol):
    """Read/write access to user profiles."""

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """
        Look up a profile by its exact username.

        Returns:
            Dict with id, username and display_name, or None
        """
        ...

    def get_feature_flags(self, user_id: str) -> Dict[str, bool]:
        """Get the user's feature flags (empty dict when none are set)."""
        ...

    def touch_last_launcher_used(self, user_id: str) -> None:
        """Record that the user just opened the smart launcher."""
        ...
