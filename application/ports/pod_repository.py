"""
Pod Repository Interfaces (Ports).

This module defines the abstract interfaces for accountability pod
persistence: pods and memberships, weekly commitments, invitations
and encouragement messages.
"""
from typing import Protocol, Optional, List, Dict, Any, Sequence


class PodRepository(Protocol):
    """
    Abstract interface for pods, memberships and weekly commitments.

    Membership rows carry a status of "active" or "left"; there is at most
    one active membership per (pod, user).
    """

    def list_pod_ids_for_user(self, user_id: str) -> List[str]:
        """
        Get ids of pods where the user is an active member.

        Args:
            user_id: User ID

        Returns:
            List of pod ids
        """
        ...

    def get_pods(self, pod_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Get pod rows (id, name, description, creator_id, created_at, updated_at).

        Args:
            pod_ids: Pod ids to fetch

        Returns:
            List of pod dicts
        """
        ...

    def get_pod(self, pod_id: str) -> Optional[Dict[str, Any]]:
        """Get a single pod row, or None if it does not exist."""
        ...

    def create_pod(
        self,
        *,
        name: str,
        description: Optional[str],
        creator_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Insert a new pod.

        Returns:
            The created pod row, or None on failure
        """
        ...

    def delete_pod(self, pod_id: str) -> bool:
        """
        Delete a pod. Members, commitments, invites and messages cascade.

        Returns:
            True if the delete succeeded
        """
        ...

    def get_active_members(self, pod_id: str) -> List[Dict[str, Any]]:
        """
        Get active members joined with their profile.

        Rows are ordered by joined_at ascending and contain user_id,
        display_name, username, joined_at and status.

        Raises:
            Exception: If the store query fails
        """
        ...

    def get_active_members_for_pods(
        self,
        pod_ids: Sequence[str],
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Get active members of several pods in one query.

        Returns:
            Map of pod_id to member rows shaped as in get_active_members.
            Every requested pod has a key, empty when it has no members.

        Raises:
            Exception: If the store query fails
        """
        ...

    def get_membership(self, pod_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the membership row for (pod, user) in any status, or None."""
        ...

    def count_active_members(self, pod_id: str) -> int:
        """Count active members of a pod."""
        ...

    def activate_member(self, pod_id: str, user_id: str) -> bool:
        """
        Make the user an active member, re-activating a "left" row if present.

        Returns:
            True if the membership is now active
        """
        ...

    def set_member_status(self, pod_id: str, user_id: str, status: str) -> bool:
        """
        Update the status of the user's active membership.

        Returns:
            True if the update succeeded
        """
        ...

    def get_commitments(
        self,
        pod_id: str,
        *,
        week_start_dates: Sequence[str],
    ) -> List[Dict[str, Any]]:
        """
        Get commitments of all members for the given weeks in one query.

        Args:
            pod_id: Pod ID
            week_start_dates: ISO dates (Mondays) to fetch

        Returns:
            List of dicts with user_id, week_start_date and workouts_per_week
        """
        ...

    def get_commitment(
        self,
        pod_id: str,
        user_id: str,
        week_start_date: str,
    ) -> Optional[int]:
        """Get one member's target for one week, or None if not set."""
        ...

    def upsert_commitment(
        self,
        *,
        pod_id: str,
        user_id: str,
        week_start_date: str,
        workouts_per_week: int,
    ) -> bool:
        """
        Insert or replace the commitment for (pod, user, week_start_date).

        Returns:
            True if the upsert succeeded
        """
        ...


class PodInviteRepository(Protocol):
    """Abstract interface for pod invitations."""

    def get_invite(self, invite_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an invite with id, pod_id, pod_name, inviter_id, invitee_id and status.
        """
        ...

    def find_invite(self, pod_id: str, invitee_id: str) -> Optional[Dict[str, Any]]:
        """Get the invite addressed to a user for a pod, in any status."""
        ...

    def list_pending_invites(self, invitee_id: str) -> List[Dict[str, Any]]:
        """Get pending invites addressed to a user, newest first."""
        ...

    def create_invite(
        self,
        *,
        pod_id: str,
        inviter_id: str,
        invitee_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Create a pending invite. Returns the row, or None on failure."""
        ...

    def update_invite_status(self, invite_id: str, status: str) -> bool:
        """Set an invite's status to accepted or declined."""
        ...

    def delete_invite(self, invite_id: str) -> bool:
        """Delete an invite so the user can be invited again."""
        ...


class PodMessageRepository(Protocol):
    """Abstract interface for pod encouragement messages."""

    def create_message(
        self,
        *,
        pod_id: str,
        sender_id: str,
        message: str,
        recipient_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Insert a message. recipient_id None addresses the whole pod.

        Returns:
            Dict with id and created_at, or None on failure
        """
        ...

    def list_recent_messages(
        self,
        pod_id: str,
        *,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """
        Get the most recent messages, newest first, with sender_name and
        recipient_name resolved from profiles.
        """
        ...
