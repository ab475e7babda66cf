"""
Supabase Pod Repository Implementations.

This module implements the PodRepository, PodInviteRepository and
PodMessageRepository protocols over the accountability_pods, pod_members,
pod_commitments, pod_invites and pod_messages tables.
"""
from typing import Optional, List, Dict, Any, Sequence
import logging

from supabase import Client

logger = logging.getLogger(__name__)


def _member_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a pod_members row joined with its profile."""
    profile = row.get("profiles") or {}
    return {
        "user_id": row["user_id"],
        "display_name": profile.get("display_name"),
        "username": profile.get("username"),
        "joined_at": row.get("joined_at"),
        "status": row.get("status", "active"),
    }


class SupabasePodRepository:
    """
    Supabase implementation of PodRepository.

    Reads degrade to empty results on error, except the active member
    lookups which propagate so callers can tell "no members" from "lookup failed".
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    # =========================================================================
    # Pods
    # =========================================================================

    def list_pod_ids_for_user(self, user_id: str) -> List[str]:
        try:
            result = self._client.table("pod_members") \
                .select("pod_id") \
                .eq("user_id", user_id) \
                .eq("status", "active") \
                .execute()
            return [row["pod_id"] for row in result.data or []]
        except Exception as e:
            logger.exception(f"Error fetching memberships for user {user_id}: {e}")
            return []

    def get_pods(self, pod_ids: Sequence[str]) -> List[Dict[str, Any]]:
        if not pod_ids:
            return []
        try:
            result = self._client.table("accountability_pods") \
                .select("id, name, description, creator_id, created_at, updated_at") \
                .in_("id", list(pod_ids)) \
                .order("created_at", desc=True) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error fetching pods: {e}")
            return []

    def get_pod(self, pod_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("accountability_pods") \
                .select("id, name, description, creator_id, created_at, updated_at") \
                .eq("id", pod_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching pod {pod_id}: {e}")
            return None

    def create_pod(
        self,
        *,
        name: str,
        description: Optional[str],
        creator_id: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("accountability_pods").insert({
                "name": name,
                "description": description,
                "creator_id": creator_id,
            }).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error creating pod: {e}")
            return None

    def delete_pod(self, pod_id: str) -> bool:
        try:
            self._client.table("accountability_pods") \
                .delete() \
                .eq("id", pod_id) \
                .execute()
            return True
        except Exception as e:
            logger.exception(f"Error deleting pod {pod_id}: {e}")
            return False

    # =========================================================================
    # Members
    # =========================================================================

    def get_active_members(self, pod_id: str) -> List[Dict[str, Any]]:
        result = self._client.table("pod_members") \
            .select("user_id, joined_at, status, profiles!inner(display_name, username)") \
            .eq("pod_id", pod_id) \
            .eq("status", "active") \
            .order("joined_at", desc=False) \
            .execute()

        return [_member_row(row) for row in result.data or []]

    def get_active_members_for_pods(
        self,
        pod_ids: Sequence[str],
    ) -> Dict[str, List[Dict[str, Any]]]:
        members: Dict[str, List[Dict[str, Any]]] = {pod_id: [] for pod_id in pod_ids}
        if not pod_ids:
            return members

        result = self._client.table("pod_members") \
            .select("pod_id, user_id, joined_at, status, profiles!inner(display_name, username)") \
            .in_("pod_id", list(pod_ids)) \
            .eq("status", "active") \
            .order("joined_at", desc=False) \
            .execute()

        for row in result.data or []:
            members.setdefault(row["pod_id"], []).append(_member_row(row))
        return members

    def get_membership(self, pod_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("pod_members") \
                .select("id, status") \
                .eq("pod_id", pod_id) \
                .eq("user_id", user_id) \
                .order("joined_at", desc=True) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching membership for pod {pod_id}: {e}")
            return None

    def count_active_members(self, pod_id: str) -> int:
        try:
            result = self._client.table("pod_members") \
                .select("id", count="exact") \
                .eq("pod_id", pod_id) \
                .eq("status", "active") \
                .execute()
            return result.count or 0
        except Exception as e:
            logger.exception(f"Error counting members of pod {pod_id}: {e}")
            return 0

    def activate_member(self, pod_id: str, user_id: str) -> bool:
        try:
            existing = self.get_membership(pod_id, user_id)
            if existing:
                self._client.table("pod_members") \
                    .update({"status": "active"}) \
                    .eq("id", existing["id"]) \
                    .execute()
            else:
                self._client.table("pod_members").insert({
                    "pod_id": pod_id,
                    "user_id": user_id,
                    "status": "active",
                }).execute()
            return True
        except Exception as e:
            logger.exception(f"Error activating member {user_id} in pod {pod_id}: {e}")
            return False

    def set_member_status(self, pod_id: str, user_id: str, status: str) -> bool:
        try:
            self._client.table("pod_members") \
                .update({"status": status}) \
                .eq("pod_id", pod_id) \
                .eq("user_id", user_id) \
                .eq("status", "active") \
                .execute()
            return True
        except Exception as e:
            logger.exception(f"Error updating member {user_id} in pod {pod_id}: {e}")
            return False

    # =========================================================================
    # Commitments
    # =========================================================================

    def get_commitments(
        self,
        pod_id: str,
        *,
        week_start_dates: Sequence[str],
    ) -> List[Dict[str, Any]]:
        if not week_start_dates:
            return []
        try:
            result = self._client.table("pod_commitments") \
                .select("user_id, week_start_date, workouts_per_week") \
                .eq("pod_id", pod_id) \
                .in_("week_start_date", list(week_start_dates)) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error fetching commitments for pod {pod_id}: {e}")
            return []

    def get_commitment(
        self,
        pod_id: str,
        user_id: str,
        week_start_date: str,
    ) -> Optional[int]:
        try:
            result = self._client.table("pod_commitments") \
                .select("workouts_per_week") \
                .eq("pod_id", pod_id) \
                .eq("user_id", user_id) \
                .eq("week_start_date", week_start_date) \
                .limit(1) \
                .execute()
            if not result.data:
                return None
            return result.data[0].get("workouts_per_week")
        except Exception as e:
            logger.exception(f"Error fetching commitment for pod {pod_id}: {e}")
            return None

    def upsert_commitment(
        self,
        *,
        pod_id: str,
        user_id: str,
        week_start_date: str,
        workouts_per_week: int,
    ) -> bool:
        try:
            self._client.table("pod_commitments").upsert(
                {
                    "pod_id": pod_id,
                    "user_id": user_id,
                    "week_start_date": week_start_date,
                    "workouts_per_week": workouts_per_week,
                },
                on_conflict="pod_id,user_id,week_start_date",
            ).execute()
            return True
        except Exception as e:
            logger.exception(f"Error saving commitment for pod {pod_id}: {e}")
            return False


class SupabasePodInviteRepository:
    """Supabase implementation of PodInviteRepository."""

    SELECT = (
        "id, pod_id, inviter_id, invitee_id, status, created_at, "
        "accountability_pods(name), inviter:profiles!pod_invites_inviter_id_fkey(display_name)"
    )

    def __init__(self, client: Client):
        self._client = client

    @staticmethod
    def _format(row: Dict[str, Any]) -> Dict[str, Any]:
        pod = row.get("accountability_pods") or {}
        inviter = row.get("inviter") or {}
        return {
            "id": row["id"],
            "pod_id": row["pod_id"],
            "pod_name": pod.get("name"),
            "inviter_id": row.get("inviter_id"),
            "inviter_name": inviter.get("display_name"),
            "invitee_id": row.get("invitee_id"),
            "status": row.get("status", "pending"),
            "created_at": row.get("created_at"),
        }

    def get_invite(self, invite_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("pod_invites") \
                .select(self.SELECT) \
                .eq("id", invite_id) \
                .limit(1) \
                .execute()
            return self._format(result.data[0]) if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching invite {invite_id}: {e}")
            return None

    def find_invite(self, pod_id: str, invitee_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("pod_invites") \
                .select("id, status") \
                .eq("pod_id", pod_id) \
                .eq("invitee_id", invitee_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching invite for pod {pod_id}: {e}")
            return None

    def list_pending_invites(self, invitee_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("pod_invites") \
                .select(self.SELECT) \
                .eq("invitee_id", invitee_id) \
                .eq("status", "pending") \
                .order("created_at", desc=True) \
                .execute()
            return [self._format(row) for row in result.data or []]
        except Exception as e:
            logger.exception(f"Error fetching invites for user {invitee_id}: {e}")
            return []

    def create_invite(
        self,
        *,
        pod_id: str,
        inviter_id: str,
        invitee_id: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("pod_invites").insert({
                "pod_id": pod_id,
                "inviter_id": inviter_id,
                "invitee_id": invitee_id,
                "status": "pending",
            }).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error creating invite for pod {pod_id}: {e}")
            return None

    def update_invite_status(self, invite_id: str, status: str) -> bool:
        try:
            self._client.table("pod_invites") \
                .update({"status": status}) \
                .eq("id", invite_id) \
                .execute()
            return True
        except Exception as e:
            logger.exception(f"Error updating invite {invite_id}: {e}")
            return False

    def delete_invite(self, invite_id: str) -> bool:
        try:
            self._client.table("pod_invites") \
                .delete() \
                .eq("id", invite_id) \
                .execute()
            return True
        except Exception as e:
            logger.exception(f"Error deleting invite {invite_id}: {e}")
            return False


class SupabasePodMessageRepository:
    """Supabase implementation of PodMessageRepository."""

    def __init__(self, client: Client):
        self._client = client

    def create_message(
        self,
        *,
        pod_id: str,
        sender_id: str,
        message: str,
        recipient_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("pod_messages").insert({
                "pod_id": pod_id,
                "sender_id": sender_id,
                "recipient_id": recipient_id,
                "message": message,
            }).execute()
            if not result.data:
                return None
            row = result.data[0]
            return {"id": row.get("id"), "created_at": row.get("created_at")}
        except Exception as e:
            logger.exception(f"Error sending message to pod {pod_id}: {e}")
            return None

    def list_recent_messages(
        self,
        pod_id: str,
        *,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("pod_messages") \
                .select(
                    "id, sender_id, recipient_id, message, created_at, "
                    "sender:profiles!pod_messages_sender_id_fkey(display_name), "
                    "recipient:profiles!pod_messages_recipient_id_fkey(display_name)"
                ) \
                .eq("pod_id", pod_id) \
                .order("created_at", desc=True) \
                .limit(limit) \
                .execute()

            messages = []
            for row in result.data or []:
                sender = row.get("sender") or {}
                recipient = row.get("recipient") or {}
                messages.append({
                    "id": row["id"],
                    "sender_id": row["sender_id"],
                    "sender_name": sender.get("display_name"),
                    "recipient_id": row.get("recipient_id"),
                    "recipient_name": recipient.get("display_name"),
                    "message": row["message"],
                    "created_at": row.get("created_at"),
                })
            return messages
        except Exception as e:
            logger.exception(f"Error fetching messages for pod {pod_id}: {e}")
            return []
