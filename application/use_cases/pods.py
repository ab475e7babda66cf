"""
Accountability Pod Use Cases.

Creating and deleting pods, inviting members, answering invitations,
leaving, setting weekly commitments and sending encouragement messages.

Authorization and validation failures raise application exceptions with
the message shown to the user.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from application.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    NotFoundError,
    UpstreamServiceError,
)
from application.ports import (
    PodInviteRepository,
    PodMessageRepository,
    PodRepository,
    ProfileRepository,
)
from backend.core.pod_progress import PodProgressService
from backend.core.time_windows import resolve_now, week_start_date
from backend.services.event_logger import EventLogger
from domain.models.pod import (
    MAX_POD_MEMBERS,
    MAX_WEEKLY_COMMITMENT,
    MIN_WEEKLY_COMMITMENT,
    PodDetail,
    PodInvite,
    PodMember,
    PodMessage,
    PodWithMembers,
)

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 280
RECENT_MESSAGE_LIMIT = 20


@dataclass
class PodActionResult:
    """Result of a pod mutation."""
    success: bool
    message: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


class PodsUseCase:
    """
    Use case for accountability pods.

    Membership rules:
    - only active members can see a pod, commit or post messages
    - only the creator can invite members or delete the pod
    - a pod holds at most 8 active members
    """

    def __init__(
        self,
        pod_repo: PodRepository,
        invite_repo: PodInviteRepository,
        message_repo: PodMessageRepository,
        profile_repo: ProfileRepository,
        progress_service: PodProgressService,
        event_logger: EventLogger,
    ):
        self._pods = pod_repo
        self._invites = invite_repo
        self._messages = message_repo
        self._profiles = profile_repo
        self._progress = progress_service
        self._events = event_logger

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_active_member(self, pod_id: str, user_id: str, message: str) -> None:
        membership = self._pods.get_membership(pod_id, user_id)
        if not membership or membership.get("status") != "active":
            raise AccessDeniedError(message)

    def _members(self, pod_id: str) -> List[PodMember]:
        try:
            rows = self._pods.get_active_members(pod_id)
        except Exception:
            logger.exception(f"Failed to fetch members for pod {pod_id}")
            return []
        return [PodMember(**row) for row in rows]

    # -------------------------------------------------------------------------
    # Pods
    # -------------------------------------------------------------------------

    def list_pods(self, user_id: str) -> List[PodWithMembers]:
        """Pods where the user is an active member, with their active members."""
        pod_ids = self._pods.list_pod_ids_for_user(user_id)
        if not pod_ids:
            return []

        rows = self._pods.get_pods(pod_ids)
        try:
            members_by_pod = self._pods.get_active_members_for_pods([pod["id"] for pod in rows])
        except Exception:
            logger.exception(f"Failed to fetch members for pods of user {user_id}")
            members_by_pod = {}

        pods: List[PodWithMembers] = []
        for pod in rows:
            members = [PodMember(**row) for row in members_by_pod.get(pod["id"], [])]
            pods.append(PodWithMembers(**pod, members=members, member_count=len(members)))
        return pods

    def create_pod(
        self,
        user_id: str,
        name: Optional[str],
        description: Optional[str] = None,
    ) -> PodWithMembers:
        """
        Create a pod with the caller as its creator and first member.

        Raises:
            InvalidInputError: If name or description is out of bounds
            UpstreamServiceError: If the pod could not be stored
        """
        name = (name or "").strip()
        if len(name) < 2 or len(name) > 50:
            raise InvalidInputError("Pod name must be between 2-50 characters")

        description = (description or "").strip() or None
        if description and len(description) > 200:
            raise InvalidInputError("Description must be 200 characters or less")

        pod = self._pods.create_pod(name=name, description=description, creator_id=user_id)
        if not pod:
            raise UpstreamServiceError("Failed to create pod")

        if not self._pods.activate_member(pod["id"], user_id):
            logger.error(f"Failed to add creator {user_id} to pod {pod['id']}")

        members = self._members(pod["id"])
        return PodWithMembers(**pod, members=members, member_count=len(members))

    def get_pod_detail(
        self,
        user_id: str,
        pod_id: str,
        now: Optional[datetime] = None,
    ) -> PodDetail:
        """
        Pod with members, member progress and the 20 latest messages.

        Raises:
            NotFoundError: If the pod does not exist or the caller is not an active member
        """
        membership = self._pods.get_membership(pod_id, user_id)
        if not membership or membership.get("status") != "active":
            raise NotFoundError("Pod not found or access denied")

        pod = self._pods.get_pod(pod_id)
        if not pod:
            raise NotFoundError("Pod not found")

        members = self._members(pod_id)
        messages = [
            PodMessage(**row)
            for row in self._messages.list_recent_messages(pod_id, limit=RECENT_MESSAGE_LIMIT)
        ]
        return PodDetail(
            **pod,
            members=members,
            member_count=len(members),
            members_progress=self._progress.get_pod_member_progress(pod_id, now),
            recent_messages=messages,
        )

    def get_progress(self, user_id: str, pod_id: str, now: Optional[datetime] = None):
        """Member progress for a pod the caller belongs to."""
        membership = self._pods.get_membership(pod_id, user_id)
        if not membership or membership.get("status") != "active":
            raise NotFoundError("Pod not found or access denied")
        return self._progress.get_pod_member_progress(pod_id, now)

    def delete_pod(self, user_id: str, pod_id: str) -> PodActionResult:
        pod = self._pods.get_pod(pod_id)
        if not pod or pod.get("creator_id") != user_id:
            raise AccessDeniedError("Only the pod creator can delete it")

        if not self._pods.delete_pod(pod_id):
            raise UpstreamServiceError("Failed to delete pod")
        return PodActionResult(success=True, message="Pod deleted")

    # -------------------------------------------------------------------------
    # Invitations
    # -------------------------------------------------------------------------

    def invite_member(self, user_id: str, pod_id: str, username: Optional[str]) -> PodActionResult:
        """
        Invite a user by username.

        Raises:
            AccessDeniedError: If the caller is not the pod creator
            InvalidInputError: If the username is missing, the user is already a
                member or invited, or the pod is full
            NotFoundError: If no user has that username
        """
        pod = self._pods.get_pod(pod_id)
        if not pod or pod.get("creator_id") != user_id:
            raise AccessDeniedError("Only pod creator can invite members")

        username = (username or "").strip()
        if not username:
            raise InvalidInputError("Username is required")

        invitee = self._profiles.find_by_username(username)
        if not invitee:
            raise NotFoundError("User not found")
        invitee_id = invitee["id"]

        membership = self._pods.get_membership(pod_id, invitee_id)
        if membership and membership.get("status") == "active":
            raise InvalidInputError("User is already a member of this pod")

        existing = self._invites.find_invite(pod_id, invitee_id)
        if existing:
            if existing.get("status") == "pending":
                raise InvalidInputError("Invitation already pending")
            # Answered invites are removed so the user can be invited again
            self._invites.delete_invite(existing["id"])

        if self._pods.count_active_members(pod_id) >= MAX_POD_MEMBERS:
            raise InvalidInputError(f"Pod is full (max {MAX_POD_MEMBERS} members)")

        invite = self._invites.create_invite(
            pod_id=pod_id,
            inviter_id=user_id,
            invitee_id=invitee_id,
        )
        if not invite:
            raise UpstreamServiceError("Failed to send invitation")

        return PodActionResult(
            success=True,
            message=f"Invitation sent to {invitee.get('display_name') or username}",
            data={"invite_id": invite.get("id")},
        )

    def list_invites(self, user_id: str) -> List[PodInvite]:
        """Pending invitations addressed to the user."""
        return [PodInvite(**row) for row in self._invites.list_pending_invites(user_id)]

    def respond_to_invite(
        self,
        user_id: str,
        invite_id: str,
        action: Optional[str],
    ) -> PodActionResult:
        """
        Accept or decline an invitation.

        Accepting makes the user an active member (re-activating an earlier
        membership if they had left).
        """
        if action not in ("accept", "decline"):
            raise InvalidInputError("Invalid action")

        invite = self._invites.get_invite(invite_id)
        if not invite:
            raise NotFoundError("Invitation not found")
        if invite.get("invitee_id") != user_id:
            raise AccessDeniedError("Not authorized to respond to this invitation")
        if invite.get("status") != "pending":
            raise InvalidInputError("Invitation already responded to")

        pod_id = invite["pod_id"]
        if action == "accept":
            if self._pods.count_active_members(pod_id) >= MAX_POD_MEMBERS:
                raise InvalidInputError(f"Pod is full (max {MAX_POD_MEMBERS} members)")
            if not self._pods.activate_member(pod_id, user_id):
                raise UpstreamServiceError("Failed to respond to invitation")

        new_status = "accepted" if action == "accept" else "declined"
        if not self._invites.update_invite_status(invite_id, new_status):
            raise UpstreamServiceError("Failed to respond to invitation")

        if action == "accept":
            message = f"You joined {invite.get('pod_name') or 'the pod'}!"
        else:
            message = "Invitation declined"
        return PodActionResult(success=True, message=message, data={"pod_id": pod_id})

    def leave_pod(self, user_id: str, pod_id: str) -> PodActionResult:
        pod = self._pods.get_pod(pod_id)
        if not pod:
            raise NotFoundError("Pod not found")
        if pod.get("creator_id") == user_id:
            raise InvalidInputError(
                "Pod creator cannot leave. Delete the pod instead or transfer ownership."
            )
        self._require_active_member(pod_id, user_id, "Not a member of this pod")

        if not self._pods.set_member_status(pod_id, user_id, "left"):
            raise UpstreamServiceError("Failed to leave pod")
        return PodActionResult(success=True, message=f"You left {pod.get('name')}")

    # -------------------------------------------------------------------------
    # Commitments and messages
    # -------------------------------------------------------------------------

    def set_commitment(
        self,
        user_id: str,
        pod_id: str,
        workouts_per_week: Any,
        now: Optional[datetime] = None,
    ) -> PodActionResult:
        """
        Set the caller's goal for the current week.

        Raises:
            AccessDeniedError: If the caller is not an active member
            InvalidInputError: If the value is missing or not an integer in 1-7
        """
        self._require_active_member(pod_id, user_id, "Not a member of this pod")

        if workouts_per_week is None:
            raise InvalidInputError("workouts_per_week is required")
        if (
            isinstance(workouts_per_week, bool)
            or not isinstance(workouts_per_week, int)
            or not MIN_WEEKLY_COMMITMENT <= workouts_per_week <= MAX_WEEKLY_COMMITMENT
        ):
            raise InvalidInputError("Commitment must be between 1 and 7 workouts per week")

        week_date = week_start_date(resolve_now(now))
        stored = self._pods.upsert_commitment(
            pod_id=pod_id,
            user_id=user_id,
            week_start_date=week_date,
            workouts_per_week=workouts_per_week,
        )
        if not stored:
            raise UpstreamServiceError("Failed to set commitment")

        self._events.record("pod_commitment_made", user_id, {
            "pod_id": pod_id,
            "workouts_per_week": workouts_per_week,
            "week_start_date": week_date,
        })
        return PodActionResult(
            success=True,
            data={
                "commitment": {
                    "workouts_per_week": workouts_per_week,
                    "week_start_date": week_date,
                },
            },
        )

    def send_message(
        self,
        user_id: str,
        pod_id: str,
        message: Optional[str],
        recipient_id: Optional[str] = None,
    ) -> PodActionResult:
        """Post an encouragement message to the pod or to one member."""
        self._require_active_member(pod_id, user_id, "Not a member of this pod")

        if message is None or not isinstance(message, str):
            raise InvalidInputError("Message is required")
        text = message.strip()
        if not text or len(text) > MAX_MESSAGE_LENGTH:
            raise InvalidInputError("Message must be 1-280 characters")

        if recipient_id:
            recipient = self._pods.get_membership(pod_id, recipient_id)
            if not recipient or recipient.get("status") != "active":
                raise InvalidInputError("Recipient is not a member of this pod")

        created = self._messages.create_message(
            pod_id=pod_id,
            sender_id=user_id,
            message=text,
            recipient_id=recipient_id or None,
        )
        if not created:
            raise UpstreamServiceError("Failed to send message")

        return PodActionResult(
            success=True,
            data={"message": {"id": created.get("id"), "created_at": created.get("created_at")}},
        )
