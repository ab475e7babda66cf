"""
Pods router for accountability pods.

This router contains endpoints for:
- GET/POST /pods - List pods / create a pod
- GET /pods/invites - Pending invitations for the current user
- POST /pods/invites/{invite_id} - Accept or decline an invitation
- GET/DELETE /pods/{pod_id} - Pod detail with member progress / delete
- GET /pods/{pod_id}/progress - Member progress for the current week
- POST /pods/{pod_id}/commitment - Set the weekly workout goal
- POST /pods/{pod_id}/invite - Invite a user by username
- POST /pods/{pod_id}/leave - Leave a pod
- POST /pods/{pod_id}/messages - Send an encouragement message
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.deps import get_current_user, get_pods_use_case
from application.use_cases import PodsUseCase

router = APIRouter(
    prefix="/pods",
    tags=["Pods"],
)


# =============================================================================
# Request Models
# =============================================================================


class CreatePodRequest(BaseModel):
    """Request model for creating a pod."""
    name: Optional[str] = None
    description: Optional[str] = None


class InviteRequest(BaseModel):
    username: Optional[str] = None


class InviteResponseRequest(BaseModel):
    """action is "accept" or "decline"."""
    action: Optional[str] = None


class CommitmentRequest(BaseModel):
    """Type and range are checked by PodsUseCase.set_commitment."""
    workouts_per_week: Any = None


class MessageRequest(BaseModel):
    """recipient_id None addresses the whole pod."""
    message: Optional[str] = None
    recipient_id: Optional[str] = None


# =============================================================================
# Pods
# =============================================================================


@router.get("")
def list_pods_endpoint(
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """
    List pods where the current user is an active member.

    Returns:
        Pods with their active members and member count
    """
    return {"pods": pods.list_pods(user_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_pod_endpoint(
    request: CreatePodRequest,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """
    Create a pod. The caller becomes its creator and first member.

    Args:
        request: Pod name (2-50 chars) and optional description (max 200 chars)
    """
    pod = pods.create_pod(user_id, request.name, request.description)
    return {"pod": pod}


# =============================================================================
# Invitations
# =============================================================================


@router.get("/invites")
def list_invites_endpoint(
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    return {"invites": pods.list_invites(user_id)}


@router.post("/invites/{invite_id}")
def respond_to_invite_endpoint(
    invite_id: str,
    request: InviteResponseRequest,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """Accept or decline a pending invitation."""
    result = pods.respond_to_invite(user_id, invite_id, request.action)
    return {"success": result.success, "message": result.message}


# =============================================================================
# Single Pod
# =============================================================================


@router.get("/{pod_id}")
def get_pod_endpoint(
    pod_id: str,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """
    Get a pod with members, this week's progress and recent messages.

    Returns 404 unless the caller is an active member.
    """
    return {"pod": pods.get_pod_detail(user_id, pod_id)}


@router.delete("/{pod_id}")
def delete_pod_endpoint(
    pod_id: str,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    result = pods.delete_pod(user_id, pod_id)
    return {"success": result.success, "message": result.message}


@router.get("/{pod_id}/progress")
def get_progress_endpoint(
    pod_id: str,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    return {"members_progress": pods.get_progress(user_id, pod_id)}


@router.post("/{pod_id}/commitment")
def set_commitment_endpoint(
    pod_id: str,
    request: CommitmentRequest,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """
    Set the caller's workout goal (1-7) for the current week.
    """
    result = pods.set_commitment(user_id, pod_id, request.workouts_per_week)
    return {"success": result.success, **result.data}


@router.post("/{pod_id}/invite")
def invite_member_endpoint(
    pod_id: str,
    request: InviteRequest,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """Invite a user by username (pod creator only)."""
    result = pods.invite_member(user_id, pod_id, request.username)
    return {"success": result.success, "message": result.message}


@router.post("/{pod_id}/leave")
def leave_pod_endpoint(
    pod_id: str,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    result = pods.leave_pod(user_id, pod_id)
    return {"success": result.success, "message": result.message}


@router.post("/{pod_id}/messages", status_code=status.HTTP_201_CREATED)
def send_message_endpoint(
    pod_id: str,
    request: MessageRequest,
    user_id: str = Depends(get_current_user),
    pods: PodsUseCase = Depends(get_pods_use_case),
):
    """
    Send an encouragement message to the pod or to one member.

    Args:
        request: Message text (1-280 chars) and optional recipient_id
    """
    result = pods.send_message(user_id, pod_id, request.message, request.recipient_id)
    return {"success": result.success, **result.data}
