"""
Accountability pod domain models.

A pod is a small group (2-8 active members) that sets weekly workout
commitments and tracks each member's progress against them.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


MIN_POD_MEMBERS = 2
MAX_POD_MEMBERS = 8
MIN_WEEKLY_COMMITMENT = 1
MAX_WEEKLY_COMMITMENT = 7

MembershipStatus = Literal["active", "left"]
InviteStatus = Literal["pending", "accepted", "declined"]


class Pod(BaseModel):
    """An accountability pod."""

    id: str
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    creator_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PodMember(BaseModel):
    """A pod membership joined with the member's public profile."""

    user_id: str
    display_name: Optional[str] = None
    username: Optional[str] = None
    joined_at: Optional[str] = None
    status: MembershipStatus = "active"


class WeeklyCommitment(BaseModel):
    """Target workout count for one member in one Monday-start week."""

    pod_id: str
    user_id: str
    week_start_date: date
    workouts_per_week: int = Field(..., ge=MIN_WEEKLY_COMMITMENT, le=MAX_WEEKLY_COMMITMENT)


class MemberProgress(BaseModel):
    """
    Derived weekly progress for one active member.

    Recomputed on every read, never persisted.
    """

    user_id: str
    display_name: Optional[str] = None
    username: Optional[str] = None
    commitment: int = Field(default=0, ge=0, description="Workouts per week goal (0 = not set)")
    completed: int = Field(default=0, ge=0, description="Completed workouts this week")
    progress_percentage: int = Field(default=0, ge=0, le=100)
    is_on_track: bool = False
    streak: int = Field(default=0, ge=0, description="Consecutive weeks meeting the goal")


class PodMessage(BaseModel):
    """An encouragement message, to one member or the whole pod."""

    id: str
    sender_id: str
    sender_name: Optional[str] = None
    recipient_id: Optional[str] = None
    recipient_name: Optional[str] = None
    message: str
    created_at: Optional[str] = None


class PodInvite(BaseModel):
    """An invitation for a user to join a pod."""

    id: str
    pod_id: str
    pod_name: Optional[str] = None
    inviter_id: Optional[str] = None
    inviter_name: Optional[str] = None
    invitee_id: str
    status: InviteStatus = "pending"
    created_at: Optional[str] = None


class PodWithMembers(Pod):
    """A pod with its active members."""

    members: List[PodMember] = Field(default_factory=list)
    member_count: int = 0


class PodDetail(PodWithMembers):
    """Full pod view: members, their weekly progress and recent messages."""

    members_progress: List[MemberProgress] = Field(default_factory=list)
    recent_messages: List[PodMessage] = Field(default_factory=list)
