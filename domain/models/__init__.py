"""
Domain models for the FitHub API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Pod, PodMember, MemberProgress: accountability pods and weekly progress
- LauncherPrediction, AdaptiveWorkout, FatigueAnalysis: workout suggestions
- NormalizedFoodItem: food products in the internal macro schema

Usage:
    >>> from domain.models import MemberProgress

    >>> progress = MemberProgress(user_id="u1", commitment=4, completed=4,
    ...                           progress_percentage=100, is_on_track=True)
    >>> progress.model_dump()["is_on_track"]
    True
"""

from domain.models.adaptive import (
    AdaptationType,
    AdaptiveWorkout,
    AlternativeTemplate,
    ExerciseRef,
    FatigueAnalysis,
    FatigueMetrics,
    FatigueTier,
    LauncherExercise,
    LauncherPrediction,
    LauncherResponse,
)
from domain.models.nutrition import NormalizedFoodItem
from domain.models.pod import (
    MAX_POD_MEMBERS,
    MAX_WEEKLY_COMMITMENT,
    MIN_POD_MEMBERS,
    MIN_WEEKLY_COMMITMENT,
    MemberProgress,
    Pod,
    PodDetail,
    PodInvite,
    PodMember,
    PodMessage,
    PodWithMembers,
    WeeklyCommitment,
)

__all__ = [
    # Pods
    "MAX_POD_MEMBERS",
    "MAX_WEEKLY_COMMITMENT",
    "MIN_POD_MEMBERS",
    "MIN_WEEKLY_COMMITMENT",
    "MemberProgress",
    "Pod",
    "PodDetail",
    "PodInvite",
    "PodMember",
    "PodMessage",
    "PodWithMembers",
    "WeeklyCommitment",
    # Launcher / adaptive
    "AdaptationType",
    "AdaptiveWorkout",
    "AlternativeTemplate",
    "ExerciseRef",
    "FatigueAnalysis",
    "FatigueMetrics",
    "FatigueTier",
    "LauncherExercise",
    "LauncherPrediction",
    "LauncherResponse",
    # Nutrition
    "NormalizedFoodItem",
]
