"""
Domain layer for the FitHub API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    AdaptiveWorkout,
    FatigueAnalysis,
    LauncherPrediction,
    MemberProgress,
    NormalizedFoodItem,
    Pod,
)

__all__ = [
    "AdaptiveWorkout",
    "FatigueAnalysis",
    "LauncherPrediction",
    "MemberProgress",
    "NormalizedFoodItem",
    "Pod",
]
