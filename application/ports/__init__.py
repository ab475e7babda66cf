"""
Repository Interfaces (Ports) for the FitHub API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import PodRepository, WorkoutSessionRepository

    class PodProgressService:
        def __init__(self, pod_repo: PodRepository, session_repo: WorkoutSessionRepository):
            self._pod_repo = pod_repo
            self._session_repo = session_repo
"""

# Pods
from application.ports.pod_repository import (
    PodRepository,
    PodInviteRepository,
    PodMessageRepository,
)

# Workout history and templates
from application.ports.workout_session_repository import WorkoutSessionRepository
from application.ports.template_repository import TemplateRepository

# Profiles
from application.ports.profile_repository import ProfileRepository

# Analytics
from application.ports.event_log_repository import EventLogRepository

# Nutrition
from application.ports.food_item_repository import FoodItemRepository

__all__ = [
    # Pods
    "PodRepository",
    "PodInviteRepository",
    "PodMessageRepository",
    # Workouts
    "WorkoutSessionRepository",
    "TemplateRepository",
    # Profiles
    "ProfileRepository",
    # Analytics
    "EventLogRepository",
    # Nutrition
    "FoodItemRepository",
]
