"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabasePodRepository,
        SupabaseWorkoutSessionRepository,
        SupabaseFoodItemRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    pod_repo = SupabasePodRepository(client)
    session_repo = SupabaseWorkoutSessionRepository(client)
    food_repo = SupabaseFoodItemRepository(client)
"""

from infrastructure.db.pod_repository import (
    SupabasePodRepository,
    SupabasePodInviteRepository,
    SupabasePodMessageRepository,
)
from infrastructure.db.workout_session_repository import SupabaseWorkoutSessionRepository
from infrastructure.db.template_repository import SupabaseTemplateRepository
from infrastructure.db.profile_repository import SupabaseProfileRepository
from infrastructure.db.event_log_repository import SupabaseEventLogRepository
from infrastructure.db.food_item_repository import SupabaseFoodItemRepository

__all__ = [
    # Pods
    "SupabasePodRepository",
    "SupabasePodInviteRepository",
    "SupabasePodMessageRepository",
    # Workouts
    "SupabaseWorkoutSessionRepository",
    "SupabaseTemplateRepository",
    # Profiles
    "SupabaseProfileRepository",
    # Analytics
    "SupabaseEventLogRepository",
    # Nutrition
    "SupabaseFoodItemRepository",
]
