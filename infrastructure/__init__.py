"""
Infrastructure Layer for the FitHub API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabasePodRepository,
    SupabasePodInviteRepository,
    SupabasePodMessageRepository,
    SupabaseWorkoutSessionRepository,
    SupabaseTemplateRepository,
    SupabaseProfileRepository,
    SupabaseEventLogRepository,
    SupabaseFoodItemRepository,
)

__all__ = [
    "SupabasePodRepository",
    "SupabasePodInviteRepository",
    "SupabasePodMessageRepository",
    "SupabaseWorkoutSessionRepository",
    "SupabaseTemplateRepository",
    "SupabaseProfileRepository",
    "SupabaseEventLogRepository",
    "SupabaseFoodItemRepository",
]
