"""
API package for the FitHub API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_pod_repo,
    get_pod_invite_repo,
    get_pod_message_repo,
    get_session_repo,
    get_template_repo,
    get_profile_repo,
    get_event_log_repo,
    get_food_item_repo,
    get_current_user,
    get_optional_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_pod_repo",
    "get_pod_invite_repo",
    "get_pod_message_repo",
    "get_session_repo",
    "get_template_repo",
    "get_profile_repo",
    "get_event_log_repo",
    "get_food_item_repo",
    # Authentication
    "get_current_user",
    "get_optional_user",
]
