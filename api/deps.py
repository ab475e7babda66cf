"""
FastAPI Dependency Providers for the FitHub API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings, the Supabase client and the launcher cache are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Service and use case providers compose repositories
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_pods_use_case, get_current_user
    from application.use_cases import PodsUseCase

    @router.get("/pods")
    def list_pods(
        user_id: str = Depends(get_current_user),
        pods: PodsUseCase = Depends(get_pods_use_case),
    ):
        return pods.list_pods(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_pod_repo] = lambda: FakePodRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    PodRepository,
    PodInviteRepository,
    PodMessageRepository,
    WorkoutSessionRepository,
    TemplateRepository,
    ProfileRepository,
    EventLogRepository,
    FoodItemRepository,
)

# Concrete implementations
from infrastructure import (
    SupabasePodRepository,
    SupabasePodInviteRepository,
    SupabasePodMessageRepository,
    SupabaseWorkoutSessionRepository,
    SupabaseTemplateRepository,
    SupabaseProfileRepository,
    SupabaseEventLogRepository,
    SupabaseFoodItemRepository,
)

from application.use_cases import PodsUseCase, NutritionUseCase
from backend.core.adaptive_workout import AdaptiveWorkoutService
from backend.core.fatigue import FatigueService
from backend.core.launcher import LauncherService
from backend.core.pod_progress import PodProgressService
from backend.services.event_logger import EventLogger
from backend.services.launcher_cache import CachedLauncherService, LauncherCache
from backend.services.openfoodfacts_client import OpenFoodFactsClient
from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import (
    get_current_user as _get_current_user,
    get_optional_user as _get_optional_user,
)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_pod_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PodRepository:
    """
    Get PodRepository implementation.

    Returns a SupabasePodRepository instance with injected client.
    The return type is the Protocol to enable easy faking.

    Args:
        client: Supabase client (injected)

    Returns:
        PodRepository: Repository for pods, memberships and commitments
    """
    return SupabasePodRepository(client)


def get_pod_invite_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PodInviteRepository:
    """Get PodInviteRepository implementation."""
    return SupabasePodInviteRepository(client)


def get_pod_message_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PodMessageRepository:
    """Get PodMessageRepository implementation."""
    return SupabasePodMessageRepository(client)


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutSessionRepository:
    """
    Get WorkoutSessionRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        WorkoutSessionRepository: Read access to completed sessions
    """
    return SupabaseWorkoutSessionRepository(client)


def get_template_repo(
    client: Client = Depends(get_supabase_client_required),
) -> TemplateRepository:
    """Get TemplateRepository implementation."""
    return SupabaseTemplateRepository(client)


def get_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProfileRepository:
    """Get ProfileRepository implementation."""
    return SupabaseProfileRepository(client)


def get_event_log_repo(
    client: Client = Depends(get_supabase_client_required),
) -> EventLogRepository:
    """Get EventLogRepository implementation."""
    return SupabaseEventLogRepository(client)


def get_food_item_repo(
    client: Client = Depends(get_supabase_client_required),
) -> FoodItemRepository:
    """Get FoodItemRepository implementation."""
    return SupabaseFoodItemRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_event_logger(
    event_repo: EventLogRepository = Depends(get_event_log_repo),
) -> EventLogger:
    return EventLogger(event_repo)


def get_pod_progress_service(
    pod_repo: PodRepository = Depends(get_pod_repo),
    session_repo: WorkoutSessionRepository = Depends(get_session_repo),
) -> PodProgressService:
    return PodProgressService(pod_repo, session_repo)


def get_fatigue_service(
    session_repo: WorkoutSessionRepository = Depends(get_session_repo),
) -> FatigueService:
    return FatigueService(session_repo)


def get_launcher_service(
    session_repo: WorkoutSessionRepository = Depends(get_session_repo),
    template_repo: TemplateRepository = Depends(get_template_repo),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    event_logger: EventLogger = Depends(get_event_logger),
) -> LauncherService:
    return LauncherService(
        session_repo,
        template_repo,
        event_logger,
        profile_repo=profile_repo,
    )


@lru_cache
def get_launcher_cache() -> LauncherCache:
    """
    Get the process-wide launcher cache.

    TTL comes from LAUNCHER_CACHE_TTL_HOURS.
    """
    return LauncherCache(ttl_seconds=_get_settings().launcher_cache_ttl_seconds)


def get_cached_launcher_service(
    launcher_service: LauncherService = Depends(get_launcher_service),
    cache: LauncherCache = Depends(get_launcher_cache),
) -> CachedLauncherService:
    return CachedLauncherService(launcher_service, cache)


def get_adaptive_workout_service(
    fatigue_service: FatigueService = Depends(get_fatigue_service),
    launcher_service: LauncherService = Depends(get_launcher_service),
    template_repo: TemplateRepository = Depends(get_template_repo),
    event_logger: EventLogger = Depends(get_event_logger),
) -> AdaptiveWorkoutService:
    return AdaptiveWorkoutService(
        fatigue_service,
        launcher_service,
        template_repo,
        event_logger,
    )


def get_openfoodfacts_client(
    settings: Settings = Depends(get_settings),
) -> OpenFoodFactsClient:
    """
    Get the Open Food Facts client configured from settings.

    Returns:
        OpenFoodFactsClient: HTTP client for product lookup and search
    """
    return OpenFoodFactsClient(
        base_url=settings.openfoodfacts_base_url,
        user_agent=settings.openfoodfacts_user_agent,
        timeout=settings.openfoodfacts_timeout_seconds,
        search_timeout=settings.openfoodfacts_search_timeout_seconds,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_pods_use_case(
    pod_repo: PodRepository = Depends(get_pod_repo),
    invite_repo: PodInviteRepository = Depends(get_pod_invite_repo),
    message_repo: PodMessageRepository = Depends(get_pod_message_repo),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    progress_service: PodProgressService = Depends(get_pod_progress_service),
    event_logger: EventLogger = Depends(get_event_logger),
) -> PodsUseCase:
    """
    Get PodsUseCase with all repositories injected.

    Returns:
        PodsUseCase: Pod management workflows
    """
    return PodsUseCase(
        pod_repo=pod_repo,
        invite_repo=invite_repo,
        message_repo=message_repo,
        profile_repo=profile_repo,
        progress_service=progress_service,
        event_logger=event_logger,
    )


def get_nutrition_use_case(
    food_repo: FoodItemRepository = Depends(get_food_item_repo),
    off_client: OpenFoodFactsClient = Depends(get_openfoodfacts_client),
) -> NutritionUseCase:
    return NutritionUseCase(food_repo=food_repo, off_client=off_client)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Supports:
    - Supabase access tokens (HS256)
    - API key authentication

    Args:
        authorization: Bearer token header
        x_api_key: API key header

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


async def get_optional_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> Optional[str]:
    """
    Get the current user ID if authenticated, None otherwise.

    Returns:
        Optional[str]: User ID if authenticated, None otherwise
    """
    return await _get_optional_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )
