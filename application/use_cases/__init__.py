"""
Application Use Cases for the FitHub API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Failures are raised as application.exceptions errors

Usage:
    from application.use_cases import PodsUseCase, NutritionUseCase

    pods = PodsUseCase(
        pod_repo=pod_repo,
        invite_repo=invite_repo,
        message_repo=message_repo,
        profile_repo=profile_repo,
        progress_service=progress_service,
        event_logger=event_logger,
    )
    pod = pods.create_pod(user_id="user-123", name="Morning Crew")
"""

from application.use_cases.pods import PodsUseCase, PodActionResult
from application.use_cases.nutrition import (
    NutritionUseCase,
    BarcodeLookupResult,
    FoodSearchResult,
)

__all__ = [
    # Pods
    "PodsUseCase",
    "PodActionResult",
    # Nutrition
    "NutritionUseCase",
    "BarcodeLookupResult",
    "FoodSearchResult",
]
