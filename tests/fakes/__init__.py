"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakePodRepository, create_pod_repo

    # Direct instantiation
    repo = FakePodRepository()
    repo.seed_pod("pod-1", creator_id="user-1")

    # Factory function with pre-populated data
    repo = create_pod_repo(pod_id="pod-1", member_ids=["u1", "u2", "u3"])
"""
from typing import Optional, Dict, Any, List
from datetime import datetime, timedelta

from tests.fakes.pod_repository import (
    FakePodRepository,
    FakePodInviteRepository,
    FakePodMessageRepository,
)
from tests.fakes.workout_session_repository import FakeWorkoutSessionRepository
from tests.fakes.template_repository import FakeTemplateRepository, DEFAULT_CATALOG
from tests.fakes.profile_repository import FakeProfileRepository
from tests.fakes.event_log_repository import FakeEventLogRepository
from tests.fakes.food_item_repository import FakeFoodItemRepository, FakeOpenFoodFactsClient


# =============================================================================
# Factory Functions
# =============================================================================


def create_pod_repo(
    *,
    pod_id: str = "pod-1",
    name: str = "Morning Crew",
    member_ids: Optional[List[str]] = None,
    creator_id: Optional[str] = None,
) -> FakePodRepository:
    """
    Create a FakePodRepository with one pod and active members.

    Args:
        pod_id: Pod ID
        name: Pod name
        member_ids: Active members in join order (defaults to a single "test-user")
        creator_id: Pod creator (defaults to the first member)

    Returns:
        Pre-populated FakePodRepository
    """
    member_ids = member_ids or ["test-user"]
    repo = FakePodRepository()
    repo.seed_pod(pod_id, name=name, creator_id=creator_id or member_ids[0])
    for index, user_id in enumerate(member_ids):
        repo.seed_member(pod_id, user_id, display_name=f"Member {index + 1}")
    return repo


def create_session_repo(
    *,
    user_id: str = "test-user",
    started_at: Optional[List[datetime]] = None,
    template_id: Optional[str] = None,
    total_volume_kg: float = 0,
    duration_seconds: Optional[int] = None,
) -> FakeWorkoutSessionRepository:
    """
    Create a FakeWorkoutSessionRepository with completed sessions.

    Args:
        user_id: Owner of every generated session
        started_at: One session per start time
        template_id: Template referenced by every session
        total_volume_kg: Volume of every session
        duration_seconds: Duration of every session

    Returns:
        Pre-populated FakeWorkoutSessionRepository
    """
    repo = FakeWorkoutSessionRepository()
    repo.seed([
        {
            "user_id": user_id,
            "started_at": start,
            "template_id": template_id,
            "total_volume_kg": total_volume_kg,
            "duration_seconds": duration_seconds,
        }
        for start in started_at or []
    ])
    return repo


def create_daily_sessions(
    now: datetime,
    *,
    days: int,
    user_id: str = "test-user",
    volume: float = 1000,
    start_offset_days: int = 0,
    template_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Session rows one per day, going back from ``now``.

    Args:
        now: Reference instant
        days: Number of sessions
        start_offset_days: Days before ``now`` of the newest session
    """
    return [
        {
            "user_id": user_id,
            "started_at": now - timedelta(days=start_offset_days + i, hours=1),
            "total_volume_kg": volume,
            "template_id": template_id,
        }
        for i in range(days)
    ]


def create_template_repo(
    *,
    template_id: str = "T1",
    user_id: str = "test-user",
    name: str = "Push Day",
    num_exercises: int = 2,
    sets: int = 3,
    reps: int = 8,
    weight_kg: Optional[float] = 60.0,
) -> FakeTemplateRepository:
    """
    Create a FakeTemplateRepository with one template.

    Every exercise gets ``sets`` identical sets of ``reps`` x ``weight_kg``.
    """
    repo = FakeTemplateRepository()
    exercises = []
    for i in range(num_exercises):
        catalog_row = DEFAULT_CATALOG[i % len(DEFAULT_CATALOG)]
        exercises.append({
            "exercise": {k: catalog_row[k] for k in ("id", "name", "muscle_group", "equipment")},
            "sets": [
                {"set_number": n + 1, "reps": reps, "weight_kg": weight_kg}
                for n in range(sets)
            ],
        })
    repo.seed_template(template_id, user_id=user_id, name=name, exercises=exercises)
    return repo


def create_profile_repo(
    *,
    user_id: str = "test-user",
    username: str = "tester",
    display_name: str = "Test User",
    launcher_enabled: bool = True,
) -> FakeProfileRepository:
    """Create a FakeProfileRepository with one profile."""
    repo = FakeProfileRepository()
    repo.seed([{
        "id": user_id,
        "username": username,
        "display_name": display_name,
        "feature_flags": {"launcher_enabled": launcher_enabled},
    }])
    return repo


def off_product(
    code: str = "3017620422003",
    *,
    name: Optional[str] = "Hazelnut Spread",
    brands: str = "Acme",
    nutriments: Optional[Dict[str, Any]] = None,
    **fields: Any,
) -> Dict[str, Any]:
    """A raw Open Food Facts product record."""
    product: Dict[str, Any] = {
        "code": code,
        "brands": brands,
        "serving_size": "15 g",
        "nutriments": nutriments if nutriments is not None else {
            "energy-kcal_100g": 539,
            "proteins_100g": 6.3,
            "carbohydrates_100g": 57.5,
            "fat_100g": 30.9,
        },
    }
    if name is not None:
        product["product_name"] = name
    product.update(fields)
    return product


__all__ = [
    # Fakes
    "FakePodRepository",
    "FakePodInviteRepository",
    "FakePodMessageRepository",
    "FakeWorkoutSessionRepository",
    "FakeTemplateRepository",
    "FakeProfileRepository",
    "FakeEventLogRepository",
    "FakeFoodItemRepository",
    "FakeOpenFoodFactsClient",
    # Factories
    "create_pod_repo",
    "create_session_repo",
    "create_daily_sessions",
    "create_template_repo",
    "create_profile_repo",
    "off_product",
]
