"""
Pytest fixtures for fithub-api tests.

Provides fresh fake repositories per test and a TestClient whose app has
every repository dependency overridden with those fakes, plus auth
mocked to TEST_USER_ID.

Usage:
    def test_something(client, fake_repos):
        fake_repos["pod_repo"].seed_pod("pod-1", creator_id=TEST_USER_ID)
        response = client.get("/pods/pod-1")
"""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.services.launcher_cache import LauncherCache
from backend.settings import Settings
from tests.fakes import (
    FakeEventLogRepository,
    FakeFoodItemRepository,
    FakeOpenFoodFactsClient,
    FakePodInviteRepository,
    FakePodMessageRepository,
    FakePodRepository,
    FakeProfileRepository,
    FakeTemplateRepository,
    FakeWorkoutSessionRepository,
)


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------

TEST_USER_ID = "test-user"
OTHER_USER_ID = "other-user"


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_repos() -> Dict[str, Any]:
    """
    Fresh fake for every overridable dependency.

    Returns:
        Dict mapping dependency names to fake instances
    """
    return {
        "pod_repo": FakePodRepository(),
        "invite_repo": FakePodInviteRepository(),
        "message_repo": FakePodMessageRepository(),
        "session_repo": FakeWorkoutSessionRepository(),
        "template_repo": FakeTemplateRepository(),
        "profile_repo": FakeProfileRepository(),
        "event_repo": FakeEventLogRepository(),
        "food_repo": FakeFoodItemRepository(),
        "off_client": FakeOpenFoodFactsClient(),
        "launcher_cache": LauncherCache(),
    }


_PROVIDERS: Dict[str, Callable[..., Any]] = {
    "pod_repo": deps.get_pod_repo,
    "invite_repo": deps.get_pod_invite_repo,
    "message_repo": deps.get_pod_message_repo,
    "session_repo": deps.get_session_repo,
    "template_repo": deps.get_template_repo,
    "profile_repo": deps.get_profile_repo,
    "event_repo": deps.get_event_log_repo,
    "food_repo": deps.get_food_item_repo,
    "off_client": deps.get_openfoodfacts_client,
    "launcher_cache": deps.get_launcher_cache,
}


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(environment="test", _env_file=None)


def _provide(fake: Any) -> Callable[[], Any]:
    """Zero-argument provider so FastAPI does not treat the fake as a query param."""
    return lambda: fake


@pytest.fixture
def app(test_settings, fake_repos):
    """Create a test application with fakes and mocked auth."""
    application = create_app(settings=test_settings)
    application.dependency_overrides[deps.get_current_user] = mock_get_current_user
    for name, provider in _PROVIDERS.items():
        application.dependency_overrides[provider] = _provide(fake_repos[name])
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Test client with auth and repositories overridden."""
    return TestClient(app)


@pytest.fixture
def unauthenticated_client(test_settings) -> TestClient:
    """Test client with no overrides (real auth, no database)."""
    return TestClient(create_app(settings=test_settings))
