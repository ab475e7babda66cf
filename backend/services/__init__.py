"""Backend services for the FitHub API."""

from backend.services.event_logger import EventLogger
from backend.services.launcher_cache import CachedLauncherService, LauncherCache
from backend.services.openfoodfacts_client import (
    OpenFoodFactsClient,
    OpenFoodFactsError,
    OpenFoodFactsUnavailable,
    OpenFoodFactsAPIError,
)

__all__ = [
    "EventLogger",
    "LauncherCache",
    "CachedLauncherService",
    "OpenFoodFactsClient",
    "OpenFoodFactsError",
    "OpenFoodFactsUnavailable",
    "OpenFoodFactsAPIError",
]
