"""
Launcher prediction cache.

Per-user TTL cache in front of LauncherService. Cached predictions are
served immediately and refreshed in the background; concurrent readers
may see the stale value until the refresh lands (last writer wins).
"""
from dataclasses import dataclass
import heapq
import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from fastapi import BackgroundTasks

from domain.models.adaptive import LauncherResponse

if TYPE_CHECKING:
    from backend.core.launcher import LauncherService

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 6 * 60 * 60


@dataclass
class CacheEntry:
    """Cache entry with an absolute expiry time."""

    response: LauncherResponse
    expires_at: float


class LauncherCache:
    """
    TTL store keyed by user id.

    Expiry is indexed by a min-heap of (expires_at, user_id). Heap items
    left behind by overwrites or removals are skipped when popped, and the
    heap is rebuilt once it holds more than twice the live entries.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._expiry_index: List[Tuple[float, str]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, user_id: str) -> Optional[LauncherResponse]:
        """Cached response if present and not expired, else None."""
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[user_id]
            return None
        return entry.response

    def put(self, user_id: str, response: LauncherResponse) -> None:
        """Store a response, sweeping expired entries first."""
        now = self._clock()
        self.clear_expired(now)
        expires_at = now + self._ttl
        self._entries[user_id] = CacheEntry(response=response, expires_at=expires_at)
        heapq.heappush(self._expiry_index, (expires_at, user_id))
        if len(self._expiry_index) > 2 * len(self._entries):
            self._rebuild_index()

    def _rebuild_index(self) -> None:
        """Drop heap items left behind by overwrites and removals."""
        self._expiry_index = [
            (entry.expires_at, user_id) for user_id, entry in self._entries.items()
        ]
        heapq.heapify(self._expiry_index)

    def clear_user(self, user_id: str) -> bool:
        """Drop a user's entry. Returns True if one existed."""
        return self._entries.pop(user_id, None) is not None

    def clear_expired(self, now: Optional[float] = None) -> int:
        """
        Remove every entry that has expired by ``now``.

        Returns:
            Number of entries removed
        """
        if now is None:
            now = self._clock()
        removed = 0
        while self._expiry_index and self._expiry_index[0][0] <= now:
            expires_at, user_id = heapq.heappop(self._expiry_index)
            entry = self._entries.get(user_id)
            if entry is not None and entry.expires_at == expires_at:
                del self._entries[user_id]
                removed += 1
        return removed

    def clear(self) -> None:
        self._entries.clear()
        self._expiry_index.clear()

    def snapshot(self) -> List[Dict[str, Any]]:
        """Serialize live entries to plain dicts."""
        return [
            {
                "user_id": user_id,
                "expires_at": entry.expires_at,
                "response": entry.response.model_dump(mode="json"),
            }
            for user_id, entry in self._entries.items()
        ]

    def restore(self, items: List[Dict[str, Any]]) -> int:
        """
        Load entries produced by snapshot(), skipping expired or invalid ones.

        Returns:
            Number of entries restored
        """
        now = self._clock()
        restored = 0
        for item in items:
            try:
                expires_at = float(item["expires_at"])
                response = LauncherResponse.model_validate(item["response"])
                user_id = str(item["user_id"])
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid launcher cache entry: {e}")
                continue
            if expires_at <= now:
                continue
            self._entries[user_id] = CacheEntry(response=response, expires_at=expires_at)
            heapq.heappush(self._expiry_index, (expires_at, user_id))
            restored += 1
        return restored


class CachedLauncherService:
    """Serves launcher responses from the cache, refreshing in the background."""

    def __init__(self, launcher_service: "LauncherService", cache: LauncherCache):
        self._launcher = launcher_service
        self._cache = cache

    def refresh(self, user_id: str) -> LauncherResponse:
        """Recompute and store a user's launcher response."""
        response = self._launcher.get_launcher(user_id)
        self._cache.put(user_id, response)
        return response

    def get_prediction(
        self,
        user_id: str,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> LauncherResponse:
        """
        Cached response when available (with a refresh scheduled), else a
        freshly computed one.
        """
        cached = self._cache.get(user_id)
        if cached is not None:
            if background_tasks is not None:
                background_tasks.add_task(self.refresh, user_id)
            return cached
        return self.refresh(user_id)

    def invalidate(self, user_id: str) -> None:
        self._cache.clear_user(user_id)
