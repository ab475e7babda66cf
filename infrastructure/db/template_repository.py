"""
Supabase Template Repository Implementation.

Reads workout_templates with their template_exercises and
template_exercise_sets, and the exercises catalog.
"""
from typing import Optional, List, Dict, Any, Sequence
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseTemplateRepository:
    """Supabase implementation of TemplateRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("workout_templates") \
                .select(
                    "id, name, "
                    "template_exercises(sort_order, "
                    "exercises(id, name, muscle_group, equipment), "
                    "template_exercise_sets(set_number, reps, weight_kg))"
                ) \
                .eq("id", template_id) \
                .limit(1) \
                .execute()
            if not result.data:
                return None
            row = result.data[0]
        except Exception as e:
            logger.exception(f"Error fetching template {template_id}: {e}")
            return None

        items = sorted(
            row.get("template_exercises") or [],
            key=lambda te: te.get("sort_order") or 0,
        )
        exercises = []
        for item in items:
            sets = sorted(
                item.get("template_exercise_sets") or [],
                key=lambda s: s.get("set_number") or 0,
            )
            exercises.append({
                "exercise": item.get("exercises"),
                "sets": sets,
            })
        return {"id": row["id"], "name": row.get("name"), "exercises": exercises}

    def list_recent_templates(
        self,
        user_id: str,
        *,
        limit: int = 3,
    ) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("workout_templates") \
                .select("id, name, updated_at, template_exercises(count)") \
                .eq("user_id", user_id) \
                .order("updated_at", desc=True) \
                .limit(limit) \
                .execute()
        except Exception as e:
            logger.exception(f"Error fetching templates for user {user_id}: {e}")
            return []

        templates = []
        for row in result.data or []:
            counts = row.get("template_exercises") or [{}]
            templates.append({
                "id": row["id"],
                "name": row.get("name"),
                "updated_at": row.get("updated_at"),
                "exercise_count": counts[0].get("count", 0) if counts else 0,
            })
        return templates

    def find_exercises(
        self,
        *,
        muscle_groups: Sequence[str],
        category: str = "compound",
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("exercises") \
                .select("id, name, muscle_group, equipment") \
                .in_("muscle_group", list(muscle_groups)) \
                .eq("category", category) \
                .limit(limit) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error fetching preset exercises: {e}")
            return []
