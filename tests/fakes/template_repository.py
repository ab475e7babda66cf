"""
Fake Template Repository for Testing.

In-memory implementation of TemplateRepository with a small exercise
catalog for preset workouts.
"""
from typing import Optional, List, Dict, Any, Sequence


DEFAULT_CATALOG = [
    {"id": "ex-bench", "name": "Bench Press", "muscle_group": "chest", "equipment": "barbell", "category": "compound"},
    {"id": "ex-row", "name": "Barbell Row", "muscle_group": "back", "equipment": "barbell", "category": "compound"},
    {"id": "ex-squat", "name": "Back Squat", "muscle_group": "legs", "equipment": "barbell", "category": "compound"},
    {"id": "ex-deadlift", "name": "Deadlift", "muscle_group": "back", "equipment": "barbell", "category": "compound"},
    {"id": "ex-lunge", "name": "Walking Lunge", "muscle_group": "legs", "equipment": "dumbbell", "category": "compound"},
    {"id": "ex-plank", "name": "Plank", "muscle_group": "core", "equipment": "bodyweight", "category": "compound"},
    {"id": "ex-curl", "name": "Biceps Curl", "muscle_group": "arms", "equipment": "dumbbell", "category": "isolation"},
]


class FakeTemplateRepository:
    """In-memory fake implementation of TemplateRepository."""

    def __init__(self, catalog: Optional[List[Dict[str, Any]]] = None):
        self._templates: Dict[str, Dict[str, Any]] = {}
        self._owners: Dict[str, str] = {}
        self._catalog: List[Dict[str, Any]] = list(catalog if catalog is not None else DEFAULT_CATALOG)

    def reset(self) -> None:
        self._templates.clear()
        self._owners.clear()

    def seed_template(
        self,
        template_id: str,
        *,
        user_id: str = "test-user",
        name: str = "Push Day",
        exercises: Optional[List[Dict[str, Any]]] = None,
        updated_at: str = "2024-01-01T00:00:00+00:00",
    ) -> Dict[str, Any]:
        """
        Seed a template.

        Args:
            exercises: Items shaped {"exercise": {...}, "sets": [{set_number, reps, weight_kg}]}
        """
        template = {
            "id": template_id,
            "name": name,
            "updated_at": updated_at,
            "exercises": exercises or [],
        }
        self._templates[template_id] = template
        self._owners[template_id] = user_id
        return template

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        template = self._templates.get(template_id)
        if not template:
            return None
        return {"id": template["id"], "name": template["name"], "exercises": list(template["exercises"])}

    def list_recent_templates(
        self,
        user_id: str,
        *,
        limit: int = 3,
    ) -> List[Dict[str, Any]]:
        rows = [
            {
                "id": t["id"],
                "name": t["name"],
                "updated_at": t["updated_at"],
                "exercise_count": len(t["exercises"]),
            }
            for template_id, t in self._templates.items()
            if self._owners.get(template_id) == user_id
        ]
        rows.sort(key=lambda r: r["updated_at"], reverse=True)
        return rows[:limit]

    def find_exercises(
        self,
        *,
        muscle_groups: Sequence[str],
        category: str = "compound",
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        groups = set(muscle_groups)
        rows = [
            {k: row[k] for k in ("id", "name", "muscle_group", "equipment")}
            for row in self._catalog
            if row["muscle_group"] in groups and row.get("category") == category
        ]
        return rows[:limit]
