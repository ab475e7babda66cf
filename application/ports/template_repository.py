"""
Template Repository Interface (Port).

Workout templates and the exercise catalog used by the smart launcher
and the adaptive workout generator.
"""
from typing import Protocol, Optional, List, Dict, Any, Sequence


class TemplateRepository(Protocol):
    """Read access to workout templates and catalog exercises."""

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a template with its exercises in sort order.

        Returns:
            Dict with id, name and exercises, where each exercise is
            {"exercise": {id, name, muscle_group, equipment},
             "sets": [{set_number, reps, weight_kg}, ...]},
            or None if the template does not exist
        """
        ...

    def list_recent_templates(
        self,
        user_id: str,
        *,
        limit: int = 3,
    ) -> List[Dict[str, Any]]:
        """
        Get the user's most recently updated templates.

        Returns:
            List of dicts with id, name, updated_at and exercise_count
        """
        ...

    def find_exercises(
        self,
        *,
        muscle_groups: Sequence[str],
        category: str = "compound",
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        """
        Get catalog exercises for preset workouts.

        Returns:
            List of dicts with id, name, muscle_group and equipment
        """
        ...
