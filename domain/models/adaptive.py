"""
Smart launcher and adaptive workout domain models.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Confidence = Literal["low", "medium", "high"]
VolumeTrend = Literal["increasing", "stable", "decreasing"]


class AdaptationType(str, Enum):
    """How a suggested workout is adjusted for the user's fatigue."""

    REST = "REST"
    VOLUME = "VOLUME"
    INTENSITY = "INTENSITY"


class FatigueTier(str, Enum):
    """Fatigue tiers: <40 low, 40-69 medium, >=70 high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExerciseRef(BaseModel):
    """Catalog exercise referenced by a template or preset."""

    id: str
    name: str
    muscle_group: Optional[str] = None
    equipment: Optional[str] = None


class LauncherExercise(BaseModel):
    """An exercise with its prescribed volume."""

    exercise: ExerciseRef
    target_sets: int = Field(..., ge=1)
    target_reps: int = Field(..., ge=1)
    target_weight_kg: Optional[float] = None


class LauncherPrediction(BaseModel):
    """The workout the user most likely wants to start today."""

    template_id: Optional[str] = None
    template_name: str
    exercises: List[LauncherExercise] = Field(default_factory=list)
    estimated_duration_mins: int = Field(..., ge=0)
    confidence: Confidence
    reason: str


class AlternativeTemplate(BaseModel):
    """A recently edited template offered as a manual override."""

    id: str
    name: str
    exercise_count: int = 0
    last_used: Optional[str] = None


class LauncherResponse(BaseModel):
    suggested_workout: LauncherPrediction
    alternative_templates: List[AlternativeTemplate] = Field(default_factory=list)


class FatigueMetrics(BaseModel):
    """Inputs the fatigue score was derived from."""

    recent_volume: int = 0
    baseline_volume: int = 0
    workouts_last_7_days: int = 0
    days_since_last_workout: Optional[int] = None
    volume_trend: VolumeTrend = "stable"


class FatigueAnalysis(BaseModel):
    fatigue_score: int = Field(..., ge=0, le=100)
    tier: FatigueTier
    recommendation: AdaptationType
    reason: str
    metrics: FatigueMetrics = Field(default_factory=FatigueMetrics)


class AdaptiveWorkout(LauncherPrediction):
    """A launcher-style prediction with its volume scaled for fatigue."""

    fatigue_score: int = Field(..., ge=0, le=100)
    adaptation_type: AdaptationType
    adaptation_reason: str
    volume_adjustment: int = Field(..., description="Percentage change from baseline volume")
