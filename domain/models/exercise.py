"""
Exercise catalog entity.

Catalog exercises are the source of truth for names, muscle groups and
equipment. Templates and live workouts copy these attributes rather than
referencing them, so editing the catalog never rewrites history.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_CATEGORY = "GENERAL"

DEFAULT_MUSCLE_GROUPS = ["GENERAL", "CHEST", "BACK", "LEGS", "SHOULDERS", "ARMS", "CORE"]


def add_muscle_group(groups: List[str], category: Optional[str]) -> List[str]:
    """
    Return ``groups`` with ``category`` added, uppercased.

    The list is re-sorted only when a new group is added; known or blank
    categories return the list unchanged.

    Examples:
        >>> add_muscle_group(["GENERAL", "CHEST"], "calves")
        ['CALVES', 'CHEST', 'GENERAL']
        >>> add_muscle_group(["GENERAL", "CHEST"], "chest")
        ['GENERAL', 'CHEST']
    """
    group = (category or "").strip().upper()
    if not group or group in groups:
        return list(groups)
    return sorted([*groups, group])


class ExerciseType(str, Enum):
    """
    How an exercise is loaded.

    - WEIGHTED: External load; set weight is the full load
    - BODYWEIGHT: Body is the load; set weight is added weight (vest, belt)
    """

    WEIGHTED = "weighted"
    BODYWEIGHT = "bodyweight"


class Exercise(BaseModel):
    """
    An exercise in the user's catalog.

    Examples:
        >>> Exercise(id="ex-1", name="Bench Press", category="chest").category
        'CHEST'

        >>> pullup = Exercise(
        ...     id="ex-2",
        ...     name="Pull-ups",
        ...     exercise_type=ExerciseType.BODYWEIGHT,
        ... )
        >>> pullup.is_bodyweight
        True
    """

    id: str = Field(..., min_length=1, description="Catalog identifier")
    name: str = Field(..., min_length=1, description="Exercise display name")
    category: str = Field(
        default=DEFAULT_CATEGORY, description="Muscle group (stored uppercase)"
    )
    notes: str = Field(default="", description="Free-form notes")
    exercise_type: ExerciseType = Field(
        default=ExerciseType.WEIGHTED, description="Weighted or bodyweight"
    )
    equipment_options: List[str] = Field(
        default_factory=list,
        description="Equipment this exercise can be performed with (weighted only)",
    )
    created_at: Optional[datetime] = Field(default=None)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: Optional[str]) -> str:
        """Uppercase the muscle group, falling back to GENERAL."""
        if not v or not str(v).strip():
            return DEFAULT_CATEGORY
        return str(v).strip().upper()

    @field_validator("exercise_type", mode="before")
    @classmethod
    def default_exercise_type(cls, v):
        # Older catalog rows predate exercise types
        return v or ExerciseType.WEIGHTED

    @field_validator("equipment_options", mode="before")
    @classmethod
    def default_equipment(cls, v):
        return v or []

    @property
    def is_bodyweight(self) -> bool:
        return self.exercise_type == ExerciseType.BODYWEIGHT

    model_config = {"frozen": True}
