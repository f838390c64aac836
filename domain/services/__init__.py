"""
Pure domain services: workout construction, superset grouping and volume.

None of these touch storage or the clock (the factory takes an injectable
clock), so they are safe to call from any layer.
"""

from domain.services.grouping import ExerciseGroup, GroupType, group_exercises
from domain.services.volume import (
    normalize_volume,
    volume_of_exercise,
    volume_of_set,
    volume_of_workout,
)
from domain.services.workout_factory import (
    TargetOverride,
    WorkoutFactory,
    default_set,
    new_id,
)

__all__ = [
    "ExerciseGroup",
    "GroupType",
    "group_exercises",
    "normalize_volume",
    "volume_of_set",
    "volume_of_exercise",
    "volume_of_workout",
    "TargetOverride",
    "WorkoutFactory",
    "default_set",
    "new_id",
]
