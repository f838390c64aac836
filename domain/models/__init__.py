"""
Domain models for the workout logbook.

These models represent the core business concepts:
- Exercise: A catalog exercise (weighted or bodyweight)
- Template: A reusable plan of exercise blueprints with target sets
- Workout: The session aggregate root holding exercise instances
- ExerciseInstance: A per-session copy of an exercise with its sets
- WorkoutSet: One logged set
- ExportSettings: Frontmatter mapping, tags and bodyweight for exports

Usage:
    >>> from datetime import datetime
    >>> from domain.models import Workout, ExerciseInstance, WorkoutSet

    >>> workout = Workout(
    ...     id="w1",
    ...     start_time=datetime(2024, 1, 25, 14, 30),
    ...     exercises=[
    ...         ExerciseInstance(
    ...             instance_id="i1",
    ...             name="Bench Press",
    ...             sets=[WorkoutSet(id="s1", weight=135, reps=10)],
    ...         )
    ...     ],
    ... )

    >>> # Serialize to JSON
    >>> json_str = workout.model_dump_json()

    >>> # Deserialize from JSON
    >>> workout = Workout.model_validate_json(json_str)
"""

from domain.models.exercise import (
    DEFAULT_MUSCLE_GROUPS,
    Exercise,
    ExerciseType,
    add_muscle_group,
)
from domain.models.export_settings import ExportSettings, YamlMapping, parse_tags
from domain.models.template import BlueprintSet, ExerciseBlueprint, Template
from domain.models.workout import ExerciseInstance, Workout
from domain.models.workout_set import (
    DEFAULT_REST_SECONDS,
    WorkoutSet,
    coerce_amount,
    coerce_rest,
)

__all__ = [
    # Main entities
    "Workout",
    "ExerciseInstance",
    "WorkoutSet",
    "Exercise",
    "Template",
    "ExerciseBlueprint",
    "BlueprintSet",
    "ExportSettings",
    "YamlMapping",
    # Enums
    "ExerciseType",
    # Helpers
    "DEFAULT_MUSCLE_GROUPS",
    "DEFAULT_REST_SECONDS",
    "add_muscle_group",
    "coerce_amount",
    "coerce_rest",
    "parse_tags",
]
