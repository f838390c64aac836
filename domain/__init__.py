"""
Domain layer for the workout logbook.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, API, export targets).
"""

from domain.models import (
    Exercise,
    ExerciseInstance,
    ExerciseType,
    ExportSettings,
    Template,
    Workout,
    WorkoutSet,
)

__all__ = [
    "Exercise",
    "ExerciseInstance",
    "ExerciseType",
    "ExportSettings",
    "Template",
    "Workout",
    "WorkoutSet",
]
