"""
Application Use Cases for the workout logbook.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import WorkoutSession, ExportWorkoutUseCase

    # Run a session
    session = WorkoutSession(catalog_repo=catalog_repo)
    workout = session.start(template)
    session.add_set(workout.exercises[0].instance_id)
    finished = session.finish()

    # Export it
    export_use_case = ExportWorkoutUseCase(
        catalog_repo=catalog_repo,
        export_sink=export_sink,
    )
    result = export_use_case.execute_from_workout(finished)
"""

from application.use_cases.export_workout import (
    EXPORT_FAILED_MESSAGE,
    ExportWorkoutResult,
    ExportWorkoutUseCase,
)
from application.use_cases.workout_session import (
    ActiveWorkoutAlreadyExistsError,
    MutationResult,
    MutationStatus,
    WorkoutSession,
)

__all__ = [
    # ExportWorkout
    "ExportWorkoutUseCase",
    "ExportWorkoutResult",
    "EXPORT_FAILED_MESSAGE",
    # WorkoutSession
    "WorkoutSession",
    "MutationResult",
    "MutationStatus",
    "ActiveWorkoutAlreadyExistsError",
]
