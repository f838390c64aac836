"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or filesystem required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeCatalogRepository, create_catalog_repo

    # Direct instantiation
    repo = FakeCatalogRepository()
    repo.seed_exercises([Exercise(id="ex-1", name="Bench Press")])

    # Factory function with a pre-populated catalog and template
    repo = create_catalog_repo()
"""
from datetime import datetime, timezone
from typing import Optional

from domain.models import (
    BlueprintSet,
    Exercise,
    ExerciseBlueprint,
    ExerciseInstance,
    ExerciseType,
    Template,
    Workout,
    WorkoutSet,
)
from tests.fakes.catalog_repository import FakeCatalogRepository
from tests.fakes.export_sink import FakeExportSink, FakeRestTimer


# =============================================================================
# Sample Data
# =============================================================================

BENCH_PRESS = Exercise(
    id="ex-bench",
    name="Bench Press",
    category="chest",
    equipment_options=["Barbell", "Dumbbell"],
)
PULL_UPS = Exercise(
    id="ex-pullup",
    name="Pull-ups",
    category="back",
    exercise_type=ExerciseType.BODYWEIGHT,
)
SQUAT = Exercise(id="ex-squat", name="Squat", category="legs")


def upper_body_template(template_id: str = "tpl-upper") -> Template:
    """Two-exercise template: 2 bench sets and no pull-up sets."""
    return Template(
        id=template_id,
        name="Upper Body",
        workout_type="Strength",
        exercises=[
            ExerciseBlueprint.from_exercise(
                BENCH_PRESS,
                sets=[BlueprintSet(weight=135, reps=10), BlueprintSet(weight=135, reps=8)],
            ),
            ExerciseBlueprint.from_exercise(PULL_UPS),
        ],
    )


def upper_body_workout(
    *,
    workout_id: str = "w-upper",
    start_time: Optional[datetime] = None,
    duration: int = 45,
) -> Workout:
    """
    Finished workout with Bench Press [(135,10),(135,8)] and
    Pull-ups [(0,8),(0,6)].
    """
    return Workout(
        id=workout_id,
        start_time=start_time or datetime(2024, 1, 25, 14, 30, tzinfo=timezone.utc),
        end_time=datetime(2024, 1, 25, 15, 15, tzinfo=timezone.utc),
        duration=duration,
        template_id="tpl-upper",
        template_name="Upper Body",
        workout_type="Strength",
        exercises=[
            ExerciseInstance(
                instance_id="i-bench",
                exercise_id=BENCH_PRESS.id,
                name="Bench Press",
                category="CHEST",
                sets=[
                    WorkoutSet(id="s1", weight=135, reps=10, completed=True),
                    WorkoutSet(id="s2", weight=135, reps=8, completed=True),
                ],
            ),
            ExerciseInstance(
                instance_id="i-pullup",
                exercise_id=PULL_UPS.id,
                name="Pull-ups",
                category="BACK",
                exercise_type=ExerciseType.BODYWEIGHT,
                sets=[
                    WorkoutSet(id="s3", weight=0, reps=8, completed=True),
                    WorkoutSet(id="s4", weight=0, reps=6, completed=True),
                ],
            ),
        ],
    )


# =============================================================================
# Factory Functions
# =============================================================================


def create_catalog_repo(*, with_logs: bool = False) -> FakeCatalogRepository:
    """
    Create a FakeCatalogRepository seeded with the sample catalog.

    Args:
        with_logs: Also store the sample finished workout

    Returns:
        Pre-populated FakeCatalogRepository
    """
    repo = FakeCatalogRepository()
    repo.seed_exercises([BENCH_PRESS, PULL_UPS, SQUAT])
    repo.seed_templates([upper_body_template()])
    if with_logs:
        repo.seed_logs([upper_body_workout()])
    return repo


__all__ = [
    # Fakes
    "FakeCatalogRepository",
    "FakeExportSink",
    "FakeRestTimer",
    # Sample data
    "BENCH_PRESS",
    "PULL_UPS",
    "SQUAT",
    "upper_body_template",
    "upper_body_workout",
    # Factories
    "create_catalog_repo",
]
