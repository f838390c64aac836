"""
WorkoutFactory - builds session Workouts from templates or from scratch.

Every workout, exercise instance and set gets a fresh uuid4 so ids never
collide within (or across) sessions. Blueprint data is copied, never
shared, so later template or catalog edits leave history untouched.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from domain.models import (
    BlueprintSet,
    Exercise,
    ExerciseBlueprint,
    ExerciseInstance,
    Template,
    Workout,
    WorkoutSet,
)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def default_set() -> WorkoutSet:
    """An empty, uncompleted set."""
    return WorkoutSet(id=new_id(), weight=0, reps=0, completed=False)


@dataclass(frozen=True)
class TargetOverride:
    """Replace the sets of the exercise at ``exercise_index`` with a fresh plan."""

    exercise_index: int
    target_sets: int
    target_reps: float


class WorkoutFactory:
    """
    Creates Workout aggregates.

    The clock is injectable so tests can pin start times.

    Usage:
        >>> factory = WorkoutFactory()
        >>> factory.create_empty().exercises
        []
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _utcnow

    def create_empty(self) -> Workout:
        """Start a freestyle workout with no exercises."""
        return Workout(id=new_id(), start_time=self._clock(), template_id=None, exercises=[])

    def create_from_template(self, template: Optional[Template]) -> Workout:
        """
        Start a workout from a template.

        Each blueprint becomes an ExerciseInstance with a fresh instance id
        and its superset link preserved. Blueprint sets are copied with fresh
        ids, missing weight/reps set to 0 and completion cleared; a blueprint
        without sets gets one empty set.

        Args:
            template: Template to instantiate. None starts an empty workout.

        Returns:
            New active Workout.
        """
        if template is None:
            return self.create_empty()

        return Workout(
            id=new_id(),
            start_time=self._clock(),
            template_id=template.id,
            template_name=template.name,
            workout_type=template.workout_type,
            exercises=[self._instance_from_blueprint(bp) for bp in template.exercises],
        )

    def instance_from_exercise(
        self, exercise: Exercise, superset_id: Optional[str] = None
    ) -> ExerciseInstance:
        """Turn a catalog exercise into a session instance with one empty set."""
        return ExerciseInstance(
            instance_id=new_id(),
            exercise_id=exercise.id,
            name=exercise.name,
            category=exercise.category,
            notes=exercise.notes,
            exercise_type=exercise.exercise_type,
            equipment_options=list(exercise.equipment_options),
            superset_id=superset_id,
            sets=[default_set()],
        )

    def apply_config(
        self, workout: Workout, overrides: Optional[Sequence[TargetOverride]]
    ) -> Workout:
        """
        Replace the set plan of selected exercises.

        For every override, the exercise at ``exercise_index`` gets
        ``target_sets`` new sets with ``target_reps`` reps, weight 0 and
        completion cleared. Other exercises are left as they are; indices
        outside the workout are ignored.

        Args:
            workout: Workout to configure.
            overrides: Target plans keyed by exercise position.

        Returns:
            New Workout, or ``workout`` itself when there are no overrides.
        """
        if not overrides:
            return workout

        exercises = list(workout.exercises)
        for override in overrides:
            if not 0 <= override.exercise_index < len(exercises):
                continue
            sets = [
                WorkoutSet(id=new_id(), weight=0, reps=override.target_reps, completed=False)
                for _ in range(max(0, override.target_sets))
            ]
            exercises[override.exercise_index] = exercises[override.exercise_index].with_sets(sets)

        return workout.with_exercises(exercises)

    def _instance_from_blueprint(self, blueprint: ExerciseBlueprint) -> ExerciseInstance:
        return ExerciseInstance(
            instance_id=new_id(),
            exercise_id=blueprint.exercise_id,
            name=blueprint.name,
            category=blueprint.category,
            notes=blueprint.notes,
            exercise_type=blueprint.exercise_type,
            equipment_options=list(blueprint.equipment_options),
            active_equipment=blueprint.active_equipment,
            superset_id=blueprint.superset_id or None,
            sets=self._materialize_sets(blueprint.sets),
        )

    @staticmethod
    def _materialize_sets(blueprint_sets: List[BlueprintSet]) -> List[WorkoutSet]:
        if not blueprint_sets:
            return [default_set()]
        return [
            WorkoutSet(
                id=new_id(),
                weight=planned.weight or 0,
                reps=planned.reps or 0,
                completed=False,
                rest=planned.rest,
            )
            for planned in blueprint_sets
        ]
