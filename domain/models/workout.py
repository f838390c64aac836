"""
Workout aggregate root - a live or finished training session.
"""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.exercise import DEFAULT_CATEGORY, ExerciseType
from domain.models.workout_set import WorkoutSet


class ExerciseInstance(BaseModel):
    """
    Per-session copy of an exercise with its logged sets.

    ``instance_id`` identifies the exercise within one workout only; it is
    unrelated to the catalog exercise id. Two instances of the same catalog
    exercise in one session get distinct instance ids.
    """

    instance_id: str = Field(..., min_length=1)
    exercise_id: Optional[str] = Field(default=None, description="Catalog exercise id")
    name: str = Field(..., min_length=1)
    category: str = Field(default=DEFAULT_CATEGORY)
    notes: str = Field(default="")
    exercise_type: ExerciseType = Field(default=ExerciseType.WEIGHTED)
    equipment_options: List[str] = Field(default_factory=list)
    active_equipment: Optional[str] = Field(
        default=None, description="Equipment picked for this session (weighted only)"
    )
    superset_id: Optional[str] = Field(default=None)
    sets: List[WorkoutSet] = Field(default_factory=list)

    @field_validator("exercise_type", mode="before")
    @classmethod
    def default_exercise_type(cls, v):
        return v or ExerciseType.WEIGHTED

    @property
    def is_bodyweight(self) -> bool:
        return self.exercise_type == ExerciseType.BODYWEIGHT

    @property
    def last_set(self) -> Optional[WorkoutSet]:
        return self.sets[-1] if self.sets else None

    def find_set(self, set_id: str) -> Optional[WorkoutSet]:
        return next((s for s in self.sets if s.id == set_id), None)

    def with_sets(self, sets: List[WorkoutSet]) -> "ExerciseInstance":
        return self.model_copy(update={"sets": list(sets)})

    model_config = {"frozen": True}


class Workout(BaseModel):
    """
    Aggregate root representing one training session.

    A Workout is created by the WorkoutFactory, evolves through the
    session's mutation methods while active, and is frozen once finished.
    Every domain method returns a new instance.

    Examples:
        >>> from datetime import datetime
        >>> workout = Workout(id="w1", start_time=datetime(2024, 1, 25, 14, 30))
        >>> workout.is_finished
        False
        >>> workout.finish(datetime(2024, 1, 25, 15, 15)).duration
        45
    """

    # Identity
    id: str = Field(..., min_length=1)
    start_time: datetime = Field(..., description="When the session started")
    end_time: Optional[datetime] = Field(default=None)
    duration: Optional[int] = Field(
        default=None, ge=0, description="Whole minutes between start and end"
    )

    # Provenance
    template_id: Optional[str] = Field(default=None)
    template_name: Optional[str] = Field(default=None)
    workout_type: Optional[str] = Field(default=None)

    # Structure
    exercises: List[ExerciseInstance] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def completed_sets(self) -> int:
        return sum(1 for ex in self.exercises for s in ex.sets if s.completed)

    def find_exercise(self, instance_id: str) -> Optional[ExerciseInstance]:
        return next((ex for ex in self.exercises if ex.instance_id == instance_id), None)

    # -------------------------------------------------------------------------
    # Domain Methods (return new instances for immutability)
    # -------------------------------------------------------------------------

    def with_exercises(self, exercises: List[ExerciseInstance]) -> "Workout":
        return self.model_copy(update={"exercises": list(exercises)})

    def replace_exercise(self, exercise: ExerciseInstance) -> "Workout":
        """
        Return a new Workout with the instance sharing ``exercise.instance_id``
        swapped for ``exercise``.
        """
        return self.with_exercises(
            [exercise if ex.instance_id == exercise.instance_id else ex for ex in self.exercises]
        )

    def finish(self, now: datetime) -> "Workout":
        """
        Return a new Workout stamped with its end time and duration.

        Duration is the elapsed time rounded half-up to whole minutes.

        Args:
            now: End timestamp; must use the same tz-awareness as start_time.
        """
        elapsed_minutes = (now - self.start_time).total_seconds() / 60
        return self.model_copy(
            update={
                "end_time": now,
                "duration": max(0, math.floor(elapsed_minutes + 0.5)),
            }
        )

    def __str__(self) -> str:
        label = self.template_name or "Freestyle"
        return f"Workout({label!r}, {len(self.exercises)} exercises, {self.total_sets} sets)"

    model_config = {"frozen": True}
