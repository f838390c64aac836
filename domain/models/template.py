"""
Workout templates: reusable, named blueprints of exercises and target sets.
"""

from typing import List, Literal, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from domain.models.exercise import DEFAULT_CATEGORY, Exercise, ExerciseType


class BlueprintSet(BaseModel):
    """
    A planned set inside a template.

    Every target is optional; missing values are filled in when a workout
    is started from the template.
    """

    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[float] = Field(default=None, ge=0)
    rest: Optional[int] = Field(default=None, ge=0)


class ExerciseBlueprint(BaseModel):
    """
    An exercise slot in a template with its default set plan.

    The catalog attributes are copied from the Exercise when the blueprint
    is created.
    """

    exercise_id: Optional[str] = Field(default=None, description="Catalog exercise id")
    name: str = Field(..., min_length=1)
    category: str = Field(default=DEFAULT_CATEGORY)
    notes: str = Field(default="")
    exercise_type: ExerciseType = Field(default=ExerciseType.WEIGHTED)
    equipment_options: List[str] = Field(default_factory=list)
    active_equipment: Optional[str] = Field(default=None)
    superset_id: Optional[str] = Field(
        default=None, description="Shared id linking this blueprint to its superset partner"
    )
    sets: List[BlueprintSet] = Field(default_factory=list)

    @field_validator("exercise_type", mode="before")
    @classmethod
    def default_exercise_type(cls, v):
        return v or ExerciseType.WEIGHTED

    @classmethod
    def from_exercise(
        cls, exercise: Exercise, sets: Optional[List[BlueprintSet]] = None
    ) -> "ExerciseBlueprint":
        """Build a blueprint from a catalog exercise."""
        return cls(
            exercise_id=exercise.id,
            name=exercise.name,
            category=exercise.category,
            notes=exercise.notes,
            exercise_type=exercise.exercise_type,
            equipment_options=list(exercise.equipment_options),
            sets=sets or [],
        )


class Template(BaseModel):
    """
    Aggregate for a reusable workout plan.

    Editing methods return new Template instances.

    Examples:
        >>> template = Template(
        ...     id="t1",
        ...     name="Upper Body",
        ...     exercises=[
        ...         ExerciseBlueprint(name="Bench Press"),
        ...         ExerciseBlueprint(name="Row"),
        ...     ],
        ... )
        >>> linked = template.toggle_superset(0)
        >>> linked.exercises[0].superset_id == linked.exercises[1].superset_id
        True
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    workout_type: Optional[str] = Field(
        default=None, description="Free-form label, e.g. 'Strength'"
    )
    exercises: List[ExerciseBlueprint] = Field(default_factory=list)

    @field_validator("workout_type", mode="before")
    @classmethod
    def blank_type_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def toggle_superset(self, index: int) -> "Template":
        """
        Link the blueprint at ``index`` with the next one, or unlink them.

        Supersets built here are always pairs: linking first unlinks any
        previous partner of either blueprint.

        Args:
            index: Position of the first blueprint of the pair.

        Returns:
            New Template. Unchanged if ``index`` has no following blueprint.
        """
        if index < 0 or index >= len(self.exercises) - 1:
            return self

        exercises = list(self.exercises)
        current, following = exercises[index], exercises[index + 1]

        if current.superset_id and current.superset_id == following.superset_id:
            exercises[index] = current.model_copy(update={"superset_id": None})
            exercises[index + 1] = following.model_copy(update={"superset_id": None})
            return self.model_copy(update={"exercises": exercises})

        stale = {sid for sid in (current.superset_id, following.superset_id) if sid}
        exercises = [
            bp.model_copy(update={"superset_id": None}) if bp.superset_id in stale else bp
            for bp in exercises
        ]
        superset_id = f"{uuid.uuid4()}_superset"
        exercises[index] = exercises[index].model_copy(update={"superset_id": superset_id})
        exercises[index + 1] = exercises[index + 1].model_copy(
            update={"superset_id": superset_id}
        )
        return self.model_copy(update={"exercises": exercises})

    def move_exercise(self, index: int, direction: Literal["up", "down"]) -> "Template":
        """Swap a blueprint with its neighbour. Out-of-range moves are ignored."""
        target = index - 1 if direction == "up" else index + 1
        if not (0 <= index < len(self.exercises)) or not (0 <= target < len(self.exercises)):
            return self
        exercises = list(self.exercises)
        exercises[index], exercises[target] = exercises[target], exercises[index]
        return self.model_copy(update={"exercises": exercises})
