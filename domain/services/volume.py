"""
Training volume calculations.

Volume is weight x reps summed over sets. Bodyweight exercises add the
user's body weight to any added load; when neither is known the set counts
its reps only.

Uncompleted sets are counted by default. Whether volume should only reflect
completed work is still an open product question, so ``completed_only`` is
available but off.
"""

from typing import Optional, Union

from domain.models import ExerciseInstance, Workout, WorkoutSet, coerce_amount

Number = Union[int, float]


def normalize_volume(total: float) -> Number:
    """Round away float noise (0.1 + 0.2) and keep integral totals as ints."""
    total = round(total, 6)
    return int(total) if float(total).is_integer() else total


def volume_of_set(
    workout_set: WorkoutSet,
    exercise: ExerciseInstance,
    user_bodyweight: Optional[float] = None,
) -> Number:
    """
    Calculate the volume of one set.

    Args:
        workout_set: The set to measure.
        exercise: Owning exercise (decides weighted vs bodyweight).
        user_bodyweight: User's body weight, if configured.

    Returns:
        Non-negative volume.

    Examples:
        >>> from domain.models import ExerciseType
        >>> bench = ExerciseInstance(instance_id="i1", name="Bench Press")
        >>> volume_of_set(WorkoutSet(id="s", weight=135, reps=10), bench)
        1350
        >>> pullup = ExerciseInstance(
        ...     instance_id="i2", name="Pull-ups", exercise_type=ExerciseType.BODYWEIGHT
        ... )
        >>> volume_of_set(WorkoutSet(id="s", weight=0, reps=8), pullup, 180)
        1440
        >>> volume_of_set(WorkoutSet(id="s", weight=0, reps=8), pullup)
        8
    """
    weight = coerce_amount(workout_set.weight)
    reps = coerce_amount(workout_set.reps)

    if exercise.is_bodyweight:
        bodyweight = coerce_amount(user_bodyweight)
        if not bodyweight and not weight:
            return reps
        return normalize_volume((bodyweight + weight) * reps)

    return normalize_volume(weight * reps)


def volume_of_exercise(
    exercise: ExerciseInstance,
    user_bodyweight: Optional[float] = None,
    *,
    completed_only: bool = False,
) -> Number:
    """
    Sum set volumes for one exercise.

    Args:
        exercise: Exercise instance with its sets.
        user_bodyweight: User's body weight, if configured.
        completed_only: Skip sets not marked completed.

    Returns:
        Total exercise volume.
    """
    total = sum(
        volume_of_set(s, exercise, user_bodyweight)
        for s in exercise.sets
        if s.completed or not completed_only
    )
    return normalize_volume(total)


def volume_of_workout(
    workout: Workout,
    user_bodyweight: Optional[float] = None,
    *,
    completed_only: bool = False,
) -> Number:
    """Sum exercise volumes across the whole workout."""
    total = sum(
        volume_of_exercise(ex, user_bodyweight, completed_only=completed_only)
        for ex in workout.exercises
    )
    return normalize_volume(total)
