"""
Render a finished Workout as an Obsidian note: YAML frontmatter plus one
Markdown table per exercise.

Frontmatter order is fixed: date, type, duration, per-exercise volumes
(first-seen order), tags. There is deliberately no aggregate volume field;
per-exercise keys let Dataview chart each lift over time.

Output depends only on the workout and settings, never on the current time.
"""

import re
from typing import Dict, List, Union

from domain.models import ExerciseInstance, ExportSettings, Workout, WorkoutSet
from domain.services import group_exercises, normalize_volume, volume_of_exercise

Number = Union[int, float]

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9\-_ ]")


def format_number(value: Number) -> str:
    """Render 135.0 as '135' and 22.5 as '22.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def volume_key(exercise_name: str) -> str:
    """
    Frontmatter key for an exercise's volume.

    Examples:
        >>> volume_key("Pull-ups")
        'Pull_ups_volume'
    """
    return f"{_NON_ALNUM.sub('_', exercise_name)}_volume"


def exercise_volumes(workout: Workout, settings: ExportSettings) -> Dict[str, Number]:
    """
    Non-zero volumes keyed by sanitized exercise name.

    Exercises whose names sanitize to the same key are summed into one
    entry. Dict order follows first appearance in the workout.
    """
    volumes: Dict[str, Number] = {}
    for exercise in workout.exercises:
        volume = volume_of_exercise(exercise, settings.user_bodyweight)
        if not volume:
            continue
        key = volume_key(exercise.name)
        volumes[key] = normalize_volume(volumes.get(key, 0) + volume)
    return volumes


_QUOTED_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape_quoted(text: str) -> str:
    """Escape text for a YAML double-quoted scalar."""
    return "".join(_QUOTED_ESCAPES.get(ch, ch) for ch in text)


def _frontmatter(workout: Workout, settings: ExportSettings) -> List[str]:
    mapping = settings.yaml_mapping
    lines = ["---", f"{mapping.date}: {workout.start_time:%Y-%m-%d %H:%M}"]

    if workout.workout_type:
        lines.append(f'{mapping.type}: "[[{_escape_quoted(workout.workout_type)}]]"')

    lines.append(f"{mapping.duration}: {workout.duration or 0}")

    for key, volume in exercise_volumes(workout, settings).items():
        lines.append(f"{key}: {format_number(volume)}")

    tags = ", ".join(re.sub(r"^#", "", tag) for tag in settings.tags)
    lines.append(f"{mapping.tags}: {tags}")
    lines.append("---")
    return lines


def _title(workout: Workout) -> str:
    start = workout.start_time
    name = workout.template_name or f"{start:%A}, {start:%b} {start.day}"
    return f"# {name} - {start.date().isoformat()}"


def _weight_cell(exercise: ExerciseInstance, workout_set: WorkoutSet) -> str:
    if exercise.is_bodyweight:
        return "BW" if not workout_set.weight else f"+{format_number(workout_set.weight)}"
    return format_number(workout_set.weight or 0)


def format_exercise(exercise: ExerciseInstance) -> List[str]:
    """Heading and set table for one exercise."""
    heading = f"#### {exercise.name}"
    if exercise.is_bodyweight:
        heading += " [BW]"
    if exercise.active_equipment and not exercise.is_bodyweight:
        heading += f" ({exercise.active_equipment})"

    lines = [heading, "| Set | Weight | Reps |", "| --- | --- | --- |"]
    for number, workout_set in enumerate(exercise.sets, start=1):
        lines.append(
            f"| {number} | {_weight_cell(exercise, workout_set)} "
            f"| {format_number(workout_set.reps or 0)} |"
        )
    lines.append("")
    return lines


def to_markdown(workout: Workout, settings: ExportSettings) -> str:
    """
    Generate the Markdown note for a workout.

    Args:
        workout: Finished workout (duration is read as stored).
        settings: Frontmatter key mapping, tags and user bodyweight.

    Returns:
        Markdown document starting with the frontmatter block.
    """
    lines = _frontmatter(workout, settings)
    lines.extend(["", _title(workout), ""])

    superset_number = 0
    for group in group_exercises(workout.exercises):
        if group.is_superset:
            superset_number += 1
            lines.append(f"### Superset {superset_number}")
        for exercise in group.exercises:
            lines.extend(format_exercise(exercise))

    return "\n".join(lines).rstrip("\n") + "\n"


def suggested_filename(workout: Workout) -> str:
    """
    Note name for the export sink, without extension.

    Examples:
        >>> from datetime import datetime
        >>> w = Workout(id="w", start_time=datetime(2024, 1, 25), template_name="Push/Pull")
        >>> suggested_filename(w)
        'PushPull - 2024-01-25'
    """
    name = _UNSAFE_FILENAME.sub("", workout.template_name or "") or "Workout"
    return f"{name} - {workout.start_time.date().isoformat()}"
