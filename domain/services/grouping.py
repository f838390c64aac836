"""
Superset grouping.

The single place that decides how a flat list of exercise instances is laid
out as singles and supersets. The session preview and the Markdown exporter
both go through ``group_exercises`` so they always agree on order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from domain.models import ExerciseInstance


class GroupType(str, Enum):
    SINGLE = "single"
    SUPERSET = "superset"


@dataclass(frozen=True)
class ExerciseGroup:
    """A single exercise, or all members of one superset in input order."""

    type: GroupType
    exercises: List[ExerciseInstance] = field(default_factory=list)
    superset_id: Optional[str] = None

    @property
    def is_superset(self) -> bool:
        return self.type == GroupType.SUPERSET

    @property
    def exercise(self) -> ExerciseInstance:
        """The only member of a single group."""
        return self.exercises[0]

    @property
    def key(self) -> str:
        """Stable identifier: the superset id or the single's instance id."""
        return self.superset_id if self.is_superset else self.exercise.instance_id


def group_exercises(exercises: Sequence[ExerciseInstance]) -> List[ExerciseGroup]:
    """
    Partition exercises into single and superset groups.

    Scans left to right. An exercise without a superset id becomes a single
    group. The first member of a superset emits one group holding every
    exercise with that superset id, wherever it sits in the list; later
    members do not start a new group. Singles are de-duplicated by
    instance id and supersets by superset id.

    Args:
        exercises: Exercise instances in workout order.

    Returns:
        Groups in display order.

    Examples:
        >>> a = ExerciseInstance(instance_id="a", name="A", superset_id="s")
        >>> b = ExerciseInstance(instance_id="b", name="B")
        >>> c = ExerciseInstance(instance_id="c", name="C", superset_id="s")
        >>> [g.type.value for g in group_exercises([a, b, c])]
        ['superset', 'single']
    """
    members: Dict[str, List[ExerciseInstance]] = {}
    for ex in exercises:
        if ex.superset_id:
            members.setdefault(ex.superset_id, []).append(ex)

    groups: List[ExerciseGroup] = []
    seen_singles = set()
    seen_supersets = set()

    for ex in exercises:
        if ex.superset_id:
            if ex.superset_id in seen_supersets:
                continue
            seen_supersets.add(ex.superset_id)
            groups.append(
                ExerciseGroup(
                    type=GroupType.SUPERSET,
                    exercises=list(members[ex.superset_id]),
                    superset_id=ex.superset_id,
                )
            )
        else:
            if ex.instance_id in seen_singles:
                continue
            seen_singles.add(ex.instance_id)
            groups.append(ExerciseGroup(type=GroupType.SINGLE, exercises=[ex]))

    return groups
