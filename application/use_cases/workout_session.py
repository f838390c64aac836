"""
WorkoutSession Use Case.

Owns the single active workout and every in-session mutation: adding
exercises and sets, editing and toggling sets, building supersets, and
finishing or cancelling the session.

Each mutation builds a new Workout value and swaps it into the active slot;
the previous value is never modified. Mutations report their outcome as a
tagged MutationResult instead of raising, so unknown ids are visible to
callers that care and harmless to callers that don't.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from application.ports import CatalogRepository, RestTimer
from domain.models import DEFAULT_REST_SECONDS, Exercise, Template, Workout, WorkoutSet
from domain.services import (
    ExerciseGroup,
    TargetOverride,
    WorkoutFactory,
    group_exercises,
    new_id,
)

logger = logging.getLogger(__name__)


class ActiveWorkoutAlreadyExistsError(Exception):
    """Raised when starting a workout while another one is active."""

    def __init__(self, workout_id: str):
        super().__init__(f"Workout {workout_id} is already active")
        self.workout_id = workout_id


class MutationStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    NO_ACTIVE_WORKOUT = "no_active_workout"


@dataclass
class MutationResult:
    """Result of a session mutation."""

    status: MutationStatus
    workout: Optional[Workout] = None
    rest_seconds: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == MutationStatus.OK


class WorkoutSession:
    """
    Holds at most one active workout.

    Persistence happens only in ``finish``; until then progress lives in
    memory. Every lifecycle call and mutation reads, rebuilds and commits
    the active workout under one lock, so concurrent requests never lose
    each other's changes.

    Usage:
        >>> session = WorkoutSession(catalog_repo=repo)
        >>> workout = session.start(template)
        >>> result = session.add_set(workout.exercises[0].instance_id)
        >>> if result.ok:
        ...     finished = session.finish()
    """

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        *,
        factory: Optional[WorkoutFactory] = None,
        rest_timer: Optional[RestTimer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize the session with required dependencies.

        Args:
            catalog_repo: Store that receives the finished workout
            factory: Workout factory (defaults to one sharing ``clock``)
            rest_timer: Optional timer started when a set is completed
            clock: Time source for start and finish timestamps
        """
        self._catalog_repo = catalog_repo
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._factory = factory or WorkoutFactory(clock=self._clock)
        self._rest_timer = rest_timer
        self._active: Optional[Workout] = None
        self._lock = Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def active_workout(self) -> Optional[Workout]:
        return self._active

    @property
    def is_active(self) -> bool:
        return self._active is not None

    def start(
        self,
        template: Optional[Template] = None,
        overrides: Optional[Sequence[TargetOverride]] = None,
    ) -> Workout:
        """
        Start a workout from a template (or empty), applying target overrides.

        Raises:
            ActiveWorkoutAlreadyExistsError: If a workout is already active.
        """
        with self._lock:
            self._ensure_idle()
            workout = self._factory.create_from_template(template)
            workout = self._factory.apply_config(workout, overrides)
            return self._activate(workout)

    def start_workout(self, workout: Workout) -> Workout:
        """
        Activate an already-configured workout (e.g. from the setup preview).

        Raises:
            ActiveWorkoutAlreadyExistsError: If a workout is already active.
        """
        with self._lock:
            return self._activate(workout)

    def finish(self) -> Optional[Workout]:
        """
        Finish the active workout and save it as a log.

        Returns:
            The finished workout, or None if nothing was active or the store
            rejected the log. A rejected save keeps the workout active so
            nothing is lost.
        """
        with self._lock:
            if self._active is None:
                logger.warning("finish called with no active workout")
                return None

            finished = self._active.finish(self._clock())
            if not self._catalog_repo.save_log(finished):
                logger.error(f"Failed to save log for workout {finished.id}; keeping it active")
                return None

            self._active = None
            logger.info(f"Finished workout {finished.id} after {finished.duration} min")
            return finished

    def cancel(self) -> None:
        """Discard the active workout without saving."""
        with self._lock:
            if self._active is not None:
                logger.info(f"Cancelled workout {self._active.id}")
            self._active = None

    def groups(self) -> List[ExerciseGroup]:
        """Active workout grouped into singles and supersets for display."""
        active = self._active
        if active is None:
            return []
        return group_exercises(active.exercises)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_exercise(
        self, exercise: Exercise, superset_id: Optional[str] = None
    ) -> MutationResult:
        """Append a catalog exercise to the active workout with one empty set."""
        with self._lock:
            if self._active is None:
                return self._no_active()
            instance = self._factory.instance_from_exercise(exercise, superset_id)
            return self._commit(self._active.with_exercises([*self._active.exercises, instance]))

    def add_set(self, instance_id: str) -> MutationResult:
        """
        Append a set to an exercise.

        The new set copies weight and reps from the exercise's last set
        (0 when it has none) and starts uncompleted.
        """
        with self._lock:
            if self._active is None:
                return self._no_active()
            exercise = self._active.find_exercise(instance_id)
            if exercise is None:
                return self._not_found(f"Exercise {instance_id} not found")

            previous = exercise.last_set
            new_set = WorkoutSet(
                id=new_id(),
                weight=previous.weight if previous else 0,
                reps=previous.reps if previous else 0,
                completed=False,
            )
            return self._commit(
                self._active.replace_exercise(exercise.with_sets([*exercise.sets, new_set]))
            )

    def update_set(self, instance_id: str, set_id: str, **fields: Any) -> MutationResult:
        """
        Merge fields (weight, reps, completed, rest) into one set.

        Text input is coerced: bad weight/reps become 0, bad rest becomes 90.

        Raises:
            ValueError: If a field other than weight/reps/completed/rest is given.
        """
        with self._lock:
            return self._update_set(instance_id, set_id, fields)

    def delete_set(self, instance_id: str, set_id: str) -> MutationResult:
        """Remove a set from an exercise."""
        with self._lock:
            if self._active is None:
                return self._no_active()
            exercise = self._active.find_exercise(instance_id)
            if exercise is None:
                return self._not_found(f"Exercise {instance_id} not found")
            if exercise.find_set(set_id) is None:
                return self._not_found(f"Set {set_id} not found in exercise {instance_id}")

            sets = [s for s in exercise.sets if s.id != set_id]
            return self._commit(self._active.replace_exercise(exercise.with_sets(sets)))

    def toggle_set(self, instance_id: str, set_id: str) -> MutationResult:
        """
        Flip a set's completed flag.

        Completing a set starts the rest timer with the set's rest period;
        un-completing it has no side effect. ``rest_seconds`` on the result
        is set only when the timer was started.
        """
        with self._lock:
            if self._active is None:
                return self._no_active()
            exercise = self._active.find_exercise(instance_id)
            target = exercise.find_set(set_id) if exercise else None
            if target is None:
                return self._not_found(f"Set {set_id} not found in exercise {instance_id}")

            now_completed = not target.completed
            result = self._update_set(instance_id, set_id, {"completed": now_completed})

        if now_completed:
            rest_seconds = target.rest or DEFAULT_REST_SECONDS
            if self._rest_timer is not None:
                self._rest_timer.start(rest_seconds)
            result.rest_seconds = rest_seconds
        return result

    def create_superset(self, instance_ids: Iterable[str]) -> MutationResult:
        """
        Link exercises into a new superset.

        Every listed exercise gets the same fresh superset id, leaving any
        superset it belonged to before.
        """
        with self._lock:
            if self._active is None:
                return self._no_active()
            wanted = set(instance_ids)
            if not any(ex.instance_id in wanted for ex in self._active.exercises):
                return self._not_found("None of the exercises were found")

            superset_id = new_id()
            exercises = [
                ex.model_copy(update={"superset_id": superset_id})
                if ex.instance_id in wanted
                else ex
                for ex in self._active.exercises
            ]
            return self._commit(self._active.with_exercises(exercises))

    # -------------------------------------------------------------------------
    # Helpers (callers hold self._lock)
    # -------------------------------------------------------------------------

    def _activate(self, workout: Workout) -> Workout:
        self._ensure_idle()
        self._active = workout
        logger.info(
            f"Started workout {workout.id} "
            f"(template={workout.template_name or 'none'}, exercises={len(workout.exercises)})"
        )
        return workout

    def _update_set(
        self, instance_id: str, set_id: str, fields: Dict[str, Any]
    ) -> MutationResult:
        if self._active is None:
            return self._no_active()
        exercise = self._active.find_exercise(instance_id)
        if exercise is None:
            return self._not_found(f"Exercise {instance_id} not found")
        target = exercise.find_set(set_id)
        if target is None:
            return self._not_found(f"Set {set_id} not found in exercise {instance_id}")

        updated = target.with_updates(**fields)
        sets = [updated if s.id == set_id else s for s in exercise.sets]
        return self._commit(self._active.replace_exercise(exercise.with_sets(sets)))

    def _ensure_idle(self) -> None:
        if self._active is not None:
            raise ActiveWorkoutAlreadyExistsError(self._active.id)

    def _commit(self, workout: Workout) -> MutationResult:
        self._active = workout
        return MutationResult(status=MutationStatus.OK, workout=workout)

    def _not_found(self, message: str) -> MutationResult:
        logger.warning(message)
        return MutationResult(
            status=MutationStatus.NOT_FOUND, workout=self._active, error=message
        )

    @staticmethod
    def _no_active() -> MutationResult:
        return MutationResult(
            status=MutationStatus.NO_ACTIVE_WORKOUT, error="No active workout"
        )
