"""
Unit tests for the WorkoutSession use case.

Tests cover:
- Start/finish/cancel lifecycle and the single-active-workout guard
- Set mutations (add, update, delete, toggle) and their NotFound results
- Superset creation
- Rest timer side effect
- Persistence failure on finish
- Concurrent mutations from worker threads
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from threading import Barrier

import pytest

from application.use_cases import (
    ActiveWorkoutAlreadyExistsError,
    MutationStatus,
    WorkoutSession,
)
from domain.services import TargetOverride
from tests.fakes import (
    PULL_UPS,
    SQUAT,
    FakeCatalogRepository,
    FakeRestTimer,
    create_catalog_repo,
    upper_body_template,
)


START = datetime(2024, 1, 25, 14, 30, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def catalog_repo() -> FakeCatalogRepository:
    return create_catalog_repo()


@pytest.fixture
def rest_timer() -> FakeRestTimer:
    return FakeRestTimer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture
def session(catalog_repo, rest_timer, clock) -> WorkoutSession:
    return WorkoutSession(catalog_repo=catalog_repo, rest_timer=rest_timer, clock=clock)


@pytest.fixture
def active(session):
    """Session started from the Upper Body template; returns the workout."""
    return session.start(upper_body_template())


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:

    @pytest.mark.unit
    def test_starts_idle(self, session):
        assert session.active_workout is None
        assert not session.is_active
        assert session.groups() == []

    @pytest.mark.unit
    def test_start_from_template(self, session):
        workout = session.start(upper_body_template())

        assert session.active_workout == workout
        assert workout.start_time == START
        assert workout.template_name == "Upper Body"

    @pytest.mark.unit
    def test_start_empty(self, session):
        assert session.start().exercises == []

    @pytest.mark.unit
    def test_start_applies_overrides(self, session):
        workout = session.start(
            upper_body_template(),
            [TargetOverride(exercise_index=1, target_sets=4, target_reps=12)],
        )
        assert [s.reps for s in workout.exercises[1].sets] == [12, 12, 12, 12]

    @pytest.mark.unit
    def test_second_start_raises(self, session, active):
        with pytest.raises(ActiveWorkoutAlreadyExistsError) as exc_info:
            session.start()
        assert exc_info.value.workout_id == active.id
        assert session.active_workout == active

    @pytest.mark.unit
    def test_start_workout_raises_when_active(self, session, active):
        with pytest.raises(ActiveWorkoutAlreadyExistsError):
            session.start_workout(active)

    @pytest.mark.unit
    def test_finish_saves_log_and_clears(self, session, active, catalog_repo, clock):
        clock.now = START + timedelta(minutes=45)

        finished = session.finish()

        assert finished.id == active.id
        assert finished.duration == 45
        assert finished.end_time == clock.now
        assert not session.is_active
        assert catalog_repo.get_log(active.id) == finished

    @pytest.mark.unit
    def test_finish_without_active_returns_none(self, session, catalog_repo):
        assert session.finish() is None
        assert catalog_repo.get_logs() == []

    @pytest.mark.unit
    def test_finish_keeps_workout_when_save_fails(self, session, active, catalog_repo):
        catalog_repo.fail_writes = True

        assert session.finish() is None
        assert session.active_workout == active
        assert catalog_repo.get_logs() == []

    @pytest.mark.unit
    def test_cancel_discards_without_saving(self, session, active, catalog_repo):
        session.cancel()

        assert not session.is_active
        assert catalog_repo.get_logs() == []

    @pytest.mark.unit
    def test_can_start_again_after_finish(self, session, active):
        session.finish()
        assert session.start().id != active.id


# =============================================================================
# Set Mutations
# =============================================================================


class TestSetMutations:

    @pytest.mark.unit
    def test_add_set_copies_last_set(self, session, active):
        bench = active.exercises[0]

        result = session.add_set(bench.instance_id)

        assert result.ok
        sets = result.workout.find_exercise(bench.instance_id).sets
        assert len(sets) == 3
        assert (sets[-1].weight, sets[-1].reps, sets[-1].completed) == (135, 8, False)
        assert sets[-1].id not in {s.id for s in bench.sets}

    @pytest.mark.unit
    def test_add_set_to_exercise_without_sets(self, session, active):
        pullups = active.exercises[1]
        session.delete_set(pullups.instance_id, pullups.sets[0].id)

        result = session.add_set(pullups.instance_id)

        new_set = result.workout.find_exercise(pullups.instance_id).sets[0]
        assert (new_set.weight, new_set.reps) == (0, 0)

    @pytest.mark.unit
    def test_add_set_unknown_exercise(self, session, active):
        result = session.add_set("missing")

        assert result.status == MutationStatus.NOT_FOUND
        assert result.workout == active
        assert session.active_workout == active

    @pytest.mark.unit
    def test_update_set_merges_fields(self, session, active):
        bench = active.exercises[0]
        target = bench.sets[0]

        result = session.update_set(bench.instance_id, target.id, weight="140", rest="120")

        updated = result.workout.find_exercise(bench.instance_id).find_set(target.id)
        assert updated.weight == 140
        assert updated.reps == 10
        assert updated.rest == 120
        # Other sets untouched
        assert result.workout.find_exercise(bench.instance_id).sets[1] == bench.sets[1]

    @pytest.mark.unit
    def test_update_set_coerces_bad_input(self, session, active):
        bench = active.exercises[0]
        target = bench.sets[0]

        result = session.update_set(bench.instance_id, target.id, weight="heavy", rest="")

        updated = result.workout.find_exercise(bench.instance_id).find_set(target.id)
        assert updated.weight == 0
        assert updated.rest == 90

    @pytest.mark.unit
    def test_update_unknown_set_is_not_found(self, session, active):
        bench = active.exercises[0]

        result = session.update_set(bench.instance_id, "missing", weight=1)

        assert result.status == MutationStatus.NOT_FOUND
        assert session.active_workout == active

    @pytest.mark.unit
    def test_update_does_not_modify_previous_workout(self, session, active):
        bench = active.exercises[0]
        session.update_set(bench.instance_id, bench.sets[0].id, weight=200)

        assert active.exercises[0].sets[0].weight == 135

    @pytest.mark.unit
    def test_delete_set(self, session, active):
        bench = active.exercises[0]

        result = session.delete_set(bench.instance_id, bench.sets[0].id)

        assert [s.id for s in result.workout.find_exercise(bench.instance_id).sets] == [
            bench.sets[1].id
        ]

    @pytest.mark.unit
    def test_delete_unknown_set(self, session, active):
        result = session.delete_set(active.exercises[0].instance_id, "missing")
        assert result.status == MutationStatus.NOT_FOUND

    @pytest.mark.unit
    def test_mutations_without_active_workout(self, session):
        for result in (
            session.add_set("i"),
            session.update_set("i", "s", weight=1),
            session.delete_set("i", "s"),
            session.toggle_set("i", "s"),
            session.add_exercise(SQUAT),
            session.create_superset(["i"]),
        ):
            assert result.status == MutationStatus.NO_ACTIVE_WORKOUT
            assert result.workout is None
        assert session.active_workout is None


# =============================================================================
# Toggle / Rest Timer
# =============================================================================


class TestToggleSet:

    @pytest.mark.unit
    def test_completing_starts_rest_timer(self, session, active, rest_timer):
        bench = active.exercises[0]

        result = session.toggle_set(bench.instance_id, bench.sets[0].id)

        assert result.ok
        assert result.workout.find_exercise(bench.instance_id).sets[0].completed
        assert result.rest_seconds == 90
        assert rest_timer.started == [90]

    @pytest.mark.unit
    def test_uses_set_rest_period(self, session, active, rest_timer):
        bench = active.exercises[0]
        session.update_set(bench.instance_id, bench.sets[0].id, rest=150)

        session.toggle_set(bench.instance_id, bench.sets[0].id)

        assert rest_timer.started == [150]

    @pytest.mark.unit
    def test_uncompleting_has_no_timer(self, session, active, rest_timer):
        bench = active.exercises[0]
        session.toggle_set(bench.instance_id, bench.sets[0].id)

        result = session.toggle_set(bench.instance_id, bench.sets[0].id)

        assert not result.workout.find_exercise(bench.instance_id).sets[0].completed
        assert result.rest_seconds is None
        assert rest_timer.started == [90]

    @pytest.mark.unit
    def test_toggle_unknown_set(self, session, active, rest_timer):
        result = session.toggle_set("missing", "missing")

        assert result.status == MutationStatus.NOT_FOUND
        assert rest_timer.started == []

    @pytest.mark.unit
    def test_works_without_rest_timer(self, catalog_repo):
        session = WorkoutSession(catalog_repo=catalog_repo)
        workout = session.start(upper_body_template())
        bench = workout.exercises[0]

        result = session.toggle_set(bench.instance_id, bench.sets[0].id)

        assert result.ok
        assert result.rest_seconds == 90


# =============================================================================
# Exercises and Supersets
# =============================================================================


class TestExercisesAndSupersets:

    @pytest.mark.unit
    def test_add_exercise(self, session, active):
        result = session.add_exercise(SQUAT)

        assert result.ok
        added = result.workout.exercises[-1]
        assert added.name == "Squat"
        assert added.exercise_id == SQUAT.id
        assert len(added.sets) == 1

    @pytest.mark.unit
    def test_same_exercise_twice_gets_distinct_instances(self, session):
        session.start()
        session.add_exercise(PULL_UPS)
        result = session.add_exercise(PULL_UPS)

        first, second = result.workout.exercises
        assert first.instance_id != second.instance_id

    @pytest.mark.unit
    def test_create_superset(self, session, active):
        ids = [ex.instance_id for ex in active.exercises]

        result = session.create_superset(ids)

        superset_ids = {ex.superset_id for ex in result.workout.exercises}
        assert len(superset_ids) == 1
        assert None not in superset_ids

        groups = session.groups()
        assert len(groups) == 1
        assert groups[0].is_superset

    @pytest.mark.unit
    def test_create_superset_moves_exercise_out_of_old_one(self, session, active):
        session.add_exercise(SQUAT)
        bench, pullups, squat = session.active_workout.exercises
        session.create_superset([bench.instance_id, pullups.instance_id])

        result = session.create_superset([pullups.instance_id, squat.instance_id])

        bench, pullups, squat = result.workout.exercises
        assert pullups.superset_id == squat.superset_id
        assert bench.superset_id != pullups.superset_id

    @pytest.mark.unit
    def test_add_exercise_into_existing_superset(self, session, active):
        ids = [ex.instance_id for ex in active.exercises]
        superset_id = session.create_superset(ids).workout.exercises[0].superset_id

        session.add_exercise(SQUAT, superset_id=superset_id)

        groups = session.groups()
        assert len(groups) == 1
        assert len(groups[0].exercises) == 3

    @pytest.mark.unit
    def test_create_superset_unknown_ids(self, session, active):
        result = session.create_superset(["missing"])

        assert result.status == MutationStatus.NOT_FOUND
        assert session.active_workout == active


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrentMutations:
    """Requests run on a worker threadpool; no mutation may be lost."""

    @pytest.mark.unit
    def test_concurrent_add_set_keeps_every_set(self, session, active):
        bench = active.exercises[0]
        threads, per_thread = 8, 200
        barrier = Barrier(threads)

        def add_many():
            barrier.wait()
            for _ in range(per_thread):
                assert session.add_set(bench.instance_id).ok

        with ThreadPoolExecutor(max_workers=threads) as pool:
            futures = [pool.submit(add_many) for _ in range(threads)]
            for future in futures:
                future.result()

        sets = session.active_workout.exercises[0].sets
        assert len(sets) == len(bench.sets) + threads * per_thread
        assert len({s.id for s in sets}) == len(sets)

    @pytest.mark.unit
    def test_concurrent_toggles_and_adds_both_land(self, session, active):
        bench, pulls = active.exercises
        set_ids = [s.id for s in pulls.sets]
        barrier = Barrier(2)

        def add_sets():
            barrier.wait()
            for _ in range(100):
                session.add_set(bench.instance_id)

        def toggle_sets():
            barrier.wait()
            for _ in range(100):
                for set_id in set_ids:
                    session.toggle_set(pulls.instance_id, set_id)

        with ThreadPoolExecutor(max_workers=2) as pool:
            for future in [pool.submit(add_sets), pool.submit(toggle_sets)]:
                future.result()

        bench_after, pulls_after = session.active_workout.exercises
        assert len(bench_after.sets) == len(bench.sets) + 100
        # 100 toggles per set is an even number: back to the starting state
        assert [s.completed for s in pulls_after.sets] == [s.completed for s in pulls.sets]

    @pytest.mark.unit
    def test_only_one_concurrent_start_wins(self, session):
        threads = 8
        barrier = Barrier(threads)

        def try_start():
            barrier.wait()
            try:
                return session.start(upper_body_template())
            except ActiveWorkoutAlreadyExistsError:
                return None

        with ThreadPoolExecutor(max_workers=threads) as pool:
            results = list(pool.map(lambda _: try_start(), range(threads)))

        started = [w for w in results if w is not None]
        assert len(started) == 1
        assert session.active_workout.id == started[0].id
