"""
Session router for the live workout.

This router contains endpoints for:
- POST /session/preview - Build a configured workout without starting it
- POST /session/start - Start the active workout
- GET /session - Get the active workout and its superset groups
- DELETE /session - Cancel the active workout
- POST /session/exercises - Add a catalog exercise
- POST /session/exercises/{instance_id}/sets - Add a set
- PATCH /session/exercises/{instance_id}/sets/{set_id} - Update a set
- DELETE /session/exercises/{instance_id}/sets/{set_id} - Delete a set
- POST /session/exercises/{instance_id}/sets/{set_id}/toggle - Toggle completion
- POST /session/supersets - Link exercises into a superset
- POST /session/finish - Finish, save and optionally export
"""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import get_catalog_repo, get_export_workout_use_case, get_workout_session
from application.ports import CatalogRepository
from application.use_cases import (
    ExportWorkoutUseCase,
    MutationResult,
    MutationStatus,
    WorkoutSession,
)
from domain.models import Template
from domain.services import ExerciseGroup, TargetOverride, WorkoutFactory, group_exercises

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/session",
    tags=["Session"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class TargetOverridePayload(BaseModel):
    exercise_index: int = Field(..., ge=0)
    target_sets: int = Field(..., ge=0, le=50)
    target_reps: float = Field(..., ge=0)


class StartWorkoutRequest(BaseModel):
    """Start from a template (or empty when template_id is omitted)."""
    template_id: Optional[str] = None
    overrides: List[TargetOverridePayload] = Field(default_factory=list)


class AddExerciseRequest(BaseModel):
    exercise_id: str
    superset_id: Optional[str] = None


class UpdateSetRequest(BaseModel):
    """Partial set update. Numeric fields accept text input; null leaves a field unchanged."""
    weight: Optional[Union[float, str]] = None
    reps: Optional[Union[float, str]] = None
    completed: Optional[bool] = None
    rest: Optional[Union[int, str]] = None


class CreateSupersetRequest(BaseModel):
    instance_ids: List[str] = Field(..., min_length=1)


# =============================================================================
# Helpers
# =============================================================================


def _serialize_groups(groups: List[ExerciseGroup]) -> List[Dict[str, Any]]:
    return [
        {
            "type": group.type.value,
            "key": group.key,
            "superset_id": group.superset_id,
            "exercises": [ex.model_dump(mode="json") for ex in group.exercises],
        }
        for group in groups
    ]


def _mutation_response(result: MutationResult) -> Dict[str, Any]:
    if result.status == MutationStatus.NO_ACTIVE_WORKOUT:
        raise HTTPException(status_code=409, detail=result.error)
    if result.status == MutationStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.error)
    return {
        "workout": result.workout,
        "rest_seconds": result.rest_seconds,
    }


def _load_template(
    catalog_repo: CatalogRepository, template_id: Optional[str]
) -> Optional[Template]:
    if template_id is None:
        return None
    template = catalog_repo.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


def _overrides(payload: StartWorkoutRequest) -> List[TargetOverride]:
    return [
        TargetOverride(
            exercise_index=o.exercise_index,
            target_sets=o.target_sets,
            target_reps=o.target_reps,
        )
        for o in payload.overrides
    ]


# =============================================================================
# Lifecycle Endpoints
# =============================================================================


@router.post("/preview")
def preview_workout(
    request: StartWorkoutRequest,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """
    Build the workout a start request would produce, without activating it.

    Returns the workout and its superset groups for the setup screen.
    """
    factory = WorkoutFactory()
    workout = factory.create_from_template(_load_template(catalog_repo, request.template_id))
    workout = factory.apply_config(workout, _overrides(request))
    return {
        "workout": workout,
        "groups": _serialize_groups(group_exercises(workout.exercises)),
    }


@router.post("/start", status_code=201)
def start_workout(
    request: StartWorkoutRequest,
    session: WorkoutSession = Depends(get_workout_session),
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """Start the active workout. 409 if one is already running."""
    template = _load_template(catalog_repo, request.template_id)
    workout = session.start(template, _overrides(request))
    return {"workout": workout}


@router.get("")
def get_active_workout(session: WorkoutSession = Depends(get_workout_session)):
    if session.active_workout is None:
        raise HTTPException(status_code=404, detail="No active workout")
    return {
        "workout": session.active_workout,
        "groups": _serialize_groups(session.groups()),
    }


@router.delete("")
def cancel_workout(session: WorkoutSession = Depends(get_workout_session)):
    session.cancel()
    return {"success": True}


@router.post("/finish")
def finish_workout(
    export: bool = Query(False, description="Also export the finished workout"),
    session: WorkoutSession = Depends(get_workout_session),
    export_use_case: ExportWorkoutUseCase = Depends(get_export_workout_use_case),
):
    """
    Finish the active workout and save it to history.

    With ``export=true`` the note is rendered and delivered as well; an
    export failure does not undo the save.
    """
    if not session.is_active:
        raise HTTPException(status_code=409, detail="No active workout")

    finished = session.finish()
    if finished is None:
        raise HTTPException(status_code=500, detail="Failed to save workout")

    response: Dict[str, Any] = {"workout": finished}
    if export:
        result = export_use_case.execute_from_workout(finished)
        response["export"] = {
            "success": result.success,
            "filename": result.filename,
            "error": result.error,
        }
    return response


# =============================================================================
# Mutation Endpoints
# =============================================================================


@router.post("/exercises")
def add_exercise(
    request: AddExerciseRequest,
    session: WorkoutSession = Depends(get_workout_session),
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    exercise = next(
        (ex for ex in catalog_repo.get_exercises() if ex.id == request.exercise_id), None
    )
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return _mutation_response(session.add_exercise(exercise, request.superset_id))


@router.post("/exercises/{instance_id}/sets")
def add_set(instance_id: str, session: WorkoutSession = Depends(get_workout_session)):
    return _mutation_response(session.add_set(instance_id))


@router.patch("/exercises/{instance_id}/sets/{set_id}")
def update_set(
    instance_id: str,
    set_id: str,
    request: UpdateSetRequest,
    session: WorkoutSession = Depends(get_workout_session),
):
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    return _mutation_response(session.update_set(instance_id, set_id, **fields))


@router.delete("/exercises/{instance_id}/sets/{set_id}")
def delete_set(
    instance_id: str,
    set_id: str,
    session: WorkoutSession = Depends(get_workout_session),
):
    return _mutation_response(session.delete_set(instance_id, set_id))


@router.post("/exercises/{instance_id}/sets/{set_id}/toggle")
def toggle_set(
    instance_id: str,
    set_id: str,
    session: WorkoutSession = Depends(get_workout_session),
):
    """Toggle completion. ``rest_seconds`` is set when a rest timer should start."""
    return _mutation_response(session.toggle_set(instance_id, set_id))


@router.post("/supersets")
def create_superset(
    request: CreateSupersetRequest,
    session: WorkoutSession = Depends(get_workout_session),
):
    return _mutation_response(session.create_superset(request.instance_ids))
