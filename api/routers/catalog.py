"""
Catalog router for exercises, templates and export settings.

This router contains endpoints for:
- GET/POST /exercises, DELETE /exercises/{exercise_id}
- GET/POST /templates, GET/DELETE /templates/{template_id}
- POST /templates/{template_id}/superset - Link/unlink a blueprint pair
- POST /templates/{template_id}/move - Move a blueprint up or down
- GET /muscle-groups
- GET/PUT /settings/export
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_catalog_repo
from application.ports import CatalogRepository
from domain.models import Exercise, ExerciseType, ExportSettings, Template, add_muscle_group

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Catalog"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateExerciseRequest(BaseModel):
    """Request model for adding a catalog exercise."""
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    notes: str = ""
    exercise_type: ExerciseType = ExerciseType.WEIGHTED
    equipment_options: List[str] = Field(default_factory=list)


class ToggleSupersetRequest(BaseModel):
    """Index of the first blueprint in the pair to link or unlink."""
    index: int = Field(..., ge=0)


class MoveExerciseRequest(BaseModel):
    """Blueprint to move and the direction to move it."""
    index: int = Field(..., ge=0)
    direction: Literal["up", "down"]


# =============================================================================
# Exercises
# =============================================================================


@router.get("/exercises")
def list_exercises(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    exercises = catalog_repo.get_exercises()
    return {"exercises": exercises, "count": len(exercises)}


@router.post("/exercises", status_code=201)
def create_exercise(
    request: CreateExerciseRequest,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """
    Add an exercise to the catalog.

    Category is stored uppercase and added to the muscle group list when
    new. Equipment only applies to weighted exercises and is dropped for
    bodyweight ones.
    """
    exercise = Exercise(
        id=str(uuid.uuid4()),
        name=request.name,
        category=request.category,
        notes=request.notes,
        exercise_type=request.exercise_type,
        equipment_options=(
            request.equipment_options
            if request.exercise_type == ExerciseType.WEIGHTED
            else []
        ),
        created_at=datetime.now(timezone.utc),
    )
    if not catalog_repo.save_exercise(exercise):
        raise HTTPException(status_code=500, detail="Failed to save exercise")

    if request.category:
        groups = catalog_repo.get_muscle_groups()
        updated = add_muscle_group(groups, exercise.category)
        if updated != groups and not catalog_repo.save_muscle_groups(updated):
            logger.warning(f"Failed to record muscle group {exercise.category}")
    return exercise


@router.get("/muscle-groups")
def list_muscle_groups(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    groups = catalog_repo.get_muscle_groups()
    return {"muscle_groups": groups, "count": len(groups)}


@router.delete("/exercises/{exercise_id}")
def delete_exercise(
    exercise_id: str,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    if not catalog_repo.delete_exercise(exercise_id):
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {"success": True}


# =============================================================================
# Templates
# =============================================================================


@router.get("/templates")
def list_templates(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    templates = catalog_repo.get_templates()
    return {"templates": templates, "count": len(templates)}


@router.get("/templates/{template_id}")
def get_template(
    template_id: str,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    template = catalog_repo.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.post("/templates")
def save_template(
    template: Template,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """Create or replace a template by id."""
    if not catalog_repo.save_template(template):
        raise HTTPException(status_code=500, detail="Failed to save template")
    return template


@router.post("/templates/{template_id}/superset")
def toggle_template_superset(
    template_id: str,
    request: ToggleSupersetRequest,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """Link the blueprint at ``index`` with the next one, or unlink the pair."""
    template = catalog_repo.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")

    updated = template.toggle_superset(request.index)
    if not catalog_repo.save_template(updated):
        raise HTTPException(status_code=500, detail="Failed to save template")
    return updated


@router.post("/templates/{template_id}/move")
def move_template_exercise(
    template_id: str,
    request: MoveExerciseRequest,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    """Swap the blueprint at ``index`` with its neighbour; edge moves are no-ops."""
    template = catalog_repo.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")

    updated = template.move_exercise(request.index, request.direction)
    if updated is not template and not catalog_repo.save_template(updated):
        raise HTTPException(status_code=500, detail="Failed to save template")
    return updated


@router.delete("/templates/{template_id}")
def delete_template(
    template_id: str,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    if not catalog_repo.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return {"success": True}


# =============================================================================
# Export Settings
# =============================================================================


@router.get("/settings/export")
def get_export_settings(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    return catalog_repo.get_settings()


@router.put("/settings/export")
def update_export_settings(
    settings: ExportSettings,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
):
    if not catalog_repo.save_settings(settings):
        raise HTTPException(status_code=500, detail="Failed to save settings")
    return settings
