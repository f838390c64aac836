"""
Logs router for workout history and Markdown export.

This router contains endpoints for:
- GET /logs - List finished workouts
- GET /logs/{log_id} - Get one finished workout with volume summary
- DELETE /logs/{log_id} - Remove a workout from history
- GET /logs/{log_id}/markdown - Render the note without delivering it
- POST /logs/{log_id}/export - Render and deliver the note
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from api.deps import get_catalog_repo, get_export_workout_use_case
from application.ports import CatalogRepository
from application.use_cases import EXPORT_FAILED_MESSAGE, ExportWorkoutUseCase
from domain.services import volume_of_exercise, volume_of_workout

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/logs",
    tags=["Logs"],
)


@router.get("")
def list_logs(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    logs = catalog_repo.get_logs()
    return {"logs": logs, "count": len(logs)}


@router.get("/{log_id}")
def get_log(log_id: str, catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    """Get a finished workout with per-exercise and total volume."""
    workout = catalog_repo.get_log(log_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")

    bodyweight = catalog_repo.get_settings().user_bodyweight
    return {
        "workout": workout,
        "volume": {
            "total": volume_of_workout(workout, bodyweight),
            "exercises": [
                {
                    "instance_id": ex.instance_id,
                    "name": ex.name,
                    "volume": volume_of_exercise(ex, bodyweight),
                }
                for ex in workout.exercises
            ],
        },
    }


@router.delete("/{log_id}")
def delete_log(log_id: str, catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
    if not catalog_repo.delete_log(log_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return {"success": True}


@router.get("/{log_id}/markdown", response_class=PlainTextResponse)
def render_log_markdown(
    log_id: str,
    export_use_case: ExportWorkoutUseCase = Depends(get_export_workout_use_case),
):
    result = export_use_case.execute(log_id, deliver=False)
    if not result.success:
        status = 404 if result.error == "Workout not found" else 500
        raise HTTPException(status_code=status, detail=result.error)
    return PlainTextResponse(
        result.markdown,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}.md"'},
    )


@router.post("/{log_id}/export")
def export_log(
    log_id: str,
    export_use_case: ExportWorkoutUseCase = Depends(get_export_workout_use_case),
):
    result = export_use_case.execute(log_id)
    if not result.success:
        if result.error == EXPORT_FAILED_MESSAGE:
            raise HTTPException(status_code=500, detail=result.error)
        raise HTTPException(status_code=404, detail=result.error)
    return {"success": True, "filename": result.filename, "delivered": result.delivered}
