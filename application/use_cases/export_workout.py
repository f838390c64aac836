"""
ExportWorkout Use Case.

Orchestrates exporting a finished workout as a Markdown note:
look up the log and the export settings, render the note, and hand it to
the export sink.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.ports import CatalogRepository, ExportSink
from domain.models import ExportSettings, Workout

logger = logging.getLogger(__name__)

EXPORT_FAILED_MESSAGE = "Failed to generate export"


@dataclass
class ExportWorkoutResult:
    """Result of the ExportWorkout use case execution."""

    success: bool
    markdown: Optional[str] = None
    filename: Optional[str] = None
    workout_id: Optional[str] = None
    delivered: bool = False
    error: Optional[str] = None


class ExportWorkoutUseCase:
    """
    Use case for exporting workouts to Markdown notes.

    Orchestrates the following workflow:
    1. Retrieve the workout log from the repository
    2. Load export settings
    3. Render Markdown via the workout_to_markdown adapter
    4. Optionally deliver the note to the export sink
    5. Return the note and its suggested filename

    Any failure while rendering or delivering is logged and reported as a
    single generic error.

    Usage:
        >>> use_case = ExportWorkoutUseCase(catalog_repo=repo, export_sink=sink)
        >>> result = use_case.execute(log_id="w-123")
        >>> if result.success:
        ...     print(result.filename)
    """

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        export_sink: Optional[ExportSink] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            catalog_repo: Repository for logs and settings
            export_sink: Destination for rendered notes (optional for previews)
        """
        self._catalog_repo = catalog_repo
        self._export_sink = export_sink

    def execute(self, log_id: str, *, deliver: bool = True) -> ExportWorkoutResult:
        """
        Export a saved workout log.

        Args:
            log_id: ID of the finished workout
            deliver: Whether to send the note to the export sink

        Returns:
            ExportWorkoutResult with the rendered note
        """
        logger.info(f"Retrieving log {log_id} for export")
        workout = self._catalog_repo.get_log(log_id)
        if workout is None:
            logger.warning(f"Log not found: {log_id}")
            return ExportWorkoutResult(
                success=False, workout_id=log_id, error="Workout not found"
            )
        return self.execute_from_workout(workout, deliver=deliver)

    def execute_from_workout(
        self,
        workout: Workout,
        *,
        settings: Optional[ExportSettings] = None,
        deliver: bool = True,
    ) -> ExportWorkoutResult:
        """
        Export a workout directly from the domain model (without log lookup).

        Useful right after finishing a session.

        Args:
            workout: Finished workout
            settings: Export settings; loaded from the repository if omitted
            deliver: Whether to send the note to the export sink

        Returns:
            ExportWorkoutResult with the rendered note
        """
        from backend.adapters.workout_to_markdown import suggested_filename, to_markdown

        try:
            if settings is None:
                settings = self._catalog_repo.get_settings()

            markdown = to_markdown(workout, settings)
            filename = suggested_filename(workout)

            delivered = False
            if deliver and self._export_sink is not None:
                logger.info(f"Delivering note '{filename}'")
                self._export_sink.deliver(markdown, filename)
                delivered = True

            return ExportWorkoutResult(
                success=True,
                markdown=markdown,
                filename=filename,
                workout_id=workout.id,
                delivered=delivered,
            )

        except Exception as e:
            logger.exception(f"ExportWorkout use case failed: {e}")
            return ExportWorkoutResult(
                success=False,
                workout_id=workout.id,
                error=EXPORT_FAILED_MESSAGE,
            )
