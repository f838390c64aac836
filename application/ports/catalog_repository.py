"""
Catalog Repository Interface (Port).

This module defines the abstract interface for the logbook's key-value
store: the exercise catalog, templates, finished workout logs and export
settings, plus the muscle group list. Implementations may use Supabase,
in-memory storage, or other backends.
"""
from typing import List, Optional, Protocol

from domain.models import Exercise, ExportSettings, Template, Workout


class CatalogRepository(Protocol):
    """
    Abstract interface for logbook persistence.

    Domain types are used instead of database-specific types to maintain
    clean architecture boundaries. Reads apply legacy defaults so callers
    always receive fully-populated models.
    """

    # -------------------------------------------------------------------------
    # Exercises
    # -------------------------------------------------------------------------

    def get_exercises(self) -> List[Exercise]:
        """
        Get all catalog exercises.

        Returns:
            Exercises, with missing exercise_type defaulted to weighted and
            missing equipment_options defaulted to an empty list.
        """
        ...

    def save_exercise(self, exercise: Exercise) -> bool:
        """
        Insert or replace an exercise by id.

        Returns:
            True if the write succeeded
        """
        ...

    def delete_exercise(self, exercise_id: str) -> bool:
        """
        Delete an exercise.

        Returns:
            True if deleted, False if not found or the write failed
        """
        ...

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def get_templates(self) -> List[Template]:
        """Get all templates."""
        ...

    def get_template(self, template_id: str) -> Optional[Template]:
        """
        Get a single template.

        Returns:
            Template or None if not found
        """
        ...

    def save_template(self, template: Template) -> bool:
        """Insert or replace a template by id."""
        ...

    def delete_template(self, template_id: str) -> bool:
        """Delete a template."""
        ...

    # -------------------------------------------------------------------------
    # Logs (finished workouts)
    # -------------------------------------------------------------------------

    def get_logs(self) -> List[Workout]:
        """Get finished workouts, most recent first."""
        ...

    def get_log(self, log_id: str) -> Optional[Workout]:
        """Get one finished workout by id."""
        ...

    def save_log(self, workout: Workout) -> bool:
        """
        Append a finished workout to history.

        The write must be durable before this returns True.

        Args:
            workout: Finished workout (end_time and duration set)

        Returns:
            True if the log was stored
        """
        ...

    def delete_log(self, log_id: str) -> bool:
        """Delete a finished workout from history."""
        ...

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def get_settings(self) -> ExportSettings:
        """
        Get export settings.

        Returns:
            Stored settings merged over defaults; defaults if none stored.
        """
        ...

    def save_settings(self, settings: ExportSettings) -> bool:
        """Replace the stored export settings."""
        ...

    # -------------------------------------------------------------------------
    # Muscle groups
    # -------------------------------------------------------------------------

    def get_muscle_groups(self) -> List[str]:
        """
        Get the muscle groups offered when categorizing exercises.

        Returns:
            Stored groups, or DEFAULT_MUSCLE_GROUPS if none stored.
        """
        ...

    def save_muscle_groups(self, groups: List[str]) -> bool:
        """Replace the stored muscle group list."""
        ...
