"""
Supabase implementation of CatalogRepository.

Each collection lives in its own table with an ``id`` text primary key and a
``data`` jsonb column holding the serialized domain model:

- exercises
- workout_templates
- workout_logs (plus ``start_time`` for ordering)
- export_settings (single row, id ``default``)
- muscle_groups (single row, id ``default``, data ``{"groups": [...]}``)

Rows written by older app versions may lack newer fields; reads fill them
with defaults through the domain models' validators.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from supabase import Client

from domain.models import DEFAULT_MUSCLE_GROUPS, Exercise, ExportSettings, Template, Workout

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = "default"

ModelT = TypeVar("ModelT", bound=BaseModel)


class SupabaseCatalogRepository:
    """
    Supabase implementation of CatalogRepository protocol.

    All Supabase query logic for the logbook is encapsulated here.
    The client is injected via constructor for testability. Query failures
    are logged and reported as empty results or False.
    """

    EXERCISES_TABLE = "exercises"
    TEMPLATES_TABLE = "workout_templates"
    LOGS_TABLE = "workout_logs"
    SETTINGS_TABLE = "export_settings"
    MUSCLE_GROUPS_TABLE = "muscle_groups"

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    # =========================================================================
    # Generic helpers
    # =========================================================================

    @staticmethod
    def _to_model(model: Type[ModelT], row: Dict[str, Any]) -> Optional[ModelT]:
        try:
            return model.model_validate(row.get("data") or {})
        except ValidationError as e:
            logger.warning(f"Skipping invalid {model.__name__} row {row.get('id')}: {e}")
            return None

    def _list(self, table: str, model: Type[ModelT], order_by: Optional[str] = None) -> List[ModelT]:
        try:
            query = self._client.table(table).select("*")
            if order_by:
                query = query.order(order_by, desc=True)
            result = query.execute()
        except Exception as e:
            logger.error(f"Failed to list {table}: {e}")
            return []

        items = (self._to_model(model, row) for row in result.data or [])
        return [item for item in items if item is not None]

    def _get(self, table: str, model: Type[ModelT], row_id: str) -> Optional[ModelT]:
        try:
            result = self._client.table(table).select("*").eq("id", row_id).execute()
        except Exception as e:
            logger.error(f"Failed to get {table}/{row_id}: {e}")
            return None

        if not result.data:
            return None
        return self._to_model(model, result.data[0])

    def _upsert(
        self, table: str, row_id: str, item: Union[BaseModel, Dict[str, Any]], **columns: Any
    ) -> bool:
        data = item.model_dump(mode="json") if isinstance(item, BaseModel) else item
        row = {
            "id": row_id,
            "data": data,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            **columns,
        }
        try:
            result = self._client.table(table).upsert(row).execute()
        except Exception as e:
            logger.error(f"Failed to save {table}/{row_id}: {e}")
            return False
        return bool(result.data)

    def _delete(self, table: str, row_id: str) -> bool:
        try:
            result = self._client.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete {table}/{row_id}: {e}")
            return False
        return bool(result.data)

    # =========================================================================
    # CatalogRepository Protocol Methods
    # =========================================================================

    def get_exercises(self) -> List[Exercise]:
        return self._list(self.EXERCISES_TABLE, Exercise)

    def save_exercise(self, exercise: Exercise) -> bool:
        return self._upsert(self.EXERCISES_TABLE, exercise.id, exercise)

    def delete_exercise(self, exercise_id: str) -> bool:
        return self._delete(self.EXERCISES_TABLE, exercise_id)

    def get_templates(self) -> List[Template]:
        return self._list(self.TEMPLATES_TABLE, Template)

    def get_template(self, template_id: str) -> Optional[Template]:
        return self._get(self.TEMPLATES_TABLE, Template, template_id)

    def save_template(self, template: Template) -> bool:
        return self._upsert(self.TEMPLATES_TABLE, template.id, template)

    def delete_template(self, template_id: str) -> bool:
        return self._delete(self.TEMPLATES_TABLE, template_id)

    def get_logs(self) -> List[Workout]:
        return self._list(self.LOGS_TABLE, Workout, order_by="start_time")

    def get_log(self, log_id: str) -> Optional[Workout]:
        return self._get(self.LOGS_TABLE, Workout, log_id)

    def save_log(self, workout: Workout) -> bool:
        saved = self._upsert(
            self.LOGS_TABLE,
            workout.id,
            workout,
            start_time=workout.start_time.isoformat(),
        )
        if saved:
            logger.info(f"Saved workout log {workout.id}")
        return saved

    def delete_log(self, log_id: str) -> bool:
        return self._delete(self.LOGS_TABLE, log_id)

    def get_settings(self) -> ExportSettings:
        """Stored settings merged over defaults."""
        try:
            result = (
                self._client.table(self.SETTINGS_TABLE)
                .select("*")
                .eq("id", SETTINGS_ROW_ID)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to load export settings, using defaults: {e}")
            return ExportSettings()

        if not result.data:
            return ExportSettings()

        stored = result.data[0].get("data") or {}
        defaults = ExportSettings().model_dump()
        merged = {**defaults, **stored}
        merged["yaml_mapping"] = {**defaults["yaml_mapping"], **(stored.get("yaml_mapping") or {})}
        try:
            return ExportSettings.model_validate(merged)
        except ValidationError as e:
            logger.warning(f"Stored export settings are invalid, using defaults: {e}")
            return ExportSettings()

    def save_settings(self, settings: ExportSettings) -> bool:
        return self._upsert(self.SETTINGS_TABLE, SETTINGS_ROW_ID, settings)

    def get_muscle_groups(self) -> List[str]:
        """Stored muscle groups, or the defaults when none are stored."""
        try:
            result = (
                self._client.table(self.MUSCLE_GROUPS_TABLE)
                .select("*")
                .eq("id", SETTINGS_ROW_ID)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to load muscle groups, using defaults: {e}")
            return list(DEFAULT_MUSCLE_GROUPS)

        if not result.data:
            return list(DEFAULT_MUSCLE_GROUPS)

        groups = (result.data[0].get("data") or {}).get("groups")
        if not isinstance(groups, list) or not groups:
            return list(DEFAULT_MUSCLE_GROUPS)
        return [str(group) for group in groups]

    def save_muscle_groups(self, groups: List[str]) -> bool:
        return self._upsert(self.MUSCLE_GROUPS_TABLE, SETTINGS_ROW_ID, {"groups": list(groups)})
