"""
API package for the workout logbook.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_catalog_repo,
    get_export_sink,
    get_workout_session,
    get_export_workout_use_case,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories and sinks
    "get_catalog_repo",
    "get_export_sink",
    # Use cases
    "get_workout_session",
    "get_export_workout_use_case",
]
