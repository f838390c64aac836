"""
FastAPI Dependency Providers for the workout logbook.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and sink providers create new instances per-request
- The WorkoutSession lives on app.state: one active-workout slot per app

Usage in routers:
    from api.deps import get_catalog_repo
    from application.ports import CatalogRepository

    @router.get("/exercises")
    def list_exercises(catalog_repo: CatalogRepository = Depends(get_catalog_repo)):
        return catalog_repo.get_exercises()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_catalog_repo] = lambda: FakeCatalogRepository()
"""

import logging
from functools import lru_cache
from threading import Lock
from typing import Optional

from fastapi import Depends, HTTPException, Request
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import CatalogRepository, ExportSink

# Use cases
from application.use_cases import ExportWorkoutUseCase, WorkoutSession

# Concrete implementations
from infrastructure import FileExportSink, SupabaseCatalogRepository

from backend.settings import Settings, get_settings as _get_settings

logger = logging.getLogger(__name__)

# Guards lazy creation of app.state.workout_session across worker threads
_session_lock = Lock()


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_catalog_repo(
    client: Client = Depends(get_supabase_client_required),
) -> CatalogRepository:
    """
    Get CatalogRepository implementation.

    Returns a SupabaseCatalogRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.
    """
    return SupabaseCatalogRepository(client)


def get_export_sink(settings: Settings = Depends(get_settings)) -> ExportSink:
    """Get the ExportSink writing notes to the configured export directory."""
    return FileExportSink(settings.export_dir)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_workout_session(
    request: Request,
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
) -> WorkoutSession:
    """
    Get the app-wide WorkoutSession, creating it on first use.

    The session holds the single active workout, so it must outlive
    individual requests.
    """
    session = getattr(request.app.state, "workout_session", None)
    if session is not None:
        return session
    with _session_lock:
        session = getattr(request.app.state, "workout_session", None)
        if session is None:
            session = WorkoutSession(catalog_repo=catalog_repo)
            request.app.state.workout_session = session
            logger.info("Created workout session")
    return session


def get_export_workout_use_case(
    catalog_repo: CatalogRepository = Depends(get_catalog_repo),
    export_sink: ExportSink = Depends(get_export_sink),
) -> ExportWorkoutUseCase:
    """Get ExportWorkoutUseCase with injected repository and sink."""
    return ExportWorkoutUseCase(catalog_repo=catalog_repo, export_sink=export_sink)
