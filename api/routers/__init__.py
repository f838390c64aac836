"""
Router package for the workout logbook API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- catalog: Exercises, templates and export settings
- session: The live workout session
- logs: Workout history and Markdown export
"""

from api.routers.health import router as health_router
from api.routers.catalog import router as catalog_router
from api.routers.session import router as session_router
from api.routers.logs import router as logs_router

__all__ = [
    "health_router",
    "catalog_router",
    "session_router",
    "logs_router",
]
