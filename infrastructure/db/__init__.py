"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseCatalogRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    catalog_repo = SupabaseCatalogRepository(client)
"""

from infrastructure.db.catalog_repository import SupabaseCatalogRepository

__all__ = [
    "SupabaseCatalogRepository",
]
