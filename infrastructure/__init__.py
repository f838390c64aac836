"""
Infrastructure Layer for the workout logbook.

This package contains concrete implementations of the application ports:
- db/: Supabase database implementations
- export/: Export sinks for finished Markdown notes
"""

from infrastructure.db import SupabaseCatalogRepository
from infrastructure.export import FileExportSink

__all__ = [
    "SupabaseCatalogRepository",
    "FileExportSink",
]
