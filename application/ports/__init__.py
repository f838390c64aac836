"""
Repository Interfaces (Ports) for the workout logbook.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, export targets, timers). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import CatalogRepository

    class LogService:
        def __init__(self, catalog_repo: CatalogRepository):
            self.catalog_repo = catalog_repo

        def history(self):
            return self.catalog_repo.get_logs()
"""

# Catalog, templates, logs and settings
from application.ports.catalog_repository import CatalogRepository

# Side-effect sinks
from application.ports.export_sink import ExportSink, RestTimer

__all__ = [
    "CatalogRepository",
    "ExportSink",
    "RestTimer",
]
