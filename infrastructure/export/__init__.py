"""
Export sink implementations.
"""

from infrastructure.export.file_sink import FileExportSink

__all__ = ["FileExportSink"]
