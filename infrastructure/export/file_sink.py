"""
File-system implementation of ExportSink.

Writes each note as ``<filename>.md`` into a vault (or any) directory.
An existing note with the same name is overwritten.
"""
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class FileExportSink:
    """
    Writes Markdown notes to a directory.

    Usage:
        sink = FileExportSink("/vault/Workouts")
        sink.deliver(markdown, "Upper Body - 2024-01-25")
    """

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, filename: str) -> Path:
        return self._directory / f"{filename}.md"

    def deliver(self, markdown: str, filename: str) -> None:
        """
        Write the note, creating the directory if needed.

        Raises:
            OSError: If the note cannot be written.
        """
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(filename)
        path.write_text(markdown, encoding="utf-8")
        logger.info(f"Wrote workout note to {path}")
