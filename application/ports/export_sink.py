"""
Outbound ports for side effects the core triggers but does not own:
handing off a finished note, and starting the rest timer.
"""
from typing import Protocol


class ExportSink(Protocol):
    """
    Receives a finished Markdown note.

    The sink decides where the note goes (file, share sheet, deep link).
    Raising signals a failed hand-off.
    """

    def deliver(self, markdown: str, filename: str) -> None:
        """
        Deliver a note.

        Args:
            markdown: Complete Markdown document
            filename: Suggested note name without extension
        """
        ...


class RestTimer(Protocol):
    """Starts the between-sets rest countdown."""

    def start(self, seconds: int) -> None:
        ...
