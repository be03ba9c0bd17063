"""Document parser interface."""

from typing import Protocol

from updo.core.document import Document


class DocumentParser(Protocol):
    """Interface for turning markup text into a document tree."""

    def parse(self, text: str) -> Document:
        """Parse text. Checklist markers must come out as TaskListMarker leaves."""
        ...
