"""Version control interface."""

from pathlib import Path
from typing import Protocol


class Repository(Protocol):
    """Interface for recording a rewritten file in version control."""

    def commit(self, path: Path, message: str) -> bool:
        """Commit a single file. Returns False when there was nothing to commit."""
        ...

    def relative_path(self, path: Path) -> Path:
        """Path of a file relative to the repository root."""
        ...
