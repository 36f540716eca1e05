"""File-system probe used for tool resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for probing candidate executable locations."""

    def exists(self, path: Path) -> bool:
        """Return True if a file exists at path."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()
