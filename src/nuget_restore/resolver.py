"""NuGet executable resolution."""

from __future__ import annotations

import logging
from pathlib import Path

from nuget_restore.errors import ToolNotFoundError
from nuget_restore.filesystem import FileSystem
from nuget_restore.paths import make_absolute

logger = logging.getLogger(__name__)

DEFAULT_TOOLS_DIRECTORY = Path("tools")
DEFAULT_EXECUTABLE_NAME = "NuGet.exe"


class ToolResolver:
    """Locate the NuGet executable.

    An override path always wins and is not probed; a missing file at that
    path surfaces when the process is launched. Without an override the
    executable is expected at ``<tools_directory>/NuGet.exe``.
    """

    def __init__(
        self,
        file_system: FileSystem,
        working_directory: Path,
        tools_directory: Path | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            file_system: Probe used to test candidate locations.
            working_directory: Anchor for relative paths.
            tools_directory: Directory holding NuGet.exe. Relative paths are
                anchored at working_directory. None uses ``./tools``.
        """
        self._file_system = file_system
        self._working_directory = Path(working_directory)
        if tools_directory is None:
            tools_directory = DEFAULT_TOOLS_DIRECTORY
        self._tools_directory = make_absolute(tools_directory, self._working_directory)

    @property
    def tools_directory(self) -> Path:
        return self._tools_directory

    def candidates(self, tool_path: Path | str | None = None) -> tuple[Path, ...]:
        """Return the paths resolve() considers, in lookup order."""
        if tool_path is not None:
            return (make_absolute(tool_path, self._working_directory),)
        return (self._tools_directory / DEFAULT_EXECUTABLE_NAME,)

    def resolve(self, tool_path: Path | str | None = None) -> Path:
        """Resolve the executable to invoke.

        Args:
            tool_path: Optional override path.

        Returns:
            Absolute path to the executable.

        Raises:
            ToolNotFoundError: If no override is given and the default
                location holds no executable.
        """
        candidates = self.candidates(tool_path)
        if tool_path is not None:
            return candidates[0]

        for candidate in candidates:
            if self._file_system.exists(candidate):
                logger.debug("Resolved NuGet executable: %s", candidate)
                return candidate

        logger.debug(
            "NuGet executable not found",
            extra={"candidates": [str(c) for c in candidates]},
        )
        raise ToolNotFoundError(candidates)
