"""NuGet package restore.

NuGetRestorer is the entry point build scripts call. It validates input,
resolves NuGet.exe, renders the command line, runs the process and turns
the outcome into either a normal return or a typed RestoreError.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from nuget_restore.arguments import build_restore_arguments
from nuget_restore.errors import (
    ArgumentNullError,
    ProcessFailedError,
    ProcessNotStartedError,
)
from nuget_restore.filesystem import FileSystem, LocalFileSystem
from nuget_restore.logging.context import restore_context
from nuget_restore.process import (
    ProcessRunner,
    ProcessSettings,
    SubprocessProcessRunner,
)
from nuget_restore.resolver import ToolResolver
from nuget_restore.settings import RestoreSettings

if TYPE_CHECKING:
    from nuget_restore.config.models import RestoreConfig

logger = logging.getLogger(__name__)


class NuGetRestorer:
    """Restores NuGet packages for a solution or project file.

    Collaborators are injectable so the restorer can be exercised without
    spawning real processes:
    - file_system: probes the default NuGet.exe location
    - process_runner: launches NuGet and reports its exit code
    - resolver: locates the executable (built from the above by default)

    Each restore call is independent; the restorer holds no per-call state.
    """

    def __init__(
        self,
        file_system: FileSystem | None = None,
        process_runner: ProcessRunner | None = None,
        working_directory: Path | None = None,
        tools_directory: Path | None = None,
        resolver: ToolResolver | None = None,
        default_tool_path: Path | None = None,
        silent: bool = False,
    ) -> None:
        """Initialize the restorer.

        Args:
            file_system: File-system probe. None uses the local disk.
            process_runner: Process launcher. None uses subprocess.
            working_directory: Anchor for relative paths and the directory
                NuGet runs in. None uses the current directory.
            tools_directory: Directory holding NuGet.exe. None uses ./tools.
            resolver: Tool resolver. Overrides file_system and
                tools_directory when given.
            default_tool_path: NuGet path used when settings carry no
                tool_path (typically from configuration).
            silent: Discard NuGet's console output.
        """
        self._working_directory = Path(working_directory or Path.cwd())
        self._process_runner = process_runner or SubprocessProcessRunner()
        self._resolver = resolver or ToolResolver(
            file_system or LocalFileSystem(),
            self._working_directory,
            tools_directory,
        )
        self._default_tool_path = default_tool_path
        self._silent = silent

    @classmethod
    def from_config(cls, config: RestoreConfig, **kwargs: Any) -> NuGetRestorer:
        """Create a restorer using tool paths from configuration.

        Args:
            config: Loaded configuration.
            **kwargs: Passed through to the constructor.
        """
        kwargs.setdefault("tools_directory", config.tools.tools_directory)
        kwargs.setdefault("default_tool_path", config.tools.nuget)
        return cls(**kwargs)

    @property
    def working_directory(self) -> Path:
        return self._working_directory

    def restore(
        self,
        target_file_path: Path | str | None,
        settings: RestoreSettings | None,
    ) -> None:
        """Restore packages for target_file_path.

        Args:
            target_file_path: Solution or project file to restore.
            settings: Restore options.

        Raises:
            ArgumentNullError: If target_file_path or settings is None.
            ToolNotFoundError: If NuGet.exe cannot be located.
            ProcessNotStartedError: If NuGet could not be launched.
            ProcessFailedError: If NuGet exited with a non-zero code.
        """
        if target_file_path is None:
            raise ArgumentNullError("target_file_path")
        if settings is None:
            raise ArgumentNullError("settings")

        with restore_context(target_file_path):
            executable = self._resolver.resolve(
                settings.tool_path or self._default_tool_path
            )
            arguments = build_restore_arguments(
                target_file_path, settings, self._working_directory
            )

            logger.info(
                "Restoring NuGet packages",
                extra={
                    "executable": str(executable),
                    "source_count": len(settings.sources),
                },
            )
            logger.debug("NuGet command: %s %s", executable, arguments.render())

            start_time = time.monotonic()
            process = self._process_runner.start(
                executable,
                ProcessSettings(
                    working_directory=self._working_directory,
                    arguments=arguments,
                    silent=self._silent,
                ),
            )
            if process is None:
                logger.error(
                    "NuGet process was not started",
                    extra={"executable": str(executable)},
                )
                raise ProcessNotStartedError(executable)

            exit_code = process.wait_for_exit()
            elapsed = time.monotonic() - start_time

            if exit_code != 0:
                logger.error(
                    "NuGet returned non-zero exit code",
                    extra={
                        "returncode": exit_code,
                        "elapsed_seconds": round(elapsed, 3),
                    },
                )
                raise ProcessFailedError(exit_code)

            logger.info(
                "NuGet restore completed",
                extra={"elapsed_seconds": round(elapsed, 3)},
            )


def restore(
    target_file_path: Path | str | None,
    settings: RestoreSettings | None,
    **kwargs: Any,
) -> None:
    """Restore packages with a default NuGetRestorer.

    Args:
        target_file_path: Solution or project file to restore.
        settings: Restore options. Pass ``RestoreSettings()`` for defaults.
        **kwargs: Passed to the NuGetRestorer constructor.

    Raises:
        ArgumentNullError: If target_file_path or settings is None.
    """
    NuGetRestorer(**kwargs).restore(target_file_path, settings)
