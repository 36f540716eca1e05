"""Process-execution primitive.

The restorer only depends on the ProcessRunner and ProcessHandle protocols.
SubprocessProcessRunner is the default implementation used outside tests.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for NuGet execution
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from nuget_restore.arguments import ProcessArguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessSettings:
    """How to launch a process."""

    working_directory: Path
    arguments: ProcessArguments
    silent: bool = False
    """Discard stdout/stderr instead of inheriting the parent's streams."""


class ProcessHandle(Protocol):
    """A launched process."""

    def wait_for_exit(self) -> int:
        """Block until the process exits and return its exit code."""
        ...


class ProcessRunner(Protocol):
    """Protocol for launching external processes."""

    def start(
        self, executable: Path, settings: ProcessSettings
    ) -> ProcessHandle | None:
        """Launch executable.

        Returns:
            A handle to the running process, or None if it could not be
            started.
        """
        ...


class SubprocessHandle:
    """ProcessHandle wrapping a subprocess.Popen object."""

    def __init__(self, process: subprocess.Popen) -> None:
        self._process = process

    @property
    def pid(self) -> int:
        return self._process.pid

    def wait_for_exit(self) -> int:
        return self._process.wait()


class SubprocessProcessRunner:
    """ProcessRunner that launches executables with subprocess.Popen."""

    def start(
        self, executable: Path, settings: ProcessSettings
    ) -> SubprocessHandle | None:
        cmd = [str(executable), *settings.arguments.to_argv()]
        output = subprocess.DEVNULL if settings.silent else None
        try:
            process = subprocess.Popen(  # nosec B603 - args built from settings
                cmd,
                cwd=settings.working_directory,
                stdout=output,
                stderr=output,
            )
        except OSError as e:
            logger.error(
                "Failed to launch process",
                extra={
                    "executable": str(executable),
                    "working_directory": str(settings.working_directory),
                    "error": str(e),
                },
            )
            return None

        logger.debug(
            "Process started",
            extra={"executable": str(executable), "pid": process.pid},
        )
        return SubprocessHandle(process)
