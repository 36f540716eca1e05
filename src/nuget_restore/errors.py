"""Exceptions raised by the restore pipeline.

Every error message is prefixed with the tool name so build logs make it
obvious which external tool failed.
"""

from __future__ import annotations

from pathlib import Path

TOOL_NAME = "NuGet"


class RestoreError(Exception):
    """Base exception for restore errors.

    All restore-related exceptions inherit from this class, allowing callers
    to catch every failure of a restore call with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{TOOL_NAME}: {message}")


class ArgumentNullError(RestoreError, ValueError):
    """Raised when a required argument is None.

    Attributes:
        param_name: Name of the missing parameter.
    """

    def __init__(self, param_name: str) -> None:
        self.param_name = param_name
        super().__init__(f"Value cannot be None (parameter '{param_name}').")


class ToolNotFoundError(RestoreError):
    """Raised when the NuGet executable cannot be located.

    Attributes:
        candidates: Paths that were probed, in lookup order.
    """

    def __init__(self, candidates: tuple[Path, ...] = ()) -> None:
        self.candidates = candidates
        super().__init__("Could not locate executable.")


class ProcessNotStartedError(RestoreError):
    """Raised when the process runner could not launch the executable."""

    def __init__(self, executable: Path) -> None:
        self.executable = executable
        super().__init__("Process was not started.")


class ProcessFailedError(RestoreError):
    """Raised when the executable exits with a non-zero status.

    Attributes:
        exit_code: Exit code reported by the process.
    """

    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__("Process returned an error.")


class ConfigValidationError(RestoreError, ValueError):
    """Raised when a config file section or restore default is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
