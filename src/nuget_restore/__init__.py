"""nuget-restore: run NuGet package restore from Python build scripts."""

from nuget_restore.arguments import ProcessArguments, build_restore_arguments
from nuget_restore.errors import (
    ArgumentNullError,
    ConfigValidationError,
    ProcessFailedError,
    ProcessNotStartedError,
    RestoreError,
    ToolNotFoundError,
)
from nuget_restore.restorer import NuGetRestorer, restore
from nuget_restore.settings import RestoreSettings, Verbosity

__version__ = "0.1.0"

__all__ = [
    "ArgumentNullError",
    "ConfigValidationError",
    "NuGetRestorer",
    "ProcessArguments",
    "ProcessFailedError",
    "ProcessNotStartedError",
    "RestoreError",
    "RestoreSettings",
    "ToolNotFoundError",
    "Verbosity",
    "__version__",
    "build_restore_arguments",
    "restore",
]
