"""Configuration data models."""

from dataclasses import dataclass, field
from pathlib import Path

from nuget_restore.settings import RestoreSettings


@dataclass
class ToolPathsConfig:
    """Where to find NuGet.

    Both paths are optional. Without them NuGet.exe is expected in
    ``./tools`` under the working directory.
    """

    nuget: Path | None = None
    tools_directory: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes < 0 or self.backup_count < 0:
            raise ValueError("max_bytes and backup_count must not be negative")


@dataclass
class RestoreConfig:
    """Top-level configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    restore_defaults: RestoreSettings = field(default_factory=RestoreSettings)
    """Settings used when a build script does not pass its own."""
