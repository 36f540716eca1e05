"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Arguments passed to get_config()
2. Environment variables (NUGET_RESTORE_*)
3. Config file (~/.nuget-restore/config.toml)
4. Default values

Environment variables:
- NUGET_RESTORE_CONFIG_PATH: Path to config file (overrides default location)
- NUGET_RESTORE_NUGET_PATH: Path to the NuGet executable
- NUGET_RESTORE_TOOLS_DIR: Directory searched for NuGet.exe
- NUGET_RESTORE_LOG_LEVEL: debug, info, warning or error
- NUGET_RESTORE_LOG_FORMAT: text or json
- NUGET_RESTORE_LOG_FILE: Path to a rotating log file
- NUGET_RESTORE_LOG_STDERR: Also log to stderr when a log file is set
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nuget_restore.config.env import EnvReader
from nuget_restore.config.models import LoggingConfig, RestoreConfig, ToolPathsConfig
from nuget_restore.errors import ConfigValidationError
from nuget_restore.settings import RestoreSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".nuget-restore"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the config file path, honoring NUGET_RESTORE_CONFIG_PATH."""
    reader = env or EnvReader()
    return reader.get_path("NUGET_RESTORE_CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses the default location.

    Returns:
        Parsed configuration. Empty if the file is missing or unreadable.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    errors = error.errors()
    if not errors:
        return f"Invalid restore defaults: {error}", None
    first = errors[0]
    loc = ".".join(str(x) for x in first.get("loc", ()))
    msg = first.get("msg", str(error))
    if loc:
        return f"Invalid restore defaults: {loc}: {msg}", loc
    return f"Invalid restore defaults: {msg}", None


def parse_restore_defaults(data: Mapping[str, Any]) -> RestoreSettings:
    """Validate the [restore] table of a config file.

    Raises:
        ConfigValidationError: If the table has unknown keys or bad values.
    """
    try:
        return RestoreSettings.model_validate(dict(data))
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise ConfigValidationError(message, field=field) from e


def _table(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return the [name] table of a parsed config file, or an empty one."""
    table = config.get(name, {})
    if not isinstance(table, Mapping):
        raise ConfigValidationError(
            f"[{name}] must be a table, got {type(table).__name__}", name
        )
    return table


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    nuget_path: Path | None = None,
    tools_directory: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> RestoreConfig:
    """Build the configuration with full precedence handling.

    Args:
        config_path: Config file (overrides NUGET_RESTORE_CONFIG_PATH).
        nuget_path: Override for the NuGet executable path.
        tools_directory: Override for the tools directory.
        env: Environment mapping. None reads os.environ.

    Returns:
        Merged RestoreConfig.

    Raises:
        ConfigValidationError: If the resulting configuration is invalid.
    """
    reader = EnvReader(env)
    file_config = load_config_file(config_path or get_default_config_path(reader))

    tools_file = _table(file_config, "tools")
    tools = ToolPathsConfig(
        nuget=(
            nuget_path
            or reader.get_path("NUGET_RESTORE_NUGET_PATH")
            or _optional_path(tools_file.get("nuget"))
        ),
        tools_directory=(
            tools_directory
            or reader.get_path("NUGET_RESTORE_TOOLS_DIR")
            or _optional_path(tools_file.get("tools_directory"))
        ),
    )

    logging_file = _table(file_config, "logging")
    try:
        logging_config = LoggingConfig(
            level=reader.get_str(
                "NUGET_RESTORE_LOG_LEVEL", logging_file.get("level", "info")
            ),
            file=(
                reader.get_path("NUGET_RESTORE_LOG_FILE")
                or _optional_path(logging_file.get("file"))
            ),
            format=reader.get_str(
                "NUGET_RESTORE_LOG_FORMAT", logging_file.get("format", "text")
            ),
            include_stderr=reader.get_bool(
                "NUGET_RESTORE_LOG_STDERR", logging_file.get("include_stderr", False)
            ),
            max_bytes=logging_file.get("max_bytes", 10_485_760),
            backup_count=logging_file.get("backup_count", 5),
        )
    except ValueError as e:
        raise ConfigValidationError(f"Invalid logging config: {e}", "logging") from e

    restore_defaults = parse_restore_defaults(_table(file_config, "restore"))

    return RestoreConfig(
        tools=tools,
        logging=logging_config,
        restore_defaults=restore_defaults,
    )
