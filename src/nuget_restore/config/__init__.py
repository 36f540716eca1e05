"""Configuration management for nuget-restore.

Configuration is layered: get_config() arguments, then NUGET_RESTORE_*
environment variables, then the TOML config file, then defaults.
"""

from nuget_restore.config.env import EnvReader
from nuget_restore.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
    parse_restore_defaults,
)
from nuget_restore.config.models import LoggingConfig, RestoreConfig, ToolPathsConfig

__all__ = [
    # Models
    "LoggingConfig",
    "RestoreConfig",
    "ToolPathsConfig",
    # Loader
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "parse_restore_defaults",
]
