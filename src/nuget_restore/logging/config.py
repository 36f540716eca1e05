"""Logging setup for build scripts.

configure_logging() attaches handlers built from LoggingConfig to the root
logger. Handlers the calling build script installed itself stay in place;
only handlers left by an earlier configure_logging() call are replaced.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from nuget_restore.logging.context import RestoreContextFilter
from nuget_restore.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from nuget_restore.config.models import LoggingConfig

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s - %(restore_tag)s%(name)s - %(levelname)s - %(message)s"

# Marks handlers created here so reconfiguration can find them.
_OWNER_ATTR = "_nuget_restore_owned"


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(path: Path, config: LoggingConfig) -> logging.Handler | None:
    """Open a rotating log file, or return None if it cannot be created."""
    path = path.expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        # Logging is not set up yet, so report straight to stderr.
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def _remove_owned_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if getattr(handler, _OWNER_ATTR, False):
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Configure the root logger for restore runs.

    Logs go to a rotating file when config.file is set, and to stderr when
    include_stderr is set or the file cannot be opened. Every handler gets
    a RestoreContextFilter so records carry the file being restored.

    Args:
        config: Logging configuration.

    Returns:
        The handlers that were installed.
    """
    level = _LEVEL_MAP.get(config.level.casefold(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    _remove_owned_handlers(root_logger)

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(Path(config.file), config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _build_formatter(config.format)
    context_filter = RestoreContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        setattr(handler, _OWNER_ATTR, True)
        root_logger.addHandler(handler)

    return handlers
