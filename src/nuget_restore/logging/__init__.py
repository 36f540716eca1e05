"""Structured logging for restore runs.

Provides text or JSON output with file rotation, and a restore context that
tags records with the file being restored.
"""

from nuget_restore.logging.config import configure_logging
from nuget_restore.logging.context import (
    RestoreContextFilter,
    get_restore_context,
    restore_context,
)
from nuget_restore.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "RestoreContextFilter",
    "configure_logging",
    "get_restore_context",
    "restore_context",
]
