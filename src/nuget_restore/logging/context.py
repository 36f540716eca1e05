"""Restore context for structured logging.

Tracks the target file of the restore in progress with contextvars so every
log record emitted during a restore call can be attributed to it, including
when build scripts run restores from several threads.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_target_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "target_file", default=None
)


def get_restore_context() -> str | None:
    """Return the target file of the current restore, if any."""
    return _target_file.get()


@contextmanager
def restore_context(target_file: Path | str | None) -> Generator[None, None, None]:
    """Attribute log records inside the block to target_file.

    The previous value is restored on exit, so contexts nest.

    Example:
        with restore_context("/src/app.sln"):
            logger.info("Restoring")  # record.target_file == "/src/app.sln"
    """
    token = _target_file.set(str(target_file) if target_file is not None else None)
    try:
        yield
    finally:
        _target_file.reset(token)


class RestoreContextFilter(logging.Filter):
    """Logging filter that injects the restore context into log records.

    Adds ``target_file`` for JSON output and ``restore_tag`` (``[app.sln] ``
    or empty) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        target_file = get_restore_context()
        record.target_file = target_file
        if target_file:
            record.restore_tag = f"[{Path(target_file).name}] "
        else:
            record.restore_tag = ""
        return True
