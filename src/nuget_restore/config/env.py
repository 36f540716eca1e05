"""Environment variable reader with dependency injection support.

EnvReader reads typed values from an injectable mapping so configuration
code can be tested without touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Typed access to environment variables.

    Example:
        reader = EnvReader(env={"NUGET_RESTORE_LOG_LEVEL": "debug"})
        reader.get_str("NUGET_RESTORE_LOG_LEVEL")  # "debug"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the reader.

        Args:
            env: Mapping to read from. None reads os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Return the variable, or default when unset."""
        value = self._env.get(var)
        return default if value is None else value

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Return the variable as a bool.

        "true", "1", "yes" and "on" (any case) are true; every other set
        value is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def get_path(
        self, var: str, must_exist: bool = False, default: Path | None = None
    ) -> Path | None:
        """Return the variable as a user-expanded Path.

        Args:
            var: Environment variable name.
            must_exist: If True, a path that does not exist logs a warning
                and yields default.
            default: Value when unset, empty or rejected.
        """
        value = self._env.get(var)
        if not value:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
