"""Restore settings model.

RestoreSettings is an immutable pydantic model. Build scripts construct one
per restore call; the restorer never mutates it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Verbosity(Enum):
    """Detail level of the restore executable's output."""

    QUIET = "quiet"
    NORMAL = "normal"
    DETAILED = "detailed"

    @property
    def argument(self) -> str:
        """Value passed after -Verbosity."""
        return self.name.lower()


class RestoreSettings(BaseModel):
    """Options for a single NuGet restore.

    Every field is optional. An empty settings object renders the minimal
    command line: ``restore "<target>" -NonInteractive``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tool_path: Path | None = None
    """Explicit path to NuGet.exe; bypasses the default lookup."""

    sources: tuple[str, ...] = ()
    """Package sources in priority order. Empty means NuGet's defaults."""

    packages_directory: Path | None = None
    """Destination for restored packages."""

    config_file: Path | None = None
    """NuGet configuration file to apply."""

    require_consent: bool = False
    no_cache: bool = False
    disable_parallel_processing: bool = False

    verbosity: Verbosity | None = None

    @field_validator("sources", mode="before")
    @classmethod
    def normalize_sources(cls, v: Any) -> Any:
        """Accept a single string and collapse duplicates, keeping order.

        Only ordered sequences are accepted so the rendered -Source value is
        the same on every run.
        """
        if v is None:
            return ()
        if isinstance(v, str):
            v = (v,)
        if not isinstance(v, (list, tuple)):
            raise ValueError(
                f"sources must be a string, list or tuple, got {type(v).__name__}"
            )
        seen: dict[str, None] = {}
        for source in v:
            if not isinstance(source, str):
                raise ValueError(f"source must be a string, got {source!r}")
            if not source.strip():
                raise ValueError("source cannot be empty")
            seen.setdefault(source, None)
        return tuple(seen)

    @field_validator("verbosity", mode="before")
    @classmethod
    def parse_verbosity(cls, v: Any) -> Any:
        """Accept member names or values regardless of case."""
        if isinstance(v, str):
            key = v.strip().casefold()
            for member in Verbosity:
                if key in (member.value, member.name.casefold()):
                    return member
            valid = ", ".join(m.value for m in Verbosity)
            raise ValueError(f"verbosity must be one of {valid}, got {v!r}")
        return v
