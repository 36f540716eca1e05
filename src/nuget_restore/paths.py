"""Path resolution against a working directory."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath, PureWindowsPath


def is_absolute(path: Path | str) -> bool:
    """Return True if path is rooted on either POSIX or Windows.

    Build scripts pass Windows drive and UNC paths such as
    ``C:/nuget/nuget.exe`` regardless of the host, so those count as
    absolute even where the native flavour would treat them as relative.
    """
    text = str(path)
    return PurePosixPath(text).is_absolute() or PureWindowsPath(text).is_absolute()


def make_absolute(path: Path | str, working_directory: Path | str) -> Path:
    """Anchor a possibly-relative path at the working directory.

    Absolute paths are returned unchanged. Relative paths are joined to the
    working directory and normalized, so ``./tools/../nuget.config`` under
    ``/Working`` becomes ``/Working/nuget.config``.

    Args:
        path: Path to resolve.
        working_directory: Directory relative paths are anchored at.

    Returns:
        Absolute path.
    """
    path = Path(path)
    if is_absolute(path):
        return path
    return Path(os.path.normpath(Path(working_directory) / path))
