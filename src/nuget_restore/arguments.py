"""Command-line rendering for NuGet restore.

Argument order matters to NuGet: this module renders settings into a fixed
token sequence. The builder is pure; identical input always yields identical
output.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from nuget_restore.paths import make_absolute
from nuget_restore.settings import RestoreSettings

SOURCE_SEPARATOR = ";"


@dataclass(frozen=True)
class Argument:
    """A single command-line token."""

    value: str
    quoted: bool = False

    def render(self) -> str:
        """Render the token as it appears on a command line."""
        if not self.quoted or _is_quoted(self.value):
            return self.value
        return f'"{self.value}"'


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value.startswith('"') and value.endswith('"')


class ProcessArguments:
    """Ordered sequence of command-line tokens.

    Flag names and literal verbs are appended bare; paths and user-supplied
    values are appended quoted.
    """

    def __init__(self) -> None:
        self._tokens: list[Argument] = []

    def append(self, value: str) -> ProcessArguments:
        self._tokens.append(Argument(value))
        return self

    def append_quoted(self, value: str) -> ProcessArguments:
        self._tokens.append(Argument(value, quoted=True))
        return self

    def render(self) -> str:
        """Join tokens with single spaces."""
        return " ".join(token.render() for token in self._tokens)

    def to_argv(self) -> list[str]:
        """Raw token values for list-based process launch.

        Quoting is a command-line concern; subprocess receives each value
        as its own argv entry.
        """
        argv: list[str] = []
        for token in self._tokens:
            if token.quoted and _is_quoted(token.value):
                argv.append(token.value[1:-1])
            else:
                argv.append(token.value)
        return argv

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ProcessArguments({self.render()!r})"


def build_restore_arguments(
    target_file_path: Path | str,
    settings: RestoreSettings,
    working_directory: Path | str,
) -> ProcessArguments:
    """Render restore settings into NuGet command-line arguments.

    Order: restore, target, -RequireConsent, -PackagesDirectory, -Source,
    -NoCache, -DisableParallelProcessing, -Verbosity, -ConfigFile,
    -NonInteractive. Options that are not set are omitted entirely.

    Args:
        target_file_path: Solution or project file to restore.
        settings: Restore options.
        working_directory: Directory relative paths are anchored at.

    Returns:
        ProcessArguments ending in -NonInteractive.
    """
    args = ProcessArguments()
    args.append("restore")
    args.append_quoted(str(make_absolute(target_file_path, working_directory)))

    if settings.require_consent:
        args.append("-RequireConsent")

    if settings.packages_directory is not None:
        args.append("-PackagesDirectory")
        args.append_quoted(
            str(make_absolute(settings.packages_directory, working_directory))
        )

    # A single pre-joined "A;B;C" entry passes through as-is
    if settings.sources:
        args.append("-Source")
        args.append_quoted(SOURCE_SEPARATOR.join(settings.sources))

    if settings.no_cache:
        args.append("-NoCache")

    if settings.disable_parallel_processing:
        args.append("-DisableParallelProcessing")

    if settings.verbosity is not None:
        args.append("-Verbosity")
        args.append(settings.verbosity.argument)

    if settings.config_file is not None:
        args.append("-ConfigFile")
        args.append_quoted(str(make_absolute(settings.config_file, working_directory)))

    args.append("-NonInteractive")
    return args
