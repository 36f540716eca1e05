"""Shared test fixtures for nuget-restore."""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nuget_restore.process import ProcessSettings
from nuget_restore.restorer import NuGetRestorer
from nuget_restore.settings import RestoreSettings

WORKING_DIRECTORY = Path("/Working")
DEFAULT_TOOL_PATH = WORKING_DIRECTORY / "tools" / "NuGet.exe"
TARGET_FILE_PATH = Path("./project.sln")


class FakeFileSystem:
    """FileSystem that only knows the files it was given."""

    def __init__(self, files: tuple[Path, ...] = ()) -> None:
        self.files: set[Path] = {Path(f) for f in files}

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files


@dataclass
class FakeProcess:
    exit_code: int = 0
    waited: bool = False

    def wait_for_exit(self) -> int:
        self.waited = True
        return self.exit_code


@dataclass
class RecordingProcessRunner:
    """ProcessRunner that records launches instead of spawning processes."""

    exit_code: int = 0
    can_start: bool = True
    calls: list[tuple[Path, ProcessSettings]] = field(default_factory=list)
    processes: list[FakeProcess] = field(default_factory=list)

    def start(self, executable: Path, settings: ProcessSettings) -> FakeProcess | None:
        self.calls.append((executable, settings))
        if not self.can_start:
            return None
        process = FakeProcess(self.exit_code)
        self.processes.append(process)
        return process


class RestorerFixture:
    """Restorer wired to fakes, working in /Working with NuGet in ./tools."""

    def __init__(self) -> None:
        self.target_file_path: Path | str | None = TARGET_FILE_PATH
        self.settings: RestoreSettings | None = RestoreSettings()
        self.file_system = FakeFileSystem((DEFAULT_TOOL_PATH,))
        self.process_runner = RecordingProcessRunner()

    def given_default_tool_does_not_exist(self) -> None:
        self.file_system.files.discard(DEFAULT_TOOL_PATH)

    def given_custom_tool_path_exists(self, path: Path | str) -> None:
        self.given_default_tool_does_not_exist()
        self.file_system.files.add(Path(path))

    def given_process_cannot_start(self) -> None:
        self.process_runner.can_start = False

    def given_process_returns_error(self) -> None:
        self.process_runner.exit_code = 1

    def create_restorer(self) -> NuGetRestorer:
        return NuGetRestorer(
            file_system=self.file_system,
            process_runner=self.process_runner,
            working_directory=WORKING_DIRECTORY,
        )

    def restore(self) -> None:
        self.create_restorer().restore(self.target_file_path, self.settings)

    @property
    def executable(self) -> Path:
        assert len(self.process_runner.calls) == 1
        return self.process_runner.calls[0][0]

    @property
    def process_settings(self) -> ProcessSettings:
        assert len(self.process_runner.calls) == 1
        return self.process_runner.calls[0][1]

    @property
    def rendered_arguments(self) -> str:
        return self.process_settings.arguments.render()


@pytest.fixture
def fixture() -> RestorerFixture:
    """Return a restorer fixture with NuGet present at the default location."""
    return RestorerFixture()


@pytest.fixture
def make_file_system():
    """Return a factory for file systems holding the given files."""
    return FakeFileSystem


@pytest.fixture
def process_runner() -> RecordingProcessRunner:
    """Return a process runner whose processes exit with code 0."""
    return RecordingProcessRunner()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
