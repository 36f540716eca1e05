"""Tests for logging configuration and JSON output."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from nuget_restore.config.models import LoggingConfig
from nuget_restore.logging import JSONFormatter, configure_logging, restore_context
from nuget_restore.logging.context import RestoreContextFilter


@pytest.fixture(autouse=True)
def _restore_root_logger(reset_root_logger):
    """Save and restore root logger state between tests."""
    yield


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_level(self, level, expected) -> None:
        """Should set the root level, case-insensitively."""
        configure_logging(LoggingConfig(level=level))
        assert logging.getLogger().level == expected

    def test_stderr_only(self) -> None:
        """Without a file a single stream handler should be installed."""
        handlers = configure_logging(LoggingConfig())

        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0] in logging.getLogger().handlers
        assert any(isinstance(f, RestoreContextFilter) for f in handlers[0].filters)

    def test_file_handler(self, tmp_path: Path) -> None:
        """A configured file should get a rotating handler, creating dirs."""
        log_file = tmp_path / "logs" / "restore.log"
        handlers = configure_logging(LoggingConfig(file=log_file, max_bytes=1024))

        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].maxBytes == 1024
        assert log_file.parent.is_dir()

    def test_file_and_stderr(self, tmp_path: Path) -> None:
        """include_stderr should add a stream handler next to the file."""
        handlers = configure_logging(
            LoggingConfig(file=tmp_path / "restore.log", include_stderr=True)
        )
        assert len(handlers) == 2

    def test_unwritable_file_falls_back_to_stderr(self, tmp_path: Path) -> None:
        """If the log file cannot be opened, stderr should be used."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        handlers = configure_logging(LoggingConfig(file=blocker / "restore.log"))

        assert len(handlers) == 1
        assert not isinstance(handlers[0], RotatingFileHandler)

    def test_keeps_handlers_installed_by_caller(self) -> None:
        """Handlers the build script added itself should survive."""
        own_handler = logging.NullHandler()
        logging.getLogger().addHandler(own_handler)

        configure_logging(LoggingConfig())

        assert own_handler in logging.getLogger().handlers

    def test_reconfigure_replaces_previous_handlers(self, tmp_path: Path) -> None:
        """A second call should replace the handlers from the first."""
        first = configure_logging(LoggingConfig(file=tmp_path / "first.log"))
        second = configure_logging(LoggingConfig(file=tmp_path / "second.log"))

        root_handlers = logging.getLogger().handlers
        assert first[0] not in root_handlers
        assert second[0] in root_handlers

    def test_text_output_includes_restore_tag(self, tmp_path: Path) -> None:
        """Text lines should carry the target file tag."""
        log_file = tmp_path / "restore.log"
        configure_logging(LoggingConfig(file=log_file))

        with restore_context("/src/App.sln"):
            logging.getLogger("nuget_restore.test").info("Restoring")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip()
        assert "[App.sln] nuget_restore.test - INFO - Restoring" in line

    def test_json_output(self, tmp_path: Path) -> None:
        """JSON format should write one object per line with context."""
        log_file = tmp_path / "restore.log"
        configure_logging(LoggingConfig(file=log_file, format="json"))

        with restore_context("/src/App.sln"):
            logging.getLogger("nuget_restore.test").info(
                "Done", extra={"elapsed_seconds": 1.5}
            )
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip())
        assert entry["message"] == "Done"
        assert entry["level"] == "INFO"
        assert entry["context"]["target_file"] == "/src/App.sln"
        assert entry["context"]["elapsed_seconds"] == 1.5


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def make_record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            "nuget_restore.restorer",
            logging.ERROR,
            __file__,
            10,
            "exit %d",
            (1,),
            None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self) -> None:
        """Output should contain timestamp, level, logger and message."""
        entry = json.loads(JSONFormatter().format(self.make_record()))

        assert entry["level"] == "ERROR"
        assert entry["logger"] == "nuget_restore.restorer"
        assert entry["message"] == "exit 1"
        assert entry["timestamp"].endswith("+00:00")
        assert "context" not in entry

    def test_extra_fields_in_context(self) -> None:
        """Values from extra= should be grouped under context."""
        record = self.make_record(returncode=1, executable=Path("/t/NuGet.exe"))
        entry = json.loads(JSONFormatter().format(record))

        assert entry["context"] == {"returncode": 1, "executable": "/t/NuGet.exe"}

    def test_empty_restore_context_omitted(self) -> None:
        """A None target file and the text tag should not appear."""
        record = self.make_record(target_file=None, restore_tag="")
        entry = json.loads(JSONFormatter().format(record))

        assert "context" not in entry

    def test_exception_included(self) -> None:
        """Exception info should be formatted into the entry."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self.make_record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]
