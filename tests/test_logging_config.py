# Area: Shared Tests
"""Tests for logging setup and formatters."""

import json
import logging
import os
import tempfile

from party_core._shared.logging_config import log_core_error, setup_logging
from party_core._shared.logging_formatters import JSONFormatter, TerminalFormatter
from party_core.errors import TransitionError


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("party_core.test", level, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the terminal and JSON formatters."""

    def test_json_formatter_fields(self):
        data = json.loads(JSONFormatter().format(make_record("started", phase_id="intro")))
        assert data["level"] == "INFO"
        assert data["logger"] == "party_core.test"
        assert data["message"] == "started"
        assert data["phase_id"] == "intro"

    def test_terminal_formatter_restores_levelname(self):
        record = make_record(level=logging.WARNING)
        output = TerminalFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[33mWARNING" in output
        assert record.levelname == "WARNING"


class TestSetupLogging:
    """Tests for setup_logging()."""

    def teardown_method(self):
        pkg_logger = logging.getLogger("party_core")
        for handler in list(pkg_logger.handlers):
            pkg_logger.removeHandler(handler)
            handler.close()

    def test_terminal_only(self):
        setup_logging(log_file_path=None, level=logging.DEBUG)
        pkg_logger = logging.getLogger("party_core")
        assert len(pkg_logger.handlers) == 1
        assert pkg_logger.level == logging.DEBUG
        assert pkg_logger.propagate is False

    def test_file_handler_writes_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "logs", "core.log")
            setup_logging(log_file_path=path)

            logging.getLogger("party_core.router").info("Phase intro -> play")
            self.teardown_method()

            with open(path, encoding="utf-8") as f:
                lines = [json.loads(line) for line in f if line.strip()]

        assert lines[-1]["message"] == "Phase intro -> play"
        assert lines[-1]["logger"] == "party_core.router"

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(log_file_path=None)
        setup_logging(log_file_path=None)
        assert len(logging.getLogger("party_core").handlers) == 1


class TestLogCoreError:
    """Tests for log_core_error()."""

    def test_prints_block_to_stderr(self, capsys):
        setup_logging(log_file_path=None)
        log_core_error(TransitionError("bad move", phase_id="play"))
        captured = capsys.readouterr()
        assert "TRANSITION_ERROR" in captured.err
        logging.getLogger("party_core").handlers.clear()
