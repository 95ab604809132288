"""
Tests for structured logging setup
"""

import json
import logging

import pytest
from rich.logging import RichHandler

from simpleprogress.utils.logging import (
    bind,
    clear_context,
    get_logger,
    setup_logging,
    validate_log_level,
)
from simpleprogress.utils.timing import log_phase


@pytest.fixture
def restore_logging():
    """Leave the root logger as we found it"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_context()


class TestSetupLogging:
    """Test handler configuration"""

    def test_console_handler_is_rich(self, restore_logging):
        setup_logging(level="DEBUG", console_enabled=True, file_enabled=False)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_json_file_logging(self, tmp_path, restore_logging):
        log_path = tmp_path / "logs" / "simpleprogress.log"
        setup_logging(
            level="INFO",
            console_enabled=False,
            file_enabled=True,
            json_file=True,
            log_path=log_path,
        )
        bind(run="test")
        get_logger("simpleprogress.test").info("progress.test_event", answer=42)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_path.read_text(encoding="utf-8").strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "progress.test_event"
        assert record["answer"] == 42
        assert record["run"] == "test"
        assert record["level"] == "info"

    def test_level_filters_events(self, tmp_path, restore_logging):
        log_path = tmp_path / "filtered.log"
        setup_logging(level="WARNING", console_enabled=False, file_enabled=True, log_path=log_path)
        get_logger("simpleprogress.test").info("progress.hidden")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "progress.hidden" not in log_path.read_text(encoding="utf-8")

    def read_records(self, log_path):
        for handler in logging.getLogger().handlers:
            handler.flush()
        return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]

    def test_log_phase_reports_outcome(self, tmp_path, restore_logging):
        """Test the complete event carries the block's outcome and bound fields"""
        log_path = tmp_path / "phases.log"
        setup_logging(level="INFO", console_enabled=False, file_enabled=True, log_path=log_path)

        with log_phase("demo.bar", total=10.0) as outcome:
            outcome["current"] = 10.0

        start, complete = self.read_records(log_path)[-2:]
        assert start["event"] == "demo.bar_start"
        assert start["total"] == 10.0
        assert complete["event"] == "demo.bar_complete"
        assert complete["current"] == 10.0
        assert complete["total"] == 10.0
        assert complete["took_ms"] >= 0

    def test_log_phase_logs_failure(self, tmp_path, restore_logging):
        """Test an error inside the block is logged and re-raised"""
        log_path = tmp_path / "failed.log"
        setup_logging(level="INFO", console_enabled=False, file_enabled=True, log_path=log_path)

        with pytest.raises(BrokenPipeError):
            with log_phase("demo.spinner") as outcome:
                outcome["ticks"] = 3
                raise BrokenPipeError("pipe closed")

        failed = self.read_records(log_path)[-1]
        assert failed["event"] == "demo.spinner_failed"
        assert failed["ticks"] == 3
        assert "pipe closed" in failed["error"]
        assert failed["level"] == "error"


class TestValidateLogLevel:
    def test_valid_levels(self):
        assert validate_log_level("debug")
        assert validate_log_level("ERROR")

    def test_invalid_levels(self):
        assert not validate_log_level("LOUD")
        assert not validate_log_level(10)
