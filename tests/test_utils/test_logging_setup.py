"""Tests for sensor_advisor/utils/logging.py."""

from __future__ import annotations

import json
import logging

import pytest

from sensor_advisor.config import LoggingConfig
from sensor_advisor.utils.logging import _JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "tank at %d%%", *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("sensor_advisor.test", logging.WARNING, __file__, 1, msg, args or (8,), None)
    record.__dict__.update(extra)
    return record


class TestJsonFormatter:
    def test_core_fields(self):
        payload = json.loads(_JsonFormatter().format(_record()))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "sensor_advisor.test"
        assert payload["msg"] == "tank at 8%"
        assert payload["ts"].endswith("Z")

    def test_extra_fields_merged_and_builtins_skipped(self):
        payload = json.loads(_JsonFormatter().format(_record(field="water_level")))
        assert payload["field"] == "water_level"
        assert "levelno" not in payload
        assert "args" not in payload


class TestConfigureLogging:
    def test_level_and_stdout_handler(self, restore_root_logger):
        configure_logging(LoggingConfig(level="DEBUG"))
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler_with_json(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "advisor.log"
        configure_logging(LoggingConfig(log_file=str(log_file), json_format=True))

        logging.getLogger("sensor_advisor.test").warning("refill needed")
        for handler in restore_root_logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["msg"] == "refill needed"

    def test_http_loggers_quietened(self, restore_root_logger):
        configure_logging(LoggingConfig(level="DEBUG"))
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
