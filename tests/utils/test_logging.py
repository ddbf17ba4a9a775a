# tests/utils/test_logging.py
"""
Tests for logging configuration.
"""

import json
import logging

import pytest

from portfolio_timeline.utils.context import correlation_scope
from portfolio_timeline.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
    setup_logging,
)


def make_record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="portfolio_timeline.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCorrelationIdFilter:
    """Tests for CorrelationIdFilter."""

    def test_adds_active_id(self):
        record = make_record()

        with correlation_scope("chart-1"):
            assert CorrelationIdFilter().filter(record) is True

        assert record.correlation_id == "chart-1"

    def test_placeholder_without_scope(self):
        record = make_record()

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == NO_CORRELATION_ID


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_basic_fields(self):
        record = make_record("Zero-filling 2024-01-03", correlation_id="abc")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "portfolio_timeline.test"
        assert entry["correlation_id"] == "abc"
        assert entry["message"] == "Zero-filling 2024-01-03"
        assert "extra" not in entry

    def test_extra_fields(self):
        record = make_record(fault_kind="malformed_price", fault_count=2)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"] == {"fault_kind": "malformed_price", "fault_count": 2}

    def test_non_serializable_extra_is_stringified(self):
        from datetime import date

        record = make_record(day=date(2024, 1, 3))

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"]["day"] == "2024-01-03"


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_level_names(self):
        assert _get_log_level("debug") == logging.DEBUG
        assert _get_log_level(" WARN ") == logging.WARNING

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _get_log_level("LOUD")

    def test_installs_single_handler(self, restore_root_logger):
        setup_logging(level="DEBUG", log_format="json")
        setup_logging(level="WARNING", log_format="json")

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        handler = restore_root_logger.handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_text_format(self, restore_root_logger):
        setup_logging(level="INFO", log_format="text")

        formatter = restore_root_logger.handlers[0].formatter
        assert not isinstance(formatter, JsonFormatter)
        assert "%(correlation_id)s" in formatter._fmt
