"""Tests for logging context managers."""

import logging

import pytest

from drift_pricing.fare_logging import ContextFilter, LogContext, log_context, log_quote_context


@pytest.mark.unit
class TestLogContext:
    """Tests for log_context context manager."""

    @pytest.fixture
    def logger(self):
        """Create a test logger with ContextFilter and a capturing handler."""
        logger = logging.getLogger("test.fare_context")
        logger.setLevel(logging.DEBUG)
        return logger

    @pytest.fixture
    def captured_records(self, logger):
        """Capture log records for inspection."""
        records: list[logging.LogRecord] = []

        class RecordCapture(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        handler = RecordCapture()
        handler.addFilter(ContextFilter())
        logger.addHandler(handler)
        yield records
        logger.removeHandler(handler)
        LogContext.clear()

    def test_log_context_adds_extra_fields(self, logger, captured_records):
        """Verify extra fields are added to log records via ContextFilter."""
        with log_context(pickup_zone_id="zone_3", trip_category="airport"):
            logger.info("Test message")

        record = captured_records[0]
        assert record.pickup_zone_id == "zone_3"
        assert record.trip_category == "airport"

    def test_log_context_clears_on_exit(self, logger, captured_records):
        """Verify fields are cleared after context exits."""
        with log_context(quote_id="q-1"):
            pass
        logger.info("after")

        assert not hasattr(captured_records[0], "quote_id")

    def test_nested_contexts_restore_outer_fields(self, logger, captured_records):
        """Verify an inner context does not wipe the enclosing one."""
        with log_context(correlation_id="req-1"):
            with log_context(quote_id="q-2"):
                logger.info("inner")
            logger.info("outer")

        inner, outer = captured_records
        assert inner.correlation_id == "req-1"
        assert inner.quote_id == "q-2"
        assert outer.correlation_id == "req-1"
        assert not hasattr(outer, "quote_id")

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        """Verify fields passed via extra are not overwritten."""
        with log_context(pickup_zone_id="zone_1"):
            logger.info("explicit", extra={"pickup_zone_id": "zone_7"})

        assert captured_records[0].pickup_zone_id == "zone_7"

    def test_log_quote_context_defaults_correlation_id(self, logger, captured_records):
        """Verify the quote id doubles as the correlation id."""
        with log_quote_context("q-3", pickup_zone_id="zone_2"):
            logger.info("pricing")

        record = captured_records[0]
        assert record.quote_id == "q-3"
        assert record.correlation_id == "q-3"
        assert record.pickup_zone_id == "zone_2"

    def test_log_quote_context_keeps_given_correlation_id(self, logger, captured_records):
        with log_quote_context("q-4", correlation_id="req-9"):
            logger.info("pricing")

        assert captured_records[0].correlation_id == "req-9"
