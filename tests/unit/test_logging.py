"""Tests for logging configuration."""

import logging

from json_log_formatter import JSONFormatter

from s3redshift.core.logging import StructuredFormatter, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_structured_handler(self):
        """Test the default structured handler."""
        configure_logging(level="DEBUG")
        logger = logging.getLogger("s3redshift")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_json_handler(self):
        """Test JSON formatting."""
        configure_logging(json_format=True)
        handler = logging.getLogger("s3redshift").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_reconfigure_replaces_handlers(self):
        """Test that calling twice does not stack handlers."""
        configure_logging()
        configure_logging()
        assert len(logging.getLogger("s3redshift").handlers) == 1

    def test_action_name_filter(self):
        """Test that the action name is attached to records."""
        configure_logging(action_name="nightly")
        handler = logging.getLogger("s3redshift").handlers[0]
        record = logging.LogRecord("s3redshift.x", logging.INFO, __file__, 1, "hi", None, None)

        assert handler.filter(record)
        assert handler.format(record) == "[INFO] action=nightly hi"


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_context_fields(self):
        """Test that table and context are rendered."""
        record = logging.LogRecord("s3redshift", logging.WARNING, __file__, 1, "msg", None, None)
        record.table = "events"
        record.context = {"command": "copy"}

        assert StructuredFormatter().format(record) == "[WARNING] table=events command=copy msg"
