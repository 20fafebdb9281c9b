"""Structured logging configuration for s3redshift."""

import logging
import sys
from typing import Optional

from json_log_formatter import JSONFormatter


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    action_name: Optional[str] = None,
) -> None:
    """Configure logging for s3redshift.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use normal format
        action_name: Optional action name added to every log record
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("s3redshift")
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()
    handler.setFormatter(formatter)

    if action_name:
        handler.addFilter(_ActionNameFilter(action_name))

    logger.addHandler(handler)


class _ActionNameFilter(logging.Filter):
    """Attach the action name to records that don't carry one."""

    def __init__(self, action_name: str):
        super().__init__()
        self._action_name = action_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "action_name"):
            record.action_name = self._action_name
        return True


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if hasattr(record, "action_name"):
            parts.append(f"action={record.action_name}")

        if hasattr(record, "table"):
            parts.append(f"table={record.table}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        message = " ".join(parts)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message
