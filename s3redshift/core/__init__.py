"""Core module for the s3redshift package."""

from s3redshift.core.exceptions import (
    CleanupError,
    ConfigError,
    DriverUnavailableError,
    ExecutionError,
    S3RedshiftError,
    ValidationError,
)
from s3redshift.core.logging import StructuredFormatter, configure_logging

__all__ = [
    "S3RedshiftError",
    "ConfigError",
    "ValidationError",
    "DriverUnavailableError",
    "ExecutionError",
    "CleanupError",
    "StructuredFormatter",
    "configure_logging",
]
