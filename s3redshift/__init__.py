"""s3redshift - Load data from Amazon S3 into Redshift with a single copy command.

Validates the S3 credential configuration, builds the ``copy`` statement
and runs it against the cluster.
"""

__version__ = "0.1.0"

# Public API
from s3redshift.api import configure_action, from_yaml, run_action, run_action_from_yaml

# Core classes
from s3redshift.core.action import S3ToRedshiftAction
from s3redshift.core.command import build_copy_command, build_credentials_block
from s3redshift.core.executor import Executor, SQLAlchemyWarehouse, Warehouse

# Exceptions
from s3redshift.core.exceptions import (
    CleanupError,
    ConfigError,
    DriverUnavailableError,
    ExecutionError,
    S3RedshiftError,
    ValidationError,
)
from s3redshift.core.validation import ValidationFailure, validate

# Models
from s3redshift.models.field_value import FieldState, FieldValue
from s3redshift.models.load_config import ConnectionParams, LoadConfig

__all__ = [
    # Version
    "__version__",
    # Public API
    "configure_action",
    "from_yaml",
    "run_action",
    "run_action_from_yaml",
    # Core classes
    "S3ToRedshiftAction",
    "build_copy_command",
    "build_credentials_block",
    "Executor",
    "SQLAlchemyWarehouse",
    "Warehouse",
    "ValidationFailure",
    "validate",
    # Models
    "FieldState",
    "FieldValue",
    "ConnectionParams",
    "LoadConfig",
    # Exceptions
    "S3RedshiftError",
    "ConfigError",
    "ValidationError",
    "DriverUnavailableError",
    "ExecutionError",
    "CleanupError",
]
