"""Public Python API for the s3redshift package.

This module provides the main entry points for loading an action
configuration and running the S3 to Redshift load.
"""

import logging
from typing import Any, Dict

from s3redshift.core.action import S3ToRedshiftAction
from s3redshift.core.executor import Warehouse
from s3redshift.core.validation import ValidationFailure
from s3redshift.models.load_config import LoadConfig
from s3redshift.models.loader import (
    DEFAULT_ACTION_NAME,
    load_config,
    load_config_file,
    read_config_file,
)

logger = logging.getLogger(__name__)


def from_yaml(path: str, cli_vars: Dict[str, str] | None = None) -> LoadConfig:
    """Load a rendered LoadConfig from a YAML file.

    Args:
        path: Path to the action configuration file
        cli_vars: Variables for ``{{ var('KEY') }}`` and ``${KEY}`` expressions

    Returns:
        LoadConfig with every template rendered

    Raises:
        ConfigError: If the file is missing, invalid, or a template cannot be rendered
    """
    _, config = load_config_file(path, cli_vars)
    return config


def configure_action(
    data: Dict[str, Any],
    name: str = DEFAULT_ACTION_NAME,
) -> list[ValidationFailure]:
    """Run configure-time validation on an unrendered configuration.

    Templated values are treated as deferred, nothing is rendered and no
    connection is made.
    """
    config = load_config(data, render=False, action_name=name)
    return S3ToRedshiftAction(config, name=name).configure()


def run_action(
    data: Dict[str, Any],
    cli_vars: Dict[str, str] | None = None,
    warehouse: Warehouse | None = None,
    name: str = DEFAULT_ACTION_NAME,
) -> None:
    """Validate, render and run the action for a raw configuration.

    Configure-time failures are logged; the run-time validation after
    rendering is the one that stops execution.

    Args:
        data: Raw configuration keyed by camelCase names
        cli_vars: Variables passed via CLI (e.g., --vars key=value)
        warehouse: Warehouse capability; defaults to SQLAlchemyWarehouse
        name: Action name used in logs and templates

    Raises:
        ConfigError: If loading or rendering fails
        ValidationError: If the credential configuration is invalid
        DriverUnavailableError: If the database driver is missing
        ExecutionError: If the copy command fails
        CleanupError: If releasing the connection fails

    Example:
        >>> run_action({
        ...     "iamRole": "{{ env_var('REDSHIFT_ROLE') }}",
        ...     "s3DataPath": "s3://bucket/events/",
        ...     "clusterDbUrl": "jdbc:redshift://x.y.us-west-2.redshift.amazonaws.com:5439/dev",
        ...     "masterUser": "admin",
        ...     "masterPassword": "{{ env_var('REDSHIFT_PASSWORD') }}",
        ...     "tableName": "events",
        ... })
    """
    failures = configure_action(data, name=name)
    if failures:
        logger.info(
            f"Configure-time validation reported {len(failures)} failure(s)",
            extra={"action_name": name},
        )
    config = load_config(data, cli_vars, action_name=name)
    S3ToRedshiftAction(config, warehouse=warehouse, name=name).run()


def run_action_from_yaml(
    path: str,
    cli_vars: Dict[str, str] | None = None,
    warehouse: Warehouse | None = None,
) -> None:
    """Load and run the action described by a YAML file.

    Example:
        >>> from s3redshift import run_action_from_yaml
        >>> run_action_from_yaml("actions/events.yaml", cli_vars={"date": "2017-02-22"})
    """
    name, data = read_config_file(path)
    run_action(data, cli_vars=cli_vars, warehouse=warehouse, name=name)
