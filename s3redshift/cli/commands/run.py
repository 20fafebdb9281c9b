"""CLI command for running the load action."""

import sys

import click

from s3redshift.api import run_action
from s3redshift.cli.vars import parse_cli_vars
from s3redshift.core.exceptions import (
    CleanupError,
    ConfigError,
    DriverUnavailableError,
    ExecutionError,
)
from s3redshift.core.logging import configure_logging
from s3redshift.models.loader import read_config_file


@click.command()
@click.argument("config_path", type=click.Path(exists=True))
@click.option(
    "--vars",
    multiple=True,
    help="CLI variables in key=value format (can be used multiple times)",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level (default: INFO)",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Use JSON format for logs",
)
def run(config_path: str, vars: tuple, log_level: str, json_logs: bool):
    """Load data from S3 into Redshift as described by CONFIG_PATH.

    Examples:

        s3redshift run action.yaml
        s3redshift run action.yaml --vars date=2017-02-22
        s3redshift run action.yaml --log-level DEBUG --json-logs
    """
    cli_vars = parse_cli_vars(vars)
    try:
        name, data = read_config_file(config_path)
        configure_logging(level=log_level, json_format=json_logs, action_name=name)

        click.echo(f"Running action: {name}")
        run_action(data, cli_vars=cli_vars, name=name)
        click.echo("Action completed successfully")

    except ConfigError as e:
        click.echo(f"Config error: {e}", err=True)
        sys.exit(1)
    except DriverUnavailableError as e:
        click.echo(f"Driver error: {e}", err=True)
        sys.exit(1)
    except (ExecutionError, CleanupError) as e:
        click.echo(f"Execution error: {e}", err=True)
        for suppressed in getattr(e, "suppressed", []):
            click.echo(f"  also: {suppressed}", err=True)
        sys.exit(1)
