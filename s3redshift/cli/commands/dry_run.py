"""CLI command for dry-run execution."""

import sys

import click

from s3redshift.cli.vars import parse_cli_vars
from s3redshift.core.action import S3ToRedshiftAction
from s3redshift.core.command import redact_command
from s3redshift.core.exceptions import ConfigError, ValidationError
from s3redshift.models.loader import load_config_file


@click.command("dry-run")
@click.argument("config_path", type=click.Path(exists=True))
@click.option(
    "--vars",
    multiple=True,
    help="CLI variables in key=value format (can be used multiple times)",
)
@click.option(
    "--show-secrets",
    is_flag=True,
    help="Print the secret access key instead of masking it",
)
def dry_run(config_path: str, vars: tuple, show_secrets: bool):
    """Render and validate the configuration, then print the copy command.

    Nothing is sent to the cluster.

    Examples:

        s3redshift dry-run action.yaml
        s3redshift dry-run action.yaml --vars date=2017-02-22
    """
    cli_vars = parse_cli_vars(vars)
    try:
        name, config = load_config_file(config_path, cli_vars)
        action = S3ToRedshiftAction(config, name=name)
        failures = action.configure()
        if failures:
            raise ValidationError("Configuration validation failed", failures=failures)
        command = action.build_command()
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except ConfigError as e:
        click.echo(f"Config error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Dry-run for action: {name}")
    click.echo(command if show_secrets else redact_command(command))
