"""CLI command for configure-time validation."""

import sys

import click

from s3redshift.cli.vars import parse_cli_vars
from s3redshift.core.action import S3ToRedshiftAction
from s3redshift.core.exceptions import ConfigError
from s3redshift.models.loader import load_config_file


@click.command()
@click.argument("config_path", type=click.Path(exists=True))
@click.option(
    "--vars",
    multiple=True,
    help="CLI variables in key=value format (can be used multiple times)",
)
@click.option(
    "--render/--no-render",
    default=False,
    help="Render templates before validating (default: validate them as deferred)",
)
def validate(config_path: str, vars: tuple, render: bool):
    """Validate an action configuration file.

    Without --render, templated values are treated as deferred, the way
    they are seen at configure time.

    Examples:

        s3redshift validate action.yaml
        s3redshift validate action.yaml --render --vars date=2017-02-22
    """
    cli_vars = parse_cli_vars(vars)
    try:
        name, config = load_config_file(config_path, cli_vars, render=render)
    except ConfigError as e:
        click.echo(f"✗ Config error: {e}", err=True)
        sys.exit(1)

    failures = S3ToRedshiftAction(config, name=name).configure()
    if failures:
        click.echo(f"✗ Action '{name}' has {len(failures)} validation failure(s):", err=True)
        for failure in failures:
            click.echo(f"  - {failure}", err=True)
        sys.exit(1)

    click.echo(f"✓ Action '{name}' is valid")
    click.echo(f"  Table: {config.table_name}")
    click.echo(f"  S3 path: {config.s3_data_path}")
    deferred = config.deferred_fields()
    if deferred:
        click.echo(f"  Deferred: {', '.join(deferred)}")
