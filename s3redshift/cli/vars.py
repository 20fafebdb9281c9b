"""Parsing of ``--vars key=value`` CLI options."""

import click


def parse_cli_vars(vars: tuple) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dictionary.

    Raises:
        click.BadParameter: If an entry has no ``=``.
    """
    cli_vars = {}
    for var in vars:
        if "=" not in var:
            raise click.BadParameter(
                f"Invalid variable format: {var}. Use key=value", param_hint="--vars"
            )
        key, value = var.split("=", 1)
        cli_vars[key] = value
    return cli_vars
