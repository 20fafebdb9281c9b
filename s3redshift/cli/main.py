"""Main CLI entry point for s3redshift."""

import click

from s3redshift import __version__
from s3redshift.cli.commands.dry_run import dry_run
from s3redshift.cli.commands.run import run
from s3redshift.cli.commands.validate import validate


@click.group()
@click.version_option(version=__version__)
def main():
    """s3redshift - Load data from S3 into a Redshift table."""
    pass


main.add_command(run)
main.add_command(validate)
main.add_command(dry_run)


if __name__ == "__main__":
    main()
