"""Builds the Redshift ``copy`` command that loads data from S3."""

import logging
import re

from s3redshift.models.load_config import LoadConfig

logger = logging.getLogger(__name__)

# TODO: support formats other than avro (csv, json, parquet) via a config field.
FORMAT_CLAUSE = "format as avro 'auto'"

# The secret runs to the quote that closes the credentials clause.
_SECRET_PATTERN = re.compile(
    r"(aws_secret_access_key=).*?(?=' (?:region '|format as ))", re.DOTALL
)


def build_credentials_block(config: LoadConfig) -> str:
    """Return the credentials string for the copy command.

    Key mode is chosen when either key is non-empty, role mode otherwise.
    """
    access_key = config.access_key.value
    secret_access_key = config.secret_access_key.value
    if access_key or secret_access_key:
        if not (access_key and secret_access_key):
            # Rejected by validation; left to the warehouse if it gets here.
            logger.warning(
                "Building credentials from an incomplete access key pair",
                extra={"context": {"access_key_set": bool(access_key)}},
            )
        return f"aws_access_key_id={access_key};aws_secret_access_key={secret_access_key}"
    return f"aws_iam_role={config.iam_role.value}"


def build_copy_command(config: LoadConfig) -> str:
    """Build the copy command for a validated configuration.

    Args:
        config: Resolved load configuration. Table name, path and column list
            are inserted verbatim without quoting or escaping.

    Returns:
        The complete statement, terminated by a semicolon.
    """
    parts = ["copy ", config.table_name.value]

    if config.list_of_columns.value:
        parts.append(f"({config.list_of_columns.value})")

    parts.append(f" from '{config.s3_data_path.value}'")
    parts.append(f" credentials '{build_credentials_block(config)}'")

    if config.s3_region.value:
        parts.append(f" region '{config.s3_region.value}'")

    parts.append(f" {FORMAT_CLAUSE};")
    return "".join(parts)


def redact_command(command: str) -> str:
    """Mask the secret access key in a copy command for display."""
    return _SECRET_PATTERN.sub(r"\1***", command)
