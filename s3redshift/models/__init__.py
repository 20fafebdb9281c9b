"""Configuration models for the S3 to Redshift action."""

from s3redshift.models.field_value import FieldState, FieldValue
from s3redshift.models.load_config import ConnectionParams, LoadConfig
from s3redshift.models.loader import load_config, load_config_file, read_config_file

__all__ = [
    "FieldState",
    "FieldValue",
    "ConnectionParams",
    "LoadConfig",
    "load_config",
    "load_config_file",
    "read_config_file",
]
