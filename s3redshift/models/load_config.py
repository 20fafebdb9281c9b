"""Configuration model for the S3 to Redshift load action."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from s3redshift.models.field_value import FieldValue


class ConnectionParams(BaseModel):
    """Connection parameters handed to the warehouse executor."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Redshift cluster database URL")
    user: str = Field(description="Database user")
    password: SecretStr = Field(description="Database password")


class LoadConfig(BaseModel):
    """Configuration for loading data from an S3 path into a Redshift table.

    Fields are keyed by their camelCase configuration names and may be
    populated by attribute name as well. Every value is a ``FieldValue`` so
    templates that are not rendered yet stay distinguishable from empty
    values.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    access_key: FieldValue = Field(
        default_factory=FieldValue.empty,
        alias="accessKey",
        description="AWS access key. Provide either the keys or an IAM role (supports templates)",
    )
    secret_access_key: FieldValue = Field(
        default_factory=FieldValue.empty,
        alias="secretAccessKey",
        description="AWS secret access key (supports templates)",
    )
    iam_role: FieldValue = Field(
        default_factory=FieldValue.empty,
        alias="iamRole",
        description="IAM role ARN, only usable when the cluster runs on AWS (supports templates)",
    )
    s3_region: FieldValue = Field(
        default_factory=FieldValue.empty,
        alias="s3Region",
        description="Region of the S3 bucket; defaults to the cluster region when empty",
    )
    s3_data_path: FieldValue = Field(
        alias="s3DataPath",
        description="S3 path or prefix of the data, e.g. 's3://bucket-name/test/'",
    )
    cluster_db_url: FieldValue = Field(
        alias="clusterDbUrl",
        description="Redshift database URL, e.g. 'jdbc:redshift://x.y.us-west-2.redshift.amazonaws.com:5439/dev'",
    )
    master_user: FieldValue = Field(alias="masterUser", description="Cluster master user")
    master_password: FieldValue = Field(
        alias="masterPassword", description="Cluster master password"
    )
    table_name: FieldValue = Field(alias="tableName", description="Target Redshift table")
    list_of_columns: FieldValue = Field(
        default_factory=FieldValue.empty,
        alias="listOfColumns",
        description="Comma-separated target columns; all columns are loaded when empty",
    )

    @field_validator("*", mode="before")
    @classmethod
    def classify_value(cls, v: Any) -> FieldValue:
        """Turn raw configuration values into tagged field values."""
        return FieldValue.parse(v)

    @classmethod
    def from_dict(cls, data: dict) -> "LoadConfig":
        """Create LoadConfig from a raw configuration dictionary."""
        return cls(**data)

    @classmethod
    def from_rendered(cls, data: dict) -> "LoadConfig":
        """Create LoadConfig from a dictionary whose templates are already rendered.

        Rendered values are never deferred, even when the text they resolved
        to looks like a template.
        """
        return cls(**{key: FieldValue.resolved(value) for key, value in data.items()})

    def deferred_fields(self) -> list[str]:
        """Return the configuration names of fields that are still deferred."""
        return [
            field.alias or name
            for name, field in type(self).model_fields.items()
            if getattr(self, name).is_deferred
        ]

    def is_resolved(self) -> bool:
        return not self.deferred_fields()

    def connection_params(self) -> ConnectionParams:
        return ConnectionParams(
            url=self.cluster_db_url.value,
            user=self.master_user.value,
            password=self.master_password.value,
        )

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name in ("secret_access_key", "master_password") and value.is_set:
                yield name, "**********"
            else:
                yield name, value
