"""Credential-mode validation for the load action.

The action authenticates against S3 with either an access key pair or an
IAM role, never both and never neither. Deferred values are presumed to
resolve to something, so they satisfy presence checks and fail absence
checks. Failures are collected rather than raised so every problem is
reported in one pass.
"""

from pydantic import BaseModel, ConfigDict, Field

from s3redshift.core.exceptions import ValidationError
from s3redshift.models.load_config import LoadConfig

IAM_ROLE = "iamRole"
ACCESS_KEY = "accessKey"
SECRET_ACCESS_KEY = "secretAccessKey"

CREDENTIAL_PROPERTIES = (IAM_ROLE, ACCESS_KEY, SECRET_ACCESS_KEY)

BOTH_PROVIDED_MESSAGE = (
    "Both configurations 'Keys'(Access and Secret Access keys) and 'IAM Role' "
    "can not be provided at the same time."
)
NEITHER_PROVIDED_MESSAGE = (
    "Both configurations 'Keys'(Access and Secret Access keys) and 'IAM Role' "
    "can not be empty at the same time."
)
BOTH_PROVIDED_CORRECTIVE_ACTION = (
    "Either provide the 'Keys' (Access and Secret Access keys) or 'IAM Role' "
    "for connecting to S3 bucket."
)
NEITHER_PROVIDED_CORRECTIVE_ACTION = (
    "Either provide the 'Keys'(Access and Secret Access keys) or 'IAM Role' "
    "for connecting to S3 bucket."
)


class ValidationFailure(BaseModel):
    """A single configuration problem and the properties that caused it."""

    model_config = ConfigDict(frozen=True)

    message: str
    corrective_action: str | None = None
    config_properties: tuple[str, ...] = Field(default_factory=tuple)

    def __str__(self) -> str:
        text = self.message
        if self.corrective_action:
            text = f"{text} {self.corrective_action}"
        if self.config_properties:
            text = f"{text} [{', '.join(self.config_properties)}]"
        return text


class FailureCollector:
    """Accumulates validation failures for a single validation pass."""

    def __init__(self) -> None:
        self._failures: list[ValidationFailure] = []

    def add_failure(
        self,
        message: str,
        corrective_action: str | None = None,
        config_properties: tuple[str, ...] = (),
    ) -> ValidationFailure:
        failure = ValidationFailure(
            message=message,
            corrective_action=corrective_action,
            config_properties=config_properties,
        )
        self._failures.append(failure)
        return failure

    @property
    def failures(self) -> list[ValidationFailure]:
        return list(self._failures)

    def get_or_raise(self) -> None:
        """Raise ValidationError if any failure has been collected."""
        if self._failures:
            raise ValidationError(
                f"Configuration validation failed with {len(self._failures)} error(s)",
                failures=self._failures,
            )


def check_keys_and_role(config: LoadConfig, collector: FailureCollector) -> None:
    """Check that exactly one of the key pair and the IAM role is supplied."""
    if config.iam_role.is_present:
        keys_absent = config.access_key.is_absent and config.secret_access_key.is_absent
        if not keys_absent:
            collector.add_failure(
                BOTH_PROVIDED_MESSAGE,
                BOTH_PROVIDED_CORRECTIVE_ACTION,
                CREDENTIAL_PROPERTIES,
            )
    else:
        keys_present = config.access_key.is_present and config.secret_access_key.is_present
        if not keys_present:
            collector.add_failure(
                NEITHER_PROVIDED_MESSAGE,
                NEITHER_PROVIDED_CORRECTIVE_ACTION,
                CREDENTIAL_PROPERTIES,
            )


def validate(config: LoadConfig) -> list[ValidationFailure]:
    """Validate ``config`` and return every failure found (empty when valid)."""
    collector = FailureCollector()
    check_keys_and_role(config, collector)
    return collector.failures
