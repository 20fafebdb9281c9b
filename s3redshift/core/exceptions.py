"""Exception hierarchy for the s3redshift package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from s3redshift.core.validation import ValidationFailure


class S3RedshiftError(Exception):
    """Base exception for all s3redshift errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(S3RedshiftError):
    """Raised when action configuration cannot be loaded or resolved."""

    pass


class ValidationError(ConfigError):
    """Raised when collected validation failures block execution."""

    def __init__(
        self,
        message: str,
        failures: list[ValidationFailure],
        context: dict | None = None,
    ):
        super().__init__(message, context)
        self.failures = list(failures)

    def __str__(self) -> str:
        lines = [super().__str__()]
        for failure in self.failures:
            lines.append(f"  - {failure}")
        return "\n".join(lines)


class DriverUnavailableError(S3RedshiftError):
    """Raised when the warehouse database driver cannot be loaded."""

    pass


class ExecutionError(S3RedshiftError):
    """Raised when the copy command fails against the warehouse."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message, context)
        self.suppressed: list[S3RedshiftError] = []


class CleanupError(S3RedshiftError):
    """Raised when releasing the warehouse connection fails."""

    pass
