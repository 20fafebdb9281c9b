"""S3 to Redshift action: validate the configuration, build the copy command, run it."""

import logging

from s3redshift.core.command import build_copy_command, redact_command
from s3redshift.core.exceptions import ConfigError
from s3redshift.core.executor import Executor, Warehouse
from s3redshift.core.validation import (
    FailureCollector,
    ValidationFailure,
    check_keys_and_role,
)
from s3redshift.models.load_config import LoadConfig

logger = logging.getLogger(__name__)


class S3ToRedshiftAction:
    """Loads the data from an S3 path into a Redshift table.

    ``configure`` runs at configure time on a configuration whose templates
    may still be deferred and never touches the network. ``run`` expects the
    rendered configuration, validates it again and stops before connecting
    if anything is wrong.
    """

    DEFAULT_NAME = "s3_to_redshift"

    def __init__(
        self,
        config: LoadConfig,
        warehouse: Warehouse | None = None,
        name: str = DEFAULT_NAME,
    ):
        self.config = config
        self.name = name
        self._executor = Executor(warehouse)

    def _collect_failures(self) -> FailureCollector:
        collector = FailureCollector()
        check_keys_and_role(self.config, collector)
        for failure in collector.failures:
            logger.warning(str(failure), extra={"action_name": self.name})
        return collector

    def configure(self) -> list[ValidationFailure]:
        """Validate the configuration and return the failures found."""
        return self._collect_failures().failures

    def build_command(self) -> str:
        return build_copy_command(self.config)

    def run(self) -> None:
        """Validate, build and execute the copy command.

        Raises:
            ValidationError: If the credential configuration is invalid.
            ConfigError: If some fields are still deferred.
            DriverUnavailableError, ExecutionError, CleanupError: From the executor.
        """
        self._collect_failures().get_or_raise()

        deferred = self.config.deferred_fields()
        if deferred:
            raise ConfigError(
                "Configuration has unresolved templates",
                context={"fields": ", ".join(deferred)},
            )

        command = self.build_command()
        logger.debug(
            f"Built copy command: {redact_command(command)}",
            extra={"action_name": self.name, "table": self.config.table_name.value},
        )
        self._executor.execute(self.config.connection_params(), command)
        logger.info(
            "Loaded data from S3 into Redshift",
            extra={"action_name": self.name, "table": self.config.table_name.value},
        )
