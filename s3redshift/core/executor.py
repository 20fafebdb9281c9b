"""Executes the copy command against Redshift.

The executor depends on a ``Warehouse`` capability rather than on a driver
directly, so tests can hand it a fake. ``SQLAlchemyWarehouse`` is the
default implementation.
"""

import logging
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from s3redshift.core.command import redact_command
from s3redshift.core.exceptions import (
    CleanupError,
    DriverUnavailableError,
    ExecutionError,
)
from s3redshift.models.load_config import ConnectionParams

logger = logging.getLogger(__name__)


@runtime_checkable
class WarehouseConnection(Protocol):
    """An open warehouse connection able to run a single statement."""

    def execute(self, command: str) -> None:
        """Run ``command`` as an update statement and commit it."""
        ...

    def close(self) -> None:
        """Release the statement and the connection."""
        ...


@runtime_checkable
class Warehouse(Protocol):
    """Opens connections to the warehouse.

    Raises:
        DriverUnavailableError: If the database driver cannot be loaded.
        SQLAlchemyError: If the connection cannot be established.
    """

    def connect(self, params: ConnectionParams) -> WarehouseConnection: ...


class SQLAlchemyConnection:
    """WarehouseConnection backed by a SQLAlchemy engine and connection."""

    def __init__(self, engine: Engine, connection: Connection):
        self._engine = engine
        self._connection = connection

    def execute(self, command: str) -> None:
        # exec_driver_sql keeps SQLAlchemy from parsing ':name' bind parameters
        # out of paths and secrets.
        with self._connection.begin():
            self._connection.exec_driver_sql(command)

    def close(self) -> None:
        try:
            self._connection.close()
        finally:
            self._engine.dispose()


class SQLAlchemyWarehouse:
    """Warehouse that connects through SQLAlchemy.

    JDBC style URLs (``jdbc:redshift://host:5439/dev``) are rewritten to the
    configured dialect; any other value must be a SQLAlchemy URL.
    """

    JDBC_PREFIX = "jdbc:redshift://"
    DIALECT = "redshift+psycopg2"

    def __init__(
        self,
        dialect: str = DIALECT,
        connect_args: dict[str, Any] | None = None,
    ):
        self._dialect = dialect
        self._connect_args = connect_args or {}

    def build_url(self, params: ConnectionParams) -> URL:
        """Build the SQLAlchemy URL with user and password applied."""
        raw = params.url
        if raw.startswith(self.JDBC_PREFIX):
            raw = f"{self._dialect}://{raw[len(self.JDBC_PREFIX):]}"
        url = make_url(raw)
        password = params.password.get_secret_value()
        return url.set(username=params.user or None, password=password or None)

    def connect(self, params: ConnectionParams) -> SQLAlchemyConnection:
        try:
            url = self.build_url(params)
        except ArgumentError as e:
            raise ExecutionError(
                f"Invalid cluster database URL: {e}",
                context={"url": params.url},
            ) from e

        try:
            engine = create_engine(
                url,
                poolclass=NullPool,
                connect_args=self._connect_args,
            )
        except (NoSuchModuleError, ImportError) as e:
            raise DriverUnavailableError(
                f"Could not load an Amazon Redshift database driver. {e}",
                context={"dialect": url.drivername},
            ) from e

        try:
            connection = engine.connect()
        except SQLAlchemyError:
            engine.dispose()
            raise
        return SQLAlchemyConnection(engine, connection)


class Executor:
    """Runs one command over one connection, releasing it on every path."""

    def __init__(self, warehouse: Warehouse | None = None):
        self._warehouse = warehouse or SQLAlchemyWarehouse()

    def execute(self, params: ConnectionParams, command: str) -> None:
        """Execute ``command`` against the warehouse.

        Raises:
            DriverUnavailableError: If the database driver cannot be loaded.
            ExecutionError: If connecting or executing fails. A failure while
                releasing the connection afterwards is attached to
                ``suppressed`` instead of replacing it.
            CleanupError: If only releasing the connection fails.
        """
        logger.info(
            "Executing copy command",
            extra={"context": {"command": redact_command(command)}},
        )
        try:
            connection = self._warehouse.connect(params)
        except SQLAlchemyError as e:
            raise ExecutionError(
                f"Error while connecting to Redshift. {e}",
                context={"url": params.url},
            ) from e

        try:
            connection.execute(command)
        except SQLAlchemyError as e:
            error = ExecutionError(
                f"Error while loading the data from S3 bucket to Redshift. {e}",
            )
            self._release(connection, error)
            raise error from e
        except Exception as e:
            self._release(connection, e)
            raise
        self._release(connection, None)
        logger.info("Copy command completed")

    def _release(self, connection: WarehouseConnection, primary: Exception | None) -> None:
        try:
            connection.close()
        except Exception as e:
            cleanup = CleanupError(f"Error while closing the connection. {e}")
            if primary is None:
                raise cleanup from e
            cleanup.__cause__ = e
            logger.warning(
                f"{cleanup} (suppressed by an earlier failure: {primary})",
            )
            if isinstance(primary, ExecutionError):
                primary.suppressed.append(cleanup)
