"""Pytest configuration and shared fixtures."""

import logging
import tempfile
from pathlib import Path

import pytest


class FakeConnection:
    """WarehouseConnection double that records what happens to it."""

    def __init__(self, execute_error=None, close_error=None):
        self.execute_error = execute_error
        self.close_error = close_error
        self.executed: list[str] = []
        self.closed = False

    def execute(self, command: str) -> None:
        self.executed.append(command)
        if self.execute_error is not None:
            raise self.execute_error

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeWarehouse:
    """Warehouse double handing out a single FakeConnection."""

    def __init__(self, connection=None, connect_error=None):
        self.connection = connection or FakeConnection()
        self.connect_error = connect_error
        self.params = []

    def connect(self, params):
        self.params.append(params)
        if self.connect_error is not None:
            raise self.connect_error
        return self.connection


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def base_config():
    """Required configuration keys without any credentials."""
    return {
        "s3DataPath": "s3://test-bucket/test/2017-02-22",
        "clusterDbUrl": "jdbc:redshift://x.y.us-east-1.redshift.amazonaws.com:5439/dev",
        "masterUser": "masterUser",
        "masterPassword": "masterPassword",
        "tableName": "redshifttable",
    }


@pytest.fixture
def key_config(base_config):
    """Configuration authenticating with an access key pair."""
    return {
        **base_config,
        "accessKey": "testAccessKey",
        "secretAccessKey": "testSecretAccessKey",
    }


@pytest.fixture
def role_config(base_config):
    """Configuration authenticating with an IAM role."""
    return {
        **base_config,
        "iamRole": "arn:aws:iam::123456789012:role/RedshiftCopy",
    }


@pytest.fixture
def make_warehouse():
    """Factory for FakeWarehouse instances."""

    def _make(execute_error=None, close_error=None, connect_error=None):
        connection = FakeConnection(execute_error=execute_error, close_error=close_error)
        return FakeWarehouse(connection=connection, connect_error=connect_error)

    return _make


@pytest.fixture
def fake_warehouse(make_warehouse):
    """A FakeWarehouse whose connection always succeeds."""
    return make_warehouse()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("s3redshift")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
