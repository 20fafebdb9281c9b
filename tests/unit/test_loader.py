"""Tests for the action configuration loader."""

import pytest

from s3redshift.core.exceptions import ConfigError
from s3redshift.models.loader import (
    DEFAULT_ACTION_NAME,
    load_config,
    load_config_file,
    read_config_file,
)

NAMED_CONFIG = """
name: load_events
action:
  iamRole: "{{ env_var('REDSHIFT_ROLE') }}"
  s3DataPath: s3://test-bucket/events/${date}/
  s3Region: us-west-2
  clusterDbUrl: jdbc:redshift://x.y.us-west-2.redshift.amazonaws.com:5439/dev
  masterUser: admin
  masterPassword: secret
  tableName: events
  listOfColumns: id,name
"""

FLAT_CONFIG = """
accessKey: AK
secretAccessKey: SK
s3DataPath: s3://b/p
clusterDbUrl: jdbc:redshift://x.y.us-west-2.redshift.amazonaws.com:5439/dev
masterUser: admin
masterPassword: secret
tableName: t
"""


class TestReadConfigFile:
    """Tests for read_config_file."""

    def test_named_action(self, temp_dir):
        """Test reading a config nested under 'action'."""
        path = temp_dir / "events.yaml"
        path.write_text(NAMED_CONFIG)

        name, data = read_config_file(str(path))

        assert name == "load_events"
        assert data["tableName"] == "events"

    def test_flat_config(self, temp_dir):
        """Test reading a top-level config."""
        path = temp_dir / "flat.yaml"
        path.write_text(FLAT_CONFIG)

        name, data = read_config_file(str(path))

        assert name == DEFAULT_ACTION_NAME
        assert data["accessKey"] == "AK"

    def test_missing_file(self, temp_dir):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            read_config_file(str(temp_dir / "missing.yaml"))
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, temp_dir):
        """Test that invalid YAML raises ConfigError."""
        path = temp_dir / "bad.yaml"
        path.write_text("tableName: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            read_config_file(str(path))
        assert "Invalid YAML" in str(exc_info.value)

    def test_not_a_dictionary(self, temp_dir):
        """Test that a YAML list is rejected."""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            read_config_file(str(path))

    def test_action_not_a_dictionary(self, temp_dir):
        """Test that a scalar 'action' is rejected."""
        path = temp_dir / "scalar.yaml"
        path.write_text("name: x\naction: nope\n")
        with pytest.raises(ConfigError):
            read_config_file(str(path))


class TestLoadConfig:
    """Tests for load_config and load_config_file."""

    def test_render_false_keeps_templates_deferred(self, temp_dir):
        """Test that unrendered configs keep templated fields deferred."""
        path = temp_dir / "events.yaml"
        path.write_text(NAMED_CONFIG)

        name, config = load_config_file(str(path), render=False)

        assert name == "load_events"
        assert config.iam_role.is_deferred
        assert config.s3_data_path.is_deferred
        assert config.deferred_fields() == ["iamRole", "s3DataPath"]

    def test_render_resolves_templates(self, temp_dir, monkeypatch):
        """Test that rendering resolves env vars and macros."""
        monkeypatch.setenv("REDSHIFT_ROLE", "arn:aws:iam::1:role/copy")
        path = temp_dir / "events.yaml"
        path.write_text(NAMED_CONFIG)

        _, config = load_config_file(str(path), cli_vars={"date": "2017-02-22"})

        assert config.iam_role.value == "arn:aws:iam::1:role/copy"
        assert config.s3_data_path.value == "s3://test-bucket/events/2017-02-22/"
        assert config.is_resolved()

    def test_render_failure_includes_path(self, temp_dir, monkeypatch):
        """Test that rendering errors carry the file path."""
        monkeypatch.delenv("REDSHIFT_ROLE", raising=False)
        path = temp_dir / "events.yaml"
        path.write_text(NAMED_CONFIG)

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(str(path), cli_vars={"date": "2017-02-22"})

        assert exc_info.value.context["path"] == str(path)

    def test_missing_required_key(self, base_config):
        """Test that schema errors are wrapped in ConfigError."""
        del base_config["s3DataPath"]
        with pytest.raises(ConfigError) as exc_info:
            load_config(base_config)
        assert "Invalid action configuration" in str(exc_info.value)

    def test_unknown_key(self, role_config):
        """Test that unknown keys are reported."""
        with pytest.raises(ConfigError):
            load_config({**role_config, "format": "csv"})
