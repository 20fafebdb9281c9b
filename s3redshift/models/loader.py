"""Action configuration loader with YAML parsing and template rendering."""

from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from s3redshift.core.exceptions import ConfigError
from s3redshift.models.load_config import LoadConfig
from s3redshift.models.templates import render_templates

DEFAULT_ACTION_NAME = "s3_to_redshift"


def read_config_file(path: str) -> Tuple[str, Dict[str, Any]]:
    """
    Read an action configuration file.

    The file holds the configuration keys either at the top level or under
    an ``action`` key next to an optional ``name``.

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of (action name, raw configuration dictionary)

    Raises:
        ConfigError: If the file is missing or is not a YAML dictionary
    """
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}", context={"path": str(path)})
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in config file: {e}", context={"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            "Config file must contain a YAML dictionary", context={"path": str(path)}
        )

    if "action" in data:
        name = str(data.get("name") or DEFAULT_ACTION_NAME)
        raw = data["action"]
        if not isinstance(raw, dict):
            raise ConfigError(
                "'action' must be a YAML dictionary", context={"path": str(path)}
            )
        return name, raw
    return DEFAULT_ACTION_NAME, data


def load_config(
    data: Dict[str, Any],
    cli_vars: Dict[str, str] | None = None,
    render: bool = True,
    action_name: str = DEFAULT_ACTION_NAME,
) -> LoadConfig:
    """
    Build a LoadConfig from a raw configuration dictionary.

    Args:
        data: Raw configuration keyed by camelCase names
        cli_vars: Variables passed via CLI (e.g., --vars key=value)
        render: Render templates first. When False, templated values stay
            deferred, as at configure time.
        action_name: Name exposed to templates as ``action.name``

    Raises:
        ConfigError: If rendering fails or the configuration is malformed
    """
    try:
        if render:
            rendered = render_templates(data, cli_vars, action_name=action_name)
            return LoadConfig.from_rendered(rendered)
        return LoadConfig.from_dict(data)
    except PydanticValidationError as e:
        raise ConfigError(
            f"Invalid action configuration: {e}",
            context={"action": action_name},
        ) from e


def load_config_file(
    path: str,
    cli_vars: Dict[str, str] | None = None,
    render: bool = True,
) -> Tuple[str, LoadConfig]:
    """Read ``path`` and build its LoadConfig. Returns (action name, config)."""
    name, data = read_config_file(path)
    try:
        return name, load_config(data, cli_vars, render=render, action_name=name)
    except ConfigError as e:
        e.context.setdefault("path", str(path))
        raise
