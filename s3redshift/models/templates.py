"""Template rendering for action configuration values.

Supported expressions:

- ``{{ env_var('VAR_NAME') }}`` - environment variable lookup
- ``{{ var('VAR_NAME') }}`` - CLI variable lookup
- ``{{ action.name }}`` - action metadata
- ``${VAR_NAME}`` - macro, looked up in CLI variables first, then the environment

A value holding any of these is *deferred* until it is rendered.
"""

import os
import re
from typing import Any, Dict

from s3redshift.core.exceptions import ConfigError

TEMPLATE_PATTERN = re.compile(r"\{\{\s*([^}]+)\s*\}\}")
MACRO_PATTERN = re.compile(r"\$\{\s*([\w.-]+)\s*\}")
_FUNC_PATTERN = re.compile(r"(\w+)\(['\"]([^'\"]+)['\"]\)")
# Single pass: substituted text is never rescanned.
_TOKEN_PATTERN = re.compile(f"{TEMPLATE_PATTERN.pattern}|{MACRO_PATTERN.pattern}")


def contains_template(text: str) -> bool:
    """Return True if ``text`` holds an unresolved template or macro."""
    return bool(TEMPLATE_PATTERN.search(text) or MACRO_PATTERN.search(text))


def render_templates(
    config_dict: Dict[str, Any],
    cli_vars: Dict[str, str] | None = None,
    action_name: str = "",
) -> Dict[str, Any]:
    """
    Render templates and macros in a configuration dictionary.

    Args:
        config_dict: Configuration dictionary (may contain template expressions)
        cli_vars: Variables passed via CLI (e.g., --vars key=value)
        action_name: Name exposed to templates as ``action.name``

    Returns:
        Configuration dictionary with every template rendered

    Raises:
        ConfigError: If a referenced variable is missing or an expression is invalid
    """
    variables = cli_vars or {}
    context = {
        "action": {"name": action_name},
        "env_var": _get_env_var,
        "var": lambda key: _get_cli_var(key, variables),
    }
    return {
        key: _render_value(value, context, variables)
        for key, value in config_dict.items()
    }


def _get_env_var(key: str) -> str:
    """Get environment variable or raise error if not found."""
    value = os.environ.get(key)
    if value is None:
        raise ConfigError(
            f"Environment variable '{key}' not found",
            context={"key": key},
        )
    return value


def _get_cli_var(key: str, cli_vars: Dict[str, str]) -> str:
    """Get CLI variable or raise error if not found."""
    if key not in cli_vars:
        raise ConfigError(
            f"CLI variable '{key}' not provided",
            context={"key": key, "available": list(cli_vars.keys())},
        )
    return cli_vars[key]


def _get_macro(key: str, cli_vars: Dict[str, str]) -> str:
    if key in cli_vars:
        return cli_vars[key]
    value = os.environ.get(key)
    if value is None:
        raise ConfigError(
            f"Macro '{key}' could not be resolved",
            context={"key": key, "available": list(cli_vars.keys())},
        )
    return value


def _render_value(value: Any, context: Dict[str, Any], cli_vars: Dict[str, str]) -> Any:
    """Render template in value based on type."""
    if isinstance(value, dict):
        return {k: _render_value(v, context, cli_vars) for k, v in value.items()}
    elif isinstance(value, list):
        return [_render_value(item, context, cli_vars) for item in value]
    elif isinstance(value, str):
        return _render_string(value, context, cli_vars)
    else:
        return value


def _render_string(text: str, context: Dict[str, Any], cli_vars: Dict[str, str]) -> str:
    def replace(match):
        if match.group(2) is not None:
            return _get_macro(match.group(2), cli_vars)
        expr = match.group(1).strip()
        try:
            func_match = _FUNC_PATTERN.match(expr)
            if func_match:
                func_name = func_match.group(1)
                arg = func_match.group(2)
                if func_name in context and callable(context[func_name]):
                    return str(context[func_name](arg))
                raise ConfigError(
                    f"Unknown function: {func_name}",
                    context={"expression": expr, "available": list(context.keys())},
                )

            # Dot-notation: action.name
            result = context
            for part in expr.split("."):
                result = result[part]
            return str(result)
        except (KeyError, TypeError) as e:
            raise ConfigError(
                f"Template rendering failed: {expr}",
                context={"expression": expr, "error": str(e)},
            ) from e

    return _TOKEN_PATTERN.sub(replace, text)
