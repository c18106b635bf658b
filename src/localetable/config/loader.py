"""
Configuration loader with deep merge.

Precedence order (lowest to highest):
1. Defaults (defined in the Pydantic schemas)
2. YAML file
3. Environment variables
4. CLI arguments

The merge is recursive so that every key survives at every level.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import AppConfig


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursive dictionary merge.

    Args:
        base: Base dictionary
        override: Dictionary whose values win over base

    Returns:
        New merged dictionary. Override wins on leaf conflicts.

    Example:
        >>> base = {"a": {"b": 1, "c": 2}, "d": 3}
        >>> override = {"a": {"b": 99}, "e": 4}
        >>> deep_merge(base, override)
        {"a": {"b": 99, "c": 2}, "d": 3, "e": 4}
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file, or None to skip

    Returns:
        Dictionary with the configuration, or an empty dict if there is no file
    """
    if not config_path:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
        return data if data else {}


def load_env_overrides() -> dict[str, Any]:
    """Load overrides from environment variables.

    Supported variables:
        LOCALETABLE_DEFAULT_LOCALE: overrides loader.default_locale
        LOCALETABLE_TABLE: overrides loader.table
        LOCALETABLE_KEYS: overrides loader.keys
        LOCALETABLE_LOG_LEVEL: overrides logging.level

    Returns:
        Dictionary with the overrides found in the environment
    """
    overrides: dict[str, Any] = {}

    if default_locale := os.environ.get("LOCALETABLE_DEFAULT_LOCALE"):
        overrides.setdefault("loader", {})["default_locale"] = default_locale

    if table := os.environ.get("LOCALETABLE_TABLE"):
        overrides.setdefault("loader", {})["table"] = table

    if keys := os.environ.get("LOCALETABLE_KEYS"):
        overrides.setdefault("loader", {})["keys"] = keys

    if log_level := os.environ.get("LOCALETABLE_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = log_level.lower()

    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Apply overrides coming from CLI arguments.

    Args:
        config_dict: Base configuration (already merged with YAML and env)
        cli_args: Dictionary with the CLI arguments

    Returns:
        Configuration with CLI overrides applied
    """
    overrides: dict[str, Any] = {}

    if cli_args.get("default_locale"):
        overrides.setdefault("loader", {})["default_locale"] = cli_args["default_locale"]

    if cli_args.get("table"):
        overrides.setdefault("loader", {})["table"] = cli_args["table"]

    if cli_args.get("keys"):
        overrides.setdefault("loader", {})["keys"] = cli_args["keys"]

    if cli_args.get("log_file"):
        overrides.setdefault("logging", {})["file"] = cli_args["log_file"]

    if cli_args.get("verbose") is not None:
        overrides.setdefault("logging", {})["verbose"] = cli_args["verbose"]

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> AppConfig:
    """Load and validate the complete application configuration.

    Args:
        config_path: Path to the YAML configuration file
        cli_args: Dictionary with the CLI arguments

    Returns:
        Validated, complete AppConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        ValidationError: If the final configuration is not valid
    """
    cli_args = cli_args or {}

    yaml_config = load_yaml_config(config_path)
    merged = deep_merge(yaml_config, load_env_overrides())
    merged = apply_cli_overrides(merged, cli_args)

    # Pydantic fills in every default not given above
    return AppConfig(**merged)
