"""
Configuration management for sourcelinks.

Provides YAML-based configuration with CLI overrides,
configuration hierarchy (CLI > YAML > Defaults), and validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_FILE = "sourcelinks.yaml"


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Log level",
    )


class SourceLinksConfig(BaseModel):
    """Source link configuration."""

    source_links: list[str] = Field(
        default_factory=list,
        description="Source link directives, in priority order",
    )
    revision: str | None = Field(
        default=None,
        description="Revision used by provider shorthands that do not name one",
    )
    project_root: str | None = Field(
        default=None,
        description="Absolute path of the documented project (default: current directory)",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("revision")
    @classmethod
    def validate_revision(cls, v: str | None) -> str | None:
        """Treat a blank revision as not set."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("project_root")
    @classmethod
    def validate_project_root(cls, v: str | None) -> str | None:
        """Expand ``~`` and make the project root absolute."""
        if v is None:
            return None
        return str(Path(v).expanduser().absolute())


def load_yaml(config_file: str) -> dict[str, Any]:
    """
    Load YAML or JSON configuration file.

    Args:
        config_file: Path to YAML or JSON configuration file

    Returns:
        Dictionary with parsed YAML/JSON content

    Raises:
        ValueError: If YAML/JSON is invalid or file format is wrong
    """
    config_path = Path(config_file).expanduser()

    if not config_path.exists():
        return {}

    file_ext = config_path.suffix.lower()
    if file_ext not in [".yaml", ".yml", ".json"]:
        raise ValueError(
            f"Config file must have .yaml, .yml, or .json extension, got: {file_ext}\n"
            f"File: {config_path}"
        )

    try:
        with open(config_path) as f:
            content = f.read()

        if file_ext == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            data = yaml.safe_load(content)

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at the top level: {config_path}")
    return data


def apply_cli_overrides(
    config_dict: dict[str, Any],
    cli_overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Apply CLI argument overrides to config dictionary.

    Keys may be dotted (``logging.level``) to reach nested settings.
    Overrides whose value is None are ignored.

    Args:
        config_dict: Configuration dictionary
        cli_overrides: Dictionary of CLI overrides

    Returns:
        Configuration dictionary with CLI overrides applied
    """
    if cli_overrides is None:
        return config_dict

    for key, value in cli_overrides.items():
        if value is None:
            continue
        if "." in key:
            parts = key.split(".")
            current = config_dict
            for part in parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]
            current[parts[-1]] = value
        else:
            config_dict[key] = value

    return config_dict


def load_config(
    config_file: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> SourceLinksConfig:
    """
    Load configuration with hierarchy: CLI > YAML > Defaults.

    Args:
        config_file: Path to YAML config file (default: ./sourcelinks.yaml)
        cli_overrides: Dictionary of CLI argument overrides

    Returns:
        Validated SourceLinksConfig instance

    Raises:
        ValueError: If configuration is invalid
    """
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE

    config_dict = load_yaml(config_file)
    config_dict = apply_cli_overrides(config_dict, cli_overrides)

    try:
        return SourceLinksConfig(**config_dict)
    except Exception as e:
        raise ValueError(
            f"Configuration validation failed: {e}\n"
            f"Please check your configuration file at {config_file}"
        ) from e
