"""
Shared utilities for CLI commands.
"""

import logging
import sys
from typing import Any

import click

from sourcelinks.config import SourceLinksConfig, load_config

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, level: str = "info") -> None:
    """
    Configure logging for CLI.

    Args:
        verbose: If True, enable DEBUG level logging
        level: Configured log level name, used when not verbose
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_overrides(
    source_links: tuple[str, ...],
    revision: str | None,
    project_root: str | None = None,
    log_level: str | None = None,
) -> dict[str, Any]:
    """Turn command line options into config overrides, skipping unset ones."""
    return {
        "source_links": list(source_links) if source_links else None,
        "revision": revision,
        "project_root": project_root,
        "logging.level": log_level,
    }


def load_cli_config(ctx: click.Context, overrides: dict[str, Any]) -> SourceLinksConfig:
    """Load configuration for a command, exiting with an error message on failure."""
    config_file = ctx.obj.get("config_file") if ctx.obj else None
    try:
        return load_config(config_file, overrides)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
