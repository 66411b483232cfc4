"""
sourcelinks CLI entry point.
"""

import click

from .links import check, resolve, usage


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to custom configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool, log_level: str | None) -> None:
    """sourcelinks - Map source files to repository browser URLs."""
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["log_level"] = log_level


# Register commands
cli.add_command(resolve)
cli.add_command(check)
cli.add_command(usage)


def main() -> None:
    cli()
