"""
Source link CLI commands.

- resolve: Print the URL of one or more source files
- check: Validate source link directives
- usage: Describe the accepted directive formats
"""

import json
import sys
from typing import cast

import click

from sourcelinks.links import OPERATIONS, Operation
from sourcelinks.parser import parse_source_link
from sourcelinks.source_links import USAGE, load_from_config

from .utils import build_overrides, load_cli_config, setup_logging

source_link_option = click.option(
    "--source-link",
    "-s",
    "source_links",
    multiple=True,
    help="Source link directive (repeatable, overrides the config file)",
)
revision_option = click.option(
    "--revision",
    "-r",
    help="Revision used by provider shorthands that do not name one",
)
json_option = click.option("--json", "json_format", is_flag=True, help="Output as JSON")


@click.command("resolve")
@click.argument("paths", nargs=-1, required=True)
@source_link_option
@revision_option
@click.option(
    "--project-root",
    type=click.Path(file_okay=False),
    help="Project root directory (default: current directory)",
)
@click.option("--line", "-l", type=click.IntRange(min=1), help="One-based line number")
@click.option(
    "--operation",
    "-o",
    type=click.Choice(OPERATIONS),
    default="view",
    show_default=True,
    help="Link to the viewable or the editable source",
)
@json_option
@click.pass_context
def resolve(
    ctx: click.Context,
    paths: tuple[str, ...],
    source_links: tuple[str, ...],
    revision: str | None,
    project_root: str | None,
    line: int | None,
    operation: str,
    json_format: bool,
) -> None:
    """Print the source link URL for each PATH.

    Examples:

        sourcelinks resolve -s github://org/repo/main src/app.py

        sourcelinks resolve -s 'docs=gitlab://org/repo' -r v1.0 docs/index.md -l 12 -o edit
    """
    config = load_cli_config(
        ctx, build_overrides(source_links, revision, project_root, ctx.obj.get("log_level"))
    )
    setup_logging(ctx.obj.get("verbose", False), config.logging.level)

    links = load_from_config(config)
    urls = [(path, links.path_to(path, line, cast(Operation, operation))) for path in paths]

    if json_format:
        click.echo(json.dumps([{"path": path, "url": url} for path, url in urls], indent=2))
    else:
        for path, url in urls:
            if url is None:
                click.echo(f"No source link for {path}", err=True)
            else:
                click.echo(url)

    if any(url is None for _, url in urls):
        sys.exit(1)


@click.command("check")
@source_link_option
@revision_option
@json_option
@click.pass_context
def check(
    ctx: click.Context,
    source_links: tuple[str, ...],
    revision: str | None,
    json_format: bool,
) -> None:
    """Validate source link directives."""
    config = load_cli_config(
        ctx, build_overrides(source_links, revision, log_level=ctx.obj.get("log_level"))
    )
    setup_logging(ctx.obj.get("verbose", False), config.logging.level)

    results = [
        (directive, parse_source_link(directive, config.revision))
        for directive in config.source_links
    ]

    if json_format:
        report = [
            {"directive": directive, "valid": result.ok, "error": result.error}
            for directive, result in results
        ]
        click.echo(json.dumps(report, indent=2))
    elif not results:
        click.echo("No source links configured.")
    else:
        for directive, result in results:
            if result.ok:
                click.echo(f"OK     {directive}")
            else:
                click.echo(f"ERROR  {directive}: {result.error}")

    if not all(result.ok for _, result in results):
        sys.exit(1)


@click.command("usage")
def usage() -> None:
    """Describe the accepted source link formats."""
    click.echo(USAGE)
