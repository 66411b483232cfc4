"""
Source link resolution.

SourceLinks holds the ordered list of parsed source links together with the
project root and resolves file paths to URLs. The first link whose sub-path
matches the file wins.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Protocol

from jinja2 import TemplateError

from sourcelinks.links import Operation, SourceLink, render_link
from sourcelinks.parser import parse_source_link

if TYPE_CHECKING:
    from sourcelinks.config import SourceLinksConfig

logger = logging.getLogger(__name__)

USAGE = """Source links provide a mapping between files in documentation and a code repository.

Accepted formats:
<sub-path>=<source-link>
<source-link>

where <source-link> is one of the following:
 - `github://<organization>/<repository>[/revision][#subpath]`
     will match https://github.com/$organization/$repository/[blob|edit]/$revision[/$subpath]/$filePath[#L$lineNumber]
     when revision is not provided then requires revision to be specified with --revision
 - `gitlab://<organization>/<repository>[/revision][#subpath]`
     will match https://gitlab.com/$organization/$repository/-/[blob|edit]/$revision[/$subpath]/$filePath[#L$lineNumber]
     when revision is not provided then requires revision to be specified with --revision
 - <scaladoc-template>
 - <template>

<scaladoc-template> is the format of the scaladoc `doc-source-url` parameter.
NOTE: only the €{FILE_PATH_EXT} and €{FILE_LINE} patterns are supported

<template> is a Jinja2 template string that accepts the following arguments:
 - `operation`: either "view" or "edit"
 - `path`: relative path of the file to provide a link to
 - `line`: optional parameter that specifies the line number within the file


A template can be restricted to the subset of sources below the path prefix
given by `<sub-path>`. In that case paths used in the template are relative
to `<sub-path>`."""


@dataclass(frozen=True)
class SourceRecord:
    """Location of a documented entity in the sources.

    Attributes:
        path: Source file path, absolute or project-relative
        line_number: Zero-based line number, if known
    """

    path: str
    line_number: int | None = None


class Documentable(Protocol):
    """Anything documented that may point back to its source file."""

    @property
    def sources(self) -> SourceRecord | None: ...


@dataclass(frozen=True)
class SourceLinks:
    """Ordered source links plus the project root they are relative to."""

    links: tuple[SourceLink, ...]
    project_root: PurePath = field(default_factory=Path.cwd)

    def path_to(
        self,
        raw_path: str | os.PathLike[str],
        line: int | None = None,
        operation: Operation = "view",
    ) -> str | None:
        """Resolve a source file to a URL.

        Args:
            raw_path: Absolute path or path relative to the project root
            line: Optional one-based line number
            operation: "view" or "edit"

        Returns:
            The URL, or None if the file is outside the project, no link
            applies to it or its template fails to render.
        """
        path = PurePath(raw_path)
        if path.is_absolute():
            if not path.is_relative_to(self.project_root):
                return None
            path = path.relative_to(self.project_root)

        for link in self.links:
            if link.path is None or path.is_relative_to(link.path):
                try:
                    return render_link(link, path, operation, line)
                except (TemplateError, TypeError) as e:
                    logger.warning(f"Failed to render source link for {path}: {e}")
                    return None
        return None

    def path_to_member(self, member: Documentable) -> str | None:
        """Resolve the source location of a documented entity."""
        source = member.sources
        if source is None:
            return None
        line = source.line_number + 1 if source.line_number is not None else None
        return self.path_to(source.path, line)


def load(
    configs: Iterable[str],
    revision: str | None,
    project_root: str | os.PathLike[str],
    report: Callable[[str], None] | None = None,
) -> SourceLinks:
    """Parse source link directives into a SourceLinks instance.

    Invalid directives are skipped. All of their errors are reported once,
    together with the usage text, through ``report``.

    Args:
        configs: Directives in priority order
        revision: Revision for provider shorthands that do not name one
        project_root: Absolute path of the documented project
        report: Callback receiving the warning text (default: logger.warning)

    Returns:
        SourceLinks with the valid directives, in configuration order.
    """
    if report is None:
        report = logger.warning

    links: list[SourceLink] = []
    errors: list[str] = []
    for config in configs:
        result = parse_source_link(config, revision)
        if result.link is not None:
            links.append(result.link)
        else:
            errors.append(f"'{config}': {result.error}")

    if errors:
        error_lines = "\n".join(errors)
        report(f"Following templates have an invalid format:\n{error_lines}\n\n{USAGE}\n")

    logger.debug(f"Loaded {len(links)} source link(s) for {project_root}")
    return SourceLinks(tuple(links), PurePath(project_root))


def load_from_config(
    config: SourceLinksConfig,
    report: Callable[[str], None] | None = None,
) -> SourceLinks:
    """Load source links from configuration, defaulting the root to the cwd."""
    project_root = config.project_root or os.getcwd()
    return load(config.source_links, config.revision, project_root, report)
