"""
Source link variants.

A source link turns a project-relative file path, an operation and an
optional line number into a URL. There are three kinds:

- PrefixedSourceLink: applies only below a sub-path and strips it before
  delegating to the link it wraps
- TemplateSourceLink: renders a Jinja2 URL template
- WebBasedSourceLink: builds GitHub/GitLab style blob/edit URLs

All of them are rendered through :func:`render_link`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Literal

from jinja2 import Template

from sourcelinks.templates import TemplateRenderer, default_engine

Operation = Literal["view", "edit"]

OPERATIONS: tuple[str, ...] = ("view", "edit")


def path_to_string(path: PurePath | str) -> str:
    """Render a path with forward slashes regardless of the host platform."""
    return str(path).replace("\\", "/")


@dataclass(frozen=True)
class PrefixedSourceLink:
    """Link restricted to files below ``prefix``.

    Attributes:
        prefix: Sub-path the wrapped link applies to
        nested: Link used to render paths relative to ``prefix``
    """

    prefix: PurePath
    nested: SourceLink

    @property
    def path(self) -> PurePath | None:
        return self.prefix


@dataclass(frozen=True)
class TemplateSourceLink:
    """Link rendered from a compiled URL template.

    Attributes:
        source: Template text as configured
        template: Compiled template
        engine: Renderer used to evaluate ``template``
    """

    source: str
    template: Template = field(compare=False, repr=False)
    engine: TemplateRenderer = field(default=default_engine, compare=False, repr=False)

    @property
    def path(self) -> PurePath | None:
        return None


@dataclass(frozen=True)
class WebBasedSourceLink:
    """Link to a repository hosted on a code forge.

    Attributes:
        prefix: Repository URL, e.g. ``https://github.com/org/repo``
        revision: Commit, branch or tag used in generated URLs
        sub_path: Directory inside the repository (``/``-prefixed) or empty
    """

    prefix: str
    revision: str
    sub_path: str = ""

    @property
    def path(self) -> PurePath | None:
        return None


SourceLink = PrefixedSourceLink | TemplateSourceLink | WebBasedSourceLink


def render_link(
    link: SourceLink,
    path: PurePath,
    operation: str,
    line: int | None = None,
) -> str:
    """Render the URL for ``path`` using ``link``.

    Args:
        link: Source link to render with
        path: Path of the file, relative to the project root
        operation: Either "view" or "edit"
        line: Optional one-based line number

    Returns:
        The rendered URL.
    """
    if isinstance(link, PrefixedSourceLink):
        return render_link(link.nested, path.relative_to(link.prefix), operation, line)

    if isinstance(link, TemplateSourceLink):
        context: dict[str, Any] = {"path": path_to_string(path), "operation": operation}
        if line is not None:
            context["line"] = str(line)
        return link.engine.render(link.template, context)

    if isinstance(link, WebBasedSourceLink):
        action = "blob" if operation == "view" else operation
        line_part = f"#L{line}" if line is not None else ""
        return (
            f"{link.prefix}/{action}/{link.revision}{link.sub_path}/"
            f"{path_to_string(path)}{line_part}"
        )

    raise TypeError(f"Unknown source link type: {type(link).__name__}")
