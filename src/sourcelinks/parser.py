"""
Source link directive parser.

Parses a single configuration string into a source link. Recognized forms,
in priority order:

- provider shorthand: ``github://org/repo[/revision][#subpath]``
- sub-path wrapper: ``<sub-path>=<directive>``
- malformed provider shorthand (reported with a syntax hint)
- scaladoc ``doc-source-url`` pattern using ``€{FILE_PATH_EXT}``/``€{FILE_LINE}``
- Jinja2 URL template
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePath

from jinja2 import TemplateSyntaxError

from sourcelinks.links import (
    PrefixedSourceLink,
    SourceLink,
    TemplateSourceLink,
    WebBasedSourceLink,
)
from sourcelinks.templates import TemplateRenderer, default_engine

SUB_PATH_PATTERN = re.compile(r"([^=]+)=(.+)")
KNOWN_PROVIDER_PATTERN = re.compile(r"(\w+)://([^/#]+)/([^/#]+)(/[^/#]+)?(#.+)?")
BROKEN_KNOWN_PROVIDER_PATTERN = re.compile(r"(\w+)://.+")
SCALADOC_PATTERN = re.compile(r"€\{(TPL_NAME|FILE_PATH|FILE_EXT|FILE_LINE|FILE_PATH_EXT)\}")

SUPPORTED_SCALADOC_REPLACEMENTS: dict[str, str] = {
    "€{FILE_PATH_EXT}": "{{ path }}",
    "€{FILE_LINE}": "{{ line }}",
}


def github_prefix(organization: str, repository: str) -> str:
    return f"https://github.com/{organization}/{repository}"


def gitlab_prefix(organization: str, repository: str) -> str:
    return f"https://gitlab.com/{organization}/{repository}/-"


KNOWN_PROVIDERS: dict[str, Callable[[str, str], str]] = {
    "github": github_prefix,
    "gitlab": gitlab_prefix,
}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one directive: either a link or an error message."""

    link: SourceLink | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure(message: str) -> ParseResult:
    return ParseResult(error=message)


def _as_template(template: str, engine: TemplateRenderer) -> ParseResult:
    try:
        compiled = engine.parse(template)
    except TemplateSyntaxError as e:
        return _failure(f"Failed to parse template: {e.message}")
    except RecursionError:
        return _failure("Failed to parse template: template is nested too deeply")
    return ParseResult(link=TemplateSourceLink(template, compiled, engine))


def _parse_known_provider(match: re.Match[str], revision: str | None) -> ParseResult:
    name, organization, repository, raw_revision, raw_sub_path = match.groups()

    prefix_for = KNOWN_PROVIDERS.get(name)
    if prefix_for is None:
        return _failure(
            f"'{name}' is not a known provider, please provide full source path template."
        )

    sub_path = f"/{raw_sub_path[1:]}" if raw_sub_path else ""
    path_revision = raw_revision[1:] if raw_revision else revision
    if not path_revision:
        return _failure("No revision provided")

    return ParseResult(
        link=WebBasedSourceLink(prefix_for(organization, repository), path_revision, sub_path)
    )


def _translate_scaladoc(string: str, engine: TemplateRenderer) -> ParseResult:
    patterns = [m.group(0) for m in SCALADOC_PATTERN.finditer(string)]
    unsupported = [p for p in patterns if p not in SUPPORTED_SCALADOC_REPLACEMENTS]
    if unsupported:
        return _failure(
            f"Unsupported patterns from scaladoc format are used: {' '.join(unsupported)}"
        )

    template = string
    for pattern in patterns:
        template = template.replace(pattern, SUPPORTED_SCALADOC_REPLACEMENTS[pattern])
    return _as_template(template, engine)


def parse_source_link(
    string: str,
    revision: str | None = None,
    engine: TemplateRenderer = default_engine,
) -> ParseResult:
    """Parse a source link directive.

    Args:
        string: Directive as configured by the user
        revision: Revision used when a provider shorthand does not name one
        engine: Template engine used for template directives

    Returns:
        ParseResult holding either the parsed link or an error message.
        Errors are never raised.
    """
    provider = KNOWN_PROVIDER_PATTERN.fullmatch(string)
    if provider:
        return _parse_known_provider(provider, revision)

    sub_path = SUB_PATH_PATTERN.fullmatch(string)
    if sub_path:
        prefix, config = sub_path.groups()
        nested = parse_source_link(config, revision, engine)
        if not nested.ok or nested.link is None:
            return nested
        if isinstance(nested.link, PrefixedSourceLink):
            return _failure(
                f"Source path {string} has duplicated subpath setting "
                "(scm template can not contain '=')"
            )
        return ParseResult(link=PrefixedSourceLink(PurePath(prefix), nested.link))

    broken = BROKEN_KNOWN_PROVIDER_PATTERN.fullmatch(string)
    if broken and broken.group(1) in KNOWN_PROVIDERS:
        return _failure(
            "Does not match known provider syntax: `<name>://organization/repository`"
        )

    if SCALADOC_PATTERN.search(string):
        return _translate_scaladoc(string, engine)

    return _as_template(string, engine)
