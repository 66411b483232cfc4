"""sourcelinks - Map source files to repository browser URLs.

Parses source link directives (GitHub/GitLab shorthands, Jinja2 URL
templates and scaladoc ``doc-source-url`` patterns) and resolves project
files to the URLs where they can be viewed or edited.
"""

from sourcelinks.links import (
    PrefixedSourceLink,
    SourceLink,
    TemplateSourceLink,
    WebBasedSourceLink,
    render_link,
)
from sourcelinks.parser import ParseResult, parse_source_link
from sourcelinks.source_links import USAGE, SourceLinks, SourceRecord, load, load_from_config

__version__ = "0.1.0"

__all__ = [
    "USAGE",
    "ParseResult",
    "PrefixedSourceLink",
    "SourceLink",
    "SourceLinks",
    "SourceRecord",
    "TemplateSourceLink",
    "WebBasedSourceLink",
    "load",
    "load_from_config",
    "parse_source_link",
    "render_link",
]
