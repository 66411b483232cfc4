import logging
from typing import Any, Protocol, runtime_checkable

from jinja2 import Environment, Template

logger = logging.getLogger(__name__)


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for source link template rendering.

    Any object with compatible ``parse`` and ``render`` methods satisfies this
    protocol, so callers are not coupled to the concrete
    :class:`TemplateEngine` implementation. ``parse`` must report malformed
    templates by raising :class:`jinja2.TemplateSyntaxError`.
    """

    def parse(self, template_str: str) -> Template: ...

    def render(self, template: Template, context: dict[str, Any]) -> str: ...


class TemplateEngine:
    """
    Engine for parsing and rendering Jinja2 URL templates.
    """

    def __init__(self) -> None:
        self.env = Environment(
            # URLs are not HTML, escaping would mangle query strings
            autoescape=False,
        )

    def parse(self, template_str: str) -> Template:
        """
        Compile a template string.

        Raises:
            jinja2.TemplateSyntaxError: If the template is malformed.
        """
        return self.env.from_string(template_str)

    def render(self, template: Template, context: dict[str, Any]) -> str:
        """
        Render a compiled template with the given context.
        """
        try:
            return str(template.render(**context))
        except Exception as e:
            logger.error(f"Error rendering source link template: {e}", exc_info=True)
            raise


default_engine = TemplateEngine()
