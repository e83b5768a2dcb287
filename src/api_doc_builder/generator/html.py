"""Generate a self-contained HTML documentation page.

Rendering goes through a Jinja2 template with autoescaping, so summaries,
descriptions and paths supplied by users are always HTML-escaped.
"""

import json
import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from api_doc_builder.defaults import DEFAULT_BASE_URL, DEFAULT_PROJECT_VERSION, DEFAULT_THEME
from api_doc_builder.generator.grouping import endpoint_anchors, group_by_tag
from api_doc_builder.parser.base import ApiEndpoint, Project

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "docs.html.j2"


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "html.j2"]),
    keep_trailing_newline=True,
)
_env.filters["pretty_json"] = _pretty_json


def generate_html(
    project: Project,
    endpoints: list[ApiEndpoint],
    theme: str = DEFAULT_THEME,
) -> str:
    """Render the HTML page for a project.

    ``theme`` is accepted for forward compatibility; only the default styling
    exists, so every value renders the same page.
    """
    if theme != DEFAULT_THEME:
        logger.debug("Theme %r is not implemented, using default styling", theme)

    template = _env.get_template(TEMPLATE_NAME)
    return template.render(
        project=project,
        endpoints=endpoints,
        groups=group_by_tag(endpoints),
        anchors=endpoint_anchors(endpoints),
        version=project.version or DEFAULT_PROJECT_VERSION,
        base_url=project.base_url or DEFAULT_BASE_URL,
    )
