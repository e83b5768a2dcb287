"""Export dispatcher: pick a generator by format name and build a downloadable file."""

import re

from pydantic import BaseModel

from api_doc_builder.defaults import DEFAULT_OPENAPI_VERSION, DEFAULT_THEME
from api_doc_builder.errors import ValidationError
from api_doc_builder.generator.html import generate_html
from api_doc_builder.generator.markdown import generate_markdown
from api_doc_builder.generator.openapi import generate_openapi, openapi_to_json, openapi_to_yaml
from api_doc_builder.parser.base import ApiEndpoint, Project

EXPORT_FORMATS = ("openapi", "swagger", "json", "yaml", "markdown", "md", "html")

_WHITESPACE_RE = re.compile(r"\s+")


class ExportedDocument(BaseModel):
    content: str
    content_type: str
    filename: str


def export_documentation(
    project: Project,
    endpoints: list[ApiEndpoint],
    fmt: str = "openapi",
    theme: str = DEFAULT_THEME,
    openapi_version: str = DEFAULT_OPENAPI_VERSION,
) -> ExportedDocument:
    """Render the project in ``fmt`` with a content type and download filename.

    Endpoints are ordered by their ``order`` field first; ties keep input order.
    """
    ordered = sorted(endpoints, key=lambda e: e.order)
    slug = _WHITESPACE_RE.sub("-", project.name).lower()
    fmt = fmt.lower()

    if fmt in ("openapi", "swagger", "json"):
        document = generate_openapi(project, ordered, version=openapi_version)
        return ExportedDocument(
            content=openapi_to_json(document),
            content_type="application/json",
            filename=f"{slug}-openapi.json",
        )
    if fmt == "yaml":
        document = generate_openapi(project, ordered, version=openapi_version)
        return ExportedDocument(
            content=openapi_to_yaml(document),
            content_type="application/yaml",
            filename=f"{slug}-openapi.yaml",
        )
    if fmt in ("markdown", "md"):
        return ExportedDocument(
            content=generate_markdown(project, ordered),
            content_type="text/markdown",
            filename=f"{slug}-docs.md",
        )
    if fmt == "html":
        return ExportedDocument(
            content=generate_html(project, ordered, theme=theme),
            content_type="text/html",
            filename=f"{slug}-docs.html",
        )
    raise ValidationError("Unsupported export format. Use: openapi, yaml, markdown, or html")
