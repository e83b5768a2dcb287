"""Generate Markdown documentation grouped by tag."""

import json
import logging
from typing import Any

from api_doc_builder.defaults import (
    BODY_METHODS,
    DEFAULT_BASE_URL,
    DEFAULT_METHOD_EMOJI,
    DEFAULT_PROJECT_VERSION,
    METHOD_EMOJI,
)
from api_doc_builder.generator.grouping import endpoint_anchor, group_by_tag, tag_anchor
from api_doc_builder.parser.base import ApiEndpoint, Project

logger = logging.getLogger(__name__)

DEPRECATION_NOTE = (
    "> ⚠️ **Deprecated:** This endpoint is deprecated and may be removed in future versions."
)


def generate_markdown(project: Project, endpoints: list[ApiEndpoint]) -> str:
    """Build a single Markdown document for the project.

    The table of contents and the body are rendered from the same grouping,
    so every TOC link points at a section that exists.
    """
    groups = group_by_tag(endpoints)

    lines = [f"# {project.name}", ""]
    if project.description:
        lines += [project.description, ""]
    lines.append(f"**Version:** {project.version or DEFAULT_PROJECT_VERSION}")
    lines += [f"**Base URL:** {project.base_url or DEFAULT_BASE_URL}", ""]

    lines += ["## Table of Contents", ""]
    for tag, tagged in groups.items():
        lines.append(f"- [{tag}](#{tag_anchor(tag)})")
        for endpoint in tagged:
            lines.append(
                f"  - [{endpoint.method} {endpoint.path}](#{endpoint_anchor(endpoint)})"
            )
    lines.append("")

    for tag, tagged in groups.items():
        lines += [f"## {tag}", ""]
        for endpoint in tagged:
            lines += _endpoint_lines(endpoint)

    logger.debug("Rendered Markdown for %d endpoints in %d groups", len(endpoints), len(groups))
    return "\n".join(lines)


def _endpoint_lines(endpoint: ApiEndpoint) -> list[str]:
    emoji = METHOD_EMOJI.get(endpoint.method, DEFAULT_METHOD_EMOJI)
    lines = [f"### {emoji} {endpoint.method} {endpoint.path}", ""]
    lines += [endpoint.summary, ""]

    if endpoint.description:
        lines += [endpoint.description, ""]

    if endpoint.parameters:
        lines += [
            "#### Parameters",
            "",
            "| Name | Type | In | Required | Description |",
            "|------|------|----|---------|--------------|",
        ]
        for param in endpoint.parameters:
            required = "Yes" if param.required else "No"
            lines.append(
                f"| {_cell(param.name)} | {param.param_type} | {param.location} "
                f"| {required} | {_cell(param.description) or '-'} |"
            )
        lines.append("")

    body = endpoint.request_body
    if body is not None and endpoint.method in BODY_METHODS:
        lines += ["#### Request Body", "", f"**Content Type:** {body.content_type}", ""]
        if body.example is not None:
            lines += ["**Example:**", ""]
            lines += _json_block(body.example)

    if endpoint.responses:
        lines += ["#### Responses", ""]
        for response in endpoint.responses:
            lines += [f"**{response.status_code}** - {response.description}", ""]
            if response.example is not None:
                lines += _json_block(response.example)

    if endpoint.deprecated:
        lines += [DEPRECATION_NOTE, ""]

    lines += ["---", ""]
    return lines


def _json_block(value: Any) -> list[str]:
    return ["```json", json.dumps(value, indent=2, ensure_ascii=False), "```", ""]


def _cell(text: str) -> str:
    # A bare pipe would end the table cell early.
    return text.replace("|", "\\|")
