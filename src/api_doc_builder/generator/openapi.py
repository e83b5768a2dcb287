"""Generate an OpenAPI 3.x document from a project and its endpoints."""

import json
import logging

import yaml

from api_doc_builder.defaults import (
    BODY_METHODS,
    DEFAULT_BASE_URL,
    DEFAULT_OPENAPI_VERSION,
    DEFAULT_PROJECT_VERSION,
    DEFAULT_RESPONSE_DESCRIPTION,
    DEFAULT_RESPONSE_STATUS,
)
from api_doc_builder.parser.base import ApiEndpoint, Header, Param, Project, RequestBody, Response

logger = logging.getLogger(__name__)

OBJECT_SCHEMA = {"type": "object"}


def generate_openapi(
    project: Project,
    endpoints: list[ApiEndpoint],
    version: str = DEFAULT_OPENAPI_VERSION,
) -> dict:
    """Build an OpenAPI document as a plain dict, ready for JSON serialization.

    Paths and operations keep the order of ``endpoints``; nothing is sorted.
    """
    document: dict = {
        "openapi": version,
        "info": {
            "title": project.name,
            "description": project.description or f"API documentation for {project.name}",
            "version": project.version or DEFAULT_PROJECT_VERSION,
            "contact": {"name": "API Support"},
        },
        "servers": [
            {
                "url": project.base_url or DEFAULT_BASE_URL,
                "description": "Production server",
            }
        ],
        "paths": {},
        "components": {"schemas": {}, "securitySchemes": {}},
        "tags": [{"name": tag} for tag in _unique_tags(endpoints)],
    }

    for endpoint in endpoints:
        path_item = document["paths"].setdefault(endpoint.path, {})
        path_item[endpoint.method.lower()] = _build_operation(endpoint)

    logger.debug(
        "Built OpenAPI %s document with %d paths for %s",
        version, len(document["paths"]), project.name,
    )
    return document


def openapi_to_json(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def openapi_to_yaml(document: dict) -> str:
    return yaml.dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)


def _unique_tags(endpoints: list[ApiEndpoint]) -> list[str]:
    tags: dict[str, None] = {}
    for endpoint in endpoints:
        for tag in endpoint.tags:
            tags.setdefault(tag, None)
    return list(tags)


def _build_operation(endpoint: ApiEndpoint) -> dict:
    operation: dict = {"summary": endpoint.summary}
    if endpoint.description:
        operation["description"] = endpoint.description
    operation["operationId"] = endpoint.resolved_operation_id()
    operation["tags"] = list(endpoint.tags)
    operation["deprecated"] = endpoint.deprecated
    operation["parameters"] = [_build_parameter(p) for p in endpoint.parameters]

    if endpoint.request_body is not None and endpoint.method in BODY_METHODS:
        operation["requestBody"] = _build_request_body(endpoint.request_body)

    operation["responses"] = _build_responses(endpoint.responses)

    if endpoint.security:
        operation["security"] = [{name: []} for name in endpoint.security]

    return operation


def _build_parameter(param: Param) -> dict:
    result: dict = {
        "name": param.name,
        "in": param.location,
        "required": param.required,
    }
    if param.description:
        result["description"] = param.description
    schema: dict = {"type": param.param_type}
    if param.example is not None:
        schema["example"] = param.example
    result["schema"] = schema
    return result


def _build_request_body(body: RequestBody) -> dict:
    result: dict = {}
    if body.description:
        result["description"] = body.description
    result["required"] = body.required
    result["content"] = {body.content_type: _media_type(body.schema_, body.example)}
    return result


def _build_responses(responses: list[Response]) -> dict:
    if not responses:
        return {str(DEFAULT_RESPONSE_STATUS): {"description": DEFAULT_RESPONSE_DESCRIPTION}}

    result = {}
    for response in responses:
        entry: dict = {"description": response.description}
        if response.headers:
            entry["headers"] = {
                name: _build_header(header) for name, header in response.headers.items()
            }
        entry["content"] = {"application/json": _media_type(response.schema_, response.example)}
        result[str(response.status_code)] = entry
    return result


def _build_header(header: Header) -> dict:
    result: dict = {}
    if header.description:
        result["description"] = header.description
    schema: dict = {"type": header.header_type}
    if header.example is not None:
        schema["example"] = header.example
    result["schema"] = schema
    return result


def _media_type(schema: dict | None, example) -> dict:
    media: dict = {"schema": schema or dict(OBJECT_SCHEMA)}
    if example is not None:
        media["example"] = example
    return media
