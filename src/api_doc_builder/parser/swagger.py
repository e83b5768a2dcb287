"""OpenAPI / Swagger document importer.

Parses OpenAPI 3.x and Swagger 2.0 documents (JSON or YAML) into endpoint
candidates plus the project metadata found in ``info`` and ``servers``.
"""

import json
import logging
import re
from typing import Any, get_args

import pydantic
import yaml
from pydantic import BaseModel

from api_doc_builder.defaults import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_PROJECT_NAME,
    DEFAULT_RESPONSE_DESCRIPTION,
    DEFAULT_RESPONSE_STATUS,
    HTTP_METHODS,
)
from api_doc_builder.errors import InvalidFormatError, MissingPathsError
from api_doc_builder.parser.base import (
    SEMVER_RE,
    ApiEndpoint,
    Header,
    HeaderType,
    Param,
    ParamType,
    ProjectUpdate,
    RequestBody,
    Response,
)

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = {m.lower() for m in HTTP_METHODS}
PARAM_TYPES = set(get_args(ParamType))
HEADER_TYPES = set(get_args(HeaderType))
# Swagger 2.0 form fields are documented as body parameters; cookies are dropped.
PARAM_LOCATIONS = {
    "query": "query",
    "path": "path",
    "header": "header",
    "body": "body",
    "formData": "body",
}

_SHORT_VERSION_RE = re.compile(r"^\d+(\.\d+)?$")
_MAX_REF_HOPS = 10


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates and timestamps as strings."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml(text: str) -> Any:
    """Parse YAML into plain JSON-compatible values."""
    return yaml.load(text, Loader=DocumentLoader)


class OpenApiImport(BaseModel):
    """Result of importing an OpenAPI/Swagger document."""

    title: str
    project_updates: ProjectUpdate
    endpoints: list[ApiEndpoint]


def load_document(text: str) -> dict:
    """Parse raw text as JSON, falling back to YAML."""
    try:
        doc = json.loads(text)
    except json.JSONDecodeError:
        try:
            doc = load_yaml(text)
        except yaml.YAMLError as e:
            raise InvalidFormatError("Invalid JSON or YAML format") from e

    if not isinstance(doc, dict):
        raise InvalidFormatError("Invalid JSON or YAML format")
    return doc


def import_openapi(text: str, project_id: str | None = None) -> OpenApiImport:
    """Parse an OpenAPI/Swagger document into endpoint candidates."""
    doc = load_document(text)

    paths = doc.get("paths")
    if paths is None:
        raise MissingPathsError("Invalid OpenAPI specification: missing paths")
    if not isinstance(paths, dict):
        raise InvalidFormatError("Invalid OpenAPI specification: paths must be a mapping")

    try:
        endpoints = _parse_paths(doc, paths, project_id)
        updates = _project_updates(doc)
    except (AttributeError, TypeError) as e:
        raise InvalidFormatError(f"Failed to parse OpenAPI specification: {e}") from e

    info = doc.get("info") or {}
    logger.info("Parsed %d endpoints from OpenAPI document", len(endpoints))
    return OpenApiImport(
        title=str(info.get("title") or DEFAULT_PROJECT_NAME),
        project_updates=updates,
        endpoints=endpoints,
    )


def _parse_paths(doc: dict, paths: dict, project_id: str | None) -> list[ApiEndpoint]:
    endpoints = []
    for path, path_item in paths.items():
        path_item = _resolve(doc, path_item)
        if not isinstance(path_item, dict):
            continue
        shared_params = path_item.get("parameters") or []

        for method, operation in path_item.items():
            if method not in SUPPORTED_METHODS or not isinstance(operation, dict):
                continue
            endpoint = _parse_operation(doc, str(path), method, operation, shared_params, project_id)
            if endpoint is not None:
                endpoints.append(endpoint)
    return endpoints


def _parse_operation(
    doc: dict,
    path: str,
    method: str,
    operation: dict,
    shared_params: list[dict],
    project_id: str | None,
) -> ApiEndpoint | None:
    method = method.upper()
    try:
        responses = _parse_responses(doc, operation.get("responses") or {})
        if not responses:
            responses = [
                Response(status_code=DEFAULT_RESPONSE_STATUS, description=DEFAULT_RESPONSE_DESCRIPTION)
            ]

        return ApiEndpoint(
            method=method,
            path=path,
            summary=operation.get("summary") or f"{method} {path}",
            description=operation.get("description") or "",
            operation_id=operation.get("operationId"),
            tags=operation.get("tags") or [],
            deprecated=bool(operation.get("deprecated", False)),
            parameters=_parse_parameters(doc, shared_params, operation.get("parameters") or []),
            request_body=_parse_request_body(doc, operation.get("requestBody")),
            responses=responses,
            security=_security_names(operation.get("security") or []),
            project_id=project_id,
        )
    except pydantic.ValidationError as e:
        logger.warning("Skipping operation %s %s: %s", method, path, e)
        return None


def _parse_parameters(doc: dict, shared: list[dict], own: list[dict]) -> list[Param]:
    own = [_resolve(doc, p) for p in own]
    overridden = {(p.get("name"), p.get("in")) for p in own}
    merged = [
        p for p in (_resolve(doc, s) for s in shared)
        if (p.get("name"), p.get("in")) not in overridden
    ]
    merged += own

    result = []
    for p in merged:
        location = PARAM_LOCATIONS.get(p.get("in"))
        if not p.get("name") or location is None:
            logger.debug("Ignoring parameter %r in %r", p.get("name"), p.get("in"))
            continue

        schema = p.get("schema") or {}
        param_type = schema.get("type") or p.get("type")
        if not isinstance(param_type, str) or param_type not in PARAM_TYPES:
            param_type = "string"
        example = p.get("example")
        if example is None:
            example = schema.get("example")

        result.append(
            Param(
                name=p["name"],
                location=location,
                required=bool(p.get("required", False)),
                param_type=param_type,
                description=p.get("description") or "",
                example=example,
            )
        )
    return result


def _parse_request_body(doc: dict, body: dict | None) -> RequestBody | None:
    if not body:
        return None
    body = _resolve(doc, body)
    content = body.get("content") or {}
    content_type = next(iter(content), DEFAULT_CONTENT_TYPE)
    media = content.get(content_type) or {}

    return RequestBody(
        content_type=content_type,
        required=bool(body.get("required", False)),
        description=body.get("description") or "",
        schema=media.get("schema"),
        example=_media_example(media),
    )


def _parse_responses(doc: dict, responses: dict) -> list[Response]:
    result = []
    for status_code, resp in responses.items():
        resp = _resolve(doc, resp) or {}
        schema, example = None, None

        content = resp.get("content")
        if content:
            media = content.get(next(iter(content))) or {}
            schema, example = media.get("schema"), _media_example(media)
        elif "schema" in resp or "examples" in resp:
            # Swagger 2.0 keeps schema and examples on the response itself.
            schema = resp.get("schema")
            examples = resp.get("examples") or {}
            example = next(iter(examples.values()), None)

        result.append(
            Response(
                status_code=_status_code(status_code),
                description=resp.get("description") or "",
                headers=_parse_headers(doc, resp.get("headers") or {}),
                schema=schema,
                example=example,
            )
        )
    return result


def _parse_headers(doc: dict, headers: dict) -> dict[str, Header]:
    result = {}
    for name, header in headers.items():
        header = _resolve(doc, header) or {}
        schema = header.get("schema") or {}
        header_type = schema.get("type") or header.get("type")
        if not isinstance(header_type, str) or header_type not in HEADER_TYPES:
            header_type = "string"
        example = header.get("example")
        if example is None:
            example = schema.get("example")
        result[str(name)] = Header(
            header_type=header_type,
            description=header.get("description") or "",
            example=example,
        )
    return result


def _status_code(key: Any) -> int:
    """Numeric status keys map to themselves; ``default`` and ``2XX`` map to 200."""
    text = str(key)
    if text.isdigit() and 100 <= int(text) <= 599:
        return int(text)
    return DEFAULT_RESPONSE_STATUS


def _media_example(media: dict) -> Any:
    example = media.get("example")
    if example is None:
        default = (media.get("examples") or {}).get("default") or {}
        example = default.get("value")
    return example


def _security_names(requirements: list[dict]) -> list[str]:
    names: list[str] = []
    for requirement in requirements:
        for name in requirement:
            if name not in names:
                names.append(name)
    return names


def _project_updates(doc: dict) -> ProjectUpdate:
    info = doc.get("info") or {}
    return ProjectUpdate(
        name=_text(info.get("title")),
        description=_text(info.get("description")),
        version=_normalize_version(info.get("version")),
        base_url=_base_url(doc),
    )


def _base_url(doc: dict) -> str | None:
    servers = doc.get("servers") or []
    if servers and isinstance(servers[0], dict) and servers[0].get("url"):
        return str(servers[0]["url"])

    host = doc.get("host")
    if host:
        scheme = (doc.get("schemes") or ["https"])[0]
        return f"{scheme}://{host}{doc.get('basePath', '')}".rstrip("/")
    return None


def _normalize_version(value: Any) -> str | None:
    """Coerce ``info.version`` to ``x.y.z``; ``2`` and ``1.4`` are padded with zeros."""
    if value is None:
        return None
    text = str(value).strip().removeprefix("v")
    if SEMVER_RE.match(text):
        return text
    if _SHORT_VERSION_RE.match(text):
        parts = text.split(".")
        return ".".join(parts + ["0"] * (3 - len(parts)))
    logger.warning("Ignoring non-semantic version %r from OpenAPI info", value)
    return None


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _resolve(doc: dict, node: Any) -> Any:
    """Follow local ``$ref`` pointers such as ``#/components/parameters/Limit``."""
    for _ in range(_MAX_REF_HOPS):
        if not isinstance(node, dict):
            return node
        ref = node.get("$ref")
        if not isinstance(ref, str) or not ref.startswith("#/"):
            return node
        target: Any = doc
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or part not in target:
                logger.debug("Unresolvable reference %s", ref)
                return node
            target = target[part]
        node = target
    return node
