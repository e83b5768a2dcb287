"""Postman Collection v2 importer.

Turns an exported collection into endpoint candidates. Folders become tags
(nested folders join with ``/``); every request becomes one endpoint.
"""

import json
import logging
import re
from typing import Any
from urllib.parse import urlsplit

import pydantic

from api_doc_builder.defaults import (
    BODY_METHODS,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_RESPONSE_DESCRIPTION,
    DEFAULT_RESPONSE_STATUS,
)
from api_doc_builder.errors import InvalidFormatError, MalformedInputError
from api_doc_builder.parser.base import ApiEndpoint, Param, RequestBody, Response

logger = logging.getLogger(__name__)

# Headers that describe transport or auth rather than the API itself.
EXCLUDED_HEADERS = {"authorization", "content-type"}

_HOST_VARIABLE_RE = re.compile(r"^\{\{[^}]*\}\}(?:://[^/?#]*)?")


def import_postman(text: str, project_id: str | None = None) -> list[ApiEndpoint]:
    """Parse a Postman collection into endpoint candidates.

    Raises InvalidFormatError when the text is not a usable collection; in that
    case no candidates are returned at all.
    """
    try:
        collection = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"Failed to parse Postman collection: {e}") from e

    if not isinstance(collection, dict) or "info" not in collection or "item" not in collection:
        raise MalformedInputError("Invalid Postman collection format")

    try:
        endpoints = _collect_requests(collection["item"], project_id)
    except (AttributeError, TypeError) as e:
        raise InvalidFormatError(f"Failed to parse Postman collection: {e}") from e

    logger.info("Parsed %d endpoints from Postman collection", len(endpoints))
    return endpoints


def _collect_requests(items: list[dict], project_id: str | None) -> list[ApiEndpoint]:
    """Walk the folder tree depth-first, in document order."""
    endpoints: list[ApiEndpoint] = []
    stack: list[tuple[dict, str]] = [(item, "") for item in reversed(items)]

    while stack:
        item, folder_path = stack.pop()
        if "item" in item:
            name = item.get("name", "")
            child_path = f"{folder_path}/{name}" if folder_path else name
            stack.extend((child, child_path) for child in reversed(item["item"] or []))
        elif "request" in item:
            endpoint = _parse_request(item, folder_path, project_id)
            if endpoint is not None:
                endpoints.append(endpoint)

    return endpoints


def _parse_request(item: dict, folder_path: str, project_id: str | None) -> ApiEndpoint | None:
    req = item["request"]
    if isinstance(req, str):
        req = {"url": req}

    method = (req.get("method") or "GET").upper()
    url = req.get("url") or ""
    raw_url = url if isinstance(url, str) else url.get("raw", "")
    path = _extract_path(raw_url)

    try:
        params = []
        if isinstance(url, dict):
            params += _parse_query_params(url.get("query") or [])
        params += _parse_headers(req.get("header") or [])

        body = None
        if req.get("body") and method in BODY_METHODS:
            body = _parse_body(req["body"])

        return ApiEndpoint(
            method=method,
            path=path,
            summary=item.get("name") or f"{method} {path}",
            description=_description(req.get("description")),
            tags=[folder_path] if folder_path else [],
            parameters=params,
            request_body=body,
            responses=[
                Response(
                    status_code=DEFAULT_RESPONSE_STATUS,
                    description=DEFAULT_RESPONSE_DESCRIPTION,
                )
            ],
            project_id=project_id,
        )
    except pydantic.ValidationError as e:
        logger.warning("Skipping request %r: %s", item.get("name", raw_url), e)
        return None


def _extract_path(url: str) -> str:
    """Return the path component of a Postman URL, always starting with ``/``."""
    url = _HOST_VARIABLE_RE.sub("", url.strip())
    if "://" in url:
        path = urlsplit(url).path
    else:
        path = url.split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    return path


def _description(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("content", "") or ""
    return value or ""


def _parse_query_params(query: list[dict]) -> list[Param]:
    return [
        Param(
            name=q["key"],
            location="query",
            required=False,
            param_type="string",
            description=_description(q.get("description")),
            example=q.get("value"),
        )
        for q in query
        if q.get("key")
    ]


def _parse_headers(headers: list[dict]) -> list[Param]:
    return [
        Param(
            name=h["key"],
            location="header",
            required=False,
            param_type="string",
            description=_description(h.get("description")),
            example=h.get("value"),
        )
        for h in headers
        if h.get("key") and h["key"].lower() not in EXCLUDED_HEADERS
    ]


def _parse_body(body: dict) -> RequestBody:
    mode = body.get("mode")
    content_type = DEFAULT_CONTENT_TYPE
    example: Any = None

    if mode == "raw":
        raw = body.get("raw", "")
        try:
            example = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            example = raw
            content_type = "text/plain"
    elif mode == "formdata":
        content_type = "multipart/form-data"
        example = {
            p["key"]: p.get("value") or p.get("src")
            for p in body.get("formdata") or []
            if p.get("key")
        }
    elif mode == "urlencoded":
        content_type = "application/x-www-form-urlencoded"
        example = {
            p["key"]: p.get("value")
            for p in body.get("urlencoded") or []
            if p.get("key")
        }

    return RequestBody(content_type=content_type, required=True, example=example)
