"""Auto-detect the format of an imported document and dispatch to its importer."""

import logging

from pydantic import BaseModel

from api_doc_builder.defaults import DEFAULT_PROJECT_NAME
from api_doc_builder.errors import InvalidFormatError
from api_doc_builder.parser.base import ApiEndpoint, ProjectUpdate
from api_doc_builder.parser.postman import import_postman
from api_doc_builder.parser.swagger import import_openapi, load_document

logger = logging.getLogger(__name__)

IMPORT_FORMATS = ("auto", "postman", "openapi")


class ImportResult(BaseModel):
    """Importer output in a format-independent shape."""

    source: str  # postman / openapi
    title: str
    project_updates: ProjectUpdate
    endpoints: list[ApiEndpoint]


def detect_format(text: str) -> str:
    """Detect the format of an API description document.

    Returns: 'openapi' or 'postman'.
    """
    doc = load_document(text)
    if "openapi" in doc or "swagger" in doc:
        return "openapi"

    info = doc.get("info")
    if isinstance(info, dict):
        if "_postman_id" in info or "getpostman.com" in str(info.get("schema", "")):
            return "postman"
    if "item" in doc and "info" in doc:
        return "postman"

    raise InvalidFormatError("Unrecognized document: expected an OpenAPI spec or a Postman collection")


def parse_document(text: str, fmt: str = "auto", project_id: str | None = None) -> ImportResult:
    """Parse a document with the importer matching ``fmt``."""
    if fmt == "auto":
        fmt = detect_format(text)
        logger.debug("Detected %s document", fmt)

    if fmt == "openapi":
        imported = import_openapi(text, project_id=project_id)
        return ImportResult(
            source="openapi",
            title=imported.title,
            project_updates=imported.project_updates,
            endpoints=imported.endpoints,
        )
    if fmt == "postman":
        endpoints = import_postman(text, project_id=project_id)
        return ImportResult(
            source="postman",
            title=_postman_name(text),
            project_updates=ProjectUpdate(),
            endpoints=endpoints,
        )
    raise InvalidFormatError(f"Unknown import format: {fmt}")


def _postman_name(text: str) -> str:
    info = load_document(text).get("info") or {}
    if not isinstance(info, dict):
        return DEFAULT_PROJECT_NAME
    return str(info.get("name") or DEFAULT_PROJECT_NAME)
