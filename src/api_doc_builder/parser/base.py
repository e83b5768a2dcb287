"""Unified data models for projects and documented endpoints.

Both importers (Postman, OpenAPI/Swagger) convert their input into these
models, and every exporter reads them. Fields are snake_case in Python and
camelCase on the wire (``baseUrl``, ``statusCode``, ``requestBody``...).
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from api_doc_builder.defaults import DEFAULT_CONTENT_TYPE, DEFAULT_PROJECT_VERSION

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
ParamType = Literal["string", "number", "integer", "boolean", "array", "object", "file"]
ParamLocation = Literal["query", "path", "header", "body"]
HeaderType = Literal["string", "number", "integer", "boolean", "array", "object"]

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


class Record(BaseModel):
    """Base for all records: accepts both snake_case and camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Param(Record):
    """A single API parameter (query, path, header, or body)."""

    name: str
    location: ParamLocation = Field(alias="in")
    param_type: ParamType = Field(default="string", alias="type")
    required: bool = False
    description: str = ""
    example: Any = None


class RequestBody(Record):
    content_type: str = DEFAULT_CONTENT_TYPE
    required: bool = False
    description: str = ""
    schema_: dict | None = Field(default=None, alias="schema")
    example: Any = None


class Header(Record):
    header_type: HeaderType = Field(default="string", alias="type")
    description: str = ""
    example: Any = None


class Response(Record):
    """One documented response of an endpoint."""

    status_code: int = Field(ge=100, le=599)
    description: str = ""
    headers: dict[str, Header] = {}
    schema_: dict | None = Field(default=None, alias="schema")
    example: Any = None


class ApiEndpoint(Record):
    """A single API endpoint with all its metadata.

    ``(method, path)`` identifies an endpoint within a project. Storage
    enforces that ``responses`` is non-empty; the model itself accepts an
    empty list so that incomplete records can still be scored and exported.
    """

    method: HttpMethod
    path: str
    summary: str = ""
    description: str = ""
    operation_id: str | None = None
    tags: list[str] = []
    deprecated: bool = False
    parameters: list[Param] = []
    request_body: RequestBody | None = None
    responses: list[Response] = []
    security: list[str] = []
    order: int = 0
    id: str | None = None
    project_id: str | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("Path must start with /")
        return value

    @property
    def key(self) -> tuple[str, str]:
        return (self.method, self.path)

    def resolved_operation_id(self) -> str:
        """Return the stored operationId, or derive one from method and path."""
        if self.operation_id:
            return self.operation_id
        return self.method.lower() + _NON_ALNUM_RE.sub("", self.path)


class Project(Record):
    """A documented API: metadata used by every exporter."""

    name: str
    description: str = ""
    base_url: str | None = None
    version: str = DEFAULT_PROJECT_VERSION
    is_public: bool = False
    id: str | None = None

    @field_validator("version")
    @classmethod
    def _semver(cls, value: str) -> str:
        if not SEMVER_RE.match(value):
            raise ValueError("Version must follow semantic versioning (e.g., 1.0.0)")
        return value

    def with_updates(self, updates: "ProjectUpdate") -> "Project":
        """Return a copy patched with the fields present in ``updates``."""
        data = self.model_dump()
        data.update(updates.model_dump(exclude_none=True))
        return Project.model_validate(data)


class ProjectUpdate(Record):
    """Partial project metadata extracted from an imported document."""

    name: str | None = None
    description: str | None = None
    base_url: str | None = None
    version: str | None = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)
