"""Error types raised by the exporters, importers and project file loader.

Each error carries the HTTP status a web front end would map it to.
"""


class ApiDocsError(Exception):
    """Base class for every error raised by api-doc-builder."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ApiDocsError):
    """A project, endpoint or file does not exist."""

    status_code = 404


class AccessDeniedError(ApiDocsError):
    status_code = 403


class InvalidFormatError(ApiDocsError):
    """Raw import text parses as neither JSON nor YAML, or has the wrong shape."""


class MalformedInputError(InvalidFormatError):
    """The document parsed but lacks required top-level keys."""


class MissingPathsError(InvalidFormatError):
    """An OpenAPI/Swagger document without a ``paths`` object."""


class ValidationError(ApiDocsError):
    """A caller-supplied value is out of range (bad status code, unknown format)."""
