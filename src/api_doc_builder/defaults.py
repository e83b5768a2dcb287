"""Default values shared by every exporter and importer."""

DEFAULT_PROJECT_VERSION = "1.0.0"
DEFAULT_BASE_URL = "https://api.example.com"
DEFAULT_OPENAPI_VERSION = "3.0.0"
DEFAULT_PROJECT_NAME = "Untitled API"

DEFAULT_TAG = "General"
DEFAULT_THEME = "default"

DEFAULT_RESPONSE_STATUS = 200
DEFAULT_RESPONSE_DESCRIPTION = "Successful response"
DEFAULT_CONTENT_TYPE = "application/json"

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")
BODY_METHODS = ("POST", "PUT", "PATCH")

METHOD_EMOJI = {
    "GET": "🟢",
    "POST": "🔵",
    "PUT": "🟠",
    "DELETE": "🔴",
    "PATCH": "🟡",
}
DEFAULT_METHOD_EMOJI = "⚪"
