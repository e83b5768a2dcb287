import json

import pytest

from api_doc_builder.errors import ValidationError
from api_doc_builder.generator.export import export_documentation
from api_doc_builder.parser.base import ApiEndpoint, Project, Response
from api_doc_builder.parser.swagger import import_openapi


def _endpoints() -> list[ApiEndpoint]:
    ok = [Response(status_code=200, description="OK")]
    return [
        ApiEndpoint(method="GET", path="/second", summary="Second", order=2, responses=ok),
        ApiEndpoint(method="GET", path="/first", summary="First", order=1, responses=ok),
    ]


class TestExportDocumentation:
    def test_openapi_json(self):
        doc = export_documentation(Project(name="My Pet  API"), _endpoints(), fmt="openapi")
        assert doc.content_type == "application/json"
        assert doc.filename == "my-pet-api-openapi.json"
        spec = json.loads(doc.content)
        assert list(spec["paths"]) == ["/first", "/second"]

    def test_openapi_version_passed_through(self):
        doc = export_documentation(Project(name="Svc"), [], fmt="swagger", openapi_version="3.1.0")
        assert json.loads(doc.content)["openapi"] == "3.1.0"

    def test_yaml(self):
        doc = export_documentation(Project(name="Svc"), _endpoints(), fmt="yaml")
        assert doc.content_type == "application/yaml"
        assert doc.filename == "svc-openapi.yaml"
        assert doc.content.startswith("openapi: 3.0.0")

    def test_markdown(self):
        doc = export_documentation(Project(name="Svc"), _endpoints(), fmt="MD")
        assert doc.content_type == "text/markdown"
        assert doc.filename == "svc-docs.md"
        assert doc.content.index("GET /first") < doc.content.index("GET /second")

    def test_html(self):
        doc = export_documentation(Project(name="Svc"), _endpoints(), fmt="html", theme="dark")
        assert doc.content_type == "text/html"
        assert doc.filename == "svc-docs.html"
        assert "<!DOCTYPE html>" in doc.content

    def test_unsupported_format(self):
        with pytest.raises(ValidationError) as exc_info:
            export_documentation(Project(name="Svc"), [], fmt="pdf")
        assert exc_info.value.status_code == 400
        assert "Unsupported export format" in str(exc_info.value)


DATED_DOCUMENT = """\
openapi: 3.0.0
info:
  title: Events
  version: 1.0.0
paths:
  /events:
    get:
      summary: List events
      parameters:
        - name: since
          in: query
          schema:
            type: string
            example: 2024-01-01
      responses:
        "200":
          description: OK
          content:
            application/json:
              example:
                createdAt: 2024-01-01
"""


class TestExportImportedYaml:
    def test_unquoted_dates_stay_strings(self):
        imported = import_openapi(DATED_DOCUMENT)
        [endpoint] = imported.endpoints
        assert endpoint.responses[0].example == {"createdAt": "2024-01-01"}
        assert endpoint.parameters[0].example == "2024-01-01"

    @pytest.mark.parametrize("fmt", ["openapi", "yaml", "markdown", "html"])
    def test_exports_every_format(self, fmt):
        imported = import_openapi(DATED_DOCUMENT)
        doc = export_documentation(Project(name="Events"), imported.endpoints, fmt=fmt)
        assert "2024-01-01" in doc.content

    def test_openapi_example_is_a_string(self):
        imported = import_openapi(DATED_DOCUMENT)
        doc = export_documentation(Project(name="Events"), imported.endpoints, fmt="openapi")
        spec = json.loads(doc.content)
        content = spec["paths"]["/events"]["get"]["responses"]["200"]["content"]
        assert content["application/json"]["example"] == {"createdAt": "2024-01-01"}
