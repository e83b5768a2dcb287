import pytest
from pydantic import ValidationError

from api_doc_builder.parser.base import (
    ApiEndpoint,
    Param,
    Project,
    ProjectUpdate,
    RequestBody,
    Response,
)


class TestParam:
    def test_create_required_param(self):
        p = Param(name="id", location="path", required=True, param_type="integer")
        assert p.name == "id"
        assert p.required is True
        assert p.description == ""
        assert p.example is None

    def test_accepts_wire_names(self):
        p = Param.model_validate({"name": "q", "in": "query", "type": "string", "example": "cats"})
        assert p.location == "query"
        assert p.param_type == "string"
        assert p.model_dump(by_alias=True)["in"] == "query"

    def test_rejects_unknown_location(self):
        with pytest.raises(ValidationError):
            Param(name="session", location="cookie")


class TestApiEndpoint:
    def test_create_minimal_endpoint(self):
        ep = ApiEndpoint(
            method="get",
            path="/api/users",
            summary="List users",
            responses=[Response(status_code=200, description="Success")],
            tags=["users"],
        )
        assert ep.method == "GET"
        assert ep.deprecated is False
        assert ep.key == ("GET", "/api/users")

    def test_path_must_start_with_slash(self):
        with pytest.raises(ValidationError):
            ApiEndpoint(method="GET", path="api/users")

    def test_rejects_unknown_method(self):
        with pytest.raises(ValidationError):
            ApiEndpoint(method="TRACE", path="/")

    def test_status_code_range(self):
        with pytest.raises(ValidationError):
            Response(status_code=600, description="nope")
        with pytest.raises(ValidationError):
            Response(status_code=99, description="nope")

    def test_derived_operation_id(self):
        ep = ApiEndpoint(method="DELETE", path="/api/users/{id}")
        assert ep.resolved_operation_id() == "deleteapiusersid"

    def test_explicit_operation_id_wins(self):
        ep = ApiEndpoint(method="GET", path="/pets", operation_id="listPets")
        assert ep.resolved_operation_id() == "listPets"

    def test_camel_case_roundtrip(self):
        ep = ApiEndpoint(
            method="POST",
            path="/api/users",
            summary="Create user",
            request_body=RequestBody(
                content_type="application/json",
                required=True,
                schema={"type": "object", "properties": {"name": {"type": "string"}}},
            ),
            responses=[Response(status_code=201, description="Created")],
        )
        data = ep.model_dump(by_alias=True)
        assert data["requestBody"]["contentType"] == "application/json"
        assert data["requestBody"]["schema"]["type"] == "object"
        assert data["responses"][0]["statusCode"] == 201

        ep2 = ApiEndpoint.model_validate(data)
        assert ep2.request_body.schema_ == ep.request_body.schema_


class TestProject:
    def test_defaults(self):
        project = Project(name="Pets")
        assert project.version == "1.0.0"
        assert project.base_url is None
        assert project.is_public is False

    def test_version_must_be_semver(self):
        with pytest.raises(ValidationError):
            Project(name="Pets", version="1.0")

    def test_with_updates_only_touches_present_fields(self):
        project = Project(name="Pets", description="Old", base_url="https://old.example.com")
        updated = project.with_updates(ProjectUpdate(name="Petstore", version="2.0.0"))
        assert updated.name == "Petstore"
        assert updated.version == "2.0.0"
        assert updated.description == "Old"
        assert updated.base_url == "https://old.example.com"
        assert project.name == "Pets"

    def test_empty_update(self):
        assert ProjectUpdate().is_empty()
        assert not ProjectUpdate(name="x").is_empty()
