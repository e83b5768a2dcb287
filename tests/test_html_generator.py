from api_doc_builder.generator.html import generate_html
from api_doc_builder.parser.base import ApiEndpoint, Param, Project, Response


def _make_endpoint(method: str, path: str, **kwargs) -> ApiEndpoint:
    kwargs.setdefault("summary", f"{method} {path}")
    kwargs.setdefault("responses", [Response(status_code=200, description="OK")])
    return ApiEndpoint(method=method, path=path, **kwargs)


class TestHtmlGenerator:
    def test_document_structure(self):
        project = Project(name="Pets API", base_url="https://pets.io", version="2.0.0")
        html = generate_html(project, [_make_endpoint("GET", "/pets")])
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Pets API - API Documentation</title>" in html
        assert "<style>" in html
        assert '<div class="sidebar">' in html
        assert "<strong>Version:</strong> 2.0.0" in html
        assert "<strong>Base URL:</strong> https://pets.io" in html
        assert "<p>API Documentation</p>" in html

    def test_sidebar_links_match_endpoint_ids(self):
        endpoints = [
            _make_endpoint("GET", "/pets/{id}", tags=["pets"]),
            _make_endpoint("POST", "/pets", id="64f0c2"),
        ]
        html = generate_html(Project(name="Pets"), endpoints)
        assert '<a href="#get--pets--id-">GET /pets/{id}</a>' in html
        assert '<div class="endpoint" id="get--pets--id-">' in html
        assert '<a href="#64f0c2">POST /pets</a>' in html
        assert '<div class="endpoint" id="64f0c2">' in html

    def test_sidebar_groups_fan_out(self):
        endpoints = [
            _make_endpoint("GET", "/a", tags=["one", "two"]),
            _make_endpoint("GET", "/b"),
        ]
        html = generate_html(Project(name="Svc"), endpoints)
        assert "<h4>one</h4>" in html
        assert "<h4>two</h4>" in html
        assert "<h4>General</h4>" in html
        assert html.count('href="#get--a"') == 2
        assert html.count('class="endpoint"') == 2

    def test_parameters_and_responses(self):
        endpoint = _make_endpoint(
            "GET",
            "/search",
            parameters=[Param(name="q", location="query", required=True)],
            responses=[Response(status_code=200, description="Found", example={"hits": 3})],
        )
        html = generate_html(Project(name="Svc"), [endpoint])
        assert "<th>Name</th><th>Type</th><th>In</th><th>Required</th><th>Description</th>" in html
        assert "<td>q</td>" in html
        assert "<td>Yes</td>" in html
        assert "<td>-</td>" in html
        assert "<h4>200 - Found</h4>" in html
        assert '<pre class="code">{\n  &#34;hits&#34;: 3\n}</pre>' in html

    def test_user_content_is_escaped(self):
        endpoint = _make_endpoint(
            "GET",
            "/x",
            summary="<script>alert(1)</script>",
            description="Tom & Jerry",
        )
        project = Project(name="<b>Svc</b>")
        html = generate_html(project, [endpoint])
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "Tom &amp; Jerry" in html
        assert "&lt;b&gt;Svc&lt;/b&gt;" in html

    def test_theme_does_not_change_output(self):
        endpoints = [_make_endpoint("GET", "/a")]
        project = Project(name="Svc")
        assert generate_html(project, endpoints, theme="dark") == generate_html(project, endpoints)

    def test_colliding_slugs_get_unique_ids(self):
        endpoints = [
            _make_endpoint("GET", "/a-b"),
            _make_endpoint("GET", "/a_b"),
            _make_endpoint("GET", "/a.b"),
        ]
        html = generate_html(Project(name="Svc"), endpoints)
        assert html.count('id="get--a-b"') == 1
        assert '<a href="#get--a-b-2">GET /a_b</a>' in html
        assert '<div class="endpoint" id="get--a-b-2">' in html
        assert '<div class="endpoint" id="get--a-b-3">' in html
