"""End-to-end: import a document, export every format, score the result."""

import json
from pathlib import Path

from click.testing import CliRunner

from api_doc_builder.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestFullPipeline:
    def test_import_export_validate(self, tmp_path):
        project_path = tmp_path / "petstore.yaml"
        out_dir = tmp_path / "docs"
        out_dir.mkdir()
        runner = CliRunner()

        result = runner.invoke(main, ["import", str(FIXTURES / "petstore.yaml"), "-p", str(project_path)])
        assert result.exit_code == 0, result.output

        for fmt in ("openapi", "yaml", "markdown", "html"):
            result = runner.invoke(main, ["export", str(project_path), "--format", fmt, "-o", str(out_dir)])
            assert result.exit_code == 0, result.output

        spec = json.loads((out_dir / "swagger-petstore-openapi.json").read_text(encoding="utf-8"))
        assert list(spec["paths"]) == ["/pets", "/pets/{petId}"]
        assert spec["info"]["version"] == "1.2.0"
        assert spec["paths"]["/pets"]["post"]["security"] == [{"bearerAuth": []}]

        markdown = (out_dir / "swagger-petstore-docs.md").read_text(encoding="utf-8")
        assert "## pets" in markdown
        assert "## details" in markdown
        assert markdown.count("### 🟢 GET /pets/{petId}") == 2  # listed under both of its tags

        html = (out_dir / "swagger-petstore-docs.html").read_text(encoding="utf-8")
        assert 'id="get--pets--petid-"' in html
        assert (out_dir / "swagger-petstore-openapi.yaml").exists()

        result = runner.invoke(main, ["validate", str(project_path), "--json"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["issues"] == []
        assert report["statistics"]["totalEndpoints"] == 3
