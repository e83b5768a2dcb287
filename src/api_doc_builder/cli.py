"""CLI entry point for api-doc-builder."""

from contextlib import contextmanager
from pathlib import Path

import click

from api_doc_builder.config import DocsConfig, load_config
from api_doc_builder.errors import ApiDocsError
from api_doc_builder.generator.export import EXPORT_FORMATS, export_documentation
from api_doc_builder.generator.validator import validate
from api_doc_builder.log import configure_logging
from api_doc_builder.parser.base import Project
from api_doc_builder.parser.detect import IMPORT_FORMATS, parse_document
from api_doc_builder.project_file import ProjectFile, load_project_file, save_project_file
from api_doc_builder.store import merge_candidates


@contextmanager
def _handle_errors():
    """Report library errors as click errors (message on stderr, exit code 1)."""
    try:
        yield
    except ApiDocsError as e:
        raise click.ClickException(e.message) from e


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path), help="Config file (default: ./.api-docs.yaml or ./api-docs.yaml).")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool, quiet: bool):
    """API Docs: generate documentation from project files and import API descriptions."""
    configure_logging(verbose=verbose, quiet=quiet)
    with _handle_errors():
        ctx.obj = load_config(config_path)


@main.command()
@click.argument("project_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file or directory (default: stdout).")
@click.option("--format", "fmt", default=None, type=click.Choice(EXPORT_FORMATS), help="Output format.")
@click.option("--openapi-version", default=None, help="Value of the generated 'openapi' field.")
@click.option("--theme", default=None, help="HTML theme name.")
@click.pass_obj
def export(config: DocsConfig, project_path: Path, output: Path | None, fmt: str | None, openapi_version: str | None, theme: str | None):
    """Generate OpenAPI, Markdown or HTML documentation from a project file."""
    fmt = fmt or config.export_format
    with _handle_errors():
        project_file = load_project_file(project_path)
        document = export_documentation(
            project_file.project,
            project_file.endpoints,
            fmt=fmt,
            theme=theme or config.theme,
            openapi_version=openapi_version or config.openapi_version,
        )

    if output is None:
        click.echo(document.content, nl=False)
        return

    if output.is_dir():
        output = output / document.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document.content, encoding="utf-8")
    click.echo(f"Documentation saved to {output}")


@main.command("import")
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-p", "--project", "project_path", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Project file to merge into (created if missing).")
@click.option("--format", "fmt", default="auto", type=click.Choice(IMPORT_FORMATS), help="Document format.")
def import_doc(doc_path: Path, project_path: Path, fmt: str):
    """Import endpoints from a Postman collection or an OpenAPI/Swagger document."""
    click.echo(f"Parsing {doc_path} (format: {fmt})...")
    with _handle_errors():
        text = doc_path.read_text(encoding="utf-8")
        current = load_project_file(project_path) if project_path.exists() else None
        project_id = current.project.id if current else None

        result = parse_document(text, fmt=fmt, project_id=project_id)
        if current is None:
            current = ProjectFile(project=Project(name=result.title))

        project = current.project.with_updates(result.project_updates)
        summary = merge_candidates(current.endpoints, result.endpoints)
        save_project_file(
            project_path,
            ProjectFile(project=project, endpoints=current.endpoints + summary.endpoints),
        )

    click.echo(f"Found {summary.total} endpoints in {result.title}.")
    click.echo(
        f"Imported {summary.imported_endpoints} endpoints, "
        f"skipped {summary.skipped_duplicates} duplicates."
    )


@main.command("validate")
@click.argument("project_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def validate_docs(project_path: Path, as_json: bool):
    """Score the documentation completeness of a project file."""
    with _handle_errors():
        project_file = load_project_file(project_path)
    report = validate(project_file.project, project_file.endpoints)

    if as_json:
        click.echo(report.model_dump_json(indent=2, by_alias=True))
        return

    click.echo(f"Score: {report.score}/100 ({report.status})")
    for issue in report.issues:
        click.echo(f"  ISSUE    {issue}")
    for warning in report.warnings:
        click.echo(f"  WARNING  {warning}")
    stats = report.statistics
    click.echo(
        f"{stats.total_endpoints} endpoints: {stats.endpoints_with_description} described, "
        f"{stats.endpoints_with_examples} with examples, {stats.endpoints_with_tags} tagged"
    )
