"""Load and save project files: one project plus its endpoints, as YAML or JSON."""

import json
from pathlib import Path

import pydantic
import yaml
from pydantic import BaseModel

from api_doc_builder.errors import InvalidFormatError, NotFoundError
from api_doc_builder.parser.base import ApiEndpoint, Project
from api_doc_builder.parser.swagger import load_yaml

JSON_SUFFIXES = (".json",)


class ProjectFile(BaseModel):
    project: Project
    endpoints: list[ApiEndpoint] = []


def load_project_file(file_path: Path) -> ProjectFile:
    """Read a project file; the suffix picks JSON, anything else is read as YAML."""
    if not file_path.exists():
        raise NotFoundError(f"Project file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() in JSON_SUFFIXES:
            data = json.loads(text)
        else:
            data = load_yaml(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidFormatError(f"Cannot parse project file {file_path}: {e}") from e

    try:
        return ProjectFile.model_validate(data)
    except pydantic.ValidationError as e:
        raise InvalidFormatError(f"Invalid project file {file_path}: {e}") from e


def save_project_file(file_path: Path, project_file: ProjectFile) -> None:
    data = project_file.model_dump(mode="json", by_alias=True, exclude_none=True)
    if file_path.suffix.lower() in JSON_SUFFIXES:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    else:
        text = yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
