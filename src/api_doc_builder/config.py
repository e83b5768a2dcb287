"""Configuration for the command-line front end.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.api-docs.yaml
3. ./api-docs.yaml

Command-line flags override values from the file.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from api_doc_builder.defaults import DEFAULT_OPENAPI_VERSION, DEFAULT_THEME
from api_doc_builder.errors import InvalidFormatError, NotFoundError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".api-docs.yaml", "api-docs.yaml")


@dataclass
class DocsConfig:
    """Export settings.

    Attributes:
        openapi_version: Value of the ``openapi`` field in generated specs
        theme: HTML theme name
        export_format: Format used by ``export`` when --format is not given
    """

    openapi_version: str = DEFAULT_OPENAPI_VERSION
    theme: str = DEFAULT_THEME
    export_format: str = "openapi"


def find_config_file(start: Path | None = None) -> Path | None:
    base = start or Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: Path | None = None) -> DocsConfig:
    """Load configuration from ``config_path`` or the first discovered file."""
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return DocsConfig()
    elif not config_path.exists():
        raise NotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidFormatError(f"Cannot parse config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidFormatError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(DocsConfig)}
    for key in data.keys() - known:
        logger.warning("Ignoring unknown config key %r in %s", key, config_path)

    logger.debug("Loaded config from %s", config_path)
    return DocsConfig(**{k: str(v) for k, v in data.items() if k in known})
