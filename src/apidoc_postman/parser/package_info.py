"""Project metadata resolution from package.json and apidoc.json."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from apidoc_postman.errors import ConfigError
from apidoc_postman.parser.base import ProjectMetadata

logger = logging.getLogger(__name__)


def load_project_metadata(src_dir: Path, overrides: dict | None = None) -> ProjectMetadata:
    """Merge project metadata the way apidoc does.

    Precedence, lowest first: the ``apidoc`` key of package.json, package.json's
    own name/version/description, apidoc.json, then ``overrides``.
    """
    package_json = _read_package_data(src_dir, "package.json")

    result = dict(package_json.get("apidoc") or {})
    result.setdefault("name", package_json.get("name") or "")
    result.setdefault("version", package_json.get("version") or "0.0.0")
    result.setdefault("description", package_json.get("description") or "")

    apidoc_json = _read_package_data(src_dir, "apidoc.json")
    result.update(apidoc_json)

    result.update({k: v for k, v in (overrides or {}).items() if v is not None})

    if not apidoc_json:
        logger.warning("Please create an apidoc.json.")

    try:
        return ProjectMetadata.model_validate(result)
    except ValidationError as e:
        raise ConfigError(f"invalid project metadata: {e}") from e


def _read_package_data(src_dir: Path, filename: str) -> dict:
    """Read filename from src_dir, falling back to the current directory."""
    path = src_dir / filename
    if not path.exists():
        path = Path.cwd() / filename
    if not path.exists():
        logger.debug("%s not found!", filename)
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Can not read: {filename}, please check the format (e.g. missing comma).") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Can not read: {filename}, expected a JSON object.")

    logger.debug("read: %s", path)
    return data
