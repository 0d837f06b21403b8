"""apidoc output parser.

Reads the ``api_data.json`` / ``api_project.json`` files written by apidoc
into EndpointDescriptor and ProjectMetadata models.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from apidoc_postman.errors import InputFormatError
from apidoc_postman.parser.base import (
    EndpointDescriptor,
    ProjectMetadata,
    descriptor_from_raw,
    project_from_raw,
)

logger = logging.getLogger(__name__)


def read_document(file_path: Path) -> Any:
    """Load a JSON document, falling back to YAML for hand-written inputs."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise InputFormatError(f"Can not read: {file_path} ({e}).") from e

    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        pass

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InputFormatError(f"Can not read: {file_path}, please check the format ({e}).") from e


def load_descriptors(file_path: Path) -> list[EndpointDescriptor]:
    """Parse an apidoc ``api_data.json`` file into a list of EndpointDescriptor."""
    data = read_document(file_path)

    # Older apidoc releases wrap the records as {"api": [...]}
    if isinstance(data, dict) and isinstance(data.get("api"), list):
        data = data["api"]
    if not isinstance(data, list):
        raise InputFormatError(f"{file_path}: expected a list of endpoint records")

    endpoints = [descriptor_from_raw(raw, index) for index, raw in enumerate(data)]
    logger.info("read %d endpoints from %s", len(endpoints), file_path)
    return endpoints


def load_project(file_path: Path) -> ProjectMetadata:
    """Parse an apidoc ``api_project.json`` file."""
    data = read_document(file_path)
    if not isinstance(data, dict):
        raise InputFormatError(f"{file_path}: expected a project object")

    logger.debug("read project metadata from %s", file_path)
    try:
        return project_from_raw(data)
    except ValidationError as e:
        raise InputFormatError(f"{file_path}: invalid project metadata: {e}") from e
