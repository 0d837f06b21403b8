"""Data models for parsed API documentation.

The doc extractor (apidoc) output is validated into these models once, at the
boundary; the generator only ever sees fully typed, immutable descriptors.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from apidoc_postman.errors import DescriptorError, MissingFieldError

REQUIRED_FIELDS = ("group", "title", "url_template", "method")

_FIELD_ALIASES = {"urlTemplate": "url_template", "url": "url_template", "type": "method"}


class ParameterField(BaseModel):
    """A single parameter or response field.

    Unknown keys (defaultValue, allowedValues, size, ...) are kept, and the keys
    the record was built from are remembered in their input order so tables show
    exactly what the doc extractor supplied.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(default="", validation_alias=AliasChoices("name", "field"))
    type: str = ""
    optional: bool = False
    description: str = ""
    group: str = ""  # discarded before rendering

    _source_keys: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def _remember_keys(cls, data: Any, handler):
        field = handler(data)
        if isinstance(data, Mapping):
            field._source_keys = tuple(data)
        return field

    def table_row(self, discard: frozenset[str] = frozenset({"group"})) -> dict[str, Any]:
        """Return the record under its input keys and order, minus discard."""
        values = self.model_dump()
        values["field"] = self.name
        return {key: values[key] for key in self._source_keys if key not in discard and key in values}


class Example(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    content: str
    type: str = ""


class SuccessBlock(BaseModel):
    """Response fields per section plus example payloads."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, list[ParameterField]] = {}
    examples: list[Example] = []


class EndpointDescriptor(BaseModel):
    """One documented API operation."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(min_length=1)
    title: str = Field(min_length=1)
    url_template: str = Field(min_length=1, validation_alias=AliasChoices("url_template", "urlTemplate", "url"))
    method: str = Field(min_length=1, validation_alias=AliasChoices("method", "type"))
    description: str = ""
    parameters: list[ParameterField] | None = None
    success: SuccessBlock | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_parameter_groups(cls, data: Any) -> Any:
        # apidoc nests parameters as {"parameter": {"fields": {"Parameter": [...], "Body": [...]}}}
        if not isinstance(data, Mapping) or "parameters" in data:
            return data
        parameter = data.get("parameter")
        if not isinstance(parameter, Mapping):
            return data
        data = dict(data)
        groups = parameter.get("fields") or {}
        data["parameters"] = [field for fields in groups.values() for field in fields]
        return data


class ProjectMetadata(BaseModel):
    """Describes the whole collection (apidoc.json / api_project.json)."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    title: str = ""
    version: str = "0.0.0"
    description: str = ""


def descriptor_from_raw(raw: Any, index: int | None = None) -> EndpointDescriptor:
    """Validate one raw record into an EndpointDescriptor.

    Raises MissingFieldError when a required field is absent or empty, and
    DescriptorError for any other validation failure.
    """
    if isinstance(raw, EndpointDescriptor):
        return raw
    title = raw.get("title") if isinstance(raw, Mapping) else None
    try:
        return EndpointDescriptor.model_validate(raw)
    except ValidationError as exc:
        missing = []
        for error in exc.errors():
            if not error["loc"]:
                continue
            name = str(error["loc"][0])
            name = _FIELD_ALIASES.get(name, name)
            absent = error["type"] in ("missing", "string_too_short") or (
                error["type"] == "string_type" and error.get("input") is None
            )
            if absent and name in REQUIRED_FIELDS:
                if name not in missing:
                    missing.append(name)
        if missing:
            raise MissingFieldError(missing, endpoint=title, index=index) from exc
        where = f"record #{index}: " if index is not None else ""
        raise DescriptorError(f"{where}invalid descriptor: {exc}", endpoint=title) from exc


def project_from_raw(raw: Mapping | ProjectMetadata | None) -> ProjectMetadata:
    if isinstance(raw, ProjectMetadata):
        return raw
    return ProjectMetadata.model_validate(raw or {})
