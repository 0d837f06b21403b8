"""Postman Collection v2.1 builder.

Groups endpoint descriptors by their ``group`` and turns each one into a
request entry. Building is a pure transformation: every call returns a newly
constructed document and the input descriptors are never modified.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apidoc_postman.errors import MalformedTemplateError
from apidoc_postman.generator.description import render_description
from apidoc_postman.generator.url import normalize_url
from apidoc_postman.parser.base import (
    EndpointDescriptor,
    ProjectMetadata,
    descriptor_from_raw,
    project_from_raw,
)

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
PROTOCOL = "http"
HOST = "{{host}}"


class Header(BaseModel):
    key: str
    value: str


def _default_headers() -> list[Header]:
    return [
        Header(key="Content-Type", value="application/json"),
        Header(key="Accept", value="application/json"),
    ]


class Url(BaseModel):
    raw: str
    protocol: str = PROTOCOL
    host: list[str] = Field(default_factory=lambda: [HOST])
    path: list[str]


class Request(BaseModel):
    method: str
    header: list[Header] = Field(default_factory=_default_headers)
    url: Url
    description: str


class RequestEntry(BaseModel):
    name: str
    request: Request


class GroupEntry(BaseModel):
    name: str
    description: str = ""
    item: list[RequestEntry]


class Info(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    schema_: str = Field(default=POSTMAN_SCHEMA, alias="schema")


class CollectionDocument(BaseModel):
    info: Info
    item: list[GroupEntry]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def build_collection(
    descriptors: Iterable[EndpointDescriptor | Mapping],
    project: ProjectMetadata | Mapping | None,
) -> CollectionDocument:
    """Build a collection document from endpoint descriptors.

    Groups keep the order in which they are first seen; members keep their
    relative input order.

    Raises:
        MissingFieldError: a descriptor lacks group, title, URL template or method.
        MalformedTemplateError: a URL template cannot be normalized. Nothing is
            returned for the whole build.
    """
    endpoints = [descriptor_from_raw(raw, index) for index, raw in enumerate(descriptors)]
    project = project_from_raw(project)

    groups: dict[str, list[RequestEntry]] = {}
    for endpoint in endpoints:
        groups.setdefault(endpoint.group, []).append(_build_request(endpoint))

    return CollectionDocument(
        info=Info(name=project.title or project.name),
        item=[GroupEntry(name=name, item=entries) for name, entries in groups.items()],
    )


def _build_request(endpoint: EndpointDescriptor) -> RequestEntry:
    try:
        url = normalize_url(endpoint.url_template)
    except MalformedTemplateError as exc:
        raise MalformedTemplateError(exc.template, exc.position, endpoint=endpoint.title) from exc

    return RequestEntry(
        name=endpoint.title,
        request=Request(
            method=endpoint.method.upper(),
            url=Url(raw=f"{PROTOCOL}://{HOST}{url.template}", path=url.path),
            description=render_description(endpoint, url.template),
        ),
    )
