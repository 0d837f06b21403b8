import copy

import pytest

from apidoc_postman.errors import MalformedTemplateError, MissingFieldError
from apidoc_postman.generator.collection import POSTMAN_SCHEMA, build_collection
from apidoc_postman.parser.base import EndpointDescriptor, ProjectMetadata


def _raw(group: str, title: str, url: str = "/v1/users", method: str = "get") -> dict:
    return {"group": group, "title": title, "urlTemplate": url, "method": method, "description": title}


class TestInfo:
    def test_title_preferred(self):
        doc = build_collection([], {"name": "demo", "title": "Demo API"})
        assert doc.info.name == "Demo API"
        assert doc.info.schema_ == POSTMAN_SCHEMA

    def test_falls_back_to_name(self):
        doc = build_collection([], ProjectMetadata(name="demo"))
        assert doc.info.name == "demo"
        assert doc.item == []

    def test_schema_key_in_dict(self):
        data = build_collection([], {"name": "demo"}).to_dict()
        assert data["info"] == {"name": "demo", "schema": POSTMAN_SCHEMA}


class TestEndToEnd:
    def test_list_users(self):
        descriptors = [{
            "group": "Users", "title": "List users", "urlTemplate": "/v1/users",
            "method": "get", "description": "List all users",
        }]
        doc = build_collection(descriptors, {"name": "demo"})
        assert doc.item[0].name == "Users"
        request = doc.item[0].item[0].request
        assert request.method == "GET"
        assert request.url.raw == "http://{{host}}/v1/users"

    def test_path_parameter(self):
        doc = build_collection([_raw("Users", "Get user", "/v1/users/:id")], {"name": "demo"})
        url = doc.item[0].item[0].request.url
        assert url.raw == "http://{{host}}/v1/users/{id}"
        assert url.path == ["", "v1", "users", "{id}"]
        assert url.protocol == "http"
        assert url.host == ["{{host}}"]

    def test_request_entry_shape(self):
        data = build_collection([_raw("Users", "Get user", "/v1/users/:id")], {"name": "demo"}).to_dict()
        group = data["item"][0]
        assert group["description"] == ""
        entry = group["item"][0]
        assert entry["name"] == "Get user"
        assert entry["request"]["header"] == [
            {"key": "Content-Type", "value": "application/json"},
            {"key": "Accept", "value": "application/json"},
        ]
        assert entry["request"]["description"].startswith("# Get user\n")
        assert "`/v1/users/{id}`" in entry["request"]["description"]

    def test_accepts_typed_descriptors(self):
        ep = EndpointDescriptor(group="Users", title="List", url_template="/v1/users", method="post")
        doc = build_collection([ep], ProjectMetadata(name="demo"))
        assert doc.item[0].item[0].request.method == "POST"


class TestGrouping:
    def test_first_seen_order(self):
        descriptors = [
            _raw("Zeta", "z1"),
            _raw("Alpha", "a1"),
            _raw("Zeta", "z2"),
            _raw("Mid", "m1"),
            _raw("Alpha", "a2"),
        ]
        doc = build_collection(descriptors, {"name": "demo"})
        assert [g.name for g in doc.item] == ["Zeta", "Alpha", "Mid"]
        assert [r.name for r in doc.item[0].item] == ["z1", "z2"]
        assert [r.name for r in doc.item[1].item] == ["a1", "a2"]

    def test_group_count_matches_distinct_values(self):
        groups = ["A", "B", "A", "C", "B", "A"]
        doc = build_collection([_raw(g, f"t{i}") for i, g in enumerate(groups)], {"name": "demo"})
        assert len(doc.item) == len(set(groups))
        assert sum(len(g.item) for g in doc.item) == len(groups)

    def test_accepts_generator(self):
        doc = build_collection((_raw("G", f"t{i}") for i in range(3)), {"name": "demo"})
        assert len(doc.item[0].item) == 3


class TestPurity:
    def test_inputs_not_mutated(self):
        descriptors = [_raw("Users", "Get user", "/v1/users/:id", "get")]
        before = copy.deepcopy(descriptors)
        build_collection(descriptors, {"name": "demo"})
        assert descriptors == before

    def test_fresh_document_per_call(self):
        descriptors = [_raw("Users", "Get user")]
        first = build_collection(descriptors, {"name": "one"})
        second = build_collection(descriptors, {"name": "two"})
        assert first is not second
        assert first.info.name == "one"
        first.item.clear()
        assert len(second.item) == 1

    def test_headers_not_shared(self):
        doc = build_collection([_raw("G", "a"), _raw("G", "b")], {"name": "demo"})
        a, b = (entry.request.header for entry in doc.item[0].item)
        assert a is not b


class TestFailures:
    def test_malformed_template_names_endpoint(self):
        descriptors = [_raw("Users", "List users"), _raw("Users", "Broken", "/v1/:")]
        with pytest.raises(MalformedTemplateError) as exc_info:
            build_collection(descriptors, {"name": "demo"})
        message = str(exc_info.value)
        assert "Broken" in message
        assert "/v1/:" in message
        assert exc_info.value.endpoint == "Broken"

    def test_missing_method(self):
        with pytest.raises(MissingFieldError) as exc_info:
            build_collection([{"group": "Users", "title": "List", "url": "/v1/users"}], {"name": "demo"})
        assert exc_info.value.fields == ["method"]
        assert exc_info.value.index == 0
