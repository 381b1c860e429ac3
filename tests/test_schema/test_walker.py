"""Tests for specweave.schema.walker."""

from __future__ import annotations

import copy
from typing import Any

from specweave.schema.walker import (
    walk_callbacks,
    walk_components,
    walk_document,
    walk_media_type,
    walk_operation,
    walk_parameter,
    walk_path_item,
    walk_schema,
)


def _mark(schema: dict[str, Any]) -> dict[str, Any]:
    """Visitor that tags every schema it sees."""
    schema["x-seen"] = True
    return schema


def _recorder(seen: list[Any]):
    def visit(schema: dict[str, Any]) -> dict[str, Any]:
        seen.append(schema.get("title"))
        return schema

    return visit


# ---------------------------------------------------------------------------
# walk_schema
# ---------------------------------------------------------------------------


class TestWalkSchema:
    """Test the recursive schema traversal."""

    def test_passes_through_absent_boolean_and_reference(self) -> None:
        ref = {"$ref": "#/components/schemas/Pet"}
        assert walk_schema(None, _mark) is None
        assert walk_schema(True, _mark) is True
        assert walk_schema(ref, _mark) is ref
        assert ref == {"$ref": "#/components/schemas/Pet"}

    def test_visits_every_nested_slot(self) -> None:
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "patternProperties": {"^x-": {"type": "integer"}},
            "additionalProperties": {"type": "number"},
            "items": {"type": "boolean"},
            "allOf": [{"title": "all"}],
            "oneOf": [{"title": "one"}],
            "anyOf": [{"title": "any"}],
            "not": {"type": "null"},
        }
        result = walk_schema(schema, _mark)

        assert result["x-seen"] is True
        assert result["properties"]["a"]["x-seen"] is True
        assert result["patternProperties"]["^x-"]["x-seen"] is True
        assert result["additionalProperties"]["x-seen"] is True
        assert result["items"]["x-seen"] is True
        assert result["allOf"][0]["x-seen"] is True
        assert result["oneOf"][0]["x-seen"] is True
        assert result["anyOf"][0]["x-seen"] is True
        assert result["not"]["x-seen"] is True

    def test_boolean_additional_properties_and_items_untouched(self) -> None:
        result = walk_schema({"additionalProperties": False, "items": True}, _mark)
        assert result["additionalProperties"] is False
        assert result["items"] is True

    def test_children_visited_before_parent_in_keyword_order(self) -> None:
        seen: list[Any] = []
        schema = {
            "title": "root",
            "properties": {"p": {"title": "prop"}},
            "patternProperties": {"^a": {"title": "pattern"}},
            "additionalProperties": {"title": "additional"},
            "items": {"title": "items"},
            "allOf": [{"title": "allOf"}],
            "oneOf": [{"title": "oneOf"}],
            "anyOf": [{"title": "anyOf"}],
            "not": {"title": "not"},
        }
        walk_schema(schema, _recorder(seen))
        assert seen == [
            "prop",
            "pattern",
            "additional",
            "items",
            "allOf",
            "oneOf",
            "anyOf",
            "not",
            "root",
        ]

    def test_does_not_descend_into_references(self) -> None:
        schema = {"properties": {"child": {"$ref": "#/components/schemas/Node"}}}
        result = walk_schema(schema, _mark)
        assert result["properties"]["child"] == {"$ref": "#/components/schemas/Node"}

    def test_does_not_mutate_input(self) -> None:
        schema = {"type": "object", "properties": {"a": {"type": "string"}}}
        original = copy.deepcopy(schema)
        result = walk_schema(schema, _mark)
        assert schema == original
        assert result is not schema
        assert result["properties"] is not schema["properties"]

    def test_visitor_can_replace_node(self) -> None:
        result = walk_schema(
            {"properties": {"a": {"type": "string"}}},
            lambda s: {"wrapped": s} if s.get("type") else s,
        )
        assert result["properties"]["a"] == {"wrapped": {"type": "string"}}

    def test_self_referencing_component_graph_terminates(self) -> None:
        node = {
            "type": "object",
            "properties": {
                "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
                "parent": {"$ref": "#/components/schemas/Node"},
            },
        }
        result = walk_schema(node, _mark)
        assert result["properties"]["children"]["items"] == {"$ref": "#/components/schemas/Node"}


# ---------------------------------------------------------------------------
# Container walkers
# ---------------------------------------------------------------------------


class TestContainerWalkers:
    """Test location of schema slots inside OpenAPI objects."""

    def test_media_type_schema_and_item_schema(self) -> None:
        media = {"schema": {"type": "string"}, "itemSchema": {"type": "object"}, "example": "x"}
        result = walk_media_type(media, _mark)
        assert result["schema"]["x-seen"] is True
        assert result["itemSchema"]["x-seen"] is True
        assert result["example"] == "x"

    def test_parameter_schema_and_content(self) -> None:
        parameter = {
            "name": "filter",
            "in": "query",
            "schema": {"type": "string"},
            "content": {"application/json": {"schema": {"type": "object"}}},
        }
        result = walk_parameter(parameter, _mark)
        assert result["schema"]["x-seen"] is True
        assert result["content"]["application/json"]["schema"]["x-seen"] is True
        assert "x-seen" not in parameter["schema"]

    def test_reference_parameter_untouched(self) -> None:
        ref = {"$ref": "#/components/parameters/Limit"}
        assert walk_parameter(ref, _mark) is ref

    def test_operation_slots(self) -> None:
        operation = {
            "operationId": "op",
            "parameters": [{"name": "q", "in": "query", "schema": {"type": "string"}}],
            "requestBody": {"content": {"application/json": {"schema": {"type": "object"}}}},
            "responses": {
                "200": {
                    "description": "OK",
                    "content": {"application/json": {"schema": {"type": "array"}}},
                    "headers": {"X-Rate": {"schema": {"type": "integer"}}},
                },
                "404": {"$ref": "#/components/responses/NotFound"},
            },
        }
        result = walk_operation(operation, _mark)
        assert result["parameters"][0]["schema"]["x-seen"] is True
        assert result["requestBody"]["content"]["application/json"]["schema"]["x-seen"] is True
        ok = result["responses"]["200"]
        assert ok["content"]["application/json"]["schema"]["x-seen"] is True
        assert ok["headers"]["X-Rate"]["schema"]["x-seen"] is True
        assert result["responses"]["404"] == {"$ref": "#/components/responses/NotFound"}

    def test_callbacks_walk_nested_path_items(self) -> None:
        callbacks = {
            "onEvent": {
                "{$request.body#/url}": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"schema": {"type": "object"}}}
                        },
                        "responses": {"200": {"description": "OK"}},
                    }
                }
            },
            "shared": {"$ref": "#/components/callbacks/Shared"},
        }
        result = walk_callbacks(callbacks, _mark)
        body = result["onEvent"]["{$request.body#/url}"]["post"]["requestBody"]
        assert body["content"]["application/json"]["schema"]["x-seen"] is True
        assert result["shared"] == {"$ref": "#/components/callbacks/Shared"}

    def test_path_item_parameters_and_query_method(self) -> None:
        path_item = {
            "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
            "query": {"responses": {"200": {"content": {"a/b": {"schema": {"type": "string"}}}}}},
            "summary": "not an operation",
        }
        result = walk_path_item(path_item, _mark)
        assert result["parameters"][0]["schema"]["x-seen"] is True
        assert result["query"]["responses"]["200"]["content"]["a/b"]["schema"]["x-seen"] is True
        assert result["summary"] == "not an operation"

    def test_components_categories(self) -> None:
        components = {
            "schemas": {"Pet": {"type": "object"}, "Alias": {"$ref": "#/components/schemas/Pet"}},
            "parameters": {"Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}}},
            "requestBodies": {"Body": {"content": {"application/json": {"schema": {"type": "object"}}}}},
            "responses": {
                "Err": {"description": "x", "content": {"application/json": {"schema": {"type": "object"}}}}
            },
            "headers": {"X-Id": {"schema": {"type": "string"}}},
            "callbacks": {"cb": {"/x": {"get": {"parameters": [{"schema": {"type": "string"}}]}}}},
            "examples": {"Ex": {"value": {"type": "string"}}},
        }
        result = walk_components(components, _mark)
        assert result["schemas"]["Pet"]["x-seen"] is True
        assert result["schemas"]["Alias"] == {"$ref": "#/components/schemas/Pet"}
        assert result["parameters"]["Limit"]["schema"]["x-seen"] is True
        assert result["requestBodies"]["Body"]["content"]["application/json"]["schema"]["x-seen"]
        assert result["responses"]["Err"]["content"]["application/json"]["schema"]["x-seen"]
        assert result["headers"]["X-Id"]["schema"]["x-seen"] is True
        assert result["callbacks"]["cb"]["/x"]["get"]["parameters"][0]["schema"]["x-seen"]
        assert result["examples"] == {"Ex": {"value": {"type": "string"}}}


class TestWalkDocument:
    """Test whole-document traversal."""

    def test_rewrites_paths_webhooks_and_components_in_place(self) -> None:
        document = {
            "openapi": "3.1.0",
            "paths": {"/a": {"get": {"parameters": [{"schema": {"type": "string"}}]}}},
            "webhooks": {"hook": {"post": {"parameters": [{"schema": {"type": "string"}}]}}},
            "components": {"schemas": {"A": {"type": "object"}}},
        }
        result = walk_document(document, _mark)
        assert result is document
        assert document["paths"]["/a"]["get"]["parameters"][0]["schema"]["x-seen"] is True
        assert document["webhooks"]["hook"]["post"]["parameters"][0]["schema"]["x-seen"] is True
        assert document["components"]["schemas"]["A"]["x-seen"] is True

    def test_missing_paths_become_empty_map(self) -> None:
        document: dict[str, Any] = {"openapi": "3.1.0"}
        walk_document(document, _mark)
        assert document["paths"] == {}
        assert "webhooks" not in document
        assert "components" not in document
