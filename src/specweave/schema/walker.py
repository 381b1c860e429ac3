"""Recursive rewrite over schema trees and the OpenAPI objects that carry them.

The walker has two layers:

* :func:`walk_schema` descends through the JSON Schema keywords that can
  nest further schemas (``properties``, ``patternProperties``,
  ``additionalProperties``, ``items``, ``allOf``, ``oneOf``, ``anyOf``,
  ``not``) and applies a *visitor* to every inline schema, children first.
* The ``walk_*`` container functions locate every schema-bearing slot in
  media types, parameters, headers, request bodies, responses, callbacks,
  operations, path items and component tables, and hand each slot to
  :func:`walk_schema`. Wrapper objects therefore never need to know what
  the visitor does.

References are returned as-is at every level and never dereferenced, so a
schema graph that refers back to itself through ``$ref`` cannot loop.
Literal (non-reference) nesting recurses proportionally to its depth.

Every function returns a new object and leaves its input untouched, except
:func:`walk_document`, which rewrites the top-level slots of the document it
is given (callers pass a freshly assembled document).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from specweave.schema.nodes import NodeKind, classify_node

SchemaVisitor = Callable[[dict[str, Any]], Any]
"""Transform applied to each inline schema; receives an owned shallow copy."""

OPERATION_METHODS = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
    # Non-standard SEARCH and the OAS 3.2 QUERY method.
    "search",
    "query",
)
"""Path-item keys that hold *Operation Objects*."""

_SCHEMA_MAP_KEYWORDS = ("properties", "patternProperties")
_SCHEMA_LIST_KEYWORDS = ("allOf", "oneOf", "anyOf")


# --- Schema nodes ---


def walk_schema(node: Any, visit: SchemaVisitor) -> Any:
    """Apply *visit* to every inline schema reachable from *node*.

    Absent, boolean and reference nodes are returned unchanged. For an
    inline schema a shallow copy is made, its nested schemas are walked in
    keyword order, and the copy is passed to *visit*, whose return value
    replaces the node.

    Args:
        node: A schema slot value -- ``None``, a boolean, a reference, or a
            schema dict.
        visit: Transform for a single inline schema. It may mutate the copy
            it receives and may return a different node (e.g. a wrapper).

    Returns:
        The rewritten node.
    """
    if classify_node(node) is not NodeKind.SCHEMA:
        return node

    converted = dict(node)

    for keyword in _SCHEMA_MAP_KEYWORDS:
        children = converted.get(keyword)
        if isinstance(children, dict):
            converted[keyword] = {
                name: walk_schema(child, visit) for name, child in children.items()
            }

    # Boolean additionalProperties/items are valid schemas with nothing inside.
    if isinstance(converted.get("additionalProperties"), dict):
        converted["additionalProperties"] = walk_schema(
            converted["additionalProperties"], visit
        )
    if "items" in converted and not isinstance(converted["items"], bool):
        converted["items"] = walk_schema(converted["items"], visit)

    for keyword in _SCHEMA_LIST_KEYWORDS:
        members = converted.get(keyword)
        if isinstance(members, list):
            converted[keyword] = [walk_schema(member, visit) for member in members]

    if converted.get("not") is not None:
        converted["not"] = walk_schema(converted["not"], visit)

    return visit(converted)


# --- Containers ---


def walk_media_type(media_type: Any, visit: SchemaVisitor) -> Any:
    """Walk ``schema`` and the OAS 3.2 streaming ``itemSchema`` of a media type."""
    if not isinstance(media_type, dict):
        return media_type
    transformed = dict(media_type)
    for slot in ("schema", "itemSchema"):
        if transformed.get(slot):
            transformed[slot] = walk_schema(transformed[slot], visit)
    return transformed


def walk_content(content: Any, visit: SchemaVisitor) -> Any:
    """Walk every media type of a ``content`` map."""
    if not isinstance(content, dict):
        return content
    return {
        media_range: walk_media_type(media_type, visit)
        for media_range, media_type in content.items()
    }


def walk_parameter(parameter: Any, visit: SchemaVisitor) -> Any:
    """Walk a *Parameter* or *Header Object* (``schema`` and ``content``)."""
    if classify_node(parameter) is not NodeKind.SCHEMA:
        return parameter
    transformed = dict(parameter)
    if transformed.get("schema"):
        transformed["schema"] = walk_schema(transformed["schema"], visit)
    if transformed.get("content"):
        transformed["content"] = walk_content(transformed["content"], visit)
    return transformed


def walk_parameters(parameters: Any, visit: SchemaVisitor) -> Any:
    """Walk a list of parameters."""
    if not isinstance(parameters, list):
        return parameters
    return [walk_parameter(parameter, visit) for parameter in parameters]


def walk_headers(headers: Any, visit: SchemaVisitor) -> Any:
    """Walk a name -> *Header Object* map."""
    if not isinstance(headers, dict):
        return headers
    return {name: walk_parameter(header, visit) for name, header in headers.items()}


def walk_request_body(request_body: Any, visit: SchemaVisitor) -> Any:
    """Walk the ``content`` of a *Request Body Object*."""
    if classify_node(request_body) is not NodeKind.SCHEMA:
        return request_body
    transformed = dict(request_body)
    if transformed.get("content"):
        transformed["content"] = walk_content(transformed["content"], visit)
    return transformed


def walk_response(response: Any, visit: SchemaVisitor) -> Any:
    """Walk the ``content`` and ``headers`` of a *Response Object*."""
    if classify_node(response) is not NodeKind.SCHEMA:
        return response
    transformed = dict(response)
    if transformed.get("content"):
        transformed["content"] = walk_content(transformed["content"], visit)
    if transformed.get("headers"):
        transformed["headers"] = walk_headers(transformed["headers"], visit)
    return transformed


def walk_responses(responses: Any, visit: SchemaVisitor) -> Any:
    """Walk every status entry of a *Responses Object*."""
    if not isinstance(responses, dict):
        return responses
    return {status: walk_response(response, visit) for status, response in responses.items()}


def walk_callbacks(callbacks: Any, visit: SchemaVisitor) -> Any:
    """Walk a name -> *Callback Object* map.

    Each callback maps runtime expressions to path items, which are walked
    like any other path item.
    """
    if not isinstance(callbacks, dict):
        return callbacks
    transformed: dict[str, Any] = {}
    for name, callback in callbacks.items():
        if classify_node(callback) is not NodeKind.SCHEMA:
            transformed[name] = callback
            continue
        transformed[name] = {
            expression: walk_path_item(path_item, visit)
            for expression, path_item in callback.items()
        }
    return transformed


def walk_operation(operation: Any, visit: SchemaVisitor) -> Any:
    """Walk ``parameters``, ``requestBody``, ``responses`` and ``callbacks``."""
    if not isinstance(operation, dict):
        return operation
    transformed = dict(operation)
    if transformed.get("parameters"):
        transformed["parameters"] = walk_parameters(transformed["parameters"], visit)
    if transformed.get("requestBody"):
        transformed["requestBody"] = walk_request_body(transformed["requestBody"], visit)
    if transformed.get("responses"):
        transformed["responses"] = walk_responses(transformed["responses"], visit)
    if transformed.get("callbacks"):
        transformed["callbacks"] = walk_callbacks(transformed["callbacks"], visit)
    return transformed


def walk_path_item(path_item: Any, visit: SchemaVisitor) -> Any:
    """Walk path-level ``parameters`` and every operation of a path item."""
    if not isinstance(path_item, dict):
        return path_item
    transformed = dict(path_item)
    if transformed.get("parameters"):
        transformed["parameters"] = walk_parameters(transformed["parameters"], visit)
    for method in OPERATION_METHODS:
        if transformed.get(method):
            transformed[method] = walk_operation(transformed[method], visit)
    return transformed


def walk_path_items(path_items: Any, visit: SchemaVisitor) -> Any:
    """Walk a ``paths`` or ``webhooks`` map."""
    if not isinstance(path_items, dict):
        return path_items
    return {key: walk_path_item(path_item, visit) for key, path_item in path_items.items()}


def walk_components(components: Any, visit: SchemaVisitor) -> Any:
    """Walk the schema-bearing categories of a *Components Object*.

    ``schemas`` entries are walked as schemas; ``parameters``,
    ``requestBodies``, ``responses``, ``headers`` and ``callbacks`` through
    their container walkers. Other categories (``examples``, ``links``,
    ``securitySchemes``...) are copied as-is.
    """
    if not isinstance(components, dict):
        return components
    transformed = dict(components)
    item_walkers: dict[str, Callable[[Any, SchemaVisitor], Any]] = {
        "schemas": walk_schema,
        "parameters": walk_parameter,
        "requestBodies": walk_request_body,
        "responses": walk_response,
    }
    for category, walker in item_walkers.items():
        items = transformed.get(category)
        if isinstance(items, dict):
            transformed[category] = {
                name: walker(item, visit) for name, item in items.items()
            }
    if transformed.get("headers"):
        transformed["headers"] = walk_headers(transformed["headers"], visit)
    if transformed.get("callbacks"):
        transformed["callbacks"] = walk_callbacks(transformed["callbacks"], visit)
    return transformed


def walk_document(document: dict[str, Any], visit: SchemaVisitor) -> dict[str, Any]:
    """Rewrite ``components``, ``paths`` and ``webhooks`` of *document* in place.

    Args:
        document: An assembled document owned by the caller.
        visit: Transform for a single inline schema.

    Returns:
        The same *document* object, for chaining.
    """
    if document.get("components"):
        document["components"] = walk_components(document["components"], visit)
    document["paths"] = walk_path_items(document.get("paths") or {}, visit)
    webhooks: Optional[dict[str, Any]] = document.get("webhooks")
    if webhooks:
        document["webhooks"] = walk_path_items(webhooks, visit)
    return document
