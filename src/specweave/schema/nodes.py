"""Classification of schema-tree nodes.

A slot that may hold a schema can contain one of several shapes: nothing,
a JSON Schema boolean (``items: false``), a *Reference Object*
(``{"$ref": ...}``), or an inline schema dict. Every traversal site asks
:func:`classify_node` first and only descends into :attr:`NodeKind.SCHEMA`,
which is what keeps reference targets opaque and makes self-referencing
schema graphs safe to walk.
"""

from __future__ import annotations

import enum
from typing import Any

NULL_TYPE = "null"


class NodeKind(str, enum.Enum):
    """Variants of a value found in a schema-bearing slot."""

    ABSENT = "absent"
    BOOLEAN = "boolean"
    REFERENCE = "reference"
    SCHEMA = "schema"
    OTHER = "other"


def classify_node(node: Any) -> NodeKind:
    """Return the :class:`NodeKind` of *node*.

    ``bool`` is tested before anything else because JSON Schema booleans are
    valid schemas in ``items`` and ``additionalProperties``. Values that are
    neither (lists, strings, numbers) are reported as ``OTHER`` and left
    alone by the walker.
    """
    if node is None:
        return NodeKind.ABSENT
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, dict):
        if "$ref" in node:
            return NodeKind.REFERENCE
        return NodeKind.SCHEMA
    return NodeKind.OTHER


def is_schema(node: Any) -> bool:
    """Return True if *node* is an inline schema dict (not a reference)."""
    return classify_node(node) is NodeKind.SCHEMA


def null_type_schema() -> dict[str, Any]:
    """Return a fresh ``{"type": "null"}`` schema."""
    return {"type": NULL_TYPE}


def denotes_null(node: Any) -> bool:
    """Return True if *node* is an inline schema whose ``type`` admits null.

    References never count, even if their target is the null type.
    """
    if not is_schema(node):
        return False
    node_type = node.get("type")
    if isinstance(node_type, list):
        return NULL_TYPE in node_type
    return node_type == NULL_TYPE
