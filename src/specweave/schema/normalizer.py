"""Rewrite OpenAPI 3.0 schema idioms into their OpenAPI 3.1 equivalents.

OpenAPI 3.1 aligns schemas with JSON Schema 2020-12, which changes two
keywords that 3.0 documents (and most schema generators) still emit:

* ``nullable: true`` no longer exists. Nullability is expressed by adding
  ``"null"`` to ``type`` or a ``{"type": "null"}`` alternative.
* ``exclusiveMinimum`` / ``exclusiveMaximum`` are numbers, not boolean
  modifiers of ``minimum`` / ``maximum``.

:func:`normalize_schema_node` rewrites one schema; :func:`normalize_schema`
and :func:`normalize_document` apply it through the
:mod:`~specweave.schema.walker`. Running the normalizer on its own output
changes nothing.

Example::

    >>> normalize_schema({"type": "string", "nullable": True})
    {'type': ['string', 'null']}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specweave.schema.nodes import NULL_TYPE, denotes_null, null_type_schema
from specweave.schema.walker import walk_document, walk_schema
from specweave.versions import is_oas31_or_above

logger = logging.getLogger(__name__)

_BOUND_PAIRS = (
    ("exclusiveMinimum", "minimum"),
    ("exclusiveMaximum", "maximum"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def migrate_exclusive_bounds(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert boolean exclusive bounds to numeric ones, in place.

    * ``exclusiveMinimum: true`` with a numeric ``minimum`` becomes
      ``exclusiveMinimum: <minimum>`` and ``minimum`` is dropped.
    * Any other boolean ``exclusiveMinimum`` (``false``, or ``true`` with no
      numeric ``minimum``) is dropped.
    * Numeric values are already in 3.1 form and are left alone.

    ``exclusiveMaximum`` / ``maximum`` follow the same rules.

    Args:
        schema: An inline schema owned by the caller.

    Returns:
        The same *schema*.
    """
    for exclusive_key, bound_key in _BOUND_PAIRS:
        flag = schema.get(exclusive_key)
        if not isinstance(flag, bool):
            continue
        if flag and _is_number(schema.get(bound_key)):
            schema[exclusive_key] = schema.pop(bound_key)
        else:
            del schema[exclusive_key]
    return schema


def _append_null_option(members: list[Any]) -> list[Any]:
    if any(denotes_null(member) for member in members):
        return members
    return members + [null_type_schema()]


def migrate_nullable(schema: dict[str, Any]) -> dict[str, Any]:
    """Replace ``nullable`` with a 3.1 null-admitting construct.

    The ``nullable`` key is always removed. When it was ``true``:

    * a schema with ``type`` gets ``"null"`` appended to its type list;
    * otherwise a ``oneOf`` or ``anyOf`` list gets a ``{"type": "null"}``
      member, unless one of its inline members already admits null;
    * otherwise (``allOf`` only, or an untyped schema) the schema is wrapped
      as ``{"anyOf": [schema, {"type": "null"}]}``, since a composition
      cannot be widened in place.

    Args:
        schema: An inline schema owned by the caller.

    Returns:
        *schema* itself, or a new ``anyOf`` wrapper around it.
    """
    was_nullable = schema.get("nullable") is True
    schema.pop("nullable", None)
    if not was_nullable:
        return schema

    if "type" in schema and schema["type"] is not None:
        types = schema["type"] if isinstance(schema["type"], list) else [schema["type"]]
        schema["type"] = types if NULL_TYPE in types else types + [NULL_TYPE]
        return schema

    for keyword in ("oneOf", "anyOf"):
        if isinstance(schema.get(keyword), list):
            schema[keyword] = _append_null_option(schema[keyword])
            return schema

    return {"anyOf": _append_null_option([schema])}


def normalize_schema_node(schema: dict[str, Any]) -> dict[str, Any]:
    """Apply bound migration then nullable migration to one inline schema."""
    return migrate_nullable(migrate_exclusive_bounds(schema))


def normalize_schema(node: Any) -> Any:
    """Normalize *node* and every inline schema nested inside it.

    References are returned unchanged; normalize their targets separately
    (``components.schemas`` is covered by :func:`normalize_document`).
    """
    return walk_schema(node, normalize_schema_node)


def normalize_document(document: dict[str, Any]) -> dict[str, Any]:
    """Normalize every schema in *document*, in place, regardless of version.

    Covers component schemas, parameters, request bodies, responses, headers
    and callbacks, and all operations under ``paths`` and ``webhooks``.
    """
    return walk_document(document, normalize_schema_node)


def normalize_for_version(
    document: dict[str, Any], version: Optional[str] = None
) -> dict[str, Any]:
    """Normalize *document* in place when the target version is 3.1 or later.

    Args:
        document: The assembled document.
        version: Target version; defaults to ``document["openapi"]``.

    Returns:
        The same *document*, rewritten only if the version requires it.
    """
    target = version if version is not None else document.get("openapi")
    if not is_oas31_or_above(target):
        logger.debug("Keeping 3.0 schema idioms for openapi=%r", target)
        return document
    logger.debug("Normalizing schemas for openapi=%r", target)
    return normalize_document(document)
