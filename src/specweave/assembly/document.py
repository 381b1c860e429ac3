"""Assemble a complete OpenAPI document from configuration and inventory.

This is the single entry point of the engine. :func:`assemble_document`
runs these steps in order:

1. Partition the scanned routes into ``paths`` and ``webhooks`` for the
   target version (:func:`~specweave.assembly.partitioner.partition_routes`).
2. Merge declared components with the scanned schema table, scanned items
   winning (:func:`~specweave.assembly.components.merge_components`).
3. Merge declared and scanned tags, declared fields winning
   (:func:`~specweave.assembly.tags.merge_tags`), and declared with scanned
   webhooks.
4. Overlay configuration and scan results on the document skeleton.
5. Normalize schemas for OpenAPI 3.1+
   (:func:`~specweave.schema.normalizer.normalize_for_version`).
6. Derive ``x-tagGroups`` unless the configuration supplies them.

Inputs are deep-copied first, so the returned document never shares
structure with the configuration or the inventory, and assembling twice
from the same inputs yields two independent, equal documents.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from specweave.assembly.components import merge_components, merge_webhooks
from specweave.assembly.partitioner import partition_routes
from specweave.assembly.tags import build_tag_groups, collect_operation_tag_names, merge_tags
from specweave.models import DocumentConfig, ScanResult, dump_model
from specweave.schema.normalizer import normalize_for_version
from specweave.versions import DEFAULT_OPENAPI_VERSION

logger = logging.getLogger(__name__)

TAG_GROUPS_KEY = "x-tagGroups"


def assemble_document(config: DocumentConfig, scan: ScanResult) -> dict[str, Any]:
    """Build the final OpenAPI document.

    Args:
        config: The user-authored configuration. Its ``openapi`` field is the
            target version.
        scan: The scanner inventory (routes, schema table, tags).

    Returns:
        A JSON-ready document dict. ``tags``, ``webhooks`` and
        ``x-tagGroups`` are present only when non-empty.

    Example::

        config = DocumentBuilder().set_title("Pets").set_openapi_version("3.1.0").build()
        scan = ScanResult(routes=[...], schemas={"Pet": {...}})
        document = assemble_document(config, scan)
    """
    declared = copy.deepcopy(dump_model(config))
    inventory = copy.deepcopy(dump_model(scan))
    openapi_version = declared.get("openapi", DEFAULT_OPENAPI_VERSION)

    scanned = partition_routes(inventory.get("routes", []), openapi_version)
    scanned["components"] = {"schemas": inventory.get("schemas", {})}

    components = merge_components(declared.pop("components", None), scanned.pop("components"))
    tags = merge_tags(declared.pop("tags", None), inventory.get("tags"))
    webhooks = merge_webhooks(declared.pop("webhooks", None), scanned.pop("webhooks", None))

    document: dict[str, Any] = {"openapi": DEFAULT_OPENAPI_VERSION, "paths": {}}
    document.update(declared)
    document.update(scanned)
    document["components"] = components
    if tags:
        document["tags"] = tags
    if webhooks:
        document["webhooks"] = webhooks

    normalize_for_version(document)

    if document.get(TAG_GROUPS_KEY) is None:
        document.pop(TAG_GROUPS_KEY, None)
        tag_groups = build_tag_groups(
            document.get("tags"),
            collect_operation_tag_names(document.get("paths"), document.get("webhooks")),
        )
        if tag_groups:
            document[TAG_GROUPS_KEY] = tag_groups

    logger.debug(
        "Assembled openapi=%s document: %d paths, %d webhooks, %d tags",
        document["openapi"],
        len(document["paths"]),
        len(document.get("webhooks") or {}),
        len(document.get("tags") or []),
    )
    return document
