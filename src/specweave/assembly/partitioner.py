"""Group scanned route descriptors into ``paths`` and ``webhooks``.

A scanner emits one flat descriptor per operation; each carries a ``root``
record with its routing coordinates::

    {"root": {"path": "/pets", "method": "get"}, "operationId": "listPets", ...}
    {"root": {"path": "/new-pet", "method": "post", "isWebhook": True,
              "webhookName": "newPet"}, ...}

:func:`partition_routes` folds them into the nested ``path -> method ->
operation`` maps of an OpenAPI document. Webhooks are a top-level field only
from OpenAPI 3.1 on, so for earlier targets webhook-flagged routes are
emitted under ``paths`` like any other route.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from specweave.versions import is_oas31_or_above

logger = logging.getLogger(__name__)

ROUTING_KEYS = frozenset({"method", "path", "isWebhook", "webhookName"})
"""``root`` keys that steer partitioning and never reach the operation."""


def sort_keys_lexicographically(obj: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *obj* with its top-level keys in sorted order."""
    return {key: obj[key] for key in sorted(obj)}


def _build_operation(route: dict[str, Any]) -> dict[str, Any]:
    """Merge a descriptor's operation fields with its non-routing root fields."""
    merged = {key: value for key, value in route.items() if key != "root"}
    merged.update(
        (key, value) for key, value in route["root"].items() if key not in ROUTING_KEYS
    )
    return sort_keys_lexicographically(merged)


def _group_routes(
    routes: Iterable[dict[str, Any]], group_key: str, fallback_key: Optional[str] = None
) -> dict[str, dict[str, Any]]:
    """Group *routes* by a root field, then key each group by method.

    Group and method keys keep first-seen order; a later route with the same
    group and method replaces the earlier operation.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for route in routes:
        root = route["root"]
        key = root.get(group_key)
        if not key and fallback_key:
            key = root.get(fallback_key)
        methods = grouped.setdefault(key, {})
        if root.get("method") in methods:
            logger.debug("Route %s %s replaces an earlier definition", root.get("method"), key)
        methods[root.get("method")] = _build_operation(route)
    return grouped


def partition_routes(
    routes: Iterable[dict[str, Any]], openapi_version: Optional[str] = None
) -> dict[str, Any]:
    """Split route descriptors into ``paths`` and ``webhooks`` maps.

    Args:
        routes: Route descriptor dicts in scan order. Entries without a
            ``root`` record are ignored.
        openapi_version: Target OpenAPI version. Webhooks are separated only
            when it is 3.1 or later.

    Returns:
        ``{"paths": {...}}``, plus ``"webhooks"`` when at least one webhook
        route was partitioned.

    Example::

        >>> partition_routes([{"root": {"path": "/a", "method": "get"}, "x": 1}])
        {'paths': {'/a': {'get': {'x': 1}}}}
    """
    rooted = [route for route in routes if isinstance(route, dict) and route.get("root")]

    if is_oas31_or_above(openapi_version):
        webhook_routes = [route for route in rooted if route["root"].get("isWebhook")]
        path_routes = [route for route in rooted if not route["root"].get("isWebhook")]
    else:
        webhook_routes = []
        path_routes = rooted

    result: dict[str, Any] = {"paths": _group_routes(path_routes, "path")}
    webhooks = _group_routes(webhook_routes, "webhookName", fallback_key="path")
    if webhooks:
        result["webhooks"] = webhooks

    logger.debug(
        "Partitioned %d routes into %d paths and %d webhooks",
        len(rooted),
        len(result["paths"]),
        len(webhooks),
    )
    return result
