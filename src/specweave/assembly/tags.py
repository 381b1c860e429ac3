"""Merge tag metadata and derive ``x-tagGroups``.

Tags reach the document from two places: the user's configuration and the
scanner (controller-level tag metadata). :func:`merge_tags` reconciles them
by name with the configuration taking precedence, the reverse of the
component merge, where scanned items win.

Display names exist twice in the wild: OAS 3.2 tag ``summary`` and the Redoc
``x-displayName`` extension. Both are treated as one value and mirrored, so
whichever field a renderer reads, it finds the same text.

:func:`build_tag_groups` then derives the Redoc ``x-tagGroups`` navigation
structure from the OAS 3.2 Enhanced Tags ``parent`` field and from the tags
that operations actually use.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from specweave.schema.walker import OPERATION_METHODS

logger = logging.getLogger(__name__)

DISPLAY_NAME_KEY = "x-displayName"

_FILLABLE_FIELDS = ("description", "externalDocs", "parent", "kind")


def _first_set(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


# --- Mirroring policy ---


def resolve_display_name(existing: dict[str, Any], scanned: dict[str, Any]) -> Optional[str]:
    """Pick the ``x-displayName`` of a merged tag.

    Precedence: existing ``x-displayName``, existing ``summary``, scanned
    ``x-displayName``, scanned ``summary``.
    """
    return _first_set(
        existing.get(DISPLAY_NAME_KEY),
        existing.get("summary"),
        scanned.get(DISPLAY_NAME_KEY),
        scanned.get("summary"),
    )


def resolve_summary(existing: dict[str, Any], scanned: dict[str, Any]) -> Optional[str]:
    """Pick the ``summary`` of a merged tag.

    Precedence: existing ``summary``, existing ``x-displayName``, scanned
    ``summary``, scanned ``x-displayName``.
    """
    return _first_set(
        existing.get("summary"),
        existing.get(DISPLAY_NAME_KEY),
        scanned.get("summary"),
        scanned.get(DISPLAY_NAME_KEY),
    )


def _apply_mirror(tag: dict[str, Any], existing: dict[str, Any], scanned: dict[str, Any]) -> None:
    summary = resolve_summary(existing, scanned)
    display_name = resolve_display_name(existing, scanned)
    if summary is not None:
        tag["summary"] = summary
    if display_name is not None:
        tag[DISPLAY_NAME_KEY] = display_name


# --- Merge ---


def merge_tags(
    config_tags: Optional[Iterable[dict[str, Any]]],
    scanned_tags: Optional[Iterable[dict[str, Any]]],
) -> Optional[list[dict[str, Any]]]:
    """Merge declared and scanned tags by name.

    Declared tags are copied first, in order. A scanned tag with a new name
    is appended; one matching an existing entry only fills
    ``description``, ``externalDocs``, ``parent`` and ``kind`` where the
    entry has none. ``summary`` and ``x-displayName`` are resolved through
    :func:`resolve_summary` / :func:`resolve_display_name` for every tag.
    Tags without a name are skipped.

    Args:
        config_tags: Tags declared in the configuration.
        scanned_tags: Tags discovered by the scanner.

    Returns:
        The merged tags in first-seen order, or ``None`` if there are none.

    Example::

        >>> merge_tags([{"name": "A", "summary": "S"}], None)
        [{'name': 'A', 'summary': 'S', 'x-displayName': 'S'}]
    """
    by_name: dict[str, dict[str, Any]] = {}

    for tag in config_tags or []:
        if not isinstance(tag, dict) or not tag.get("name"):
            logger.debug("Skipping declared tag without a name: %r", tag)
            continue
        merged = dict(tag)
        _apply_mirror(merged, tag, {})
        by_name[tag["name"]] = merged

    for tag in scanned_tags or []:
        if not isinstance(tag, dict) or not tag.get("name"):
            logger.debug("Skipping scanned tag without a name: %r", tag)
            continue
        existing = by_name.get(tag["name"], {"name": tag["name"]})
        merged = dict(existing)
        _apply_mirror(merged, existing, tag)
        for field in _FILLABLE_FIELDS:
            if merged.get(field) is None and tag.get(field) is not None:
                merged[field] = tag[field]
        by_name[tag["name"]] = merged

    return list(by_name.values()) or None


# --- Group derivation ---


def collect_operation_tag_names(
    paths: Optional[dict[str, Any]] = None, webhooks: Optional[dict[str, Any]] = None
) -> list[str]:
    """Return the unique tag names used by operations, in first-seen order.

    Only keys naming an HTTP method are treated as operations. Names are
    stripped of surrounding whitespace; blank and non-string entries are
    ignored.
    """
    names: list[str] = []
    seen: set[str] = set()
    for path_items in (paths, webhooks):
        if not path_items:
            continue
        for path_item in path_items.values():
            if not isinstance(path_item, dict):
                continue
            for key, operation in path_item.items():
                if str(key).lower() not in OPERATION_METHODS or not isinstance(operation, dict):
                    continue
                tags = operation.get("tags")
                if not isinstance(tags, list):
                    continue
                for tag in tags:
                    if not isinstance(tag, str):
                        continue
                    trimmed = tag.strip()
                    if trimmed and trimmed not in seen:
                        seen.add(trimmed)
                        names.append(trimmed)
    return names


def build_tag_groups(
    tags: Optional[list[dict[str, Any]]],
    operation_tag_names: Optional[Iterable[str]] = None,
) -> Optional[list[dict[str, Any]]]:
    """Derive ``x-tagGroups`` from tag parents and operation tags.

    * Each tag with a ``parent`` joins the group named after that parent.
    * Each operation tag that is not the child of some parent gets a group of
      its own, so every visible tag is reachable from the navigation.
    * A group lists its own name first when a tag object with that name
      exists or an operation uses it, then its children in first-seen order.

    Args:
        tags: Merged tag objects.
        operation_tag_names: Tag names used by operations, e.g. from
            :func:`collect_operation_tag_names`.

    Returns:
        A list of ``{"name": ..., "tags": [...]}`` groups, or ``None`` when no
        group results.

    Example::

        >>> build_tag_groups([{"name": "P"}, {"name": "C1", "parent": "P"}])
        [{'name': 'P', 'tags': ['P', 'C1']}]
    """
    tags = [tag for tag in tags or [] if isinstance(tag, dict)]
    op_names: list[str] = []
    for name in operation_tag_names or []:
        if isinstance(name, str) and name.strip() and name.strip() not in op_names:
            op_names.append(name.strip())

    if not tags and not op_names:
        return None

    children_by_group: dict[str, list[str]] = {}
    child_names: set[str] = set()

    for tag in tags:
        parent = tag.get("parent")
        if not parent:
            continue
        child_names.add(tag.get("name"))
        children = children_by_group.setdefault(parent, [])
        if tag.get("name") not in children:
            children.append(tag.get("name"))

    for name in op_names:
        if name not in child_names:
            children_by_group.setdefault(name, [])

    if not children_by_group:
        return None

    # A name used by an operation leads its group even without a tag object.
    leading_names = {tag.get("name") for tag in tags} | set(op_names)
    groups = []
    for group_name, children in children_by_group.items():
        group_tags = [group_name] if group_name in leading_names else []
        group_tags.extend(child for child in children if child not in group_tags)
        groups.append({"name": group_name, "tags": group_tags})
    return groups
