"""Two-level merge of component tables and webhook maps.

Component tables are keyed by category (``schemas``, ``responses``,
``parameters``...) and then by item name. Merging is structural down to
the item level and no further: items are replaced whole, never deep-merged.
On a name collision the *later* source wins, which lets scanned definitions
refresh declared ones. Tags use the opposite policy (see
:mod:`specweave.assembly.tags`).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


def assign_two_levels_deep(
    target: dict[str, Any], *sources: Optional[Mapping[str, Any]]
) -> dict[str, Any]:
    """Merge *sources* into *target*, two levels deep, and return *target*.

    For every top-level key of each source (in order): when both the target
    and the source hold a mapping, the second-level entries are combined with
    the source's entries winning; otherwise the source value replaces the
    target value. ``None`` sources are skipped, and keys a source does not
    mention are left alone.

    Example::

        >>> assign_two_levels_deep({}, {"schemas": {"X": 1}}, {"schemas": {"X": 2, "Y": 3}})
        {'schemas': {'X': 2, 'Y': 3}}
    """
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            current = target.get(key)
            if isinstance(value, Mapping) and isinstance(current, Mapping):
                target[key] = {**current, **value}
            elif isinstance(value, Mapping):
                target[key] = dict(value)
            else:
                target[key] = value
    return target


def merge_components(*tables: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Merge component tables into a new table; later tables win per item name."""
    return assign_two_levels_deep({}, *tables)


def merge_webhooks(
    config_webhooks: Optional[Mapping[str, Any]],
    scanned_webhooks: Optional[Mapping[str, Any]],
) -> Optional[dict[str, Any]]:
    """Merge declared and scanned webhook maps (``name -> method -> operation``).

    Scanned operations replace declared ones with the same name and method.

    Returns:
        The merged map, or ``None`` when neither side was supplied.
    """
    if config_webhooks is None and scanned_webhooks is None:
        return None
    return assign_two_levels_deep({}, config_webhooks, scanned_webhooks)
