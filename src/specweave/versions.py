"""OpenAPI version gate.

Several assembly steps change behaviour at OpenAPI 3.1: top-level
``webhooks`` only exist from 3.1 on, and 3.1 adopts JSON Schema 2020-12,
which drops ``nullable`` and boolean ``exclusiveMinimum``/``exclusiveMaximum``.
Version strings come from user configuration, so parsing is lenient: anything
that does not start with two numeric ``major.minor`` parts is treated as a
pre-3.1 document.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_OPENAPI_VERSION = "3.0.0"


def parse_major_minor(version: Optional[str]) -> Optional[tuple[int, int]]:
    """Return ``(major, minor)`` parsed from *version*, or ``None``.

    Only the first two dot-separated parts are considered, so ``"3.1.0"``,
    ``"3.1"`` and ``"3.1.0-rc1"`` all yield ``(3, 1)``.

    Example::

        >>> parse_major_minor("3.1.0")
        (3, 1)
        >>> parse_major_minor("latest") is None
        True
    """
    if not isinstance(version, str):
        return None
    parts = version.strip().split(".")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def is_oas31_or_above(version: Optional[str]) -> bool:
    """Return True when *version* is OpenAPI 3.1 or later.

    Unparseable versions return False, so callers fall back to the legacy
    3.0 behaviour instead of failing.
    """
    parsed = parse_major_minor(version)
    if parsed is None:
        return False
    major, minor = parsed
    return major > 3 or (major == 3 and minor >= 1)
