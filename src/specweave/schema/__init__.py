"""Schema-tree traversal and version-aware normalization.

* :mod:`~specweave.schema.nodes` -- Classifies a node as absent, boolean,
  reference or schema; the walker dispatches on this tag.
* :mod:`~specweave.schema.walker` -- Generic recursive rewrite over schema
  nodes and every OpenAPI container that can hold one.
* :mod:`~specweave.schema.normalizer` -- Rewrites legacy ``nullable`` and
  boolean exclusive bounds into their OpenAPI 3.1 forms.
"""

from specweave.schema.normalizer import (
    normalize_document,
    normalize_for_version,
    normalize_schema,
)
from specweave.schema.walker import walk_document, walk_schema

__all__ = [
    "normalize_document",
    "normalize_for_version",
    "normalize_schema",
    "walk_document",
    "walk_schema",
]
