"""Document assembly -- combine configuration and scanned inventory.

* :mod:`~specweave.assembly.partitioner` -- Group flat route descriptors
  into ``paths`` and (at OpenAPI 3.1+) ``webhooks``.
* :mod:`~specweave.assembly.tags` -- Merge declared and scanned tags and
  derive ``x-tagGroups``.
* :mod:`~specweave.assembly.components` -- Two-level merge of component
  tables and webhook maps.
* :mod:`~specweave.assembly.document` -- The :func:`assemble_document`
  pipeline tying the above together with schema normalization.
"""

from specweave.assembly.components import merge_components, merge_webhooks
from specweave.assembly.document import assemble_document
from specweave.assembly.partitioner import partition_routes
from specweave.assembly.tags import build_tag_groups, merge_tags

__all__ = [
    "assemble_document",
    "build_tag_groups",
    "merge_components",
    "merge_tags",
    "merge_webhooks",
    "partition_routes",
]
