"""Input loading -- read configuration, inventory and document files.

* :func:`load_source` reads a JSON or YAML object from a file or stdin.
* :func:`load_config` validates it as a :class:`~specweave.models.DocumentConfig`.
* :func:`load_inventory` validates it as a :class:`~specweave.models.ScanResult`.

Typical usage::

    from specweave.parser import load_config, load_inventory

    config = load_config("openapi.config.yaml")
    scan = load_inventory("scan.json")
"""

from specweave.parser.loader import load_config, load_inventory, load_source

__all__ = ["load_source", "load_config", "load_inventory"]
