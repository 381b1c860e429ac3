"""Load configuration, inventory and document files from disk or stdin.

This module is the only place specweave touches the filesystem on the input
side. It supports both JSON and YAML with format detection by extension and,
failing that, by content.

The public functions are:

* :func:`load_source` -- Read and parse a JSON/YAML object from a path or ``-``.
* :func:`load_config` -- :func:`load_source` plus validation into a
  :class:`~specweave.models.DocumentConfig`.
* :func:`load_inventory` -- :func:`load_source` plus validation into a
  :class:`~specweave.models.ScanResult`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from specweave.exceptions import ConfigError, InputParseError
from specweave.models import DocumentConfig, ScanResult

logger = logging.getLogger(__name__)


def load_source(source: str) -> dict[str, Any]:
    """Load a JSON or YAML object from a file path, or from stdin for ``'-'``.

    Args:
        source: A file path, or ``'-'`` for stdin.

    Returns:
        The parsed object as a dictionary.

    Raises:
        InputParseError: If the source cannot be read or parsed, or does not
            contain an object.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def load_config(source: str) -> DocumentConfig:
    """Load and validate a configuration file.

    Raises:
        InputParseError: If the file cannot be read or parsed.
        ConfigError: If its content is not a valid configuration.
    """
    raw = load_source(source)
    try:
        return DocumentConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def load_inventory(source: str) -> ScanResult:
    """Load and validate a scanned route inventory.

    Raises:
        InputParseError: If the file cannot be read or parsed.
        ConfigError: If its content is not a valid inventory.
    """
    raw = load_source(source)
    try:
        scan = ScanResult.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid inventory in {source}: {exc}") from exc
    logger.debug(
        "Loaded inventory %s: %d routes, %d schemas, %d tags",
        source,
        len(scan.routes),
        len(scan.schemas),
        len(scan.tags),
    )
    return scan


def _load_from_stdin() -> dict[str, Any]:
    """Read an object from stdin, trying JSON then YAML.

    Raises:
        InputParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise InputParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise InputParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load an object from a local file.

    ``.json``, ``.yaml`` and ``.yml`` extensions select the parser; other
    extensions fall back to content-based detection.

    Raises:
        InputParseError: If the file is missing, unreadable, empty, or
            cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise InputParseError(f"File not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputParseError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise InputParseError(f"File is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and gives
    better error messages for JSON input.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        InputParseError: If the content cannot be parsed as either format,
            or the top-level value is not an object.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise InputParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_object(result)

    msg = "Failed to parse input as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise InputParseError(msg)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise InputParseError(f"Input must be a JSON/YAML object (got {kind})")
    return result
