"""Document commands -- assemble and normalize OpenAPI documents.

Provides two commands on the root ``specweave`` app:

* ``specweave assemble CONFIG INVENTORY`` -- run the full assembly pipeline
  over a configuration file and a scanned route inventory.
* ``specweave normalize DOCUMENT`` -- apply version-aware schema
  normalization to an existing document.

Both write the resulting document to stdout (or ``--output``) and report
problems on stderr, exiting with the code of the
:class:`~specweave.exceptions.SpecweaveError` that stopped them.
"""

from __future__ import annotations

from typing import Optional

import typer

from specweave.exceptions import SpecweaveError
from specweave.output import OutputFormat, debug, error, success, warning, write_document
from specweave.versions import is_oas31_or_above, parse_major_minor


def _check_version(version: str) -> None:
    """Warn when *version* will be handled as a legacy 3.0 document."""
    if parse_major_minor(version) is None:
        warning(f"Unrecognised OpenAPI version {version!r}; keeping 3.0 schema idioms.")


def _fail(exc: SpecweaveError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def assemble_command(
    config_path: str = typer.Argument(..., help="Configuration file (JSON or YAML), or '-' for stdin."),
    inventory_path: str = typer.Argument(..., help="Scanned route inventory (JSON or YAML)."),
    openapi: Optional[str] = typer.Option(
        None, "--openapi", help="Override the target OpenAPI version from the configuration."
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", "-f", help="Output format.", case_sensitive=False
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the document to this file instead of stdout."
    ),
) -> None:
    """Assemble an OpenAPI document from configuration and a scanned inventory.

    Example::

        specweave assemble openapi.config.yaml scan.json --format yaml -o openapi.yaml
    """
    from specweave.assembly import assemble_document
    from specweave.parser import load_config, load_inventory

    try:
        config = load_config(config_path)
        scan = load_inventory(inventory_path)
    except SpecweaveError as exc:
        raise _fail(exc) from None

    if openapi is not None:
        config = config.model_copy(update={"openapi": openapi})
    _check_version(config.openapi)

    document = assemble_document(config, scan)
    debug(
        f"openapi={document['openapi']} paths={len(document['paths'])} "
        f"webhooks={len(document.get('webhooks') or {})}"
    )
    write_document(document, fmt, output_file)
    if output_file:
        success(f"Wrote {output_file}")


def normalize_command(
    document_path: str = typer.Argument(..., help="OpenAPI document (JSON or YAML), or '-' for stdin."),
    openapi: Optional[str] = typer.Option(
        None, "--openapi", help="Target version; defaults to the document's 'openapi' field."
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", "-f", help="Output format.", case_sensitive=False
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the document to this file instead of stdout."
    ),
) -> None:
    """Rewrite legacy nullable/exclusive-bound idioms for OpenAPI 3.1+.

    When ``--openapi`` is given, the document's ``openapi`` field is updated
    to match. Below 3.1 the document is written back unchanged.

    Example::

        specweave normalize openapi.json --openapi 3.1.0 -o openapi-3.1.json
    """
    from specweave.parser import load_source
    from specweave.schema import normalize_for_version

    try:
        document = load_source(document_path)
    except SpecweaveError as exc:
        raise _fail(exc) from None

    if openapi is not None:
        document["openapi"] = openapi
    version = str(document.get("openapi", ""))
    _check_version(version)
    if not is_oas31_or_above(version):
        debug(f"openapi={version!r} is below 3.1; nothing to rewrite")

    normalize_for_version(document, version)
    write_document(document, fmt, output_file)
    if output_file:
        success(f"Wrote {output_file}")
