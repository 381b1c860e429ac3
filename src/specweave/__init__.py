"""specweave -- Assemble OpenAPI documents from configuration and scanned routes.

This package merges two streams of structured data into one OpenAPI document:
a user-authored *configuration* (info, servers, declared components and tags)
and a scanner-produced *inventory* (routes, schemas, tag metadata). The
assembled document is then normalized for its target ``openapi`` version,
rewriting legacy ``nullable`` and boolean exclusive-bound idioms when the
target is 3.1 or later.

Typical usage::

    from specweave import DocumentBuilder, assemble_document
    from specweave.models import ScanResult

    config = DocumentBuilder().set_title("Pets").set_openapi_version("3.1.0").build()
    document = assemble_document(config, ScanResult(routes=routes, schemas=schemas))

Modules:
    assembly: Route partitioning, tag and component merging, document assembly.
    schema: Schema-tree walker and the version-aware normalizer.
    builder: Fluent builder for the configuration stream.
    models: Pydantic models for the configuration and inventory boundaries.
    versions: OpenAPI version gate.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from specweave.assembly.document import assemble_document  # noqa: E402
from specweave.builder import DocumentBuilder  # noqa: E402

__all__ = ["__version__", "assemble_document", "DocumentBuilder"]
