"""Pydantic models for the two input streams of document assembly.

The assembly engine operates on plain JSON-shaped dicts, because schema trees
and operation objects are open-ended and must round-trip every sibling field
untouched. Pydantic is used only at the boundary, to validate and normalise
what enters the engine:

**Configuration stream** -- authored by the user, usually through
:class:`~specweave.builder.DocumentBuilder` or a JSON/YAML file:
    :class:`DocumentConfig`, :class:`TagObject`, :class:`TagGroup`.

**Inventory stream** -- produced by an external route scanner:
    :class:`RouteRoot`, :class:`RouteDescriptor`, :class:`ScanResult`.

Every model accepts unknown keys (``extra="allow"``) so vendor extensions
(``x-*``) and future OpenAPI fields pass straight through to the document.
Field names follow Python conventions and serialise under their OpenAPI
spelling via aliases; call :meth:`pydantic.BaseModel.model_dump` with
``by_alias=True, exclude_none=True`` to obtain engine-ready dicts.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from specweave.versions import DEFAULT_OPENAPI_VERSION


# --- Tags ---


class TagObject(BaseModel):
    """A tag entry, either declared in configuration or discovered by the scanner.

    ``summary`` (OAS 3.2) and ``x-displayName`` (Redoc extension) carry the
    same meaning; the tag merge mirrors whichever one is set into the other.
    ``parent`` and ``kind`` are the OAS 3.2 Enhanced Tags fields used to
    derive ``x-tagGroups``.

    ``name`` is optional at this level because nameless entries are tolerated
    in the input and silently dropped by the merge.

    Example::

        TagObject(name="Cats", summary="Cats", parent="Animals", kind="nav")
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    summary: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="x-displayName")
    description: Optional[str] = None
    external_docs: Optional[dict[str, Any]] = Field(default=None, alias="externalDocs")
    parent: Optional[str] = Field(
        default=None, description="Name of the enclosing tag (OAS 3.2 Enhanced Tags)"
    )
    kind: Optional[str] = Field(
        default=None, description="Tag kind, e.g. nav, badge, audience"
    )


class TagGroup(BaseModel):
    """One ``x-tagGroups`` entry: a named bucket of tag names."""

    name: str
    tags: list[str] = Field(default_factory=list)


# --- Configuration stream ---


class DocumentConfig(BaseModel):
    """The user-authored part of the document.

    Holds everything the scanner cannot know: metadata, servers, declared
    components and tags, an optional explicit ``x-tagGroups`` override, and
    the target ``openapi`` version that gates webhook partitioning and schema
    normalization. Unknown keys (``security``, ``x-logo``...) are copied into
    the assembled document unchanged.

    See Also:
        :class:`~specweave.builder.DocumentBuilder`: Fluent construction.
        :func:`~specweave.parser.loader.load_config`: Load from a file.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    openapi: str = Field(
        default=DEFAULT_OPENAPI_VERSION,
        description="Target OpenAPI version (e.g. '3.0.3', '3.1.0')",
    )
    info: dict[str, Any] = Field(default_factory=dict)
    servers: Optional[list[dict[str, Any]]] = None
    components: Optional[dict[str, dict[str, Any]]] = None
    tags: Optional[list[TagObject]] = None
    tag_groups: Optional[list[TagGroup]] = Field(
        default=None,
        alias="x-tagGroups",
        description="Explicit tag groups; disables derivation when set",
    )
    webhooks: Optional[dict[str, dict[str, Any]]] = None
    security: Optional[list[dict[str, list[str]]]] = None
    external_docs: Optional[dict[str, Any]] = Field(default=None, alias="externalDocs")


# --- Inventory stream ---


class RouteRoot(BaseModel):
    """Routing coordinates of a scanned operation.

    ``method``, ``path``, ``isWebhook`` and ``webhookName`` steer the route
    partitioner and never appear in the emitted operation. Any other key set
    here is merged into the operation object.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    path: str
    method: str
    is_webhook: bool = Field(default=False, alias="isWebhook")
    webhook_name: Optional[str] = Field(default=None, alias="webhookName")


class RouteDescriptor(BaseModel):
    """One scanned HTTP operation.

    Apart from ``root``, all fields are the OpenAPI *Operation Object*
    (``operationId``, ``tags``, ``parameters``, ``requestBody``,
    ``responses``, ``callbacks``...) and are kept as extra fields so the
    schema trees inside them stay plain dicts.

    Example::

        RouteDescriptor(
            root=RouteRoot(path="/pets", method="get"),
            operationId="listPets",
            responses={"200": {"description": "OK"}},
        )
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root: RouteRoot


class ScanResult(BaseModel):
    """The flat inventory produced by one scan.

    Attributes:
        routes: Scanned operations, in discovery order.
        schemas: Named schema definitions for ``components.schemas``.
        tags: Tag metadata discovered on controllers.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    routes: list[RouteDescriptor] = Field(default_factory=list)
    schemas: dict[str, Any] = Field(default_factory=dict)
    tags: list[TagObject] = Field(default_factory=list)


def dump_model(model: BaseModel) -> dict[str, Any]:
    """Serialise *model* to an engine-ready dict (aliases on, ``None`` dropped)."""
    return model.model_dump(by_alias=True, exclude_none=True)
