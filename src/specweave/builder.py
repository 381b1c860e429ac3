"""Fluent builder for the configuration stream.

:class:`DocumentBuilder` collects the parts of an OpenAPI document a route
scanner cannot discover (metadata, servers, security schemes, declared tags)
and produces a :class:`~specweave.models.DocumentConfig` for
:func:`~specweave.assembly.document.assemble_document`.

Example::

    config = (
        DocumentBuilder()
        .set_title("Pet Store")
        .set_version("1.0.0")
        .set_openapi_version("3.1.0")
        .set_license("MIT License", identifier="MIT")
        .add_server_with_name("prod", "https://api.example.com", "Production")
        .add_bearer_auth()
        .add_tag("Cats", parent="Animals", kind="nav")
        .build()
    )
"""

from __future__ import annotations

import copy
import re
from typing import Any, Optional

from specweave.exceptions import InvalidUsageError
from specweave.models import DocumentConfig
from specweave.versions import DEFAULT_OPENAPI_VERSION

_VERSION_PATTERN = re.compile(r"^\d+\.\d+(\.\d+)?([-+][0-9A-Za-z.-]+)?$")


def _compact(**fields: Any) -> dict[str, Any]:
    """Return *fields* without the entries whose value is ``None``."""
    return {key: value for key, value in fields.items() if value is not None}


class DocumentBuilder:
    """Accumulates configuration with chainable setters.

    Every setter returns ``self``. :meth:`build` returns a fresh
    :class:`~specweave.models.DocumentConfig` and may be called repeatedly;
    later changes to the builder do not affect configs already built.
    """

    def __init__(self) -> None:
        self._document: dict[str, Any] = {
            "openapi": DEFAULT_OPENAPI_VERSION,
            "info": {"title": "", "description": "", "version": "1.0.0", "contact": {}},
            "tags": [],
            "servers": [],
            "components": {},
        }

    # --- info ---

    def set_title(self, title: str) -> DocumentBuilder:
        self._document["info"]["title"] = title
        return self

    def set_description(self, description: str) -> DocumentBuilder:
        self._document["info"]["description"] = description
        return self

    def set_version(self, version: str) -> DocumentBuilder:
        """Set the API version (``info.version``), not the OpenAPI version."""
        self._document["info"]["version"] = version
        return self

    def set_terms_of_service(self, url: str) -> DocumentBuilder:
        self._document["info"]["termsOfService"] = url
        return self

    def set_contact(self, name: str, url: str, email: str) -> DocumentBuilder:
        self._document["info"]["contact"] = {"name": name, "url": url, "email": email}
        return self

    def set_license(
        self, name: str, url: Optional[str] = None, identifier: Optional[str] = None
    ) -> DocumentBuilder:
        """Set ``info.license``.

        ``identifier`` is the OAS 3.1 SPDX license expression. Only the
        arguments that are given appear in the output.
        """
        self._document["info"]["license"] = _compact(name=name, url=url, identifier=identifier)
        return self

    def set_openapi_version(self, version: str) -> DocumentBuilder:
        """Set the target OpenAPI version.

        Raises:
            InvalidUsageError: If *version* is not of the form
                ``major.minor[.patch]``.
        """
        if not isinstance(version, str) or not _VERSION_PATTERN.match(version):
            raise InvalidUsageError(
                f"Invalid OpenAPI version: {version!r}. Expected e.g. '3.0.3' or '3.1.0'."
            )
        self._document["openapi"] = version
        return self

    # --- servers and docs ---

    def add_server(
        self,
        url: str,
        description: Optional[str] = None,
        variables: Optional[dict[str, Any]] = None,
    ) -> DocumentBuilder:
        self._document["servers"].append(
            _compact(url=url, description=description, variables=variables)
        )
        return self

    def add_server_with_name(
        self,
        name: str,
        url: str,
        description: Optional[str] = None,
        variables: Optional[dict[str, Any]] = None,
    ) -> DocumentBuilder:
        """Add a server entry carrying the OAS 3.2 ``name`` field."""
        self._document["servers"].append(
            _compact(name=name, url=url, description=description, variables=variables)
        )
        return self

    def set_external_doc(self, description: str, url: str) -> DocumentBuilder:
        self._document["externalDocs"] = {"description": description, "url": url}
        return self

    # --- tags ---

    def add_tag(
        self,
        name: str,
        description: Optional[str] = None,
        external_docs: Optional[dict[str, Any]] = None,
        summary: Optional[str] = None,
        display_name: Optional[str] = None,
        parent: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> DocumentBuilder:
        """Declare a tag. Declared fields win over scanned ones on merge."""
        self._document["tags"].append(
            _compact(
                name=name,
                description=description,
                externalDocs=external_docs,
                summary=summary,
                parent=parent,
                kind=kind,
                **{"x-displayName": display_name},
            )
        )
        return self

    def set_tag_groups(self, groups: list[dict[str, Any]]) -> DocumentBuilder:
        """Supply ``x-tagGroups`` explicitly, disabling derivation."""
        self._document["x-tagGroups"] = [dict(group) for group in groups]
        return self

    # --- webhooks ---

    def add_webhook(self, name: str, method: str, operation: dict[str, Any]) -> DocumentBuilder:
        """Declare a webhook operation (``webhooks[name][method]``)."""
        webhooks = self._document.setdefault("webhooks", {})
        webhooks.setdefault(name, {})[method.lower()] = dict(operation)
        return self

    # --- security ---

    def add_security(self, name: str, options: dict[str, Any]) -> DocumentBuilder:
        """Register a *Security Scheme Object* under ``components.securitySchemes``."""
        schemes = self._document["components"].setdefault("securitySchemes", {})
        schemes[name] = dict(options)
        return self

    def add_security_requirements(
        self, name: str | dict[str, list[str]], requirements: Optional[list[str]] = None
    ) -> DocumentBuilder:
        """Append a global security requirement."""
        if isinstance(name, dict):
            requirement = dict(name)
        else:
            requirement = {name: list(requirements or [])}
        self._document.setdefault("security", []).append(requirement)
        return self

    def add_bearer_auth(
        self, options: Optional[dict[str, Any]] = None, name: str = "bearer"
    ) -> DocumentBuilder:
        scheme = {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        scheme.update(options or {})
        return self.add_security(name, scheme)

    def add_basic_auth(
        self, options: Optional[dict[str, Any]] = None, name: str = "basic"
    ) -> DocumentBuilder:
        scheme = {"type": "http", "scheme": "basic"}
        scheme.update(options or {})
        return self.add_security(name, scheme)

    def add_api_key(
        self, options: Optional[dict[str, Any]] = None, name: str = "api_key"
    ) -> DocumentBuilder:
        scheme = {"type": "apiKey", "in": "header", "name": name}
        scheme.update(options or {})
        return self.add_security(name, scheme)

    def add_cookie_auth(
        self,
        cookie_name: str = "connect.sid",
        options: Optional[dict[str, Any]] = None,
        security_name: str = "cookie",
    ) -> DocumentBuilder:
        scheme = {"type": "apiKey", "in": "cookie", "name": cookie_name}
        scheme.update(options or {})
        return self.add_security(security_name, scheme)

    def add_oauth2(
        self, options: Optional[dict[str, Any]] = None, name: str = "oauth2"
    ) -> DocumentBuilder:
        """Register an OAuth2 scheme.

        ``options["flows"]`` may include the OAS 3.2 ``deviceAuthorization``
        flow (RFC 8628) next to the classic flows.
        """
        scheme: dict[str, Any] = {"type": "oauth2", "flows": {}}
        scheme.update(options or {})
        return self.add_security(name, scheme)

    # --- result ---

    def build(self) -> DocumentConfig:
        """Return the accumulated configuration as a :class:`DocumentConfig`."""
        return DocumentConfig.model_validate(copy.deepcopy(self._document))
