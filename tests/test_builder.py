"""Tests for specweave.builder."""

from __future__ import annotations

import pytest

from specweave.builder import DocumentBuilder
from specweave.exceptions import InvalidUsageError
from specweave.models import DocumentConfig, dump_model


def _dump(builder: DocumentBuilder) -> dict:
    return dump_model(builder.build())


# ---------------------------------------------------------------------------
# Info and version
# ---------------------------------------------------------------------------


class TestInfo:
    """Test metadata setters."""

    def test_defaults(self) -> None:
        config = DocumentBuilder().build()
        assert isinstance(config, DocumentConfig)
        assert config.openapi == "3.0.0"
        assert config.info == {"title": "", "description": "", "version": "1.0.0", "contact": {}}

    def test_chained_setters(self) -> None:
        data = _dump(
            DocumentBuilder()
            .set_title("Pets")
            .set_description("Pet store")
            .set_version("2.0.0")
            .set_terms_of_service("https://example.com/tos")
            .set_contact("Team", "https://example.com", "team@example.com")
        )
        assert data["info"] == {
            "title": "Pets",
            "description": "Pet store",
            "version": "2.0.0",
            "termsOfService": "https://example.com/tos",
            "contact": {"name": "Team", "url": "https://example.com", "email": "team@example.com"},
        }

    def test_license_only_given_fields(self) -> None:
        data = _dump(DocumentBuilder().set_license("MIT License", identifier="MIT"))
        assert data["info"]["license"] == {"name": "MIT License", "identifier": "MIT"}

    @pytest.mark.parametrize("version", ["3.0.3", "3.1.0", "3.1", "3.2.0-rc1"])
    def test_valid_openapi_version(self, version: str) -> None:
        assert DocumentBuilder().set_openapi_version(version).build().openapi == version

    @pytest.mark.parametrize("version", ["", "3", "latest", "v3.1.0"])
    def test_invalid_openapi_version(self, version: str) -> None:
        with pytest.raises(InvalidUsageError, match="Invalid OpenAPI version"):
            DocumentBuilder().set_openapi_version(version)


# ---------------------------------------------------------------------------
# Servers, docs, tags, webhooks
# ---------------------------------------------------------------------------


class TestStructure:
    """Test servers, external docs, tags and webhooks."""

    def test_servers(self) -> None:
        data = _dump(
            DocumentBuilder()
            .add_server("https://a.example.com")
            .add_server_with_name("prod", "https://b.example.com", "Production")
        )
        assert data["servers"] == [
            {"url": "https://a.example.com"},
            {"name": "prod", "url": "https://b.example.com", "description": "Production"},
        ]

    def test_external_doc(self) -> None:
        data = _dump(DocumentBuilder().set_external_doc("Guide", "https://example.com/guide"))
        assert data["externalDocs"] == {"description": "Guide", "url": "https://example.com/guide"}

    def test_add_tag(self) -> None:
        data = _dump(
            DocumentBuilder()
            .add_tag("Animals")
            .add_tag("Cats", summary="Cats", display_name="Felines", parent="Animals", kind="nav")
        )
        assert data["tags"] == [
            {"name": "Animals"},
            {
                "name": "Cats",
                "summary": "Cats",
                "x-displayName": "Felines",
                "parent": "Animals",
                "kind": "nav",
            },
        ]

    def test_tag_groups(self) -> None:
        data = _dump(DocumentBuilder().set_tag_groups([{"name": "G", "tags": ["A"]}]))
        assert data["x-tagGroups"] == [{"name": "G", "tags": ["A"]}]

    def test_webhook(self) -> None:
        data = _dump(DocumentBuilder().add_webhook("petCreated", "POST", {"summary": "s"}))
        assert data["webhooks"] == {"petCreated": {"post": {"summary": "s"}}}


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------


class TestSecurity:
    """Test security scheme helpers."""

    def test_scheme_helpers(self) -> None:
        schemes = _dump(
            DocumentBuilder()
            .add_bearer_auth()
            .add_basic_auth()
            .add_api_key()
            .add_cookie_auth()
        )["components"]["securitySchemes"]
        assert schemes == {
            "bearer": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
            "basic": {"type": "http", "scheme": "basic"},
            "api_key": {"type": "apiKey", "in": "header", "name": "api_key"},
            "cookie": {"type": "apiKey", "in": "cookie", "name": "connect.sid"},
        }

    def test_oauth2_device_flow(self) -> None:
        flows = {
            "deviceAuthorization": {
                "deviceAuthorizationUrl": "https://auth.example.com/device",
                "tokenUrl": "https://auth.example.com/token",
                "scopes": {},
            }
        }
        data = _dump(DocumentBuilder().add_oauth2({"flows": flows}))
        assert data["components"]["securitySchemes"]["oauth2"] == {"type": "oauth2", "flows": flows}

    def test_security_requirements(self) -> None:
        data = _dump(
            DocumentBuilder()
            .add_security_requirements("bearer")
            .add_security_requirements({"oauth2": ["read"]})
        )
        assert data["security"] == [{"bearer": []}, {"oauth2": ["read"]}]


class TestBuild:
    def test_build_is_independent_snapshot(self) -> None:
        builder = DocumentBuilder().add_tag("A")
        first = builder.build()
        builder.add_tag("B")
        assert [tag.name for tag in first.tags] == ["A"]
        assert [tag.name for tag in builder.build().tags] == ["A", "B"]
