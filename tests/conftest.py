"""Shared test fixtures for specweave.

Provides the petstore inventory and configuration fixtures used across the
assembly, loader and CLI tests, and resets global output and logging state
between tests. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from specweave.models import DocumentConfig, ScanResult
from specweave.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the specweave logger after every test.

    The CLI callback attaches a Rich logging handler bound to the stderr
    stream of the invocation. Under ``CliRunner`` that stream is closed when
    the test ends, so the handler must not leak into later tests.
    """
    yield
    reset_output()
    logger = logging.getLogger("specweave")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Raw fixtures (plain dicts loaded from files)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_scan_raw() -> dict[str, Any]:
    """Load the raw petstore inventory dict."""
    with open(FIXTURES_DIR / "petstore_scan.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_config_raw() -> dict[str, Any]:
    """Load the raw petstore configuration dict (targets OpenAPI 3.1.0)."""
    with open(FIXTURES_DIR / "petstore_config.yaml") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_scan(petstore_scan_raw: dict[str, Any]) -> ScanResult:
    """The petstore inventory as a validated ScanResult."""
    return ScanResult.model_validate(petstore_scan_raw)


@pytest.fixture
def petstore_config_31(petstore_config_raw: dict[str, Any]) -> DocumentConfig:
    """The petstore configuration targeting OpenAPI 3.1.0."""
    return DocumentConfig.model_validate(petstore_config_raw)


@pytest.fixture
def petstore_config_30(petstore_config_raw: dict[str, Any]) -> DocumentConfig:
    """The petstore configuration retargeted to OpenAPI 3.0.3."""
    return DocumentConfig.model_validate({**petstore_config_raw, "openapi": "3.0.3"})
