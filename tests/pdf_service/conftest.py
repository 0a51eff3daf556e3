"""
Pytest fixtures for PDF service tests.

Playwright is replaced with AsyncMock objects so no Chromium is launched.
"""

import os
from types import SimpleNamespace
from unittest.mock import patch, MagicMock, AsyncMock

# IMPORTANT: Set environment variables BEFORE any imports from pdf_service
# so the cached settings used at import time are deterministic.
os.environ["ENVIRONMENT"] = "development"
os.environ["API_KEY"] = "test-api-key-1234"
os.environ["VALIDATE_BROWSER_ON_STARTUP"] = "false"
os.environ.pop("CHROME_EXECUTABLE_PATH", None)
os.environ.pop("IS_LOCAL", None)
os.environ.pop("RUNNING_IN_CONTAINER", None)

import pytest
from fastapi.testclient import TestClient

from pdf_service.config import PDFServiceSettings, get_settings

FAKE_PDF = b"%PDF-1.4 fake pdf content"
TEST_API_KEY = "test-api-key-1234"


def make_settings(**overrides) -> PDFServiceSettings:
    """Settings built from explicit values only (environment is ignored)."""
    values = {
        "environment": "development",
        "api_key": TEST_API_KEY,
        "validate_browser_on_startup": False,
    }
    values.update(overrides)
    return PDFServiceSettings(**values)


@pytest.fixture
def settings_factory():
    """Build settings with field overrides."""
    return make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def production_settings():
    return make_settings(environment="production")


@pytest.fixture
def mock_playwright():
    """
    Patch async_playwright in the browser module.

    Returns a namespace exposing the factory, driver, browser and page mocks.
    """
    page = AsyncMock()
    page.set_default_timeout = MagicMock()
    page.pdf = AsyncMock(return_value=FAKE_PDF)

    browser = AsyncMock()
    browser.new_page = AsyncMock(return_value=page)

    driver = MagicMock()
    driver.chromium = MagicMock(launch=AsyncMock(return_value=browser))
    driver.stop = AsyncMock()

    with patch("pdf_service.browser.async_playwright") as factory:
        factory.return_value.start = AsyncMock(return_value=driver)
        yield SimpleNamespace(factory=factory, driver=driver, browser=browser, page=page)


def _client_for(app_settings: PDFServiceSettings) -> TestClient:
    from pdf_service.app import app

    app.dependency_overrides[get_settings] = lambda: app_settings
    return TestClient(app)


@pytest.fixture
def client(settings):
    """Test client for a development deployment with an API key configured."""
    from pdf_service.app import app

    yield _client_for(settings)
    app.dependency_overrides.clear()


@pytest.fixture
def production_client(production_settings):
    """Test client for a production deployment."""
    from pdf_service.app import app

    yield _client_for(production_settings)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Authentication headers for test requests."""
    return {"x-api-key": TEST_API_KEY}


@pytest.fixture
def invalid_auth_headers():
    """Invalid authentication headers for testing auth failures."""
    return {"x-api-key": "wrong-key"}
