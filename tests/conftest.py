"""
pagedemo — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── templates_dir: temporary template directory with both page views
    ├── make_client:   builds an HTTPX AsyncClient for an app over any templates dir
    └── test_client:   HTTPX AsyncClient for the module-level application
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"  # never trips during the suite

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


PAGE_TEMPLATE = "<html><body><h1>{{ view_name }} page</h1></body></html>"


@pytest.fixture
def templates_dir(tmp_path):
    """
    Provides a temporary directory holding minimal index/login templates.

    Tests that need a missing or broken view delete or overwrite a file.
    """
    root = tmp_path / "templates"
    root.mkdir()
    (root / "index.html").write_text(PAGE_TEMPLATE)
    (root / "login.html").write_text(PAGE_TEMPLATE)
    return root


@pytest.fixture
def make_client():
    """
    Factory for async clients bound to a fresh app over `templates_dir`.

    Usage:
        async with make_client(templates_dir) as client:
            response = await client.get("/index")

    Extra keyword arguments go to ASGITransport
    (e.g. raise_app_exceptions=False to read catch-all 500 bodies).
    """
    from pagedemo.main import create_app
    from pagedemo.views import ViewResolver

    def _make(templates_dir, **transport_options):
        app = create_app(view_resolver=ViewResolver(str(templates_dir)))
        transport = ASGITransport(app=app, **transport_options)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for the bundled application.

    Uses ASGITransport to route requests directly to the app, no server.
    """
    from pagedemo.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
