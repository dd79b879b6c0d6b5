"""
pagedemo — Page Router Tests
=============================

What we test:
    ✅ Handlers return fixed view identifiers, repeatably
    ✅ Routing table holds exactly /index and /login and is read-only
    ✅ HTTP requests render the matching view for every method
    ✅ Unknown paths fall through to the framework 404
"""

import pytest
from pydantic import ValidationError

from pagedemo.routes.pages import (
    PAGE_METHODS,
    PAGE_ROUTES,
    build_router,
    handle_index,
    handle_login,
    view_names,
)
from pagedemo.schemas.page import ModelAndView
from pagedemo.views import VIEW_NAME_HEADER, ViewResolver


class TestPageHandlers:
    """Handler-level checks, no HTTP involved."""

    def test_handle_index_returns_index_view(self):
        result = handle_index()
        assert isinstance(result, ModelAndView)
        assert result.view_name == "index"
        assert result.model == {}

    def test_handle_login_returns_login_view(self):
        result = handle_login()
        assert result.view_name == "login"
        assert result.model == {}

    def test_handlers_are_idempotent(self):
        """Repeated calls always select the same view."""
        assert {handle_index().view_name for _ in range(5)} == {"index"}
        assert {handle_login().view_name for _ in range(5)} == {"login"}
        assert handle_index() == handle_index()

    def test_model_and_view_is_frozen(self):
        result = handle_index()
        with pytest.raises(ValidationError):
            result.view_name = "login"


class TestRoutingTable:

    def test_table_is_exactly_two_paths(self):
        assert dict(PAGE_ROUTES) == {"/index": handle_index, "/login": handle_login}

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PAGE_ROUTES["/admin"] = handle_index

    def test_view_names_follow_table_order(self):
        assert view_names() == ["index", "login"]

    def test_build_router_registers_every_method(self, templates_dir):
        router = build_router(ViewResolver(str(templates_dir)))
        paths = {route.path: route for route in router.routes}
        assert set(paths) == {"/index", "/login"}
        for route in paths.values():
            assert set(PAGE_METHODS) <= route.methods
            assert route.include_in_schema is False


class TestPageEndpoints:
    """HTTP-level checks against the bundled templates."""

    @pytest.mark.asyncio
    async def test_get_index_renders_index_view(self, test_client):
        response = await test_client.get("/index")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers[VIEW_NAME_HEADER] == "index"
        assert "<h1>Welcome</h1>" in response.text

    @pytest.mark.asyncio
    async def test_get_login_renders_login_view(self, test_client):
        response = await test_client.get("/login")
        assert response.status_code == 200
        assert response.headers[VIEW_NAME_HEADER] == "login"
        assert '<form method="post" action="/login">' in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def test_any_method_reaches_page(self, test_client, method):
        """Page paths are not restricted to GET."""
        response = await test_client.request(method, "/login")
        assert response.status_code == 200
        assert response.headers[VIEW_NAME_HEADER] == "login"

    @pytest.mark.asyncio
    async def test_head_index(self, test_client):
        response = await test_client.head("/index")
        assert response.status_code == 200
        assert response.headers[VIEW_NAME_HEADER] == "index"

    @pytest.mark.asyncio
    async def test_repeated_requests_select_same_view(self, test_client):
        views = set()
        for _ in range(3):
            response = await test_client.get("/index")
            views.add(response.headers[VIEW_NAME_HEADER])
        assert views == {"index"}

    @pytest.mark.asyncio
    async def test_unknown_path_is_not_handled(self, test_client):
        response = await test_client.get("/unknown")
        assert response.status_code == 404
        assert VIEW_NAME_HEADER not in response.headers
        assert response.json() == {"detail": "Not Found"}

    @pytest.mark.asyncio
    async def test_root_path_is_not_handled(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pages_hidden_from_openapi(self, test_client):
        response = await test_client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/index" not in paths
        assert "/login" not in paths
        assert "/health" in paths


class TestPageErrors:
    """View resolution failures surface as 500 JSON errors."""

    @pytest.mark.asyncio
    async def test_missing_template_returns_500(self, make_client, templates_dir):
        (templates_dir / "login.html").unlink()
        async with make_client(templates_dir) as client:
            response = await client.get("/login")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "view_not_found"
        assert "login" in body["message"]
        # Template paths stay server-side
        assert str(templates_dir) not in response.text
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_missing_template_leaves_other_page_working(self, make_client, templates_dir):
        (templates_dir / "login.html").unlink()
        async with make_client(templates_dir) as client:
            response = await client.get("/index")
        assert response.status_code == 200
        assert response.headers[VIEW_NAME_HEADER] == "index"

    @pytest.mark.asyncio
    async def test_broken_template_returns_render_error(self, make_client, templates_dir):
        (templates_dir / "index.html").write_text("{% if %}")
        async with make_client(templates_dir) as client:
            response = await client.get("/index")

        assert response.status_code == 500
        assert response.json()["error"] == "view_render_error"
