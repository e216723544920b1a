"""Tests for application-level middleware and configuration in visitmap.main."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from visitmap.config import Settings
from visitmap.main import create_app, lifespan


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------


class TestSecurityHeaders:
    @pytest.mark.asyncio
    async def test_x_content_type_options_present(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.headers.get("x-content-type-options") == "nosniff"

    @pytest.mark.asyncio
    async def test_x_frame_options_present(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.headers.get("x-frame-options") == "DENY"

    @pytest.mark.asyncio
    async def test_visitor_list_never_cached(self, client: AsyncClient):
        resp = await client.get("/api/visitor-ip")
        assert resp.headers.get("cache-control") == "no-store"

    @pytest.mark.asyncio
    async def test_security_headers_on_404(self, client: AsyncClient):
        resp = await client.get("/api/no-such-endpoint")
        assert resp.status_code == 404
        assert "x-content-type-options" in resp.headers
        assert "cache-control" in resp.headers


# ---------------------------------------------------------------------------
# CORS headers
# ---------------------------------------------------------------------------


class TestCORSHeaders:
    @pytest.mark.asyncio
    async def test_cors_headers_on_options_request(self, client: AsyncClient):
        resp = await client.options(
            "/api/visitor-ip",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.status_code in (200, 204)
        assert "access-control-allow-origin" in resp.headers

    @pytest.mark.asyncio
    async def test_cors_allow_origin_present_on_get(self, client: AsyncClient):
        resp = await client.get(
            "/api/visitor-ip",
            headers={"Origin": "https://example.com"},
        )
        assert "access-control-allow-origin" in resp.headers


# ---------------------------------------------------------------------------
# OpenAPI docs
# ---------------------------------------------------------------------------


class TestOpenAPIDocs:
    @pytest.mark.asyncio
    async def test_openapi_schema_contains_paths(self, client: AsyncClient):
        resp = await client.get("/openapi.json")
        assert resp.status_code == 200
        paths = resp.json()["paths"]
        assert "/api/visitor-ip" in paths
        assert "/api/visitor-map" in paths

    @pytest.mark.asyncio
    async def test_docs_disabled_in_production(self):
        app = create_app(Settings(environment="production"))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            assert (await ac.get("/docs")).status_code == 404
            assert (await ac.get("/openapi.json")).status_code == 404


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class TestCreateApp:
    def test_each_app_owns_one_visit_log(self):
        first = create_app(Settings())
        second = create_app(Settings())
        assert first.state.visit_log is not second.state.visit_log

    def test_visit_log_bound_from_settings(self):
        app = create_app(Settings(visit_log_max_records=5))
        assert app.state.visit_log.max_records == 5

    def test_zero_max_records_gives_unbounded_log(self):
        app = create_app(Settings(visit_log_max_records=0))
        assert app.state.visit_log.max_records is None


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_rejects_unbounded_log_in_production(self):
        app = create_app(Settings(environment="production", visit_log_max_records=0))
        with pytest.raises(RuntimeError, match="VISIT_LOG_MAX_RECORDS"):
            async with lifespan(app):
                pass

    @pytest.mark.asyncio
    async def test_unbounded_log_warns_in_development(self, caplog):
        app = create_app(Settings(environment="development", visit_log_max_records=0))
        with caplog.at_level(logging.WARNING, logger="visitmap.main"):
            async with lifespan(app):
                pass
        assert "unbounded" in caplog.text
