"""
DevCamper Backend — Bootcamp Route & Middleware Tests
=======================================================

What:  Endpoint tests through the full middleware stack (no server, no DB).
How:   HTTPX AsyncClient over ASGITransport.

What we test:
    ✅ Each CRUD route answers 200 with {"success": true, "msg": ...}
    ✅ Unknown routes and wrong methods use the error envelope
    ✅ X-Request-ID is generated, echoed, or replaced when unsafe
    ✅ One access log line per request, unexpected 500s included; /health is skipped
    ✅ /health reports database connectivity
"""

import logging

import pytest


ROUTES = [
    ("GET", "/api/v1/bootcamps", "Show all bootcamps"),
    ("GET", "/api/v1/bootcamps/5d713995b721c3bb38c1f5d0", "display bootcamp"),
    ("POST", "/api/v1/bootcamps", "Create new bootcamp"),
    ("PUT", "/api/v1/bootcamps/5d713995b721c3bb38c1f5d0", "Update bootcamp"),
    ("DELETE", "/api/v1/bootcamps/5d713995b721c3bb38c1f5d0", "delete bootcamp"),
]


class TestBootcampRoutes:
    """Every handler is a stub returning the fixed success envelope."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,url,msg", ROUTES)
    async def test_route_returns_success_envelope(self, test_client, method, url, msg):
        response = await test_client.request(method, url)

        assert response.status_code == 200
        assert response.json() == {"success": True, "msg": msg}

    @pytest.mark.asyncio
    async def test_id_routes_accept_any_id_format(self, test_client):
        """Stubs do not validate ids, so a non-ObjectId still gets 200."""
        response = await test_client.get("/api/v1/bootcamps/not-an-object-id")

        assert response.status_code == 200
        assert response.json()["success"] is True

    @pytest.mark.asyncio
    async def test_create_ignores_request_body(self, test_client):
        response = await test_client.post("/api/v1/bootcamps", json={"name": "Devworks"})

        assert response.status_code == 200
        assert response.json()["msg"] == "Create new bootcamp"


class TestErrorEnvelope:
    """Framework errors go through the same normalizer as application errors."""

    @pytest.mark.asyncio
    async def test_unknown_route_returns_404_envelope(self, test_client):
        response = await test_client.get("/api/v1/courses")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    @pytest.mark.asyncio
    async def test_wrong_method_returns_405_envelope(self, test_client):
        response = await test_client.patch("/api/v1/bootcamps/123")

        assert response.status_code == 405
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Method Not Allowed"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generates_request_id(self, test_client):
        response = await test_client.get("/api/v1/bootcamps")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoes_client_request_id(self, test_client):
        response = await test_client.get(
            "/api/v1/bootcamps", headers={"X-Request-ID": "trace-123"}
        )

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("supplied", [
        "trace 123",
        "x" * 65,
        "<script>alert(1)</script>",
    ])
    async def test_replaces_unsafe_client_request_id(self, test_client, supplied):
        response = await test_client.get(
            "/api/v1/bootcamps", headers={"X-Request-ID": supplied}
        )

        rid = response.headers["X-Request-ID"]
        assert rid != supplied
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_accepts_max_length_token(self, test_client):
        supplied = "a" * 64

        response = await test_client.get(
            "/api/v1/bootcamps", headers={"X-Request-ID": supplied}
        )

        assert response.headers["X-Request-ID"] == supplied


class TestAccessLogging:

    @pytest.mark.asyncio
    async def test_logs_method_url_status_and_timing(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="devcamper.access")

        await test_client.get("/api/v1/bootcamps?page=2")

        records = [r for r in caplog.records if r.name == "devcamper.access"]
        assert len(records) == 1
        record = records[0]
        assert record.levelno == logging.INFO
        assert record.method == "GET"
        assert record.url == "/api/v1/bootcamps?page=2"
        assert record.status == 200
        assert record.duration_ms >= 0
        assert record.content_length > 0
        assert "GET /api/v1/bootcamps?page=2 200" in record.getMessage()

    @pytest.mark.asyncio
    async def test_client_errors_log_at_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="devcamper.access")

        await test_client.get("/nowhere")

        records = [r for r in caplog.records if r.name == "devcamper.access"]
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_is_logged_with_request_id(self, app, test_client, caplog):
        @app.get("/api/v1/bootcamps-broken")
        async def broken():
            raise RuntimeError("boom")

        caplog.set_level(logging.INFO, logger="devcamper.access")

        response = await test_client.get("/api/v1/bootcamps-broken")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "boom"}
        assert len(response.headers["X-Request-ID"]) == 8

        records = [r for r in caplog.records if r.name == "devcamper.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert records[0].status == 500
        assert records[0].request_id == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="devcamper.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "devcamper.access"]


class TestHealth:

    @pytest.mark.asyncio
    async def test_unhealthy_before_startup(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_healthy_when_database_answers(self, app, test_client, mock_connector):
        app.state.mongo = mock_connector

        response = await test_client.get("/health")

        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        mock_connector.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unhealthy_when_ping_fails(self, app, test_client, mock_connector):
        mock_connector.ping.return_value = False
        app.state.mongo = mock_connector

        response = await test_client.get("/health")

        assert response.json()["database"] == "disconnected"
