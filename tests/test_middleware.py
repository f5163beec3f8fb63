# =============================================================================
# tests/test_middleware.py - Middleware Chain Tests
# =============================================================================
# Tests for request ids, client IP resolution, error recovery, access
# logging and the CORS policy.
#
# Run with: pytest tests/test_middleware.py -v
# =============================================================================

import logging

import pytest
from fastapi import Request

from app.middleware import REQUEST_ID_HEADER, resolve_client_ip

# Matches the test_settings fixture
FRONTEND_ORIGIN = "http://localhost:5173"


def make_request(headers: dict[str, str], client=("10.0.0.9", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


@pytest.fixture
def echo_app(app):
    """The app plus two diagnostic routes."""

    async def echo_state(request: Request):
        return {
            "client_ip": request.state.client_ip,
            "request_id": request.state.request_id,
        }

    async def explode():
        raise RuntimeError("kaboom")

    app.add_api_route("/api/_echo", echo_state)
    app.add_api_route("/api/_explode", explode)
    return app


# =============================================================================
# Client IP
# =============================================================================

class TestResolveClientIp:
    """Tests for resolve_client_ip."""

    def test_true_client_ip_wins(self):
        request = make_request({
            "True-Client-IP": "198.51.100.1",
            "X-Real-IP": "198.51.100.2",
            "X-Forwarded-For": "198.51.100.3",
        })

        assert resolve_client_ip(request) == "198.51.100.1"

    def test_real_ip(self):
        request = make_request({"X-Real-IP": "198.51.100.2", "X-Forwarded-For": "198.51.100.3"})

        assert resolve_client_ip(request) == "198.51.100.2"

    def test_forwarded_for_first_hop(self):
        request = make_request({"X-Forwarded-For": "203.0.113.5, 10.0.0.1, 10.0.0.2"})

        assert resolve_client_ip(request) == "203.0.113.5"

    def test_falls_back_to_peer(self):
        assert resolve_client_ip(make_request({})) == "10.0.0.9"

    def test_no_peer(self):
        assert resolve_client_ip(make_request({}, client=None)) is None

    def test_resolved_ip_on_request_state(self, echo_app, client):
        response = client.get("/api/_echo", headers={"X-Real-IP": "198.51.100.7"})

        assert response.json()["client_ip"] == "198.51.100.7"


# =============================================================================
# Request IDs
# =============================================================================

class TestRequestId:
    """Tests for the request-id middleware."""

    def test_generated_and_echoed(self, client):
        response = client.get("/api/health")

        assert response.headers[REQUEST_ID_HEADER]

    def test_unique_per_request(self, client):
        first = client.get("/api/health").headers[REQUEST_ID_HEADER]
        second = client.get("/api/health").headers[REQUEST_ID_HEADER]

        assert first != second

    def test_incoming_id_reused(self, echo_app, client):
        response = client.get("/api/_echo", headers={REQUEST_ID_HEADER: "abc-123"})

        assert response.headers[REQUEST_ID_HEADER] == "abc-123"
        assert response.json()["request_id"] == "abc-123"

    def test_present_on_error_responses(self, client):
        response = client.get("/api/users/abc")

        assert response.status_code == 400
        assert response.headers[REQUEST_ID_HEADER]


# =============================================================================
# Error Recovery
# =============================================================================

class TestRecovery:
    """Unhandled exceptions become 500 envelopes."""

    def test_unhandled_error_returns_500(self, echo_app, client):
        response = client.get("/api/_explode")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}

    def test_unhandled_error_logged(self, echo_app, client, caplog):
        caplog.set_level(logging.ERROR, logger="app.middleware")

        client.get("/api/_explode")

        records = [r for r in caplog.records if r.name == "app.middleware" and r.levelno == logging.ERROR]
        assert records
        assert "kaboom" in records[0].getMessage()
        assert records[0].exc_info is not None

    def test_server_keeps_serving(self, echo_app, client):
        client.get("/api/_explode")

        response = client.get("/api/health")

        assert response.status_code == 200


# =============================================================================
# Access Log
# =============================================================================

class TestAccessLog:
    """One log line per request."""

    def test_request_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.get("/api/users/9999")

        messages = [r.getMessage() for r in caplog.records if r.name == "app.middleware"]
        assert any('"GET /api/users/9999" 404' in m for m in messages)

    def test_log_record_carries_request_id(self, client, caplog):
        caplog.set_level(logging.INFO, logger="app.middleware")

        client.get("/api/health", headers={REQUEST_ID_HEADER: "trace-me"})

        records = [r for r in caplog.records if r.name == "app.middleware"]
        assert any(getattr(r, "request_id", None) == "trace-me" for r in records)


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """The configured frontend origin is the only allowed origin."""

    def preflight(self, client, origin, method="POST", headers="Content-Type"):
        return client.options(
            "/api/users",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": method,
                "Access-Control-Request-Headers": headers,
            },
        )

    def test_preflight_allowed_origin(self, client):
        response = self.preflight(client, FRONTEND_ORIGIN)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-max-age"] == "300"
        for method in ("GET", "POST", "PUT", "DELETE", "OPTIONS"):
            assert method in response.headers["access-control-allow-methods"]

    def test_preflight_auth_headers_allowed(self, client):
        response = self.preflight(client, FRONTEND_ORIGIN, headers="Authorization, X-CSRF-Token")

        assert response.status_code == 200

    def test_preflight_unknown_header_rejected(self, client):
        response = self.preflight(client, FRONTEND_ORIGIN, headers="X-Something-Else")

        assert response.status_code == 400

    def test_preflight_other_origin_rejected(self, client):
        response = self.preflight(client, "http://evil.example")

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_allowed_origin(self, client):
        response = client.get("/api/users", headers={"Origin": FRONTEND_ORIGIN})

        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["access-control-expose-headers"] == "Link"

    def test_simple_request_other_origin(self, client):
        response = client.get("/api/users", headers={"Origin": "http://evil.example"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers
