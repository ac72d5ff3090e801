"""Tests for app factory and middleware."""

from fastapi.testclient import TestClient

from leadzap.api.factory import create_app


class TestRoutes:
    def test_health_available(self):
        client = TestClient(create_app())
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_unknown_route_404(self):
        client = TestClient(create_app())
        assert client.get("/tasks/health").status_code == 404

    def test_asgi_entrypoint(self):
        from leadzap.api.app import app

        assert TestClient(app).get("/health").status_code == 200


class TestCorrelationId:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id(self):
        client = TestClient(create_app())
        response = client.get("/health")
        cid = response.headers["X-Correlation-ID"]
        assert len(cid) == 36  # UUID length

    def test_preserves_incoming_correlation_id(self):
        client = TestClient(create_app())
        response = client.get("/health", headers={"X-Correlation-ID": "test-123"})
        assert response.headers["X-Correlation-ID"] == "test-123"

    def test_preflight_gets_correlation_id(self):
        client = TestClient(create_app())
        response = client.options("/health", headers={"X-Correlation-ID": "pre-1"})
        assert response.headers["X-Correlation-ID"] == "pre-1"
