# tests/test_health.py
from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from app.core.settings import Settings
from app.main import create_app

MAX_HEALTH_LATENCY = 1.5


@pytest.mark.timeout(5)
def test_health_ok(client: TestClient):
    t0 = time.perf_counter()
    r = client.get("/health")
    dt = time.perf_counter() - t0

    assert r.status_code == 200, r.text
    assert dt <= MAX_HEALTH_LATENCY, f"/health too slow: {dt:.3f}s"
    assert r.json() == {"status": "ok"}


@pytest.mark.timeout(5)
def test_health_is_anonymous_and_has_context_headers(client: TestClient):
    r = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert r.status_code == 200
    assert r.headers["x-request-id"] == "abc123"
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-process-time"].endswith("ms")


@pytest.mark.timeout(5)
def test_root_and_uptime(client: TestClient, settings: Settings):
    assert client.get("/").json() == {"name": settings.APP_TITLE, "version": settings.APP_VERSION}
    up = client.get("/health/uptime").json()
    assert up["uptime_seconds"] >= 0


@pytest.mark.timeout(5)
def test_health_db_up(client: TestClient):
    r = client.get("/health/db")
    assert r.status_code == 200, r.text
    assert r.json()["db"] == "up"
    assert r.json()["dialect"] == "sqlite"


@pytest.mark.timeout(5)
def test_unknown_route_and_method_use_envelope(client: TestClient):
    r = client.get("/nope")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False and body["code"] == 404
    assert body["error"]["message"] == "Not Found"
    assert r.headers.get("x-request-id")

    r = client.patch("/health")
    assert r.status_code == 405
    assert r.json()["error"]["message"] == "Method Not Allowed"


@pytest.mark.timeout(5)
def test_openapi_has_bearer_scheme(client: TestClient):
    schema = client.get("/openapi.json").json()
    schemes = schema["components"]["securitySchemes"]
    assert any(s.get("scheme", "").lower() == "bearer" for s in schemes.values()), schemes
    assert "/auth/login" in schema["paths"]


@pytest.mark.timeout(5)
def test_docs_can_be_disabled(settings: Settings):
    app = create_app(settings.model_copy(update={"DISABLE_DOCS": True}))
    with TestClient(app) as c:
        assert c.get("/openapi.json").status_code == 404
        assert c.get("/docs").status_code == 404


@pytest.mark.timeout(10)
def test_apps_have_isolated_stores(settings: Settings):
    """Două aplicații din același proces nu împart store-ul (fără singleton global)."""
    a, b = create_app(settings), create_app(settings)
    with TestClient(a) as ca, TestClient(b) as cb:
        token = a.state.token_issuer.generate_access_token("admin")
        h = {"Authorization": f"Bearer {token}"}
        r = ca.post(
            "/products",
            data={"stockNo": "S1", "stockName": "Only in A", "price": "1", "category": "A"},
            headers=h,
        )
        assert r.status_code == 201, r.text

        assert ca.get("/products/0/10", headers=h).json()["data"]["result"]["recordsTotal"] == 1
        assert cb.get("/products/0/10", headers=h).json()["data"]["result"]["recordsTotal"] == 0
