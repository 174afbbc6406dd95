"""Tests for request logging middleware, request IDs and /metrics."""

from __future__ import annotations

import logging

from sociomap.services.metrics import metrics


async def test_response_time_header_on_success(client):
    resp = await client.get("/")
    assert "X-Response-Time-Ms" in resp.headers
    float(resp.headers["X-Response-Time-Ms"])


async def test_response_time_header_on_404(client):
    resp = await client.get("/nonexistent")
    assert resp.status_code == 404
    assert "X-Response-Time-Ms" in resp.headers


async def test_response_time_header_on_400(client):
    resp = await client.post("/api/recommendations/all", json={})
    assert resp.status_code == 400
    assert "X-Response-Time-Ms" in resp.headers


async def test_request_id_generated(client):
    resp = await client.get("/")
    rid = resp.headers.get("x-request-id")
    assert rid is not None
    assert len(rid) == 32


async def test_request_id_echoed(client):
    resp = await client.get("/", headers={"x-request-id": "my-custom-id-123"})
    assert resp.headers.get("x-request-id") == "my-custom-id-123"


async def test_access_log_line(client, caplog):
    with caplog.at_level(logging.INFO, logger="sociomap.access"):
        await client.get("/")
    assert any("GET / 200" in r.getMessage() for r in caplog.records)


async def test_middleware_increments_metrics(client):
    before = metrics.total_requests
    await client.get("/")
    assert metrics.total_requests == before + 1
    assert metrics.status_codes.get(200) == 1


async def test_metrics_endpoint_structure(client):
    await client.post(
        "/api/recommendations/public-health",
        json={"location": "a", "description": "b"},
    )
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_requests"] >= 1
    assert data["generation"]["ok"] == {"public-health": 1}
    assert data["generation"]["failures"] == {}
    assert data["simulations"] == 0
    assert set(data["latency_ms"]) == {"p50", "p90", "p95", "p99"}
    assert "uptime_seconds" in data
