"""Tests for the health endpoint and error envelope."""


async def test_health_reports_database(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"


async def test_unknown_route_uses_error_envelope(client):
    resp = await client.get("/api/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "NOT_FOUND", "message": "Resource not found"}
