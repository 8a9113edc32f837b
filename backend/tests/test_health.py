def test_ping(client):
    response = client.get("/api/ping")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_health_endpoints(client):
    live = client.get("/api/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    payload = ready.json()
    assert payload["database"]["ok"] is True
    assert payload["database"]["schema_ok"] is True
    assert payload["viewers"] == 0


def test_oversized_body_is_rejected(client):
    from app.core.config import get_settings

    limit = get_settings().max_request_size_bytes
    response = client.post(
        "/api/events",
        content=b"{" + b" " * limit + b"}",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 413
