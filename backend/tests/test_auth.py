from datetime import datetime, timedelta, timezone

from jose import jwt

from app.core.config import get_settings
from app.core.security import create_access_token, decode_token


def test_login_returns_token_for_configured_admin(client):
    response = client.post("/api/login", json={"userId": "admin1", "password": "pass1"})
    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == "admin1"
    assert data["token_type"] == "bearer"

    payload = decode_token(data["token"])
    assert payload["sub"] == "admin1"
    assert payload["is_admin"] is True


def test_login_rejects_bad_credentials(client):
    response = client.post("/api/login", json={"userId": "admin1", "password": "wrong"})
    assert response.status_code == 401

    response = client.post("/api/login", json={"userId": "ghost", "password": "pass1"})
    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post("/api/login", json={"userId": "admin1"})
    assert response.status_code == 400
    assert "password" in response.json()["details"]["fields"]


def test_login_is_rate_limited(client):
    limit = get_settings().login_rate_limit_max_requests
    for _ in range(limit):
        client.post("/api/login", json={"userId": "admin1", "password": "wrong"})

    response = client.post("/api/login", json={"userId": "admin1", "password": "pass1"})
    assert response.status_code == 429
    assert "Retry-After" in response.headers


def test_mutations_require_admin_token(client):
    slot = {"day": "Mon", "room": "R1", "startTime": "09:00", "endTime": "10:00", "className": "Math"}

    missing = client.post("/api/schedule/slot", json=slot)
    assert missing.status_code == 401

    garbage = client.post("/api/schedule/slot", json=slot, headers={"Authorization": "Bearer not-a-jwt"})
    assert garbage.status_code == 401

    viewer_token = create_access_token("viewer", is_admin=False)
    forbidden = client.post(
        "/api/events",
        json={"action": "delete", "id": "x"},
        headers={"Authorization": f"Bearer {viewer_token}"},
    )
    assert forbidden.status_code == 403


def test_expired_token_is_rejected(client):
    settings = get_settings()
    expired = jwt.encode(
        {"sub": "admin1", "is_admin": True, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    response = client.post(
        "/api/events",
        json={"action": "delete", "id": "x"},
        headers={"Authorization": f"Bearer {expired}"},
    )
    assert response.status_code == 401


def test_reads_are_public(client):
    assert client.get("/api/schedule").status_code == 200
    assert client.get("/api/events").status_code == 200
