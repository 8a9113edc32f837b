import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without running a real server.
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_store
from app.db.bootstrap import ensure_storage
from app.main import app
from app.services.rate_limit import clear_rate_limiter
from app.services.store import AggregateStore


@pytest.fixture()
def store():
    engine = create_engine( #isolated in-memory DB shared by every session of the test
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_storage(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return AggregateStore(TestingSessionLocal)


@pytest.fixture()
def client(store):
    clear_rate_limiter() #login attempts from earlier tests would otherwise count against this one
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    clear_rate_limiter()


def login(client, user_id="admin1", password="pass1"):
    response = client.post("/api/login", json={"userId": user_id, "password": password})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture()
def admin_headers(client):
    return {"Authorization": f"Bearer {login(client)}"}
