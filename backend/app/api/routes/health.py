from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.api.deps import get_hub, get_store
from app.db.bootstrap import missing_schema
from app.services.broadcast_hub import BroadcastHub
from app.services.store import AggregateStore

router = APIRouter()


@router.get("/ping")
def ping() -> dict:
    return {"ok": True}


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready(
    store: AggregateStore = Depends(get_store),
    hub: BroadcastHub = Depends(get_hub),
) -> JSONResponse:
    db_ok = True
    missing: dict[str, list[str]] = {}
    db_error: str | None = None

    try:
        with store.bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        missing = missing_schema(store.bind)
    except Exception as exc:  # pragma: no cover - environment dependent
        db_ok = False
        db_error = str(exc)

    ready = db_ok and not missing
    payload = {
        "status": "ok" if ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": {
            "ok": db_ok,
            "schema_ok": not missing,
            "missing": missing,
            "error": db_error,
        },
        "viewers": hub.viewer_count,
    }
    return JSONResponse(status_code=200 if ready else 503, content=payload)
