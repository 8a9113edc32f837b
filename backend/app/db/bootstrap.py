from __future__ import annotations

import logging

from sqlalchemy import Engine, inspect

from app.db.base import Base
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "aggregate_documents": {"kind", "items", "revision", "updated_at"},
}


def missing_schema(bind: Engine) -> dict[str, list[str]]:
    """Return ``{table: [missing columns]}``; a missing table lists every column."""
    with bind.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        missing: dict[str, list[str]] = {}
        for table_name, columns in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing[table_name] = sorted(columns)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            absent = sorted(columns - existing)
            if absent:
                missing[table_name] = absent
    return missing


def ensure_storage(bind: Engine | None = None) -> None:
    if bind is None:
        from app.db.session import engine as bind

    Base.metadata.create_all(bind=bind)
    leftover = missing_schema(bind)
    if leftover:
        # create_all never alters existing tables; that is the migrations' job.
        logger.warning("Storage schema is out of date, run the migrations: %s", leftover)
