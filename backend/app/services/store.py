from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
import logging
from threading import Lock

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.exceptions import PersistenceError
from app.models.aggregate import AggregateDocument, AggregateKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    kind: AggregateKind
    items: list[dict] = field(default_factory=list)
    revision: int = 0


class AggregateStore:
    """Document store holding one JSON row per aggregate.

    Each aggregate has its own lock. Read-modify-write cycles run inside
    :meth:`locked` so mutations of the same aggregate are applied one at a
    time; plain reads never take the lock.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._locks: dict[AggregateKind, Lock] = {kind: Lock() for kind in AggregateKind}

    @contextmanager
    def locked(self, kind: AggregateKind) -> Iterator[None]:
        with self._locks[kind]:
            yield

    def load(self, kind: AggregateKind) -> Snapshot:
        with self._session_factory() as db:
            document = db.get(AggregateDocument, kind.value)
            if document is None:
                return Snapshot(kind=kind)
            return Snapshot(kind=kind, items=list(document.items or []), revision=document.revision)

    def save(self, kind: AggregateKind, items: list[dict]) -> int:
        """Replace the stored aggregate and return its new revision."""
        try:
            with self._session_factory() as db, db.begin():
                document = db.get(AggregateDocument, kind.value)
                if document is None:
                    document = AggregateDocument(kind=kind.value, items=[], revision=0)
                    db.add(document)
                document.items = list(items)
                document.revision = (document.revision or 0) + 1
                revision = document.revision
        except SQLAlchemyError as exc:
            logger.exception("Saving %s failed", kind.value)
            raise PersistenceError(kind.value) from exc
        return revision

    @property
    def bind(self) -> Engine:
        return self._session_factory.kw["bind"]


@lru_cache
def get_default_store() -> AggregateStore:
    from app.db.session import SessionLocal

    return AggregateStore(SessionLocal)
