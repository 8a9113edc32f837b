from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class AggregateKind(str, Enum):
    schedule = "schedule"
    events = "events"


class AggregateDocument(Base):
    __tablename__ = "aggregate_documents"

    kind: Mapped[str] = mapped_column(String(32), primary_key=True)
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
