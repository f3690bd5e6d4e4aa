"""SQLAlchemy model holding one row per storage key."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base, get_engine


class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())
