"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, DateTime, Text

from coinfolio.core.clock import now_utc
from coinfolio.repositories.sqlalchemy.database import Base


class KeyValueEntryORM(Base):
    """One persisted key-value pair (symbol -> float quantity as text)."""

    __tablename__ = "kv_entries"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)
