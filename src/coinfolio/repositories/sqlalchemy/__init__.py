"""SQLAlchemy repository implementations."""

from coinfolio.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
)
from coinfolio.repositories.sqlalchemy.kv_store import SqlAlchemyKeyValueStore

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "SqlAlchemyKeyValueStore",
]
