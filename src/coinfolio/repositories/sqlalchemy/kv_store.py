"""SQLAlchemy implementation of KeyValueStore."""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from coinfolio.repositories.sqlalchemy.orm_models import KeyValueEntryORM


class SqlAlchemyKeyValueStore:
    """
    SQLAlchemy-backed key-value store.

    Each call runs in its own short-lived session and commits before
    returning, so writes are durable once ``set``/``remove`` return.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        with self._session_factory() as db:
            entry = db.get(KeyValueEntryORM, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        with self._session_factory() as db:
            db.merge(KeyValueEntryORM(key=key, value=value))
            db.commit()

    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        with self._session_factory() as db:
            db.query(KeyValueEntryORM).filter(KeyValueEntryORM.key == key).delete()
            db.commit()
