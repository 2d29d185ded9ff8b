"""
Integration tests for the SQLAlchemy key-value store with SQLite.

Tests cover:
- Get/set/remove round trips
- Overwrite semantics
- Persistence across store instances and ledger instances
- File-backed database durability
"""

from coinfolio.repositories.sqlalchemy import (
    SqlAlchemyKeyValueStore,
    create_session_factory,
)
from coinfolio.services import LedgerService

from tests.conftest import stored_keys


# =============================================================================
# KEY-VALUE STORE TESTS
# =============================================================================


class TestSqlAlchemyKeyValueStore:
    """Tests for SqlAlchemyKeyValueStore."""

    def test_get_absent_key_returns_none(self, kv_store: SqlAlchemyKeyValueStore):
        """
        GIVEN an empty database
        WHEN I get a key
        THEN None is returned
        """
        assert kv_store.get("BTC") is None

    def test_set_then_get(self, kv_store: SqlAlchemyKeyValueStore):
        """
        GIVEN an empty database
        WHEN I set BTC to "0.5"
        THEN get returns "0.5"
        """
        kv_store.set("BTC", "0.5")

        assert kv_store.get("BTC") == "0.5"

    def test_set_overwrites(self, kv_store: SqlAlchemyKeyValueStore, session_factory):
        """
        GIVEN BTC is stored
        WHEN I set it again
        THEN the new value replaces the old one
        """
        kv_store.set("BTC", "0.5")
        kv_store.set("BTC", "1.25")

        assert kv_store.get("BTC") == "1.25"
        assert stored_keys(session_factory) == ["BTC"]

    def test_remove(self, kv_store: SqlAlchemyKeyValueStore, session_factory):
        """
        GIVEN BTC and ETH are stored
        WHEN I remove BTC
        THEN only ETH remains
        """
        kv_store.set("BTC", "1.0")
        kv_store.set("ETH", "2.0")

        kv_store.remove("BTC")

        assert kv_store.get("BTC") is None
        assert stored_keys(session_factory) == ["ETH"]

    def test_remove_absent_key_is_noop(self, kv_store: SqlAlchemyKeyValueStore, session_factory):
        """
        GIVEN an empty database
        WHEN I remove a key
        THEN nothing is raised
        """
        kv_store.remove("DOGE")

        assert stored_keys(session_factory) == []

    def test_values_visible_to_new_store_instance(self, session_factory):
        """
        GIVEN a value written through one store
        WHEN a second store on the same database reads it
        THEN the value is visible
        """
        SqlAlchemyKeyValueStore(session_factory).set("SOL", "12.0")

        assert SqlAlchemyKeyValueStore(session_factory).get("SOL") == "12.0"


# =============================================================================
# DURABILITY TESTS
# =============================================================================


class TestFileBackedPersistence:
    """Tests that balances survive a restart."""

    def test_balances_survive_new_engine(self, tmp_path):
        """
        GIVEN a file-backed database with balances written
        WHEN the engine is disposed and a new one is opened
        THEN a fresh ledger reads the same balances
        """
        url = f"sqlite:///{tmp_path / 'holdings.db'}"

        factory = create_session_factory(url)
        ledger = LedgerService(SqlAlchemyKeyValueStore(factory))
        ledger.add("BTC", 0.25)
        ledger.add("ADA", 150)
        ledger.remove("ADA", 50)
        factory.kw["bind"].dispose()

        reopened = create_session_factory(url)
        try:
            restarted = LedgerService(SqlAlchemyKeyValueStore(reopened))
            assert restarted.get_amount("BTC") == 0.25
            assert restarted.get_amount("ADA") == 100.0
            assert restarted.get_amount("ETH") == 0
        finally:
            reopened.kw["bind"].dispose()
