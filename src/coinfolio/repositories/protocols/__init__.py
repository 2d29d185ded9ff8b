"""Repository protocol definitions (interfaces)."""

from coinfolio.repositories.protocols.kv_store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
