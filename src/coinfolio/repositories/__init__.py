"""Repository layer - data access abstractions and implementations."""

from coinfolio.repositories.protocols import KeyValueStore

__all__ = [
    "KeyValueStore",
]
