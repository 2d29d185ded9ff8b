"""Key-value store protocol for persisted balances."""

from typing import Protocol, Optional


class KeyValueStore(Protocol):
    """
    Interface for a string key-value store.

    Reads and writes are atomic per key; there are no cross-key transactions.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        ...

    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        ...
