"""Ledger service for per-symbol balances."""

import logging
import math
import threading
from decimal import Decimal
from typing import Callable, Optional

from coinfolio.core.exceptions import (
    ValidationError,
    StorageConsistencyError,
    InsufficientBalanceError,
)
from coinfolio.domain.models import (
    Balance,
    Symbol,
    SUPPORTED_SYMBOLS,
    QUANTITY_TOLERANCE,
    parse_symbol,
)
from coinfolio.repositories.protocols import KeyValueStore

logger = logging.getLogger(__name__)


def _parse_quantity(raw: Optional[str]) -> Optional[float]:
    """Parse a stored quantity; None if absent, unparsable, non-finite or negative."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


class LedgerService:
    """
    Service for managing held quantities of supported symbols.

    The key-value store is the source of truth; every mutation writes
    through and is read back before returning. The in-memory dict is only
    a read accelerator. Mutations are serialized so concurrent callers
    (e.g. the API threadpool) never lose updates.
    """

    def __init__(
        self,
        store: KeyValueStore,
        strict_removal: bool = False,
    ):
        self._store = store
        self._strict_removal = strict_removal
        self._cache: dict[Symbol, float] = {}
        self._listeners: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked after every change to stored balances."""
        self._listeners.append(listener)

    def add(self, symbol: str, amount: float) -> float:
        """
        Add ``amount`` to the balance of ``symbol``.

        Returns the new quantity. Raises ValidationError on bad input and
        StorageConsistencyError if the stored value does not read back.
        Storage errors propagate and nothing is written.
        """
        sym, quantity = self._validate(symbol, amount)
        with self._lock:
            current = self._read_current(sym)
            new_amount = current + quantity
            self._write(sym, new_amount)
        logger.info("Added %s %s. Previous: %s, new total: %s", quantity, sym.value, current, new_amount)
        return new_amount

    def remove(self, symbol: str, amount: float) -> float:
        """
        Subtract ``amount`` from the balance of ``symbol``.

        Over-removal clamps to 0 unless the ledger was built with
        ``strict_removal=True``, in which case InsufficientBalanceError is raised.
        """
        sym, quantity = self._validate(symbol, amount)
        with self._lock:
            current = self._read_current(sym)

            if self._strict_removal and quantity - current > QUANTITY_TOLERANCE:
                raise InsufficientBalanceError(sym.value, quantity, current)

            new_amount = current - quantity
            # Residuals within tolerance count as empty
            if new_amount < QUANTITY_TOLERANCE:
                new_amount = 0.0

            self._write(sym, new_amount)
        logger.info("Removed %s %s. Previous: %s, new total: %s", quantity, sym.value, current, new_amount)
        return new_amount

    def get_amount(self, symbol: str) -> float:
        """
        Get the held quantity of a symbol.

        Never raises: unsupported symbols, absent or corrupt entries and
        storage errors all read as 0.
        """
        sym = parse_symbol(symbol)
        if sym is None:
            logger.warning("get_amount called with unsupported symbol %r", symbol)
            return 0.0

        with self._lock:
            try:
                return self._read_current(sym)
            except Exception:
                logger.warning("Storage read failed for %s, reporting 0", sym.value, exc_info=True)
                return 0.0

    def get_balance(self, symbol: str) -> Balance:
        """Get the balance record for a supported symbol."""
        sym = parse_symbol(symbol)
        if sym is None:
            raise ValidationError(f"Unsupported symbol: {symbol!r}")
        return Balance(symbol=sym, quantity=self.get_amount(sym))

    def get_all_amounts(self) -> dict[Symbol, float]:
        """Map every supported symbol to its quantity. Returns {} on unexpected failure."""
        try:
            return {sym: self.get_amount(sym) for sym in SUPPORTED_SYMBOLS}
        except Exception:
            logger.exception("Failed to read balances")
            return {}

    def clear(self) -> None:
        """Remove every supported symbol from the store and drop cached state."""
        with self._lock:
            try:
                for sym in SUPPORTED_SYMBOLS:
                    self._store.remove(sym.value)
            finally:
                self._cache.clear()
                self._notify()
        logger.info("Cleared all balances")

    def _read_current(self, sym: Symbol) -> float:
        """
        Cache-first read of a quantity. Caller holds the lock.

        Absent or corrupt entries read as 0; store errors propagate.
        """
        cached = self._cache.get(sym)
        if cached is not None:
            return cached

        raw = self._store.get(sym.value)
        amount = _parse_quantity(raw)
        if amount is None:
            if raw is not None:
                logger.warning("Unparsable stored quantity for %s: %r, reading as 0", sym.value, raw)
            amount = 0.0

        self._cache[sym] = amount
        return amount

    def _write(self, sym: Symbol, new_amount: float) -> None:
        """Persist a quantity, verify it reads back, then update caches."""
        self._store.set(sym.value, repr(new_amount))
        self._cache.pop(sym, None)

        try:
            raw = self._store.get(sym.value)
            stored = _parse_quantity(raw)
            if stored is None or abs(stored - new_amount) > QUANTITY_TOLERANCE:
                raise StorageConsistencyError(sym.value, new_amount, raw)
            self._cache[sym] = new_amount
        finally:
            self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    @staticmethod
    def _validate(symbol: str, amount: float) -> tuple[Symbol, float]:
        """Validate mutation input."""
        sym = parse_symbol(symbol)
        if sym is None:
            raise ValidationError(f"Unsupported symbol: {symbol!r}")

        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            raise ValidationError(f"Amount must be a number, got {type(amount).__name__}")

        try:
            quantity = float(amount)
        except (ValueError, OverflowError):
            raise ValidationError(f"Amount is not a valid number: {amount!r}")
        if not math.isfinite(quantity):
            raise ValidationError("Amount must be a finite number")
        if quantity <= 0:
            raise ValidationError("Amount must be greater than 0")

        return sym, quantity
