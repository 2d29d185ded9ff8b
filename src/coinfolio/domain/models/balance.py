"""Balance and rate records."""

from dataclasses import dataclass
from datetime import datetime

from coinfolio.domain.models.enums import Symbol

# Absolute tolerance for comparing float quantities
QUANTITY_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Balance:
    """
    Held quantity of one symbol.

    Quantity is never negative; removals past zero clamp to 0.
    """

    symbol: Symbol
    quantity: float = 0.0


@dataclass(frozen=True)
class RateSnapshot:
    """USD rate for a symbol from the last successful price fetch."""

    symbol: Symbol
    usd_rate: float
    fetched_at: datetime
