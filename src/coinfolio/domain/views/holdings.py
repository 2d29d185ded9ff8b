"""View models for holdings and allocation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from coinfolio.domain.models import Symbol


@dataclass(frozen=True)
class HoldingView:
    """Held amount of one symbol and its USD value (None when no rate is known)."""

    symbol: Symbol
    amount: float
    value: Optional[float] = None


HoldingsView = dict[Symbol, HoldingView]


@dataclass
class AllocationItem:
    """Single slice of the allocation breakdown."""

    symbol: Symbol
    value: float
    percentage: float


@dataclass
class AllocationView:
    """Holdings allocation by USD value."""

    items: list[AllocationItem] = field(default_factory=list)
    total_value: float = 0.0
    as_of: Optional[datetime] = None


@dataclass
class HoldingsSummary:
    """Holdings and their total computed from one rate snapshot."""

    holdings: HoldingsView = field(default_factory=dict)
    total_value: float = 0.0
    stale: bool = False
    as_of: Optional[datetime] = None
