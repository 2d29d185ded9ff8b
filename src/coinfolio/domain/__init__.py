"""Domain layer - pure business models with no external dependencies."""

from coinfolio.domain.models import (
    Symbol,
    QuoteCurrency,
    EXTERNAL_IDS,
    SUPPORTED_SYMBOLS,
    Balance,
    RateSnapshot,
)

__all__ = [
    "Symbol",
    "QuoteCurrency",
    "EXTERNAL_IDS",
    "SUPPORTED_SYMBOLS",
    "Balance",
    "RateSnapshot",
]
