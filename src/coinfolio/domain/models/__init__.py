"""Domain models package."""

from coinfolio.domain.models.enums import (
    Symbol,
    QuoteCurrency,
    EXTERNAL_IDS,
    SUPPORTED_SYMBOLS,
    parse_symbol,
    parse_currency,
)
from coinfolio.domain.models.balance import Balance, RateSnapshot, QUANTITY_TOLERANCE

__all__ = [
    "Symbol",
    "QuoteCurrency",
    "EXTERNAL_IDS",
    "SUPPORTED_SYMBOLS",
    "parse_symbol",
    "parse_currency",
    "Balance",
    "RateSnapshot",
    "QUANTITY_TOLERANCE",
]
