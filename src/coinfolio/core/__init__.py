"""Core utilities and shared functionality."""

from coinfolio.core.clock import (
    now_utc,
    to_utc,
    age_seconds,
    Clock,
    UTC,
)
from coinfolio.core.exceptions import (
    AppError,
    ValidationError,
    StorageConsistencyError,
    UnsupportedCurrencyError,
    UnsupportedSymbolError,
    RateUnavailableError,
    InsufficientBalanceError,
    PriceApiError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "age_seconds",
    "Clock",
    "UTC",
    "AppError",
    "ValidationError",
    "StorageConsistencyError",
    "UnsupportedCurrencyError",
    "UnsupportedSymbolError",
    "RateUnavailableError",
    "InsufficientBalanceError",
    "PriceApiError",
]
