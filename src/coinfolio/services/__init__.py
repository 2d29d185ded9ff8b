"""Service layer - business logic orchestration."""

from coinfolio.services.rate_cache import TimedCache
from coinfolio.services.ledger_service import LedgerService
from coinfolio.services.pricing_service import PricingService

__all__ = [
    "TimedCache",
    "LedgerService",
    "PricingService",
]
