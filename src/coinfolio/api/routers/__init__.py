"""API routers package."""

from coinfolio.api.routers.holdings import router as holdings_router
from coinfolio.api.routers.rates import router as rates_router

__all__ = [
    "holdings_router",
    "rates_router",
]
