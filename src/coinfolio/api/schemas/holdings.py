"""Pydantic schemas for holdings and rate endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AmountRequest(BaseModel):
    """Body for add/remove requests."""

    amount: float = Field(..., description="Quantity to add or remove; must be > 0")


class BalanceResponse(BaseModel):
    """Held quantity of a single symbol."""

    symbol: str
    amount: float


class HoldingResponse(BaseModel):
    """One holding: amount and USD value (null when no rate is known)."""

    symbol: str
    amount: float
    value: Optional[float] = None


class HoldingsResponse(BaseModel):
    """Response for GET /holdings."""

    holdings: list[HoldingResponse]
    total_value: float
    currency: str = "USD"
    stale: bool = False
    as_of: Optional[datetime] = None


class TotalResponse(BaseModel):
    """Response for GET /holdings/total."""

    currency: str
    total: float


class AllocationItemResponse(BaseModel):
    """Single allocation slice."""

    symbol: str
    value: float
    percentage: float


class AllocationResponse(BaseModel):
    """Response for GET /holdings/allocation."""

    items: list[AllocationItemResponse]
    total_value: float
    as_of: Optional[datetime] = None


class RateResponse(BaseModel):
    """Response for GET /rates/{symbol}."""

    symbol: str
    currency: str
    rate: float
