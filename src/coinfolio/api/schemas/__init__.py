"""Pydantic schemas for API request/response."""

from coinfolio.api.schemas.holdings import (
    AmountRequest,
    BalanceResponse,
    HoldingResponse,
    HoldingsResponse,
    TotalResponse,
    AllocationItemResponse,
    AllocationResponse,
    RateResponse,
)

__all__ = [
    "AmountRequest",
    "BalanceResponse",
    "HoldingResponse",
    "HoldingsResponse",
    "TotalResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "RateResponse",
]
