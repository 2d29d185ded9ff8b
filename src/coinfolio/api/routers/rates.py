"""Rate lookup endpoint."""

from fastapi import APIRouter, Depends, Query

from coinfolio.api.deps import get_pricing_service
from coinfolio.api.schemas import RateResponse
from coinfolio.services import PricingService

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/{symbol}", response_model=RateResponse)
def get_rate(
    symbol: str,
    currency: str = Query("USD", description="Quote currency (USD only)"),
    pricing: PricingService = Depends(get_pricing_service),
) -> RateResponse:
    """Live rate for one symbol, fetched from the price API."""
    rate = pricing.get_rate(symbol, currency)
    return RateResponse(symbol=symbol.strip().upper(), currency=currency.strip().upper(), rate=rate)
