"""Holdings endpoints: balances, valuation, total and allocation."""

import logging
import math

from fastapi import APIRouter, Depends, Query

from coinfolio.api.deps import get_ledger_service, get_pricing_service
from coinfolio.api.schemas import (
    AmountRequest,
    BalanceResponse,
    HoldingResponse,
    HoldingsResponse,
    TotalResponse,
    AllocationItemResponse,
    AllocationResponse,
)
from coinfolio.core.exceptions import (
    InsufficientBalanceError,
    UnsupportedSymbolError,
    ValidationError,
)
from coinfolio.domain.models import QUANTITY_TOLERANCE, parse_symbol
from coinfolio.services import LedgerService, PricingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=HoldingsResponse)
def list_holdings(
    pricing: PricingService = Depends(get_pricing_service),
) -> HoldingsResponse:
    """Held symbols with USD values and the grand total."""
    summary = pricing.summarize()
    return HoldingsResponse(
        holdings=[
            HoldingResponse(symbol=h.symbol.value, amount=h.amount, value=h.value)
            for h in summary.holdings.values()
        ],
        total_value=summary.total_value,
        stale=summary.stale,
        as_of=summary.as_of,
    )


@router.get("/total", response_model=TotalResponse)
def get_total(
    currency: str = Query("USD", description="Quote currency (USD only)"),
    pricing: PricingService = Depends(get_pricing_service),
) -> TotalResponse:
    """Total USD value of all priced holdings."""
    total = pricing.total(currency)
    return TotalResponse(currency=currency.upper(), total=total)


@router.get("/allocation", response_model=AllocationResponse)
def get_allocation(
    pricing: PricingService = Depends(get_pricing_service),
) -> AllocationResponse:
    """Share of total value per priced holding."""
    allocation = pricing.allocation()
    return AllocationResponse(
        items=[
            AllocationItemResponse(
                symbol=item.symbol.value,
                value=item.value,
                percentage=item.percentage,
            )
            for item in allocation.items
        ],
        total_value=allocation.total_value,
        as_of=allocation.as_of,
    )


@router.delete("", status_code=204)
def clear_holdings(
    ledger: LedgerService = Depends(get_ledger_service),
) -> None:
    """Remove every stored balance."""
    ledger.clear()


@router.get("/{symbol}", response_model=BalanceResponse)
def get_balance(
    symbol: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    """Held quantity of one symbol."""
    sym = parse_symbol(symbol)
    if sym is None:
        raise UnsupportedSymbolError(symbol)
    balance = ledger.get_balance(sym)
    return BalanceResponse(symbol=balance.symbol.value, amount=balance.quantity)


@router.post("/{symbol}/add", response_model=BalanceResponse)
def add_holding(
    symbol: str,
    data: AmountRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    """Add to the balance of a symbol."""
    new_amount = ledger.add(symbol, data.amount)
    return BalanceResponse(symbol=symbol.strip().upper(), amount=new_amount)


@router.post("/{symbol}/remove", response_model=BalanceResponse)
def remove_holding(
    symbol: str,
    data: AmountRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    """
    Remove from the balance of a symbol.

    Rejects removals larger than the held balance instead of letting the
    ledger clamp to zero.
    """
    sym = parse_symbol(symbol)
    if sym is None:
        raise ValidationError(f"Unsupported symbol: {symbol!r}")

    held = ledger.get_amount(sym)
    if math.isfinite(data.amount) and data.amount - held > QUANTITY_TOLERANCE:
        logger.info("Rejected removal of %s %s; only %s held", data.amount, sym.value, held)
        raise InsufficientBalanceError(sym.value, data.amount, held)

    new_amount = ledger.remove(sym, data.amount)
    return BalanceResponse(symbol=sym.value, amount=new_amount)
