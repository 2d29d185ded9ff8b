"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from coinfolio.app_context import AppContext
from coinfolio.services import LedgerService, PricingService


def get_app_context(request: Request) -> AppContext:
    """Provide the process-wide AppContext, creating it on first use."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        context = AppContext()
        request.app.state.context = context
    return context


def get_ledger_service(context: AppContext = Depends(get_app_context)) -> LedgerService:
    """Provide LedgerService instance."""
    return context.ledger


def get_pricing_service(context: AppContext = Depends(get_app_context)) -> PricingService:
    """Provide PricingService instance."""
    return context.pricing
