"""Derived, non-persisted view models."""

from coinfolio.domain.views.holdings import (
    HoldingView,
    HoldingsView,
    HoldingsSummary,
    AllocationItem,
    AllocationView,
)

__all__ = [
    "HoldingView",
    "HoldingsView",
    "HoldingsSummary",
    "AllocationItem",
    "AllocationView",
]
