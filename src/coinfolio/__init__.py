"""Coinfolio - virtual-currency holdings ledger with USD valuation."""

__version__ = "0.1.0"
