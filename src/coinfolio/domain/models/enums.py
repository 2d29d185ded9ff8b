"""Enumerations and static lookup tables for domain models."""

from enum import Enum
from typing import Optional


class Symbol(str, Enum):
    """Supported virtual-currency tickers."""

    BTC = "BTC"
    ETH = "ETH"
    BNB = "BNB"
    SOL = "SOL"
    ADA = "ADA"
    XRP = "XRP"
    DOT = "DOT"
    DOGE = "DOGE"


class QuoteCurrency(str, Enum):
    """Currencies a value can be expressed in."""

    USD = "USD"


# Price API identifiers. Extend together with Symbol.
EXTERNAL_IDS: dict[Symbol, str] = {
    Symbol.BTC: "bitcoin",
    Symbol.ETH: "ethereum",
    Symbol.BNB: "binancecoin",
    Symbol.SOL: "solana",
    Symbol.ADA: "cardano",
    Symbol.XRP: "ripple",
    Symbol.DOT: "polkadot",
    Symbol.DOGE: "dogecoin",
}

SUPPORTED_SYMBOLS: tuple[Symbol, ...] = tuple(Symbol)


def parse_symbol(value: object) -> Optional[Symbol]:
    """Return the Symbol for a ticker string (case-insensitive), or None if unsupported."""
    if isinstance(value, Symbol):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Symbol(value.strip().upper())
    except ValueError:
        return None


def parse_currency(value: object) -> Optional[QuoteCurrency]:
    """Return the QuoteCurrency for a currency code, or None if unsupported."""
    if isinstance(value, QuoteCurrency):
        return value
    if not isinstance(value, str):
        return None
    try:
        return QuoteCurrency(value.strip().upper())
    except ValueError:
        return None
