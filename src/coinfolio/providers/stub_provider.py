"""Stub price provider for offline/testing use."""

from typing import Optional

# Deterministic fake USD prices keyed by CoinGecko id
_STUB_PRICES: dict[str, float] = {
    "bitcoin": 50000.0,
    "ethereum": 3000.0,
    "binancecoin": 400.0,
    "solana": 100.0,
    "cardano": 0.5,
    "ripple": 0.6,
    "polkadot": 7.0,
    "dogecoin": 0.08,
}


class StubPriceProvider:
    """
    Stub provider with deterministic fake prices for offline operation.

    Ids without a stub price are omitted, like the real API does.
    """

    def __init__(self, prices: Optional[dict[str, float]] = None):
        self._prices = dict(_STUB_PRICES if prices is None else prices)
        self.call_count = 0

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        """Return stub prices for requested ids."""
        self.call_count += 1
        return {i: {"usd": self._prices[i]} for i in ids if i in self._prices}
