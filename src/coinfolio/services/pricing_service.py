"""Pricing service: USD rates, holdings valuation and totals."""

import logging
import math
import time
from typing import Callable, Optional

from coinfolio.core.clock import Clock, now_utc
from coinfolio.core.exceptions import (
    PriceApiError,
    RateUnavailableError,
    UnsupportedCurrencyError,
    UnsupportedSymbolError,
)
from coinfolio.domain.models import (
    EXTERNAL_IDS,
    SUPPORTED_SYMBOLS,
    RateSnapshot,
    Symbol,
    parse_currency,
    parse_symbol,
)
from coinfolio.domain.views import (
    AllocationItem,
    AllocationView,
    HoldingsSummary,
    HoldingsView,
    HoldingView,
)
from coinfolio.providers.price_provider import PriceProvider
from coinfolio.services.ledger_service import LedgerService
from coinfolio.services.rate_cache import TimedCache

logger = logging.getLogger(__name__)

# Errors a single fetch attempt may raise that are worth retrying
_RETRYABLE_ERRORS = (PriceApiError, OSError)

RateSet = dict[Symbol, RateSnapshot]


def _extract_usd_rate(data: dict, external_id: str) -> Optional[float]:
    """Return a positive finite USD rate from a price payload, or None."""
    entry = data.get(external_id)
    if not isinstance(entry, dict):
        return None
    usd = entry.get("usd")
    if isinstance(usd, bool) or not isinstance(usd, (int, float)):
        return None
    rate = float(usd)
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def _sum_values(holdings: HoldingsView) -> float:
    return sum(h.value for h in holdings.values() if h.value is not None)


class PricingService:
    """
    Combines ledger quantities with USD rates from a price provider.

    Rates for the whole supported set are cached for ``rate_ttl_seconds``;
    when a refresh fails the previous rates are served even if expired.
    The total is cached separately for ``total_ttl_seconds`` and dropped
    whenever the ledger changes or rates are refreshed.
    """

    def __init__(
        self,
        ledger: LedgerService,
        provider: PriceProvider,
        rate_ttl_seconds: float = 60,
        total_ttl_seconds: float = 30,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        batch_size: int = 5,
        batch_delay_seconds: float = 1.0,
        clock: Clock = now_utc,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        self._ledger = ledger
        self._provider = provider
        self._max_retries = max_retries
        self._retry_delay = retry_delay_seconds
        self._batch_size = batch_size
        self._batch_delay = batch_delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._rate_cache: TimedCache[RateSet] = TimedCache(rate_ttl_seconds, clock, name="rates")
        self._total_cache: TimedCache[float] = TimedCache(total_ttl_seconds, clock, name="total")

    def get_rate(self, symbol: str, target_currency: str = "USD") -> float:
        """
        Fetch the current rate of ``symbol`` in ``target_currency``.

        Always hits the price API (with retries) and leaves the rate cache
        untouched.
        """
        if parse_currency(target_currency) is None:
            raise UnsupportedCurrencyError(str(target_currency))
        sym = parse_symbol(symbol)
        if sym is None:
            raise UnsupportedSymbolError(str(symbol))

        external_id = EXTERNAL_IDS[sym]
        data = self._fetch_with_retry([external_id])
        rate = _extract_usd_rate(data, external_id)
        if rate is None:
            raise RateUnavailableError(f"Malformed or non-positive rate for {sym.value}/USD")
        return rate

    def get_rates(self) -> tuple[RateSet, bool]:
        """
        Return ``(rates, is_stale)`` for the supported symbol set.

        Serves the cache while fresh. Otherwise refreshes; on failure falls
        back to the previous rates (stale) or to an empty set.
        """
        try:
            return self._rate_cache.get_or_refresh(
                self._refresh,
                fallback_errors=(RateUnavailableError,),
            )
        except RateUnavailableError as e:
            logger.warning("No rates available and no cached rates to fall back on: %s", e)
            return {}, True

    def refresh_rates(self) -> RateSet:
        """Force a refresh of all rates. Raises RateUnavailableError on failure."""
        rates = self._refresh()
        self._rate_cache.put(rates)
        return rates

    def get_holdings(self) -> HoldingsView:
        """Map each held symbol to its amount and USD value (None without a rate)."""
        rates, _ = self.get_rates()
        return self._build_holdings(rates)

    def summarize(self) -> HoldingsSummary:
        """Holdings, total and staleness computed from one rate snapshot."""
        rates, stale = self.get_rates()
        holdings = self._build_holdings(rates)
        total = _sum_values(holdings)
        self._total_cache.put(total)
        return HoldingsSummary(
            holdings=holdings,
            total_value=total,
            stale=stale,
            as_of=self._rate_cache.cached_at,
        )

    def total(self, currency: str = "USD") -> float:
        """Sum of all known holding values, cached for the total freshness window."""
        if parse_currency(currency) is None:
            raise UnsupportedCurrencyError(str(currency))

        cached, stale = self._total_cache.get()
        if cached is not None and not stale:
            return cached

        total = _sum_values(self.get_holdings())
        self._total_cache.put(total)
        return total

    def allocation(self) -> AllocationView:
        """Breakdown of priced holdings by share of total value."""
        holdings = self.get_holdings()
        priced = [h for h in holdings.values() if h.value is not None and h.value > 0]
        total = sum(h.value for h in priced)

        items = [
            AllocationItem(
                symbol=h.symbol,
                value=h.value,
                percentage=round(h.value / total * 100, 1),
            )
            for h in sorted(priced, key=lambda h: h.value, reverse=True)
        ]
        return AllocationView(items=items, total_value=total, as_of=self._clock())

    def invalidate_total(self) -> None:
        """Drop the cached total; wired to ledger changes."""
        self._total_cache.invalidate()

    def _refresh(self) -> RateSet:
        """Fetch rates for every supported symbol in sequential batches."""
        symbols = list(SUPPORTED_SYMBOLS)
        batches = [
            symbols[i:i + self._batch_size]
            for i in range(0, len(symbols), self._batch_size)
        ]

        rates: RateSet = {}
        for index, batch in enumerate(batches):
            if index > 0 and self._batch_delay > 0:
                self._sleep(self._batch_delay)

            data = self._fetch_with_retry([EXTERNAL_IDS[s] for s in batch])
            fetched_at = self._clock()
            for sym in batch:
                rate = _extract_usd_rate(data, EXTERNAL_IDS[sym])
                if rate is None:
                    logger.warning("No valid USD rate for %s in price response", sym.value)
                    continue
                rates[sym] = RateSnapshot(symbol=sym, usd_rate=rate, fetched_at=fetched_at)

        self._total_cache.invalidate()
        logger.info("Refreshed rates for %d/%d symbols", len(rates), len(symbols))
        return rates

    def _fetch_with_retry(self, ids: list[str]) -> dict:
        """Call the provider, retrying transient failures with a fixed delay."""
        attempts = self._max_retries + 1
        joined = ",".join(ids)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                return self._provider.fetch_usd_prices(ids)
            except _RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(
                    "Price fetch failed (attempt %d/%d) for %s: %s",
                    attempt, attempts, joined, e,
                )
                if attempt < attempts:
                    self._sleep(self._retry_delay)

        raise RateUnavailableError(
            f"Price fetch failed after {attempts} attempts for {joined}"
        ) from last_error

    def _build_holdings(self, rates: RateSet) -> HoldingsView:
        amounts = self._ledger.get_all_amounts()
        holdings: HoldingsView = {}
        for sym in SUPPORTED_SYMBOLS:
            amount = amounts.get(sym, 0.0)
            if amount <= 0:
                continue
            snapshot = rates.get(sym)
            value = amount * snapshot.usd_rate if snapshot else None
            holdings[sym] = HoldingView(symbol=sym, amount=amount, value=value)
        return holdings
