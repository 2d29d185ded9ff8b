"""Application context for in-process service management.

Builds the store, ledger, price provider and pricing service once and
hands the same instances to every caller, so the ledger read cache and
the rate/total caches live as long as the process.
"""

import time
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from coinfolio.config.settings import Settings, get_settings
from coinfolio.core.clock import Clock, now_utc
from coinfolio.providers import CoinGeckoPriceProvider, PriceProvider, StubPriceProvider
from coinfolio.repositories.sqlalchemy import SqlAlchemyKeyValueStore, create_session_factory
from coinfolio.services import LedgerService, PricingService


def build_provider(settings: Settings) -> PriceProvider:
    """Create the configured price provider."""
    if settings.use_stub_provider:
        return StubPriceProvider()
    return CoinGeckoPriceProvider(
        base_url=settings.price_api_base_url,
        timeout_seconds=settings.price_api_timeout_seconds,
    )


class AppContext:
    """Explicitly wired application services."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[PriceProvider] = None,
        session_factory: Optional[sessionmaker] = None,
        clock: Clock = now_utc,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or get_settings()
        self._session_factory = session_factory or create_session_factory(
            self.settings.get_database_url()
        )
        self.store = SqlAlchemyKeyValueStore(self._session_factory)
        self.provider = provider or build_provider(self.settings)

        self.ledger = LedgerService(
            store=self.store,
            strict_removal=self.settings.strict_removal,
        )
        self.pricing = PricingService(
            ledger=self.ledger,
            provider=self.provider,
            rate_ttl_seconds=self.settings.rate_cache_ttl_seconds,
            total_ttl_seconds=self.settings.total_cache_ttl_seconds,
            max_retries=self.settings.price_api_max_retries,
            retry_delay_seconds=self.settings.price_api_retry_delay_seconds,
            batch_size=self.settings.price_batch_size,
            batch_delay_seconds=self.settings.price_batch_delay_seconds,
            clock=clock,
            sleep=sleep,
        )
        self.ledger.subscribe(self.pricing.invalidate_total)

    def close(self) -> None:
        """Clean up resources."""
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()
        bind = self._session_factory.kw.get("bind")
        if bind is not None:
            bind.dispose()
