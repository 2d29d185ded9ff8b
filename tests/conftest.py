"""
Pytest configuration and fixtures for coinfolio tests.

This module provides:
- In-memory SQLite key-value store fixtures
- Deterministic, failing and flaky price providers
- A manual clock and recorded sleeps for cache/retry timing
- Service fixtures and the API test client
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from coinfolio.api.deps import get_app_context
from coinfolio.app_context import AppContext
from coinfolio.config.settings import Settings, reset_settings
from coinfolio.core.clock import UTC
from coinfolio.core.exceptions import PriceApiError
from coinfolio.main import app
from coinfolio.repositories.sqlalchemy import SqlAlchemyKeyValueStore, create_session_factory
from coinfolio.repositories.sqlalchemy.orm_models import KeyValueEntryORM
from coinfolio.services import LedgerService, PricingService


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or utc_datetime(2024, 6, 15, 14, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class RecordingSleep:
    """Sleep replacement that records requested delays instead of waiting."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at a fixed instant."""
    return ManualClock()


@pytest.fixture
def sleeper() -> RecordingSleep:
    """Recorded sleep for retry/batch delays."""
    return RecordingSleep()


# =============================================================================
# PRICE PROVIDERS
# =============================================================================


FIXED_PRICES = {
    "bitcoin": 50000.0,
    "ethereum": 3000.0,
    "binancecoin": 400.0,
    "solana": 100.0,
    "cardano": 0.5,
    "ripple": 0.6,
    "polkadot": 7.0,
    "dogecoin": 0.08,
}


class DeterministicPriceProvider:
    """
    Price provider returning fixed prices and recording every request.

    Set ``fail`` to make every call raise, or ``failures_remaining`` to make
    only the next N calls raise.
    """

    def __init__(self, prices: Optional[dict] = None):
        self.prices = dict(FIXED_PRICES if prices is None else prices)
        self.requests: list[list[str]] = []
        self.fail = False
        self.failures_remaining = 0

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        self.requests.append(list(ids))
        if self.fail:
            raise PriceApiError("Network unavailable")
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            raise PriceApiError("Timeout after 7.0s")
        return {i: {"usd": self.prices[i]} for i in ids if i in self.prices}


class FailingPriceProvider:
    """Price provider that always raises."""

    def __init__(self):
        self.call_count = 0

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        self.call_count += 1
        raise PriceApiError("HTTP error 503", status_code=503)


class RawPayloadProvider:
    """Price provider returning a fixed raw payload."""

    def __init__(self, payload: dict):
        self.payload = payload
        self.call_count = 0

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        self.call_count += 1
        return self.payload


@pytest.fixture
def price_provider() -> DeterministicPriceProvider:
    """Provide a deterministic price provider."""
    return DeterministicPriceProvider()


@pytest.fixture
def failing_provider() -> FailingPriceProvider:
    """Provide a provider that always fails."""
    return FailingPriceProvider()


# =============================================================================
# STORE AND SERVICE FIXTURES
# =============================================================================


class InMemoryStore:
    """
    Dict-backed KeyValueStore with hooks for simulating faults.

    ``failing_reads`` makes only the next N reads raise; ``latency``
    delays every call to widen race windows.
    """

    def __init__(self):
        self.data: dict[str, str] = {}
        self.fail_reads = False
        self.failing_reads = 0
        self.fail_writes = False
        self.corrupt_writes = False
        self.latency = 0.0

    def _pause(self) -> None:
        if self.latency:
            time.sleep(self.latency)

    def get(self, key: str) -> Optional[str]:
        self._pause()
        if self.fail_reads:
            raise OSError("storage unavailable")
        if self.failing_reads > 0:
            self.failing_reads -= 1
            raise OSError("storage unavailable")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self._pause()
        if self.fail_writes:
            raise OSError("storage is read-only")
        self.data[key] = "12345.0" if self.corrupt_writes else value

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise OSError("storage is read-only")
        self.data.pop(key, None)


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    reset_settings()
    factory = create_session_factory("sqlite://")
    yield factory
    factory.kw["bind"].dispose()


@pytest.fixture
def kv_store(session_factory) -> SqlAlchemyKeyValueStore:
    """Provide SQLite-backed key-value store."""
    return SqlAlchemyKeyValueStore(session_factory)


def stored_keys(session_factory) -> list[str]:
    """List keys persisted in the kv_entries table, sorted."""
    with session_factory() as db:
        rows = db.query(KeyValueEntryORM.key).order_by(KeyValueEntryORM.key).all()
        return [row.key for row in rows]


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Provide dict-backed key-value store with fault hooks."""
    return InMemoryStore()


@pytest.fixture
def ledger_service(kv_store) -> LedgerService:
    """Provide LedgerService over the SQLite store."""
    return LedgerService(store=kv_store)


@pytest.fixture
def pricing_factory(
    ledger_service: LedgerService,
    clock: ManualClock,
    sleeper: RecordingSleep,
) -> Callable[..., PricingService]:
    """Factory building PricingService with the manual clock and recorded sleeps."""

    def _create(provider, **kwargs) -> PricingService:
        options = {
            "rate_ttl_seconds": 60,
            "total_ttl_seconds": 30,
            "max_retries": 3,
            "retry_delay_seconds": 1.0,
            "batch_size": 5,
            "batch_delay_seconds": 1.0,
        }
        options.update(kwargs)
        service = PricingService(
            ledger=ledger_service,
            provider=provider,
            clock=clock,
            sleep=sleeper,
            **options,
        )
        ledger_service.subscribe(service.invalidate_total)
        return service

    return _create


@pytest.fixture
def pricing_service(pricing_factory, price_provider) -> PricingService:
    """Provide PricingService over the deterministic provider."""
    return pricing_factory(price_provider)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(session_factory, price_provider, clock, sleeper) -> AppContext:
    """AppContext wired to the in-memory database and deterministic provider."""
    settings = Settings(database_url="sqlite://", log_level="WARNING")
    context = AppContext(
        settings=settings,
        provider=price_provider,
        session_factory=session_factory,
        clock=clock,
        sleep=sleeper,
    )
    return context


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client backed by the test AppContext."""
    app.dependency_overrides[get_app_context] = lambda: app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def assert_float_equal(actual: float, expected: float, tolerance: float = 1e-6) -> None:
    """Assert two floats are equal within tolerance."""
    assert abs(actual - expected) <= tolerance, f"{actual} != {expected} (±{tolerance})"
