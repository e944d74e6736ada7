# tests/conftest.py
"""
Pytest configuration and fixtures.

Provides an in-process rate source with the sample table
USD=1, EUR=0.92, GBP=0.78 and wired-up components built on a MemoryStore.
"""
import pytest
import pytest_asyncio

from xchange.adapters.persistence.memory_store import MemoryStore
from xchange.adapters.providers.base import RateSource
from xchange.application.conversion_engine import ConversionEngine
from xchange.application.favorites import FavoritesManager
from xchange.application.network_monitor import NetworkStatusMonitor
from xchange.application.rate_cache import RateCache
from xchange.domain.errors import NetworkFailure
from xchange.domain.models import CurrencyCatalog, RateTable

SAMPLE_RATES = {"USD": 1.0, "EUR": 0.92, "GBP": 0.78}
SAMPLE_CODES = [["USD", "United States Dollar"], ["EUR", "Euro"], ["GBP", "Pound Sterling"]]
SAMPLE_UPDATED = "Sat, 17 Oct 2026 00:00:01 +0000"

# short debounce window so tests stay fast
TEST_DEBOUNCE = 0.05


class FakeSource(RateSource):
    """Scriptable RateSource; flip fail_rates/fail_codes to simulate an API error."""

    def __init__(self):
        self.rates = dict(SAMPLE_RATES)
        self.codes = [list(c) for c in SAMPLE_CODES]
        self.fail_rates = False
        self.fail_codes = False
        self.rate_calls = 0
        self.code_calls = 0

    def latest_rates(self, base):
        self.rate_calls += 1
        if self.fail_rates:
            raise NetworkFailure("ExchangeRate-API error: unknown")
        return RateTable(base=base, rates=self.rates, updated_at=SAMPLE_UPDATED)

    def supported_codes(self):
        self.code_calls += 1
        if self.fail_codes:
            raise NetworkFailure("ExchangeRate-API error: unknown")
        return CurrencyCatalog.from_supported_codes(self.codes)


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def rate_cache(fake_source):
    return RateCache(fake_source, base="USD")


@pytest_asyncio.fixture
async def loaded_cache(rate_cache):
    await rate_cache.refresh_rates()
    await rate_cache.refresh_catalog()
    return rate_cache


@pytest.fixture
def engine_factory(store):
    def build(cache, **kwargs):
        kwargs.setdefault("debounce_seconds", TEST_DEBOUNCE)
        return ConversionEngine(cache, store, **kwargs)
    return build


@pytest.fixture
def favorites(store):
    return FavoritesManager(store)


@pytest.fixture
def monitor():
    # no probe URL: sample() keeps the current value and never touches the network
    return NetworkStatusMonitor(probe_url=None)
