# src/xchange/application/rate_cache.py
"""
Rate Cache - Owner of the Rate Table and Currency Catalog

This module holds the current RateTable and CurrencyCatalog and refreshes
them from a RateSource. Refreshes replace state wholesale on success and
leave it untouched on failure. The blocking HTTP client runs in the event
loop's executor so both refreshes can be awaited concurrently.

Each refresh kind carries a request generation. When responses arrive out
of order, a response older than the newest applied one is dropped instead
of overwriting fresher data.

Files that USE this module:
- xchange.application.conversion_engine (require_rates at compute time)
- xchange.application.controller (refreshes on init and on demand)
- xchange.app (composition root)

Files that this module USES:
- xchange.adapters.providers.base (RateSource interface)
- xchange.domain (RateTable, CurrencyCatalog, NetworkFailure, StaleDataUnavailable)
- xchange.shared.events (changed signal)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, TypeVar

from xchange.adapters.providers.base import RateSource
from xchange.domain.errors import NetworkFailure, StaleDataUnavailable
from xchange.domain.models import CurrencyCatalog, RateTable
from xchange.shared.events import Signal

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATES = "rates"
CATALOG = "catalog"


class RateCache:
    """Single writer of the rate table and currency catalog."""

    def __init__(self, source: RateSource, base: str = "USD"):
        """
        Args:
            source: Remote rate source
            base: Currency all rates are expressed against
        """
        self.source = source
        self.base = base
        self._rates: Optional[RateTable] = None
        self._catalog = CurrencyCatalog()
        self._issued = {RATES: 0, CATALOG: 0}
        self._applied = {RATES: 0, CATALOG: 0}
        # fired with "rates" or "catalog" after a successful replacement
        self.changed = Signal("rate_cache.changed")

    @property
    def rates(self) -> Optional[RateTable]:
        return self._rates

    @property
    def catalog(self) -> CurrencyCatalog:
        return self._catalog

    @property
    def last_updated(self) -> Optional[str]:
        """Provider timestamp of the current table, if any."""
        return self._rates.updated_at if self._rates else None

    def require_rates(self) -> RateTable:
        """
        Get the current rate table.

        Raises:
            StaleDataUnavailable: If no refresh has succeeded yet
        """
        if self._rates is None:
            raise StaleDataUnavailable("No exchange rates loaded yet")
        return self._rates

    def is_stale(self, max_age: timedelta) -> bool:
        """True if there is no table or it was fetched longer ago than max_age."""
        if self._rates is None:
            return True
        return datetime.now(timezone.utc) - self._rates.fetched_at > max_age

    async def _run(self, kind: str, fetch: Callable[[], T]) -> tuple[int, T]:
        self._issued[kind] += 1
        generation = self._issued[kind]
        loop = asyncio.get_running_loop()
        try:
            value = await loop.run_in_executor(None, fetch)
        except NetworkFailure:
            raise
        except Exception as e:
            logger.error("Unexpected error refreshing %s: %s", kind, e, exc_info=True)
            raise NetworkFailure(f"Failed to refresh {kind}: {e}") from e
        return generation, value

    def _accept(self, kind: str, generation: int) -> bool:
        if generation < self._applied[kind]:
            logger.warning(
                "Discarding out-of-order %s response (generation %d, already applied %d)",
                kind, generation, self._applied[kind],
            )
            return False
        self._applied[kind] = generation
        return True

    async def refresh_rates(self) -> RateTable:
        """
        Fetch the latest rates against the base currency and replace the table.

        Returns:
            The table now held by the cache

        Raises:
            NetworkFailure: If the fetch fails; the previous table is kept
        """
        try:
            generation, table = await self._run(RATES, lambda: self.source.latest_rates(self.base))
        except NetworkFailure as e:
            logger.warning("Rate refresh failed, keeping previous table: %s", e)
            raise

        if self._accept(RATES, generation):
            self._rates = table
            logger.info("Rate table replaced: %d currencies, updated %s", len(table), table.updated_at)
            self.changed.emit(RATES)
        return self._rates  # type: ignore[return-value]

    async def refresh_catalog(self) -> CurrencyCatalog:
        """
        Fetch the supported currency codes and replace the catalog.

        Returns:
            The catalog now held by the cache

        Raises:
            NetworkFailure: If the fetch fails; the previous catalog is kept
        """
        try:
            generation, catalog = await self._run(CATALOG, self.source.supported_codes)
        except NetworkFailure as e:
            logger.warning("Catalog refresh failed, keeping previous catalog: %s", e)
            raise

        if self._accept(CATALOG, generation):
            self._catalog = catalog
            logger.info("Currency catalog replaced: %d codes", len(catalog))
            self.changed.emit(CATALOG)
        return self._catalog
