# src/xchange/application/controller.py
"""
Exchange Controller - Public API for the Presentation Layer

This module wires RateCache, ConversionEngine, FavoritesManager and
NetworkStatusMonitor together and is the only object the view talks to.
It forwards input changes to the components that own the state, turns
refresh failures into a user-visible message, and republishes every state
change on a single `changed` signal with a topic string.

Files that USE this module:
- xchange.app (create_controller)

Files that this module USES:
- xchange.application.rate_cache (RateCache)
- xchange.application.conversion_engine (ConversionEngine)
- xchange.application.favorites (FavoritesManager)
- xchange.application.network_monitor (NetworkStatusMonitor)
- xchange.adapters.formatting (OFFLINE_NOTICE, format_result)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from xchange.adapters.formatting.formatter import OFFLINE_NOTICE, format_result
from xchange.application.conversion_engine import ConversionEngine
from xchange.application.favorites import FavoritesManager
from xchange.application.network_monitor import NetworkStatusMonitor
from xchange.application.rate_cache import CATALOG, RATES, RateCache
from xchange.domain.errors import ComputationError, NetworkFailure
from xchange.domain.models import (
    ConversionResult,
    CurrencyCatalog,
    FavoritePair,
    HistoryEntry,
    RateTable,
)
from xchange.shared.events import Signal, Unsubscribe

logger = logging.getLogger(__name__)

RATES_ERROR = "Failed to fetch rates. Please check your connection."
CATALOG_ERROR = "Failed to load currencies. Please check your connection."
CONVERSION_ERROR = "Failed to perform conversion. Please try again."

# topics published on ExchangeController.changed
TOPIC_RATES = RATES
TOPIC_CATALOG = CATALOG
TOPIC_RESULT = "result"
TOPIC_HISTORY = "history"
TOPIC_FAVORITES = "favorites"
TOPIC_NETWORK = "network"
TOPIC_ERROR = "error"
TOPIC_LOADING = "loading"
TOPIC_HISTORY_VISIBLE = "history_visible"


class ExchangeController:
    """Orchestrates the conversion core for one view."""

    def __init__(
        self,
        rate_cache: RateCache,
        engine: ConversionEngine,
        favorites: FavoritesManager,
        monitor: NetworkStatusMonitor,
        refresh_on_reconnect: bool = False,
        poll_interval: Optional[float] = None,
    ):
        self.rate_cache = rate_cache
        self.engine = engine
        self.favorites = favorites
        self.monitor = monitor
        self.refresh_on_reconnect = refresh_on_reconnect
        self.poll_interval = poll_interval

        self.error: Optional[str] = None
        self.loading = False
        self.show_history = False
        self.changed = Signal("controller.changed")

        self._subscriptions: List[Unsubscribe] = []
        self._background: set[asyncio.Task] = set()

    # -- lifecycle -------------------------------------------------------

    async def initialize(self) -> None:
        """
        Start the core: load history and favorites, then refresh rates and
        catalog concurrently with the first connectivity sample. The
        background probe loop starts when a poll interval is configured.

        Refresh failures end up in `error`; this method does not raise them.
        Input setters may be called afterwards from synchronous code running
        on the same thread as the event loop.
        """
        self._subscriptions = [
            self.rate_cache.changed.subscribe(self.changed.emit),
            self.engine.results.subscribe(lambda _result: self._publish(TOPIC_RESULT)),
            self.engine.errors.subscribe(self._on_engine_error),
            self.engine.history_changed.subscribe(lambda _history: self._publish(TOPIC_HISTORY)),
            self.favorites.changed.subscribe(lambda _pairs: self._publish(TOPIC_FAVORITES)),
            self.monitor.subscribe(self._on_network_change),
        ]

        self.engine.bind_loop(asyncio.get_running_loop())
        self.engine.load_history()
        self.favorites.load()
        await asyncio.gather(self.refresh(), self.monitor.sample())
        if self.poll_interval:
            self.monitor.start(self.poll_interval)
        logger.info(
            "Controller initialized: %d rates, %d currencies, %d history, %d favorites, online=%s",
            len(self.rates) if self.rates else 0,
            len(self.currencies),
            len(self.history),
            len(self.favorites),
            self.monitor.is_online,
        )

    async def close(self) -> None:
        """Detach from components and drop any pending recompute."""
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions = []
        self.engine.cancel_pending()
        for task in list(self._background):
            task.cancel()
        await self.monitor.stop()

    async def refresh(self) -> None:
        """
        Refresh rates and catalog concurrently.

        Each failure sets the matching user-visible error; cached data stays usable.
        """
        self._set_loading(True)
        try:
            rates_outcome, catalog_outcome = await asyncio.gather(
                self.rate_cache.refresh_rates(),
                self.rate_cache.refresh_catalog(),
                return_exceptions=True,
            )
        finally:
            self._set_loading(False)

        failed = False
        for outcome, message in ((rates_outcome, RATES_ERROR), (catalog_outcome, CATALOG_ERROR)):
            if isinstance(outcome, NetworkFailure):
                self._set_error(message)
                failed = True
            elif isinstance(outcome, BaseException):
                raise outcome
        if not failed and self.error in (RATES_ERROR, CATALOG_ERROR):
            self.dismiss_error()

    # -- read access for the view ---------------------------------------

    @property
    def amount(self) -> str:
        return self.engine.amount

    @property
    def from_code(self) -> str:
        return self.engine.from_code

    @property
    def to_code(self) -> str:
        return self.engine.to_code

    @property
    def result(self) -> Optional[ConversionResult]:
        return self.engine.result

    @property
    def result_lines(self) -> List[str]:
        return format_result(self.result) if self.result else []

    @property
    def history(self) -> List[HistoryEntry]:
        return self.engine.history

    @property
    def favorite_pairs(self) -> List[FavoritePair]:
        return self.favorites.list()

    @property
    def rates(self) -> Optional[RateTable]:
        return self.rate_cache.rates

    @property
    def currencies(self) -> CurrencyCatalog:
        return self.rate_cache.catalog

    @property
    def last_updated(self) -> Optional[str]:
        return self.rate_cache.last_updated

    @property
    def is_offline(self) -> bool:
        return self.monitor.is_offline

    @property
    def offline_notice(self) -> Optional[str]:
        return OFFLINE_NOTICE if self.monitor.is_offline else None

    @property
    def is_favorite(self) -> bool:
        """Whether the currently selected pair is a favorite."""
        return self.favorites.is_favorite(self.from_code, self.to_code)

    def search_currencies(self, query: str = "", side: str = "from") -> List[Tuple[str, str]]:
        """
        Catalog entries matching query for one picker.

        Args:
            query: Search text matched against code and name
            side: "from" or "to"; the code selected on the other side is excluded
        """
        if side not in ("from", "to"):
            raise ValueError(f"side must be 'from' or 'to', got {side!r}")
        exclude = self.to_code if side == "from" else self.from_code
        return self.currencies.search(query, exclude=exclude)

    # -- inputs ----------------------------------------------------------

    def set_amount(self, raw: str) -> str:
        return self.engine.set_amount(raw)

    def set_from_code(self, code: str) -> None:
        self.engine.set_from_code(code)

    def set_to_code(self, code: str) -> None:
        self.engine.set_to_code(code)

    def swap(self) -> None:
        self.engine.swap()

    def toggle_favorite(self) -> bool:
        """Toggle the current pair; returns the new membership."""
        return self.favorites.toggle(self.from_code, self.to_code)

    def select_favorite(self, pair: FavoritePair | str) -> None:
        """Make a favorite the current pair (quick-select chip)."""
        if isinstance(pair, str):
            pair = FavoritePair.from_key(pair)
        self.engine.set_pair(pair.from_code, pair.to_code)

    def toggle_history(self) -> bool:
        self.show_history = not self.show_history
        self._publish(TOPIC_HISTORY_VISIBLE)
        return self.show_history

    def dismiss_error(self) -> None:
        self._set_error(None)

    def subscribe(self, callback: Callable[[str], object]) -> Unsubscribe:
        """Register a view callback receiving a topic string on every change."""
        return self.changed.subscribe(callback)

    # -- internals -------------------------------------------------------

    def _publish(self, topic: str) -> None:
        self.changed.emit(topic)

    def _set_error(self, message: Optional[str]) -> None:
        if message:
            logger.warning("User-visible error: %s", message)
        self.error = message
        self._publish(TOPIC_ERROR)

    def _set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._publish(TOPIC_LOADING)

    def _on_engine_error(self, error: ComputationError) -> None:
        self._set_error(CONVERSION_ERROR)

    def _on_network_change(self, online: bool) -> None:
        self._publish(TOPIC_NETWORK)
        if online and self.refresh_on_reconnect:
            logger.info("Back online, refreshing rates")
            task = asyncio.get_running_loop().create_task(self.refresh())
            self._background.add(task)
            task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Background refresh failed: %s", error, exc_info=error)
