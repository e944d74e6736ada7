# src/xchange/app.py
"""
Application Entry Point - Composition Root

This module wires all dependencies of the conversion core from settings.
A presentation layer calls create_controller() once, awaits
controller.initialize(), and renders from the controller afterwards.

Files that USE this module:
- The embedding presentation layer

Files that this module USES:
- xchange.shared.logging_conf (setup_logging for logging configuration)
- xchange.config (settings for configuration management)
- xchange.adapters.providers.exchangerate_api (remote rate source)
- xchange.adapters.persistence (JSON file store)
- xchange.application.* (components and controller)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
from typing import Optional

from xchange.adapters.persistence.base import PersistenceStore
from xchange.adapters.persistence.file_store import JsonFileStore
from xchange.adapters.providers.base import RateSource
from xchange.adapters.providers.exchangerate_api import ExchangeRateApiClient
from xchange.application.controller import ExchangeController
from xchange.application.conversion_engine import ConversionEngine
from xchange.application.favorites import FavoritesManager
from xchange.application.network_monitor import NetworkStatusMonitor
from xchange.application.rate_cache import RateCache
from xchange.config import Settings, settings as default_settings
from xchange.shared.logging_conf import setup_logging
from xchange.shared.validators import validate_api_key

logger = logging.getLogger(__name__)


def configure_logging(cfg: Optional[Settings] = None, level: Optional[int] = None) -> None:
    """Set up logging from settings (stdout and/or rotating file); level overrides LOG_LEVEL."""
    cfg = cfg or default_settings
    setup_logging(
        level=cfg.log_level if level is None else level,
        log_file=cfg.log_file,
        log_dir=cfg.log_dir,
        max_bytes=cfg.log_max_bytes,
        backup_count=cfg.log_backup_count,
        log_to_stdout=cfg.log_stdout,
    )


def create_controller(
    cfg: Optional[Settings] = None,
    source: Optional[RateSource] = None,
    store: Optional[PersistenceStore] = None,
    monitor: Optional[NetworkStatusMonitor] = None,
) -> ExchangeController:
    """
    Build a fully wired ExchangeController.

    Args:
        cfg: Settings to use (defaults to the global settings)
        source: Rate source (defaults to ExchangeRateApiClient from settings)
        store: Persistence store (defaults to JsonFileStore under cfg.data_dir)
        monitor: Network monitor (defaults to a probe against cfg.probe_url)

    Returns:
        Controller ready for `await controller.initialize()`

    Raises:
        ValueError: If no source is given and the API key is not configured
    """
    cfg = cfg or default_settings

    if source is None:
        if not validate_api_key(cfg.api_key):
            raise ValueError("EXCHANGE_API_KEY not configured in environment or .env.")
        source = ExchangeRateApiClient(endpoint=cfg.endpoint, timeout=cfg.http_timeout_seconds)
    if store is None:
        store = JsonFileStore(cfg.data_dir)
    if monitor is None:
        monitor = NetworkStatusMonitor(probe_url=cfg.probe_url, timeout=cfg.http_timeout_seconds)

    rate_cache = RateCache(source, base=cfg.base_currency)
    engine = ConversionEngine(
        rate_cache,
        store,
        from_code=cfg.default_from_currency,
        to_code=cfg.default_to_currency,
        debounce_seconds=cfg.debounce_seconds,
        history_limit=cfg.history_limit,
    )
    favorites = FavoritesManager(store)

    logger.info(
        "Conversion core wired: base=%s, pair=%s/%s, debounce=%dms, history=%d, data_dir=%s",
        cfg.base_currency,
        cfg.default_from_currency,
        cfg.default_to_currency,
        cfg.debounce_ms,
        cfg.history_limit,
        cfg.data_dir,
    )
    return ExchangeController(
        rate_cache,
        engine,
        favorites,
        monitor,
        refresh_on_reconnect=cfg.refresh_on_reconnect,
        poll_interval=cfg.connectivity_poll_seconds,
    )
