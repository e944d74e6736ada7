# src/xchange/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the stateful components of the conversion core.
No direct I/O dependencies - uses adapters through interfaces.
"""

from xchange.application.rate_cache import RateCache
from xchange.application.conversion_engine import ConversionEngine, convert
from xchange.application.favorites import FavoritesManager
from xchange.application.network_monitor import NetworkStatusMonitor
from xchange.application.controller import ExchangeController

__all__ = [
    "RateCache",
    "ConversionEngine",
    "convert",
    "FavoritesManager",
    "NetworkStatusMonitor",
    "ExchangeController",
]
