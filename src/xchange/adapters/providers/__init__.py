# src/xchange/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for remote exchange rate APIs.
All providers implement the RateSource interface.
"""

from xchange.adapters.providers.base import RateSource
from xchange.adapters.providers.exchangerate_api import ExchangeRateApiClient

__all__ = [
    "RateSource",
    "ExchangeRateApiClient",
]
