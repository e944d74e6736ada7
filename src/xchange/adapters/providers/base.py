# src/xchange/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Sources

This module defines the abstract base class for remote rate sources.
It establishes the contract RateCache depends on.

Files that USE this module:
- xchange.adapters.providers.exchangerate_api (ExchangeRateApiClient implements RateSource)
- xchange.application.rate_cache (depends only on RateSource)

Files that this module USES:
- xchange.domain.models (RateTable, CurrencyCatalog)
"""
from abc import ABC, abstractmethod

from xchange.domain.models import CurrencyCatalog, RateTable


class RateSource(ABC):
    @abstractmethod
    def latest_rates(self, base: str) -> RateTable:
        """Return the latest rates of 1 unit of `base` in every supported currency."""
        raise NotImplementedError

    @abstractmethod
    def supported_codes(self) -> CurrencyCatalog:
        """Return the catalog of supported currency codes and their names."""
        raise NotImplementedError
