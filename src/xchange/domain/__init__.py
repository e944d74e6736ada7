# src/xchange/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business errors.
No dependencies on infrastructure or external systems.
"""

from xchange.domain.models import (
    ConversionRequest,
    ConversionResult,
    CurrencyCatalog,
    FavoritePair,
    HistoryEntry,
    RateTable,
)
from xchange.domain.errors import (
    ComputationError,
    ExchangeError,
    InvalidPair,
    InvalidRateError,
    MalformedAmount,
    NetworkFailure,
    PersistenceError,
    StaleDataUnavailable,
)

__all__ = [
    "RateTable",
    "CurrencyCatalog",
    "ConversionRequest",
    "ConversionResult",
    "HistoryEntry",
    "FavoritePair",
    "ExchangeError",
    "NetworkFailure",
    "StaleDataUnavailable",
    "InvalidPair",
    "MalformedAmount",
    "ComputationError",
    "InvalidRateError",
    "PersistenceError",
]
