# src/xchange/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions raised by the conversion
core. Network and persistence adapters translate their library errors into
these types.
"""


class ExchangeError(Exception):
    """Base exception for domain errors."""
    pass


class NetworkFailure(ExchangeError):
    """Raised when a fetch fails or the API reports a non-success result."""
    pass


class StaleDataUnavailable(ExchangeError):
    """Raised when rates are requested before any successful refresh."""
    pass


class InvalidPair(ExchangeError):
    """Raised when a currency code is absent from the rate table."""

    def __init__(self, from_code: str, to_code: str):
        super().__init__(f"No rate for pair {from_code}/{to_code}")
        self.from_code = from_code
        self.to_code = to_code


class MalformedAmount(ExchangeError):
    """Raised when the amount cannot be read as a positive number."""
    pass


class ComputationError(ExchangeError):
    """Raised when the conversion arithmetic itself fails."""
    pass


class InvalidRateError(ExchangeError):
    """Raised when a rate value is invalid (e.g., negative, zero or NaN)."""
    pass


class PersistenceError(ExchangeError):
    """Raised when durable state cannot be written."""
    pass
