# src/xchange/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Rate tables and the currency catalog
- Conversion requests and results
- History entries and favorite pairs

Files that USE this module:
- xchange.application.* (all services use domain models)
- xchange.adapters.* (adapters create and serialize domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- xchange.shared.validators (currency code format)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timezone  # Date/time utilities for timestamps
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple  # Type hints

from xchange.domain.errors import InvalidRateError
from xchange.shared.validators import validate_currency_code


@dataclass(frozen=True)
class RateTable:
    """
    Rates of one unit of the base currency expressed in every other currency.

    Attributes:
        base: Anchor currency code; its own rate is exactly 1
        rates: Read-only mapping code -> rate (positive, finite)
        updated_at: Provider's human-readable last-update time
        fetched_at: When this table was received (UTC)
    """
    base: str
    rates: Mapping[str, float]
    updated_at: Optional[str] = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        cleaned = {}
        for code, value in self.rates.items():
            try:
                rate = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidRateError(f"Rate for {code} is not numeric: {value!r}") from e
            if not math.isfinite(rate) or rate <= 0:
                raise InvalidRateError(f"Rate for {code} must be positive, got {value!r}")
            cleaned[str(code).upper()] = rate

        base_rate = cleaned.setdefault(self.base, 1.0)
        if base_rate != 1.0:
            raise InvalidRateError(f"Base currency {self.base} must have rate 1, got {base_rate}")

        object.__setattr__(self, "rates", MappingProxyType(cleaned))

    def __contains__(self, code: object) -> bool:
        return code in self.rates

    def __len__(self) -> int:
        return len(self.rates)

    @property
    def codes(self) -> List[str]:
        return sorted(self.rates)


@dataclass(frozen=True)
class CurrencyCatalog:
    """Currency code -> display name."""
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    @classmethod
    def from_supported_codes(cls, pairs: Iterable[Iterable[Any]]) -> CurrencyCatalog:
        """Build a catalog from [code, name] pairs as returned by the codes endpoint."""
        names = {}
        for code, name in pairs:
            names[str(code)] = str(name)
        return cls(names)

    def __contains__(self, code: object) -> bool:
        return code in self.names

    def __len__(self) -> int:
        return len(self.names)

    def name_for(self, code: str) -> str:
        """Display name, falling back to the bare code."""
        return self.names.get(code, code)

    def search(self, query: str = "", exclude: Optional[str] = None) -> List[Tuple[str, str]]:
        """
        Entries whose code or name contains the query (case-insensitive).

        Args:
            query: Search text; empty matches everything
            exclude: Code to leave out (the currency selected on the other side)

        Returns:
            List of (code, name) pairs in catalog order
        """
        term = query.strip().lower()
        return [
            (code, name)
            for code, name in self.names.items()
            if code != exclude and (term in code.lower() or term in name.lower())
        ]


@dataclass(frozen=True)
class ConversionRequest:
    """Snapshot of the inputs a conversion is computed from."""
    amount: str
    from_code: str
    to_code: str


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of one conversion, formatted for display.

    Attributes:
        amount: Converted amount rounded to 2 decimals, e.g. "92.00"
        rate: Effective pair rate rounded to 4 decimals, e.g. "0.9200"
        last_updated: Timestamp of the rate table used
        from_code: Source currency
        to_code: Target currency
        input_amount: Sanitized amount that was converted
    """
    amount: str
    rate: str
    last_updated: Optional[str]
    from_code: str
    to_code: str
    input_amount: str


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable record of one completed conversion."""
    timestamp: str  # ISO-8601, UTC
    from_code: str
    to_code: str
    amount: str
    result: str
    rate: str

    @classmethod
    def from_result(cls, result: ConversionResult, now: Optional[datetime] = None) -> HistoryEntry:
        now = now or datetime.now(timezone.utc)
        return cls(
            timestamp=now.isoformat(),
            from_code=result.from_code,
            to_code=result.to_code,
            amount=result.input_amount,
            result=result.amount,
            rate=result.rate,
        )

    def to_json(self) -> dict:
        """
        Convert to the persisted JSON shape.

        Returns:
            Dictionary with keys timestamp/from/to/amount/result/rate
        """
        return {
            "timestamp": self.timestamp,
            "from": self.from_code,
            "to": self.to_code,
            "amount": self.amount,
            "result": self.result,
            "rate": self.rate,
        }

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> HistoryEntry:
        """
        Create a HistoryEntry from its persisted JSON shape.

        Raises:
            KeyError: If a required key is missing
            TypeError: If data is not a mapping
        """
        return HistoryEntry(
            timestamp=str(data["timestamp"]),
            from_code=str(data["from"]),
            to_code=str(data["to"]),
            amount=str(data["amount"]),
            result=str(data["result"]),
            rate=str(data["rate"]),
        )


@dataclass(frozen=True)
class FavoritePair:
    """Ordered (from, to) pair; USD/EUR and EUR/USD are different favorites."""
    from_code: str
    to_code: str

    @property
    def key(self) -> str:
        return f"{self.from_code}/{self.to_code}"

    @classmethod
    def from_key(cls, key: str) -> FavoritePair:
        """
        Parse a "FROM/TO" key.

        Raises:
            ValueError: If the key is not two valid codes separated by "/"
        """
        parts = str(key).split("/")
        if len(parts) != 2 or not all(validate_currency_code(p) for p in parts):
            raise ValueError(f"Malformed favorite pair key: {key!r}")
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return self.key
