# src/xchange/application/conversion_engine.py
"""
Conversion Engine - Debounced Conversion Pipeline and History

This module owns the conversion inputs (amount, from/to codes), the
debounce timer and the conversion history. Every input change re-arms a
trailing-edge timer; when it fires, compute_now() converts the final input
state, publishes the result, and records it in the persisted history.

Incomplete input (empty or zero amount, unknown currency, no rates yet) is
a silent no-op: nothing is published and history is left alone.

Files that USE this module:
- xchange.application.controller (setters, swap, result subscription)
- xchange.app (composition root)

Files that this module USES:
- xchange.application.rate_cache (RateCache.require_rates)
- xchange.adapters.persistence.base (PersistenceStore, HISTORY_KEY)
- xchange.domain (models and errors)
- xchange.shared (Debouncer, Signal, sanitize_amount)
"""
from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import List, Optional

from xchange.adapters.persistence.base import HISTORY_KEY, PersistenceStore
from xchange.application.rate_cache import RateCache
from xchange.domain.errors import (
    ComputationError,
    InvalidPair,
    MalformedAmount,
    PersistenceError,
    StaleDataUnavailable,
)
from xchange.domain.models import ConversionRequest, ConversionResult, HistoryEntry, RateTable
from xchange.shared.debounce import Debouncer
from xchange.shared.events import Signal
from xchange.shared.validators import sanitize_amount

logger = logging.getLogger(__name__)

AMOUNT_QUANTUM = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")
# significant digits kept beyond the amount's magnitude
PRECISION_MARGIN = 40


def _parse_amount(amount: str) -> Decimal:
    """
    Read a sanitized amount as a positive Decimal.

    Raises:
        MalformedAmount: If the amount is empty, not a number, or not positive
    """
    if not amount:
        raise MalformedAmount("Amount is empty")
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise MalformedAmount(f"Amount {amount!r} is not a number") from e
    if not value.is_finite() or value <= 0:
        raise MalformedAmount(f"Amount {amount!r} is not positive")
    return value


def convert(request: ConversionRequest, table: RateTable,
            last_updated: Optional[str] = None) -> ConversionResult:
    """
    Convert request.amount from request.from_code to request.to_code.

    converted = amount / rate[from] * rate[to] (2 decimals, half-up)
    rate      = rate[to] / rate[from]          (4 decimals, half-up)

    Both rates are relative to the table's base, which cancels out, so any
    pair can be converted from a single-base table. Precision grows with the
    amount, so arbitrarily long amounts convert exactly to the cent.

    Raises:
        MalformedAmount: If the amount is not a positive number
        InvalidPair: If either code has no rate in the table
        ComputationError: If the arithmetic fails
    """
    value = _parse_amount(request.amount)
    if request.from_code not in table or request.to_code not in table:
        raise InvalidPair(request.from_code, request.to_code)

    try:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, value.adjusted() + PRECISION_MARGIN)
            from_rate = Decimal(str(table.rates[request.from_code]))
            to_rate = Decimal(str(table.rates[request.to_code]))
            converted = (value / from_rate * to_rate).quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
            pair_rate = (to_rate / from_rate).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ArithmeticError) as e:
        raise ComputationError(
            f"Failed to convert {request.amount} {request.from_code}->{request.to_code}: {e}"
        ) from e

    return ConversionResult(
        amount=f"{converted:f}",
        rate=f"{pair_rate:f}",
        last_updated=last_updated if last_updated is not None else table.updated_at,
        from_code=request.from_code,
        to_code=request.to_code,
        input_amount=request.amount,
    )


class ConversionEngine:
    """Holds conversion inputs, the debounce timer, and the history list."""

    def __init__(
        self,
        rate_cache: RateCache,
        store: PersistenceStore,
        from_code: str = "USD",
        to_code: str = "EUR",
        debounce_seconds: float = 0.5,
        history_limit: int = 10,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.rate_cache = rate_cache
        self.store = store
        self.history_limit = history_limit
        self._amount = ""
        self._from_code = from_code
        self._to_code = to_code
        self._result: Optional[ConversionResult] = None
        self._history: List[HistoryEntry] = []
        self._debouncer = Debouncer(debounce_seconds, self.compute_now, loop=loop)

        self.results = Signal("conversion.results")
        self.errors = Signal("conversion.errors")
        self.history_changed = Signal("conversion.history")

    # -- read access ---------------------------------------------------

    @property
    def amount(self) -> str:
        return self._amount

    @property
    def from_code(self) -> str:
        return self._from_code

    @property
    def to_code(self) -> str:
        return self._to_code

    @property
    def result(self) -> Optional[ConversionResult]:
        """Last published result."""
        return self._result

    @property
    def history(self) -> List[HistoryEntry]:
        """Copy of the history, newest first."""
        return list(self._history)

    @property
    def pending(self) -> bool:
        """True while a recompute is armed but has not fired yet."""
        return self._debouncer.pending

    # -- inputs ----------------------------------------------------------

    def set_amount(self, raw: str) -> str:
        """
        Sanitize and store the amount, then re-arm the debounce timer.

        Returns:
            The sanitized amount
        """
        self._amount = sanitize_amount(raw)
        self._debouncer.trigger()
        return self._amount

    def set_from_code(self, code: str) -> None:
        self._from_code = code.upper()
        self._debouncer.trigger()

    def set_to_code(self, code: str) -> None:
        self._to_code = code.upper()
        self._debouncer.trigger()

    def set_pair(self, from_code: str, to_code: str) -> None:
        """Set both codes with a single re-arm."""
        self._from_code = from_code.upper()
        self._to_code = to_code.upper()
        self._debouncer.trigger()

    def swap(self) -> None:
        """Exchange from and to codes; counts as an input change."""
        self._from_code, self._to_code = self._to_code, self._from_code
        self._debouncer.trigger()

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Pin the debounce timer to loop.

        Input setters must run on the loop's thread; once bound they may be
        called from plain synchronous code there.
        """
        self._debouncer.bind(loop)

    def cancel_pending(self) -> None:
        self._debouncer.cancel()

    def flush(self) -> None:
        """Run an armed recompute right away."""
        self._debouncer.flush()

    # -- pipeline --------------------------------------------------------

    def compute_now(self) -> Optional[ConversionResult]:
        """
        Convert the current inputs (debounce callback).

        Returns:
            The new ConversionResult, or None when inputs are incomplete or
            the computation failed
        """
        request = ConversionRequest(self._amount, self._from_code, self._to_code)
        try:
            table = self.rate_cache.require_rates()
            result = convert(request, table)
        except (MalformedAmount, InvalidPair, StaleDataUnavailable) as e:
            logger.debug("Skipping conversion: %s", e)
            return None
        except ComputationError as e:
            logger.error("Conversion failed: %s", e)
            self.errors.emit(e)
            return None

        self._result = result
        self.results.emit(result)
        self._record(HistoryEntry.from_result(result))
        logger.info(
            "Converted %s %s -> %s %s (rate %s)",
            request.amount, request.from_code, result.amount, request.to_code, result.rate,
        )
        return result

    def _record(self, entry: HistoryEntry) -> None:
        self._history = [entry, *self._history][: self.history_limit]
        self._persist_history()
        self.history_changed.emit(self.history)

    def _persist_history(self) -> None:
        try:
            self.store.save(HISTORY_KEY, [e.to_json() for e in self._history])
        except PersistenceError as e:
            # in-memory history stays authoritative
            logger.error("Failed to persist conversion history: %s", e)

    # -- history ---------------------------------------------------------

    def load_history(self) -> List[HistoryEntry]:
        """
        Restore persisted history; malformed entries are skipped.

        Returns:
            The loaded history, newest first, at most history_limit entries
        """
        data = self.store.load(HISTORY_KEY)
        if data is None:
            logger.info("No persisted conversion history found")
            return self.history
        if not isinstance(data, list):
            logger.warning("Persisted history has unexpected type %s, ignoring", type(data).__name__)
            return self.history

        entries = []
        for item in data:
            try:
                entries.append(HistoryEntry.from_json(item))
            except (KeyError, TypeError) as e:
                logger.warning("Skipping malformed history entry %r: %s", item, e)

        self._history = entries[: self.history_limit]
        logger.info("Loaded %d history entries", len(self._history))
        self.history_changed.emit(self.history)
        return self.history

    def clear_history(self) -> None:
        self._history = []
        self._persist_history()
        self.history_changed.emit(self.history)
