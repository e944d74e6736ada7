# src/xchange/adapters/formatting/formatter.py
"""
Display Formatter - Numbers, Symbols and Rows for the View

This module turns core outputs into the strings the presentation layer
shows: currency symbols, grouped numbers, the echo of the amount being
typed, the result lines and the history table rows.

Files that USE this module:
- xchange.application.controller (offline notice, result lines for the view)
- tests.test_formatter (unit tests)

Files that this module USES:
- xchange.domain.models (ConversionResult, HistoryEntry, CurrencyCatalog)
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional, Union

from xchange.domain.models import ConversionResult, CurrencyCatalog, HistoryEntry

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "NGN": "₦",
    "INR": "₹",
    "CNY": "¥",
    "AUD": "A$",
    "CAD": "C$",
}

OFFLINE_NOTICE = "You are currently offline. Some features may be limited."


def currency_symbol(code: str) -> str:
    """Symbol for a currency, or the code itself when none is known."""
    return CURRENCY_SYMBOLS.get(code, code)


def format_number(value: Union[str, float, Decimal], decimals: int = 2) -> str:
    """
    Format a number with thousands separators and a fixed number of decimals.

    Args:
        value: Number or numeric string (e.g. "1234.5")
        decimals: Fraction digits to show (default: 2)

    Returns:
        Formatted string like '1,234.50', or the input unchanged if it is not numeric
    """
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    if not number.is_finite():
        return str(value)
    quantum = Decimal(1).scaleb(-decimals)
    return f"{number.quantize(quantum, rounding=ROUND_HALF_UP):,.{decimals}f}"


def format_amount_input(amount: str) -> str:
    """
    Echo a sanitized amount while the user types.

    The integer part gets thousands separators; a fraction part, if any, is
    cut to 2 digits. A trailing dot is kept so typing "12." stays visible.

    Args:
        amount: Sanitized amount (digits and at most one dot)

    Returns:
        Display string like '1,234.5'
    """
    whole, dot, fraction = amount.partition(".")
    if whole:
        whole = f"{int(whole):,}"
    if dot:
        return f"{whole}.{fraction[:2]}"
    return whole


def format_result(result: ConversionResult) -> List[str]:
    """
    Format a conversion result as the two display lines.

    Returns:
        ['€ 92.00', '$1 = €0.9200']
    """
    to_symbol = currency_symbol(result.to_code)
    from_symbol = currency_symbol(result.from_code)
    return [
        f"{to_symbol} {format_number(result.amount)}",
        f"{from_symbol}1 = {to_symbol}{format_number(result.rate, decimals=4)}",
    ]


def _fmt_date(timestamp: str) -> str:
    """ISO timestamp to YYYY-MM-DD; unparseable values are shown as-is."""
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return timestamp


def history_rows(entries: Iterable[HistoryEntry],
                 catalog: Optional[CurrencyCatalog] = None) -> List[dict]:
    """
    Build rows for the recent conversions table.

    Args:
        entries: History entries, newest first
        catalog: Optional catalog for currency names (falls back to codes)

    Returns:
        One dict per entry with date/from/to/amount/result/rate display strings
    """
    rows = []
    for entry in entries:
        from_name = catalog.name_for(entry.from_code) if catalog is not None else entry.from_code
        to_name = catalog.name_for(entry.to_code) if catalog is not None else entry.to_code
        rows.append({
            "date": _fmt_date(entry.timestamp),
            "from": f"{currency_symbol(entry.from_code)} {entry.from_code}",
            "to": f"{currency_symbol(entry.to_code)} {entry.to_code}",
            "from_name": from_name,
            "to_name": to_name,
            "amount": f"{currency_symbol(entry.from_code)} {format_number(entry.amount)}",
            "result": f"{currency_symbol(entry.to_code)} {format_number(entry.result)}",
            "rate": entry.rate,
        })
    return rows
