# src/xchange/adapters/formatting/__init__.py
"""
Formatting Adapters - Display Formatting

This package contains display helpers for the presentation layer.
"""

from xchange.adapters.formatting.formatter import (
    OFFLINE_NOTICE,
    currency_symbol,
    format_amount_input,
    format_number,
    format_result,
    history_rows,
)

__all__ = [
    "OFFLINE_NOTICE",
    "currency_symbol",
    "format_amount_input",
    "format_number",
    "format_result",
    "history_rows",
]
