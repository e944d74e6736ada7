# src/xchange/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation and amount sanitization
- Debounce timer
- Signals (publish/subscribe)
- Logging configuration
"""

from xchange.shared.validators import (
    sanitize_amount,
    validate_api_key,
    validate_currency_code,
)
from xchange.shared.debounce import Debouncer
from xchange.shared.events import Signal

__all__ = [
    "sanitize_amount",
    "validate_api_key",
    "validate_currency_code",
    "Debouncer",
    "Signal",
]
