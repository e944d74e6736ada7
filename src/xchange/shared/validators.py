# src/xchange/shared/validators.py
"""
Input Validation Utilities - Amount Sanitization and Data Validation

This module provides validation helpers for configuration values and the
free-form amount the user types into the converter.

Files that USE this module:
- xchange.config.settings (currency code validation in field validators)
- xchange.adapters.providers.exchangerate_api (API key validation)
- xchange.application.conversion_engine (sanitize_amount on every keystroke)
- xchange.domain.models (currency code validation when parsing favorite keys)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Optional

_CURRENCY_CODE = re.compile(r"^[A-Z]{3,4}$")
_NON_AMOUNT_CHARS = re.compile(r"[^\d.]")


def sanitize_amount(raw: Optional[str]) -> str:
    """
    Reduce user input to digits and at most one decimal point.

    Everything that is not a digit or a dot is dropped (thousands
    separators, currency symbols, whitespace). Only the first dot is kept;
    later dots are removed so "1.2.3" becomes "1.23".

    Args:
        raw: Text as typed by the user (may be None)

    Returns:
        Canonical numeric string, possibly empty
    """
    if not raw:
        return ""

    cleaned = _NON_AMOUNT_CHARS.sub("", str(raw))
    head, dot, tail = cleaned.partition(".")
    if not dot:
        return head
    return f"{head}.{tail.replace('.', '')}"


def validate_currency_code(code: str) -> bool:
    """
    Validate currency code format (3-4 uppercase letters).

    Args:
        code: Currency code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(_CURRENCY_CODE.match(code))


def validate_api_key(api_key: str, min_length: int = 10) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace() and "/" not in api_key
