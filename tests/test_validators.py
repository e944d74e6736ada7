# tests/test_validators.py
"""
Validator Tests - Unit Tests for Input Validation

This module contains unit tests for amount sanitization and the
configuration validators.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.shared.validators (sanitize_amount, validate_currency_code, validate_api_key)
- pytest (testing framework)
"""
import pytest

from xchange.shared.validators import sanitize_amount, validate_api_key, validate_currency_code


class TestSanitizeAmount:
    @pytest.mark.parametrize("raw, expected", [
        ("100", "100"),
        ("1,234.56", "1234.56"),
        ("$ 12.5", "12.5"),
        ("1.2.3", "1.23"),
        ("abc", ""),
        ("", ""),
        (None, ""),
        (".5", ".5"),
        ("12.", "12."),
        ("-42", "42"),
    ])
    def test_sanitize(self, raw, expected):
        assert sanitize_amount(raw) == expected

    def test_at_most_one_decimal_point(self):
        assert sanitize_amount("..1..2..").count(".") == 1


class TestValidateCurrencyCode:
    @pytest.mark.parametrize("code", ["USD", "EUR", "USDT"])
    def test_valid(self, code):
        assert validate_currency_code(code)

    @pytest.mark.parametrize("code", ["", "us", "usd", "USDTX", "U5D"])
    def test_invalid(self, code):
        assert not validate_currency_code(code)


class TestValidateApiKey:
    def test_valid(self):
        assert validate_api_key("b8fa735ff340a69e")

    def test_too_short_or_empty(self):
        assert not validate_api_key("")
        assert not validate_api_key("short")
        assert not validate_api_key("          ")

    def test_rejects_path_separator(self):
        assert not validate_api_key("abcdef/../1234")
