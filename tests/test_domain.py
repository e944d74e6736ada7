# tests/test_domain.py
"""
Domain Tests - Unit Tests for Domain Models

This module contains unit tests for the rate table invariants, the currency
catalog lookup and search, favorite pair keys, and history serialization.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.domain.models (all domain models)
- pytest (testing framework)
"""
import math

import pytest

from datetime import datetime, timezone

from xchange.domain.errors import InvalidRateError
from xchange.domain.models import (
    ConversionResult,
    CurrencyCatalog,
    FavoritePair,
    HistoryEntry,
    RateTable,
)


class TestRateTable:
    def test_base_rate_added_when_missing(self):
        table = RateTable(base="USD", rates={"EUR": 0.92})
        assert table.rates["USD"] == 1.0
        assert "USD" in table
        assert len(table) == 2

    def test_base_rate_must_be_one(self):
        with pytest.raises(InvalidRateError, match="must have rate 1"):
            RateTable(base="USD", rates={"USD": 1.1, "EUR": 0.92})

    @pytest.mark.parametrize("bad", [0, -1, "abc", None, math.nan, math.inf])
    def test_invalid_rates_rejected(self, bad):
        with pytest.raises(InvalidRateError):
            RateTable(base="USD", rates={"USD": 1, "EUR": bad})

    def test_rates_are_read_only(self):
        table = RateTable(base="USD", rates={"USD": 1, "EUR": 0.92})
        with pytest.raises(TypeError):
            table.rates["EUR"] = 2.0

    def test_source_mapping_changes_do_not_leak(self):
        source = {"USD": 1, "EUR": 0.92}
        table = RateTable(base="USD", rates=source)
        source["EUR"] = 5.0
        assert table.rates["EUR"] == 0.92

    def test_codes_sorted(self):
        table = RateTable(base="USD", rates={"USD": 1, "GBP": 0.78, "EUR": 0.92})
        assert table.codes == ["EUR", "GBP", "USD"]


class TestCurrencyCatalog:
    @pytest.fixture
    def catalog(self):
        return CurrencyCatalog.from_supported_codes([
            ["USD", "United States Dollar"],
            ["EUR", "Euro"],
            ["GBP", "Pound Sterling"],
            ["AUD", "Australian Dollar"],
        ])

    def test_name_for(self, catalog):
        assert catalog.name_for("EUR") == "Euro"

    def test_name_for_unknown_code_falls_back(self, catalog):
        assert catalog.name_for("XYZ") == "XYZ"

    def test_search_by_code_case_insensitive(self, catalog):
        assert catalog.search("eu") == [("EUR", "Euro")]

    def test_search_by_name(self, catalog):
        assert [code for code, _ in catalog.search("dollar")] == ["USD", "AUD"]

    def test_search_excludes_other_side(self, catalog):
        assert [code for code, _ in catalog.search("dollar", exclude="USD")] == ["AUD"]

    def test_empty_query_lists_everything_but_excluded(self, catalog):
        assert [code for code, _ in catalog.search("", exclude="EUR")] == ["USD", "GBP", "AUD"]

    def test_empty_catalog(self):
        catalog = CurrencyCatalog()
        assert len(catalog) == 0
        assert catalog.search("usd") == []


class TestFavoritePair:
    def test_key(self):
        assert FavoritePair("USD", "EUR").key == "USD/EUR"
        assert str(FavoritePair("USD", "EUR")) == "USD/EUR"

    def test_from_key(self):
        assert FavoritePair.from_key("GBP/JPY") == FavoritePair("GBP", "JPY")

    def test_order_matters(self):
        assert FavoritePair("USD", "EUR") != FavoritePair("EUR", "USD")

    @pytest.mark.parametrize("key", ["USDEUR", "USD/EUR/GBP", "usd/eur", "US/EUR", "", "USD/"])
    def test_from_key_malformed(self, key):
        with pytest.raises(ValueError, match="Malformed favorite pair key"):
            FavoritePair.from_key(key)


class TestHistoryEntry:
    def test_from_result(self):
        result = ConversionResult(
            amount="92.00", rate="0.9200", last_updated=None,
            from_code="USD", to_code="EUR", input_amount="100",
        )
        now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

        entry = HistoryEntry.from_result(result, now=now)

        assert entry == HistoryEntry(
            timestamp="2026-10-18T12:00:00+00:00",
            from_code="USD", to_code="EUR",
            amount="100", result="92.00", rate="0.9200",
        )

    def test_json_shape(self):
        entry = HistoryEntry("2026-10-18T12:00:00+00:00", "USD", "EUR", "100", "92.00", "0.9200")
        assert entry.to_json() == {
            "timestamp": "2026-10-18T12:00:00+00:00",
            "from": "USD",
            "to": "EUR",
            "amount": "100",
            "result": "92.00",
            "rate": "0.9200",
        }
        assert HistoryEntry.from_json(entry.to_json()) == entry

    def test_from_json_missing_key(self):
        with pytest.raises(KeyError):
            HistoryEntry.from_json({"timestamp": "x", "from": "USD"})
