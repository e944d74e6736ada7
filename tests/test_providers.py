# tests/test_providers.py
"""
Provider Tests - Unit Tests for the ExchangeRate-API Client

This module contains unit tests for ExchangeRateApiClient, covering the
latest-rates and codes endpoints, API-level failures, transport errors and
schema problems. HTTP calls are mocked.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.adapters.providers.exchangerate_api (ExchangeRateApiClient)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls
import requests  # HTTP library (used for mocking responses)

from xchange.adapters.providers.exchangerate_api import ExchangeRateApiClient
from xchange.domain.errors import NetworkFailure

ENDPOINT = "https://v6.exchangerate-api.com/v6/test-key-123456"


def _response(payload):
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status.return_value = None
    return mock_response


class TestInit:
    def test_init_with_endpoint(self):
        client = ExchangeRateApiClient(endpoint=ENDPOINT + "/", timeout=5)
        assert client.endpoint == ENDPOINT
        assert client.timeout == 5

    def test_init_without_api_key(self):
        with patch('xchange.adapters.providers.exchangerate_api.settings') as mock_settings:
            mock_settings.api_key = ""
            with pytest.raises(ValueError, match="EXCHANGE_API_KEY not configured"):
                ExchangeRateApiClient()

    def test_init_from_settings(self):
        with patch('xchange.adapters.providers.exchangerate_api.settings') as mock_settings:
            mock_settings.api_key = "abcdef1234567890"
            mock_settings.endpoint = "https://api.example.com/v6/abcdef1234567890"
            mock_settings.http_timeout_seconds = 10
            client = ExchangeRateApiClient()
        assert client.endpoint == "https://api.example.com/v6/abcdef1234567890"
        assert client.timeout == 10


class TestLatestRates:
    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_success(self, mock_get):
        mock_get.return_value = _response({
            "result": "success",
            "base_code": "USD",
            "time_last_update_utc": "Sat, 17 Oct 2026 00:00:01 +0000",
            "conversion_rates": {"USD": 1, "EUR": 0.92, "GBP": 0.78},
        })

        table = ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

        assert table.base == "USD"
        assert table.rates["EUR"] == 0.92
        assert table.rates["USD"] == 1.0
        assert table.updated_at == "Sat, 17 Oct 2026 00:00:01 +0000"
        mock_get.assert_called_once_with(f"{ENDPOINT}/latest/USD", timeout=10)

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_error_result(self, mock_get):
        mock_get.return_value = _response({"result": "error", "error-type": "invalid-key"})

        with pytest.raises(NetworkFailure, match="invalid-key"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_missing_rates(self, mock_get):
        mock_get.return_value = _response({"result": "success"})

        with pytest.raises(NetworkFailure, match="conversion_rates"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_non_positive_rate(self, mock_get):
        mock_get.return_value = _response({
            "result": "success",
            "conversion_rates": {"USD": 1, "EUR": 0},
        })

        with pytest.raises(NetworkFailure, match="schema error"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(NetworkFailure, match="timeout"):
            ExchangeRateApiClient(endpoint=ENDPOINT, timeout=3).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("DNS failure")

        with pytest.raises(NetworkFailure, match="request failed"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_http_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error")
        mock_get.return_value = mock_response

        with pytest.raises(NetworkFailure, match="HTTP error"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_invalid_json(self, mock_get):
        mock_response = Mock()
        mock_response.json.side_effect = ValueError("Invalid JSON")
        mock_response.raise_for_status.return_value = None
        mock_get.return_value = mock_response

        with pytest.raises(NetworkFailure, match="invalid JSON"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_latest_rates_non_dict_response(self, mock_get):
        mock_get.return_value = _response(["not", "a", "dict"])

        with pytest.raises(NetworkFailure, match="non-dict JSON"):
            ExchangeRateApiClient(endpoint=ENDPOINT).latest_rates("USD")


class TestSupportedCodes:
    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_supported_codes_success(self, mock_get):
        mock_get.return_value = _response({
            "result": "success",
            "supported_codes": [["EUR", "Euro"], ["USD", "United States Dollar"]],
        })

        catalog = ExchangeRateApiClient(endpoint=ENDPOINT).supported_codes()

        assert catalog.name_for("EUR") == "Euro"
        assert len(catalog) == 2
        mock_get.assert_called_once_with(f"{ENDPOINT}/codes", timeout=10)

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_supported_codes_bad_schema(self, mock_get):
        mock_get.return_value = _response({"result": "success", "supported_codes": [["EUR"]]})

        with pytest.raises(NetworkFailure, match="schema error"):
            ExchangeRateApiClient(endpoint=ENDPOINT).supported_codes()

    @patch('xchange.adapters.providers.exchangerate_api.requests.get')
    def test_supported_codes_error_result(self, mock_get):
        mock_get.return_value = _response({"result": "error", "error-type": "quota-reached"})

        with pytest.raises(NetworkFailure, match="quota-reached"):
            ExchangeRateApiClient(endpoint=ENDPOINT).supported_codes()
