# src/xchange/adapters/providers/exchangerate_api.py
"""
ExchangeRate-API Provider for Rate Tables and Currency Codes

This module implements the ExchangeRate-API v6 client: the `latest/{BASE}`
endpoint for the full rate table and the `codes` endpoint for the currency
catalog. Every failure (transport, HTTP status, bad JSON, non-success
result, unexpected schema) is reported as NetworkFailure.

Files that USE this module:
- xchange.app (builds the client for RateCache)
- tests.test_providers (unit tests)

Files that this module USES:
- xchange.adapters.providers.base (RateSource interface)
- xchange.config (settings for endpoint, key and timeout)
- xchange.domain (RateTable, CurrencyCatalog, NetworkFailure)
"""
import logging
from typing import Any, Dict, Optional

import requests

from xchange.adapters.providers.base import RateSource
from xchange.config import settings
from xchange.domain.errors import InvalidRateError, NetworkFailure
from xchange.domain.models import CurrencyCatalog, RateTable
from xchange.shared.validators import validate_api_key

log = logging.getLogger(__name__)


class ExchangeRateApiClient(RateSource):

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize ExchangeRate-API client.

        Args:
            endpoint: Optional API root including the key segment
                (defaults to settings.endpoint)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

        Raises:
            ValueError: If no endpoint is given and EXCHANGE_API_KEY is missing or malformed
        """
        if endpoint is None:
            if not validate_api_key(settings.api_key):
                raise ValueError("EXCHANGE_API_KEY not configured in environment or .env.")
            endpoint = settings.endpoint
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds

    def _get(self, path: str) -> Dict[str, Any]:
        """
        GET a JSON document below the endpoint and check its result field.

        Raises:
            NetworkFailure: On any transport, HTTP, decoding or API-level error
        """
        url = f"{self.endpoint}/{path}"
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.warning("ExchangeRate-API timeout after %d seconds (%s)", self.timeout, path)
            raise NetworkFailure(f"ExchangeRate-API timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log.error("ExchangeRate-API HTTP error %s on %s", status, path)
            raise NetworkFailure(f"ExchangeRate-API HTTP error {status}") from e
        except requests.exceptions.RequestException as e:
            log.warning("ExchangeRate-API request failed (network/connection error): %s", e)
            raise NetworkFailure(f"ExchangeRate-API request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            log.error("ExchangeRate-API returned invalid JSON: %s", e)
            raise NetworkFailure(f"ExchangeRate-API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.error("ExchangeRate-API unexpected response type: %r", type(data))
            raise NetworkFailure("ExchangeRate-API returned non-dict JSON")

        if data.get("result") != "success":
            error_type = data.get("error-type", "unknown")
            log.error("ExchangeRate-API reported failure on %s: %s", path, error_type)
            raise NetworkFailure(f"ExchangeRate-API error: {error_type}")

        return data

    def latest_rates(self, base: str) -> RateTable:
        """
        Fetch the latest rate table against `base`.

        Returns:
            RateTable with rates of 1 unit of base in each currency

        Raises:
            NetworkFailure: If the request fails or the payload is unusable
        """
        log.info("Fetching latest rates for base %s", base)
        data = self._get(f"latest/{base}")

        rates = data.get("conversion_rates")
        if not isinstance(rates, dict) or not rates:
            log.error("ExchangeRate-API response missing conversion_rates: %s", data)
            raise NetworkFailure("ExchangeRate-API response missing 'conversion_rates'")

        try:
            table = RateTable(
                base=base,
                rates=rates,
                updated_at=data.get("time_last_update_utc"),
            )
        except InvalidRateError as e:
            log.error("ExchangeRate-API returned unusable rates: %s", e)
            raise NetworkFailure(f"ExchangeRate-API schema error: {e}") from e

        log.info("Rates updated: %d currencies (last update %s)", len(table), table.updated_at)
        return table

    def supported_codes(self) -> CurrencyCatalog:
        """
        Fetch the supported currency codes.

        Returns:
            CurrencyCatalog mapping code to display name

        Raises:
            NetworkFailure: If the request fails or the payload is unusable
        """
        log.info("Fetching supported currency codes")
        data = self._get("codes")

        try:
            catalog = CurrencyCatalog.from_supported_codes(data["supported_codes"])
        except (KeyError, TypeError, ValueError) as e:
            log.error("ExchangeRate-API unexpected codes schema: %s", data)
            raise NetworkFailure(f"ExchangeRate-API schema error: {e}") from e

        log.info("Currency catalog loaded: %d codes", len(catalog))
        return catalog
