"""CoinGecko simple-price client."""

import logging
from typing import Optional

import requests

from coinfolio.core.exceptions import PriceApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 7.0


class CoinGeckoPriceProvider:
    """Fetches USD prices from the CoinGecko ``/simple/price`` endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        """Return ``{id: {"usd": price}}`` for the requested CoinGecko ids."""
        if not ids:
            return {}

        url = f"{self._base_url}/simple/price"
        params = {"ids": ",".join(ids), "vs_currencies": "usd"}

        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.Timeout as e:
            raise PriceApiError(f"Timeout after {self._timeout}s fetching {params['ids']}") from e
        except requests.RequestException as e:
            raise PriceApiError(f"Request failed for {params['ids']}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise PriceApiError(
                f"HTTP error {response.status_code} fetching {params['ids']}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PriceApiError(f"Invalid JSON from price API: {e}") from e

        if not isinstance(data, dict):
            raise PriceApiError(f"Unexpected price API payload type: {type(data).__name__}")

        logger.debug("Fetched %d/%d prices from CoinGecko", len(data), len(ids))
        return data

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
