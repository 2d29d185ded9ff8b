"""Price provider protocol."""

from typing import Protocol


class PriceProvider(Protocol):
    """
    Protocol for external USD price sources.

    Implementations make one request per call and do not retry; retry,
    batching and caching belong to PricingService.
    """

    def fetch_usd_prices(self, ids: list[str]) -> dict[str, dict]:
        """
        Fetch USD prices for external identifiers (e.g. "bitcoin").

        Returns the raw mapping ``{id: {"usd": number}}``; unknown ids are
        omitted. Raises PriceApiError on timeout, network error, non-2xx
        status or an undecodable body.
        """
        ...
