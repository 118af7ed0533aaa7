from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from .config import get_settings
from .models import Offer

logger = logging.getLogger(__name__)


class PricesFetcherError(RuntimeError):
    """The prices endpoint could not be read."""


class PricesFetcher:
    """
    Client of the prices endpoint: one GET returning a JSON array of offers.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.url = url or settings.prices_url
        self.timeout = timeout or settings.http_timeout_s

    # ──────────────────────────────────────────────────────────

    def fetch_offers(self) -> list[Offer]:
        """Return every offer published by the endpoint."""
        logger.info("Fetching offers from %s", self.url)
        try:
            resp = requests.get(
                self.url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as exc:
            raise PricesFetcherError(f"Request failed: {exc}") from exc

        if resp.status_code != 200:
            raise PricesFetcherError(
                f"HTTP {resp.status_code} – {resp.text[:120]}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise PricesFetcherError(f"Invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise PricesFetcherError(
                f"Expected a JSON array, got {type(data).__name__}"
            )

        offers = []
        for pos, item in enumerate(data):
            if not isinstance(item, Mapping):
                logger.warning("Skipping item %d: not an object", pos)
                continue
            offers.append(self._to_offer(item))
        logger.info("Fetched %d offers", len(offers))
        return offers

    @staticmethod
    def _to_offer(item: Mapping[str, Any]) -> Offer:
        """Map a JSON object in either key casing onto an Offer."""
        return Offer.from_json({str(k).lower(): v for k, v in item.items()})


__all__ = ["PricesFetcher", "PricesFetcherError"]
