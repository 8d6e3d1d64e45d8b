"""
Market data client
==================
TwelveData candles and NewsAPI headlines over httpx.
"""

from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .logging_config import get_logger

log = get_logger(__name__)

TWELVE_DATA_URL = "https://api.twelvedata.com/time_series"
NEWSAPI_URL = "https://newsapi.org/v2/everything"
DEFAULT_NEWS_QUERY = "gold OR XAU OR gold price"


class MarketDataError(Exception):
    """Raised when an upstream data provider cannot be reached or refuses a request."""


class MarketDataClient:
    """Thin async wrapper around the TwelveData and NewsAPI endpoints."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    async def _get(self, provider: str, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.settings.http_timeout, transport=self._transport) as client:
            try:
                resp = await client.get(url, params=params)
            except httpx.HTTPError as e:
                log.error("%s fetch error: %s", provider, e)
                raise MarketDataError(f"{provider} request failed: {e}") from e

        if resp.status_code != 200:
            log.error("%s API error: %s - %s", provider, resp.status_code, resp.text[:200])
            raise MarketDataError(f"{provider} returned HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            log.error("%s returned non-JSON body: %s", provider, resp.text[:200])
            raise MarketDataError(f"{provider} returned non-JSON body") from e

    async def fetch_time_series(
        self,
        symbol: Optional[str] = None,
        interval: Optional[str] = None,
        outputsize: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Raw TwelveData ``time_series`` payload (``values`` are newest-first)."""
        params = {
            "symbol": symbol or self.settings.default_pair,
            "interval": interval or self.settings.default_interval,
            "apikey": self.settings.twelve_api_key,
            "outputsize": outputsize or self.settings.outputsize,
        }
        log.info("Fetching %s %s candles from TwelveData", params["symbol"], params["interval"])
        return await self._get("TwelveData", TWELVE_DATA_URL, params)

    async def fetch_candles(self, symbol: str, interval: Optional[str] = None) -> List[Dict[str, Any]]:
        """Candles for ``symbol``, newest-first; empty when the provider has none."""
        data = await self.fetch_time_series(symbol, interval)
        if data.get("status") == "error":
            log.warning("TwelveData refused %s: %s", symbol, data.get("message", "unknown error"))
        return data.get("values") or []

    async def fetch_news(self, query: Optional[str] = None) -> Dict[str, Any]:
        if not self.settings.newsapi_key:
            raise MarketDataError("NEWSAPI_KEY not set")

        params = {
            "q": query or DEFAULT_NEWS_QUERY,
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": 10,
            "apiKey": self.settings.newsapi_key,
        }
        return await self._get("NewsAPI", NEWSAPI_URL, params)
