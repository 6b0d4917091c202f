"""
Infrastructure adapter: Yahoo Finance chart API → IQuoteProvider.
All chart-response details (chart.result[0].meta, indicators.quote) are
confined here; the rest of the codebase depends only on IQuoteProvider.

One GET per lookup with a bounded timeout and no retries. Every failure
(transport, HTTP status, undecodable body, unexpected shape) is logged and
turned into None so a quote problem never fails the chat request.
"""

import logging
from typing import Any, Optional

import httpx

from ir_assistant.domain.entities.quote import Quote
from ir_assistant.domain.ports.quote_provider_port import IQuoteProvider

logger = logging.getLogger(__name__)


class YahooChartQuoteProvider(IQuoteProvider):
    """Fetches a one-day chart snapshot from Yahoo Finance and normalizes it to a Quote."""

    BASE_URL = "https://query1.finance.yahoo.com"
    _HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; ir-assistant/1.0)"}

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            base_url: Chart API root.
            timeout:  Seconds allowed for each phase of the request (connect,
                      read, write, pool), as httpx applies a scalar timeout.
            client:   Optional pre-configured httpx client; the caller keeps
                      ownership and close() leaves it open.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(headers=self._HEADERS)

    def close(self) -> None:
        """Release the HTTP connection pool if this provider created it."""
        if self._owns_client:
            self._client.close()

    def get_quote(self, symbol: str) -> Optional[Quote]:
        url = f"{self._base_url}/v8/finance/chart/{symbol}"
        logger.debug("Fetching stock price from %s", url)
        try:
            response = self._client.get(
                url,
                params={"interval": "1d", "range": "1d"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Quote lookup for %s failed with status %s",
                symbol,
                exc.response.status_code,
            )
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Quote lookup for %s failed: %s", symbol, exc)
            return None

        try:
            quote = self._parse_chart(payload, symbol)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed chart response for %s: %s", symbol, exc)
            return None

        if quote is None:
            logger.info("No valid stock data found in chart response for %s", symbol)
        else:
            logger.debug("Parsed quote %s", quote)
        return quote

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @classmethod
    def _parse_chart(cls, payload: dict, symbol: str) -> Optional[Quote]:
        results = (payload.get("chart") or {}).get("result") or []
        if not results:
            return None
        result = results[0]
        meta = result.get("meta") or {}

        price = meta.get("regularMarketPrice")
        if price is None:
            return None
        price = float(price)

        return Quote.from_prices(
            symbol=meta.get("symbol") or symbol,
            price=price,
            previous_close=cls._resolve_previous_close(result, price),
            currency=meta.get("currency") or "USD",
            market_state=meta.get("marketState") or "CLOSED",
        )

    @staticmethod
    def _resolve_previous_close(result: dict, price: float) -> float:
        """First usable of previousClose, chartPreviousClose, the penultimate close, then price."""
        meta = result.get("meta") or {}
        for candidate in (
            meta.get("previousClose"),
            meta.get("chartPreviousClose"),
            _penultimate_close(result),
        ):
            if candidate:
                return float(candidate)
        return price


def _penultimate_close(result: dict) -> Optional[Any]:
    quotes = (result.get("indicators") or {}).get("quote") or []
    if not quotes:
        return None
    closes = quotes[0].get("close") or []
    if len(closes) < 2:
        return None
    return closes[-2]
