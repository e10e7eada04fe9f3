"""Binance REST API client for fetching recent candles."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from signalbot.core.models import Candle
from signalbot.errors import DataUnavailableError

logger = logging.getLogger(__name__)

MAX_KLINES_PER_REQUEST = 1000


class RateLimiter:
    """Simple rate limiter for API calls."""

    def __init__(self, calls_per_minute: int = 1200):
        self.calls_per_minute = calls_per_minute
        self.interval = 60.0 / calls_per_minute
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait if necessary to respect rate limit."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            wait_time = self.last_call + self.interval - loop.time()
            if wait_time > 0:
                await asyncio.sleep(wait_time)
            self.last_call = loop.time()


class BinanceRestClient:
    """Binance spot REST API client."""

    BASE_URL = "https://api.binance.com"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.rate_limiter = RateLimiter()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, endpoint: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make an API request with rate limiting."""
        await self.rate_limiter.acquire()
        client = await self._get_client()
        response = await client.request(method, endpoint, params=params)
        response.raise_for_status()
        return response.json()

    async def get_klines(
        self,
        symbol: str,
        interval: str,
        limit: int = 100,
    ) -> list[Candle]:
        """
        Fetch the most recent candles from Binance.

        Args:
            symbol: Trading pair (e.g., "BTCUSDT")
            interval: K-line interval (e.g., "1h")
            limit: Number of candles (max 1000)

        Returns:
            List of Candle objects, oldest first

        Raises:
            DataUnavailableError: On transport, HTTP or payload errors
        """
        params = {
            "symbol": symbol,
            "interval": interval,
            "limit": max(1, min(limit, MAX_KLINES_PER_REQUEST)),
        }

        try:
            data = await self._request("GET", "/api/v3/klines", params)
        except (httpx.HTTPError, ValueError) as e:
            raise DataUnavailableError(f"Kline request failed for {symbol} {interval}: {e}") from e

        if not isinstance(data, list):
            raise DataUnavailableError(f"Unexpected kline payload for {symbol}: {data!r}")

        try:
            candles = [self._parse_kline(i, item) for i, item in enumerate(data)]
        except (IndexError, TypeError, ValueError) as e:
            raise DataUnavailableError(f"Malformed kline row for {symbol}: {e}") from e

        logger.debug(f"Fetched {len(candles)} klines for {symbol} {interval}")
        return candles

    @staticmethod
    def _parse_kline(index: int, item: list) -> Candle:
        """Row layout: [open_time, open, high, low, close, volume, ...]."""
        return Candle(
            sequence_index=index,
            open_time=datetime.fromtimestamp(item[0] / 1000, tz=timezone.utc),
            open=float(item[1]),
            high=float(item[2]),
            low=float(item[3]),
            close=float(item[4]),
            volume=float(item[5]),
        )

