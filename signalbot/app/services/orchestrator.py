"""Run orchestrator: fetch candles, compute the decision, alert.

One run is fetch -> indicators -> cascade -> (optional) alert. Runs never
raise: empty data, adapter errors and unexpected failures all end as log
records so the scheduler can carry on with the next tick.
"""

import logging
from typing import Protocol, runtime_checkable

from signalbot.app.clients import BinanceRestClient, TelegramNotifier
from signalbot.app.config import Settings
from signalbot.core.models import Candle, PriceSeries, SignalResult
from signalbot.core.signal_generator import SignalGenerator
from signalbot.errors import DataUnavailableError, DispatchError

logger = logging.getLogger(__name__)


@runtime_checkable
class MarketDataSource(Protocol):
    """Anything that can return recent candles, newest last."""

    async def get_klines(self, symbol: str, interval: str, limit: int = 100) -> list[Candle]:
        ...


@runtime_checkable
class AlertSink(Protocol):
    """Anything that can deliver a plain-text alert."""

    async def send(self, text: str) -> bool:
        ...


def format_alert(result: SignalResult, symbol: str = "") -> str:
    """Human-readable alert text for a decision."""
    target = f" {symbol}" if symbol else ""
    return f"🚀 Signal:{target} {result.label} at ${result.latest_price}"


class SignalBot:
    """Runs the pipeline for a single instrument."""

    def __init__(
        self,
        market_data: MarketDataSource,
        notifier: AlertSink,
        symbol: str = "BTCUSDT",
        interval: str = "1h",
        window_length: int = 100,
        generator: SignalGenerator | None = None,
    ):
        self.market_data = market_data
        self.notifier = notifier
        self.symbol = symbol
        self.interval = interval
        self.window_length = window_length
        self.generator = generator or SignalGenerator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SignalBot":
        """Build a bot wired to Binance and Telegram."""
        return cls(
            market_data=BinanceRestClient(
                base_url=settings.binance_base_url,
                timeout=settings.http_timeout,
            ),
            notifier=TelegramNotifier(
                bot_token=settings.telegram_bot_token,
                chat_id=settings.telegram_chat_id,
            ),
            symbol=settings.symbol,
            interval=settings.interval,
            window_length=settings.window_length,
        )

    async def close(self) -> None:
        """Close adapters that hold connections."""
        for client in (self.market_data, self.notifier):
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    async def run_once(self) -> SignalResult | None:
        """
        Execute one run.

        Returns:
            The SignalResult, or None when the run was skipped or failed
        """
        try:
            return await self._run()
        except Exception:
            logger.exception(f"Run failed for {self.symbol} {self.interval}")
            return None

    async def _run(self) -> SignalResult | None:
        candles = await self._fetch_candles()
        if not candles:
            logger.warning(f"No market data for {self.symbol} {self.interval}, skipping run")
            return None

        series = PriceSeries.from_candles(
            candles,
            symbol=self.symbol,
            interval=self.interval,
            max_length=self.window_length,
        )
        indicators = self.generator.compute_indicators(series)
        result = self.generator.generate(indicators, series)

        logger.info(
            f"{self.symbol} {self.interval}: {result.label} at {result.latest_price} "
            f"({len(series)} candles, rules: "
            f"{', '.join(f'{r.number}:{r.category.value}' for r in result.fired_rules) or 'none'})"
        )

        if result.is_actionable:
            await self._dispatch(format_alert(result, self.symbol))
        return result

    async def _fetch_candles(self) -> list[Candle]:
        try:
            return await self.market_data.get_klines(
                self.symbol, self.interval, limit=self.window_length
            )
        except DataUnavailableError as e:
            logger.error(f"Error fetching market data: {e}")
            return []

    async def _dispatch(self, text: str) -> None:
        try:
            await self.notifier.send(text)
        except DispatchError as e:
            logger.error(f"Alert dispatch failed: {e}")
