"""Tests for the run orchestrator."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from signalbot.app.clients import BinanceRestClient, TelegramNotifier
from signalbot.app.config import Settings
from signalbot.app.services import AlertSink, MarketDataSource, SignalBot, format_alert
from signalbot.core.models import (
    STRONG_TREND,
    Candle,
    Category,
    IndicatorSet,
    SignalResult,
)
from signalbot.core.signal_generator import SignalGenerator
from signalbot.errors import DataUnavailableError, DispatchError


def _make_candles(closes: list[float]) -> list[Candle]:
    return [
        Candle(close=c, high=c, low=c, volume=1.0, sequence_index=i)
        for i, c in enumerate(closes)
    ]


def _make_bot(candles=None, generator=None, fetch_error=None, send_error=None):
    market_data = MagicMock()
    market_data.get_klines = AsyncMock(return_value=candles or [], side_effect=fetch_error)
    notifier = MagicMock()
    notifier.send = AsyncMock(return_value=True, side_effect=send_error)
    bot = SignalBot(
        market_data=market_data,
        notifier=notifier,
        symbol="BTCUSDT",
        interval="1h",
        window_length=100,
        generator=generator,
    )
    return bot, market_data, notifier


def _fixed_generator(result: SignalResult) -> MagicMock:
    generator = MagicMock(spec=SignalGenerator)
    generator.compute_indicators.return_value = IndicatorSet()
    generator.generate.return_value = result
    return generator


class TestFormatAlert:
    """Tests for alert text."""

    def test_plain(self):
        result = SignalResult(category=Category.SELL, latest_price=101.5)
        assert format_alert(result) == "🚀 Signal: SELL at $101.5"

    def test_with_symbol_and_qualifier(self):
        result = SignalResult(category=Category.BUY, qualifier=STRONG_TREND, latest_price=123.45)
        assert format_alert(result, "BTCUSDT") == "🚀 Signal: BTCUSDT BUY (Strong Trend) at $123.45"


@pytest.mark.asyncio
class TestSignalBotRun:
    """Tests for one orchestrated run."""

    async def test_requests_window(self):
        bot, market_data, _ = _make_bot(candles=_make_candles([100.0] * 100))

        await bot.run_once()

        market_data.get_klines.assert_awaited_once_with("BTCUSDT", "1h", limit=100)

    async def test_empty_data_skips_run(self):
        """No candles: no indicators, no decision, no alert."""
        generator = MagicMock(spec=SignalGenerator)
        bot, _, notifier = _make_bot(candles=[], generator=generator)

        assert await bot.run_once() is None
        generator.compute_indicators.assert_not_called()
        notifier.send.assert_not_awaited()

    async def test_fetch_error_skips_run(self):
        bot, _, notifier = _make_bot(fetch_error=DataUnavailableError("HTTP 503"))

        assert await bot.run_once() is None
        notifier.send.assert_not_awaited()

    async def test_unexpected_error_is_contained(self):
        """Nothing escapes run_once."""
        bot, _, notifier = _make_bot(fetch_error=RuntimeError("boom"))

        assert await bot.run_once() is None
        notifier.send.assert_not_awaited()

    async def test_generator_error_is_contained(self):
        generator = MagicMock(spec=SignalGenerator)
        generator.compute_indicators.side_effect = ValueError("bad window")
        bot, _, _ = _make_bot(candles=_make_candles([100.0] * 10), generator=generator)

        assert await bot.run_once() is None

    async def test_hold_sends_no_alert(self):
        bot, _, notifier = _make_bot(candles=_make_candles([100.0] * 100))

        result = await bot.run_once()

        assert result.category == Category.HOLD
        assert result.latest_price == 100.0
        notifier.send.assert_not_awaited()

    async def test_actionable_sends_alert(self):
        decision = SignalResult(category=Category.BUY, qualifier=STRONG_TREND, latest_price=123.45)
        bot, _, notifier = _make_bot(
            candles=_make_candles([123.45] * 5), generator=_fixed_generator(decision)
        )

        result = await bot.run_once()

        assert result is decision
        notifier.send.assert_awaited_once_with("🚀 Signal: BTCUSDT BUY (Strong Trend) at $123.45")

    async def test_series_is_built_from_candles(self):
        decision = SignalResult(category=Category.HOLD, latest_price=3.0)
        generator = _fixed_generator(decision)
        bot, _, _ = _make_bot(candles=_make_candles([1.0, 2.0, 3.0]), generator=generator)

        await bot.run_once()

        series = generator.compute_indicators.call_args.args[0]
        assert series.symbol == "BTCUSDT"
        assert series.interval == "1h"
        assert series.max_length == 100
        assert series.latest_price == 3.0

    async def test_dispatch_error_is_contained(self):
        """A failed alert still returns the decision."""
        decision = SignalResult(category=Category.SELL, latest_price=99.0)
        bot, _, notifier = _make_bot(
            candles=_make_candles([99.0] * 5),
            generator=_fixed_generator(decision),
            send_error=DispatchError("Telegram alert failed: ConnectError"),
        )

        assert await bot.run_once() is decision
        notifier.send.assert_awaited_once()

    async def test_close_closes_adapters(self):
        bot, market_data, notifier = _make_bot()
        market_data.close = AsyncMock()
        notifier.close = AsyncMock()

        await bot.close()

        market_data.close.assert_awaited_once()
        notifier.close.assert_awaited_once()


class TestSignalBotWiring:
    """Tests for construction from settings."""

    def test_from_settings(self):
        settings = Settings(
            _env_file=None,
            symbol="ETHUSDT",
            interval="4h",
            window_length=200,
            telegram_bot_token="123:abc",
            telegram_chat_id="42",
        )

        bot = SignalBot.from_settings(settings)

        assert bot.symbol == "ETHUSDT"
        assert bot.interval == "4h"
        assert bot.window_length == 200
        assert isinstance(bot.market_data, BinanceRestClient)
        assert isinstance(bot.notifier, TelegramNotifier)
        assert bot.notifier.is_configured

    def test_adapters_satisfy_protocols(self):
        assert isinstance(BinanceRestClient(), MarketDataSource)
        assert isinstance(TelegramNotifier(), AlertSink)
