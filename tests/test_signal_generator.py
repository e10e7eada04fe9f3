"""Tests for the signal rule cascade."""

import pytest

from signalbot.core.models import (
    STRONG_TREND,
    AdxPoint,
    BollingerPoint,
    Candle,
    Category,
    IndicatorSet,
    MacdPoint,
    PriceSeries,
    SignalThresholds,
    StochRsiPoint,
)
from signalbot.core.signal_generator import (
    CATEGORY_RULES,
    RuleContext,
    SignalGenerator,
    generate_signal,
    run_cascade,
)


def _make_series(closes: list[float], spread: float = 0.0, max_length: int = 500) -> PriceSeries:
    candles = [
        Candle(close=c, high=c + spread, low=c - spread, sequence_index=i)
        for i, c in enumerate(closes)
    ]
    return PriceSeries.from_candles(candles, symbol="BTCUSDT", interval="1h", max_length=max_length)


def _price(price: float) -> PriceSeries:
    """A one-candle series carrying only the latest price."""
    return _make_series([price])


def _signal(price: float = 100.0, **latest):
    return generate_signal(IndicatorSet.from_latest(**latest), _price(price))


def _fired(result) -> list[tuple[int, Category]]:
    return [(r.number, r.category) for r in result.fired_rules]


class TestCascadeBasics:
    """Tests for the cascade fold."""

    def test_rule_order(self):
        """Rules are numbered 1..10 in evaluation order."""
        assert [r.number for r in CATEGORY_RULES] == list(range(1, 11))

    def test_no_indicators_is_hold(self):
        """Absent inputs never match, so nothing overwrites HOLD."""
        result = _signal()

        assert result.category == Category.HOLD
        assert result.qualifier is None
        assert result.fired_rules == ()
        assert result.deciding_rule is None

    def test_absent_values_skip_rules(self):
        """Empty series are skipped rather than compared."""
        result = _signal(sma_short=None, sma_long=100.0, rsi=None, macd=None, williams_r=None)

        assert result.category == Category.HOLD
        assert result.fired_rules == ()

    def test_empty_price_series(self):
        """Price-based rules are skipped without a latest price."""
        indicators = IndicatorSet.from_latest(
            bollinger=BollingerPoint(lower=90.0, middle=100.0, upper=110.0),
            atr=50.0,
            psar=1.0,
            rsi=20.0,
        )
        result = generate_signal(indicators, _make_series([]))

        assert result.latest_price is None
        assert _fired(result) == [(3, Category.BUY)]

    def test_run_cascade_with_custom_rules(self):
        """The fold works on any rule tuple."""
        ctx = RuleContext(IndicatorSet.from_latest(rsi=80.0), 100.0, SignalThresholds())
        category, fired = run_cascade(ctx, CATEGORY_RULES[:2])

        assert category == Category.HOLD
        assert fired == ()

    def test_snapshot_and_price(self):
        result = _signal(
            price=101.5,
            rsi=42.0,
            macd=MacdPoint(macd=1.0, signal=0.5, histogram=0.5),
        )

        assert result.latest_price == 101.5
        assert result.snapshot["rsi"] == 42.0
        assert result.snapshot["macd"] == {"macd": 1.0, "signal": 0.5, "histogram": 0.5}


class TestCategoryRules:
    """Tests for each rule in isolation."""

    def test_sma_cross(self):
        assert _signal(sma_short=110.0, sma_long=100.0).category == Category.BUY
        assert _signal(sma_short=90.0, sma_long=100.0).category == Category.SELL
        assert _signal(sma_short=100.0, sma_long=100.0).category == Category.HOLD

    def test_ema_cross(self):
        assert _signal(ema_short=110.0, ema_long=100.0).category == Category.BUY
        assert _signal(ema_short=90.0, ema_long=100.0).category == Category.SELL

    def test_rsi(self):
        assert _signal(rsi=25.0).category == Category.BUY
        assert _signal(rsi=75.0).category == Category.SELL
        assert _signal(rsi=50.0).category == Category.HOLD
        # Thresholds are strict
        assert _signal(rsi=30.0).category == Category.HOLD
        assert _signal(rsi=70.0).category == Category.HOLD

    def test_stoch_rsi_needs_both_lines(self):
        oversold = StochRsiPoint(stoch_rsi=5.0, k=10.0, d=15.0)
        assert _signal(stoch_rsi=oversold).category == Category.BUY

        overbought = StochRsiPoint(stoch_rsi=95.0, k=90.0, d=85.0)
        assert _signal(stoch_rsi=overbought).category == Category.SELL

        # %K oversold but %D not
        mixed = StochRsiPoint(stoch_rsi=5.0, k=10.0, d=30.0)
        assert _signal(stoch_rsi=mixed).category == Category.HOLD

        # %D not warmed up yet
        no_d = StochRsiPoint(stoch_rsi=5.0, k=10.0, d=None)
        assert _signal(stoch_rsi=no_d).category == Category.HOLD

    def test_macd_cross(self):
        assert _signal(macd=MacdPoint(macd=1.0, signal=0.5)).category == Category.BUY
        assert _signal(macd=MacdPoint(macd=0.1, signal=0.5)).category == Category.SELL
        assert _signal(macd=MacdPoint(macd=1.0, signal=None)).category == Category.HOLD

    def test_bollinger_touch(self):
        band = BollingerPoint(lower=96.0, middle=100.0, upper=104.0)

        assert _signal(price=95.0, bollinger=band).category == Category.BUY
        assert _signal(price=96.0, bollinger=band).category == Category.BUY
        assert _signal(price=104.0, bollinger=band).category == Category.SELL
        assert _signal(price=100.0, bollinger=band).category == Category.HOLD

    def test_collapsed_bollinger_band_is_ignored(self):
        flat = BollingerPoint(lower=100.0, middle=100.0, upper=100.0)
        assert _signal(price=100.0, bollinger=flat).category == Category.HOLD

    def test_atr_volatility_writes_hold(self):
        """ATR above 1% of price overwrites an earlier BUY with HOLD."""
        result = _signal(price=100.0, sma_short=110.0, sma_long=100.0, atr=2.0)

        assert result.category == Category.HOLD
        assert _fired(result) == [(1, Category.BUY), (7, Category.HOLD)]
        assert result.deciding_rule.name == "atr_volatility"

    def test_atr_at_threshold_does_not_fire(self):
        result = _signal(price=100.0, sma_short=110.0, sma_long=100.0, atr=1.0)
        assert result.category == Category.BUY

    def test_psar_position(self):
        assert _signal(price=100.0, psar=95.0).category == Category.BUY
        assert _signal(price=100.0, psar=105.0).category == Category.SELL
        assert _signal(price=100.0, psar=100.0).category == Category.HOLD

    def test_cci(self):
        assert _signal(cci=-150.0).category == Category.BUY
        assert _signal(cci=150.0).category == Category.SELL
        assert _signal(cci=0.0).category == Category.HOLD

    def test_williams_r_bounds(self):
        assert _signal(williams_r=-90.0).category == Category.BUY
        assert _signal(williams_r=-10.0).category == Category.SELL
        # Anything above -20 is SELL, including the middle of the range
        assert _signal(williams_r=-50.0).category == Category.SELL
        assert _signal(williams_r=-20.0).category == Category.HOLD
        assert _signal(williams_r=-80.0).category == Category.HOLD


class TestCascadePrecedence:
    """Tests for override ordering between rules."""

    def test_bollinger_overrides_rsi(self):
        """Oversold RSI loses to a later upper-band touch."""
        band = BollingerPoint(lower=90.0, middle=95.0, upper=100.0)
        result = _signal(price=100.0, rsi=25.0, bollinger=band)

        assert result.category == Category.SELL
        assert _fired(result) == [(3, Category.BUY), (6, Category.SELL)]

    def test_bollinger_lower_overrides_overbought_rsi(self):
        band = BollingerPoint(lower=100.0, middle=105.0, upper=110.0)
        result = _signal(price=100.0, rsi=75.0, bollinger=band)

        assert result.category == Category.BUY

    def test_rules_after_atr_override_it(self):
        """The ATR HOLD is positional: later rules still write."""
        result = _signal(price=100.0, sma_short=110.0, sma_long=100.0, atr=5.0, psar=90.0)

        assert result.category == Category.BUY
        assert _fired(result) == [(1, Category.BUY), (7, Category.HOLD), (8, Category.BUY)]

    def test_atr_overrides_everything_before_it(self):
        result = _signal(
            price=100.0,
            sma_short=110.0,
            sma_long=100.0,
            ema_short=110.0,
            ema_long=100.0,
            rsi=20.0,
            macd=MacdPoint(macd=1.0, signal=0.0),
            atr=5.0,
        )
        assert result.category == Category.HOLD

    def test_last_matching_rule_wins(self):
        result = _signal(rsi=25.0, cci=150.0, williams_r=-90.0)

        assert result.category == Category.BUY
        assert result.deciding_rule.number == 10


class TestTrendQualifier:
    """Tests for the ADX Strong Trend qualifier."""

    def test_strong_trend_on_buy(self):
        result = _signal(rsi=25.0, adx=AdxPoint(adx=30.0, pdi=40.0, mdi=10.0))

        assert result.category == Category.BUY
        assert result.qualifier == STRONG_TREND
        assert result.label == "BUY (Strong Trend)"

    def test_no_qualifier_on_hold(self):
        result = _signal(adx=AdxPoint(adx=60.0, pdi=40.0, mdi=10.0))

        assert result.category == Category.HOLD
        assert result.qualifier is None
        assert result.label == "HOLD"

    def test_threshold_is_strict(self):
        result = _signal(rsi=75.0, adx=AdxPoint(adx=25.0, pdi=10.0, mdi=30.0))
        assert result.qualifier is None

    def test_missing_adx(self):
        assert _signal(rsi=75.0).qualifier is None

    def test_qualifier_uses_final_category(self):
        """Williams %R runs before the qualifier is attached."""
        result = _signal(
            sma_short=110.0,
            sma_long=100.0,
            williams_r=-10.0,
            adx=AdxPoint(adx=40.0, pdi=30.0, mdi=10.0),
        )

        assert result.label == "SELL (Strong Trend)"

    def test_qualifier_never_changes_category(self):
        result = _signal(price=100.0, atr=5.0, adx=AdxPoint(adx=40.0, pdi=30.0, mdi=10.0))
        assert result.category == Category.HOLD
        assert result.qualifier is None


class TestSignalGenerator:
    """End-to-end tests from candles to a decision."""

    @pytest.mark.parametrize("price", [100.0, 0.1, 3.3, 1234.56, 67432.17])
    def test_flat_market_is_hold(self, price):
        """A window with no movement produces no signal at all."""
        series = _make_series([price] * 250)
        result = SignalGenerator().evaluate(series)

        assert result.category == Category.HOLD
        assert result.qualifier is None
        assert result.fired_rules == ()
        assert result.latest_price == price
        assert result.snapshot["sma_short"] == result.snapshot["sma_long"] == price
        assert result.snapshot["ema_short"] == result.snapshot["ema_long"] == price
        assert result.snapshot["rsi"] == 50.0
        assert result.snapshot["cci"] == 0.0
        assert result.snapshot["williams_r"] is None

    def test_steady_uptrend(self):
        """Exponential growth with a narrow range."""
        closes = [100.0 * 1.005 ** i for i in range(250)]
        candles = [
            Candle(close=c, high=c * 1.002, low=c * 0.998, sequence_index=i)
            for i, c in enumerate(closes)
        ]
        series = PriceSeries.from_candles(candles, symbol="BTCUSDT", interval="1h", max_length=250)

        result = SignalGenerator().evaluate(series)
        fired = _fired(result)

        assert (1, Category.BUY) in fired
        assert (2, Category.BUY) in fired
        # Only gains: RSI 100
        assert (3, Category.SELL) in fired
        assert (5, Category.BUY) in fired
        # Range stays under 1% of price
        assert all(number != 7 for number, _ in fired)

        through_macd = [category for number, category in fired if number <= 5]
        assert through_macd[-1] == Category.BUY

        # Close near the top of the range trips the loose Williams %R bound
        assert result.category == Category.SELL
        assert result.deciding_rule.number == 10
        assert result.qualifier == STRONG_TREND

    def test_short_window_skips_long_averages(self):
        """With 100 candles the 200-period averages never warm up."""
        closes = [100.0 * 1.005 ** i for i in range(100)]
        series = _make_series(closes, spread=0.1)

        result = SignalGenerator().evaluate(series)

        assert result.snapshot["sma_long"] is None
        assert result.snapshot["ema_long"] is None
        assert all(r.number not in (1, 2) for r in result.fired_rules)

    def test_custom_thresholds(self):
        generator = SignalGenerator(thresholds=SignalThresholds(rsi_oversold=55.0))
        result = generator.generate(IndicatorSet.from_latest(rsi=50.0), _price(100.0))

        assert result.category == Category.BUY
