"""Signal generator reducing the latest indicator values to one decision.

This module is pure business logic with no I/O dependencies.

The decision is an override cascade: starting from HOLD, every rule in
CATEGORY_RULES is evaluated in order and each rule that matches overwrites
the current category. Rule order is therefore the priority order; a later
rule always wins over an earlier one. Rules whose inputs have no latest
value are skipped.

Cascade:
    1. SMA(50) vs SMA(200)            6. price vs Bollinger bands
    2. EMA(50) vs EMA(200)            7. ATR > 1% of price -> HOLD
    3. RSI oversold / overbought      8. price vs Parabolic SAR
    4. Stochastic RSI %K and %D       9. CCI oversold / overbought
    5. MACD line vs signal line      10. Williams %R

After the cascade, ADX > 25 on a BUY or SELL adds the "Strong Trend"
qualifier without changing the category.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from signalbot.core.indicators import IndicatorCalculator
from signalbot.core.models import (
    STRONG_TREND,
    Category,
    IndicatorConfig,
    IndicatorSet,
    PriceSeries,
    RuleFiring,
    SignalResult,
    SignalThresholds,
)
from signalbot.core.models import indicator as names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Inputs visible to every rule."""

    indicators: IndicatorSet
    price: float | None
    thresholds: SignalThresholds

    def value(self, name: str) -> float | None:
        return self.indicators.latest(name)

    def field(self, name: str, field: str) -> float | None:
        return self.indicators.latest_field(name, field)


@dataclass(frozen=True)
class Rule:
    """A pure predicate -> category step of the cascade.

    ``evaluate`` returns the category the rule writes, or None when it
    does not match (including when an input is absent).
    """

    number: int
    name: str
    evaluate: Callable[[RuleContext], Category | None]


def _two_sided(buy: bool, sell: bool) -> Category | None:
    """BUY branch first, then SELL, as two consecutive overwrites."""
    outcome = None
    if buy:
        outcome = Category.BUY
    if sell:
        outcome = Category.SELL
    return outcome


def _cross(fast: float | None, slow: float | None) -> Category | None:
    if fast is None or slow is None:
        return None
    return _two_sided(fast > slow, fast < slow)


def _sma_cross(ctx: RuleContext) -> Category | None:
    return _cross(ctx.value(names.SMA_SHORT), ctx.value(names.SMA_LONG))


def _ema_cross(ctx: RuleContext) -> Category | None:
    return _cross(ctx.value(names.EMA_SHORT), ctx.value(names.EMA_LONG))


def _rsi_extremes(ctx: RuleContext) -> Category | None:
    value = ctx.value(names.RSI)
    if value is None:
        return None
    t = ctx.thresholds
    return _two_sided(value < t.rsi_oversold, value > t.rsi_overbought)


def _stoch_rsi_extremes(ctx: RuleContext) -> Category | None:
    k = ctx.field(names.STOCH_RSI, "k")
    d = ctx.field(names.STOCH_RSI, "d")
    if k is None or d is None:
        return None
    t = ctx.thresholds
    return _two_sided(
        k < t.stoch_oversold and d < t.stoch_oversold,
        k > t.stoch_overbought and d > t.stoch_overbought,
    )


def _macd_cross(ctx: RuleContext) -> Category | None:
    return _cross(ctx.field(names.MACD, "macd"), ctx.field(names.MACD, "signal"))


def _bollinger_touch(ctx: RuleContext) -> Category | None:
    lower = ctx.field(names.BOLLINGER, "lower")
    upper = ctx.field(names.BOLLINGER, "upper")
    if ctx.price is None or lower is None or upper is None:
        return None
    # A collapsed band (no variance in the window) carries no information
    if upper <= lower:
        return None
    return _two_sided(ctx.price <= lower, ctx.price >= upper)


def _atr_volatility(ctx: RuleContext) -> Category | None:
    value = ctx.value(names.ATR)
    if ctx.price is None or value is None:
        return None
    if value > ctx.price * ctx.thresholds.atr_volatility_ratio:
        return Category.HOLD
    return None


def _psar_position(ctx: RuleContext) -> Category | None:
    value = ctx.value(names.PSAR)
    if ctx.price is None or value is None:
        return None
    return _two_sided(ctx.price > value, ctx.price < value)


def _cci_extremes(ctx: RuleContext) -> Category | None:
    value = ctx.value(names.CCI)
    if value is None:
        return None
    t = ctx.thresholds
    return _two_sided(value < t.cci_oversold, value > t.cci_overbought)


def _williams_r_extremes(ctx: RuleContext) -> Category | None:
    value = ctx.value(names.WILLIAMS_R)
    if value is None:
        return None
    t = ctx.thresholds
    # The SELL bound (-20) is much looser than the BUY bound (-80)
    return _two_sided(value < t.williams_oversold, value > t.williams_overbought)


CATEGORY_RULES: tuple[Rule, ...] = (
    Rule(1, "sma_cross", _sma_cross),
    Rule(2, "ema_cross", _ema_cross),
    Rule(3, "rsi", _rsi_extremes),
    Rule(4, "stoch_rsi", _stoch_rsi_extremes),
    Rule(5, "macd_cross", _macd_cross),
    Rule(6, "bollinger", _bollinger_touch),
    Rule(7, "atr_volatility", _atr_volatility),
    Rule(8, "psar", _psar_position),
    Rule(9, "cci", _cci_extremes),
    Rule(10, "williams_r", _williams_r_extremes),
)


def run_cascade(
    ctx: RuleContext,
    rules: tuple[Rule, ...] = CATEGORY_RULES,
) -> tuple[Category, tuple[RuleFiring, ...]]:
    """
    Fold the rules left to right over an initial HOLD.

    Returns:
        Tuple of (final category, rules that matched in evaluation order)
    """
    category = Category.HOLD
    fired: list[RuleFiring] = []
    for rule in rules:
        outcome = rule.evaluate(ctx)
        if outcome is None:
            continue
        category = outcome
        fired.append(RuleFiring(number=rule.number, name=rule.name, category=outcome))
    return category, tuple(fired)


def trend_qualifier(ctx: RuleContext, category: Category) -> str | None:
    """'Strong Trend' when ADX exceeds its threshold on a BUY or SELL."""
    if category == Category.HOLD:
        return None
    strength = ctx.field(names.ADX, "adx")
    if strength is None or strength <= ctx.thresholds.adx_strong_trend:
        return None
    return STRONG_TREND


def generate_signal(
    indicators: IndicatorSet,
    series: PriceSeries,
    thresholds: SignalThresholds | None = None,
) -> SignalResult:
    """
    Reduce an indicator set to a single SignalResult.

    Args:
        indicators: Indicators computed from ``series``
        series: The price window the indicators came from
        thresholds: Rule thresholds (defaults to SignalThresholds())

    Returns:
        SignalResult with category, qualifier, latest price, snapshot and
        the trace of matching rules
    """
    ctx = RuleContext(
        indicators=indicators,
        price=series.latest_price,
        thresholds=thresholds or SignalThresholds(),
    )
    category, fired = run_cascade(ctx)
    return SignalResult(
        category=category,
        qualifier=trend_qualifier(ctx, category),
        latest_price=ctx.price,
        snapshot=indicators.snapshot(),
        fired_rules=fired,
    )


class SignalGenerator:
    """
    Generate trading decisions from a price window.

    Combines IndicatorCalculator (stage 1) with the rule cascade (stage 2).
    Both stages are pure: the generator keeps no state between calls.
    """

    def __init__(
        self,
        indicator_config: IndicatorConfig | None = None,
        thresholds: SignalThresholds | None = None,
    ):
        self.indicator_calc = IndicatorCalculator(indicator_config)
        self.thresholds = thresholds or SignalThresholds()

    def compute_indicators(self, series: PriceSeries) -> IndicatorSet:
        """Stage 1: derive every indicator series from the price window."""
        return self.indicator_calc.calculate_all(series)

    def generate(self, indicators: IndicatorSet, series: PriceSeries) -> SignalResult:
        """Stage 2: run the cascade over precomputed indicators."""
        result = generate_signal(indicators, series, self.thresholds)
        logger.debug(
            f"{series.symbol or 'series'}: {result.label} "
            f"(rules: {', '.join(f'{r.number}:{r.category.value}' for r in result.fired_rules) or 'none'})"
        )
        return result

    def evaluate(self, series: PriceSeries) -> SignalResult:
        """Run both stages on a price window."""
        return self.generate(self.compute_indicators(series), series)
