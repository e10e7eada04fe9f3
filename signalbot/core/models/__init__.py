"""Data models."""

from signalbot.core.models.candle import DEFAULT_WINDOW, Candle, PriceSeries
from signalbot.core.models.config import IndicatorConfig, SignalThresholds
from signalbot.core.models.indicator import (
    AdxPoint,
    BollingerPoint,
    IchimokuPoint,
    IndicatorSeries,
    IndicatorSet,
    IndicatorValue,
    KeltnerPoint,
    MacdPoint,
    StochRsiPoint,
)
from signalbot.core.models.signal import (
    STRONG_TREND,
    Category,
    RuleFiring,
    SignalResult,
)

__all__ = [
    "DEFAULT_WINDOW",
    "Candle",
    "PriceSeries",
    "IndicatorConfig",
    "SignalThresholds",
    "AdxPoint",
    "BollingerPoint",
    "IchimokuPoint",
    "IndicatorSeries",
    "IndicatorSet",
    "IndicatorValue",
    "KeltnerPoint",
    "MacdPoint",
    "StochRsiPoint",
    "STRONG_TREND",
    "Category",
    "RuleFiring",
    "SignalResult",
]
