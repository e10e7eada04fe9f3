"""Technical indicators (pure math, no I/O)."""

from signalbot.core.indicators.indicators import (
    adx,
    atr,
    bollinger_bands,
    cci,
    cmf,
    cmo,
    ema,
    highest,
    ichimoku,
    keltner_channels,
    lowest,
    macd,
    obv,
    parabolic_sar,
    rsi,
    sma,
    stoch_rsi,
    true_range,
    vwma,
    wilder_mean,
    williams_r,
    IndicatorCalculator,
)

__all__ = [
    "adx",
    "atr",
    "bollinger_bands",
    "cci",
    "cmf",
    "cmo",
    "ema",
    "highest",
    "ichimoku",
    "keltner_channels",
    "lowest",
    "macd",
    "obv",
    "parabolic_sar",
    "rsi",
    "sma",
    "stoch_rsi",
    "true_range",
    "vwma",
    "wilder_mean",
    "williams_r",
    "IndicatorCalculator",
]
