"""Indicator and signal configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IndicatorConfig(BaseModel):
    """Indicator parameterisation used by IndicatorCalculator."""

    model_config = ConfigDict(frozen=True)

    # Moving averages
    sma_short_period: int = Field(default=50, gt=0)
    sma_long_period: int = Field(default=200, gt=0)
    ema_short_period: int = Field(default=50, gt=0)
    ema_long_period: int = Field(default=200, gt=0)

    # Oscillators
    rsi_period: int = Field(default=14, gt=0)
    stoch_rsi_period: int = Field(default=14, gt=0)
    stoch_k_period: int = Field(default=3, gt=0)
    stoch_d_period: int = Field(default=3, gt=0)
    cci_period: int = Field(default=14, gt=0)
    williams_r_period: int = Field(default=14, gt=0)
    cmo_period: int = Field(default=14, gt=0)

    # MACD
    macd_fast_period: int = Field(default=12, gt=0)
    macd_slow_period: int = Field(default=26, gt=0)
    macd_signal_period: int = Field(default=9, gt=0)

    # Bands and volatility
    bollinger_period: int = Field(default=20, gt=0)
    bollinger_std_dev: float = Field(default=2.0, gt=0)
    atr_period: int = Field(default=14, gt=0)
    adx_period: int = Field(default=14, gt=0)
    keltner_ma_period: int = Field(default=20, gt=0)
    keltner_atr_period: int = Field(default=10, gt=0)
    keltner_multiplier: float = Field(default=1.0, gt=0)

    # Parabolic SAR
    psar_step: float = Field(default=0.02, gt=0)
    psar_max: float = Field(default=0.2, gt=0)

    # Ichimoku (undisplaced)
    ichimoku_conversion_period: int = Field(default=9, gt=0)
    ichimoku_base_period: int = Field(default=26, gt=0)
    ichimoku_span_period: int = Field(default=52, gt=0)

    # Volume indicators
    cmf_period: int = Field(default=20, gt=0)
    vwma_period: int = Field(default=20, gt=0)


class SignalThresholds(BaseModel):
    """Thresholds consulted by the rule cascade."""

    model_config = ConfigDict(frozen=True)

    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    stoch_oversold: float = 20.0
    stoch_overbought: float = 80.0
    # ATR above this fraction of the latest price forces HOLD
    atr_volatility_ratio: float = 0.01
    cci_oversold: float = -100.0
    cci_overbought: float = 100.0
    williams_oversold: float = -80.0
    williams_overbought: float = -20.0
    adx_strong_trend: float = 25.0
