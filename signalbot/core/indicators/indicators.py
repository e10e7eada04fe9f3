"""Technical indicators for signal generation.

Every function takes plain sequences (or numpy arrays) and returns float64
arrays with the same length as the input, NaN until the indicator has
warmed up. IndicatorCalculator converts those arrays into tail-aligned
IndicatorSeries for the signal generator.

Formulas follow the standard published definitions:
- EMA is seeded with the SMA of its first ``period`` values, k = 2 / (n + 1)
- RSI, ATR and ADX use Wilder smoothing seeded with a simple mean
- Bollinger Bands use the population standard deviation
- CCI uses the mean absolute deviation and the 0.015 constant
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from signalbot.core.models import (
    AdxPoint,
    BollingerPoint,
    IchimokuPoint,
    IndicatorConfig,
    IndicatorSeries,
    IndicatorSet,
    KeltnerPoint,
    MacdPoint,
    PriceSeries,
    StochRsiPoint,
)
from signalbot.core.models import indicator as names


# =============================================================================
# Helpers
# =============================================================================

def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def _empty(n: int) -> np.ndarray:
    return np.full(n, np.nan)


def _first_valid(arr: np.ndarray) -> int | None:
    """Index of the first non-NaN element."""
    valid = np.flatnonzero(~np.isnan(arr))
    return int(valid[0]) if valid.size else None


def _ratio(num: np.ndarray, den: np.ndarray, fill: float = np.nan) -> np.ndarray:
    """Element-wise num / den, ``fill`` where den is zero."""
    num = np.asarray(num, dtype=np.float64)
    den = np.asarray(den, dtype=np.float64)
    out = np.full(np.broadcast(num, den).shape, fill)
    np.divide(num, den, out=out, where=den != 0)
    return out


def _window_means(arr: np.ndarray, period: int) -> np.ndarray:
    """
    Mean of every ``period``-long window of ``arr``.

    Each window is summed as offsets from its first element with
    ``math.fsum``, so a constant window returns its value exactly and
    windows of different lengths over a flat series agree.
    """
    windows = sliding_window_view(arr, period)
    base = windows[:, 0]
    offsets = windows - base[:, None]
    return base + np.array([math.fsum(row) for row in offsets]) / period


def _seeded_smoothing(values: Sequence[float], period: int, step: Callable[[float, float], float]) -> np.ndarray:
    """Recursive smoothing seeded with the mean of the first ``period`` valid values."""
    arr = _as_array(values)
    n = len(arr)
    out = _empty(n)
    start = _first_valid(arr)
    if period <= 0 or start is None or n - start < period:
        return out

    seed_idx = start + period - 1
    out[seed_idx] = _window_means(arr[start : seed_idx + 1], period)[0]
    for i in range(seed_idx + 1, n):
        out[i] = step(out[i - 1], arr[i])
    return out


# =============================================================================
# Moving averages
# =============================================================================

def sma(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate Simple Moving Average.

    Args:
        values: Sequence of price values
        period: SMA period

    Returns:
        Array of SMA values (NaN for the first ``period - 1`` bars)
    """
    arr = _as_array(values)
    out = _empty(len(arr))
    if period <= 0 or len(arr) < period:
        return out
    out[period - 1 :] = _window_means(arr, period)
    return out


def ema(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate Exponential Moving Average.

    The first value is the SMA of the first ``period`` valid inputs, so the
    function can be chained on series that carry their own warm-up NaNs
    (e.g. the MACD signal line).

    Args:
        values: Sequence of price values
        period: EMA period

    Returns:
        Array of EMA values (NaN until warmed up)
    """
    k = 2.0 / (period + 1)
    return _seeded_smoothing(values, period, lambda prev, x: (x - prev) * k + prev)


def wilder_mean(values: Sequence[float], period: int) -> np.ndarray:
    """Wilder's running mean (RMA): ``(prev * (n - 1) + x) / n``."""
    # Same recurrence written as a step, exact when x == prev
    return _seeded_smoothing(values, period, lambda prev, x: prev + (x - prev) / period)


def vwma(closes: Sequence[float], volumes: Sequence[float], period: int = 20) -> np.ndarray:
    """
    Calculate Volume Weighted Moving Average.

    Windows with zero total volume fall back to the plain SMA of closes.
    """
    c = _as_array(closes)
    v = _as_array(volumes)
    out = _empty(len(c))
    if period <= 0 or len(c) < period:
        return out

    price_volume = sliding_window_view(c * v, period).sum(axis=1)
    volume = sliding_window_view(v, period).sum(axis=1)
    fallback = _window_means(c, period)
    out[period - 1 :] = np.where(volume != 0, _ratio(price_volume, volume), fallback)
    return out


# =============================================================================
# Range helpers
# =============================================================================

def highest(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate highest value over lookback period.

    Args:
        values: Sequence of values (typically highs)
        period: Lookback period

    Returns:
        Array of highest values
    """
    arr = _as_array(values)
    out = _empty(len(arr))
    if period <= 0 or len(arr) < period:
        return out
    out[period - 1 :] = sliding_window_view(arr, period).max(axis=1)
    return out


def lowest(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate lowest value over lookback period.

    Args:
        values: Sequence of values (typically lows)
        period: Lookback period

    Returns:
        Array of lowest values
    """
    arr = _as_array(values)
    out = _empty(len(arr))
    if period <= 0 or len(arr) < period:
        return out
    out[period - 1 :] = sliding_window_view(arr, period).min(axis=1)
    return out


def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> np.ndarray:
    """
    Calculate True Range.

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    The first bar has no previous close and is NaN.
    """
    h = _as_array(highs)
    l = _as_array(lows)
    c = _as_array(closes)
    out = _empty(len(c))
    if len(c) < 2:
        return out

    prev_close = c[:-1]
    out[1:] = np.maximum(
        h[1:] - l[1:],
        np.maximum(np.abs(h[1:] - prev_close), np.abs(l[1:] - prev_close)),
    )
    return out


# =============================================================================
# Oscillators
# =============================================================================

def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # No movement at all is neutral
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def rsi(values: Sequence[float], period: int = 14) -> np.ndarray:
    """
    Calculate Relative Strength Index with Wilder smoothing.

    The first value (bar ``period``) uses the simple mean of the first
    ``period`` gains and losses.
    """
    arr = _as_array(values)
    n = len(arr)
    out = _empty(n)
    if period <= 0 or n < period + 1:
        return out

    diffs = np.diff(arr)
    gains = np.clip(diffs, 0.0, None)
    losses = np.clip(-diffs, 0.0, None)

    avg_gain = float(gains[:period].mean())
    avg_loss = float(losses[:period].mean())
    out[period] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period + 1, n):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        out[i] = _rsi_from_averages(avg_gain, avg_loss)
    return out


def stoch_rsi(
    values: Sequence[float],
    rsi_period: int = 14,
    stoch_period: int = 14,
    k_period: int = 3,
    d_period: int = 3,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate Stochastic RSI.

    raw = 100 * (RSI - lowest RSI) / (highest RSI - lowest RSI)
    %K  = SMA(raw, k_period)
    %D  = SMA(%K, d_period)

    A window where RSI did not move has no defined stochastic value (NaN).

    Returns:
        Tuple of (raw, k, d) arrays
    """
    r = rsi(values, rsi_period)
    hh = highest(r, stoch_period)
    ll = lowest(r, stoch_period)
    raw = _ratio(r - ll, hh - ll) * 100.0
    k = sma(raw, k_period)
    d = sma(k, d_period)
    return raw, k, d


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate MACD with EMA oscillator and EMA signal line.

    Returns:
        Tuple of (macd_line, signal_line, histogram) arrays
    """
    line = ema(values, fast_period) - ema(values, slow_period)
    signal = ema(line, signal_period)
    return line, signal, line - signal


def cci(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> np.ndarray:
    """
    Calculate Commodity Channel Index.

    CCI = (TP - SMA(TP)) / (0.015 * mean absolute deviation of TP)

    A window with zero deviation yields 0.
    """
    tp = (_as_array(highs) + _as_array(lows) + _as_array(closes)) / 3
    out = _empty(len(tp))
    if period <= 0 or len(tp) < period:
        return out

    windows = sliding_window_view(tp, period)
    mean = _window_means(tp, period)
    mean_dev = np.abs(windows - mean[:, None]).mean(axis=1)
    out[period - 1 :] = _ratio(tp[period - 1 :] - mean, 0.015 * mean_dev, fill=0.0)
    return out


def williams_r(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> np.ndarray:
    """
    Calculate Williams %R.

    %R = -100 * (highest high - close) / (highest high - lowest low)

    Undefined (NaN) when the window has no range.
    """
    hh = highest(highs, period)
    ll = lowest(lows, period)
    return _ratio(hh - _as_array(closes), hh - ll) * -100.0


def cmo(values: Sequence[float], period: int = 14) -> np.ndarray:
    """
    Calculate Chande Momentum Oscillator.

    CMO = 100 * (sum of gains - sum of losses) / (sum of gains + sum of losses)
    """
    arr = _as_array(values)
    n = len(arr)
    out = _empty(n)
    if period <= 0 or n < period + 1:
        return out

    diffs = np.diff(arr)
    up = sliding_window_view(np.clip(diffs, 0.0, None), period).sum(axis=1)
    down = sliding_window_view(np.clip(-diffs, 0.0, None), period).sum(axis=1)
    out[period:] = _ratio(up - down, up + down, fill=0.0) * 100.0
    return out


# =============================================================================
# Volatility and trend
# =============================================================================

def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> np.ndarray:
    """
    Calculate Average True Range (ATR).

    Uses Wilder's smoothing seeded with the mean of the first ``period``
    true ranges, so the first value lands on bar ``period``.
    """
    return wilder_mean(true_range(highs, lows, closes), period)


def bollinger_bands(
    values: Sequence[float],
    period: int = 20,
    std_dev: float = 2.0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate Bollinger Bands (population standard deviation).

    Returns:
        Tuple of (lower, middle, upper) arrays
    """
    arr = _as_array(values)
    n = len(arr)
    lower, middle, upper = _empty(n), _empty(n), _empty(n)
    if period <= 0 or n < period:
        return lower, middle, upper

    windows = sliding_window_view(arr, period)
    mean = _window_means(arr, period)
    width = std_dev * np.sqrt(((windows - mean[:, None]) ** 2).mean(axis=1))
    middle[period - 1 :] = mean
    upper[period - 1 :] = mean + width
    lower[period - 1 :] = mean - width
    return lower, middle, upper


def keltner_channels(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    ma_period: int = 20,
    atr_period: int = 10,
    multiplier: float = 1.0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate Keltner Channels: EMA of close +/- multiplier * ATR.

    Returns:
        Tuple of (lower, middle, upper) arrays
    """
    middle = ema(closes, ma_period)
    band = atr(highs, lows, closes, atr_period) * multiplier
    return middle - band, middle, middle + band


def parabolic_sar(
    highs: Sequence[float],
    lows: Sequence[float],
    step: float = 0.02,
    max_step: float = 0.2,
) -> np.ndarray:
    """
    Calculate Parabolic SAR.

    The first bar starts an uptrend with SAR at its low and the extreme
    point at its high. While rising, SAR never exceeds the lows of the two
    previous bars (highs while falling). A bar crossing SAR flips the trend,
    resets the acceleration factor and moves SAR to the prior extreme.
    """
    h = _as_array(highs)
    l = _as_array(lows)
    n = len(h)
    out = _empty(n)
    if n == 0:
        return out

    rising = True
    accel = step
    sar = l[0]
    extreme = h[0]
    out[0] = sar

    for i in range(1, n):
        older = max(i - 2, 0)
        sar = sar + accel * (extreme - sar)
        if rising:
            sar = min(sar, l[i - 1], l[older])
            if h[i] > extreme:
                extreme = h[i]
                accel = min(accel + step, max_step)
        else:
            sar = max(sar, h[i - 1], h[older])
            if l[i] < extreme:
                extreme = l[i]
                accel = min(accel + step, max_step)

        if (rising and l[i] < sar) or (not rising and h[i] > sar):
            accel = step
            sar = extreme
            rising = not rising
            extreme = h[i] if rising else l[i]

        out[i] = sar
    return out


def adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate Average Directional Index.

    +DM/-DM and TR are accumulated with Wilder sums
    (``sum - sum / n + x``), DX = 100 * |+DI - -DI| / (+DI + -DI), and ADX
    is Wilder's mean of DX. Zero denominators yield 0.

    Returns:
        Tuple of (adx, plus_di, minus_di) arrays
    """
    h = _as_array(highs)
    l = _as_array(lows)
    c = _as_array(closes)
    n = len(c)
    plus_di, minus_di, dx = _empty(n), _empty(n), _empty(n)
    if period <= 0 or n < period + 1:
        return _empty(n), plus_di, minus_di

    up_move = h[1:] - h[:-1]
    down_move = l[:-1] - l[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = true_range(h, l, c)[1:]

    sum_tr = float(tr[:period].sum())
    sum_plus = float(plus_dm[:period].sum())
    sum_minus = float(minus_dm[:period].sum())

    # Bar i uses movement index i - 1
    for i in range(period, n):
        if i > period:
            j = i - 1
            sum_tr = sum_tr - sum_tr / period + tr[j]
            sum_plus = sum_plus - sum_plus / period + plus_dm[j]
            sum_minus = sum_minus - sum_minus / period + minus_dm[j]

        pdi = 100.0 * sum_plus / sum_tr if sum_tr > 0 else 0.0
        mdi = 100.0 * sum_minus / sum_tr if sum_tr > 0 else 0.0
        total = pdi + mdi
        plus_di[i] = pdi
        minus_di[i] = mdi
        dx[i] = 100.0 * abs(pdi - mdi) / total if total > 0 else 0.0

    return wilder_mean(dx, period), plus_di, minus_di


def ichimoku(
    highs: Sequence[float],
    lows: Sequence[float],
    conversion_period: int = 9,
    base_period: int = 26,
    span_period: int = 52,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate Ichimoku Cloud lines (not displaced forward).

    Returns:
        Tuple of (conversion, base, span_a, span_b) arrays
    """
    def midpoint(period: int) -> np.ndarray:
        return (highest(highs, period) + lowest(lows, period)) / 2

    conversion = midpoint(conversion_period)
    base = midpoint(base_period)
    return conversion, base, (conversion + base) / 2, midpoint(span_period)


# =============================================================================
# Volume
# =============================================================================

def obv(closes: Sequence[float], volumes: Sequence[float]) -> np.ndarray:
    """Calculate On-Balance Volume, starting at 0 on the first bar."""
    c = _as_array(closes)
    v = _as_array(volumes)
    out = np.zeros(len(c))
    if len(c) > 1:
        out[1:] = np.cumsum(np.sign(np.diff(c)) * v[1:])
    return out


def cmf(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Sequence[float],
    period: int = 20,
) -> np.ndarray:
    """
    Calculate Chaikin Money Flow.

    MFM = ((close - low) - (high - close)) / (high - low), 0 when high == low
    CMF = sum(MFM * volume) / sum(volume) over ``period`` bars
    """
    h = _as_array(highs)
    l = _as_array(lows)
    c = _as_array(closes)
    v = _as_array(volumes)
    out = _empty(len(c))
    if period <= 0 or len(c) < period:
        return out

    multiplier = _ratio((c - l) - (h - c), h - l, fill=0.0)
    flow = sliding_window_view(multiplier * v, period).sum(axis=1)
    volume = sliding_window_view(v, period).sum(axis=1)
    out[period - 1 :] = _ratio(flow, volume, fill=0.0)
    return out


# =============================================================================
# IndicatorCalculator class
# =============================================================================

def _optional(value: float) -> float | None:
    value = float(value)
    return None if math.isnan(value) else value


def _tail(values: np.ndarray, warmup: int) -> np.ndarray:
    """Drop the ``warmup - 1`` leading bars; empty if never warmed up."""
    if len(values) < warmup:
        return values[:0]
    return values[warmup - 1 :]


def _scalar_series(name: str, values: np.ndarray, warmup: int) -> IndicatorSeries:
    return IndicatorSeries(name, tuple(_optional(v) for v in _tail(values, warmup)))


def _point_series(name: str, warmup: int, factory: Callable, *arrays: np.ndarray) -> IndicatorSeries:
    columns = [_tail(arr, warmup) for arr in arrays]
    points = tuple(
        factory(*(_optional(v) for v in row)) for row in zip(*columns)
    )
    return IndicatorSeries(name, points)


class IndicatorCalculator:
    """Calculator for the full indicator battery used by the signal generator."""

    def __init__(self, config: IndicatorConfig | None = None):
        self.config = config or IndicatorConfig()

    @property
    def warmup_periods(self) -> dict[str, int]:
        """Bars needed before each indicator produces its first value."""
        cfg = self.config
        return {
            names.SMA_SHORT: cfg.sma_short_period,
            names.SMA_LONG: cfg.sma_long_period,
            names.EMA_SHORT: cfg.ema_short_period,
            names.EMA_LONG: cfg.ema_long_period,
            names.RSI: cfg.rsi_period + 1,
            names.STOCH_RSI: cfg.rsi_period + cfg.stoch_rsi_period + cfg.stoch_k_period - 1,
            names.MACD: max(cfg.macd_fast_period, cfg.macd_slow_period),
            names.BOLLINGER: cfg.bollinger_period,
            names.ATR: cfg.atr_period + 1,
            names.PSAR: 1,
            names.CCI: cfg.cci_period,
            names.ADX: 2 * cfg.adx_period,
            names.WILLIAMS_R: cfg.williams_r_period,
            names.ICHIMOKU: max(
                cfg.ichimoku_conversion_period,
                cfg.ichimoku_base_period,
                cfg.ichimoku_span_period,
            ),
            names.KELTNER: max(cfg.keltner_ma_period, cfg.keltner_atr_period + 1),
            names.CMO: cfg.cmo_period + 1,
            names.OBV: 1,
            names.CMF: cfg.cmf_period,
            names.VWMA: cfg.vwma_period,
        }

    def calculate_all(self, series: PriceSeries) -> IndicatorSet:
        """
        Calculate every indicator for the given price series.

        Indicators that cannot warm up on this series come back empty.
        Volume indicators are only present when every candle has a volume.

        Args:
            series: Window of candles, oldest first

        Returns:
            IndicatorSet keyed by indicator name
        """
        cfg = self.config
        warmup = self.warmup_periods
        closes = series.closes()
        highs = series.highs()
        lows = series.lows()

        result = {
            names.SMA_SHORT: _scalar_series(
                names.SMA_SHORT, sma(closes, cfg.sma_short_period), warmup[names.SMA_SHORT]
            ),
            names.SMA_LONG: _scalar_series(
                names.SMA_LONG, sma(closes, cfg.sma_long_period), warmup[names.SMA_LONG]
            ),
            names.EMA_SHORT: _scalar_series(
                names.EMA_SHORT, ema(closes, cfg.ema_short_period), warmup[names.EMA_SHORT]
            ),
            names.EMA_LONG: _scalar_series(
                names.EMA_LONG, ema(closes, cfg.ema_long_period), warmup[names.EMA_LONG]
            ),
            names.RSI: _scalar_series(
                names.RSI, rsi(closes, cfg.rsi_period), warmup[names.RSI]
            ),
            names.STOCH_RSI: _point_series(
                names.STOCH_RSI,
                warmup[names.STOCH_RSI],
                StochRsiPoint,
                *stoch_rsi(
                    closes,
                    cfg.rsi_period,
                    cfg.stoch_rsi_period,
                    cfg.stoch_k_period,
                    cfg.stoch_d_period,
                ),
            ),
            names.MACD: _point_series(
                names.MACD,
                warmup[names.MACD],
                MacdPoint,
                *macd(closes, cfg.macd_fast_period, cfg.macd_slow_period, cfg.macd_signal_period),
            ),
            names.BOLLINGER: self._bollinger_series(closes, warmup[names.BOLLINGER]),
            names.ATR: _scalar_series(
                names.ATR, atr(highs, lows, closes, cfg.atr_period), warmup[names.ATR]
            ),
            names.PSAR: _scalar_series(
                names.PSAR, parabolic_sar(highs, lows, cfg.psar_step, cfg.psar_max), warmup[names.PSAR]
            ),
            names.CCI: _scalar_series(
                names.CCI, cci(highs, lows, closes, cfg.cci_period), warmup[names.CCI]
            ),
            names.ADX: _point_series(
                names.ADX,
                warmup[names.ADX],
                AdxPoint,
                *adx(highs, lows, closes, cfg.adx_period),
            ),
            names.WILLIAMS_R: _scalar_series(
                names.WILLIAMS_R,
                williams_r(highs, lows, closes, cfg.williams_r_period),
                warmup[names.WILLIAMS_R],
            ),
            names.ICHIMOKU: _point_series(
                names.ICHIMOKU,
                warmup[names.ICHIMOKU],
                IchimokuPoint,
                *ichimoku(
                    highs,
                    lows,
                    cfg.ichimoku_conversion_period,
                    cfg.ichimoku_base_period,
                    cfg.ichimoku_span_period,
                ),
            ),
            names.KELTNER: _point_series(
                names.KELTNER,
                warmup[names.KELTNER],
                KeltnerPoint,
                *keltner_channels(
                    highs,
                    lows,
                    closes,
                    cfg.keltner_ma_period,
                    cfg.keltner_atr_period,
                    cfg.keltner_multiplier,
                ),
            ),
            names.CMO: _scalar_series(
                names.CMO, cmo(closes, cfg.cmo_period), warmup[names.CMO]
            ),
        }

        volumes = series.volumes()
        if volumes is not None:
            result[names.OBV] = _scalar_series(names.OBV, obv(closes, volumes), warmup[names.OBV])
            result[names.CMF] = _scalar_series(
                names.CMF, cmf(highs, lows, closes, volumes, cfg.cmf_period), warmup[names.CMF]
            )
            result[names.VWMA] = _scalar_series(
                names.VWMA, vwma(closes, volumes, cfg.vwma_period), warmup[names.VWMA]
            )

        return IndicatorSet(result)

    def calculate_latest(self, series: PriceSeries) -> dict:
        """
        Calculate indicators and return only their latest values.

        Args:
            series: Window of candles, oldest first

        Returns:
            Dict of indicator name to latest value (None when undefined)
        """
        return self.calculate_all(series).snapshot()

    def _bollinger_series(self, closes: np.ndarray, warmup: int) -> IndicatorSeries:
        lower, middle, upper = bollinger_bands(
            closes, self.config.bollinger_period, self.config.bollinger_std_dev
        )
        pb = _ratio(closes - lower, upper - lower)
        return _point_series(names.BOLLINGER, warmup, BollingerPoint, lower, middle, upper, pb)
