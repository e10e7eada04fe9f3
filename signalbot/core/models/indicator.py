"""Indicator series models.

An IndicatorSeries is aligned to the tail of the PriceSeries it was
computed from: element 0 belongs to bar ``warmup - 1``. Only the latest
element of a series is ever consulted, so two series are never compared
index by index.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass, is_dataclass
from types import MappingProxyType
from typing import Any, Union

# Indicator names
SMA_SHORT = "sma_short"
SMA_LONG = "sma_long"
EMA_SHORT = "ema_short"
EMA_LONG = "ema_long"
RSI = "rsi"
STOCH_RSI = "stoch_rsi"
MACD = "macd"
BOLLINGER = "bollinger"
ATR = "atr"
PSAR = "psar"
CCI = "cci"
ADX = "adx"
WILLIAMS_R = "williams_r"
ICHIMOKU = "ichimoku"
KELTNER = "keltner"
CMO = "cmo"
OBV = "obv"
CMF = "cmf"
VWMA = "vwma"


@dataclass(frozen=True)
class MacdPoint:
    macd: float
    signal: float | None = None
    histogram: float | None = None


@dataclass(frozen=True)
class BollingerPoint:
    lower: float
    middle: float
    upper: float
    pb: float | None = None  # %B, undefined for a collapsed band


@dataclass(frozen=True)
class StochRsiPoint:
    stoch_rsi: float | None
    k: float | None
    d: float | None = None


@dataclass(frozen=True)
class AdxPoint:
    adx: float
    pdi: float
    mdi: float


@dataclass(frozen=True)
class IchimokuPoint:
    conversion: float
    base: float
    span_a: float
    span_b: float


@dataclass(frozen=True)
class KeltnerPoint:
    lower: float
    middle: float
    upper: float


IndicatorValue = Union[
    float, MacdPoint, BollingerPoint, StochRsiPoint, AdxPoint, IchimokuPoint, KeltnerPoint, None
]


@dataclass(frozen=True)
class IndicatorSeries:
    """Named, tail-aligned sequence of indicator values."""

    name: str
    values: tuple[IndicatorValue, ...] = ()

    @property
    def latest(self) -> IndicatorValue:
        """Last element, or None when the series never warmed up."""
        if not self.values:
            return None
        return self.values[-1]

    @property
    def is_empty(self) -> bool:
        return not self.values

    def __len__(self) -> int:
        return len(self.values)


class IndicatorSet(Mapping):
    """Read-only mapping of indicator name to IndicatorSeries."""

    def __init__(self, series: Mapping[str, IndicatorSeries] | None = None):
        self._series = MappingProxyType(dict(series or {}))

    @classmethod
    def from_latest(cls, **latest: IndicatorValue) -> IndicatorSet:
        """Build a set where each named series holds a single latest value.

        ``None`` produces an empty series.
        """
        return cls(
            {
                name: IndicatorSeries(name, () if value is None else (value,))
                for name, value in latest.items()
            }
        )

    def __getitem__(self, name: str) -> IndicatorSeries:
        return self._series[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def latest(self, name: str) -> IndicatorValue:
        """Latest value of a series; None if missing or empty."""
        series = self._series.get(name)
        if series is None:
            return None
        return series.latest

    def latest_field(self, name: str, field: str) -> float | None:
        """Named field of a structured latest value (e.g. MACD ``signal``)."""
        point = self.latest(name)
        if point is None:
            return None
        return getattr(point, field, None)

    def snapshot(self) -> dict[str, Any]:
        """Latest value of every series, structured points as dicts."""
        result: dict[str, Any] = {}
        for name, series in self._series.items():
            value = series.latest
            result[name] = asdict(value) if is_dataclass(value) else value
        return result

    def __repr__(self) -> str:
        return f"IndicatorSet({sorted(self._series)})"
