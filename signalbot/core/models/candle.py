"""Candle (OHLCV) and price series data models."""

from datetime import datetime

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_WINDOW = 100


class Candle(BaseModel):
    """One closed candle at a fixed interval."""

    model_config = ConfigDict(frozen=True)

    close: float
    high: float
    low: float
    volume: float | None = None
    sequence_index: int = 0
    open: float | None = None
    open_time: datetime | None = None


class PriceSeries(BaseModel):
    """Immutable window of candles for a single instrument, oldest first.

    The window keeps at most ``max_length`` candles; older ones are dropped
    on construction.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    interval: str = ""
    max_length: int = Field(default=DEFAULT_WINDOW, gt=0)
    candles: tuple[Candle, ...] = ()

    @field_validator("candles")
    @classmethod
    def _check_order(cls, candles: tuple[Candle, ...]) -> tuple[Candle, ...]:
        for prev, curr in zip(candles, candles[1:]):
            if curr.sequence_index <= prev.sequence_index:
                raise ValueError(
                    f"candles must be ordered oldest first "
                    f"(sequence_index {curr.sequence_index} after {prev.sequence_index})"
                )
        return candles

    def model_post_init(self, __context) -> None:
        """Trim the window to its newest ``max_length`` candles."""
        if len(self.candles) > self.max_length:
            object.__setattr__(self, "candles", self.candles[-self.max_length :])

    @classmethod
    def from_candles(
        cls,
        candles: list[Candle],
        symbol: str = "",
        interval: str = "",
        max_length: int = DEFAULT_WINDOW,
    ) -> "PriceSeries":
        """Build a series from a list of candles ordered oldest first."""
        return cls(
            symbol=symbol,
            interval=interval,
            max_length=max_length,
            candles=tuple(candles),
        )

    @property
    def latest_price(self) -> float | None:
        """Close of the newest candle, or None for an empty series."""
        if not self.candles:
            return None
        return self.candles[-1].close

    @property
    def has_volume(self) -> bool:
        """True when every candle carries a volume."""
        return bool(self.candles) and all(c.volume is not None for c in self.candles)

    def closes(self) -> np.ndarray:
        """Get close prices as a float64 array."""
        return np.array([c.close for c in self.candles], dtype=np.float64)

    def highs(self) -> np.ndarray:
        """Get high prices as a float64 array."""
        return np.array([c.high for c in self.candles], dtype=np.float64)

    def lows(self) -> np.ndarray:
        """Get low prices as a float64 array."""
        return np.array([c.low for c in self.candles], dtype=np.float64)

    def volumes(self) -> np.ndarray | None:
        """Get volumes as a float64 array, or None if any candle lacks one."""
        if not self.has_volume:
            return None
        return np.array([c.volume for c in self.candles], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.candles)
