"""Signal decision models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

STRONG_TREND = "Strong Trend"


class Category(str, Enum):
    """Trading decision."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RuleFiring(BaseModel):
    """A cascade rule whose predicate matched during synthesis."""

    model_config = ConfigDict(frozen=True)

    number: int
    name: str
    category: Category


class SignalResult(BaseModel):
    """Terminal artifact of one run."""

    model_config = ConfigDict(frozen=True)

    category: Category = Category.HOLD
    qualifier: str | None = None
    latest_price: float | None = None
    snapshot: dict[str, Any] = Field(default_factory=dict)
    fired_rules: tuple[RuleFiring, ...] = ()

    @property
    def label(self) -> str:
        """Decision with its qualifier, e.g. ``BUY (Strong Trend)``."""
        if self.qualifier:
            return f"{self.category.value} ({self.qualifier})"
        return self.category.value

    @property
    def is_actionable(self) -> bool:
        """True for BUY and SELL decisions."""
        return self.category != Category.HOLD

    @property
    def deciding_rule(self) -> RuleFiring | None:
        """The last rule that wrote the category, if any."""
        if not self.fired_rules:
            return None
        return self.fired_rules[-1]
