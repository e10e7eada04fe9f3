"""Business services."""

from signalbot.app.services.orchestrator import (
    AlertSink,
    MarketDataSource,
    SignalBot,
    format_alert,
)
from signalbot.app.services.scheduler import PeriodicRunner

__all__ = [
    "AlertSink",
    "MarketDataSource",
    "SignalBot",
    "format_alert",
    "PeriodicRunner",
]
