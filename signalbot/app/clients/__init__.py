"""Exchange and alert clients."""

from signalbot.app.clients.binance_rest import BinanceRestClient, RateLimiter
from signalbot.app.clients.telegram import TelegramNotifier

__all__ = [
    "BinanceRestClient",
    "RateLimiter",
    "TelegramNotifier",
]
