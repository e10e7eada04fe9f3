"""Hourly technical-analysis signal bot.

Turns a rolling window of OHLCV candles for one instrument into a single
BUY / SELL / HOLD decision and forwards actionable decisions to Telegram.
"""

__version__ = "0.1.0"
