"""Main application entry point.

Usage:
    signalbot                       # run now, then every poll interval
    signalbot --once                # single run, then exit
    signalbot --symbol ETHUSDT --interval 4h --limit 200
"""

import argparse
import asyncio
import logging
import signal

from signalbot.app.config import Settings, get_settings
from signalbot.app.services import PeriodicRunner, SignalBot

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging and quiet third-party libraries."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Hourly technical-analysis signal bot",
    )
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument("--symbol", help="Trading pair (overrides SYMBOL)")
    parser.add_argument("--interval", help="Kline interval (overrides INTERVAL)")
    parser.add_argument("--limit", type=int, help="Window length (overrides WINDOW_LENGTH)")
    parser.add_argument("--log-level", help="Logging level (overrides LOG_LEVEL)")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, settings: Settings | None = None) -> Settings:
    """
    Apply command line overrides on top of environment settings.

    Raises:
        pydantic.ValidationError: If an override is out of range
    """
    settings = settings or get_settings()
    overrides = {
        "symbol": args.symbol,
        "interval": args.interval,
        "window_length": args.limit,
        "log_level": args.log_level,
    }
    return Settings.model_validate(
        {**settings.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
    )


async def run(settings: Settings, once: bool = False) -> None:
    """Run the bot until interrupted (or a single time with ``once``)."""
    bot = SignalBot.from_settings(settings)
    try:
        if once:
            await bot.run_once()
            return

        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                # Windows event loops have no signal handlers
                pass

        runner = PeriodicRunner(bot.run_once, interval=settings.poll_interval_seconds)
        runner.start()
        logger.info(
            f"Signal bot started for {settings.symbol} {settings.interval}, "
            f"every {settings.poll_interval_seconds:g}s"
        )
        try:
            await stop_event.wait()
        finally:
            logger.info("Shutting down...")
            await runner.stop()
    finally:
        await bot.close()
        logger.info("Shutdown complete")


def main(argv: list[str] | None = None) -> None:
    """Run the application."""
    args = parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level)
    try:
        asyncio.run(run(settings, once=args.once))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
