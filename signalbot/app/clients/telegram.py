"""Telegram Bot API client for alert delivery."""

import logging

import httpx

from signalbot.errors import DispatchError

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Send plain-text messages to one Telegram chat.

    Delivery is fire-and-forget: one attempt, no retry.
    """

    BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: str = "",
        chat_id: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(self, text: str) -> bool:
        """
        Send a message.

        Args:
            text: Plain-text message body

        Returns:
            True if Telegram accepted the message, False if credentials
            are missing

        Raises:
            DispatchError: On transport or HTTP errors
        """
        if not self.is_configured:
            logger.warning("Telegram bot credentials missing, alert not sent")
            return False

        client = await self._get_client()
        try:
            response = await client.post(
                f"/bot{self.bot_token}/sendMessage",
                json={"chat_id": self.chat_id, "text": text},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            # Never log the URL: it embeds the bot token
            raise DispatchError(f"Telegram alert failed: {type(e).__name__}") from e

        logger.info(f"Telegram alert sent: {text}")
        return True
