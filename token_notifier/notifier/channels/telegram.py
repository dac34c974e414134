"""Telegram Bot API notification channel."""

import logging

import httpx

from token_notifier.errors import NotificationDeliveryError

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


class TelegramChannel:
    """Delivers notifications through the Telegram ``sendMessage`` method.

    One form-encoded POST per message, no retry. Failures are returned as a
    result dict rather than raised, so a sweep can move on to the next token.
    """

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        dry_run: bool = False,
        client: httpx.Client | None = None,
        api_base: str = TELEGRAM_API_BASE,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.dry_run = dry_run
        self._client = client
        self.api_base = api_base.rstrip("/")

    @property
    def url(self) -> str:
        return f"{self.api_base}/bot{self.bot_token}/sendMessage"

    def send(self, message: str) -> dict:
        """Send ``message`` to the configured chat.

        Returns:
            {status: 'sent'|'dry_run'|'error', success: bool, error?: str}
        """
        payload = self._format_payload(message)

        if self.dry_run:
            logger.info("DRY RUN: Telegram payload: %s", payload)
            return {"status": "dry_run", "success": True, "payload": payload}

        try:
            self._post(payload)
        except NotificationDeliveryError as e:
            logger.error("Telegram delivery failed: %s", e)
            return {"status": "error", "success": False, "error": str(e)}
        return {"status": "sent", "success": True}

    def _post(self, payload: dict) -> None:
        try:
            if self._client is not None:
                response = self._client.post(self.url, data=payload)
            else:
                response = httpx.post(self.url, data=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationDeliveryError(
                f"HTTP {e.response.status_code} from Telegram"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NotificationDeliveryError(self._redact(str(e))) from e

    def _format_payload(self, message: str) -> dict:
        return {"chat_id": self.chat_id, "text": message}

    def _redact(self, text: str) -> str:
        """Strip the bot token from error text (it is part of the URL)."""
        if self.bot_token:
            return text.replace(self.bot_token, "[REDACTED]")
        return text
