"""Discord transaction notifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bitwatch.notifier.errors import ConfigurationError
from bitwatch.notifier.formatter import format_transaction
from bitwatch.notifier.webhook import DEFAULT_TIMEOUT, send_webhook

if TYPE_CHECKING:
    import httpx

    from bitwatch.config import DiscordSettings
    from bitwatch.notifier.models import TransactionNotification

logger = logging.getLogger(__name__)


async def notify_transaction(
    webhook_url: str,
    notification: TransactionNotification,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Format a transaction as a Discord embed and send it.

    Errors from the sender are propagated unchanged.

    Args:
        webhook_url: Discord webhook URL.
        notification: The transaction to announce.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport (mainly for tests).

    Returns:
        The webhook response (parsed JSON or raw text).
    """
    payload = format_transaction(notification)
    logger.info(f"Sending Discord notification for transaction {notification.txid}")
    return await send_webhook(
        webhook_url,
        payload.to_dict(),
        timeout=timeout,
        transport=transport,
    )


class DiscordNotifier:
    """Discord webhook notifier bound to a single webhook URL."""

    def __init__(
        self,
        webhook_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Discord notifier.

        Args:
            webhook_url: Discord webhook URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (mainly for tests).
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport
        self.name = "discord"

    @classmethod
    def from_settings(cls, settings: DiscordSettings) -> DiscordNotifier:
        """Create a notifier from Discord settings.

        Raises:
            ConfigurationError: If no webhook URL is configured.
        """
        if settings.webhook_url is None:
            raise ConfigurationError("Discord webhook URL is required (DISCORD_WEBHOOK_URL).")
        return cls(settings.webhook_url.get_secret_value(), timeout=settings.timeout)

    async def send(self, notification: TransactionNotification) -> Any:
        """Send a transaction notification to the webhook."""
        return await notify_transaction(
            self.webhook_url,
            notification,
            timeout=self.timeout,
            transport=self.transport,
        )
