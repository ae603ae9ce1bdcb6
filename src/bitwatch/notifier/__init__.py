"""Notification layer - Discord webhook delivery."""

from bitwatch.notifier.discord import DiscordNotifier, notify_transaction
from bitwatch.notifier.errors import (
    ConfigurationError,
    ErrorKind,
    HttpStatusError,
    TransportError,
    WebhookError,
)
from bitwatch.notifier.formatter import format_transaction, mempool_tx_url
from bitwatch.notifier.models import (
    Direction,
    Embed,
    TransactionNotification,
    WebhookPayload,
)
from bitwatch.notifier.webhook import send_webhook

__all__ = [
    "ConfigurationError",
    "Direction",
    "DiscordNotifier",
    "Embed",
    "ErrorKind",
    "HttpStatusError",
    "TransactionNotification",
    "TransportError",
    "WebhookError",
    "WebhookPayload",
    "format_transaction",
    "mempool_tx_url",
    "notify_transaction",
    "send_webhook",
]
