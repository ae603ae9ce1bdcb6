"""Transaction message formatter for Discord webhooks.

This module turns TransactionNotification objects into Discord webhook
payloads. Formatting is pure: given the same notification and clock it
always produces the same payload.
"""

from __future__ import annotations

from datetime import UTC, datetime

from bitwatch.notifier.models import Direction, Embed, TransactionNotification, WebhookPayload

MEMPOOL_TX_URL = "https://mempool.space/tx/{txid}"

# Discord embed colors
COLOR_IN = 0x2ECC71  # Green
COLOR_OUT = 0xE74C3C  # Red
COLOR_DEFAULT = 0x3498DB  # Blue

USERNAME = "bitwatch"
FOOTER_TEXT = "bitwatch"


def mempool_tx_url(txid: str) -> str:
    """Get the mempool.space explorer link for a transaction."""
    return MEMPOOL_TX_URL.format(txid=txid)


def format_sats(value: int) -> str:
    """Format a sats amount with thousands separators."""
    return f"{value:,}"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_direction_color(direction: Direction | None) -> int:
    """Get Discord embed color for a transaction direction."""
    if direction is Direction.IN:
        return COLOR_IN
    if direction is Direction.OUT:
        return COLOR_OUT
    return COLOR_DEFAULT


def build_description(notification: TransactionNotification) -> str:
    """Build the embed description, one line per present field."""
    lines = []
    if notification.address:
        lines.append(f"Address: `{notification.address}`")
    if notification.value_sats is not None:
        lines.append(f"Value: **{format_sats(notification.value_sats)} sats**")
    if notification.direction is not None:
        lines.append(f"Direction: **{notification.direction.value}**")
    if notification.link:
        lines.append(f"[View on mempool.space]({notification.link})")
    if notification.extra:
        lines.append(notification.extra)
    return "\n".join(lines)


def format_transaction(
    notification: TransactionNotification,
    *,
    now: datetime | None = None,
) -> WebhookPayload:
    """Format a transaction into a Discord webhook payload.

    Args:
        notification: The transaction to describe.
        now: Time to stamp the embed with (defaults to the current time).

    Returns:
        WebhookPayload with a single embed.
    """
    embed = Embed(
        title=f"Transaction {notification.txid}",
        description=build_description(notification),
        color=get_direction_color(notification.direction),
        timestamp=format_timestamp(now or datetime.now(UTC)),
        footer_text=FOOTER_TEXT,
    )
    return WebhookPayload(username=USERNAME, embeds=(embed,))
