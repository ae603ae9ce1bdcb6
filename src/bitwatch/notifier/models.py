"""Data models for transaction notifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """Direction of funds relative to the monitored address."""

    IN = "in"
    OUT = "out"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransactionNotification:
    """A detected transaction to announce.

    Attributes:
        txid: Transaction id.
        address: Monitored address involved in the transaction.
        value_sats: Sats moved to/from the address.
        direction: Whether funds moved in or out of the address.
        link: Explorer link for the transaction.
        extra: Free text appended to the message.
    """

    txid: str
    address: str | None = None
    value_sats: int | None = None
    direction: Direction | None = None
    link: str | None = None
    extra: str | None = None

    def __post_init__(self) -> None:
        if self.value_sats is not None:
            if isinstance(self.value_sats, bool) or not isinstance(self.value_sats, int):
                raise ValueError("value_sats must be an integer")
            if self.value_sats < 0:
                raise ValueError("value_sats must be non-negative")
        if self.direction == "":
            object.__setattr__(self, "direction", None)
        elif self.direction is not None and not isinstance(self.direction, Direction):
            # Accept the plain string values ("in", "out", "unknown")
            object.__setattr__(self, "direction", Direction(self.direction))


@dataclass(frozen=True)
class Embed:
    """A Discord embed."""

    title: str
    description: str
    color: int
    timestamp: str
    footer_text: str

    def to_dict(self) -> dict[str, object]:
        """Render the embed in Discord's wire format."""
        return {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "timestamp": self.timestamp,
            "footer": {"text": self.footer_text},
        }


@dataclass(frozen=True)
class WebhookPayload:
    """A Discord webhook message body."""

    username: str
    embeds: tuple[Embed, ...]

    def to_dict(self) -> dict[str, object]:
        """Render the payload as a JSON-serializable dictionary."""
        return {
            "username": self.username,
            "embeds": [embed.to_dict() for embed in self.embeds],
        }
