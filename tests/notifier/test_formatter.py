"""Tests for transaction message formatter."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from bitwatch.notifier.formatter import (
    COLOR_DEFAULT,
    COLOR_IN,
    COLOR_OUT,
    FOOTER_TEXT,
    USERNAME,
    build_description,
    format_sats,
    format_timestamp,
    format_transaction,
    get_direction_color,
    mempool_tx_url,
)
from bitwatch.notifier.models import Direction, TransactionNotification, WebhookPayload

FROZEN_NOW = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=UTC)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def incoming_tx() -> TransactionNotification:
    """Create an incoming transaction with the common fields."""
    return TransactionNotification(
        txid="abc",
        address="bc1q...",
        value_sats=1000,
        direction=Direction.IN,
        link="https://x/abc",
    )


# ============================================================================
# Helper Function Tests
# ============================================================================


class TestFormatSats:
    """Tests for format_sats helper."""

    def test_small_amount(self) -> None:
        assert format_sats(999) == "999"

    def test_thousands_separators(self) -> None:
        assert format_sats(123456) == "123,456"
        assert format_sats(2_100_000_000_000_000) == "2,100,000,000,000,000"

    def test_zero(self) -> None:
        assert format_sats(0) == "0"


class TestFormatTimestamp:
    """Tests for format_timestamp helper."""

    def test_utc_milliseconds_with_z(self) -> None:
        """Test UTC output truncated to milliseconds with Z suffix."""
        assert format_timestamp(FROZEN_NOW) == "2024-05-01T12:30:45.123Z"

    def test_converts_offset_to_utc(self) -> None:
        """Test aware datetimes are converted to UTC."""
        moment = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2024-05-01T12:00:00.000Z"

    def test_naive_treated_as_utc(self) -> None:
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"


class TestGetDirectionColor:
    """Tests for get_direction_color helper."""

    def test_in_is_green(self) -> None:
        assert get_direction_color(Direction.IN) == COLOR_IN == 0x2ECC71

    def test_out_is_red(self) -> None:
        assert get_direction_color(Direction.OUT) == COLOR_OUT == 0xE74C3C

    @pytest.mark.parametrize("direction", [Direction.UNKNOWN, None])
    def test_other_is_blue(self, direction: Direction | None) -> None:
        assert get_direction_color(direction) == COLOR_DEFAULT == 0x3498DB


class TestMempoolTxUrl:
    """Tests for mempool_tx_url helper."""

    def test_builds_tx_link(self) -> None:
        assert mempool_tx_url("deadbeef") == "https://mempool.space/tx/deadbeef"


# ============================================================================
# Description Tests
# ============================================================================


class TestBuildDescription:
    """Tests for build_description."""

    def test_lines_in_fixed_order(self, incoming_tx: TransactionNotification) -> None:
        """Test address, value, direction and link lines in order."""
        assert build_description(incoming_tx) == "\n".join(
            [
                "Address: `bc1q...`",
                "Value: **1,000 sats**",
                "Direction: **in**",
                "[View on mempool.space](https://x/abc)",
            ]
        )

    def test_extra_is_last_line(self) -> None:
        """Test extra text is appended verbatim."""
        tx = TransactionNotification(
            txid="abc",
            direction=Direction.OUT,
            extra="Detected in mempool",
        )
        assert build_description(tx).splitlines() == [
            "Direction: **out**",
            "Detected in mempool",
        ]

    def test_omitted_fields_produce_no_lines(self) -> None:
        """Test that absent fields leave no empty lines behind."""
        tx = TransactionNotification(txid="abc", value_sats=5)

        description = build_description(tx)

        assert description == "Value: **5 sats**"
        assert "Address" not in description
        assert "mempool.space" not in description
        assert "\n" not in description

    def test_no_fields_gives_empty_description(self) -> None:
        assert build_description(TransactionNotification(txid="abc")) == ""

    def test_zero_value_is_rendered(self) -> None:
        """Test that a zero amount still produces a value line."""
        tx = TransactionNotification(txid="abc", value_sats=0)
        assert build_description(tx) == "Value: **0 sats**"

    def test_empty_strings_are_omitted(self) -> None:
        tx = TransactionNotification(txid="abc", address="", link="", extra="")
        assert build_description(tx) == ""

    def test_empty_direction_omitted(self) -> None:
        """Test an empty direction gives no line and the default color."""
        tx = TransactionNotification(txid="abc", direction="")  # type: ignore[arg-type]
        assert build_description(tx) == ""
        assert format_transaction(tx, now=FROZEN_NOW).embeds[0].color == COLOR_DEFAULT

    def test_unknown_direction_rendered(self) -> None:
        tx = TransactionNotification(txid="abc", direction=Direction.UNKNOWN)
        assert build_description(tx) == "Direction: **unknown**"


# ============================================================================
# Payload Tests
# ============================================================================


class TestFormatTransaction:
    """Tests for format_transaction."""

    def test_returns_payload(self, incoming_tx: TransactionNotification) -> None:
        payload = format_transaction(incoming_tx, now=FROZEN_NOW)

        assert isinstance(payload, WebhookPayload)
        assert payload.username == USERNAME
        assert len(payload.embeds) == 1

    def test_embed_fields(self, incoming_tx: TransactionNotification) -> None:
        """Test title, color, timestamp and footer of the embed."""
        embed = format_transaction(incoming_tx, now=FROZEN_NOW).embeds[0]

        assert embed.title == "Transaction abc"
        assert embed.color == COLOR_IN
        assert embed.timestamp == "2024-05-01T12:30:45.123Z"
        assert embed.footer_text == FOOTER_TEXT
        assert embed.description.splitlines()[0] == "Address: `bc1q...`"

    def test_wire_format(self, incoming_tx: TransactionNotification) -> None:
        """Test the dictionary sent to Discord."""
        payload = format_transaction(incoming_tx, now=FROZEN_NOW).to_dict()

        assert payload == {
            "username": "bitwatch",
            "embeds": [
                {
                    "title": "Transaction abc",
                    "description": (
                        "Address: `bc1q...`\n"
                        "Value: **1,000 sats**\n"
                        "Direction: **in**\n"
                        "[View on mempool.space](https://x/abc)"
                    ),
                    "color": 0x2ECC71,
                    "timestamp": "2024-05-01T12:30:45.123Z",
                    "footer": {"text": "bitwatch"},
                }
            ],
        }

    def test_formatting_is_pure(self, incoming_tx: TransactionNotification) -> None:
        """Test identical input and clock give identical payloads."""
        first = format_transaction(incoming_tx, now=FROZEN_NOW)
        second = format_transaction(incoming_tx, now=FROZEN_NOW)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_only_timestamp_changes_with_clock(
        self, incoming_tx: TransactionNotification
    ) -> None:
        first = format_transaction(incoming_tx, now=FROZEN_NOW).to_dict()
        later = format_transaction(
            incoming_tx, now=FROZEN_NOW + timedelta(seconds=5)
        ).to_dict()

        first_embed = first["embeds"][0]  # type: ignore[index]
        later_embed = later["embeds"][0]  # type: ignore[index]
        assert first_embed.pop("timestamp") != later_embed.pop("timestamp")
        assert first == later

    def test_defaults_to_current_time(self, incoming_tx: TransactionNotification) -> None:
        before = datetime.now(UTC).replace(microsecond=0)
        embed = format_transaction(incoming_tx).embeds[0]

        stamped = datetime.fromisoformat(embed.timestamp.replace("Z", "+00:00"))
        assert stamped >= before
        assert embed.timestamp.endswith("Z")
