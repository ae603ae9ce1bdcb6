"""CLI entry point for bitwatch.

Sends a sample transaction notification to the configured Discord
webhook, which is handy for checking a webhook URL end to end.

Usage:
    DISCORD_WEBHOOK_URL="https://discord.com/api/webhooks/..." python -m bitwatch
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.config
import sys
from typing import NoReturn

import httpx
from pydantic import ValidationError

from bitwatch import __version__
from bitwatch.config import Settings, clear_settings_cache, get_settings
from bitwatch.notifier import (
    ConfigurationError,
    DiscordNotifier,
    Direction,
    TransactionNotification,
    WebhookError,
    mempool_tx_url,
)

APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_SEND_ERROR = 2

SAMPLE_TXID = "example-txid-000000000000000000000000000000000000000000000000"
SAMPLE_ADDRESS = "bc1q..."


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="bitwatch",
        description="Send a sample transaction notification to a Discord webhook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  DISCORD_WEBHOOK_URL   Discord webhook URL (required)
  DISCORD_TIMEOUT       Request timeout in seconds (default: 10)
  LOG_LEVEL             Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def build_sample_notification() -> TransactionNotification:
    """Build the sample transaction sent by the CLI."""
    return TransactionNotification(
        txid=SAMPLE_TXID,
        address=SAMPLE_ADDRESS,
        value_sats=123456,
        direction=Direction.IN,
        link=mempool_tx_url(SAMPLE_TXID),
        extra="Detected in mempool",
    )


async def send_sample(notifier: DiscordNotifier) -> int:
    """Send the sample notification and report the outcome.

    Args:
        notifier: Notifier bound to the configured webhook.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)

    try:
        response = await notifier.send(build_sample_notification())
    except ConfigurationError as e:
        logger.error("Invalid Discord configuration: %s", e)
        return EXIT_CONFIG_ERROR
    except (WebhookError, httpx.HTTPError) as e:
        logger.error("Failed to send Discord notification: %s", e)
        return EXIT_SEND_ERROR

    print(f"Discord response: {response!r}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(args.log_level or settings.log_level)

    if not settings.discord.enabled:
        print("Set DISCORD_WEBHOOK_URL in your environment to test", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    summary = settings.redacted_summary()
    logging.getLogger(__name__).info(
        "Sending sample notification to %s (timeout %ss)",
        summary["discord_webhook_url"],
        summary["discord_timeout"],
    )

    notifier = DiscordNotifier.from_settings(settings.discord)
    exit_code = asyncio.run(send_sample(notifier))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
