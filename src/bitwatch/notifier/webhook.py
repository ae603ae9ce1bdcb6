"""Generic JSON webhook sender."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from bitwatch.notifier.errors import ConfigurationError, HttpStatusError

logger = logging.getLogger(__name__)

USER_AGENT = "bitwatch-discord-notifier/1.0"
DEFAULT_TIMEOUT = 10.0


def validate_webhook_url(webhook_url: str | None) -> httpx.URL:
    """Parse and validate a webhook URL.

    Raises:
        ConfigurationError: If the URL is empty, not absolute, or not HTTP(S).
    """
    if not webhook_url:
        raise ConfigurationError("Discord webhook URL is required (DISCORD_WEBHOOK_URL).")

    try:
        url = httpx.URL(webhook_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid webhook URL: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError("Webhook URL must be an absolute HTTP(S) URL")
    return url


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


async def send_webhook(
    webhook_url: str,
    payload: Any,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """POST a JSON payload to a webhook and interpret the response.

    Args:
        webhook_url: Full webhook URL.
        payload: Any JSON-serializable value, sent verbatim.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport (mainly for tests).

    Returns:
        The parsed JSON body for JSON responses, otherwise the raw text body.

    Raises:
        ConfigurationError: If the webhook URL is missing or malformed.
        HttpStatusError: If the response status is outside 2xx.
        httpx.TransportError: On connection, DNS, TLS or timeout failures.
    """
    url = validate_webhook_url(webhook_url)
    data = json.dumps(payload).encode("utf-8")

    headers = {
        "Content-Type": "application/json",
        "Content-Length": str(len(data)),
        "User-Agent": USER_AGENT,
    }

    logger.debug(f"Posting {len(data)} bytes to webhook {url.host}")
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.post(url, content=data, headers=headers)

    status = response.status_code
    body = response.text
    content_type = response.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            parsed = json.loads(body)
        except ValueError:
            logger.warning(f"Webhook declared JSON but sent an unparseable body (status {status})")
        else:
            if _is_success(status):
                logger.debug(f"Webhook delivered ({status})")
                return parsed
            logger.warning(f"Webhook failed: {status} {body}")
            raise HttpStatusError(
                f"Discord webhook returned {status}",
                status_code=status,
                body=parsed,
            )

        if _is_success(status):
            return body
        logger.warning(f"Webhook failed: {status} {body}")
        raise HttpStatusError(
            f"Discord webhook returned {status} and non-JSON body",
            status_code=status,
            body=body,
        )

    if _is_success(status):
        logger.debug(f"Webhook delivered ({status})")
        return body

    logger.warning(f"Webhook failed: {status} {body}")
    raise HttpStatusError(
        f"Discord webhook returned {status}",
        status_code=status,
        body=body,
    )
