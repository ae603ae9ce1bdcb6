"""Error types raised by the webhook sender."""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx

# Network-level failures are raised by httpx unchanged.
TransportError = httpx.TransportError


class ErrorKind(str, Enum):
    """Discriminator for webhook errors."""

    CONFIGURATION = "configuration"
    HTTP_STATUS = "http_status"


class WebhookError(Exception):
    """Base class for webhook delivery errors.

    Attributes:
        kind: Which failure this is; None on the base class, which is not
            raised directly.
        status_code: HTTP status of the response, if one was received.
        body: Parsed JSON body when available, otherwise the raw text.
    """

    kind: ErrorKind | None = None

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(WebhookError):
    """Raised when the webhook URL is missing or malformed."""

    kind = ErrorKind.CONFIGURATION


class HttpStatusError(WebhookError):
    """Raised when the webhook responds with a non-2xx status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, message: str, *, status_code: int, body: Any = None) -> None:
        super().__init__(message, status_code=status_code, body=body)
