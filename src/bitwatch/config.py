"""Configuration management with Pydantic Settings.

This module loads and validates the environment variables used by the
bitwatch command-line driver. Library code never reads the environment
itself; settings are passed in explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiscordSettings(BaseSettings):
    """Discord notification settings."""

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook_url: SecretStr | None = Field(
        default=None,
        alias="DISCORD_WEBHOOK_URL",
        description="Discord webhook URL for transaction notifications",
    )
    timeout: float = Field(
        default=10.0,
        alias="DISCORD_TIMEOUT",
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: SecretStr | None) -> SecretStr | None:
        """Validate webhook URL format."""
        if v is None:
            return v
        if not v.get_secret_value().startswith(("http://", "https://")):
            raise ValueError("DISCORD_WEBHOOK_URL must be an HTTP(S) URL")
        return v

    @property
    def enabled(self) -> bool:
        """Check if Discord notifications are enabled."""
        return self.webhook_url is not None


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files.

    Example:
        ```python
        from bitwatch.config import get_settings

        settings = get_settings()
        print(settings.discord.enabled)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    discord: DiscordSettings = Field(default_factory=DiscordSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with the webhook token masked.
        """
        webhook_url = (
            self._redact_webhook_url(self.discord.webhook_url.get_secret_value())
            if self.discord.webhook_url
            else "(not set)"
        )
        return {
            "discord_webhook_url": webhook_url,
            "discord_timeout": str(self.discord.timeout),
            "log_level": self.log_level,
        }

    @staticmethod
    def _redact_webhook_url(url: str) -> str:
        """Redact the token (last path segment) of a webhook URL."""
        base, sep, token = url.rstrip("/").rpartition("/")
        if not sep or not token or base.endswith(("://", ":/")):
            return url
        return f"{base}/***"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
