"""
Configuration management for the WhatsApp → Camunda relay.

Loads environment variables (optionally from a .env file) once at startup
into an immutable RelayConfig that is handed to every handler.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


LogLevel = Literal["silent", "info", "debug"]

DEFAULT_CAMUNDA_WEBHOOK_URL = (
    "https://bru-2.connectors.camunda.io/f4af082f-f82a-47f7-9355-33bd5ec19903"
    "/inbound/3167632d-0216-4b4f-af17-0c5ceda83400"
)

# silent still lets warnings and errors through
LOG_LEVELS: dict[str, int] = {
    "silent": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class ConfigurationError(Exception):
    """Required configuration is missing or malformed."""
    pass


@dataclass(frozen=True)
class RelayConfig:
    """Relay configuration from environment."""

    # HTTP server
    port: int
    host: str

    # Meta (Developer App → Settings → Basic)
    verify_token: str
    app_secret: str

    # Camunda webhook start event
    camunda_webhook_url: str
    camunda_basic_user: str
    camunda_basic_pass: str
    camunda_timeout_seconds: float

    log_level: LogLevel = "info"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: PORT or CAMUNDA_TIMEOUT_SECONDS is not a number
        """
        env = os.environ if environ is None else environ

        try:
            port = int(env.get("PORT") or "3000")
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {env.get('PORT')!r}")

        try:
            timeout = float(env.get("CAMUNDA_TIMEOUT_SECONDS") or "10")
        except ValueError:
            raise ConfigurationError(
                "CAMUNDA_TIMEOUT_SECONDS must be a number, "
                f"got {env.get('CAMUNDA_TIMEOUT_SECONDS')!r}"
            )

        log_level = (env.get("LOG_LEVEL") or "info").lower()
        if log_level not in LOG_LEVELS:
            log_level = "info"

        return cls(
            port=port,
            host=env.get("HOST", "0.0.0.0"),
            verify_token=env.get("WA_VERIFY_TOKEN") or "ThisIsATest",
            app_secret=env.get("WA_APP_SECRET", ""),
            camunda_webhook_url=env.get("CAMUNDA_WEBHOOK_URL") or DEFAULT_CAMUNDA_WEBHOOK_URL,
            camunda_basic_user=env.get("CAMUNDA_BASIC_USER") or "webhook",
            camunda_basic_pass=env.get("CAMUNDA_BASIC_PASS") or "test123",
            camunda_timeout_seconds=timeout,
            log_level=log_level,  # type: ignore
        )

    def validate(self) -> "RelayConfig":
        """Raise ConfigurationError unless every required value is set."""
        required = {
            "WA_APP_SECRET": self.app_secret,
            "CAMUNDA_WEBHOOK_URL": self.camunda_webhook_url,
            "CAMUNDA_BASIC_PASS": self.camunda_basic_pass,
        }
        missing = [name for name, value in required.items() if not value]

        if missing:
            raise ConfigurationError(
                f"Missing required env vars. Please set {', '.join(missing)}."
            )

        return self

    @property
    def logging_level(self) -> int:
        """Standard library logging level for LOG_LEVEL."""
        return LOG_LEVELS[self.log_level]


def get_config() -> RelayConfig:
    """Load and validate configuration from the process environment."""
    return RelayConfig.from_env().validate()
