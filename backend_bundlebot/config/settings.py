"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and the project .env file.
- Validate required settings (BASE_URL, DISCORD_BOT_TOKEN, PORT); the process
  refuses to start when any is missing.
- Expose a typed, immutable Settings object for the bot, web endpoint and stores.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from backend_bundlebot.config.env import (
    get_data_dir,
    get_performance_rpc_url,
    get_price_api_url,
    get_status_rpc_url,
    load_bundlebot_env,
)
from backend_bundlebot.core.exceptions import ConfigError

REQUIRED_ENV = ("BASE_URL", "DISCORD_BOT_TOKEN", "PORT")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    base_url: str
    """Public base URL used in generated links (no trailing slash)."""
    discord_bot_token: str
    port: int
    """Port the signing web endpoint listens on."""
    api_host: str = "0.0.0.0"
    data_dir: Path = Path(".")
    status_rpc_url: str = ""
    performance_rpc_url: str = ""
    price_api_url: str = ""

    @property
    def connect_url(self) -> str:
        return f"{self.base_url}/phantom/connect"

    def sign_url(self, session_id: str) -> str:
        return f"{self.base_url}/phantom/send?session={session_id}"


def get_settings() -> Settings:
    """
    Return the current application settings.

    Raises:
        ConfigError: if any required variable is missing, or PORT is not an integer.
    """
    load_bundlebot_env()
    missing = [key for key in REQUIRED_ENV if not (os.getenv(key) or "").strip()]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    raw_port = os.environ["PORT"].strip()
    try:
        port = int(raw_port)
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from e

    return Settings(
        base_url=os.environ["BASE_URL"].strip().rstrip("/"),
        discord_bot_token=os.environ["DISCORD_BOT_TOKEN"].strip(),
        port=port,
        api_host=(os.getenv("API_HOST") or "0.0.0.0").strip() or "0.0.0.0",
        data_dir=get_data_dir(),
        status_rpc_url=get_status_rpc_url(),
        performance_rpc_url=get_performance_rpc_url(),
        price_api_url=get_price_api_url(),
    )
