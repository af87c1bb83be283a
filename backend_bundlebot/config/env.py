"""
Environment variable loading for BundleBot.

- BASE_URL, DISCORD_BOT_TOKEN, PORT: required (see settings.get_settings).
- STATUS_RPC_URL: RPC used for getSignatureStatuses (default: devnet).
- PERFORMANCE_RPC_URL: RPC used for getRecentPerformanceSamples (default: mainnet-beta).
- PRICE_API_URL: SOL/USD price endpoint (default: CoinGecko simple/price).
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_bundlebot/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEVNET_RPC_URL = "https://api.devnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
COINGECKO_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price?ids=solana&vs_currencies=usd"


def load_bundlebot_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _env(name: str, default: str) -> str:
    load_bundlebot_env()
    return (os.getenv(name) or "").strip() or default


def get_status_rpc_url() -> str:
    """RPC endpoint for signature status lookups. Sessions are signed on devnet."""
    return _env("STATUS_RPC_URL", DEVNET_RPC_URL)


def get_performance_rpc_url() -> str:
    """RPC endpoint for the congestion estimate."""
    return _env("PERFORMANCE_RPC_URL", MAINNET_RPC_URL)


def get_price_api_url() -> str:
    return _env("PRICE_API_URL", COINGECKO_PRICE_URL)


def get_data_dir() -> Path:
    """Directory holding bundles.json, sessions.json and history.json."""
    return Path(_env("DATA_DIR", "."))
