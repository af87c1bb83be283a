"""
Tests for settings loading: required variables, defaults, PORT parsing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from backend_bundlebot.config import env, get_settings
from backend_bundlebot.config.env import DEVNET_RPC_URL, MAINNET_RPC_URL
from backend_bundlebot.core.exceptions import ConfigError

OPTIONAL = ("API_HOST", "DATA_DIR", "STATUS_RPC_URL", "PERFORMANCE_RPC_URL", "PRICE_API_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # never read the developer's project-root .env
    monkeypatch.setattr(env, "_ENV_PATH", tmp_path / ".env")
    for key in ("BASE_URL", "DISCORD_BOT_TOKEN", "PORT") + OPTIONAL:
        monkeypatch.delenv(key, raising=False)


def test_missing_required_lists_all(monkeypatch):
    monkeypatch.setenv("PORT", "3000")
    with pytest.raises(ConfigError) as exc:
        get_settings()
    assert "BASE_URL" in str(exc.value)
    assert "DISCORD_BOT_TOKEN" in str(exc.value)
    assert "PORT" not in str(exc.value)


def test_settings_with_defaults(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://example.com/")
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "tok")
    monkeypatch.setenv("PORT", "8080")
    settings = get_settings()
    assert settings.base_url == "https://example.com"
    assert settings.port == 8080
    assert settings.status_rpc_url == DEVNET_RPC_URL
    assert settings.performance_rpc_url == MAINNET_RPC_URL
    assert settings.data_dir == Path(".")
    assert settings.connect_url == "https://example.com/phantom/connect"
    assert settings.sign_url("abc") == "https://example.com/phantom/send?session=abc"


def test_non_integer_port(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://example.com")
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "tok")
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ConfigError, match="PORT"):
        get_settings()


def test_main_exits_on_missing_config(monkeypatch):
    import main

    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
