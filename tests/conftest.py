"""
Pytest fixtures for BundleBot tests. JSON stores live in tmp_path; RPC and
price clients are in-memory fakes so nothing touches the network.
"""

from __future__ import annotations

from typing import Any

import pytest

from backend_bundlebot.bundles import BundleBuilder, HistoryLedger, SessionRegistry
from backend_bundlebot.config import Settings
from backend_bundlebot.context import AppContext
from backend_bundlebot.core.exceptions import ExternalServiceError
from backend_bundlebot.database import BUNDLES_FILE, HISTORY_FILE, SESSIONS_FILE, JsonStore
from backend_bundlebot.status import StatusReporter


class FakeSignatureLookup:
    """getSignatureStatuses stand-in: returns statuses[sig] (None if absent) or raises."""

    def __init__(self, statuses: dict[str, dict[str, Any] | None] | None = None, error: Exception | None = None):
        self.statuses = statuses or {}
        self.error = error
        self.calls: list[list[str]] = []

    async def get_signature_statuses(self, signatures: list[str]) -> list[dict[str, Any] | None]:
        self.calls.append(list(signatures))
        if self.error is not None:
            raise self.error
        return [self.statuses.get(s) for s in signatures]


class FakePrices:
    def __init__(self, usd: float | None = 150.0):
        self.usd = usd

    async def sol_usd(self) -> float:
        if self.usd is None:
            raise ExternalServiceError("price down")
        return self.usd


class FakePerformanceRpc:
    def __init__(self, samples: list[dict[str, Any]] | None = None, error: Exception | None = None):
        self.samples = samples if samples is not None else []
        self.error = error

    async def get_recent_performance_samples(self, limit: int = 1) -> list[dict[str, Any]]:
        if self.error is not None:
            raise self.error
        return self.samples[:limit]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        base_url="https://bundles.example.com",
        discord_bot_token="test-token",
        port=3000,
        data_dir=tmp_path,
        status_rpc_url="http://status.invalid",
        performance_rpc_url="http://perf.invalid",
        price_api_url="http://price.invalid",
    )


@pytest.fixture
def lookup() -> FakeSignatureLookup:
    return FakeSignatureLookup()


@pytest.fixture
def ctx(settings, lookup) -> AppContext:
    """AppContext over tmp_path stores with fake external clients."""
    sessions = SessionRegistry(JsonStore(settings.data_dir / SESSIONS_FILE))
    history = HistoryLedger(JsonStore(settings.data_dir / HISTORY_FILE))
    return AppContext(
        settings=settings,
        builder=BundleBuilder(JsonStore(settings.data_dir / BUNDLES_FILE)),
        sessions=sessions,
        history=history,
        reporter=StatusReporter(history, sessions, lookup),
        performance_rpc=FakePerformanceRpc(samples=[{"numTransactions": 1500}]),
        prices=FakePrices(),
    )


@pytest.fixture
def client(ctx):
    """FastAPI TestClient over the shared context."""
    from fastapi.testclient import TestClient

    from backend_bundlebot.api_server import create_app

    return TestClient(create_app(ctx))
