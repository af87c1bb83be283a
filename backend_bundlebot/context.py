"""
Process-wide application context.

Owns the three JSON stores and the services built on them, plus the external
clients. Created once in main.py and passed to both the Discord dispatcher
and the FastAPI app, so the bot and the web endpoint share one session table.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.bundles import BundleBuilder, HistoryLedger, SessionRegistry
from backend_bundlebot.config import Settings
from backend_bundlebot.database import BUNDLES_FILE, HISTORY_FILE, SESSIONS_FILE, JsonStore
from backend_bundlebot.solana_rpc import PriceClient, SolanaRpcClient
from backend_bundlebot.status import StatusReporter

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: Settings
    builder: BundleBuilder
    sessions: SessionRegistry
    history: HistoryLedger
    reporter: StatusReporter
    performance_rpc: SolanaRpcClient
    prices: PriceClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        data_dir = settings.data_dir
        bundles_store = JsonStore(data_dir / BUNDLES_FILE)
        sessions_store = JsonStore(data_dir / SESSIONS_FILE)
        history_store = JsonStore(data_dir / HISTORY_FILE)

        sessions = SessionRegistry(sessions_store)
        history = HistoryLedger(history_store)
        ctx = cls(
            settings=settings,
            builder=BundleBuilder(bundles_store),
            sessions=sessions,
            history=history,
            reporter=StatusReporter(history, sessions, SolanaRpcClient(settings.status_rpc_url)),
            performance_rpc=SolanaRpcClient(settings.performance_rpc_url),
            prices=PriceClient(settings.price_api_url),
        )
        logger.info(
            "app_context_ready",
            data_dir=str(data_dir),
            sessions=len(sessions_store),
            users_with_history=len(history_store),
        )
        return ctx
