"""
Bundle life cycle: builder (current bundle per user), session registry
(bundle + signatures per session id), and history ledger (per-user log).
"""

from backend_bundlebot.bundles.builder import BundleBuilder
from backend_bundlebot.bundles.history import HistoryLedger
from backend_bundlebot.bundles.models import MAX_TRANSFERS, Bundle, HistoryEntry, Transfer
from backend_bundlebot.bundles.sessions import SessionRegistry

__all__ = [
    "MAX_TRANSFERS",
    "Bundle",
    "BundleBuilder",
    "HistoryEntry",
    "HistoryLedger",
    "SessionRegistry",
    "Transfer",
]
