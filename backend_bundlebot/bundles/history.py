"""
History ledger: append-only per-user list of created bundles.

Entries are {"sessionId", "bundle", "time"}; the list grows without bound.
"""

from __future__ import annotations

from typing import Callable

from backend_bundlebot.bundlebot_logging import bind_user
from backend_bundlebot.bundles.models import Bundle, HistoryEntry
from backend_bundlebot.bundles.sessions import now_ms
from backend_bundlebot.database import JsonStore


class HistoryLedger:
    def __init__(self, store: JsonStore, clock: Callable[[], int] = now_ms) -> None:
        self._store = store
        self._clock = clock

    def append_history(self, user_id: str, session_id: str, bundle: Bundle) -> HistoryEntry:
        entry = HistoryEntry(session_id=session_id, transfers=bundle.transfers, time=self._clock())
        entries = list(self._store.get(user_id) or [])
        entries.append(entry.to_dict())
        self._store.set(user_id, entries)
        bind_user(user_id, name=__name__).debug("history_appended", session_id=session_id, total=len(entries))
        return entry

    def recent_history(self, user_id: str, limit: int) -> list[HistoryEntry]:
        """Last `limit` entries, most recent first."""
        if limit <= 0:
            return []
        entries = self._store.get(user_id) or []
        return [HistoryEntry.from_dict(e) for e in reversed(entries[-limit:])]

    def count(self, user_id: str) -> int:
        return len(self._store.get(user_id) or [])
