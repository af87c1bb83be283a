"""
Status reporter: on-chain state of each transfer in a user's recent bundles.

For every recent history entry the session's signatures (posted by the
signing page) are looked up with getSignatureStatuses. Classification per
signature, first match wins:

    no record                      -> Unknown
    confirmed / finalized          -> Confirmed
    err set                        -> Failed
    anything else                  -> Pending

If the lookup itself fails, every transfer of that entry is Error. An entry
with no signatures yet reports every transfer as Pending (a bundle that was
never signed looks the same as one awaiting confirmation).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from backend_bundlebot.bundlebot_logging import bind_user, get_logger
from backend_bundlebot.bundles.history import HistoryLedger
from backend_bundlebot.bundles.models import HistoryEntry
from backend_bundlebot.bundles.sessions import SessionRegistry

logger = get_logger(__name__)

DEFAULT_STATUS_LIMIT = 5


class TransferStatus(str, Enum):
    CONFIRMED = "Confirmed"
    FAILED = "Failed"
    PENDING = "Pending"
    UNKNOWN = "Unknown"
    ERROR = "Error"
    """Lookup failed; state could not be determined (distinct from Failed)."""


class SignatureLookup(Protocol):
    async def get_signature_statuses(self, signatures: list[str]) -> list[dict[str, Any] | None]:
        ...


@dataclass(frozen=True)
class EntryStatus:
    """One history entry with a status per transfer (same order as entry.transfers)."""

    number: int
    """1-based position in the user's full history ("Bundle #N")."""
    entry: HistoryEntry
    statuses: tuple[TransferStatus, ...]


def classify_signature_status(status: dict[str, Any] | None) -> TransferStatus:
    if not status:
        return TransferStatus.UNKNOWN
    if status.get("confirmationStatus") in ("confirmed", "finalized"):
        return TransferStatus.CONFIRMED
    if status.get("err"):
        return TransferStatus.FAILED
    return TransferStatus.PENDING


def _align(statuses: list[TransferStatus], transfer_count: int) -> tuple[TransferStatus, ...]:
    """Pad with Unknown (fewer signatures than transfers) and cut extras."""
    padded = statuses + [TransferStatus.UNKNOWN] * max(0, transfer_count - len(statuses))
    return tuple(padded[:transfer_count])


class StatusReporter:
    def __init__(
        self,
        history: HistoryLedger,
        sessions: SessionRegistry,
        lookup: SignatureLookup,
        limit: int = DEFAULT_STATUS_LIMIT,
    ) -> None:
        self._history = history
        self._sessions = sessions
        self._lookup = lookup
        self._limit = limit

    async def entry_statuses(self, entry: HistoryEntry) -> list[TransferStatus]:
        signatures = self._sessions.session_signatures(entry.session_id)
        if not signatures:
            return [TransferStatus.PENDING for _ in entry.transfers]
        try:
            results = await self._lookup.get_signature_statuses(signatures)
            if not isinstance(results, list):
                raise TypeError(f"unexpected status payload: {type(results).__name__}")
            return [classify_signature_status(r) for r in results]
        except Exception as e:
            logger.warning(
                "status_lookup_failed",
                session_id=entry.session_id,
                signature_count=len(signatures),
                error=str(e),
            )
            return [TransferStatus.ERROR for _ in signatures]

    async def report_statuses(self, user_id: str) -> list[EntryStatus]:
        """Most recent entries first, each resolved sequentially."""
        total = self._history.count(user_id)
        recent = self._history.recent_history(user_id, self._limit)
        report: list[EntryStatus] = []
        for idx, entry in enumerate(recent):
            statuses = await self.entry_statuses(entry)
            report.append(
                EntryStatus(
                    number=total - idx,
                    entry=entry,
                    statuses=_align(statuses, len(entry.transfers)),
                )
            )
        bind_user(user_id, name=__name__).info("status_reported", entries=len(report))
        return report
