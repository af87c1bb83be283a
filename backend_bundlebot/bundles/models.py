"""
Domain models for bundles, sessions and history.

Stores keep plain JSON (lists of {"address", "amount"} dicts); these
dataclasses are the typed view used by the builder, the status reporter and
the bot. No store coupling so the JSON shapes stay the web page's contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MAX_TRANSFERS = 5


@dataclass(frozen=True)
class Transfer:
    """One SOL transfer request."""

    address: str
    """Recipient public key (base58)."""
    amount: str
    """Amount in SOL exactly as the user typed it (e.g. "0.5")."""

    def to_dict(self) -> dict[str, str]:
        return {"address": self.address, "amount": self.amount}

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> "Transfer":
        return cls(address=str(item["address"]), amount=str(item["amount"]))


@dataclass(frozen=True)
class Bundle:
    """Ordered 1–5 transfers owned by one user."""

    user_id: str
    transfers: tuple[Transfer, ...]

    def __len__(self) -> int:
        return len(self.transfers)

    def __iter__(self):
        return iter(self.transfers)

    def to_list(self) -> list[dict[str, str]]:
        return [t.to_dict() for t in self.transfers]

    @classmethod
    def from_list(cls, user_id: str, items: list[dict[str, Any]]) -> "Bundle":
        return cls(user_id=user_id, transfers=tuple(Transfer.from_dict(i) for i in items))


@dataclass(frozen=True)
class HistoryEntry:
    """One created bundle in a user's history. Never mutated."""

    session_id: str
    transfers: tuple[Transfer, ...]
    time: int
    """Creation time, epoch milliseconds."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "bundle": [t.to_dict() for t in self.transfers],
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> "HistoryEntry":
        return cls(
            session_id=str(item["sessionId"]),
            transfers=tuple(Transfer.from_dict(t) for t in item.get("bundle") or []),
            time=int(item.get("time") or 0),
        )
