"""
Session registry: link a bundle to the browser signing flow.

A session is stored as {"bundle": [...]} and, once the signing page posts
back, {"bundle": [...], "signatures": [...]}. The web endpoint reads and
updates sessions; the status reporter reads their signatures.
"""

from __future__ import annotations

import secrets
import time
from typing import Any, Callable

from backend_bundlebot.bundlebot_logging import bind_user, get_logger
from backend_bundlebot.bundles.models import Bundle
from backend_bundlebot.core.exceptions import InvalidSession, SessionNotFound
from backend_bundlebot.database import JsonStore

logger = get_logger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class SessionRegistry:
    """Sessions by id, backed by the sessions store."""

    def __init__(self, store: JsonStore, clock: Callable[[], int] = now_ms) -> None:
        self._store = store
        self._clock = clock

    def new_session_id(self, user_id: str) -> str:
        # user + millis keeps ids readable in logs; the random suffix prevents same-millisecond collisions
        return f"{user_id}-{self._clock()}-{secrets.token_hex(4)}"

    def create_session(self, bundle: Bundle) -> str:
        session_id = self.new_session_id(bundle.user_id)
        self._store.set(session_id, {"bundle": bundle.to_list()})
        bind_user(bundle.user_id, name=__name__).info("session_created", session_id=session_id)
        return session_id

    def get_session(self, session_id: str | None) -> dict[str, Any]:
        """Return the stored session object verbatim. Raises SessionNotFound."""
        if not session_id or session_id not in self._store:
            raise SessionNotFound(session_id)
        return self._store.get(session_id)

    def attach_signatures(self, session_id: str | None, signatures: Any) -> None:
        """
        Attach the wallet's transaction signatures to a session.

        Count and format are not checked. Posting again overwrites. Raises
        InvalidSession (store untouched) for an unknown id or a non-list payload.
        """
        if not session_id or not isinstance(signatures, list) or session_id not in self._store:
            raise InvalidSession(session_id)

        stored = self._store.get(session_id)
        if isinstance(stored, dict):
            updated = {**stored, "signatures": signatures}
        else:
            # legacy shape: the value is the bare bundle list
            updated = {"bundle": stored, "signatures": signatures}
        self._store.set(session_id, updated)
        logger.info("signatures_attached", session_id=session_id, signature_count=len(signatures))

    def session_signatures(self, session_id: str) -> list[str] | None:
        """Signatures attached to a session, or None when absent or not yet posted."""
        stored = self._store.get(session_id)
        if not isinstance(stored, dict):
            return None
        signatures = stored.get("signatures")
        if not isinstance(signatures, list) or not signatures:
            return None
        return signatures
