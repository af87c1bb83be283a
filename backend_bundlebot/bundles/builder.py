"""
Bundle builder: validate up to five (address, amount) pairs and store them
as the user's current bundle.

A pair counts only when both address and amount are present. Addresses must
have the base58 public-key shape; amounts must parse as finite numbers > 0.
The new bundle replaces the previous one outright; older bundles survive
only in the session and history copies taken when they were created.
"""

from __future__ import annotations

import math
import re
from typing import Iterable

from backend_bundlebot.bundlebot_logging import bind_user
from backend_bundlebot.bundles.models import MAX_TRANSFERS, Bundle, Transfer
from backend_bundlebot.core.exceptions import (
    EmptyBundle,
    InvalidAddress,
    InvalidAmount,
    TooManyTransfers,
)
from backend_bundlebot.database import JsonStore

# base58 alphabet (no 0, O, I, l), 32–44 chars
SOLANA_ADDRESS_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_valid_address(address: str) -> bool:
    return bool(SOLANA_ADDRESS_RE.fullmatch(address))


def is_valid_amount(amount: str) -> bool:
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value > 0


def validate_pairs(raw_pairs: Iterable[tuple[str | None, str | None]]) -> list[Transfer]:
    """
    Turn raw option pairs into transfers, in input order.

    Raises:
        TooManyTransfers: more than MAX_TRANSFERS pairs supplied.
        InvalidAddress / InvalidAmount: first failing pair (address checked first).
        EmptyBundle: no pair had both address and amount.
    """
    pairs = list(raw_pairs)
    if len(pairs) > MAX_TRANSFERS:
        raise TooManyTransfers(len(pairs), MAX_TRANSFERS)

    transfers: list[Transfer] = []
    for address, amount in pairs:
        if not address or not amount:
            continue
        if not is_valid_address(address):
            raise InvalidAddress(address)
        if not is_valid_amount(amount):
            raise InvalidAmount(address, amount)
        transfers.append(Transfer(address=address, amount=amount))

    if not transfers:
        raise EmptyBundle()
    return transfers


class BundleBuilder:
    """Current bundle per user, backed by the bundles store."""

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    def build_bundle(
        self,
        user_id: str,
        raw_pairs: Iterable[tuple[str | None, str | None]],
    ) -> Bundle:
        """Validate pairs, replace the user's current bundle, persist, and return it."""
        transfers = validate_pairs(raw_pairs)
        bundle = Bundle(user_id=user_id, transfers=tuple(transfers))
        self._store.set(user_id, bundle.to_list())
        bind_user(user_id, name=__name__).info("bundle_created", transfer_count=len(bundle))
        return bundle

    def current_bundle(self, user_id: str) -> Bundle | None:
        items = self._store.get(user_id)
        if not items:
            return None
        return Bundle.from_list(user_id, items)
