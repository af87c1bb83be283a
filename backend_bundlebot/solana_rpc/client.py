"""
Read-only Solana RPC access: signature statuses and performance samples.

Wraps solana-py's AsyncClient and normalizes solders response objects into
the plain JSON-RPC shapes ({"confirmationStatus": ..., "err": ...},
{"numTransactions": ...}) the status reporter and network estimates use.
Any transport, RPC or decoding failure surfaces as ExternalServiceError.
"""

from __future__ import annotations

from typing import Any

from solana.rpc.async_api import AsyncClient
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.core.exceptions import ExternalServiceError

logger = get_logger(__name__)


def _confirmation_name(status: Any) -> str | None:
    if status is None:
        return None
    if status == TransactionConfirmationStatus.Finalized:
        return "finalized"
    if status == TransactionConfirmationStatus.Confirmed:
        return "confirmed"
    if status == TransactionConfirmationStatus.Processed:
        return "processed"
    return str(status).lower()


def _status_to_dict(st: Any) -> dict[str, Any] | None:
    """solders TransactionStatus -> getSignatureStatuses JSON item (None when no record)."""
    if st is None:
        return None
    err = getattr(st, "err", None)
    return {
        "slot": getattr(st, "slot", None),
        "confirmations": getattr(st, "confirmations", None),
        "err": str(err) if err is not None else None,
        "confirmationStatus": _confirmation_name(getattr(st, "confirmation_status", None)),
    }


class SolanaRpcClient:
    """One RPC endpoint; opens a short-lived AsyncClient per call."""

    def __init__(self, rpc_url: str) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self.rpc_url = rpc_url.strip()

    async def get_signature_statuses(self, signatures: list[str]) -> list[dict[str, Any] | None]:
        """Status per signature, same order; None where the node has no record."""
        try:
            sigs = [Signature.from_string(str(s)) for s in signatures]
            async with AsyncClient(self.rpc_url) as client:
                resp = await client.get_signature_statuses(sigs)
            values = list(resp.value)
        except Exception as e:
            logger.warning(
                "rpc_signature_statuses_failed",
                rpc_url=self.rpc_url,
                signature_count=len(signatures),
                error=str(e),
            )
            raise ExternalServiceError(f"getSignatureStatuses failed: {e}") from e
        return [_status_to_dict(v) for v in values]

    async def get_recent_performance_samples(self, limit: int = 1) -> list[dict[str, Any]]:
        try:
            async with AsyncClient(self.rpc_url) as client:
                resp = await client.get_recent_performance_samples(limit)
            samples = list(resp.value)
        except Exception as e:
            logger.warning("rpc_performance_samples_failed", rpc_url=self.rpc_url, error=str(e))
            raise ExternalServiceError(f"getRecentPerformanceSamples failed: {e}") from e
        return [
            {
                "slot": getattr(s, "slot", None),
                "numTransactions": getattr(s, "num_transactions", None),
                "numSlots": getattr(s, "num_slots", None),
                "samplePeriodSecs": getattr(s, "sample_period_secs", None),
            }
            for s in samples
        ]
