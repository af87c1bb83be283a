"""
Network estimates for the /gas and /mempool commands.

- Fee: fixed 5000 lamports per signature, converted to USD with the current
  SOL price (USD is None when the price API fails).
- Congestion: transaction count of the latest performance sample, banded by
  empirical thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.core.exceptions import ExternalServiceError
from backend_bundlebot.solana_rpc.client import SolanaRpcClient
from backend_bundlebot.solana_rpc.price import PriceClient

logger = get_logger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000
# Solana network default fee per signature
FEE_LAMPORTS_PER_SIGNATURE = 5000

CONGESTION_HIGH_ABOVE = 2000
CONGESTION_MODERATE_ABOVE = 1000


class CongestionBand(str, Enum):
    NORMAL = "Normal"
    MODERATE = "Moderate"
    HIGH = "High"


@dataclass(frozen=True)
class FeeEstimate:
    lamports: int
    sol: float
    usd: float | None
    """None when the price lookup failed."""


@dataclass(frozen=True)
class CongestionEstimate:
    tx_count: int | None
    """numTransactions of the latest sample; None when the node returned no sample."""
    band: CongestionBand


def classify_congestion(tx_count: int | None) -> CongestionBand:
    if tx_count is None:
        return CongestionBand.NORMAL
    if tx_count > CONGESTION_HIGH_ABOVE:
        return CongestionBand.HIGH
    if tx_count > CONGESTION_MODERATE_ABOVE:
        return CongestionBand.MODERATE
    return CongestionBand.NORMAL


async def estimate_fee(prices: PriceClient) -> FeeEstimate:
    sol = FEE_LAMPORTS_PER_SIGNATURE / LAMPORTS_PER_SOL
    try:
        usd_price = await prices.sol_usd()
    except ExternalServiceError:
        return FeeEstimate(lamports=FEE_LAMPORTS_PER_SIGNATURE, sol=sol, usd=None)
    return FeeEstimate(lamports=FEE_LAMPORTS_PER_SIGNATURE, sol=sol, usd=sol * usd_price)


async def estimate_congestion(rpc: SolanaRpcClient) -> CongestionEstimate:
    """One performance-sample query. Raises ExternalServiceError when the query fails."""
    samples = await rpc.get_recent_performance_samples(1)
    tx_count = samples[0].get("numTransactions") if samples else None
    band = classify_congestion(tx_count)
    logger.debug("congestion_estimated", tx_count=tx_count, band=band.value)
    return CongestionEstimate(tx_count=tx_count, band=band)
