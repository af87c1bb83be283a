"""
SOL/USD spot price from the CoinGecko simple price API.
"""

from __future__ import annotations

import httpx

from backend_bundlebot.bundlebot_logging import get_logger
from backend_bundlebot.core.exceptions import ExternalServiceError

logger = get_logger(__name__)


class PriceClient:
    def __init__(self, price_url: str) -> None:
        self.price_url = price_url

    async def sol_usd(self) -> float:
        """Return the SOL price in USD. Raises ExternalServiceError on any failure."""
        try:
            async with httpx.AsyncClient() as client:
                r = await client.get(self.price_url)
                r.raise_for_status()
                data = r.json()
            return float(data["solana"]["usd"])
        except Exception as e:
            logger.warning("price_fetch_failed", url=self.price_url, error=str(e))
            raise ExternalServiceError(f"SOL/USD price unavailable: {e}") from e
