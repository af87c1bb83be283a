"""
External read-only services: Solana RPC node and SOL/USD price API.
"""

from backend_bundlebot.solana_rpc.client import SolanaRpcClient
from backend_bundlebot.solana_rpc.price import PriceClient

__all__ = ["PriceClient", "SolanaRpcClient"]
