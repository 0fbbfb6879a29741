"""
Solana JSON-RPC access.

Thin async client over httpx for the handful of calls the engine needs:
current slot, produced blocks in a range, and block timestamps.
"""

from backend_points.solana_rpc.client import SolanaRpcClient

__all__ = ["SolanaRpcClient"]
