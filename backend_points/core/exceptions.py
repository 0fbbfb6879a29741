"""
Application-level exceptions.

Every failure in the engine is absorbed at its failure-domain boundary
(one endpoint, one click, one poll cycle); these types carry enough context
to log it and to surface a stale/unavailable indicator.
"""

from __future__ import annotations


class PointsError(Exception):
    """Base class for all engine errors."""


class NetworkFailure(PointsError):
    """A REST fetch failed: transport error, non-2xx status or unusable body."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{endpoint}: {reason}")


class MalformedDataError(NetworkFailure):
    """A numeric field in a response could not be parsed."""


class RpcError(PointsError):
    """Solana JSON-RPC call failed on every configured endpoint."""


class InvalidWalletError(PointsError, ValueError):
    """Wallet string is not a valid base58 public key."""
