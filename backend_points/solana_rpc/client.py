"""
Async Solana JSON-RPC client with endpoint failover.

Responsibilities:
- Build JSON-RPC 2.0 bodies and POST them over a shared httpx.AsyncClient.
- Raise RpcError on transport errors, RPC error objects or a missing result.
- Try each configured endpoint in order; the first success wins.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from backend_points.config.env import mask_rpc_url
from backend_points.core.exceptions import RpcError
from backend_points.points_logging import get_logger

logger = get_logger(__name__)

_request_ids = itertools.count(1)


def build_rpc_body(method: str, params: list[Any] | None = None) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": method,
        "params": params or [],
    }


class SolanaRpcClient:
    """
    JSON-RPC client over one or more endpoints.

    The httpx client may be injected (tests pass one built on MockTransport);
    otherwise one is created and owned by this instance.
    """

    def __init__(
        self,
        rpc_urls: list[str] | tuple[str, ...],
        *,
        timeout_sec: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
        commitment: str = "finalized",
    ) -> None:
        urls = [u.strip().rstrip("/") for u in rpc_urls if u and u.strip()]
        if not urls:
            raise ValueError("rpc_urls must be non-empty")
        self._urls = urls
        self._commitment = commitment
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))

    @property
    def urls(self) -> list[str]:
        return list(self._urls)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Perform one JSON-RPC call, failing over across endpoints."""
        last_error: Exception | None = None
        for url in self._urls:
            try:
                return await self._call_one(url, method, params)
            except (httpx.HTTPError, ValueError, RpcError) as e:
                last_error = e
                logger.warning(
                    "rpc_endpoint_failed",
                    rpc_url=mask_rpc_url(url),
                    method=method,
                    error=str(e),
                )
        raise RpcError(f"{method} failed on all endpoints: {last_error}")

    async def _call_one(self, url: str, method: str, params: list[Any] | None) -> Any:
        resp = await self._client.post(url, json=build_rpc_body(method, params))
        resp.raise_for_status()
        data = resp.json()
        if "error" in data:
            err = data["error"]
            raise RpcError(
                f"Solana RPC error: {err.get('message', err)} (code={err.get('code')})"
            )
        if "result" not in data:
            raise RpcError("Solana RPC returned no result")
        return data["result"]

    async def get_slot(self) -> int:
        result = await self.call("getSlot", [{"commitment": self._commitment}])
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise RpcError(f"getSlot returned a non-integer result: {result!r}") from e

    async def get_blocks(self, start_slot: int, end_slot: int) -> list[int]:
        """Slots in [start_slot, end_slot] that actually produced a block."""
        result = await self.call(
            "getBlocks", [start_slot, end_slot, {"commitment": self._commitment}]
        )
        return [int(s) for s in (result or [])]

    async def get_block_time(self, slot: int) -> int | None:
        """Unix timestamp of the block at slot; None if the node has no time for it."""
        result = await self.call("getBlockTime", [slot])
        return int(result) if result is not None else None
