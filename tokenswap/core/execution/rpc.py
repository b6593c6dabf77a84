"""
JSON-RPC access to an Ethereum node and the per-run network context.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from eth_utils import is_address, to_checksum_address

from tokenswap.config import settings
from ..errors import RpcError


logger = logging.getLogger(__name__)


class JsonRpcClient:
    """Thin async wrapper around a node's HTTP JSON-RPC endpoint."""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.rpc_url = rpc_url or settings.rpc_url
        self._client = client or httpx.AsyncClient(timeout=timeout_s or settings.rpc_timeout_seconds)
        self._ids = itertools.count(1)

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make an RPC call and return its ``result``.

        Raises ``RpcError`` for JSON-RPC error objects or unreadable responses,
        and ``httpx.HTTPError`` for transport failures.
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        response = await self._client.post(self.rpc_url, json=payload)
        response.raise_for_status()
        try:
            result = response.json()
        except ValueError:
            raise RpcError(method, f"invalid JSON response: {response.text[:200]!r}")
        if not isinstance(result, dict):
            raise RpcError(method, f"unexpected response: {result!r}")

        if "error" in result:
            raise RpcError(method, result["error"])

        return result.get("result")

    async def chain_id(self) -> int:
        return int(await self.call("eth_chainId"), 16)

    async def accounts(self) -> List[str]:
        return list(await self.call("eth_accounts") or [])

    async def send_transaction(self, tx: Dict[str, Any]) -> str:
        return await self.call("eth_sendTransaction", [tx])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        receipt = await self.call("eth_getTransactionReceipt", [tx_hash])
        if receipt is not None and not isinstance(receipt, dict):
            raise RpcError("eth_getTransactionReceipt", f"unexpected receipt: {receipt!r}")
        return receipt

    async def close(self) -> None:
        """Close HTTP client."""
        await self._client.aclose()


@dataclass
class NetworkContext:
    """Chain, wallet, and node connection used for one swap run."""
    rpc: JsonRpcClient
    chain_id: int
    wallet_address: str

    @classmethod
    async def connect(
        cls,
        rpc_url: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> "NetworkContext":
        """Resolve chain id and sender address from the node."""
        rpc = JsonRpcClient(rpc_url)
        try:
            chain_id = await rpc.chain_id()
            address = wallet_address or settings.wallet_address
            if not address:
                accounts = await rpc.accounts()
                if not accounts:
                    raise ValueError(f"Node at {rpc.rpc_url} exposes no accounts; set WALLET_ADDRESS")
                address = accounts[0]
            if not is_address(address):
                raise ValueError(f"Invalid wallet address: {address}")
        except Exception:
            await rpc.close()
            raise

        logger.info(f"Connected to chain {chain_id} as {address}")
        return cls(rpc=rpc, chain_id=chain_id, wallet_address=to_checksum_address(address))

    async def close(self) -> None:
        await self.rpc.close()
