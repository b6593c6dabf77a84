"""
Tests for the JSON-RPC client and network context resolution.
"""

import json

import httpx
import pytest

from tokenswap.core.errors import RpcError
from tokenswap.core.execution import rpc as rpc_module
from tokenswap.core.execution.rpc import JsonRpcClient, NetworkContext

RPC_URL = "http://node.test:8545"
ACCOUNT = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"


def _node(results, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if calls is not None:
            calls.append(body)
        outcome = results[body["method"]]
        if isinstance(outcome, dict) and "error" in outcome:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], **outcome})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": outcome})
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_call_posts_json_rpc_payload():
    calls = []
    client = JsonRpcClient(RPC_URL, client=_node({"eth_chainId": "0x539"}, calls))

    assert await client.chain_id() == 1337
    assert calls[0]["method"] == "eth_chainId"
    assert calls[0]["jsonrpc"] == "2.0"
    assert calls[0]["params"] == []
    await client.close()


@pytest.mark.asyncio
async def test_request_ids_increase():
    calls = []
    client = JsonRpcClient(RPC_URL, client=_node({"eth_chainId": "0x1"}, calls))

    await client.chain_id()
    await client.chain_id()

    assert calls[1]["id"] > calls[0]["id"]
    await client.close()


@pytest.mark.asyncio
async def test_error_object_raises_rpc_error():
    client = JsonRpcClient(
        RPC_URL,
        client=_node({"eth_sendTransaction": {"error": {"code": -32000, "message": "insufficient funds"}}}),
    )

    with pytest.raises(RpcError) as excinfo:
        await client.send_transaction({"from": ACCOUNT})

    assert excinfo.value.code == -32000
    assert excinfo.value.rpc_message == "insufficient funds"
    await client.close()


@pytest.mark.asyncio
async def test_pending_receipt_is_none():
    client = JsonRpcClient(RPC_URL, client=_node({"eth_getTransactionReceipt": None}))

    assert await client.get_transaction_receipt("0x01") is None
    await client.close()


@pytest.fixture
def patch_node(monkeypatch):
    def install(results):
        original = JsonRpcClient

        def factory(rpc_url=None, **kwargs):
            return original(rpc_url or RPC_URL, client=_node(results))

        monkeypatch.setattr(rpc_module, "JsonRpcClient", factory)
    return install


@pytest.mark.asyncio
async def test_connect_uses_first_node_account(patch_node, monkeypatch):
    monkeypatch.setattr(rpc_module.settings, "wallet_address", "")
    patch_node({"eth_chainId": "0x1", "eth_accounts": [ACCOUNT, "0x" + "b" * 40]})

    network = await NetworkContext.connect(RPC_URL)

    assert network.chain_id == 1
    assert network.wallet_address.lower() == ACCOUNT
    await network.close()


@pytest.mark.asyncio
async def test_connect_prefers_explicit_wallet(patch_node):
    patch_node({"eth_chainId": "0x1"})
    explicit = "0x" + "c" * 40

    network = await NetworkContext.connect(RPC_URL, wallet_address=explicit)

    assert network.wallet_address.lower() == explicit
    await network.close()


@pytest.mark.asyncio
async def test_connect_without_accounts_fails(patch_node, monkeypatch):
    monkeypatch.setattr(rpc_module.settings, "wallet_address", "")
    patch_node({"eth_chainId": "0x1", "eth_accounts": []})

    with pytest.raises(ValueError):
        await NetworkContext.connect(RPC_URL)
