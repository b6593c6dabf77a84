"""
Transaction Execution Layer

Provides the infrastructure for executing on-chain contract calls:
- NetworkContext / JsonRpcClient: node connection, chain id, sender address
- TransactionExecutor: submits a call and waits for its receipt
- abi: calldata encoding and event-log decoding

Usage:
    from tokenswap.core.execution import (
        NetworkContext,
        TransactionExecutor,
        TransactionIntent,
    )

    network = await NetworkContext.connect("http://localhost:8545")
    executor = TransactionExecutor(network.rpc)

    receipt = await executor.submit_and_confirm(
        TransactionIntent(
            to="0x...",
            method="depositETH()",
            sender=network.wallet_address,
            value=10**17,
        )
    )
"""

from .models import (
    DecodedEvent,
    Receipt,
    ReceiptStatus,
    TransactionIntent,
)

from .abi import (
    EventParam,
    EventSchema,
    decode_logs,
    encode_call,
    selector,
)

from .rpc import (
    JsonRpcClient,
    NetworkContext,
)

from .executor import (
    TransactionExecutor,
)

__all__ = [
    # Models
    "DecodedEvent",
    "Receipt",
    "ReceiptStatus",
    "TransactionIntent",
    # ABI
    "EventParam",
    "EventSchema",
    "decode_logs",
    "encode_call",
    "selector",
    # Network
    "JsonRpcClient",
    "NetworkContext",
    # Executor
    "TransactionExecutor",
]
