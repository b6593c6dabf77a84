"""
Transaction executor for on-chain execution.

Handles the lifecycle of a single contract call:
- Calldata encoding
- Transaction submission (signed by the node)
- Confirmation monitoring
- Event decoding

Nothing is retried. A reverted transaction is reported, never resubmitted.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional, Sequence

import httpx

from tokenswap.config import settings

from ..errors import (
    ConfirmationTimeout,
    ExecutionReverted,
    MalformedReceipt,
    RpcError,
    SubmissionRejected,
)
from .abi import EventSchema, decode_logs, encode_call, parse_quantity
from .models import Receipt, ReceiptStatus, TransactionIntent
from .rpc import JsonRpcClient


logger = logging.getLogger(__name__)


class TransactionExecutor:
    """
    Submits transactions to an EVM node and waits for their receipts.

    Responsibilities:
    - Encode the intent's calldata
    - Submit via eth_sendTransaction
    - Poll for the receipt until the transaction is mined
    - Raise on revert, decode events on success
    """

    def __init__(
        self,
        rpc: JsonRpcClient,
        *,
        poll_interval_seconds: Optional[float] = None,
        confirmation_timeout_seconds: Optional[float] = None,
    ):
        self.rpc = rpc
        self.poll_interval_seconds = poll_interval_seconds or settings.receipt_poll_interval_seconds
        self.confirmation_timeout_seconds = (
            confirmation_timeout_seconds
            if confirmation_timeout_seconds is not None
            else settings.confirmation_timeout_seconds
        )

    async def submit_and_confirm(
        self,
        intent: TransactionIntent,
        events: Sequence[EventSchema] = (),
    ) -> Receipt:
        """
        Submit a transaction and block until it is mined.

        Args:
            intent: The contract call to send
            events: Event schemas used to decode the receipt's logs

        Returns:
            Receipt with decoded events

        Raises:
            SubmissionRejected: the node refused the transaction
            ExecutionReverted: the transaction was mined with a failed status
            ConfirmationTimeout: only when a confirmation timeout is configured
            MalformedReceipt: the receipt status is null or not 0/1
        """
        tx_hash = await self.submit(intent)
        raw_receipt = await self.wait_for_receipt(tx_hash)
        return self._build_receipt(intent, tx_hash, raw_receipt, events)

    async def submit(self, intent: TransactionIntent) -> str:
        """Submit a transaction and return its hash."""
        try:
            calldata = encode_call(intent.method, intent.args)
        except ValueError as e:
            raise SubmissionRejected(f"Cannot encode {intent.method}: {e}", method=intent.method) from e

        try:
            tx_hash = await self.rpc.send_transaction(intent.to_rpc_params(calldata))
        except RpcError as e:
            logger.error(f"Transaction rejected: {intent.method} ({e.rpc_message})")
            raise SubmissionRejected(
                f"{intent.method} rejected by node: {e.rpc_message}", method=intent.method
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Transaction submission failed: {intent.method} ({e})")
            raise SubmissionRejected(
                f"{intent.method} submission failed: {e}", method=intent.method
            ) from e

        if not tx_hash:
            raise SubmissionRejected(f"{intent.method} returned no transaction hash", method=intent.method)

        logger.info(f"Transaction submitted: {intent.method_name} {tx_hash}")
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """Poll until the transaction is mined and return the raw receipt."""
        timeout = self.confirmation_timeout_seconds
        started = time.monotonic()

        while True:
            try:
                receipt = await self.rpc.get_transaction_receipt(tx_hash)
                if receipt:
                    return receipt
            except (RpcError, httpx.HTTPError) as e:
                logger.warning(f"Error checking transaction status: {e}")

            if timeout is not None and time.monotonic() - started >= timeout:
                raise ConfirmationTimeout(tx_hash, timeout)

            await asyncio.sleep(self.poll_interval_seconds)

    def _build_receipt(
        self,
        intent: TransactionIntent,
        tx_hash: str,
        raw: Dict[str, Any],
        events: Sequence[EventSchema],
    ) -> Receipt:
        block_number = parse_quantity(raw.get("blockNumber"))

        # Check status (0x1 = success, 0x0 = revert); absent only on pre-Byzantium receipts
        status = 1
        if "status" in raw:
            try:
                status = parse_quantity(raw["status"])
            except (TypeError, ValueError):
                status = None
            if status not in (0, 1):
                logger.error(f"Unreadable receipt status for {tx_hash}: {raw['status']!r}")
                raise MalformedReceipt(tx_hash, raw["status"])
        if status == 0:
            logger.error(f"Transaction reverted: {intent.method_name} {tx_hash} (block {block_number})")
            raise ExecutionReverted(tx_hash, method=intent.method_name, block_number=block_number)

        decoded = decode_logs(raw.get("logs") or [], events, address=intent.to)
        logger.info(
            f"Transaction confirmed: {intent.method_name} {tx_hash} "
            f"(block {block_number}, {len(decoded)} events)"
        )
        return Receipt(
            tx_hash=tx_hash,
            status=ReceiptStatus.SUCCESS,
            block_number=block_number,
            events=decoded,
            gas_used=parse_quantity(raw.get("gasUsed")),
        )
