"""
Error taxonomy for a swap run.

Every error here is fatal to the run. Nothing is retried and nothing is
rolled back: on-chain state that was already committed stays committed.
"""

from typing import Any, Optional


class SwapError(Exception):
    """Base exception for swap failures."""
    pass


class ExecutionError(SwapError):
    """Base exception for transaction execution errors."""
    pass


class SubmissionRejected(ExecutionError):
    """The node refused the transaction before it became pending."""

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(message)
        self.method = method


class ExecutionReverted(ExecutionError):
    """Transaction was mined but reported a failed status."""

    def __init__(self, tx_hash: str, method: Optional[str] = None, block_number: Optional[int] = None):
        label = f"{method} " if method else ""
        super().__init__(f"Transaction {label}reverted: {tx_hash}")
        self.tx_hash = tx_hash
        self.method = method
        self.block_number = block_number


class ConfirmationTimeout(ExecutionError):
    """No receipt arrived within the configured confirmation timeout."""

    def __init__(self, tx_hash: str, timeout_seconds: float):
        super().__init__(f"No receipt for {tx_hash} after {timeout_seconds}s")
        self.tx_hash = tx_hash
        self.timeout_seconds = timeout_seconds


class MalformedReceipt(ExecutionError):
    """The node returned a receipt whose status cannot be read."""

    def __init__(self, tx_hash: str, status: Any):
        super().__init__(f"Receipt for {tx_hash} has an unreadable status: {status!r}")
        self.tx_hash = tx_hash
        self.status = status


class QuoteError(SwapError):
    """Base exception for quoting-service failures."""
    pass


class QuoteUnavailable(QuoteError):
    """The quote request failed or returned a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class QuoteMalformed(QuoteError):
    """The quote response lacks a required field or holds an invalid one."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ResultExtractionFailed(SwapError):
    """A successful receipt did not carry the expected event."""

    def __init__(self, tx_hash: str, event_name: str):
        super().__init__(f"{event_name} event not found in receipt of {tx_hash}")
        self.tx_hash = tx_hash
        self.event_name = event_name


class RpcError(Exception):
    """JSON-RPC error object returned by the node."""

    def __init__(self, method: str, error: Any):
        if isinstance(error, dict):
            self.code = error.get("code")
            self.rpc_message = error.get("message") or str(error)
        else:
            self.code = None
            self.rpc_message = str(error)
        super().__init__(f"RPC error from {method}: {self.rpc_message}")
        self.method = method
