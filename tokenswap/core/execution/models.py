"""
Transaction execution models and types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ReceiptStatus(str, Enum):
    """Terminal status of a mined transaction."""
    SUCCESS = "success"
    REVERTED = "reverted"


@dataclass(frozen=True)
class DecodedEvent:
    """An event log decoded against the contract's event schema."""
    name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    address: Optional[str] = None
    log_index: Optional[int] = None


@dataclass(frozen=True)
class TransactionIntent:
    """A contract call to be signed by the node and broadcast."""
    to: str                                     # Target contract
    method: str                                 # e.g. "depositETH()"
    sender: str
    args: Tuple[Any, ...] = ()
    value: int = 0                              # Wei to send
    gas_price: Optional[int] = None             # Node default when None

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("Transaction value must be non-negative")
        if self.gas_price is not None and self.gas_price < 0:
            raise ValueError("Gas price must be non-negative")
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def method_name(self) -> str:
        return self.method.split("(", 1)[0]

    def to_rpc_params(self, calldata: str) -> Dict[str, Any]:
        """Build the eth_sendTransaction call object."""
        tx = {
            "from": self.sender,
            "to": self.to,
            "data": calldata,
            "value": hex(self.value),
        }
        if self.gas_price is not None:
            tx["gasPrice"] = hex(self.gas_price)
        return tx


@dataclass(frozen=True)
class Receipt:
    """Outcome of a mined transaction."""
    tx_hash: str
    status: ReceiptStatus
    block_number: Optional[int] = None
    events: Tuple[DecodedEvent, ...] = ()
    gas_used: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == ReceiptStatus.SUCCESS

    def find_event(self, name: str) -> Optional[DecodedEvent]:
        """Return the first decoded event called ``name``."""
        for event in self.events:
            if event.name == name:
                return event
        return None
