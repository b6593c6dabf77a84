"""Typed models used by the swap subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

from .constants import ZERO_ADDRESS


@dataclass(frozen=True)
class TradeRequest:
    """Parameters of the quote requested for the contract-held sell amount."""

    sell_token: str
    buy_token: str
    sell_amount: int                            # In smallest units
    taker: str
    chain_id: int

    def __post_init__(self):
        if self.sell_amount <= 0:
            raise ValueError("Sell amount must be positive")

    def to_query_params(self) -> Dict[str, str]:
        return {
            "chainId": str(self.chain_id),
            "sellToken": self.sell_token,
            "buyToken": self.buy_token,
            "sellAmount": str(self.sell_amount),
            "taker": self.taker,
        }


@dataclass(frozen=True)
class Quote:
    """Parsed 0x quote, ready to be filled through the swap contract."""

    sell_token: str
    buy_token: str
    transaction_target: str
    transaction_calldata: str
    value: int                                  # Wei to forward with fillQuote
    gas_price: int
    allowance_spender: str = ZERO_ADDRESS

    sell_amount: Optional[int] = None
    buy_amount: Optional[int] = None

    raw_response: Optional[Dict[str, Any]] = field(default=None, compare=False, repr=False)

    @property
    def needs_allowance(self) -> bool:
        return self.allowance_spender.lower() != ZERO_ADDRESS


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a completed swap run."""

    bought_amount: int                          # In smallest units
    bought_amount_human: Decimal
    sell_amount: int
    deposit_tx_hash: Optional[str] = None
    fill_tx_hash: Optional[str] = None
