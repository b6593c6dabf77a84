"""
Swap orchestration

Deposits native currency into a SimpleTokenSwap contract, fetches a 0x quote
for the wrapped amount, and has the contract fill it.
"""

from .models import Quote, SwapResult, TradeRequest
from .quote_client import QuoteClient, parse_quote
from .orchestrator import SwapOrchestrator

__all__ = [
    "Quote",
    "SwapResult",
    "TradeRequest",
    "QuoteClient",
    "parse_quote",
    "SwapOrchestrator",
]
