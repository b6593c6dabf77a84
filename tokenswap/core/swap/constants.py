"""Constants for the SimpleTokenSwap contract and the 0x quote flow."""

from __future__ import annotations

from typing import Dict, Tuple

from ..execution.abi import EventParam, EventSchema

# Passed as the allowance spender when the quote names none.
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# SimpleTokenSwap entry points
DEPOSIT_ETH_SIGNATURE = "depositETH()"
FILL_QUOTE_SIGNATURE = "fillQuote(address,address,address,address,bytes)"

BOUGHT_TOKENS_EVENT = EventSchema(
    name="BoughtTokens",
    params=(
        EventParam("sellToken", "address"),
        EventParam("buyToken", "address"),
        EventParam("boughtAmount", "uint256"),
    ),
)

SWAP_CONTRACT_EVENTS: Tuple[EventSchema, ...] = (BOUGHT_TOKENS_EVENT,)

# Symbols used for console output, keyed by lowercased address.
TOKEN_SYMBOLS: Dict[str, str] = {
    "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2": "WETH",
    "0x6b175474e89094c44da98b954eedeac495271d0f": "DAI",
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC",
    "0xdac17f958d2ee523a2206206994597c13d831ec7": "USDT",
}


def token_symbol(address: str) -> str:
    return TOKEN_SYMBOLS.get(address.lower(), address)
